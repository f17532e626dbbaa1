"""
Numerical Safeguards — Rounding Policy and Safe Math Primitives

Модуль задаёт единую политику округления для всех калькуляторов и
обеспечивает численную устойчивость вычислений:
- Округление half-away-from-zero с явной точностью (precision — параметр, не глобал)
- Адаптивное округление результатов конверсии (десятичные знаки / значащие цифры)
- Безопасное деление с защитой от деления на ноль
- NaN/Inf санитизация для предотвращения распространения невалидных значений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. round_half_up никогда не использует bankers rounding (round(2.5) == 3)
2. Деление на ноль никогда не происходит (возвращается fallback)
3. NaN/Inf никогда не пропагируют в результаты калькуляторов
4. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для общих вычислений и защиты знаменателей
EPS_CALC: Final[float] = 1e-12

# Относительная поправка для half-up округления двоичных представлений
ROUNDING_NUDGE_REL: Final[float] = 1e-12

# Стандартные точности округления
MONEY_DECIMALS: Final[int] = 2
PERCENT_DECIMALS: Final[int] = 2
SCIENTIFIC_DECIMALS: Final[int] = 4
CONVERSION_DECIMALS: Final[int] = 6


# =============================================================================
# ПОЛИТИКА ОКРУГЛЕНИЯ
# =============================================================================


def round_half_up(value: float, decimals: int) -> float:
    """
    Округление до заданного числа десятичных знаков, половина — от нуля.

    Формула: sign(x) * floor(|x| * 10^d + 0.5) / 10^d

    Встроенный round() использует bankers rounding (round(0.125, 2) == 0.12),
    что недопустимо для денежных сумм.

    Args:
        value: Значение для округления
        decimals: Число десятичных знаков (>= 0)

    Returns:
        Округлённое значение (NaN/Inf возвращаются без изменений)

    Raises:
        ValueError: Если decimals < 0

    Examples:
        >>> round_half_up(2.5, 0)
        3.0
        >>> round_half_up(-2.5, 0)
        -3.0
        >>> round_half_up(1.005, 2)
        1.01
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    if not is_valid_float(value):
        return value

    factor = 10.0**decimals
    scaled = abs(value) * factor
    # 1.005 хранится как 1.00499999..., поэтому добавляется относительный nudge
    rounded = math.floor(scaled + 0.5 + scaled * ROUNDING_NUDGE_REL)
    result = rounded / factor
    return -result if value < 0 else result


def round_significant(value: float, digits: int) -> float:
    """
    Округление до заданного числа значащих цифр (half away from zero).

    Args:
        value: Значение для округления
        digits: Число значащих цифр (>= 1)

    Returns:
        Округлённое значение

    Examples:
        >>> round_significant(0.000621371192, 6)
        0.000621371
    """
    if digits < 1:
        raise ValueError(f"digits must be >= 1, got {digits}")

    if value == 0.0 or not is_valid_float(value):
        return value

    magnitude = math.floor(math.log10(abs(value)))
    decimals = digits - 1 - magnitude
    if decimals <= 0:
        return round_half_up(value, 0)
    return round_half_up(value, decimals)


def round_conversion(value: float, decimals: int = CONVERSION_DECIMALS) -> float:
    """
    Округление результатов конверсии единиц.

    |value| >= 1: фиксированное число десятичных знаков.
    |value| < 1: столько же значащих цифр, чтобы малые величины
    (миллиметры в милях, мм² в милях²) не обнулялись.

    Args:
        value: Значение для округления
        decimals: Точность (default: CONVERSION_DECIMALS = 6)

    Returns:
        Округлённое значение
    """
    if abs(value) >= 1.0:
        return round_half_up(value, decimals)
    return round_significant(value, decimals)


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_divide(
    numerator: float,
    denominator: float,
    eps: float = EPS_CALC,
    fallback: float | None = 0.0,
) -> float | None:
    """
    Безопасное деление с защитой от деления на ноль и NaN/Inf.

    Args:
        numerator: Числитель
        denominator: Знаменатель
        eps: Порог, ниже которого знаменатель считается нулевым
        fallback: Значение при невозможности деления (может быть None)

    Returns:
        numerator / denominator или fallback

    Examples:
        >>> safe_divide(10.0, 2.0)
        5.0
        >>> safe_divide(10.0, 0.0) is None
        False
        >>> safe_divide(10.0, 0.0, fallback=None) is None
        True
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    if not is_valid_float(numerator) or not is_valid_float(denominator):
        return fallback

    if abs(denominator) < eps:
        return fallback

    result = numerator / denominator
    return sanitize_float(result, fallback)


# =============================================================================
# NaN/Inf САНИТИЗАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, что значение является конечным float (не NaN, не Inf).

    Args:
        value: Значение для проверки

    Returns:
        True если value конечное число
    """
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def sanitize_float(value: float, fallback: float | None = 0.0) -> float | None:
    """
    Замена NaN/Inf на fallback.

    Args:
        value: Исходное значение
        fallback: Значение для замены

    Returns:
        value если конечное, иначе fallback
    """
    if is_valid_float(value):
        return value
    return fallback
