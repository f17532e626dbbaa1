"""
Compounding — Geometric Growth Primitives

Модуль обеспечивает безопасное вычисление сложного роста для финансовых
калькуляторов (сложный процент, ROI/CAGR, аннуитеты):
- Domain restriction для (1 + r)^n: 1 + r > 0
- Future value с дискретным начислением процентов
- Future value аннуитета (регулярные взносы)
- Эффективная годовая ставка (APY) и обратная задача (требуемая ставка)
- CAGR и правило 72

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Domain violation (r ≤ -1) → CompoundingDomainViolation exception
2. Ставки на входе — в процентах (5.0 = 5%), внутри — доли
3. Все операции детерминированы и воспроизводимы
4. NaN/Inf не распространяются (санитизация через numerical_safeguards)

ФОРМУЛЫ:
    r_period = annual_rate / 100 / n
    FV = P × (1 + r/n)^(n·t)
    FV_annuity = PMT × ((1 + r_p)^k - 1) / r_p       (PMT × k при r_p = 0)
    APY = ((1 + r/n)^n - 1) × 100
    CAGR = ((final / initial)^(1/years) - 1) × 100
    r_required = n × ((A / P)^(1/(n·t)) - 1) × 100
"""

import math
from typing import Final

from src.core.math.numerical_safeguards import (
    EPS_CALC,
    is_valid_float,
    safe_divide,
)

# =============================================================================
# CONSTANTS
# =============================================================================

# Числитель правила 72 (приближённое время удвоения вложений)
RULE_OF_72_NUMERATOR: Final[float] = 72.0

# Domain floor для базы степени: 1 + r должно быть > 0
COMPOUNDING_R_FLOOR: Final[float] = -1.0


# =============================================================================
# EXCEPTIONS
# =============================================================================


class CompoundingDomainViolation(ValueError):
    """
    Нарушение domain для (1 + r)^n: r ≤ -1 или NaN/Inf на входе.

    Калькуляторы не должны получать это исключение: валидация входов
    отсекает такие ставки заранее.
    """


# =============================================================================
# БАЗОВЫЕ ОПЕРАЦИИ
# =============================================================================


def periodic_rate(annual_rate_pct: float, periods_per_year: float) -> float:
    """
    Ставка за период начисления.

    Args:
        annual_rate_pct: Годовая номинальная ставка в процентах
        periods_per_year: Число периодов начисления в году (> 0)

    Returns:
        Ставка за период (доля)

    Raises:
        ValueError: Если periods_per_year <= 0
    """
    if periods_per_year <= 0:
        raise ValueError(f"periods_per_year must be positive, got {periods_per_year}")
    return annual_rate_pct / 100.0 / periods_per_year


def growth_factor(rate: float, periods: float) -> float:
    """
    Множитель роста (1 + rate)^periods.

    Args:
        rate: Ставка за период (доля)
        periods: Число периодов

    Returns:
        (1 + rate)^periods

    Raises:
        CompoundingDomainViolation: Если rate ≤ -1 или NaN/Inf
    """
    if not is_valid_float(rate) or not is_valid_float(periods):
        raise CompoundingDomainViolation(f"Rate/periods contain NaN/Inf: {rate}, {periods}")

    if rate <= COMPOUNDING_R_FLOOR:
        raise CompoundingDomainViolation(f"Compounding domain violation: rate={rate} <= -1")

    return (1.0 + rate) ** periods


def future_value(
    principal: float,
    annual_rate_pct: float,
    periods_per_year: float,
    years: float,
) -> float:
    """
    Будущая стоимость без взносов: P × (1 + r/n)^(n·t).

    Examples:
        >>> round(future_value(1000.0, 5.0, 1, 10), 2)
        1628.89
    """
    rate = periodic_rate(annual_rate_pct, periods_per_year)
    return principal * growth_factor(rate, periods_per_year * years)


def future_value_annuity(payment: float, rate_per_period: float, periods: float) -> float:
    """
    Будущая стоимость серии равных взносов в конце каждого периода.

    Args:
        payment: Размер взноса
        rate_per_period: Ставка за период (доля)
        periods: Число взносов

    Returns:
        PMT × ((1 + r)^k - 1) / r  (PMT × k при r = 0)
    """
    if abs(rate_per_period) < EPS_CALC:
        return payment * periods
    return payment * (growth_factor(rate_per_period, periods) - 1.0) / rate_per_period


# =============================================================================
# ЭФФЕКТИВНЫЕ СТАВКИ
# =============================================================================


def effective_annual_rate(annual_rate_pct: float, periods_per_year: float) -> float:
    """
    Эффективная годовая ставка (APY) в процентах.

    Examples:
        >>> round(effective_annual_rate(12.0, 12), 4)
        12.6825
    """
    rate = periodic_rate(annual_rate_pct, periods_per_year)
    return (growth_factor(rate, periods_per_year) - 1.0) * 100.0


def nominal_from_effective(effective_rate_pct: float, periods_per_year: float) -> float:
    """
    Номинальная годовая ставка по эффективной (обратная к APY), в процентах.
    """
    if periods_per_year <= 0:
        raise ValueError(f"periods_per_year must be positive, got {periods_per_year}")
    base = growth_factor(effective_rate_pct / 100.0, 1.0 / periods_per_year)
    return periods_per_year * (base - 1.0) * 100.0


def required_annual_rate(
    principal: float,
    target: float,
    years: float,
    periods_per_year: float,
) -> float | None:
    """
    Номинальная годовая ставка, при которой principal вырастет до target.

    Returns:
        Ставка в процентах или None, если задача не определена
        (principal/target/years не положительны)
    """
    if principal <= 0 or target <= 0 or years <= 0 or periods_per_year <= 0:
        return None
    ratio = target / principal
    return periods_per_year * (ratio ** (1.0 / (periods_per_year * years)) - 1.0) * 100.0


def cagr(initial: float, final: float, years: float) -> float | None:
    """
    Compound Annual Growth Rate в процентах.

    Args:
        initial: Начальная стоимость (> 0)
        final: Конечная стоимость (>= 0)
        years: Период в годах (> 0)

    Returns:
        CAGR в процентах; -100.0 при final == 0; None при некорректном домене
    """
    if initial <= 0 or years <= 0 or final < 0:
        return None
    if final == 0:
        return -100.0
    result = ((final / initial) ** (1.0 / years) - 1.0) * 100.0
    return result if is_valid_float(result) else None


def rule_of_72(annual_rate_pct: float) -> float | None:
    """
    Приближённое число лет до удвоения: 72 / rate.

    Returns:
        Годы или None при нулевой ставке
    """
    return safe_divide(RULE_OF_72_NUMERATOR, annual_rate_pct, fallback=None)


def exact_doubling_time(annual_rate_pct: float, periods_per_year: float) -> float | None:
    """
    Точное время удвоения: ln 2 / (n · ln(1 + r/n)).
    """
    rate = periodic_rate(annual_rate_pct, periods_per_year)
    if rate <= 0:
        return None
    return math.log(2.0) / (periods_per_year * math.log1p(rate))
