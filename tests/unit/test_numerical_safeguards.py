"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Политику округления half-up (без bankers rounding)
2. Округление по значащим цифрам и адаптивное округление конверсий
3. Безопасное деление
4. NaN/Inf санитизацию
5. Граничные случаи
"""

import math

import pytest

from src.core.math.numerical_safeguards import (
    CONVERSION_DECIMALS,
    EPS_CALC,
    MONEY_DECIMALS,
    is_valid_float,
    round_conversion,
    round_half_up,
    round_significant,
    safe_divide,
    sanitize_float,
)

# =============================================================================
# ТЕСТЫ ОКРУГЛЕНИЯ
# =============================================================================


class TestRoundHalfUp:
    """Тесты для round_half_up"""

    def test_half_rounds_away_from_zero(self) -> None:
        """Половина округляется от нуля, а не к чётному"""
        assert round_half_up(0.5, 0) == 1.0
        assert round_half_up(1.5, 0) == 2.0
        assert round_half_up(2.5, 0) == 3.0

    def test_negative_half_rounds_away_from_zero(self) -> None:
        """Отрицательная половина округляется симметрично"""
        assert round_half_up(-2.5, 0) == -3.0
        assert round_half_up(-0.125, 2) == -0.13

    def test_binary_representation_edge(self) -> None:
        """1.005 хранится как 1.00499..., но округляется вверх"""
        assert round_half_up(1.005, 2) == 1.01
        assert round_half_up(0.125, 2) == 0.13
        assert round_half_up(2.675, 2) == 2.68

    def test_money_precision(self) -> None:
        """Денежная точность — 2 знака"""
        assert round_half_up(1628.894627, MONEY_DECIMALS) == 1628.89
        assert round_half_up(99.995, MONEY_DECIMALS) == 100.0

    def test_below_half_rounds_down(self) -> None:
        """Меньше половины — вниз"""
        assert round_half_up(1.2344, 3) == 1.234
        assert round_half_up(-1.2344, 3) == -1.234

    def test_zero_decimals_and_integers(self) -> None:
        """Целые значения не меняются"""
        assert round_half_up(42.0, 0) == 42.0
        assert round_half_up(0.0, 4) == 0.0

    def test_non_finite_passthrough(self) -> None:
        """NaN/Inf возвращаются без изменений"""
        assert math.isnan(round_half_up(float("nan"), 2))
        assert round_half_up(float("inf"), 2) == float("inf")

    def test_negative_decimals_raises(self) -> None:
        """Отрицательная точность запрещена"""
        with pytest.raises(ValueError, match="decimals must be non-negative"):
            round_half_up(1.0, -1)


class TestRoundSignificant:
    """Тесты для round_significant"""

    def test_small_values_keep_digits(self) -> None:
        """Малые значения сохраняют значащие цифры"""
        assert round_significant(0.000621371192, 6) == pytest.approx(0.000621371, rel=1e-12)
        assert round_significant(0.0012345, 3) == pytest.approx(0.00123, rel=1e-12)

    def test_large_values(self) -> None:
        """Большие значения округляются до целых разрядов"""
        assert round_significant(123456.0, 3) == 123456.0
        assert round_significant(12.3456, 3) == pytest.approx(12.3)

    def test_zero_unchanged(self) -> None:
        """Ноль не меняется"""
        assert round_significant(0.0, 6) == 0.0

    def test_invalid_digits_raises(self) -> None:
        """digits < 1 запрещено"""
        with pytest.raises(ValueError, match="digits must be >= 1"):
            round_significant(1.0, 0)


class TestRoundConversion:
    """Тесты для round_conversion"""

    def test_fixed_decimals_above_one(self) -> None:
        """|x| >= 1: фиксированные знаки"""
        assert round_conversion(1.609344) == 1.609344
        assert round_conversion(3.28083989501) == 3.28084
        assert round_conversion(-40.00000001) == -40.0

    def test_significant_digits_below_one(self) -> None:
        """|x| < 1: значащие цифры, малые значения не обнуляются"""
        tiny = round_conversion(1e-3 / 1609.344)
        assert tiny > 0
        assert tiny == pytest.approx(6.21371e-7, rel=1e-5)

    def test_default_precision(self) -> None:
        """Точность по умолчанию — 6"""
        assert CONVERSION_DECIMALS == 6
        assert round_conversion(0.123456789) == pytest.approx(0.123457)


# =============================================================================
# ТЕСТЫ БЕЗОПАСНОГО ДЕЛЕНИЯ
# =============================================================================


class TestSafeDivide:
    """Тесты для safe_divide"""

    def test_normal_division(self) -> None:
        """Обычное деление"""
        assert safe_divide(10.0, 2.0) == 5.0
        assert safe_divide(-9.0, 3.0) == -3.0

    def test_zero_denominator_returns_fallback(self) -> None:
        """Деление на ноль — fallback"""
        assert safe_divide(10.0, 0.0) == 0.0
        assert safe_divide(10.0, 0.0, fallback=None) is None
        assert safe_divide(10.0, EPS_CALC / 10) == 0.0

    def test_nan_inputs_return_fallback(self) -> None:
        """NaN/Inf на входе — fallback"""
        assert safe_divide(float("nan"), 1.0, fallback=-1.0) == -1.0
        assert safe_divide(1.0, float("inf"), fallback=-1.0) == -1.0

    def test_overflow_result_sanitized(self) -> None:
        """Переполнение результата — fallback"""
        assert safe_divide(1e308, 1e-11, fallback=None) is None

    def test_invalid_eps_raises(self) -> None:
        """eps <= 0 запрещён"""
        with pytest.raises(ValueError, match="eps must be positive"):
            safe_divide(1.0, 1.0, eps=0.0)


# =============================================================================
# ТЕСТЫ САНИТИЗАЦИИ
# =============================================================================


class TestSanitization:
    """Тесты для is_valid_float / sanitize_float"""

    def test_is_valid_float(self) -> None:
        """Конечные числа валидны, NaN/Inf/None — нет"""
        assert is_valid_float(1.0)
        assert is_valid_float(0)
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("-inf"))
        assert not is_valid_float(None)  # type: ignore[arg-type]

    def test_sanitize_float(self) -> None:
        """NaN/Inf заменяются на fallback"""
        assert sanitize_float(3.5) == 3.5
        assert sanitize_float(float("nan")) == 0.0
        assert sanitize_float(float("inf"), fallback=None) is None
