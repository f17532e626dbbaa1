"""
Тесты для Correlation — коэффициент Пирсона, регрессия и значимость

Проверяемые инварианты:
1. n >= 2 пар, x и y не константны
2. Значимость только при n >= 3
3. При |r| = 1: t не определён, p = 0
"""

import math

import pytest

from src.calculators.statistics.correlation import (
    CorrelationCalculator,
    CorrelationDirection,
    CorrelationStrength,
    classify_direction,
    classify_strength,
    linear_regression,
    p_value_label,
    pearson_r,
    significance_test,
)
from src.core.domain.validation import ErrorKind

X = [1, 2, 3, 4, 5]
Y = [2, 4, 5, 4, 5]


class TestPearson:
    """Тесты pearson_r / linear_regression"""

    def test_known_value(self) -> None:
        """Sxy / √(Sxx·Syy) = 6 / √60"""
        assert pearson_r(X, Y) == pytest.approx(6 / math.sqrt(60))

    def test_perfect(self) -> None:
        """Линейная зависимость — r = ±1"""
        assert pearson_r(X, [2 * x for x in X]) == 1.0
        assert pearson_r(X, [-x for x in X]) == -1.0

    def test_undefined(self) -> None:
        """Константа, n < 2 или разные длины — None"""
        assert pearson_r([1, 1, 1], [1, 2, 3]) is None
        assert pearson_r([1], [2]) is None
        assert pearson_r([1, 2], [1, 2, 3]) is None

    def test_regression(self) -> None:
        """slope = Sxy / Sxx, intercept = ȳ - slope·x̄"""
        line = linear_regression(X, Y)
        assert line.slope == pytest.approx(0.6)
        assert line.intercept == pytest.approx(2.2)
        assert line.predict(10) == pytest.approx(8.2)

    def test_regression_constant_x(self) -> None:
        """Sxx = 0 — горизонтальная линия через ȳ"""
        line = linear_regression([3, 3, 3], [1, 2, 3])
        assert line.slope == 0.0
        assert line.intercept == 2.0

    def test_micro_scale_regression(self) -> None:
        """Данные порядка 1e-7 — наклон не теряется"""
        line = linear_regression([1e-7, 2e-7, 3e-7], [1, 2, 4])
        assert line.slope == pytest.approx(1.5e7)

    def test_micro_scale_pearson(self) -> None:
        """r не зависит от масштаба данных"""
        micro = pearson_r([1e-7, 2e-7, 3e-7], [1e-7, 2e-7, 4e-7])
        assert micro is not None
        assert micro == pytest.approx(pearson_r([1, 2, 3], [1, 2, 4]))


class TestClassification:
    """Тесты классификации силы и направления"""

    @pytest.mark.parametrize(
        ("r", "expected"),
        [
            (1.0, CorrelationStrength.PERFECT_POSITIVE),
            (0.85, CorrelationStrength.STRONG_POSITIVE),
            (0.5, CorrelationStrength.MODERATE_POSITIVE),
            (0.25, CorrelationStrength.WEAK_POSITIVE),
            (0.1, CorrelationStrength.NEGLIGIBLE),
            (-0.1, CorrelationStrength.NEGLIGIBLE),
            (-0.3, CorrelationStrength.WEAK_NEGATIVE),
            (-0.6, CorrelationStrength.MODERATE_NEGATIVE),
            (-0.75, CorrelationStrength.STRONG_NEGATIVE),
            (-1.0, CorrelationStrength.PERFECT_NEGATIVE),
        ],
    )
    def test_strength(self, r: float, expected: CorrelationStrength) -> None:
        """Категории по |r| с учётом знака"""
        assert classify_strength(r) == expected

    def test_direction(self) -> None:
        """Направление по знаку r"""
        assert classify_direction(0.5) == CorrelationDirection.POSITIVE
        assert classify_direction(-0.5) == CorrelationDirection.NEGATIVE
        assert classify_direction(0.00001) == CorrelationDirection.NONE

    def test_p_value_label(self) -> None:
        """Интервальные метки"""
        assert p_value_label(0.0005) == "< 0.001"
        assert p_value_label(0.005) == "< 0.01"
        assert p_value_label(0.03) == "< 0.05"
        assert p_value_label(0.2) == "> 0.05"


class TestSignificance:
    """Тесты significance_test"""

    def test_t_statistic(self) -> None:
        """t = r·√(df / (1 - r²))"""
        test = significance_test(6 / math.sqrt(60), 5)
        assert test.degrees_of_freedom == 3
        assert test.t_statistic == pytest.approx(math.sqrt(4.5))
        assert 0.05 < test.p_value < 0.2
        assert not test.is_significant

    def test_strong_large_sample_is_significant(self) -> None:
        """r = 0.9 при n = 20 значим"""
        test = significance_test(0.9, 20)
        assert test.p_value < 0.001
        assert test.p_value_label == "< 0.001"
        assert test.is_significant

    def test_perfect_correlation(self) -> None:
        """|r| = 1 — t не определён, p = 0"""
        test = significance_test(1.0, 5)
        assert test.t_statistic is None
        assert test.p_value == 0.0
        assert test.is_significant

    def test_too_few_pairs(self) -> None:
        """n < 3 — тест не выполняется"""
        assert significance_test(0.5, 2) is None


class TestCorrelationCalculator:
    """Тесты CorrelationCalculator"""

    def test_full_result(self) -> None:
        """Полный результат по спискам"""
        outcome = CorrelationCalculator().run({"x_values": X, "y_values": Y})
        assert outcome.ok
        result = outcome.result
        assert result.n == 5
        assert result.r == 0.7746
        assert result.r_squared == 0.6
        assert result.strength == CorrelationStrength.STRONG_POSITIVE
        assert result.direction == CorrelationDirection.POSITIVE
        assert result.regression.slope == 0.6
        assert result.regression.intercept == 2.2
        assert result.covariance == 1.5
        assert result.sum_xy == 66.0
        assert result.significance.t_statistic == 2.1213

    def test_text_input(self) -> None:
        """Данные из текста"""
        outcome = CorrelationCalculator().run({"x_input": "1 2 3 4 5", "y_input": "5;4;3;2;1"})
        assert outcome.result.r == -1.0
        assert outcome.result.strength == CorrelationStrength.PERFECT_NEGATIVE

    def test_length_mismatch(self) -> None:
        """Разное число значений X и Y"""
        outcome = CorrelationCalculator().run({"x_values": [1, 2, 3], "y_values": [1, 2]})
        assert outcome.validation.has_error("y_values", ErrorKind.DOMAIN_PRECONDITION_VIOLATED)

    def test_constant_series(self) -> None:
        """Константный ряд — ошибка валидации"""
        outcome = CorrelationCalculator().run({"x_values": [2, 2, 2], "y_values": [1, 2, 3]})
        assert not outcome.ok
        assert outcome.validation.fields == ("x_values",)

    def test_too_few_values(self) -> None:
        """Меньше двух пар"""
        outcome = CorrelationCalculator().run({"x_values": [1], "y_values": [1]})
        assert outcome.validation.fields == ("x_values", "y_values")

    def test_small_sample_warning(self) -> None:
        """n < 5 — предупреждение"""
        outcome = CorrelationCalculator().run({"x_values": [1, 2, 3], "y_values": [2, 1, 3]})
        assert outcome.ok
        assert outcome.validation.warnings[0].code == "small_sample"

    def test_micro_scale_values(self) -> None:
        """Малые по модулю данные дают полный результат"""
        outcome = CorrelationCalculator().run(
            {"x_values": [1e-7, 2e-7, 3e-7], "y_values": [1e-7, 2e-7, 4e-7]}
        )
        assert outcome.ok
        assert outcome.result.r == CorrelationCalculator().run(
            {"x_values": [1, 2, 3], "y_values": [1, 2, 4]}
        ).result.r

        outcome = CorrelationCalculator().run(
            {"x_values": [1e-7, 2e-7, 3e-7], "y_values": [1, 2, 4]}
        )
        assert outcome.result.regression.slope == pytest.approx(1.5e7)
