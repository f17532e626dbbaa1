"""
Тесты для Normal Distribution — erf, CDF, обратная функция

Проверяемые инварианты:
1. Φ(0) == 0.5 точно
2. erf нечётная
3. Φ монотонна и лежит в [0, 1]
4. Обратная функция согласована с CDF в пределах точности аппроксимации
"""

import math

import pytest

from src.core.math.normal_distribution import (
    erf,
    inverse_normal_upper,
    normal_cdf,
    tail_probabilities,
    z_for_confidence,
)


class TestErf:
    """Тесты erf"""

    def test_zero_exact(self) -> None:
        """erf(0) == 0"""
        assert erf(0.0) == 0.0

    @pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 1.5, 2.0, 3.0])
    def test_matches_math_erf(self, x: float) -> None:
        """Точность аппроксимации A&S 7.1.26"""
        assert erf(x) == pytest.approx(math.erf(x), abs=2e-7)

    def test_odd_function(self) -> None:
        """erf(-x) == -erf(x)"""
        for x in (0.3, 1.2, 2.7):
            assert erf(-x) == -erf(x)


class TestNormalCDF:
    """Тесты normal_cdf"""

    def test_center(self) -> None:
        """Φ(0) == 0.5"""
        assert normal_cdf(0.0) == 0.5

    def test_known_values(self) -> None:
        """Табличные значения Φ"""
        assert normal_cdf(1.0) == pytest.approx(0.8413, abs=1e-4)
        assert normal_cdf(-1.0) == pytest.approx(0.1587, abs=1e-4)
        assert normal_cdf(1.96) == pytest.approx(0.975, abs=1e-4)

    def test_monotone_and_bounded(self) -> None:
        """Монотонность и границы [0, 1]"""
        values = [normal_cdf(z / 10.0) for z in range(-60, 61)]
        assert all(0.0 <= v <= 1.0 for v in values)
        assert all(a <= b for a, b in zip(values, values[1:]))


class TestTailProbabilities:
    """Тесты tail_probabilities"""

    def test_z_zero(self) -> None:
        """z = 0: хвосты по 0.5, двусторонний 1.0"""
        tails = tail_probabilities(0.0)
        assert tails.left_tailed == 0.5
        assert tails.right_tailed == 0.5
        assert tails.two_tailed == 1.0
        assert tails.confidence_level == 0.0

    def test_symmetric(self) -> None:
        """Двусторонний p-value симметричен по знаку z"""
        assert tail_probabilities(1.5).two_tailed == pytest.approx(
            tail_probabilities(-1.5).two_tailed
        )

    def test_critical_value(self) -> None:
        """z = 1.96 — уровень доверия ≈ 95%"""
        tails = tail_probabilities(1.96)
        assert tails.two_tailed == pytest.approx(0.05, abs=1e-3)
        assert tails.left_tailed + tails.right_tailed == pytest.approx(1.0)


class TestInverseNormal:
    """Тесты inverse_normal_upper / z_for_confidence"""

    @pytest.mark.parametrize(
        ("confidence", "expected"),
        [(90.0, 1.645), (95.0, 1.960), (99.0, 2.576)],
    )
    def test_standard_critical_values(self, confidence: float, expected: float) -> None:
        """Стандартные критические z"""
        assert z_for_confidence(confidence) == pytest.approx(expected, abs=1e-3)

    def test_lower_tail_is_negative(self) -> None:
        """alpha > 0.5 — отрицательный квантиль"""
        assert inverse_normal_upper(0.975) == pytest.approx(-inverse_normal_upper(0.025))
        assert inverse_normal_upper(0.975) < 0

    def test_consistent_with_cdf(self) -> None:
        """1 - Φ(z(alpha)) ≈ alpha"""
        for alpha in (0.001, 0.01, 0.05, 0.2):
            assert 1.0 - normal_cdf(inverse_normal_upper(alpha)) == pytest.approx(alpha, rel=0.05)

    @pytest.mark.parametrize("alpha", [0.0, 1.0, -0.1, 1.5])
    def test_invalid_alpha(self, alpha: float) -> None:
        """alpha вне (0, 1) — ValueError"""
        with pytest.raises(ValueError, match="alpha must be in"):
            inverse_normal_upper(alpha)
