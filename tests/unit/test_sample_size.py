"""
Тесты для Sample Size — формула Кочрена и поправка на конечную совокупность
"""

import pytest

from src.calculators.statistics.sample_size import (
    SampleSizeCalculator,
    cochran_sample_size,
    finite_population_correction,
    z_score_for_confidence,
)
from src.core.domain.validation import ErrorKind


class TestFormulas:
    """Тесты формул"""

    def test_table_z_scores(self) -> None:
        """Табличные z для 90/95/99%"""
        assert z_score_for_confidence(90.0) == 1.645
        assert z_score_for_confidence(95.0) == 1.96
        assert z_score_for_confidence(99.0) == 2.576

    def test_approximated_z_score(self) -> None:
        """Произвольный уровень доверия — аппроксимация до 3 знаков"""
        assert z_score_for_confidence(80.0) == pytest.approx(1.282, abs=0.002)

    def test_cochran(self) -> None:
        """n₀ = Z²·p·(1-p) / E²"""
        assert cochran_sample_size(1.96, 0.5, 0.05) == pytest.approx(384.16)

    def test_finite_population_correction(self) -> None:
        """n₀·N / (n₀ + N - 1)"""
        assert finite_population_correction(384.16, 1000) == pytest.approx(277.74, abs=0.01)


class TestSampleSizeCalculator:
    """Тесты SampleSizeCalculator"""

    def test_classic_case(self) -> None:
        """95%, ±5%, p = 50% → 385"""
        outcome = SampleSizeCalculator().run({"margin_of_error": 5})
        assert outcome.ok
        result = outcome.result
        assert result.sample_size == 385
        assert result.infinite_population_size == 385
        assert result.z_score == 1.96
        assert result.population is None
        assert result.sampling_fraction is None

    def test_finite_population(self) -> None:
        """Поправка на конечную совокупность"""
        outcome = SampleSizeCalculator().run({"margin_of_error": 5, "population": 1000})
        result = outcome.result
        assert result.sample_size == 278
        assert result.infinite_population_size == 385
        assert result.sampling_fraction == 27.8
        assert result.expected_yes == 139
        assert result.expected_no == 139

    def test_proportion_affects_size(self) -> None:
        """p = 50% даёт максимальный размер"""
        calculator = SampleSizeCalculator()
        half = calculator.run({"margin_of_error": 5}).result.sample_size
        skewed = calculator.run({"margin_of_error": 5, "proportion": 10}).result.sample_size
        assert skewed < half

    def test_margin_required(self) -> None:
        """Погрешность обязательна и > 0"""
        outcome = SampleSizeCalculator().run({})
        assert outcome.validation.has_error("margin_of_error", ErrorKind.MISSING_REQUIRED_FIELD)

        outcome = SampleSizeCalculator().run({"margin_of_error": 0})
        assert outcome.validation.has_error("margin_of_error", ErrorKind.OUT_OF_RANGE)

    def test_confidence_range(self) -> None:
        """Уровень доверия в [50, 99.99]"""
        outcome = SampleSizeCalculator().run({"margin_of_error": 5, "confidence_level": 100})
        assert outcome.validation.has_error("confidence_level", ErrorKind.OUT_OF_RANGE)

    def test_population_must_be_whole(self) -> None:
        """Размер совокупности — целое число"""
        outcome = SampleSizeCalculator().run({"margin_of_error": 5, "population": 10.5})
        assert outcome.validation.has_error("population", ErrorKind.INVALID_FORMAT)

    def test_warnings(self) -> None:
        """Большая погрешность и малая совокупность — предупреждения"""
        outcome = SampleSizeCalculator().run({"margin_of_error": 20, "population": 5})
        assert outcome.ok
        codes = [warning.code for warning in outcome.validation.warnings]
        assert codes == ["large_margin", "small_population"]
