"""
Sample Size — Размер выборки для оценки доли (формула Кочрена)

ФОРМУЛЫ:
    n₀ = Z² · p · (1 - p) / E²
    n  = n₀ · N / (n₀ + N - 1)      (поправка на конечную совокупность)
    результат округляется вверх

Z берётся из таблицы для 90/95/99 %, для произвольного уровня доверия —
из рациональной аппроксимации обратной функции нормального распределения
(округление до 3 знаков).
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping

from src.calculators.base import CalculationInput, Calculator
from src.core.domain.validation import ValidationCollector, ValidationResult, check_number
from src.core.math.normal_distribution import z_for_confidence
from src.core.math.numerical_safeguards import PERCENT_DECIMALS, round_half_up

# Табличные критические значения z для стандартных уровней доверия
Z_SCORES: Final[Mapping[float, float]] = MappingProxyType(
    {
        90.0: 1.645,
        95.0: 1.96,
        99.0: 2.576,
    }
)

# Допустимый диапазон произвольного уровня доверия (%)
MIN_CONFIDENCE_PCT: Final[float] = 50.0
MAX_CONFIDENCE_PCT: Final[float] = 99.99

# Погрешность выше этого порога (%) даёт предупреждение
LARGE_MARGIN_PCT: Final[float] = 10.0
MAX_MARGIN_PCT: Final[float] = 50.0

# Совокупность меньше этого порога даёт предупреждение
SMALL_POPULATION: Final[int] = 10

# Консервативная оценка доли по умолчанию (%)
DEFAULT_PROPORTION_PCT: Final[float] = 50.0


def z_score_for_confidence(confidence_pct: float) -> float:
    """
    Критическое значение z для уровня доверия.

    Examples:
        >>> z_score_for_confidence(95.0)
        1.96
    """
    if confidence_pct in Z_SCORES:
        return Z_SCORES[confidence_pct]
    return round_half_up(z_for_confidence(confidence_pct), 3)


def cochran_sample_size(z: float, proportion: float, margin: float) -> float:
    """
    Размер выборки без поправки (доли, не проценты).

    Args:
        z: Критическое значение
        proportion: Ожидаемая доля в [0, 1]
        margin: Допустимая погрешность (> 0)
    """
    return (z * z * proportion * (1.0 - proportion)) / (margin * margin)


def finite_population_correction(sample_size: float, population: float) -> float:
    """Поправка на конечную совокупность: n₀·N / (n₀ + N - 1)."""
    return (sample_size * population) / (sample_size + population - 1.0)


# =============================================================================
# CALCULATOR
# =============================================================================


@dataclass(frozen=True)
class SampleSizeConfig:
    """Конфигурация калькулятора размера выборки."""

    percent_decimals: int = PERCENT_DECIMALS


@dataclass(frozen=True)
class SampleSizeResult:
    """Результат калькулятора размера выборки."""

    sample_size: int
    # Без поправки на конечную совокупность
    infinite_population_size: int
    z_score: float
    confidence_level: float
    margin_of_error: float
    proportion: float
    population: int | None
    # Доля совокупности, попадающая в выборку (%)
    sampling_fraction: float | None
    expected_yes: int
    expected_no: int


class SampleSizeInput(CalculationInput):
    """Вход: уровень доверия, погрешность и ожидаемая доля (%), размер совокупности."""

    confidence_level: float | None = 95.0
    margin_of_error: float | None = None
    proportion: float | None = DEFAULT_PROPORTION_PCT
    population: float | None = None


class SampleSizeCalculator(Calculator[SampleSizeInput, SampleSizeResult]):
    """Размер выборки для оценки доли с заданной точностью."""

    name = "sample_size"
    input_model = SampleSizeInput

    def __init__(self, config: SampleSizeConfig | None = None):
        self.config = config or SampleSizeConfig()

    def validate(self, inputs: SampleSizeInput) -> ValidationResult:
        collector = ValidationCollector()

        collector = check_number(
            collector,
            "confidence_level",
            inputs.confidence_level,
            label="Confidence level",
            min_value=MIN_CONFIDENCE_PCT,
            max_value=MAX_CONFIDENCE_PCT,
        )
        collector = check_number(
            collector,
            "margin_of_error",
            inputs.margin_of_error,
            label="Margin of error",
            min_value=0.0,
            min_exclusive=True,
            max_value=MAX_MARGIN_PCT,
        )
        collector = check_number(
            collector,
            "proportion",
            inputs.proportion,
            label="Proportion",
            min_value=0.0,
            max_value=100.0,
        )
        collector = check_number(
            collector,
            "population",
            inputs.population,
            label="Population",
            required=False,
            min_value=0.0,
            min_exclusive=True,
            whole=True,
        )

        if not collector.has_error("margin_of_error") and inputs.margin_of_error > LARGE_MARGIN_PCT:
            collector = collector.warn(
                "margin_of_error",
                "large_margin",
                "Margin of error above 10% gives imprecise estimates",
            )
        if (
            inputs.population is not None
            and not collector.has_error("population")
            and inputs.population < SMALL_POPULATION
        ):
            collector = collector.warn(
                "population",
                "small_population",
                "Population is very small; consider surveying everyone",
            )

        return collector.result()

    def compute(self, inputs: SampleSizeInput) -> SampleSizeResult | None:
        z = z_score_for_confidence(inputs.confidence_level)
        proportion = inputs.proportion / 100.0
        margin = inputs.margin_of_error / 100.0

        n0 = cochran_sample_size(z, proportion, margin)
        infinite_size = math.ceil(n0)

        population = int(inputs.population) if inputs.population is not None else None
        if population is not None:
            sample_size = math.ceil(finite_population_correction(n0, population))
            sampling_fraction = round_half_up(
                sample_size / population * 100.0, self.config.percent_decimals
            )
        else:
            sample_size = infinite_size
            sampling_fraction = None

        expected_yes = int(round_half_up(sample_size * proportion, 0))

        return SampleSizeResult(
            sample_size=sample_size,
            infinite_population_size=infinite_size,
            z_score=z,
            confidence_level=inputs.confidence_level,
            margin_of_error=inputs.margin_of_error,
            proportion=inputs.proportion,
            population=population,
            sampling_fraction=sampling_fraction,
            expected_yes=expected_yes,
            expected_no=sample_size - expected_yes,
        )
