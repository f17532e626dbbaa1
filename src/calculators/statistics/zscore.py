"""
Z-Score — Стандартизация и вероятности нормального распределения

ФОРМУЛЫ:
    z = (x - μ) / σ
    x = μ + z·σ
    percentile = Φ(z) × 100
    p_left = Φ(z), p_right = 1 - Φ(z), p_two = 2·min(p_left, p_right)
    confidence = 1 - p_two

Режимы:
- z-score: по значению x вычисляется z
- value: по z вычисляется значение x

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. σ > 0 проверяется валидацией (domain-precondition-violated)
2. value_from_z_score(z_score(x, μ, σ), μ, σ) == x для любого σ > 0
3. Вероятности лежат в [0, 1]
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final

from src.calculators.base import CalculationInput, Calculator
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
    check_number,
)
from src.core.math.normal_distribution import normal_cdf, tail_probabilities
from src.core.math.numerical_safeguards import (
    PERCENT_DECIMALS,
    SCIENTIFIC_DECIMALS,
    is_valid_float,
    round_half_up,
)

# Порог |z|, ниже которого значение считается равным среднему
AT_MEAN_THRESHOLD: Final[float] = 0.0001


# =============================================================================
# ENUMS
# =============================================================================


class ZScoreMode(str, Enum):
    """Направление расчёта"""

    Z_SCORE = "z-score"
    VALUE = "value"


class ZScoreInterpretation(str, Enum):
    """Положение значения относительно среднего"""

    BELOW_MEAN = "below_mean"
    AT_MEAN = "at_mean"
    ABOVE_MEAN = "above_mean"


# =============================================================================
# CORE FUNCTIONS
# =============================================================================


def z_score(x: float, mu: float, sigma: float) -> float | None:
    """
    Z-score значения.

    Returns:
        (x - μ) / σ или None при σ <= 0 / NaN

    Examples:
        >>> z_score(85.0, 70.0, 10.0)
        1.5
    """
    if not is_valid_float(sigma) or sigma <= 0:
        return None
    result = (x - mu) / sigma
    return result if is_valid_float(result) else None


def value_from_z_score(z: float, mu: float, sigma: float) -> float | None:
    """
    Значение по z-score: μ + z·σ.

    Returns:
        Значение или None при σ <= 0 / NaN
    """
    if not is_valid_float(sigma) or sigma <= 0:
        return None
    result = mu + z * sigma
    return result if is_valid_float(result) else None


def percentile_from_z(z: float) -> float:
    """Перцентиль Φ(z) × 100 (не округлённый)."""
    return normal_cdf(z) * 100.0


def interpret_z_score(z: float, threshold: float = AT_MEAN_THRESHOLD) -> ZScoreInterpretation:
    """Положение относительно среднего по знаку z."""
    if abs(z) < threshold:
        return ZScoreInterpretation.AT_MEAN
    return ZScoreInterpretation.ABOVE_MEAN if z > 0 else ZScoreInterpretation.BELOW_MEAN


# =============================================================================
# CALCULATOR
# =============================================================================


@dataclass(frozen=True)
class ZScoreConfig:
    """Конфигурация калькулятора z-score."""

    # Точность z и значения
    precision: int = SCIENTIFIC_DECIMALS
    # Точность вероятностей
    probability_decimals: int = 6
    # Точность перцентиля
    percentile_decimals: int = PERCENT_DECIMALS


@dataclass(frozen=True)
class ZScoreResult:
    """Результат калькулятора z-score (округлённый)."""

    mode: ZScoreMode
    z_score: float
    value: float
    mean: float
    standard_deviation: float
    standard_deviations_from_mean: float
    percentile: float
    left_tailed_p: float
    right_tailed_p: float
    two_tailed_p: float
    confidence_level: float
    interpretation: ZScoreInterpretation


class ZScoreInput(CalculationInput):
    """Вход: {mode, value, mean, standard_deviation, z_score}."""

    mode: ZScoreMode = ZScoreMode.Z_SCORE
    value: float | None = None
    mean: float | None = None
    standard_deviation: float | None = None
    z_score: float | None = None


class ZScoreCalculator(Calculator[ZScoreInput, ZScoreResult]):
    """Z-score, перцентиль и p-values нормального распределения."""

    name = "z_score"
    input_model = ZScoreInput

    def __init__(self, config: ZScoreConfig | None = None):
        self.config = config or ZScoreConfig()

    def validate(self, inputs: ZScoreInput) -> ValidationResult:
        collector = ValidationCollector()

        if inputs.mode == ZScoreMode.Z_SCORE:
            collector = check_number(collector, "value", inputs.value, label="Value")
        else:
            collector = check_number(collector, "z_score", inputs.z_score, label="Z-score")

        collector = check_number(collector, "mean", inputs.mean, label="Mean")
        collector = check_number(
            collector, "standard_deviation", inputs.standard_deviation, label="Standard deviation"
        )

        if not collector.has_error("standard_deviation") and inputs.standard_deviation <= 0:
            collector = collector.add(
                "standard_deviation",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                "Standard deviation must be greater than 0",
            )

        return collector.result()

    def compute(self, inputs: ZScoreInput) -> ZScoreResult | None:
        mu, sigma = inputs.mean, inputs.standard_deviation

        if inputs.mode == ZScoreMode.Z_SCORE:
            x = inputs.value
            z = z_score(x, mu, sigma)
        else:
            z = inputs.z_score
            x = value_from_z_score(z, mu, sigma)

        if z is None or x is None:
            return None

        cfg = self.config
        probabilities = tail_probabilities(z)
        rounded_z = round_half_up(z, cfg.precision)

        return ZScoreResult(
            mode=inputs.mode,
            z_score=rounded_z,
            value=round_half_up(x, cfg.precision),
            mean=mu,
            standard_deviation=sigma,
            standard_deviations_from_mean=abs(rounded_z),
            percentile=round_half_up(percentile_from_z(z), cfg.percentile_decimals),
            left_tailed_p=round_half_up(probabilities.left_tailed, cfg.probability_decimals),
            right_tailed_p=round_half_up(probabilities.right_tailed, cfg.probability_decimals),
            two_tailed_p=round_half_up(probabilities.two_tailed, cfg.probability_decimals),
            confidence_level=round_half_up(
                probabilities.confidence_level, cfg.probability_decimals
            ),
            interpretation=interpret_z_score(z),
        )
