"""
Descriptive Statistics — Меры центральной тенденции и разброса

ФОРМУЛЫ:
- Среднее арифметическое: x̄ = Σx / n
- Среднее геометрическое: exp(Σ ln x / n)            (только x > 0)
- Среднее гармоническое: n / Σ(1/x)                  (только x > 0)
- Взвешенное среднее: Σ(w·x) / Σw                    (w > 0)
- Медиана: средний элемент (n нечётно) или среднее двух средних (n чётно)
- Дисперсия: Σ(x - x̄)² / n (population), Σ(x - x̄)² / (n - 1) (sample)

КВАРТИЛИ (Tukey hinges / Moore–McCabe):
Q1 и Q3 — медианы нижней и верхней половин отсортированных данных;
при нечётном n медианный элемент не входит ни в одну из половин.
При n = 1 обе квартили равны единственному значению.
    [1, 2, 3, 4, 5, 6, 7] → Q1 = 2, Q3 = 6
    [1, 2, 3, 4, 5, 6, 7, 8] → Q1 = 2.5, Q3 = 6.5

МОДА:
Частоты считаются по значениям, округлённым до precision. Моды — значения
с максимальной частотой (по убыванию частоты, затем по возрастанию значения).
Если все частоты равны (все значения различны или все одинаковы) — моды нет.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Sample-дисперсия определена только при n >= 2 (иначе None)
2. Геометрическое/гармоническое среднее для данных с x <= 0 — None
3. Сортировка не изменяет входную последовательность
"""

import math
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Final, Sequence

from src.calculators.base import CalculationInput, Calculator
from src.calculators.statistics.parsing import check_dataset, resolve_dataset
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
)
from src.core.math.numerical_safeguards import (
    SCIENTIFIC_DECIMALS,
    round_half_up,
    safe_divide,
)

# Порог размера выборки, ниже которого выдаётся предупреждение
SMALL_SAMPLE_SIZE: Final[int] = 5


# =============================================================================
# ENUMS
# =============================================================================


class ModeType(str, Enum):
    """Тип распределения мод"""

    NO_MODE = "no-mode"
    UNIMODAL = "unimodal"
    BIMODAL = "bimodal"
    MULTIMODAL = "multimodal"


class DispersionMode(str, Enum):
    """Генеральная совокупность или выборка"""

    POPULATION = "population"
    SAMPLE = "sample"


# =============================================================================
# VALUE OBJECTS
# =============================================================================


@dataclass(frozen=True)
class ModeResult:
    """Моды набора данных."""

    values: tuple[float, ...]
    frequency: int
    type: ModeType


@dataclass(frozen=True)
class Quartiles:
    """Квартили и межквартильный размах."""

    q1: float
    q2: float
    q3: float
    iqr: float
    minimum: float
    maximum: float


@dataclass(frozen=True)
class WeightedMean:
    """Взвешенное среднее и его компоненты."""

    mean: float
    weight_sum: float
    weighted_sum: float


# =============================================================================
# ЦЕНТРАЛЬНАЯ ТЕНДЕНЦИЯ
# =============================================================================


def mean(values: Sequence[float]) -> float | None:
    """Среднее арифметическое (None для пустого набора)."""
    if not values:
        return None
    return math.fsum(values) / len(values)


def geometric_mean(values: Sequence[float]) -> float | None:
    """
    Среднее геометрическое через логарифмы (устойчиво к переполнению).

    Returns:
        None если набор пуст или содержит x <= 0
    """
    if not values or any(v <= 0 for v in values):
        return None
    return math.exp(math.fsum(math.log(v) for v in values) / len(values))


def harmonic_mean(values: Sequence[float]) -> float | None:
    """
    Среднее гармоническое.

    Returns:
        None если набор пуст или содержит x <= 0
    """
    if not values or any(v <= 0 for v in values):
        return None
    return len(values) / math.fsum(1.0 / v for v in values)


def weighted_mean(values: Sequence[float], weights: Sequence[float]) -> WeightedMean | None:
    """
    Взвешенное среднее Σ(w·x) / Σw.

    Returns:
        None если длины не совпадают или сумма весов не положительна
    """
    if not values or len(values) != len(weights):
        return None
    weight_sum = math.fsum(weights)
    weighted_sum = math.fsum(v * w for v, w in zip(values, weights))
    result = safe_divide(weighted_sum, weight_sum, fallback=None)
    if result is None or weight_sum <= 0:
        return None
    return WeightedMean(mean=result, weight_sum=weight_sum, weighted_sum=weighted_sum)


def median(values: Sequence[float]) -> float | None:
    """
    Медиана (среднее двух средних элементов при чётном n).

    Examples:
        >>> median([3, 1, 2])
        2
        >>> median([4, 1, 3, 2])
        2.5
    """
    if not values:
        return None
    ordered = sorted(values)
    n = len(ordered)
    mid = n // 2
    if n % 2 == 1:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def mode(values: Sequence[float], precision: int = SCIENTIFIC_DECIMALS) -> ModeResult:
    """
    Моды набора данных.

    Examples:
        >>> mode([1, 2, 2, 3, 3]).type
        <ModeType.BIMODAL: 'bimodal'>
        >>> mode([1, 2, 3]).type
        <ModeType.NO_MODE: 'no-mode'>
    """
    if not values:
        return ModeResult(values=(), frequency=0, type=ModeType.NO_MODE)

    counts = Counter(round_half_up(v, precision) for v in values)
    frequencies = set(counts.values())
    max_frequency = max(frequencies)

    if len(frequencies) == 1:
        return ModeResult(values=(), frequency=max_frequency, type=ModeType.NO_MODE)

    modes = tuple(
        sorted(value for value, count in counts.items() if count == max_frequency)
    )

    if len(modes) == 1:
        mode_type = ModeType.UNIMODAL
    elif len(modes) == 2:
        mode_type = ModeType.BIMODAL
    else:
        mode_type = ModeType.MULTIMODAL

    return ModeResult(values=modes, frequency=max_frequency, type=mode_type)


def quartiles(values: Sequence[float]) -> Quartiles | None:
    """
    Квартили методом медиан половин (медиана исключается при нечётном n).

    Examples:
        >>> q = quartiles([1, 2, 3, 4, 5, 6, 7])
        >>> (q.q1, q.q3)
        (2, 6)
    """
    if not values:
        return None

    ordered = sorted(values)
    n = len(ordered)
    half = n // 2

    lower = ordered[:half]
    upper = ordered[half + 1:] if n % 2 == 1 else ordered[half:]

    q1 = median(lower) if lower else ordered[0]
    q3 = median(upper) if upper else ordered[-1]

    return Quartiles(
        q1=q1,
        q2=median(ordered),
        q3=q3,
        iqr=q3 - q1,
        minimum=ordered[0],
        maximum=ordered[-1],
    )


# =============================================================================
# РАЗБРОС
# =============================================================================


def sum_of_squares(values: Sequence[float]) -> float | None:
    """Σ(x - x̄)²."""
    center = mean(values)
    if center is None:
        return None
    return math.fsum((v - center) ** 2 for v in values)


def variance(values: Sequence[float], sample: bool = False) -> float | None:
    """
    Дисперсия генеральной совокупности или выборки.

    Returns:
        None для пустого набора или для sample при n < 2
    """
    divisor = len(values) - 1 if sample else len(values)
    if divisor < 1:
        return None
    return sum_of_squares(values) / divisor


def standard_deviation(values: Sequence[float], sample: bool = False) -> float | None:
    """Стандартное отклонение (корень из дисперсии)."""
    result = variance(values, sample)
    return math.sqrt(result) if result is not None else None


# =============================================================================
# CENTRAL TENDENCY CALCULATOR
# =============================================================================


@dataclass(frozen=True)
class CentralTendencyConfig:
    """Конфигурация калькулятора среднего/медианы/моды."""

    precision: int = SCIENTIFIC_DECIMALS


@dataclass(frozen=True)
class CentralTendencyResult:
    """Результат калькулятора среднего/медианы/моды (округлённый)."""

    count: int
    sum: float
    minimum: float
    maximum: float
    range: float
    mean: float
    median: float
    mode: ModeResult
    geometric_mean: float | None
    harmonic_mean: float | None
    weighted_mean: WeightedMean | None
    quartiles: Quartiles
    population_variance: float
    population_std_dev: float
    sample_variance: float | None
    sample_std_dev: float | None
    sorted_values: tuple[float, ...]


class CentralTendencyInput(CalculationInput):
    """Вход: набор чисел (списком или текстом) и опциональные веса."""

    dataset: list[float] | None = None
    data_input: str | None = None
    weights: list[float] | None = None


def _round_optional(value: float | None, decimals: int) -> float | None:
    return round_half_up(value, decimals) if value is not None else None


class CentralTendencyCalculator(Calculator[CentralTendencyInput, CentralTendencyResult]):
    """Среднее, медиана, мода, квартили и разброс набора данных."""

    name = "central_tendency"
    input_model = CentralTendencyInput

    def __init__(self, config: CentralTendencyConfig | None = None):
        self.config = config or CentralTendencyConfig()

    def validate(self, inputs: CentralTendencyInput) -> ValidationResult:
        collector = check_dataset(ValidationCollector(), "dataset", inputs.dataset, inputs.data_input)
        if collector.has_error("dataset"):
            return collector.result()

        values = resolve_dataset(inputs.dataset, inputs.data_input).values

        if inputs.weights is not None:
            if len(inputs.weights) != len(values):
                collector = collector.add(
                    "weights",
                    ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                    f"Number of weights ({len(inputs.weights)}) must match number of values ({len(values)})",
                )
            elif not all(math.isfinite(w) for w in inputs.weights):
                collector = collector.add(
                    "weights", ErrorKind.INVALID_FORMAT, "All weights must be finite numbers"
                )
            elif any(w <= 0 for w in inputs.weights):
                collector = collector.add(
                    "weights", ErrorKind.OUT_OF_RANGE, "All weights must be positive"
                )

        if any(v <= 0 for v in values):
            collector = collector.warn(
                "dataset",
                "non_positive_values",
                "Geometric and harmonic means require all values to be positive",
            )
        if len(values) == 1:
            collector = collector.warn(
                "dataset",
                "single_value",
                "Only one value provided. All measures of central tendency will equal this value.",
            )

        return collector.result()

    def compute(self, inputs: CentralTendencyInput) -> CentralTendencyResult | None:
        values = resolve_dataset(inputs.dataset, inputs.data_input).values
        if not values:
            return None

        p = self.config.precision
        ordered = tuple(sorted(values))
        q = quartiles(ordered)

        weighted = None
        if inputs.weights is not None:
            raw = weighted_mean(values, inputs.weights)
            if raw is not None:
                weighted = WeightedMean(
                    mean=round_half_up(raw.mean, p),
                    weight_sum=round_half_up(raw.weight_sum, p),
                    weighted_sum=round_half_up(raw.weighted_sum, p),
                )

        return CentralTendencyResult(
            count=len(values),
            sum=round_half_up(math.fsum(values), p),
            minimum=ordered[0],
            maximum=ordered[-1],
            range=round_half_up(ordered[-1] - ordered[0], p),
            mean=round_half_up(mean(values), p),
            median=round_half_up(median(ordered), p),
            mode=mode(values, p),
            geometric_mean=_round_optional(geometric_mean(values), p),
            harmonic_mean=_round_optional(harmonic_mean(values), p),
            weighted_mean=weighted,
            quartiles=Quartiles(
                q1=round_half_up(q.q1, p),
                q2=round_half_up(q.q2, p),
                q3=round_half_up(q.q3, p),
                iqr=round_half_up(q.iqr, p),
                minimum=q.minimum,
                maximum=q.maximum,
            ),
            population_variance=round_half_up(variance(values), p),
            population_std_dev=round_half_up(standard_deviation(values), p),
            sample_variance=_round_optional(variance(values, sample=True), p),
            sample_std_dev=_round_optional(standard_deviation(values, sample=True), p),
            sorted_values=ordered,
        )


# =============================================================================
# STANDARD DEVIATION CALCULATOR
# =============================================================================


@dataclass(frozen=True)
class StandardDeviationConfig:
    """Конфигурация калькулятора стандартного отклонения."""

    precision: int = SCIENTIFIC_DECIMALS


@dataclass(frozen=True)
class Deviation:
    """Отклонение одного значения от среднего."""

    value: float
    deviation: float
    squared: float


@dataclass(frozen=True)
class StandardDeviationResult:
    """Результат калькулятора стандартного отклонения (округлённый)."""

    mode: DispersionMode
    count: int
    mean: float
    variance: float
    standard_deviation: float
    sum_of_squares: float
    divisor: int
    # Только для выборки: s / √n
    standard_error: float | None
    # s / |x̄| × 100, None при x̄ = 0
    coefficient_of_variation: float | None
    minimum: float
    maximum: float
    range: float
    deviations: tuple[Deviation, ...]


class StandardDeviationInput(CalculationInput):
    """Вход: набор чисел и режим (population / sample)."""

    dataset: list[float] | None = None
    data_input: str | None = None
    mode: DispersionMode = DispersionMode.SAMPLE


class StandardDeviationCalculator(Calculator[StandardDeviationInput, StandardDeviationResult]):
    """Стандартное отклонение генеральной совокупности или выборки."""

    name = "standard_deviation"
    input_model = StandardDeviationInput

    def __init__(self, config: StandardDeviationConfig | None = None):
        self.config = config or StandardDeviationConfig()

    def validate(self, inputs: StandardDeviationInput) -> ValidationResult:
        min_count = 2 if inputs.mode == DispersionMode.SAMPLE else 1
        collector = check_dataset(
            ValidationCollector(),
            "dataset",
            inputs.dataset,
            inputs.data_input,
            min_count=min_count,
        )

        if not collector.has_error("dataset"):
            count = resolve_dataset(inputs.dataset, inputs.data_input).count
            if count < SMALL_SAMPLE_SIZE:
                collector = collector.warn(
                    "dataset",
                    "small_sample",
                    f"Small sample size ({count}). Results may not be reliable.",
                )

        return collector.result()

    def compute(self, inputs: StandardDeviationInput) -> StandardDeviationResult | None:
        values = resolve_dataset(inputs.dataset, inputs.data_input).values
        sample = inputs.mode == DispersionMode.SAMPLE

        center = mean(values)
        var = variance(values, sample)
        if center is None or var is None:
            return None

        p = self.config.precision
        sd = math.sqrt(var)
        n = len(values)

        standard_error = sd / math.sqrt(n) if sample else None
        cv = safe_divide(sd, abs(center), fallback=None)

        return StandardDeviationResult(
            mode=inputs.mode,
            count=n,
            mean=round_half_up(center, p),
            variance=round_half_up(var, p),
            standard_deviation=round_half_up(sd, p),
            sum_of_squares=round_half_up(sum_of_squares(values), p),
            divisor=n - 1 if sample else n,
            standard_error=_round_optional(standard_error, p),
            coefficient_of_variation=_round_optional(cv * 100.0 if cv is not None else None, p),
            minimum=min(values),
            maximum=max(values),
            range=round_half_up(max(values) - min(values), p),
            deviations=tuple(
                Deviation(
                    value=v,
                    deviation=round_half_up(v - center, p),
                    squared=round_half_up((v - center) ** 2, p),
                )
                for v in values
            ),
        )
