"""
Correlation — Коэффициент Пирсона, линейная регрессия и значимость

ФОРМУЛЫ:
    Sxx = Σ(x - x̄)², Syy = Σ(y - ȳ)², Sxy = Σ(x - x̄)(y - ȳ)
    r = Sxy / √(Sxx·Syy)
    R² = r²
    slope = Sxy / Sxx, intercept = ȳ - slope·x̄
    cov = Sxy / (n - 1)
    t = r·√((n - 2) / (1 - r²)),  df = n - 2
    p = 2·P(T > |t|)  (распределение Стьюдента, scipy.stats.t)

Сила связи по |r| (с учётом знака, 9 категорий):
    >= 0.9999 perfect, >= 0.7 strong, >= 0.4 moderate, >= 0.2 weak, иначе negligible

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. n >= 2 пар, x и y не константны (иначе r не определён)
2. Значимость считается только при n >= 3 (df >= 1)
3. При |r| = 1 t не определён (None), p = 0
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Final, Sequence

from scipy import stats

from src.calculators.base import CalculationInput, Calculator
from src.calculators.statistics.parsing import check_dataset, resolve_dataset
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
)
from src.core.math.numerical_safeguards import (
    EPS_CALC,
    SCIENTIFIC_DECIMALS,
    round_half_up,
)

# Уровень значимости для проверки гипотезы r = 0
SIGNIFICANCE_ALPHA: Final[float] = 0.05

# Порог |r|, ниже которого направление связи отсутствует
NO_DIRECTION_THRESHOLD: Final[float] = 0.0001

# Порог размера выборки, ниже которого выдаётся предупреждение
SMALL_SAMPLE_SIZE: Final[int] = 5


# =============================================================================
# ENUMS
# =============================================================================


class CorrelationStrength(str, Enum):
    """Сила и знак корреляции"""

    PERFECT_POSITIVE = "perfect_positive"
    STRONG_POSITIVE = "strong_positive"
    MODERATE_POSITIVE = "moderate_positive"
    WEAK_POSITIVE = "weak_positive"
    NEGLIGIBLE = "negligible"
    WEAK_NEGATIVE = "weak_negative"
    MODERATE_NEGATIVE = "moderate_negative"
    STRONG_NEGATIVE = "strong_negative"
    PERFECT_NEGATIVE = "perfect_negative"


class CorrelationDirection(str, Enum):
    """Направление связи"""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NONE = "none"


# (порог |r|, положительная категория, отрицательная категория)
_STRENGTH_BANDS: Final[tuple[tuple[float, CorrelationStrength, CorrelationStrength], ...]] = (
    (0.9999, CorrelationStrength.PERFECT_POSITIVE, CorrelationStrength.PERFECT_NEGATIVE),
    (0.7, CorrelationStrength.STRONG_POSITIVE, CorrelationStrength.STRONG_NEGATIVE),
    (0.4, CorrelationStrength.MODERATE_POSITIVE, CorrelationStrength.MODERATE_NEGATIVE),
    (0.2, CorrelationStrength.WEAK_POSITIVE, CorrelationStrength.WEAK_NEGATIVE),
)


# =============================================================================
# VALUE OBJECTS
# =============================================================================


@dataclass(frozen=True)
class RegressionLine:
    """Линия регрессии y = slope·x + intercept."""

    slope: float
    intercept: float

    def predict(self, x: float) -> float:
        """Прогноз y по x."""
        return self.slope * x + self.intercept


@dataclass(frozen=True)
class SignificanceTest:
    """Проверка гипотезы r = 0 (t-тест Стьюдента)."""

    t_statistic: float | None
    degrees_of_freedom: int
    p_value: float
    p_value_label: str
    is_significant: bool


# =============================================================================
# CORE FUNCTIONS
# =============================================================================


def _is_degenerate(spread: float, values: Sequence[float]) -> bool:
    """
    Разброс пренебрежимо мал относительно масштаба данных.

    Порог относительный: Σ(x - x̄)² сравнивается с ε·Σx².
    """
    return spread <= EPS_CALC * math.fsum(v * v for v in values)


def pearson_r(x: Sequence[float], y: Sequence[float]) -> float | None:
    """
    Коэффициент корреляции Пирсона.

    Returns:
        r в [-1, 1] или None, если длины различаются, n < 2 или данные константны
    """
    n = len(x)
    if n < 2 or n != len(y):
        return None

    mean_x = math.fsum(x) / n
    mean_y = math.fsum(y) / n
    sxx = math.fsum((xi - mean_x) ** 2 for xi in x)
    syy = math.fsum((yi - mean_y) ** 2 for yi in y)
    sxy = math.fsum((xi - mean_x) * (yi - mean_y) for xi, yi in zip(x, y))

    if _is_degenerate(sxx, x) or _is_degenerate(syy, y):
        return None

    r = sxy / (math.sqrt(sxx) * math.sqrt(syy))
    return max(-1.0, min(1.0, r))


def linear_regression(x: Sequence[float], y: Sequence[float]) -> RegressionLine | None:
    """
    Линейная регрессия методом наименьших квадратов.

    При Sxx = 0: slope = 0, intercept = ȳ.
    """
    n = len(x)
    if n < 1 or n != len(y):
        return None

    mean_x = math.fsum(x) / n
    mean_y = math.fsum(y) / n
    sxx = math.fsum((xi - mean_x) ** 2 for xi in x)
    sxy = math.fsum((xi - mean_x) * (yi - mean_y) for xi, yi in zip(x, y))

    if _is_degenerate(sxx, x):
        return RegressionLine(slope=0.0, intercept=mean_y)

    slope = sxy / sxx
    return RegressionLine(slope=slope, intercept=mean_y - slope * mean_x)


def classify_strength(r: float) -> CorrelationStrength:
    """
    Категория силы связи по r.

    Examples:
        >>> classify_strength(0.85)
        <CorrelationStrength.STRONG_POSITIVE: 'strong_positive'>
        >>> classify_strength(-0.1)
        <CorrelationStrength.NEGLIGIBLE: 'negligible'>
    """
    magnitude = abs(r)
    for threshold, positive, negative in _STRENGTH_BANDS:
        if magnitude >= threshold:
            return positive if r > 0 else negative
    return CorrelationStrength.NEGLIGIBLE


def classify_direction(r: float) -> CorrelationDirection:
    """Направление связи по знаку r."""
    if abs(r) < NO_DIRECTION_THRESHOLD:
        return CorrelationDirection.NONE
    return CorrelationDirection.POSITIVE if r > 0 else CorrelationDirection.NEGATIVE


def p_value_label(p_value: float) -> str:
    """Интервальная метка p-value для отображения."""
    if p_value < 0.001:
        return "< 0.001"
    if p_value < 0.01:
        return "< 0.01"
    if p_value < 0.05:
        return "< 0.05"
    return "> 0.05"


def significance_test(r: float, n: int, alpha: float = SIGNIFICANCE_ALPHA) -> SignificanceTest | None:
    """
    t-тест значимости коэффициента корреляции.

    Args:
        r: Коэффициент корреляции
        n: Число пар
        alpha: Уровень значимости

    Returns:
        SignificanceTest или None при n < 3
    """
    df = n - 2
    if df < 1:
        return None

    r_squared = r * r
    if r_squared >= 1.0 - EPS_CALC:
        return SignificanceTest(
            t_statistic=None,
            degrees_of_freedom=df,
            p_value=0.0,
            p_value_label=p_value_label(0.0),
            is_significant=True,
        )

    t = r * math.sqrt(df / (1.0 - r_squared))
    p = float(2.0 * stats.t.sf(abs(t), df))

    return SignificanceTest(
        t_statistic=t,
        degrees_of_freedom=df,
        p_value=p,
        p_value_label=p_value_label(p),
        is_significant=p < alpha,
    )


# =============================================================================
# CALCULATOR
# =============================================================================


@dataclass(frozen=True)
class CorrelationConfig:
    """Конфигурация калькулятора корреляции."""

    precision: int = SCIENTIFIC_DECIMALS
    alpha: float = SIGNIFICANCE_ALPHA


@dataclass(frozen=True)
class CorrelationResult:
    """Результат калькулятора корреляции (округлённый)."""

    n: int
    r: float
    r_squared: float
    strength: CorrelationStrength
    direction: CorrelationDirection
    mean_x: float
    mean_y: float
    std_dev_x: float
    std_dev_y: float
    covariance: float
    regression: RegressionLine
    significance: SignificanceTest | None
    sum_x: float
    sum_y: float
    sum_xy: float
    sum_x2: float
    sum_y2: float


class CorrelationInput(CalculationInput):
    """Вход: значения X и Y (списками или текстом)."""

    x_values: list[float] | None = None
    y_values: list[float] | None = None
    x_input: str | None = None
    y_input: str | None = None


class CorrelationCalculator(Calculator[CorrelationInput, CorrelationResult]):
    """Корреляция Пирсона, регрессия и t-тест значимости."""

    name = "correlation"
    input_model = CorrelationInput

    def __init__(self, config: CorrelationConfig | None = None):
        self.config = config or CorrelationConfig()

    def validate(self, inputs: CorrelationInput) -> ValidationResult:
        collector = ValidationCollector()
        collector = check_dataset(collector, "x_values", inputs.x_values, inputs.x_input, min_count=2)
        collector = check_dataset(collector, "y_values", inputs.y_values, inputs.y_input, min_count=2)

        if collector.has_error("x_values") or collector.has_error("y_values"):
            return collector.result()

        x = resolve_dataset(inputs.x_values, inputs.x_input).values
        y = resolve_dataset(inputs.y_values, inputs.y_input).values

        if len(x) != len(y):
            return collector.add(
                "y_values",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                f"X and Y must have the same number of values ({len(x)} vs {len(y)})",
            ).result()

        if len(set(x)) == 1:
            collector = collector.add(
                "x_values",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                "All X values are identical; correlation is undefined",
            )
        if len(set(y)) == 1:
            collector = collector.add(
                "y_values",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                "All Y values are identical; correlation is undefined",
            )

        if len(x) < SMALL_SAMPLE_SIZE:
            collector = collector.warn(
                "x_values",
                "small_sample",
                f"Small sample size ({len(x)}). Results may not be reliable.",
            )

        return collector.result()

    def compute(self, inputs: CorrelationInput) -> CorrelationResult | None:
        x = resolve_dataset(inputs.x_values, inputs.x_input).values
        y = resolve_dataset(inputs.y_values, inputs.y_input).values

        r = pearson_r(x, y)
        regression = linear_regression(x, y)
        if r is None or regression is None:
            return None

        p = self.config.precision
        n = len(x)
        mean_x = math.fsum(x) / n
        mean_y = math.fsum(y) / n
        sxx = math.fsum((xi - mean_x) ** 2 for xi in x)
        syy = math.fsum((yi - mean_y) ** 2 for yi in y)
        sxy = math.fsum((xi - mean_x) * (yi - mean_y) for xi, yi in zip(x, y))

        rounded_r = round_half_up(r, p)
        significance = significance_test(r, n, self.config.alpha)
        if significance is not None and significance.t_statistic is not None:
            significance = SignificanceTest(
                t_statistic=round_half_up(significance.t_statistic, p),
                degrees_of_freedom=significance.degrees_of_freedom,
                p_value=round_half_up(significance.p_value, 6),
                p_value_label=significance.p_value_label,
                is_significant=significance.is_significant,
            )

        return CorrelationResult(
            n=n,
            r=rounded_r,
            r_squared=round_half_up(r * r, p),
            strength=classify_strength(rounded_r),
            direction=classify_direction(rounded_r),
            mean_x=round_half_up(mean_x, p),
            mean_y=round_half_up(mean_y, p),
            std_dev_x=round_half_up(math.sqrt(sxx / (n - 1)), p),
            std_dev_y=round_half_up(math.sqrt(syy / (n - 1)), p),
            covariance=round_half_up(sxy / (n - 1), p),
            regression=RegressionLine(
                slope=round_half_up(regression.slope, p),
                intercept=round_half_up(regression.intercept, p),
            ),
            significance=significance,
            sum_x=round_half_up(math.fsum(x), p),
            sum_y=round_half_up(math.fsum(y), p),
            sum_xy=round_half_up(math.fsum(xi * yi for xi, yi in zip(x, y)), p),
            sum_x2=round_half_up(math.fsum(xi * xi for xi in x), p),
            sum_y2=round_half_up(math.fsum(yi * yi for yi in y), p),
        )
