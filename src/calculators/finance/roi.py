"""
ROI — Return on Investment и годовая доходность (CAGR)

ФОРМУЛЫ:
    ROI = (final - initial) / initial × 100
    CAGR = ((final / initial)^(1/years) - 1) × 100        (years >= 1)
    annualized = ROI / years                              (0 < years < 1)

Граничные случаи:
- final == 0 → полная потеря, annualized = -100 без возведения в степень
- initial == 0 → domain-precondition-violated (ROI не определён)
- initial < 0 → out-of-range

Категории доходности (по ROI, %):
    < -50 significant-loss, < -5 loss, < 5 break-even, < 15 low,
    < 50 moderate, < 100 high, иначе exceptional
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
from src.core.math.compounding import cagr
from src.core.math.numerical_safeguards import (
    MONEY_DECIMALS,
    PERCENT_DECIMALS,
    round_half_up,
    safe_divide,
)

# Верхняя граница сумм
MAX_AMOUNT: Final[float] = 1e12
MAX_PERIOD_YEARS: Final[float] = 100.0


class ROICategory(str, Enum):
    """Категория доходности"""

    SIGNIFICANT_LOSS = "significant-loss"
    LOSS = "loss"
    BREAK_EVEN = "break-even"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    EXCEPTIONAL = "exceptional"


# (верхняя граница, категория), проверяются по порядку
ROI_BANDS: Final[tuple[tuple[float, ROICategory], ...]] = (
    (-50.0, ROICategory.SIGNIFICANT_LOSS),
    (-5.0, ROICategory.LOSS),
    (5.0, ROICategory.BREAK_EVEN),
    (15.0, ROICategory.LOW),
    (50.0, ROICategory.MODERATE),
    (100.0, ROICategory.HIGH),
)


# =============================================================================
# CORE FUNCTIONS
# =============================================================================


def basic_roi(initial: float, final: float) -> float:
    """
    ROI в процентах.

    Examples:
        >>> basic_roi(10000.0, 12500.0)
        25.0
    """
    return safe_divide(final - initial, initial) * 100.0


def annualized_roi(initial: float, final: float, years: float) -> float | None:
    """
    Годовая доходность в процентах.

    Для периода меньше года простой ROI экстраполируется линейно,
    для final == 0 возвращается -100.

    Returns:
        Доходность или None если years <= 0 / initial <= 0
    """
    if initial <= 0 or years <= 0:
        return None
    if final <= 0:
        return -100.0
    if years < 1:
        return basic_roi(initial, final) / years
    return cagr(initial, final, years)


def categorize_roi(roi: float) -> ROICategory:
    """Категория по ROI (%)."""
    for upper, category in ROI_BANDS:
        if roi < upper:
            return category
    return ROICategory.EXCEPTIONAL


def target_final_value(initial: float, target_roi_pct: float) -> float:
    """Конечная стоимость, дающая целевой ROI."""
    return round_half_up(initial * (1.0 + target_roi_pct / 100.0), MONEY_DECIMALS)


# =============================================================================
# CALCULATOR
# =============================================================================


@dataclass(frozen=True)
class ROIConfig:
    """Конфигурация калькулятора ROI."""

    money_decimals: int = MONEY_DECIMALS
    percent_decimals: int = PERCENT_DECIMALS


@dataclass(frozen=True)
class ROIResult:
    """Результат калькулятора ROI."""

    roi: float
    # final - initial
    net_profit: float
    # final / initial
    gain_multiple: float
    annualized_roi: float | None
    total_invested: float
    category: ROICategory
    # Конечная стоимость для target_roi (если задан)
    target_final_value: float | None


class ROIInput(CalculationInput):
    """Вход: {initial_investment, final_value, investment_period_years?, target_roi?}."""

    initial_investment: float | None = None
    final_value: float | None = None
    investment_period_years: float | None = None
    target_roi: float | None = None


class ROICalculator(Calculator[ROIInput, ROIResult]):
    """Доходность вложения и её годовой эквивалент."""

    name = "roi"
    input_model = ROIInput

    def __init__(self, config: ROIConfig | None = None):
        self.config = config or ROIConfig()

    def validate(self, inputs: ROIInput) -> ValidationResult:
        collector = ValidationCollector()

        if inputs.initial_investment is not None and inputs.initial_investment == 0:
            collector = collector.add(
                "initial_investment",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                "Initial investment cannot be zero",
            )
        else:
            collector = check_number(
                collector,
                "initial_investment",
                inputs.initial_investment,
                label="Initial investment",
                min_value=0.0,
                max_value=MAX_AMOUNT,
            )

        collector = check_number(
            collector,
            "final_value",
            inputs.final_value,
            label="Final value",
            min_value=0.0,
            max_value=MAX_AMOUNT,
        )
        collector = check_number(
            collector,
            "investment_period_years",
            inputs.investment_period_years,
            label="Investment period",
            required=False,
            min_value=0.0,
            max_value=MAX_PERIOD_YEARS,
        )
        collector = check_number(
            collector,
            "target_roi",
            inputs.target_roi,
            label="Target ROI",
            required=False,
            min_value=-100.0,
        )

        return collector.result()

    def compute(self, inputs: ROIInput) -> ROIResult | None:
        cfg = self.config
        initial, final = inputs.initial_investment, inputs.final_value

        roi = round_half_up(basic_roi(initial, final), cfg.percent_decimals)

        annualized = None
        years = inputs.investment_period_years
        if years is not None and years > 0:
            raw = annualized_roi(initial, final, years)
            annualized = round_half_up(raw, cfg.percent_decimals) if raw is not None else None

        return ROIResult(
            roi=roi,
            net_profit=round_half_up(final - initial, cfg.money_decimals),
            gain_multiple=round_half_up(final / initial, cfg.percent_decimals + 2),
            annualized_roi=annualized,
            total_invested=initial,
            category=categorize_roi(roi),
            target_final_value=(
                target_final_value(initial, inputs.target_roi)
                if inputs.target_roi is not None
                else None
            ),
        )
