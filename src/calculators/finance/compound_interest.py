"""
Compound Interest — Сложный процент с регулярными взносами

ФОРМУЛЫ:
    A = P × (1 + r/n)^(n·t)
    APY = ((1 + r/n)^n - 1) × 100
    правило 72: t₂ ≈ 72 / rate

Помесячная (по периодам) симуляция при наличии взносов:
    в каждом периоде начисления balance += balance × r/n;
    к концу периода k должно быть внесено floor(k × c / n) взносов
    (c — взносов в год), поэтому взносы распределяются равномерно и
    при c > n (ежемесячные взносы при ежегодной капитализации).

Если взносы кратны периодам капитализации, итог сверяется с замкнутой формой
P × (1 + r/n)^(n·t) + PMT × ((1 + i)^k - 1) / i (closed_form_balance).

Годовая разбивка (начальный баланс, взносы, начисленные проценты, конечный
баланс) округляется до центов; сам баланс переносится между годами без
округления, поэтому 1000 под 5% на 10 лет даёт ровно 1628.89.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. total_contributions включает начальный вклад
2. total_interest = final_balance - total_contributions
3. Деньги округляются half-up до money_decimals
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping

from src.calculators.base import CalculationInput, Calculator
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
    check_choice,
    check_number,
)
from src.core.logging_config import get_logger
from src.core.math.compounding import (
    effective_annual_rate,
    exact_doubling_time,
    future_value,
    future_value_annuity,
    growth_factor,
    periodic_rate,
    required_annual_rate,
    rule_of_72,
)
from src.core.math.numerical_safeguards import (
    MONEY_DECIMALS,
    PERCENT_DECIMALS,
    round_half_up,
)

logger = get_logger(__name__)


# =============================================================================
# ENUMS & TABLES
# =============================================================================


class CompoundingFrequency(str, Enum):
    """Частота капитализации"""

    ANNUALLY = "annually"
    SEMIANNUALLY = "semiannually"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"
    DAILY = "daily"


class ContributionFrequency(str, Enum):
    """Частота регулярных взносов"""

    NONE = "none"
    ANNUALLY = "annually"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"


COMPOUNDING_PERIODS: Final[Mapping[CompoundingFrequency, int]] = MappingProxyType(
    {
        CompoundingFrequency.ANNUALLY: 1,
        CompoundingFrequency.SEMIANNUALLY: 2,
        CompoundingFrequency.QUARTERLY: 4,
        CompoundingFrequency.MONTHLY: 12,
        CompoundingFrequency.DAILY: 365,
    }
)

CONTRIBUTIONS_PER_YEAR: Final[Mapping[ContributionFrequency, int]] = MappingProxyType(
    {
        ContributionFrequency.NONE: 0,
        ContributionFrequency.ANNUALLY: 1,
        ContributionFrequency.QUARTERLY: 4,
        ContributionFrequency.MONTHLY: 12,
    }
)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class CompoundInterestConfig:
    """Конфигурация калькулятора сложного процента."""

    money_decimals: int = MONEY_DECIMALS
    percent_decimals: int = PERCENT_DECIMALS
    max_principal: float = 1e8
    max_rate: float = 100.0
    max_years: int = 100
    max_contribution: float = 1e7


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class YearlyBreakdown:
    """Строка годовой разбивки."""

    year: int
    starting_balance: float
    contributions: float
    interest_earned: float
    ending_balance: float


@dataclass(frozen=True)
class CompoundInterestResult:
    """Результат калькулятора сложного процента."""

    principal: float
    final_balance: float
    total_contributions: float
    total_interest: float
    # Эффективная годовая ставка (%)
    apy: float
    yearly_breakdown: tuple[YearlyBreakdown, ...]
    doubling_time_rule_of_72: float | None
    doubling_time_exact: float | None
    # Ставка, необходимая для достижения target_amount без взносов (%)
    required_rate: float | None
    # Баланс по формуле аннуитета (None, если взносы не кратны периодам)
    closed_form_balance: float | None


# =============================================================================
# CORE FUNCTIONS
# =============================================================================


def project_balance(
    principal: float,
    annual_rate_pct: float,
    years: int,
    periods_per_year: int,
    contribution_amount: float = 0.0,
    contributions_per_year: int = 0,
    money_decimals: int = MONEY_DECIMALS,
) -> tuple[YearlyBreakdown, ...]:
    """
    Годовая разбивка роста баланса.

    Args:
        principal: Начальный вклад
        annual_rate_pct: Годовая номинальная ставка (%)
        years: Срок в годах
        periods_per_year: Периодов капитализации в году
        contribution_amount: Размер регулярного взноса
        contributions_per_year: Взносов в год (0 — без взносов)
        money_decimals: Точность денежных сумм

    Returns:
        Кортеж YearlyBreakdown по годам 1..years
    """
    rate = periodic_rate(annual_rate_pct, periods_per_year)
    has_contributions = contribution_amount > 0 and contributions_per_year > 0

    balance = principal
    rows = []

    for year in range(1, years + 1):
        starting_balance = balance
        yearly_contributions = 0.0
        yearly_interest = 0.0

        if not has_contributions:
            ending = balance * growth_factor(rate, periods_per_year)
            yearly_interest = ending - balance
            balance = ending
        else:
            made = 0
            for period in range(1, periods_per_year + 1):
                interest = balance * rate
                yearly_interest += interest
                balance += interest

                due = (period * contributions_per_year) // periods_per_year
                if due > made:
                    deposit = contribution_amount * (due - made)
                    balance += deposit
                    yearly_contributions += deposit
                    made = due

        rows.append(
            YearlyBreakdown(
                year=year,
                starting_balance=round_half_up(starting_balance, money_decimals),
                contributions=round_half_up(yearly_contributions, money_decimals),
                interest_earned=round_half_up(yearly_interest, money_decimals),
                ending_balance=round_half_up(balance, money_decimals),
            )
        )

    return tuple(rows)


def closed_form_balance(
    principal: float,
    annual_rate_pct: float,
    years: int,
    periods_per_year: int,
    contribution_amount: float = 0.0,
    contributions_per_year: int = 0,
) -> float | None:
    """
    Конечный баланс в замкнутой форме: P × (1 + r/n)^(n·t) + FV аннуитета.

    Совпадает с project_balance, когда взносы кратны периодам капитализации
    (c делит n или n делит c). Иначе None.

    Examples:
        >>> round(closed_form_balance(1000.0, 6.0, 1, 12, 100.0, 12), 2)
        2295.23
    """
    fv = future_value(principal, annual_rate_pct, periods_per_year, years)
    if contribution_amount <= 0 or contributions_per_year <= 0:
        return fv

    rate = periodic_rate(annual_rate_pct, periods_per_year)
    if contributions_per_year % periods_per_year == 0:
        # Несколько взносов внутри периода капитализации
        payment = contribution_amount * (contributions_per_year // periods_per_year)
        return fv + future_value_annuity(payment, rate, periods_per_year * years)
    if periods_per_year % contributions_per_year == 0:
        # Ставка за интервал между взносами
        rate = growth_factor(rate, periods_per_year // contributions_per_year) - 1.0
        return fv + future_value_annuity(contribution_amount, rate, contributions_per_year * years)
    return None


# =============================================================================
# CALCULATOR
# =============================================================================


class CompoundInterestInput(CalculationInput):
    """Вход: {principal, annual_rate, years, compounding_frequency, contribution_*}."""

    principal: float | None = None
    annual_rate: float | None = None
    years: float | None = None
    compounding_frequency: CompoundingFrequency | None = None
    contribution_amount: float | None = None
    contribution_frequency: ContributionFrequency = ContributionFrequency.NONE
    target_amount: float | None = None


class CompoundInterestCalculator(Calculator[CompoundInterestInput, CompoundInterestResult]):
    """Рост вклада со сложным процентом и регулярными взносами."""

    name = "compound_interest"
    input_model = CompoundInterestInput

    def __init__(self, config: CompoundInterestConfig | None = None):
        """Инициализация калькулятора.

        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or CompoundInterestConfig()

    def validate(self, inputs: CompoundInterestInput) -> ValidationResult:
        cfg = self.config
        collector = ValidationCollector()

        if inputs.principal is not None and inputs.principal == 0:
            collector = collector.add(
                "principal",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                "Principal cannot be zero",
            )
        else:
            collector = check_number(
                collector,
                "principal",
                inputs.principal,
                label="Principal",
                min_value=0.0,
                max_value=cfg.max_principal,
            )

        collector = check_number(
            collector,
            "annual_rate",
            inputs.annual_rate,
            label="Interest rate",
            min_value=0.0,
            max_value=cfg.max_rate,
        )
        collector = check_number(
            collector,
            "years",
            inputs.years,
            label="Years",
            min_value=0.0,
            min_exclusive=True,
            max_value=cfg.max_years,
            whole=True,
        )
        collector = check_choice(
            collector,
            "compounding_frequency",
            inputs.compounding_frequency,
            [f.value for f in CompoundingFrequency],
            label="Compounding frequency",
        )
        collector = check_number(
            collector,
            "contribution_amount",
            inputs.contribution_amount,
            label="Contribution",
            required=False,
            min_value=0.0,
            max_value=cfg.max_contribution,
        )
        collector = check_number(
            collector,
            "target_amount",
            inputs.target_amount,
            label="Target amount",
            required=False,
            min_value=0.0,
            min_exclusive=True,
        )

        if (
            inputs.contribution_amount
            and inputs.contribution_frequency == ContributionFrequency.NONE
            and not collector.has_error("contribution_amount")
        ):
            collector = collector.warn(
                "contribution_frequency",
                "contribution_ignored",
                "Contribution amount is ignored without a contribution frequency",
            )

        return collector.result()

    def compute(self, inputs: CompoundInterestInput) -> CompoundInterestResult | None:
        cfg = self.config
        n = COMPOUNDING_PERIODS[inputs.compounding_frequency]
        contributions_per_year = CONTRIBUTIONS_PER_YEAR[inputs.contribution_frequency]
        contribution = inputs.contribution_amount or 0.0
        years = int(inputs.years)

        breakdown = project_balance(
            principal=inputs.principal,
            annual_rate_pct=inputs.annual_rate,
            years=years,
            periods_per_year=n,
            contribution_amount=contribution,
            contributions_per_year=contributions_per_year,
            money_decimals=cfg.money_decimals,
        )
        if not breakdown:
            return None

        final_balance = breakdown[-1].ending_balance
        closed_form = closed_form_balance(
            principal=inputs.principal,
            annual_rate_pct=inputs.annual_rate,
            years=years,
            periods_per_year=n,
            contribution_amount=contribution,
            contributions_per_year=contributions_per_year,
        )
        if closed_form is not None:
            closed_form = round_half_up(closed_form, cfg.money_decimals)
            if abs(closed_form - final_balance) > 10 ** -cfg.money_decimals:
                logger.warning(
                    "closed_form_mismatch",
                    calculator=self.name,
                    simulated=final_balance,
                    closed_form=closed_form,
                )

        total_contributions = round_half_up(
            inputs.principal + math.fsum(row.contributions for row in breakdown),
            cfg.money_decimals,
        )

        required_rate = None
        if inputs.target_amount is not None:
            raw = required_annual_rate(inputs.principal, inputs.target_amount, years, n)
            required_rate = round_half_up(raw, cfg.percent_decimals) if raw is not None else None

        rule72 = rule_of_72(inputs.annual_rate)
        exact = exact_doubling_time(inputs.annual_rate, n)

        return CompoundInterestResult(
            principal=inputs.principal,
            final_balance=final_balance,
            total_contributions=total_contributions,
            total_interest=round_half_up(final_balance - total_contributions, cfg.money_decimals),
            apy=round_half_up(effective_annual_rate(inputs.annual_rate, n), cfg.percent_decimals),
            yearly_breakdown=breakdown,
            doubling_time_rule_of_72=(
                round_half_up(rule72, cfg.percent_decimals) if rule72 is not None else None
            ),
            doubling_time_exact=(
                round_half_up(exact, cfg.percent_decimals) if exact is not None else None
            ),
            required_rate=required_rate,
            closed_form_balance=closed_form,
        )
