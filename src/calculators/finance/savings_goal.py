"""
Savings Goal — Накопление к целевой сумме

ФОРМУЛЫ (r = rate / 100 / m, m — взносов в год, n = years × m):
    FV  = PV × (1 + r)^n + PMT × ((1 + r)^n - 1) / r
    PMT = (FV - PV × (1 + r)^n) × r / ((1 + r)^n - 1)      (0, если PV уже хватает)
    n   = ln((FV·r + PMT) / (PV·r + PMT)) / ln(1 + r)
    n   = (FV - PV) / PMT                                  при r = 0

Режимы:
- required_deposit: размер регулярного взноса для достижения цели за years
- time_to_goal: сколько месяцев копить при заданном взносе
- final_balance: итог при заданном взносе и сроке

Капитализация совпадает с частотой взносов; взнос вносится в конце периода
после начисления процентов. Годовая разбивка строится той же симуляцией,
что и у сложного процента (project_balance).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. total_deposits включает текущие накопления
2. total_interest = final_balance - total_deposits
3. months_to_goal округляется вверх
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping

from src.calculators.base import CalculationInput, Calculator
from src.calculators.finance.compound_interest import YearlyBreakdown, project_balance
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
    check_choice,
    check_number,
)
from src.core.math.compounding import future_value_annuity, growth_factor, periodic_rate
from src.core.math.numerical_safeguards import (
    EPS_CALC,
    MONEY_DECIMALS,
    PERCENT_DECIMALS,
    round_half_up,
    safe_divide,
)

MONTHS_PER_YEAR: Final[int] = 12

# Допуск при округлении числа периодов вверх (59.9999999 → 60)
PERIOD_CEIL_TOLERANCE: Final[float] = 1e-9


# =============================================================================
# ENUMS & TABLES
# =============================================================================


class SavingsGoalMode(str, Enum):
    """Искомая величина"""

    REQUIRED_DEPOSIT = "required_deposit"
    TIME_TO_GOAL = "time_to_goal"
    FINAL_BALANCE = "final_balance"


class DepositFrequency(str, Enum):
    """Частота взносов (и капитализации)"""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"


DEPOSITS_PER_YEAR: Final[Mapping[DepositFrequency, int]] = MappingProxyType(
    {
        DepositFrequency.WEEKLY: 52,
        DepositFrequency.BIWEEKLY: 26,
        DepositFrequency.MONTHLY: 12,
        DepositFrequency.QUARTERLY: 4,
        DepositFrequency.ANNUALLY: 1,
    }
)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SavingsGoalConfig:
    """Конфигурация калькулятора накоплений."""

    money_decimals: int = MONEY_DECIMALS
    percent_decimals: int = PERCENT_DECIMALS
    max_goal: float = 1e8
    max_rate: float = 50.0
    max_years: int = 100
    max_deposit: float = 1e7


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class SavingsGoalResult:
    """Результат калькулятора накоплений."""

    mode: SavingsGoalMode
    deposits_per_year: int
    # required_deposit
    required_deposit: float | None
    # time_to_goal
    months_to_goal: int | None
    years_to_goal: float | None
    final_balance: float
    total_deposits: float
    total_interest: float
    # Доля процентов в итоговом балансе (%)
    interest_percentage: float
    yearly_breakdown: tuple[YearlyBreakdown, ...]


# =============================================================================
# CORE FUNCTIONS
# =============================================================================


def savings_balance(
    current_savings: float,
    rate_per_period: float,
    periods: float,
    deposit: float,
) -> float:
    """
    Баланс после periods взносов: PV × (1 + r)^n + FV аннуитета.

    Examples:
        >>> round(savings_balance(1000.0, 0.005, 12, 100.0), 2)
        2295.23
    """
    return current_savings * growth_factor(rate_per_period, periods) + future_value_annuity(
        deposit, rate_per_period, periods
    )


def required_deposit(
    goal: float,
    current_savings: float,
    rate_per_period: float,
    periods: float,
) -> float:
    """
    Регулярный взнос, при котором через periods периодов баланс равен goal.

    Args:
        goal: Целевая сумма
        current_savings: Текущие накопления
        rate_per_period: Ставка за период (доля)
        periods: Число взносов (> 0)

    Returns:
        Размер взноса; 0.0, если текущих накоплений с процентами хватает

    Examples:
        >>> round(required_deposit(10000.0, 0.0, 0.0, 10), 2)
        1000.0
    """
    remaining = goal - current_savings * growth_factor(rate_per_period, periods)
    if remaining <= 0:
        return 0.0
    return remaining / future_value_annuity(1.0, rate_per_period, periods)


def periods_to_goal(
    goal: float,
    current_savings: float,
    rate_per_period: float,
    deposit: float,
) -> float | None:
    """
    Число периодов (дробное) до достижения goal при взносе deposit.

    Returns:
        Периоды; 0.0, если цель уже достигнута; None, если цель недостижима
        (нулевой взнос без процентов)
    """
    if current_savings >= goal:
        return 0.0
    if abs(rate_per_period) < EPS_CALC:
        return safe_divide(goal - current_savings, deposit, fallback=None)

    numerator = goal * rate_per_period + deposit
    denominator = current_savings * rate_per_period + deposit
    if denominator <= 0:
        return None
    return math.log(numerator / denominator) / math.log1p(rate_per_period)


def convert_deposit(
    amount: float,
    from_frequency: DepositFrequency,
    to_frequency: DepositFrequency,
) -> float:
    """
    Пересчёт взноса между частотами при равной годовой сумме.

    Examples:
        >>> convert_deposit(100.0, DepositFrequency.MONTHLY, DepositFrequency.ANNUALLY)
        1200.0
    """
    annual = amount * DEPOSITS_PER_YEAR[from_frequency]
    return annual / DEPOSITS_PER_YEAR[to_frequency]


def _ceil_periods(value: float) -> int:
    return math.ceil(value - PERIOD_CEIL_TOLERANCE)


# =============================================================================
# CALCULATOR
# =============================================================================


class SavingsGoalInput(CalculationInput):
    """Вход: {mode, savings_goal, current_savings, annual_rate, years, deposit_*}."""

    mode: SavingsGoalMode = SavingsGoalMode.REQUIRED_DEPOSIT
    savings_goal: float | None = None
    current_savings: float | None = None
    annual_rate: float | None = None
    years: float | None = None
    deposit_amount: float | None = None
    deposit_frequency: DepositFrequency | None = DepositFrequency.MONTHLY


class SavingsGoalCalculator(Calculator[SavingsGoalInput, SavingsGoalResult]):
    """Взнос, срок или итог накоплений к целевой сумме."""

    name = "savings_goal"
    input_model = SavingsGoalInput

    def __init__(self, config: SavingsGoalConfig | None = None):
        """Инициализация калькулятора.

        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or SavingsGoalConfig()

    def validate(self, inputs: SavingsGoalInput) -> ValidationResult:
        cfg = self.config
        mode = inputs.mode
        collector = ValidationCollector()

        if mode != SavingsGoalMode.FINAL_BALANCE:
            collector = check_number(
                collector,
                "savings_goal",
                inputs.savings_goal,
                label="Savings goal",
                min_value=0.0,
                min_exclusive=True,
                max_value=cfg.max_goal,
            )

        collector = check_number(
            collector,
            "current_savings",
            inputs.current_savings,
            label="Current savings",
            required=False,
            min_value=0.0,
            max_value=cfg.max_goal,
        )
        collector = check_number(
            collector,
            "annual_rate",
            inputs.annual_rate,
            label="Interest rate",
            min_value=0.0,
            max_value=cfg.max_rate,
        )

        if mode != SavingsGoalMode.TIME_TO_GOAL:
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

        if mode != SavingsGoalMode.REQUIRED_DEPOSIT:
            collector = check_number(
                collector,
                "deposit_amount",
                inputs.deposit_amount,
                label="Deposit amount",
                min_value=0.0,
                min_exclusive=True,
                max_value=cfg.max_deposit,
            )

        collector = check_choice(
            collector,
            "deposit_frequency",
            inputs.deposit_frequency,
            [f.value for f in DepositFrequency],
            label="Deposit frequency",
        )

        if (
            mode == SavingsGoalMode.TIME_TO_GOAL
            and not collector.has_error("savings_goal")
            and not collector.has_error("current_savings")
            and (inputs.current_savings or 0.0) >= inputs.savings_goal
        ):
            collector = collector.add(
                "current_savings",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                "You have already reached your savings goal",
            )

        if (
            mode == SavingsGoalMode.REQUIRED_DEPOSIT
            and not collector.has_error("savings_goal")
            and not collector.has_error("current_savings")
            and (inputs.current_savings or 0.0) >= inputs.savings_goal
        ):
            collector = collector.warn(
                "current_savings",
                "goal_already_reached",
                "Current savings already cover the goal; no deposits are required",
            )

        return collector.result()

    def compute(self, inputs: SavingsGoalInput) -> SavingsGoalResult | None:
        cfg = self.config
        mode = inputs.mode
        per_year = DEPOSITS_PER_YEAR[inputs.deposit_frequency]
        rate = periodic_rate(inputs.annual_rate, per_year)
        current = inputs.current_savings or 0.0

        deposit_value = None
        months = None
        years_to_goal = None

        if mode == SavingsGoalMode.TIME_TO_GOAL:
            deposit = inputs.deposit_amount
            raw_periods = periods_to_goal(inputs.savings_goal, current, rate, deposit)
            if raw_periods is None:
                return None
            periods = _ceil_periods(raw_periods)
            months = _ceil_periods(raw_periods / per_year * MONTHS_PER_YEAR)
            years_to_goal = round_half_up(raw_periods / per_year, cfg.percent_decimals)
            breakdown_years = min(_ceil_periods(raw_periods / per_year), cfg.max_years)
        else:
            breakdown_years = int(inputs.years)
            periods = breakdown_years * per_year
            if mode == SavingsGoalMode.REQUIRED_DEPOSIT:
                deposit = required_deposit(inputs.savings_goal, current, rate, periods)
                deposit_value = round_half_up(deposit, cfg.money_decimals)
            else:
                deposit = inputs.deposit_amount

        final_balance = round_half_up(
            savings_balance(current, rate, periods, deposit), cfg.money_decimals
        )
        total_deposits = round_half_up(current + deposit * periods, cfg.money_decimals)
        total_interest = round_half_up(final_balance - total_deposits, cfg.money_decimals)
        interest_share = safe_divide(total_interest * 100.0, final_balance, fallback=0.0)

        breakdown = project_balance(
            principal=current,
            annual_rate_pct=inputs.annual_rate,
            years=breakdown_years,
            periods_per_year=per_year,
            contribution_amount=deposit,
            contributions_per_year=per_year,
            money_decimals=cfg.money_decimals,
        )

        return SavingsGoalResult(
            mode=mode,
            deposits_per_year=per_year,
            required_deposit=deposit_value,
            months_to_goal=months,
            years_to_goal=years_to_goal,
            final_balance=final_balance,
            total_deposits=total_deposits,
            total_interest=total_interest,
            interest_percentage=round_half_up(interest_share, cfg.percent_decimals),
            yearly_breakdown=breakdown,
        )
