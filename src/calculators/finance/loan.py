"""
Loan — Аннуитетный платёж и график погашения

ФОРМУЛЫ:
    P = L × r(1+r)^n / ((1+r)^n - 1)       r = rate / 100 / ppy
    P = L / n                              при rate = 0
    n = round(term_months × ppy / 12)

Периодов в году: monthly 12, biweekly 365/14, weekly 365/7.

График погашения округляется до центов на каждом шаге; последний платёж
закрывает остаток полностью (баланс ровно 0).

Эффективная ставка учитывает комиссии: IRR потока
    -(L - origination - other) + Σ (P + fees_per_period) / (1+i)^t
находится методом Брента (scipy.optimize.brentq) и приводится к годовой:
    effective = ((1 + i)^ppy - 1) × 100
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping

from scipy.optimize import brentq

from src.calculators.base import CalculationInput, Calculator
from src.core.domain.validation import (
    ValidationCollector,
    ValidationResult,
    check_choice,
    check_number,
)
from src.core.math.compounding import (
    effective_annual_rate,
    growth_factor,
    nominal_from_effective,
    periodic_rate,
)
from src.core.math.numerical_safeguards import (
    EPS_CALC,
    MONEY_DECIMALS,
    PERCENT_DECIMALS,
    round_half_up,
)

MAX_LOAN_AMOUNT: Final[float] = 1e8
MAX_RATE_PCT: Final[float] = 100.0
MAX_TERM_MONTHS: Final[int] = 600
MAX_ORIGINATION_FEE_PCT: Final[float] = 20.0

# Интервал поиска периодической IRR
IRR_LOWER: Final[float] = -0.1
IRR_UPPER: Final[float] = 10.0


class PaymentFrequency(str, Enum):
    """Частота платежей"""

    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"
    WEEKLY = "weekly"


class RateType(str, Enum):
    """Как задана ставка: номинальная (TIN) или эффективная (APR/TAE)"""

    NOMINAL = "nominal"
    APR = "apr"


PERIODS_PER_YEAR: Final[Mapping[PaymentFrequency, float]] = MappingProxyType(
    {
        PaymentFrequency.MONTHLY: 12.0,
        PaymentFrequency.BIWEEKLY: 365.0 / 14.0,
        PaymentFrequency.WEEKLY: 365.0 / 7.0,
    }
)


# =============================================================================
# CORE FUNCTIONS
# =============================================================================


def total_periods(term_months: float, periods_per_year: float) -> int:
    """Число платежей за срок в месяцах."""
    return int(round_half_up(term_months * periods_per_year / 12.0, 0))


def periodic_payment(
    principal: float,
    annual_rate_pct: float,
    periods: int,
    periods_per_year: float,
) -> float:
    """
    Аннуитетный платёж (не округлённый).

    Examples:
        >>> periodic_payment(12000.0, 0.0, 12, 12.0)
        1000.0
    """
    if principal <= 0 or periods <= 0:
        return 0.0
    if annual_rate_pct == 0:
        return principal / periods

    rate = periodic_rate(annual_rate_pct, periods_per_year)
    factor = growth_factor(rate, periods)
    return principal * rate * factor / (factor - 1.0)


@dataclass(frozen=True)
class AmortizationRow:
    """Строка графика погашения."""

    period: int
    payment: float
    principal: float
    interest: float
    balance: float


def amortization_schedule(
    principal: float,
    annual_rate_pct: float,
    periods: int,
    periods_per_year: float,
    payment: float,
    money_decimals: int = MONEY_DECIMALS,
) -> tuple[AmortizationRow, ...]:
    """
    График погашения с округлением до центов.

    Последний платёж (или первый, после которого остаток < 1 цента)
    гасит остаток полностью.
    """
    rate = periodic_rate(annual_rate_pct, periods_per_year)
    cent = 10.0 ** -money_decimals
    balance = principal
    rows = []

    for period in range(1, periods + 1):
        interest = round_half_up(balance * rate, money_decimals)
        principal_part = round_half_up(payment - interest, money_decimals)

        if period == periods or balance - principal_part < cent:
            principal_part = round_half_up(balance, money_decimals)
            balance = 0.0
        else:
            balance = round_half_up(balance - principal_part, money_decimals)

        rows.append(
            AmortizationRow(
                period=period,
                payment=round_half_up(interest + principal_part, money_decimals),
                principal=principal_part,
                interest=interest,
                balance=balance,
            )
        )
        if balance <= 0:
            break

    return tuple(rows)


def annuity_present_value(payment: float, rate: float, periods: int) -> float:
    """Приведённая стоимость n равных платежей при ставке rate за период."""
    if abs(rate) < EPS_CALC:
        return payment * periods
    return payment * (1.0 - growth_factor(rate, -periods)) / rate


def effective_rate_with_fees(
    net_amount: float,
    payment_with_fees: float,
    periods: int,
    periods_per_year: float,
) -> float | None:
    """
    Эффективная годовая ставка (%) с учётом комиссий.

    Args:
        net_amount: Сумма, фактически полученная заёмщиком
        payment_with_fees: Периодический платёж вместе с периодическими комиссиями
        periods: Число платежей
        periods_per_year: Платежей в году

    Returns:
        Ставка в процентах или None если IRR не найдена на интервале
    """
    if net_amount <= 0 or payment_with_fees <= 0 or periods <= 0:
        return None

    def npv(rate: float) -> float:
        return annuity_present_value(payment_with_fees, rate, periods) - net_amount

    try:
        irr = brentq(npv, IRR_LOWER, IRR_UPPER)
    except (ValueError, OverflowError):
        return None

    return (growth_factor(irr, periods_per_year) - 1.0) * 100.0


# =============================================================================
# CALCULATOR
# =============================================================================


@dataclass(frozen=True)
class LoanConfig:
    """Конфигурация калькулятора кредита."""

    money_decimals: int = MONEY_DECIMALS
    percent_decimals: int = PERCENT_DECIMALS


@dataclass(frozen=True)
class LoanResult:
    """Результат калькулятора кредита."""

    periodic_payment: float
    payment_frequency: PaymentFrequency
    periods_per_year: float
    total_periods: int
    total_payment: float
    total_interest: float
    total_fees: float
    nominal_rate: float
    # Эффективная ставка без комиссий (APR от номинальной)
    annual_percentage_rate: float
    # Эффективная ставка с комиссиями (None если не определена)
    effective_rate: float | None
    amortization_schedule: tuple[AmortizationRow, ...]


class LoanInput(CalculationInput):
    """Вход: {loan_amount, interest_rate, loan_term (мес.), payment_frequency, fees?}."""

    loan_amount: float | None = None
    interest_rate: float | None = None
    loan_term: float | None = None
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    rate_type: RateType = RateType.NOMINAL
    # Комиссия за выдачу (% от суммы)
    origination_fee: float | None = None
    monthly_fee: float | None = None
    insurance_cost: float | None = None
    other_fees: float | None = None


class LoanCalculator(Calculator[LoanInput, LoanResult]):
    """Аннуитетный кредит: платёж, переплата, график, эффективная ставка."""

    name = "loan"
    input_model = LoanInput

    def __init__(self, config: LoanConfig | None = None):
        self.config = config or LoanConfig()

    def validate(self, inputs: LoanInput) -> ValidationResult:
        collector = ValidationCollector()

        collector = check_number(
            collector,
            "loan_amount",
            inputs.loan_amount,
            label="Loan amount",
            min_value=0.0,
            min_exclusive=True,
            max_value=MAX_LOAN_AMOUNT,
        )
        collector = check_number(
            collector,
            "interest_rate",
            inputs.interest_rate,
            label="Interest rate",
            min_value=0.0,
            max_value=MAX_RATE_PCT,
        )
        collector = check_number(
            collector,
            "loan_term",
            inputs.loan_term,
            label="Loan term",
            min_value=1.0,
            max_value=MAX_TERM_MONTHS,
            whole=True,
        )
        collector = check_choice(
            collector,
            "payment_frequency",
            inputs.payment_frequency,
            [f.value for f in PaymentFrequency],
            label="Payment frequency",
        )
        collector = check_number(
            collector,
            "origination_fee",
            inputs.origination_fee,
            label="Origination fee",
            required=False,
            min_value=0.0,
            max_value=MAX_ORIGINATION_FEE_PCT,
        )
        for field_name, label in (
            ("monthly_fee", "Monthly fee"),
            ("insurance_cost", "Insurance cost"),
            ("other_fees", "Other fees"),
        ):
            collector = check_number(
                collector,
                field_name,
                getattr(inputs, field_name),
                label=label,
                required=False,
                min_value=0.0,
            )

        return collector.result()

    def compute(self, inputs: LoanInput) -> LoanResult | None:
        cfg = self.config
        ppy = PERIODS_PER_YEAR[inputs.payment_frequency]
        periods = total_periods(inputs.loan_term, ppy)
        amount = inputs.loan_amount

        if inputs.rate_type == RateType.APR and inputs.interest_rate > 0:
            nominal = round_half_up(
                nominal_from_effective(inputs.interest_rate, ppy), cfg.percent_decimals
            )
        else:
            nominal = inputs.interest_rate

        payment = periodic_payment(amount, nominal, periods, ppy)
        if not math.isfinite(payment) or payment <= 0:
            return None

        origination = (inputs.origination_fee or 0.0) / 100.0 * amount
        monthly_fee = inputs.monthly_fee or 0.0
        insurance = inputs.insurance_cost or 0.0
        other_fees = inputs.other_fees or 0.0

        total_fees = round_half_up(
            origination + (monthly_fee + insurance) * inputs.loan_term + other_fees,
            cfg.money_decimals,
        )
        total_payment = round_half_up(payment * periods + total_fees, cfg.money_decimals)

        effective = effective_rate_with_fees(
            net_amount=amount - origination - other_fees,
            payment_with_fees=payment + (monthly_fee + insurance) * 12.0 / ppy,
            periods=periods,
            periods_per_year=ppy,
        )

        return LoanResult(
            periodic_payment=round_half_up(payment, cfg.money_decimals),
            payment_frequency=inputs.payment_frequency,
            periods_per_year=ppy,
            total_periods=periods,
            total_payment=total_payment,
            total_interest=round_half_up(total_payment - amount - total_fees, cfg.money_decimals),
            total_fees=total_fees,
            nominal_rate=nominal,
            annual_percentage_rate=round_half_up(
                effective_annual_rate(nominal, ppy), cfg.percent_decimals
            ),
            effective_rate=(
                round_half_up(effective, cfg.percent_decimals) if effective is not None else None
            ),
            amortization_schedule=amortization_schedule(
                amount, nominal, periods, ppy, payment, cfg.money_decimals
            ),
        )
