"""
Mortgage — Ипотека: первоначальный взнос, PMI, налоги и график погашения

Сумма кредита = цена жилья - первоначальный взнос (задаётся в % или суммой).
Платёж по кредиту и график погашения считаются так же, как в loan
(periodic_payment, amortization_schedule).

PMI (страхование ипотеки):
    требуется, если взнос < 20% цены (и pmi_enabled)
    в месяц: loan × pmi_rate / 100 / 12
    снимается с периода, в котором остаток долга опускается до 80% цены

Налог на имущество, страховка жилья и HOA задаются в месяц (HOA) или в год
и приводятся к периоду платежа: monthly × 12 / ppy.

Эффективная ставка учитывает единовременные расходы и PMI:
IRR потока -(L - closing) + Σ (P + PMI) / (1+i)^t, приведённая к годовой.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Σ principal по графику = loan_amount, итоговый остаток 0
2. PMI не начисляется, начиная с pmi_removal_period
3. Деньги округляются half-up до money_decimals
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Final

from src.calculators.base import CalculationInput, Calculator
from src.calculators.finance.loan import (
    MAX_ORIGINATION_FEE_PCT,
    PERIODS_PER_YEAR,
    AmortizationRow,
    PaymentFrequency,
    amortization_schedule,
    effective_rate_with_fees,
    periodic_payment,
    total_periods,
)
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
    check_choice,
    check_number,
)
from src.core.math.numerical_safeguards import (
    MONEY_DECIMALS,
    PERCENT_DECIMALS,
    round_half_up,
)

MAX_HOME_PRICE: Final[float] = 1e8
MAX_RATE_PCT: Final[float] = 30.0
MAX_TERM_MONTHS: Final[int] = 360
MAX_PMI_RATE_PCT: Final[float] = 5.0
DEFAULT_PMI_RATE_PCT: Final[float] = 0.5

# Взнос ниже этой доли цены требует PMI
PMI_DOWN_PAYMENT_THRESHOLD_PCT: Final[float] = 20.0
# PMI снимается при остатке долга <= 80% цены
PMI_REMOVAL_LTV: Final[float] = 0.8

MONTHS_PER_YEAR: Final[int] = 12


class DownPaymentType(str, Enum):
    """Как задан первоначальный взнос"""

    PERCENTAGE = "percentage"
    AMOUNT = "amount"


# =============================================================================
# CORE FUNCTIONS
# =============================================================================


def down_payment(
    home_price: float,
    down_payment_type: DownPaymentType,
    percentage: float | None = None,
    amount: float | None = None,
) -> tuple[float, float]:
    """
    Первоначальный взнос в деньгах и в процентах от цены.

    Examples:
        >>> down_payment(400000.0, DownPaymentType.PERCENTAGE, percentage=20.0)
        (80000.0, 20.0)
        >>> down_payment(400000.0, DownPaymentType.AMOUNT, amount=40000.0)
        (40000.0, 10.0)
    """
    if down_payment_type == DownPaymentType.AMOUNT:
        return amount, amount / home_price * 100.0
    return home_price * percentage / 100.0, percentage


def pmi_required(down_payment_pct: float) -> bool:
    """PMI нужна при взносе меньше 20%."""
    return down_payment_pct < PMI_DOWN_PAYMENT_THRESHOLD_PCT


def monthly_pmi(
    loan_amount: float, pmi_rate_pct: float, money_decimals: int = MONEY_DECIMALS
) -> float:
    """
    Ежемесячный PMI: loan × rate / 100 / 12.

    Examples:
        >>> monthly_pmi(360000.0, 0.5)
        150.0
    """
    if pmi_rate_pct <= 0:
        return 0.0
    return round_half_up(loan_amount * pmi_rate_pct / 100.0 / MONTHS_PER_YEAR, money_decimals)


def pmi_removal_period(
    home_price: float,
    loan_amount: float,
    schedule: tuple[AmortizationRow, ...],
) -> int | None:
    """
    Первый период, после которого остаток долга не выше 80% цены.

    Returns:
        Номер периода; 0, если кредит изначально не выше порога;
        None, если порог не достигается в пределах графика
    """
    target = home_price * PMI_REMOVAL_LTV
    if loan_amount <= target:
        return 0
    return next((row.period for row in schedule if row.balance <= target), None)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class MortgageRow:
    """Строка графика погашения ипотеки."""

    period: int
    payment: float
    principal: float
    interest: float
    balance: float
    cumulative_principal: float
    cumulative_interest: float
    pmi: float


@dataclass(frozen=True)
class PaymentBreakdown:
    """Состав платежа за период."""

    principal_and_interest: float
    # Процентная часть первого платежа
    first_interest: float
    property_tax: float
    home_insurance: float
    pmi: float
    hoa_fees: float
    total: float


@dataclass(frozen=True)
class MortgageConfig:
    """Конфигурация ипотечного калькулятора."""

    money_decimals: int = MONEY_DECIMALS
    percent_decimals: int = PERCENT_DECIMALS
    max_home_price: float = MAX_HOME_PRICE
    max_rate: float = MAX_RATE_PCT
    max_term_months: int = MAX_TERM_MONTHS


@dataclass(frozen=True)
class MortgageResult:
    """Результат ипотечного калькулятора."""

    home_price: float
    down_payment_amount: float
    down_payment_percentage: float
    loan_amount: float
    payment: PaymentBreakdown
    payment_frequency: PaymentFrequency
    periods_per_year: float
    total_periods: int
    loan_term_years: float
    total_payment: float
    total_interest: float
    total_pmi: float
    total_closing_costs: float
    total_cost_of_ownership: float
    nominal_rate: float
    # Эффективная ставка с единовременными расходами и PMI (None если не определена)
    effective_rate: float | None
    pmi_required: bool
    pmi_removal_period: int | None
    amortization_schedule: tuple[MortgageRow, ...]


def mortgage_schedule(
    rows: tuple[AmortizationRow, ...],
    pmi_per_period: float,
    removal_period: int | None,
    money_decimals: int = MONEY_DECIMALS,
) -> tuple[MortgageRow, ...]:
    """График с накопленными суммами и PMI до периода снятия."""
    schedule = []
    cumulative_principal = 0.0
    cumulative_interest = 0.0
    for row in rows:
        cumulative_principal = round_half_up(cumulative_principal + row.principal, money_decimals)
        cumulative_interest = round_half_up(cumulative_interest + row.interest, money_decimals)
        charged = removal_period is None or row.period < removal_period
        schedule.append(
            MortgageRow(
                period=row.period,
                payment=row.payment,
                principal=row.principal,
                interest=row.interest,
                balance=row.balance,
                cumulative_principal=cumulative_principal,
                cumulative_interest=cumulative_interest,
                pmi=pmi_per_period if charged else 0.0,
            )
        )
    return tuple(schedule)


# =============================================================================
# CALCULATOR
# =============================================================================


class MortgageInput(CalculationInput):
    """Вход: {home_price, down_payment_*, interest_rate, loan_term (мес.), расходы?}."""

    home_price: float | None = None
    down_payment_type: DownPaymentType = DownPaymentType.PERCENTAGE
    down_payment_percentage: float | None = None
    down_payment_amount: float | None = None
    interest_rate: float | None = None
    loan_term: float | None = None
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    property_tax_annual: float | None = None
    home_insurance_annual: float | None = None
    # HOA в месяц
    hoa_fees: float | None = None
    pmi_rate: float | None = None
    pmi_enabled: bool = True
    closing_costs: float | None = None
    # Комиссия за выдачу (% от суммы кредита)
    origination_fee: float | None = None
    other_fees: float | None = None


class MortgageCalculator(Calculator[MortgageInput, MortgageResult]):
    """Ипотека: платёж с налогами и PMI, график, полная стоимость владения."""

    name = "mortgage"
    input_model = MortgageInput

    def __init__(self, config: MortgageConfig | None = None):
        self.config = config or MortgageConfig()

    def validate(self, inputs: MortgageInput) -> ValidationResult:
        cfg = self.config
        collector = ValidationCollector()

        collector = check_number(
            collector,
            "home_price",
            inputs.home_price,
            label="Home price",
            min_value=0.0,
            min_exclusive=True,
            max_value=cfg.max_home_price,
        )

        if inputs.down_payment_type == DownPaymentType.AMOUNT:
            down_field = "down_payment_amount"
            collector = check_number(
                collector, down_field, inputs.down_payment_amount, label="Down payment", min_value=0.0
            )
        else:
            down_field = "down_payment_percentage"
            collector = check_number(
                collector,
                down_field,
                inputs.down_payment_percentage,
                label="Down payment",
                min_value=0.0,
                max_value=100.0,
            )

        if not collector.has_error("home_price") and not collector.has_error(down_field):
            amount, _ = down_payment(
                inputs.home_price,
                inputs.down_payment_type,
                inputs.down_payment_percentage,
                inputs.down_payment_amount,
            )
            if amount > inputs.home_price:
                collector = collector.add(
                    down_field, ErrorKind.OUT_OF_RANGE, "Down payment cannot exceed home price"
                )
            elif inputs.home_price - amount < 10.0 ** -cfg.money_decimals:
                collector = collector.add(
                    down_field,
                    ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                    "Down payment leaves nothing to borrow",
                )

        collector = check_number(
            collector,
            "interest_rate",
            inputs.interest_rate,
            label="Interest rate",
            min_value=0.0,
            max_value=cfg.max_rate,
        )
        collector = check_number(
            collector,
            "loan_term",
            inputs.loan_term,
            label="Loan term",
            min_value=1.0,
            max_value=cfg.max_term_months,
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
            "pmi_rate",
            inputs.pmi_rate,
            label="PMI rate",
            required=False,
            min_value=0.0,
            max_value=MAX_PMI_RATE_PCT,
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
            ("property_tax_annual", "Property tax"),
            ("home_insurance_annual", "Insurance"),
            ("hoa_fees", "HOA fees"),
            ("closing_costs", "Closing costs"),
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

    def compute(self, inputs: MortgageInput) -> MortgageResult | None:
        cfg = self.config
        decimals = cfg.money_decimals
        ppy = PERIODS_PER_YEAR[inputs.payment_frequency]
        periods = total_periods(inputs.loan_term, ppy)
        per_period = MONTHS_PER_YEAR / ppy

        down_amount, down_pct = down_payment(
            inputs.home_price,
            inputs.down_payment_type,
            inputs.down_payment_percentage,
            inputs.down_payment_amount,
        )
        loan_amount = round_half_up(inputs.home_price - down_amount, decimals)

        payment = periodic_payment(loan_amount, inputs.interest_rate, periods, ppy)
        if not math.isfinite(payment) or payment <= 0:
            return None

        rows = amortization_schedule(
            loan_amount, inputs.interest_rate, periods, ppy, payment, decimals
        )

        needs_pmi = inputs.pmi_enabled and pmi_required(down_pct)
        pmi_rate = DEFAULT_PMI_RATE_PCT if inputs.pmi_rate is None else inputs.pmi_rate
        pmi_month = monthly_pmi(loan_amount, pmi_rate, decimals) if needs_pmi else 0.0
        pmi_period = round_half_up(pmi_month * per_period, decimals)
        removal = pmi_removal_period(inputs.home_price, loan_amount, rows) if needs_pmi else None

        schedule = mortgage_schedule(rows, pmi_period, removal, decimals)

        tax_annual = inputs.property_tax_annual or 0.0
        insurance_annual = inputs.home_insurance_annual or 0.0
        hoa_month = inputs.hoa_fees or 0.0
        tax_month = round_half_up(tax_annual / MONTHS_PER_YEAR, decimals)
        insurance_month = round_half_up(insurance_annual / MONTHS_PER_YEAR, decimals)

        tax_period = round_half_up(tax_month * per_period, decimals)
        insurance_period = round_half_up(insurance_month * per_period, decimals)
        hoa_period = round_half_up(hoa_month * per_period, decimals)

        term = inputs.loan_term
        years = term / MONTHS_PER_YEAR
        total_interest = round_half_up(math.fsum(row.interest for row in schedule), decimals)
        total_pmi = round_half_up(math.fsum(row.pmi for row in schedule), decimals)
        total_closing = round_half_up(
            (inputs.closing_costs or 0.0)
            + (inputs.origination_fee or 0.0) / 100.0 * loan_amount
            + (inputs.other_fees or 0.0),
            decimals,
        )
        total_payment = round_half_up(
            math.fsum(row.payment for row in schedule)
            + total_pmi
            + (tax_month + insurance_month + hoa_month) * term,
            decimals,
        )
        total_cost = round_half_up(
            inputs.home_price
            + total_interest
            + total_pmi
            + total_closing
            + (tax_annual + insurance_annual) * years
            + hoa_month * term,
            decimals,
        )

        effective = effective_rate_with_fees(
            net_amount=loan_amount - total_closing,
            payment_with_fees=payment + pmi_period,
            periods=periods,
            periods_per_year=ppy,
        )

        breakdown = PaymentBreakdown(
            principal_and_interest=round_half_up(payment, decimals),
            first_interest=schedule[0].interest,
            property_tax=tax_period,
            home_insurance=insurance_period,
            pmi=pmi_period,
            hoa_fees=hoa_period,
            total=round_half_up(
                payment + pmi_period + tax_period + insurance_period + hoa_period, decimals
            ),
        )

        return MortgageResult(
            home_price=inputs.home_price,
            down_payment_amount=round_half_up(down_amount, decimals),
            down_payment_percentage=round_half_up(down_pct, cfg.percent_decimals),
            loan_amount=loan_amount,
            payment=breakdown,
            payment_frequency=inputs.payment_frequency,
            periods_per_year=ppy,
            total_periods=periods,
            loan_term_years=years,
            total_payment=total_payment,
            total_interest=total_interest,
            total_pmi=total_pmi,
            total_closing_costs=total_closing,
            total_cost_of_ownership=total_cost,
            nominal_rate=inputs.interest_rate,
            effective_rate=(
                round_half_up(effective, cfg.percent_decimals) if effective is not None else None
            ),
            pmi_required=needs_pmi,
            pmi_removal_period=removal,
            amortization_schedule=schedule,
        )
