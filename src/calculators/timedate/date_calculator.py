"""
Date Calculator — Разница между датами и сдвиг даты

Режимы:
- difference: годы/месяцы/недели/дни между датами, всего дней (опционально
  включая конечную дату), признак обратного порядка и попадания 29 февраля
- add / subtract: сдвиг даты на годы, месяцы, недели и дни; годы и месяцы
  применяются первыми с прижатием к концу месяца (31.01 + 1 месяц → 28/29.02)
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from src.calculators.base import CalculationInput, Calculator
from src.calculators.timedate.calendar_math import (
    add_months,
    calendar_difference,
    includes_leap_day,
)
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
    check_number,
    check_required,
)


class DateCalculatorMode(str, Enum):
    """Режим калькулятора дат"""

    DIFFERENCE = "difference"
    ADD = "add"
    SUBTRACT = "subtract"


@dataclass(frozen=True)
class DateDifference:
    """Разница между датами."""

    years: int
    months: int
    weeks: int
    days: int
    total_days: int
    total_weeks: int
    total_months: int


@dataclass(frozen=True)
class DatePeriod:
    """Сдвиг даты."""

    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0


def date_difference(start: date, end: date, include_end_date: bool = False) -> DateDifference:
    """
    Разница между датами (порядок не важен).

    Args:
        start: Начальная дата
        end: Конечная дата
        include_end_date: Считать конечную дату (total_days + 1)

    Examples:
        >>> date_difference(date(2024, 1, 1), date(2024, 12, 31)).total_days
        365
    """
    lo, hi = (start, end) if start <= end else (end, start)

    total_days = (hi - lo).days
    if include_end_date:
        total_days += 1

    years, months, days = calendar_difference(lo, hi)
    weeks, remaining_days = divmod(days, 7)

    return DateDifference(
        years=years,
        months=months,
        weeks=weeks,
        days=remaining_days,
        total_days=total_days,
        total_weeks=total_days // 7,
        total_months=years * 12 + months,
    )


def shift_date(start: date, period: DatePeriod, sign: int = 1) -> date:
    """Сдвиг даты на период (sign = -1 для вычитания)."""
    shifted = add_months(start, sign * (period.years * 12 + period.months))
    return shifted + timedelta(days=sign * (period.weeks * 7 + period.days))


@dataclass(frozen=True)
class DateCalculatorResult:
    """Результат калькулятора дат."""

    mode: DateCalculatorMode
    start_date: date
    # Режим difference
    end_date: date | None = None
    difference: DateDifference | None = None
    includes_leap_day: bool | None = None
    is_negative: bool | None = None
    # Режимы add / subtract
    result_date: date | None = None
    period: DatePeriod | None = None


class DateCalculatorInput(CalculationInput):
    """Вход: {mode, start_date, end_date?, include_end_date, years, months, weeks, days}."""

    mode: DateCalculatorMode = DateCalculatorMode.DIFFERENCE
    start_date: date | None = None
    end_date: date | None = None
    include_end_date: bool = False
    years: int | None = 0
    months: int | None = 0
    weeks: int | None = 0
    days: int | None = 0


class DateCalculator(Calculator[DateCalculatorInput, DateCalculatorResult]):
    """Разница между датами и сложение/вычитание периодов."""

    name = "date_calculator"
    input_model = DateCalculatorInput

    def validate(self, inputs: DateCalculatorInput) -> ValidationResult:
        collector = check_required(
            ValidationCollector(), "start_date", inputs.start_date, label="Start date"
        )

        if inputs.mode == DateCalculatorMode.DIFFERENCE:
            return check_required(
                collector, "end_date", inputs.end_date, label="End date"
            ).result()

        for field_name in ("years", "months", "weeks", "days"):
            collector = check_number(
                collector,
                field_name,
                getattr(inputs, field_name),
                label=field_name.capitalize(),
                required=False,
                min_value=0.0,
                whole=True,
            )

        if inputs.start_date is not None and collector.result().valid:
            try:
                self._shift(inputs)
            except (OverflowError, ValueError):
                collector = collector.add(
                    "start_date",
                    ErrorKind.OUT_OF_RANGE,
                    "Resulting date is outside the supported calendar range",
                )

        return collector.result()

    @staticmethod
    def _period(inputs: DateCalculatorInput) -> DatePeriod:
        return DatePeriod(
            years=inputs.years or 0,
            months=inputs.months or 0,
            weeks=inputs.weeks or 0,
            days=inputs.days or 0,
        )

    def _shift(self, inputs: DateCalculatorInput) -> date:
        sign = -1 if inputs.mode == DateCalculatorMode.SUBTRACT else 1
        return shift_date(inputs.start_date, self._period(inputs), sign)

    def compute(self, inputs: DateCalculatorInput) -> DateCalculatorResult | None:
        start = inputs.start_date

        if inputs.mode == DateCalculatorMode.DIFFERENCE:
            end = inputs.end_date
            return DateCalculatorResult(
                mode=inputs.mode,
                start_date=start,
                end_date=end,
                difference=date_difference(start, end, inputs.include_end_date),
                includes_leap_day=includes_leap_day(start, end),
                is_negative=start > end,
            )

        return DateCalculatorResult(
            mode=inputs.mode,
            start_date=start,
            result_date=self._shift(inputs),
            period=self._period(inputs),
        )
