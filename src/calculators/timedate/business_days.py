"""
Business Days — Рабочие дни между датами и сдвиг на N рабочих дней

Режимы:
- between: включительный подсчёт дней [start, end] (порядок не важен);
  каждый день попадает ровно в одну категорию: выходной (если исключаются
  выходные), праздник (если исключаются праздники), иначе рабочий
- add: дата через N рабочих дней после start (start не считается)
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Final, Iterable

from src.calculators.base import CalculationInput, Calculator
from src.calculators.timedate.calendar_math import is_weekend
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
    check_number,
    check_required,
)

# Верхняя граница N для режима add (≈ 40 лет рабочих дней)
MAX_DAYS_TO_ADD: Final[int] = 10_000


class BusinessDaysMode(str, Enum):
    """Режим калькулятора рабочих дней"""

    BETWEEN = "between"
    ADD = "add"


@dataclass(frozen=True)
class BusinessDayCount:
    """Разбивка дней периода по категориям."""

    business_days: int
    weekend_days: int
    holidays_excluded: int


def count_business_days(
    start: date,
    end: date,
    exclude_weekends: bool = True,
    exclude_holidays: bool = False,
    holidays: Iterable[date] = (),
) -> BusinessDayCount:
    """
    Подсчёт дней периода [start, end] по категориям.

    Examples:
        >>> count_business_days(date(2024, 1, 1), date(2024, 1, 7)).business_days
        5
    """
    lo, hi = (start, end) if start <= end else (end, start)
    holiday_set = frozenset(holidays)

    business = weekend = excluded = 0
    for offset in range((hi - lo).days + 1):
        current = lo + timedelta(days=offset)
        if exclude_weekends and is_weekend(current):
            weekend += 1
        elif exclude_holidays and current in holiday_set:
            excluded += 1
        else:
            business += 1

    return BusinessDayCount(
        business_days=business, weekend_days=weekend, holidays_excluded=excluded
    )


def add_business_days(
    start: date,
    days_to_add: int,
    exclude_weekends: bool = True,
    exclude_holidays: bool = False,
    holidays: Iterable[date] = (),
) -> date:
    """
    Дата через days_to_add рабочих дней после start.

    Examples:
        >>> add_business_days(date(2024, 1, 5), 1)
        datetime.date(2024, 1, 8)
    """
    holiday_set = frozenset(holidays)
    result = start
    added = 0
    while added < days_to_add:
        result += timedelta(days=1)
        if exclude_weekends and is_weekend(result):
            continue
        if exclude_holidays and result in holiday_set:
            continue
        added += 1
    return result


@dataclass(frozen=True)
class BusinessDaysResult:
    """Результат калькулятора рабочих дней."""

    mode: BusinessDaysMode
    start_date: date
    end_date: date
    total_calendar_days: int
    business_days: int
    weekend_days: int
    holidays_excluded: int


class BusinessDaysInput(CalculationInput):
    """Вход: {mode, start_date, end_date?, days_to_add?, exclude_*, custom_holidays}."""

    mode: BusinessDaysMode = BusinessDaysMode.BETWEEN
    start_date: date | None = None
    end_date: date | None = None
    days_to_add: int | None = None
    exclude_weekends: bool = True
    exclude_holidays: bool = False
    custom_holidays: tuple[date, ...] = ()


class BusinessDaysCalculator(Calculator[BusinessDaysInput, BusinessDaysResult]):
    """Рабочие дни с учётом выходных и праздников."""

    name = "business_days"
    input_model = BusinessDaysInput

    def validate(self, inputs: BusinessDaysInput) -> ValidationResult:
        collector = check_required(
            ValidationCollector(), "start_date", inputs.start_date, label="Start date"
        )

        if inputs.mode == BusinessDaysMode.BETWEEN:
            collector = check_required(collector, "end_date", inputs.end_date, label="End date")
        else:
            collector = check_number(
                collector,
                "days_to_add",
                inputs.days_to_add,
                label="Days to add",
                min_value=0.0,
                max_value=MAX_DAYS_TO_ADD,
                whole=True,
            )
            if collector.result().valid:
                try:
                    add_business_days(
                        inputs.start_date,
                        inputs.days_to_add,
                        exclude_weekends=inputs.exclude_weekends,
                        exclude_holidays=inputs.exclude_holidays,
                        holidays=inputs.custom_holidays,
                    )
                except OverflowError:
                    collector = collector.add(
                        "days_to_add",
                        ErrorKind.OUT_OF_RANGE,
                        "Resulting date is outside the supported calendar range",
                    )

        return collector.result()

    def compute(self, inputs: BusinessDaysInput) -> BusinessDaysResult | None:
        start = inputs.start_date
        options = {
            "exclude_weekends": inputs.exclude_weekends,
            "exclude_holidays": inputs.exclude_holidays,
            "holidays": inputs.custom_holidays,
        }

        if inputs.mode == BusinessDaysMode.BETWEEN:
            end = inputs.end_date
            counts = count_business_days(start, end, **options)
            return BusinessDaysResult(
                mode=inputs.mode,
                start_date=start,
                end_date=end,
                total_calendar_days=abs((end - start).days) + 1,
                business_days=counts.business_days,
                weekend_days=counts.weekend_days,
                holidays_excluded=counts.holidays_excluded,
            )

        end = add_business_days(start, inputs.days_to_add, **options)
        if end > start:
            counts = count_business_days(start + timedelta(days=1), end, **options)
        else:
            counts = BusinessDayCount(business_days=0, weekend_days=0, holidays_excluded=0)

        return BusinessDaysResult(
            mode=inputs.mode,
            start_date=start,
            end_date=end,
            total_calendar_days=(end - start).days + 1,
            business_days=inputs.days_to_add,
            weekend_days=counts.weekend_days,
            holidays_excluded=counts.holidays_excluded,
        )
