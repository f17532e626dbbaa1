"""
Week Number — ISO 8601 номер недели и календарные сведения о дате
"""

from dataclasses import dataclass
from datetime import date

from src.calculators.base import CalculationInput, Calculator
from src.calculators.timedate.calendar_math import (
    day_of_year,
    iso_week,
    quarter,
    week_bounds,
    weekday_name,
    weeks_in_iso_year,
)
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
    check_required,
)


@dataclass(frozen=True)
class WeekNumberResult:
    """Результат калькулятора номера недели."""

    target_date: date
    week_number: int
    iso_year: int
    # ISO день недели: 1 = понедельник, 7 = воскресенье
    day_of_week: int
    day_of_week_name: str
    day_of_year: int
    quarter: int
    weeks_in_year: int
    week_start: date
    week_end: date
    # Дата в той же неделе, что и reference_date
    is_current_week: bool


class WeekNumberInput(CalculationInput):
    """Вход: {target_date, reference_date?} (reference_date по умолчанию — сегодня)."""

    target_date: date | None = None
    reference_date: date | None = None


class WeekNumberCalculator(Calculator[WeekNumberInput, WeekNumberResult]):
    """ISO неделя, день года, квартал и границы недели."""

    name = "week_number"
    input_model = WeekNumberInput

    def validate(self, inputs: WeekNumberInput) -> ValidationResult:
        collector = check_required(
            ValidationCollector(), "target_date", inputs.target_date, label="Date"
        )

        reference = inputs.reference_date or date.today()
        for field, d in (("target_date", inputs.target_date), ("reference_date", reference)):
            if d is None:
                continue
            try:
                week_bounds(d)
            except OverflowError:
                collector = collector.add(
                    field,
                    ErrorKind.OUT_OF_RANGE,
                    "Week extends outside the supported calendar range",
                )

        return collector.result()

    def compute(self, inputs: WeekNumberInput) -> WeekNumberResult | None:
        d = inputs.target_date
        reference = inputs.reference_date or date.today()
        week = iso_week(d)
        start, end = week_bounds(d)

        return WeekNumberResult(
            target_date=d,
            week_number=week.week,
            iso_year=week.iso_year,
            day_of_week=d.isoweekday(),
            day_of_week_name=weekday_name(d),
            day_of_year=day_of_year(d),
            quarter=quarter(d),
            weeks_in_year=weeks_in_iso_year(week.iso_year),
            week_start=start,
            week_end=end,
            is_current_week=week_bounds(reference)[0] == start,
        )
