"""
Age — Возраст в годах, месяцах и днях

ФОРМУЛЫ:
    (years, months, days) с заимствованием дней из предыдущего месяца
    total_months = (Δгод × 12 + Δмесяц) - 1, если день target < дня рождения
    total_weeks = floor(total_days / 7)

День рождения 29 февраля в невисокосный год отмечается 28 февраля.
"""

from dataclasses import dataclass
from datetime import date
from typing import Final

from src.calculators.base import CalculationInput, Calculator
from src.calculators.timedate.birthday import next_birthday
from src.calculators.timedate.calendar_math import anniversary, calendar_difference, weekday_name
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
    check_required,
)

MIN_BIRTH_YEAR: Final[int] = 1900


@dataclass(frozen=True)
class AgeBreakdown:
    """Возраст: полные годы, месяцы и дни."""

    years: int
    months: int
    days: int


@dataclass(frozen=True)
class AgeTotals:
    """Возраст в отдельных единицах."""

    total_years: int
    total_months: int
    total_weeks: int
    total_days: int


def age_breakdown(birth_date: date, target: date) -> AgeBreakdown:
    """
    Возраст на дату target.

    Examples:
        >>> age_breakdown(date(1990, 5, 31), date(2024, 3, 1))
        AgeBreakdown(years=33, months=9, days=1)
    """
    years, months, days = calendar_difference(birth_date, target)
    return AgeBreakdown(years=years, months=months, days=days)


def birthday_after(birth_date: date, target: date) -> date:
    """
    Ближайший день рождения строго после target.

    Examples:
        >>> birthday_after(date(2000, 2, 29), date(2023, 2, 28))
        datetime.date(2024, 2, 29)
    """
    upcoming = next_birthday(birth_date, target)
    if upcoming == target:
        upcoming = anniversary(birth_date, target.year + 1)
    return upcoming


def age_totals(birth_date: date, target: date) -> AgeTotals:
    """Возраст в месяцах, неделях и днях."""
    total_days = (target - birth_date).days
    total_months = (target.year - birth_date.year) * 12 + (target.month - birth_date.month)
    if target.day < birth_date.day:
        total_months -= 1

    return AgeTotals(
        total_years=calendar_difference(birth_date, target)[0],
        total_months=total_months,
        total_weeks=total_days // 7,
        total_days=total_days,
    )


@dataclass(frozen=True)
class AgeResult:
    """Результат калькулятора возраста."""

    age: AgeBreakdown
    totals: AgeTotals
    next_birthday: date
    days_until_next_birthday: int
    next_birthday_age: int
    day_of_week_born: str
    is_birthday_today: bool


class AgeInput(CalculationInput):
    """Вход: {birth_date, target_date?} (target_date по умолчанию — сегодня)."""

    birth_date: date | None = None
    target_date: date | None = None


class AgeCalculator(Calculator[AgeInput, AgeResult]):
    """Точный возраст на заданную дату."""

    name = "age"
    input_model = AgeInput

    def validate(self, inputs: AgeInput) -> ValidationResult:
        collector = check_required(
            ValidationCollector(), "birth_date", inputs.birth_date, label="Birth date"
        )
        target = inputs.target_date or date.today()

        if inputs.birth_date is not None:
            if inputs.birth_date > target:
                collector = collector.add(
                    "birth_date",
                    ErrorKind.OUT_OF_RANGE,
                    "Birth date cannot be after the target date",
                )
            elif inputs.birth_date.year < MIN_BIRTH_YEAR:
                collector = collector.add(
                    "birth_date",
                    ErrorKind.OUT_OF_RANGE,
                    f"Birth date cannot be before {MIN_BIRTH_YEAR}",
                )
            else:
                try:
                    birthday_after(inputs.birth_date, target)
                except ValueError:
                    collector = collector.add(
                        "target_date",
                        ErrorKind.OUT_OF_RANGE,
                        "Next birthday is outside the supported calendar range",
                    )

        return collector.result()

    def compute(self, inputs: AgeInput) -> AgeResult | None:
        birth = inputs.birth_date
        target = inputs.target_date or date.today()

        upcoming = birthday_after(birth, target)

        return AgeResult(
            age=age_breakdown(birth, target),
            totals=age_totals(birth, target),
            next_birthday=upcoming,
            days_until_next_birthday=(upcoming - target).days,
            next_birthday_age=upcoming.year - birth.year,
            day_of_week_born=weekday_name(birth),
            is_birthday_today=anniversary(birth, target.year) == target,
        )
