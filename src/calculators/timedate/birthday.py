"""
Birthday — Следующий день рождения и ближайшие юбилеи

Правила:
- день рождения 29 февраля в невисокосный год отмечается 28 февраля
- в сам день рождения days_until = 0, следующий день рождения — сегодня
- юбилеи берутся из фиксированного списка возрастов и фильтруются по
  ещё не достигнутым (не более MAX_MILESTONES)
- юбилеи позже 9999 года не выводятся
"""

from dataclasses import dataclass
from datetime import MAXYEAR, date
from typing import Final

from src.calculators.base import CalculationInput, Calculator
from src.calculators.timedate.calendar_math import (
    anniversary,
    weekday_name,
)
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
    check_required,
)

MILESTONE_AGES: Final[tuple[int, ...]] = (18, 21, 25, 30, 40, 50, 60, 65, 70, 75, 80, 90, 100)
MAX_MILESTONES: Final[int] = 5


def next_birthday(birth_date: date, reference: date) -> date:
    """
    Ближайший день рождения, не раньше reference.

    Examples:
        >>> next_birthday(date(2000, 2, 29), date(2023, 3, 1))
        datetime.date(2024, 2, 29)
        >>> next_birthday(date(2000, 2, 29), date(2022, 6, 1))
        datetime.date(2023, 2, 28)
    """
    candidate = anniversary(birth_date, reference.year)
    if candidate < reference:
        candidate = anniversary(birth_date, reference.year + 1)
    return candidate


def age_on(birth_date: date, reference: date) -> int:
    """Полных лет на дату reference (с учётом переноса 29.02 → 28.02)."""
    age = reference.year - birth_date.year
    if anniversary(birth_date, reference.year) > reference:
        age -= 1
    return age


@dataclass(frozen=True)
class Milestone:
    """Юбилей."""

    age: int
    date: date
    day_of_week: str
    is_past: bool


def upcoming_milestones(
    birth_date: date,
    reference: date,
    ages: tuple[int, ...] = MILESTONE_AGES,
    limit: int = MAX_MILESTONES,
) -> tuple[Milestone, ...]:
    """Ближайшие юбилеи старше текущего возраста."""
    current_age = age_on(birth_date, reference)
    milestones = []
    for age in ages:
        if age <= current_age:
            continue
        if birth_date.year + age > MAXYEAR:
            break
        when = anniversary(birth_date, birth_date.year + age)
        milestones.append(
            Milestone(age=age, date=when, day_of_week=weekday_name(when), is_past=when < reference)
        )
        if len(milestones) == limit:
            break
    return tuple(milestones)


@dataclass(frozen=True)
class BirthdayResult:
    """Результат калькулятора дня рождения."""

    birth_date: date
    next_birthday: date
    days_until: int
    next_age: int
    day_of_week_born: str
    next_birthday_day_of_week: str
    total_days_lived: int
    is_birthday_today: bool
    upcoming_milestones: tuple[Milestone, ...]


class BirthdayInput(CalculationInput):
    """Вход: {birth_date, reference_date?} (reference_date по умолчанию — сегодня)."""

    birth_date: date | None = None
    reference_date: date | None = None


class BirthdayCalculator(Calculator[BirthdayInput, BirthdayResult]):
    """Обратный отсчёт до дня рождения и ближайшие юбилеи."""

    name = "birthday"
    input_model = BirthdayInput

    def validate(self, inputs: BirthdayInput) -> ValidationResult:
        collector = check_required(
            ValidationCollector(), "birth_date", inputs.birth_date, label="Birth date"
        )
        reference = inputs.reference_date or date.today()

        if inputs.birth_date is not None and inputs.birth_date > reference:
            collector = collector.add(
                "birth_date",
                ErrorKind.OUT_OF_RANGE,
                "Birth date cannot be in the future",
            )
        elif inputs.birth_date is not None:
            try:
                next_birthday(inputs.birth_date, reference)
            except ValueError:
                collector = collector.add(
                    "birth_date",
                    ErrorKind.OUT_OF_RANGE,
                    "Next birthday is outside the supported calendar range",
                )

        return collector.result()

    def compute(self, inputs: BirthdayInput) -> BirthdayResult | None:
        birth = inputs.birth_date
        reference = inputs.reference_date or date.today()
        upcoming = next_birthday(birth, reference)

        return BirthdayResult(
            birth_date=birth,
            next_birthday=upcoming,
            days_until=(upcoming - reference).days,
            next_age=upcoming.year - birth.year,
            day_of_week_born=weekday_name(birth),
            next_birthday_day_of_week=weekday_name(upcoming),
            total_days_lived=(reference - birth).days,
            is_birthday_today=upcoming == reference,
            upcoming_milestones=upcoming_milestones(birth, reference),
        )
