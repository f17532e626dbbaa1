"""
Тесты для Birthday и Age калькуляторов

Граничные случаи:
- день рождения 29 февраля в невисокосный год → 28 февраля
- в сам день рождения days_until = 0 (Birthday), следующий — через год (Age)
- дата рождения в будущем → out-of-range
"""

from datetime import date

from src.calculators.timedate.age import AgeCalculator, age_breakdown, age_totals
from src.calculators.timedate.birthday import (
    BirthdayCalculator,
    age_on,
    next_birthday,
    upcoming_milestones,
)
from src.core.domain.validation import ErrorKind


# =============================================================================
# BIRTHDAY
# =============================================================================


class TestBirthdayFunctions:
    """Тесты функций дня рождения"""

    def test_next_birthday(self) -> None:
        """Ближайший день рождения не раньше reference"""
        birth = date(1990, 6, 15)
        assert next_birthday(birth, date(2024, 6, 10)) == date(2024, 6, 15)
        assert next_birthday(birth, date(2024, 6, 15)) == date(2024, 6, 15)
        assert next_birthday(birth, date(2024, 6, 16)) == date(2025, 6, 15)

    def test_leap_day_birthday(self) -> None:
        """29 февраля"""
        birth = date(2000, 2, 29)
        assert next_birthday(birth, date(2023, 3, 1)) == date(2024, 2, 29)
        assert next_birthday(birth, date(2022, 6, 1)) == date(2023, 2, 28)

    def test_age_on(self) -> None:
        """Полных лет"""
        assert age_on(date(1990, 6, 15), date(2024, 6, 14)) == 33
        assert age_on(date(1990, 6, 15), date(2024, 6, 15)) == 34
        assert age_on(date(2000, 2, 29), date(2023, 2, 28)) == 23

    def test_milestones(self) -> None:
        """Не более пяти ещё не достигнутых юбилеев"""
        milestones = upcoming_milestones(date(1990, 6, 15), date(2024, 6, 10))
        assert [m.age for m in milestones] == [40, 50, 60, 65, 70]
        assert milestones[0].date == date(2030, 6, 15)
        assert not milestones[0].is_past


class TestBirthdayCalculator:
    """Тесты BirthdayCalculator"""

    def test_countdown(self) -> None:
        """Обратный отсчёт"""
        outcome = BirthdayCalculator().run(
            {"birth_date": "1990-06-15", "reference_date": "2024-06-10"}
        )
        assert outcome.ok
        result = outcome.result
        assert result.next_birthday == date(2024, 6, 15)
        assert result.days_until == 5
        assert result.next_age == 34
        assert result.day_of_week_born == "friday"
        assert result.next_birthday_day_of_week == "saturday"
        assert result.total_days_lived == (date(2024, 6, 10) - date(1990, 6, 15)).days
        assert not result.is_birthday_today
        assert len(result.upcoming_milestones) == 5

    def test_birthday_today(self) -> None:
        """В сам день рождения"""
        outcome = BirthdayCalculator().run(
            {"birth_date": "1990-06-15", "reference_date": "2024-06-15"}
        )
        result = outcome.result
        assert result.days_until == 0
        assert result.is_birthday_today
        assert result.next_age == 34

    def test_future_birth_date(self) -> None:
        """Дата рождения в будущем"""
        outcome = BirthdayCalculator().run(
            {"birth_date": "2030-01-01", "reference_date": "2024-06-15"}
        )
        assert outcome.validation.has_error("birth_date", ErrorKind.OUT_OF_RANGE)
        assert outcome.validation.errors[0].message == "Birth date cannot be in the future"

    def test_missing_birth_date(self) -> None:
        """Дата рождения обязательна"""
        outcome = BirthdayCalculator().run({"reference_date": "2024-06-15"})
        assert outcome.validation.has_error("birth_date", ErrorKind.MISSING_REQUIRED_FIELD)


# =============================================================================
# AGE
# =============================================================================


class TestAgeFunctions:
    """Тесты функций возраста"""

    def test_breakdown(self) -> None:
        """Годы, месяцы, дни"""
        age = age_breakdown(date(1990, 5, 31), date(2024, 3, 1))
        assert (age.years, age.months, age.days) == (33, 9, 1)

    def test_totals(self) -> None:
        """Возраст в отдельных единицах"""
        totals = age_totals(date(1990, 5, 31), date(2024, 3, 1))
        assert totals.total_years == 33
        assert totals.total_months == 405
        assert totals.total_days == (date(2024, 3, 1) - date(1990, 5, 31)).days
        assert totals.total_weeks == totals.total_days // 7


class TestAgeCalculator:
    """Тесты AgeCalculator"""

    def test_age(self) -> None:
        """Возраст и следующий день рождения"""
        outcome = AgeCalculator().run({"birth_date": "1990-05-31", "target_date": "2024-03-01"})
        assert outcome.ok
        result = outcome.result
        assert (result.age.years, result.age.months, result.age.days) == (33, 9, 1)
        assert result.next_birthday == date(2024, 5, 31)
        assert result.days_until_next_birthday == 91
        assert result.next_birthday_age == 34
        assert result.day_of_week_born == "thursday"
        assert not result.is_birthday_today

    def test_birthday_today(self) -> None:
        """В день рождения следующий — через год"""
        outcome = AgeCalculator().run({"birth_date": "2000-03-01", "target_date": "2024-03-01"})
        result = outcome.result
        assert (result.age.years, result.age.months, result.age.days) == (24, 0, 0)
        assert result.is_birthday_today
        assert result.next_birthday == date(2025, 3, 1)
        assert result.days_until_next_birthday == 365
        assert result.next_birthday_age == 25

    def test_birth_after_target(self) -> None:
        """Дата рождения позже целевой"""
        outcome = AgeCalculator().run({"birth_date": "2024-03-02", "target_date": "2024-03-01"})
        assert outcome.validation.errors[0].message == "Birth date cannot be after the target date"

    def test_birth_too_early(self) -> None:
        """Дата рождения раньше 1900"""
        outcome = AgeCalculator().run({"birth_date": "1850-01-01", "target_date": "2024-03-01"})
        assert outcome.validation.has_error("birth_date", ErrorKind.OUT_OF_RANGE)
        assert outcome.validation.errors[0].message == "Birth date cannot be before 1900"

    def test_missing_birth_date(self) -> None:
        """Дата рождения обязательна"""
        outcome = AgeCalculator().run({"birth_date": None})
        assert outcome.validation.errors[0].message == "Birth date is required"


class TestLeapDayBirthday:
    """29 февраля в невисокосный год — день рождения 28 февраля"""

    def test_age_on_february_28(self) -> None:
        """Возраст: день рождения сегодня, следующий через год"""
        outcome = AgeCalculator().run({"birth_date": "2000-02-29", "target_date": "2023-02-28"})
        result = outcome.result
        assert result.is_birthday_today
        assert result.next_birthday == date(2024, 2, 29)

    def test_birthday_on_february_28(self) -> None:
        """Обратный отсчёт: день рождения сегодня"""
        outcome = BirthdayCalculator().run(
            {"birth_date": "2000-02-29", "reference_date": "2023-02-28"}
        )
        assert outcome.result.is_birthday_today
        assert outcome.result.next_birthday == date(2023, 2, 28)
        assert outcome.result.days_until == 0

    def test_calculators_agree(self) -> None:
        """Age и Birthday согласованы в признаке дня рождения"""
        for target in ("2023-02-27", "2023-02-28", "2023-03-01", "2024-02-28", "2024-02-29"):
            age = AgeCalculator().run({"birth_date": "2000-02-29", "target_date": target})
            birthday = BirthdayCalculator().run(
                {"birth_date": "2000-02-29", "reference_date": target}
            )
            assert age.result.is_birthday_today == birthday.result.is_birthday_today, target


class TestCalendarRangeLimits:
    """Даты у верхней границы календаря — ошибка валидации, не исключение"""

    def test_birthday_after_year_9999(self) -> None:
        """Следующий день рождения за пределами календаря"""
        outcome = BirthdayCalculator().run(
            {"birth_date": "9990-01-01", "reference_date": "9999-06-01"}
        )
        assert not outcome.ok
        assert outcome.validation.has_error("birth_date", ErrorKind.OUT_OF_RANGE)

    def test_milestones_stop_at_year_9999(self) -> None:
        """Юбилеи позже 9999 года не выводятся"""
        outcome = BirthdayCalculator().run(
            {"birth_date": "9980-06-01", "reference_date": "9999-01-01"}
        )
        assert outcome.ok
        assert outcome.result.next_birthday == date(9999, 6, 1)
        assert outcome.result.upcoming_milestones == ()

    def test_age_next_birthday_after_year_9999(self) -> None:
        """Возраст на 31.12.9999"""
        outcome = AgeCalculator().run({"birth_date": "2000-01-01", "target_date": "9999-12-31"})
        assert not outcome.ok
        assert outcome.validation.has_error("target_date", ErrorKind.OUT_OF_RANGE)
