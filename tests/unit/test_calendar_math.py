"""
Тесты для Calendar Math и Week Number калькулятора

ISO 8601:
- неделя 1 содержит первый четверг года
- начало января может принадлежать последней неделе прошлого года
- число недель в году = номер недели 28 декабря
"""

from datetime import date, timedelta

import pytest

from src.calculators.timedate import WeekNumberCalculator
from src.calculators.timedate.calendar_math import (
    IsoWeek,
    add_months,
    add_years,
    anniversary,
    calendar_difference,
    day_of_year,
    days_in_month,
    includes_leap_day,
    is_leap_year,
    is_weekend,
    iso_week,
    nth_weekday_of_month,
    quarter,
    week_bounds,
    weekday_name,
    weeks_in_iso_year,
)
from src.core.domain.validation import ErrorKind


# =============================================================================
# ISO WEEK
# =============================================================================


class TestIsoWeek:
    """Тесты ISO недели"""

    @pytest.mark.parametrize(
        ("d", "expected"),
        [
            (date(2023, 1, 1), IsoWeek(52, 2022)),
            (date(2020, 12, 31), IsoWeek(53, 2020)),
            (date(2024, 1, 1), IsoWeek(1, 2024)),
            (date(2024, 12, 30), IsoWeek(1, 2025)),
            (date(2021, 1, 3), IsoWeek(53, 2020)),
        ],
    )
    def test_year_boundaries(self, d: date, expected: IsoWeek) -> None:
        """Граничные даты на стыке ISO лет"""
        assert iso_week(d) == expected

    def test_matches_isocalendar(self) -> None:
        """Совпадение с date.isocalendar() на протяжении нескольких лет"""
        current = date(2018, 12, 20)
        while current <= date(2027, 1, 10):
            iso_year, week, _ = current.isocalendar()
            assert iso_week(current) == IsoWeek(week, iso_year), current
            current += timedelta(days=1)

    @pytest.mark.parametrize(
        ("year", "expected"),
        [(2015, 53), (2020, 53), (2023, 52), (2024, 52), (2026, 53)],
    )
    def test_weeks_in_year(self, year: int, expected: int) -> None:
        """52 или 53 недели"""
        assert weeks_in_iso_year(year) == expected

    def test_week_bounds(self) -> None:
        """Понедельник и воскресенье недели"""
        assert week_bounds(date(2024, 3, 15)) == (date(2024, 3, 11), date(2024, 3, 17))
        assert week_bounds(date(2024, 3, 11)) == (date(2024, 3, 11), date(2024, 3, 17))


# =============================================================================
# CALENDAR PRIMITIVES
# =============================================================================


class TestCalendarPrimitives:
    """Тесты календарных примитивов"""

    def test_leap_years(self) -> None:
        """Правило григорианского календаря"""
        assert is_leap_year(2000)
        assert is_leap_year(2024)
        assert not is_leap_year(1900)
        assert not is_leap_year(2023)

    def test_days_in_month(self) -> None:
        """Длина месяца"""
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28
        assert days_in_month(2024, 4) == 30

    def test_day_attributes(self) -> None:
        """День года, квартал, день недели"""
        d = date(2024, 3, 15)
        assert day_of_year(d) == 75
        assert quarter(d) == 1
        assert quarter(date(2024, 10, 1)) == 4
        assert weekday_name(d) == "friday"
        assert is_weekend(date(2024, 3, 16))
        assert not is_weekend(d)

    @pytest.mark.parametrize(
        ("start", "months", "expected"),
        [
            (date(2024, 1, 31), 1, date(2024, 2, 29)),
            (date(2023, 1, 31), 1, date(2023, 2, 28)),
            (date(2024, 12, 15), 1, date(2025, 1, 15)),
            (date(2024, 3, 31), -1, date(2024, 2, 29)),
            (date(2024, 1, 15), -13, date(2022, 12, 15)),
        ],
    )
    def test_add_months(self, start: date, months: int, expected: date) -> None:
        """Сдвиг по месяцам с прижатием к концу месяца"""
        assert add_months(start, months) == expected

    def test_leap_day_anniversaries(self) -> None:
        """29 февраля в невисокосный год → 28 февраля"""
        assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)
        assert anniversary(date(2000, 2, 29), 2023) == date(2023, 2, 28)
        assert anniversary(date(2000, 2, 29), 2024) == date(2024, 2, 29)

    def test_nth_weekday(self) -> None:
        """n-й день недели месяца"""
        # Четвёртый четверг ноября 2024
        assert nth_weekday_of_month(2024, 11, 4, 4) == date(2024, 11, 28)
        # Последний понедельник мая 2024
        assert nth_weekday_of_month(2024, 5, 1, -1) == date(2024, 5, 27)
        # Пятого понедельника в феврале 2024 нет
        assert nth_weekday_of_month(2024, 2, 1, 5) is None

    def test_includes_leap_day(self) -> None:
        """Попадание 29 февраля в отрезок"""
        assert includes_leap_day(date(2024, 1, 1), date(2024, 3, 1))
        assert includes_leap_day(date(2024, 3, 1), date(2024, 1, 1))
        assert not includes_leap_day(date(2023, 1, 1), date(2023, 12, 31))
        assert not includes_leap_day(date(2024, 3, 1), date(2024, 12, 31))

    def test_calendar_difference(self) -> None:
        """Годы, месяцы и дни от месячной годовщины"""
        assert calendar_difference(date(1990, 5, 31), date(2024, 3, 1)) == (33, 9, 1)
        assert calendar_difference(date(2024, 1, 1), date(2024, 12, 31)) == (0, 11, 30)
        assert calendar_difference(date(2024, 1, 15), date(2024, 1, 15)) == (0, 0, 0)


# =============================================================================
# WEEK NUMBER CALCULATOR
# =============================================================================


class TestWeekNumberCalculator:
    """Тесты WeekNumberCalculator"""

    def test_result(self) -> None:
        """Полный результат для даты"""
        outcome = WeekNumberCalculator().run(
            {"target_date": "2024-03-15", "reference_date": "2024-03-11"}
        )
        assert outcome.ok
        result = outcome.result
        assert result.week_number == 11
        assert result.iso_year == 2024
        assert result.day_of_week == 5
        assert result.day_of_week_name == "friday"
        assert result.day_of_year == 75
        assert result.quarter == 1
        assert result.weeks_in_year == 52
        assert (result.week_start, result.week_end) == (date(2024, 3, 11), date(2024, 3, 17))
        assert result.is_current_week

    def test_other_week(self) -> None:
        """reference_date в другой неделе"""
        outcome = WeekNumberCalculator().run(
            {"target_date": "2024-03-15", "reference_date": "2024-03-18"}
        )
        assert not outcome.result.is_current_week

    def test_weeks_in_iso_year_of_date(self) -> None:
        """Число недель берётся по ISO году даты"""
        outcome = WeekNumberCalculator().run(
            {"target_date": "2021-01-03", "reference_date": "2021-01-03"}
        )
        assert outcome.result.iso_year == 2020
        assert outcome.result.weeks_in_year == 53

    def test_missing_date(self) -> None:
        """Дата обязательна"""
        outcome = WeekNumberCalculator().run({})
        assert outcome.validation.errors[0].kind == ErrorKind.MISSING_REQUIRED_FIELD
        assert outcome.validation.errors[0].message == "Date is required"

    def test_invalid_date(self) -> None:
        """Несуществующая дата — invalid-format"""
        outcome = WeekNumberCalculator().run({"target_date": "2024-13-01"})
        assert outcome.validation.has_error("target_date", ErrorKind.INVALID_FORMAT)

    def test_wrong_pattern(self) -> None:
        """Формат даты проверяется контрактом"""
        outcome = WeekNumberCalculator().run({"target_date": "15.03.2024"})
        assert outcome.validation.has_error("target_date", ErrorKind.INVALID_FORMAT)

    def test_last_week_of_calendar(self) -> None:
        """Неделя 31.12.9999 выходит за пределы календаря"""
        outcome = WeekNumberCalculator().run(
            {"target_date": "9999-12-31", "reference_date": "2024-03-11"}
        )
        assert not outcome.ok
        assert outcome.validation.has_error("target_date", ErrorKind.OUT_OF_RANGE)

    def test_reference_in_last_week_of_calendar(self) -> None:
        """То же для reference_date"""
        outcome = WeekNumberCalculator().run(
            {"target_date": "2024-03-15", "reference_date": "9999-12-31"}
        )
        assert outcome.validation.has_error("reference_date", ErrorKind.OUT_OF_RANGE)

    def test_first_day_of_calendar(self) -> None:
        """01.01.0001 — понедельник, неделя помещается в календарь"""
        outcome = WeekNumberCalculator().run(
            {"target_date": "0001-01-01", "reference_date": "0001-01-03"}
        )
        assert outcome.ok
        assert outcome.result.week_start == date(1, 1, 1)
        assert outcome.result.is_current_week
