"""
Calendar Math — Календарные примитивы (ISO 8601)

ISO неделя:
    1. Сдвиг даты на четверг её недели: d + (4 - isoweekday)
    2. ISO год = год сдвинутой даты
    3. week = ceil(((сдвинутая - 1 января ISO года).days + 1) / 7)

Даты в начале января могут принадлежать последней неделе предыдущего
ISO года (1 января 2023, воскресенье → неделя 52 2022 года), а даты в
конце декабря — неделе 1 следующего.

Число ISO недель в году = номер недели 28 декабря (28.12 всегда в
последней неделе года).
"""

import calendar
import math
from datetime import date, timedelta
from typing import Final, NamedTuple

# ISO день недели: понедельник = 1, воскресенье = 7
ISO_THURSDAY: Final[int] = 4
ISO_SATURDAY: Final[int] = 6

WEEKDAY_NAMES: Final[tuple[str, ...]] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class IsoWeek(NamedTuple):
    """Номер ISO недели и ISO год."""

    week: int
    iso_year: int


def is_leap_year(year: int) -> bool:
    """
    Високосный год: кратен 4 и не кратен 100, либо кратен 400.

    Examples:
        >>> is_leap_year(2000), is_leap_year(1900), is_leap_year(2024)
        (True, False, True)
    """
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """Число дней в месяце (month 1..12)."""
    return calendar.monthrange(year, month)[1]


def day_of_year(d: date) -> int:
    """Порядковый номер дня в году (1..366)."""
    return d.timetuple().tm_yday


def quarter(d: date) -> int:
    """Квартал (1..4)."""
    return (d.month - 1) // 3 + 1


def weekday_name(d: date) -> str:
    """Имя дня недели в нижнем регистре."""
    return WEEKDAY_NAMES[d.weekday()]


def is_weekend(d: date) -> bool:
    """Суббота или воскресенье."""
    return d.isoweekday() >= ISO_SATURDAY


def iso_week(d: date) -> IsoWeek:
    """
    ISO 8601 номер недели через сдвиг на четверг.

    Examples:
        >>> iso_week(date(2023, 1, 1))
        IsoWeek(week=52, iso_year=2022)
        >>> iso_week(date(2020, 12, 31))
        IsoWeek(week=53, iso_year=2020)
    """
    thursday = d + timedelta(days=ISO_THURSDAY - d.isoweekday())
    year_start = date(thursday.year, 1, 1)
    week = math.ceil(((thursday - year_start).days + 1) / 7)
    return IsoWeek(week=week, iso_year=thursday.year)


def weeks_in_iso_year(year: int) -> int:
    """Число ISO недель в году (52 или 53)."""
    return iso_week(date(year, 12, 28)).week


def week_bounds(d: date) -> tuple[date, date]:
    """Понедельник и воскресенье недели, содержащей дату."""
    start = d - timedelta(days=d.isoweekday() - 1)
    return start, start + timedelta(days=6)


def add_months(d: date, months: int) -> date:
    """
    Сдвиг на months месяцев с прижатием к концу месяца.

    Examples:
        >>> add_months(date(2024, 1, 31), 1)
        datetime.date(2024, 2, 29)
    """
    total = d.year * 12 + (d.month - 1) + months
    year, month = divmod(total, 12)
    month += 1
    return date(year, month, min(d.day, days_in_month(year, month)))


def add_years(d: date, years: int) -> date:
    """Сдвиг на years лет (29 февраля → 28 февраля в невисокосный год)."""
    return add_months(d, years * 12)


def anniversary(d: date, year: int) -> date:
    """Годовщина даты в указанном году (29.02 → 28.02 в невисокосный год)."""
    return date(year, d.month, min(d.day, days_in_month(year, d.month)))


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date | None:
    """
    n-й заданный день недели месяца.

    Args:
        year: Год
        month: Месяц 1..12
        weekday: ISO день недели 1..7
        n: Порядковый номер (1..5); -1 — последний в месяце

    Returns:
        Дата или None если такого дня нет (пятый понедельник и т.п.)
    """
    if n == -1:
        last = date(year, month, days_in_month(year, month))
        return last - timedelta(days=(last.isoweekday() - weekday) % 7)

    first = date(year, month, 1)
    offset = (weekday - first.isoweekday()) % 7
    day = 1 + offset + (n - 1) * 7
    if n < 1 or day > days_in_month(year, month):
        return None
    return date(year, month, day)


def includes_leap_day(start: date, end: date) -> bool:
    """Попадает ли 29 февраля в отрезок [start, end] (порядок не важен)."""
    lo, hi = (start, end) if start <= end else (end, start)
    for year in range(lo.year, hi.year + 1):
        if is_leap_year(year) and lo <= date(year, 2, 29) <= hi:
            return True
    return False


def calendar_difference(start: date, end: date) -> tuple[int, int, int]:
    """
    Разница (годы, месяцы, дни) между датами.

    Полные месяцы отсчитываются от start (с прижатием к концу месяца),
    остаток — дни от последней месячной годовщины. Требует start <= end.

    Examples:
        >>> calendar_difference(date(1990, 5, 31), date(2024, 3, 1))
        (33, 9, 1)
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1

    days = (end - add_months(start, months)).days
    years, months = divmod(months, 12)
    return years, months, days
