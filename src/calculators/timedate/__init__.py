"""
Date and time calculators.

ISO 8601 week numbers, clock-time durations, birthdays and milestones, exact
age, date differences and shifts, business-day counting.
"""

from src.calculators.timedate.age import (
    AgeBreakdown,
    AgeCalculator,
    AgeInput,
    AgeResult,
    AgeTotals,
    age_breakdown,
    age_totals,
)
from src.calculators.timedate.birthday import (
    MILESTONE_AGES,
    BirthdayCalculator,
    BirthdayInput,
    BirthdayResult,
    Milestone,
    age_on,
    next_birthday,
    upcoming_milestones,
)
from src.calculators.timedate.business_days import (
    BusinessDayCount,
    BusinessDaysCalculator,
    BusinessDaysInput,
    BusinessDaysMode,
    BusinessDaysResult,
    add_business_days,
    count_business_days,
)
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
from src.calculators.timedate.date_calculator import (
    DateCalculator,
    DateCalculatorInput,
    DateCalculatorMode,
    DateCalculatorResult,
    DateDifference,
    DatePeriod,
    date_difference,
    shift_date,
)
from src.calculators.timedate.time_duration import (
    TimeDurationCalculator,
    TimeDurationInput,
    TimeDurationResult,
    duration_minutes,
    format_hhmm,
    parse_time_to_minutes,
)
from src.calculators.timedate.week_number import (
    WeekNumberCalculator,
    WeekNumberInput,
    WeekNumberResult,
)

__all__ = [
    # Calendar math
    "IsoWeek",
    "add_months",
    "add_years",
    "anniversary",
    "calendar_difference",
    "day_of_year",
    "days_in_month",
    "includes_leap_day",
    "is_leap_year",
    "is_weekend",
    "iso_week",
    "nth_weekday_of_month",
    "quarter",
    "week_bounds",
    "weekday_name",
    "weeks_in_iso_year",
    # Week number
    "WeekNumberCalculator",
    "WeekNumberInput",
    "WeekNumberResult",
    # Time duration
    "TimeDurationCalculator",
    "TimeDurationInput",
    "TimeDurationResult",
    "duration_minutes",
    "format_hhmm",
    "parse_time_to_minutes",
    # Birthday
    "MILESTONE_AGES",
    "BirthdayCalculator",
    "BirthdayInput",
    "BirthdayResult",
    "Milestone",
    "age_on",
    "next_birthday",
    "upcoming_milestones",
    # Age
    "AgeBreakdown",
    "AgeCalculator",
    "AgeInput",
    "AgeResult",
    "AgeTotals",
    "age_breakdown",
    "age_totals",
    # Date calculator
    "DateCalculator",
    "DateCalculatorInput",
    "DateCalculatorMode",
    "DateCalculatorResult",
    "DateDifference",
    "DatePeriod",
    "date_difference",
    "shift_date",
    # Business days
    "BusinessDayCount",
    "BusinessDaysCalculator",
    "BusinessDaysInput",
    "BusinessDaysMode",
    "BusinessDaysResult",
    "add_business_days",
    "count_business_days",
]
