"""
Time Duration — Длительность между двумя временами суток

ФОРМУЛЫ:
    minutes(t) = hours × 60 + minutes          (t = "HH:MM", 0..23 : 0..59)
    duration = end - start                     (end >= start)
    duration = (1440 - start) + end            (end < start или crosses_midnight)

Длительность всегда неотрицательна.
"""

import re
from dataclasses import dataclass
from typing import Final

from src.calculators.base import CalculationInput, Calculator
from src.core.domain.validation import ErrorKind, ValidationCollector, ValidationResult
from src.core.math.numerical_safeguards import round_half_up

TIME_PATTERN: Final[re.Pattern[str]] = re.compile(r"(\d{1,2}):(\d{2})")
MINUTES_PER_DAY: Final[int] = 24 * 60


def parse_time_to_minutes(value: str) -> int | None:
    """
    Минуты с полуночи для строки "HH:MM".

    Returns:
        Число минут или None для некорректного формата/диапазона

    Examples:
        >>> parse_time_to_minutes("09:30")
        570
        >>> parse_time_to_minutes("24:00") is None
        True
    """
    match = TIME_PATTERN.fullmatch(value)
    if match is None:
        return None

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def duration_minutes(start: int, end: int, crosses_midnight: bool = False) -> int:
    """Длительность в минутах с переходом через полночь."""
    if crosses_midnight or end < start:
        return (MINUTES_PER_DAY - start) + end
    return end - start


def format_hhmm(total_minutes: int) -> str:
    """Форматирование "HH:MM" (часы не ограничены 23)."""
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


@dataclass(frozen=True)
class TimeDurationResult:
    """Результат калькулятора длительности."""

    hours: int
    minutes: int
    total_minutes: int
    total_seconds: int
    decimal_hours: float
    formatted: str


class TimeDurationInput(CalculationInput):
    """Вход: {start_time: "HH:MM", end_time: "HH:MM", crosses_midnight}."""

    start_time: str | None = None
    end_time: str | None = None
    crosses_midnight: bool = False


class TimeDurationCalculator(Calculator[TimeDurationInput, TimeDurationResult]):
    """Длительность интервала между двумя временами суток."""

    name = "time_duration"
    input_model = TimeDurationInput

    def validate(self, inputs: TimeDurationInput) -> ValidationResult:
        collector = ValidationCollector()

        for field_name, label, value in (
            ("start_time", "Start time", inputs.start_time),
            ("end_time", "End time", inputs.end_time),
        ):
            if not value:
                collector = collector.add(
                    field_name, ErrorKind.MISSING_REQUIRED_FIELD, f"{label} is required"
                )
            elif parse_time_to_minutes(value) is None:
                collector = collector.add(
                    field_name,
                    ErrorKind.INVALID_FORMAT,
                    f"{label} must be a valid time in HH:MM format",
                )

        return collector.result()

    def compute(self, inputs: TimeDurationInput) -> TimeDurationResult | None:
        start = parse_time_to_minutes(inputs.start_time)
        end = parse_time_to_minutes(inputs.end_time)
        if start is None or end is None:
            return None

        total = duration_minutes(start, end, inputs.crosses_midnight)
        hours, minutes = divmod(total, 60)

        return TimeDurationResult(
            hours=hours,
            minutes=minutes,
            total_minutes=total,
            total_seconds=total * 60,
            decimal_hours=round_half_up(total / 60.0, 2),
            formatted=format_hhmm(total),
        )
