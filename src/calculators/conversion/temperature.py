"""
Temperature — Конверсия температурных шкал и классификация диапазона

Шкалы аффинные, база — кельвины:
    K = C + 273.15
    F = C × 9/5 + 32

Отрицательные значения допустимы в °C и °F; ниже абсолютного нуля
(-273.15 °C, -459.67 °F, 0 K) — ошибка out-of-range.

Диапазон классифицируется по значению в °C:
    < -20 freezing, < 0 cold, < 15 cool, < 25 moderate, < 35 warm,
    < 50 hot, иначе extreme
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final

from src.calculators.conversion.engine import (
    ConversionInput,
    ConversionResult,
    UnitConverter,
)
from src.calculators.conversion.tables import TEMPERATURE
from src.core.math.numerical_safeguards import round_half_up

# Точность значений по шкалам для отображения
TEMPERATURE_DECIMALS: Final[int] = 2


# =============================================================================
# ENUMS
# =============================================================================


class TemperatureRange(str, Enum):
    """Диапазон температуры по шкале Цельсия"""

    FREEZING = "freezing"
    COLD = "cold"
    COOL = "cool"
    MODERATE = "moderate"
    WARM = "warm"
    HOT = "hot"
    EXTREME = "extreme"


# Верхние (строгие) границы диапазонов в °C, по возрастанию
_RANGE_THRESHOLDS: Final[tuple[tuple[float, TemperatureRange], ...]] = (
    (-20.0, TemperatureRange.FREEZING),
    (0.0, TemperatureRange.COLD),
    (15.0, TemperatureRange.COOL),
    (25.0, TemperatureRange.MODERATE),
    (35.0, TemperatureRange.WARM),
    (50.0, TemperatureRange.HOT),
)


def classify_temperature(celsius: float) -> TemperatureRange:
    """
    Классификация температуры по диапазонам.

    Examples:
        >>> classify_temperature(-25.0)
        <TemperatureRange.FREEZING: 'freezing'>
        >>> classify_temperature(20.0)
        <TemperatureRange.MODERATE: 'moderate'>
    """
    for threshold, band in _RANGE_THRESHOLDS:
        if celsius < threshold:
            return band
    return TemperatureRange.EXTREME


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class TemperatureResult:
    """Результат конверсии температуры со значениями во всех шкалах."""

    conversion: ConversionResult
    celsius: float
    fahrenheit: float
    kelvin: float
    range: TemperatureRange


# =============================================================================
# CALCULATOR
# =============================================================================


class TemperatureConverter(UnitConverter):
    """Температура (base: kelvin)."""

    name = "temperature"
    domain = TEMPERATURE

    def compute(self, inputs: ConversionInput) -> TemperatureResult | None:
        conversion = super().compute(inputs)
        if conversion is None:
            return None

        scales = {item.unit_id: item.value for item in conversion.conversions}
        celsius = scales["celsius"]

        return TemperatureResult(
            conversion=conversion,
            celsius=round_half_up(celsius, TEMPERATURE_DECIMALS),
            fahrenheit=round_half_up(scales["fahrenheit"], TEMPERATURE_DECIMALS),
            kelvin=round_half_up(scales["kelvin"], TEMPERATURE_DECIMALS),
            range=classify_temperature(celsius),
        )
