"""
Unit conversion calculators.

Length, volume, weight, area, speed and temperature conversion through the
base unit of each domain.
"""

from src.calculators.conversion.engine import (
    AreaConverter,
    ConversionConfig,
    ConversionInput,
    ConversionResult,
    ConvertedValue,
    LengthConverter,
    SpeedConverter,
    UnitConverter,
    VolumeConverter,
    WeightConverter,
    conversion_factor,
    convert,
    convert_to_all,
    to_base,
    validate_conversion,
)
from src.calculators.conversion.tables import (
    AREA,
    DOMAINS,
    LENGTH,
    SPEED,
    TEMPERATURE,
    VOLUME,
    WEIGHT,
)
from src.calculators.conversion.temperature import (
    TemperatureConverter,
    TemperatureRange,
    TemperatureResult,
    classify_temperature,
)

__all__ = [
    # Tables
    "AREA",
    "DOMAINS",
    "LENGTH",
    "SPEED",
    "TEMPERATURE",
    "VOLUME",
    "WEIGHT",
    # Engine
    "ConversionConfig",
    "ConversionInput",
    "ConversionResult",
    "ConvertedValue",
    "conversion_factor",
    "convert",
    "convert_to_all",
    "to_base",
    "validate_conversion",
    # Calculators
    "UnitConverter",
    "LengthConverter",
    "VolumeConverter",
    "WeightConverter",
    "AreaConverter",
    "SpeedConverter",
    "TemperatureConverter",
    # Temperature
    "TemperatureRange",
    "TemperatureResult",
    "classify_temperature",
]
