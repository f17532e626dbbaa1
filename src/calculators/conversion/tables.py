"""
Conversion Tables — Статические таблицы единиц по доменам

Каждый домен маршрутизирует конверсии через свою базовую единицу:
- length: meter
- volume: liter
- weight: kilogram
- area: square meter
- speed: meter per second
- temperature: kelvin (аффинная шкала)

Таблицы неизменяемы и создаются один раз при импорте модуля.
"""

from types import MappingProxyType
from typing import Final, Mapping

from src.core.domain.units import MeasurementSystem, Unit, UnitDomain

_M = MeasurementSystem.METRIC
_I = MeasurementSystem.IMPERIAL
_US = MeasurementSystem.US_IMPERIAL
_UK = MeasurementSystem.UK_IMPERIAL
_SCI = MeasurementSystem.SCIENTIFIC
_O = MeasurementSystem.OTHER

# Потолок модуля входного значения по умолчанию
DEFAULT_MAX_VALUE: Final[float] = 1e15

# Потолок для скоростей
SPEED_MAX_VALUE: Final[float] = 1e9

# Абсолютный ноль в базовой единице температуры (кельвины)
ABSOLUTE_ZERO_K: Final[float] = 0.0

CELSIUS_OFFSET_K: Final[float] = 273.15


# =============================================================================
# LENGTH (base: meter)
# =============================================================================

LENGTH: Final[UnitDomain] = UnitDomain(
    name="length",
    base_unit="m",
    units=(
        Unit(id="mm", system=_M, factor=0.001, abbreviation="mm"),
        Unit(id="cm", system=_M, factor=0.01, abbreviation="cm"),
        Unit(id="m", system=_M, factor=1.0, abbreviation="m"),
        Unit(id="km", system=_M, factor=1000.0, abbreviation="km"),
        Unit(id="in", system=_I, factor=0.0254, abbreviation="in"),
        Unit(id="ft", system=_I, factor=0.3048, abbreviation="ft"),
        Unit(id="yd", system=_I, factor=0.9144, abbreviation="yd"),
        Unit(id="mi", system=_I, factor=1609.344, abbreviation="mi"),
        Unit(id="nmi", system=_O, factor=1852.0, abbreviation="nmi"),
    ),
    max_value=DEFAULT_MAX_VALUE,
)


# =============================================================================
# VOLUME (base: liter)
# =============================================================================

VOLUME: Final[UnitDomain] = UnitDomain(
    name="volume",
    base_unit="liter",
    units=(
        Unit(id="milliliter", system=_M, factor=0.001, abbreviation="mL"),
        Unit(id="liter", system=_M, factor=1.0, abbreviation="L"),
        Unit(id="cubic-meter", system=_M, factor=1000.0, abbreviation="m³"),
        Unit(id="teaspoon-us", system=_US, factor=0.00492892, abbreviation="tsp"),
        Unit(id="tablespoon-us", system=_US, factor=0.0147868, abbreviation="tbsp"),
        Unit(id="fluid-ounce-us", system=_US, factor=0.0295735, abbreviation="fl oz"),
        Unit(id="cup-us", system=_US, factor=0.236588, abbreviation="cup"),
        Unit(id="pint-us", system=_US, factor=0.473176, abbreviation="pt"),
        Unit(id="quart-us", system=_US, factor=0.946353, abbreviation="qt"),
        Unit(id="gallon-us", system=_US, factor=3.78541, abbreviation="gal"),
        Unit(id="fluid-ounce-uk", system=_UK, factor=0.0284131, abbreviation="fl oz (UK)"),
        Unit(id="pint-uk", system=_UK, factor=0.568261, abbreviation="pt (UK)"),
        Unit(id="quart-uk", system=_UK, factor=1.13652, abbreviation="qt (UK)"),
        Unit(id="gallon-uk", system=_UK, factor=4.54609, abbreviation="gal (UK)"),
        Unit(id="cubic-inch", system=_O, factor=0.0163871, abbreviation="in³"),
        Unit(id="cubic-foot", system=_O, factor=28.3168, abbreviation="ft³"),
    ),
    max_value=DEFAULT_MAX_VALUE,
)


# =============================================================================
# WEIGHT (base: kilogram)
# =============================================================================

WEIGHT: Final[UnitDomain] = UnitDomain(
    name="weight",
    base_unit="kg",
    units=(
        Unit(id="mg", system=_M, factor=1e-6, abbreviation="mg"),
        Unit(id="g", system=_M, factor=0.001, abbreviation="g"),
        Unit(id="kg", system=_M, factor=1.0, abbreviation="kg"),
        Unit(id="tonne", system=_M, factor=1000.0, abbreviation="t"),
        Unit(id="oz", system=_I, factor=0.0283495, abbreviation="oz"),
        Unit(id="lb", system=_I, factor=0.453592, abbreviation="lb"),
        Unit(id="stone", system=_I, factor=6.35029, abbreviation="st"),
        Unit(id="ton", system=_I, factor=907.185, abbreviation="ton"),
    ),
    max_value=DEFAULT_MAX_VALUE,
)


# =============================================================================
# AREA (base: square meter)
# =============================================================================

AREA: Final[UnitDomain] = UnitDomain(
    name="area",
    base_unit="m2",
    units=(
        Unit(id="mm2", system=_M, factor=1e-6, abbreviation="mm²"),
        Unit(id="cm2", system=_M, factor=1e-4, abbreviation="cm²"),
        Unit(id="m2", system=_M, factor=1.0, abbreviation="m²"),
        Unit(id="hectare", system=_M, factor=1e4, abbreviation="ha"),
        Unit(id="km2", system=_M, factor=1e6, abbreviation="km²"),
        Unit(id="in2", system=_I, factor=0.00064516, abbreviation="in²"),
        Unit(id="ft2", system=_I, factor=0.09290304, abbreviation="ft²"),
        Unit(id="yd2", system=_I, factor=0.83612736, abbreviation="yd²"),
        Unit(id="acre", system=_I, factor=4046.8564224, abbreviation="ac"),
        Unit(id="mi2", system=_I, factor=2589988.110336, abbreviation="mi²"),
    ),
    max_value=DEFAULT_MAX_VALUE,
)


# =============================================================================
# SPEED (base: meter per second)
# =============================================================================

SPEED: Final[UnitDomain] = UnitDomain(
    name="speed",
    base_unit="ms",
    units=(
        Unit(id="kmh", system=_M, factor=1.0 / 3.6, abbreviation="km/h"),
        Unit(id="ms", system=_M, factor=1.0, abbreviation="m/s"),
        Unit(id="mph", system=_I, factor=0.44704, abbreviation="mph"),
        Unit(id="fts", system=_I, factor=0.3048, abbreviation="ft/s"),
        Unit(id="knots", system=_O, factor=1852.0 / 3600.0, abbreviation="kn"),
    ),
    max_value=SPEED_MAX_VALUE,
)


# =============================================================================
# TEMPERATURE (base: kelvin)
# =============================================================================

TEMPERATURE: Final[UnitDomain] = UnitDomain(
    name="temperature",
    base_unit="kelvin",
    units=(
        Unit(
            id="celsius",
            system=_M,
            factor=1.0,
            offset=CELSIUS_OFFSET_K,
            abbreviation="°C",
        ),
        Unit(
            id="fahrenheit",
            system=_I,
            factor=5.0 / 9.0,
            offset=CELSIUS_OFFSET_K - 32.0 * 5.0 / 9.0,
            abbreviation="°F",
        ),
        Unit(id="kelvin", system=_SCI, factor=1.0, abbreviation="K"),
    ),
    max_value=DEFAULT_MAX_VALUE,
    allow_negative=True,
    min_base_value=ABSOLUTE_ZERO_K,
)


# =============================================================================
# REGISTRY
# =============================================================================

DOMAINS: Final[Mapping[str, UnitDomain]] = MappingProxyType(
    {
        domain.name: domain
        for domain in (LENGTH, VOLUME, WEIGHT, AREA, SPEED, TEMPERATURE)
    }
)
