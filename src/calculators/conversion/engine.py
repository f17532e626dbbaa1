"""
Unit Conversion Engine — Конверсия через базовую единицу домена

Алгоритм:
    to_base = value × unit[from].factor (+ offset для аффинных шкал)
    result  = (to_base - unit[to].offset) / unit[to].factor

to_base и result округляются с фиксированной точностью (6 знаков), чтобы
убрать накопление ошибки float. Для мультипликативных доменов значения
|x| < 1 округляются до 6 значащих цифр, поэтому мелкие результаты
(мм → мили) не обнуляются. Для аффинных шкал (температура) точность
абсолютная: 32 °F даёт ровно 0 °C.

Fan-out: convert_to_all переводит одно значение сразу во все единицы домена.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. A → B → A восстанавливает значение с относительной точностью 1e-4
2. Неизвестная единица, отрицательное/бесконечное значение, превышение
   потолка домена — ошибки валидации, не молчаливый clamp
3. Функции конверсии не имеют побочных эффектов
"""

from dataclasses import dataclass
from typing import ClassVar, Final

from src.calculators.base import CalculationInput, Calculator
from src.calculators.conversion.tables import AREA, LENGTH, SPEED, VOLUME, WEIGHT
from src.core.domain.units import MeasurementSystem, Unit, UnitDomain
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
    check_choice,
    check_number,
)
from src.core.math.numerical_safeguards import (
    CONVERSION_DECIMALS,
    round_conversion,
    round_half_up,
)

# Допуск сравнения с нижней границей домена (абсолютный ноль)
MIN_BASE_TOLERANCE: Final[float] = 1e-9


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ConversionConfig:
    """Конфигурация конвертера.

    decimals — точность to_base и результата.
    """

    decimals: int = CONVERSION_DECIMALS


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class ConvertedValue:
    """Значение в одной единице домена (элемент fan-out)."""

    unit_id: str
    abbreviation: str
    system: MeasurementSystem
    value: float


@dataclass(frozen=True)
class ConversionResult:
    """Результат конверсии."""

    domain: str
    value: float
    from_unit: str
    to_unit: str
    base_value: float
    result: float
    # Множитель from → to (None для аффинных шкал)
    factor: float | None
    conversions: tuple[ConvertedValue, ...]


# =============================================================================
# CORE FUNCTIONS
# =============================================================================


def _is_affine(*units: Unit) -> bool:
    return any(unit.offset != 0.0 for unit in units)


def _round(value: float, decimals: int, affine: bool) -> float:
    if affine:
        return round_half_up(value, decimals)
    return round_conversion(value, decimals)


def to_base(
    value: float,
    unit_id: str,
    domain: UnitDomain,
    decimals: int = CONVERSION_DECIMALS,
) -> float:
    """
    Перевод значения в базовую единицу домена (с округлением).

    Raises:
        UnknownUnitError: Если единица не найдена в домене
    """
    unit = domain.get(unit_id)
    return _round(unit.to_base(value), decimals, _is_affine(unit))


def convert(
    value: float,
    from_unit: str,
    to_unit: str,
    domain: UnitDomain,
    decimals: int = CONVERSION_DECIMALS,
) -> float:
    """
    Конверсия значения между двумя единицами одного домена.

    Args:
        value: Исходное значение
        from_unit: Идентификатор исходной единицы
        to_unit: Идентификатор целевой единицы
        domain: Таблица единиц домена
        decimals: Точность округления

    Returns:
        Значение в целевой единице

    Raises:
        UnknownUnitError: Если единица не найдена в домене

    Examples:
        >>> convert(1.0, "km", "m", LENGTH)
        1000.0
    """
    source = domain.get(from_unit)
    target = domain.get(to_unit)
    affine = _is_affine(source, target)

    base_value = _round(source.to_base(value), decimals, affine)
    return _round(target.from_base(base_value), decimals, affine)


def convert_to_all(
    value: float,
    from_unit: str,
    domain: UnitDomain,
    decimals: int = CONVERSION_DECIMALS,
) -> tuple[ConvertedValue, ...]:
    """
    Fan-out: значение во всех единицах домена (в порядке таблицы).

    Raises:
        UnknownUnitError: Если исходная единица не найдена в домене
    """
    source = domain.get(from_unit)
    base_value = _round(source.to_base(value), decimals, _is_affine(source))

    return tuple(
        ConvertedValue(
            unit_id=unit.id,
            abbreviation=unit.abbreviation,
            system=unit.system,
            value=_round(unit.from_base(base_value), decimals, _is_affine(source, unit)),
        )
        for unit in domain.units
    )


def conversion_factor(from_unit: str, to_unit: str, domain: UnitDomain) -> float | None:
    """
    Прямой множитель from → to (None для аффинных шкал, где множителя нет).

    Examples:
        >>> round(conversion_factor("ft", "in", LENGTH), 6)
        12.0
    """
    source = domain.get(from_unit)
    target = domain.get(to_unit)
    if _is_affine(source, target):
        return None
    return source.factor / target.factor


def validate_conversion(
    domain: UnitDomain,
    value: float | None,
    from_unit: str | None,
    to_unit: str | None,
) -> ValidationResult:
    """
    Валидация входа конверсии для домена.

    Проверки:
    - value: обязательное, конечное, не отрицательное (если домен не допускает),
      |value| не больше потолка домена
    - from_unit/to_unit: обязательные, из таблицы домена
    - нижняя граница в базовых единицах (абсолютный ноль для температуры)
    """
    label = domain.name.capitalize()
    collector = ValidationCollector()

    collector = check_number(
        collector,
        "value",
        value,
        label=label,
        min_value=-domain.max_value if domain.allow_negative else 0.0,
        max_value=domain.max_value,
    )
    collector = check_choice(collector, "from_unit", from_unit, domain.unit_ids, label="From unit")
    collector = check_choice(collector, "to_unit", to_unit, domain.unit_ids, label="To unit")

    if (
        domain.min_base_value is not None
        and not collector.has_error("value")
        and domain.has_unit(from_unit)
    ):
        base_value = domain.get(from_unit).to_base(value)
        if base_value < domain.min_base_value - MIN_BASE_TOLERANCE:
            collector = collector.add(
                "value",
                ErrorKind.OUT_OF_RANGE,
                f"{label} cannot be below absolute zero",
            )

    return collector.result()


# =============================================================================
# CALCULATOR
# =============================================================================


class ConversionInput(CalculationInput):
    """Вход конвертера: {value, from_unit, to_unit}."""

    value: float | None = None
    from_unit: str | None = None
    to_unit: str | None = None


class UnitConverter(Calculator[ConversionInput, ConversionResult]):
    """Конвертер единиц одного домена.

    Подклассы задают domain; все конвертеры используют общий контракт
    unit_conversion.
    """

    domain: ClassVar[UnitDomain]
    input_model = ConversionInput
    contract = "unit_conversion"

    def __init__(self, config: ConversionConfig | None = None):
        """Инициализация конвертера.

        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or ConversionConfig()

    def validate(self, inputs: ConversionInput) -> ValidationResult:
        return validate_conversion(self.domain, inputs.value, inputs.from_unit, inputs.to_unit)

    def compute(self, inputs: ConversionInput) -> ConversionResult | None:
        decimals = self.config.decimals
        value, from_unit, to_unit = inputs.value, inputs.from_unit, inputs.to_unit

        return ConversionResult(
            domain=self.domain.name,
            value=value,
            from_unit=from_unit,
            to_unit=to_unit,
            base_value=to_base(value, from_unit, self.domain, decimals),
            result=convert(value, from_unit, to_unit, self.domain, decimals),
            factor=conversion_factor(from_unit, to_unit, self.domain),
            conversions=convert_to_all(value, from_unit, self.domain, decimals),
        )


class LengthConverter(UnitConverter):
    """Длина (base: meter)."""

    name = "length"
    domain = LENGTH


class VolumeConverter(UnitConverter):
    """Объём (base: liter)."""

    name = "volume"
    domain = VOLUME


class WeightConverter(UnitConverter):
    """Масса (base: kilogram)."""

    name = "weight"
    domain = WEIGHT


class AreaConverter(UnitConverter):
    """Площадь (base: square meter)."""

    name = "area"
    domain = AREA


class SpeedConverter(UnitConverter):
    """Скорость (base: meter per second)."""

    name = "speed"
    domain = SPEED
