"""
Units — Модели единиц измерения и доменов конверсии

Единственный допустимый способ перевода величины между единицами одного
домена (длина, объём, масса, площадь, скорость, температура) — через
базовую единицу домена:

    base = value × factor + offset
    value = (base - offset) / factor

Для мультипликативных единиц offset = 0 (метры, литры, килограммы).
Температура — аффинная шкала с базой в кельвинах.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. factor > 0 для каждой единицы (валидируется Pydantic)
2. Идентификаторы единиц уникальны внутри домена
3. Ровно одна единица домена имеет factor == 1 и offset == 0 (базовая)
4. Модели неизменяемы (frozen=True)
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UnknownUnitError(ValueError):
    """Идентификатор единицы отсутствует в таблице домена."""


# =============================================================================
# ENUMS
# =============================================================================


class MeasurementSystem(str, Enum):
    """Система измерений, к которой относится единица"""

    METRIC = "metric"
    IMPERIAL = "imperial"
    US_IMPERIAL = "us-imperial"
    UK_IMPERIAL = "uk-imperial"
    SCIENTIFIC = "scientific"
    OTHER = "other"


# =============================================================================
# MODELS
# =============================================================================


class Unit(BaseModel):
    """
    Единица измерения.

    Attributes:
        id: Идентификатор (например, 'km', 'gallon-us')
        system: Система измерений
        factor: Множитель перевода в базовую единицу (> 0)
        offset: Сдвиг шкалы (только для аффинных единиц, например температуры)
        abbreviation: Отображаемое сокращение
    """

    id: str = Field(..., min_length=1, description="Идентификатор единицы")
    system: MeasurementSystem = Field(..., description="Система измерений")
    factor: float = Field(..., gt=0, description="Множитель перевода в базовую единицу")
    offset: float = Field(0.0, description="Сдвиг шкалы относительно базовой единицы")
    abbreviation: str = Field(..., min_length=1, description="Сокращение для отображения")

    model_config = {"frozen": True}

    def to_base(self, value: float) -> float:
        """Перевод значения в базовую единицу домена."""
        return value * self.factor + self.offset

    def from_base(self, base_value: float) -> float:
        """Перевод значения из базовой единицы домена."""
        return (base_value - self.offset) / self.factor


class UnitDomain(BaseModel):
    """
    Таблица единиц одного домена конверсии.

    Attributes:
        name: Имя домена ('length', 'volume', ...)
        base_unit: Идентификатор базовой единицы
        units: Единицы домена (порядок сохраняется для fan-out конверсии)
        max_value: Потолок модуля входного значения
        allow_negative: Допустимы ли отрицательные значения
        min_base_value: Нижняя граница в базовых единицах (абсолютный ноль)
    """

    name: str = Field(..., min_length=1, description="Имя домена")
    base_unit: str = Field(..., min_length=1, description="Базовая единица")
    units: tuple[Unit, ...] = Field(..., min_length=1, description="Единицы домена")
    max_value: float = Field(1e15, gt=0, description="Потолок входного значения")
    allow_negative: bool = Field(False, description="Разрешены ли отрицательные значения")
    min_base_value: float | None = Field(None, description="Нижняя граница в базовых единицах")

    model_config = {"frozen": True}

    @field_validator("units")
    @classmethod
    def validate_unique_ids(cls, v: tuple[Unit, ...]) -> tuple[Unit, ...]:
        """Проверка уникальности идентификаторов единиц"""
        ids = [unit.id for unit in v]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate unit ids in domain: {ids}")
        return v

    @model_validator(mode="after")
    def validate_base_unit(self) -> "UnitDomain":
        """Проверка, что базовая единица присутствует и имеет factor=1, offset=0"""
        base = next((unit for unit in self.units if unit.id == self.base_unit), None)
        if base is None:
            raise ValueError(f"Base unit {self.base_unit!r} not found in domain {self.name!r}")
        if base.factor != 1.0 or base.offset != 0.0:
            raise ValueError(f"Base unit {self.base_unit!r} must have factor=1 and offset=0")
        return self

    @property
    def unit_ids(self) -> tuple[str, ...]:
        """Идентификаторы единиц в порядке таблицы."""
        return tuple(unit.id for unit in self.units)

    def has_unit(self, unit_id: str) -> bool:
        """Есть ли единица в домене."""
        return unit_id in self.unit_ids

    def get(self, unit_id: str) -> Unit:
        """
        Единица по идентификатору.

        Raises:
            UnknownUnitError: Если единица не найдена
        """
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        raise UnknownUnitError(f"Unknown unit {unit_id!r} for domain {self.name!r}")
