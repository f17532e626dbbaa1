"""
Validation — Результаты валидации и неизменяемый аккумулятор ошибок

Валидация никогда не выбрасывает исключений: она возвращает полный список
нарушенных ограничений, привязанных к полям входа, чтобы UI мог подсветить
все проблемы сразу.

Таксономия ошибок (ErrorKind):
- missing-required-field: обязательное поле не заполнено
- out-of-range: отрицательное значение там, где запрещено, или превышение потолка
- invalid-format: нечисловое/бесконечное значение, некорректная строка "HH:MM" и т.п.
- domain-precondition-violated: нулевое стандартное отклонение, нулевая
  начальная инвестиция, неизвестная единица измерения

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. ValidationCollector неизменяем: каждый add/warn возвращает новый экземпляр
2. Порядок ошибок совпадает с порядком проверок
3. По каждому полю проверки числа дают не более одной ошибки
4. Предупреждения (warnings) не влияют на valid
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable


# =============================================================================
# ENUMS
# =============================================================================


class ErrorKind(str, Enum):
    """Категория нарушения ограничения"""

    MISSING_REQUIRED_FIELD = "missing-required-field"
    OUT_OF_RANGE = "out-of-range"
    INVALID_FORMAT = "invalid-format"
    DOMAIN_PRECONDITION_VIOLATED = "domain-precondition-violated"


# =============================================================================
# VALUE OBJECTS
# =============================================================================


@dataclass(frozen=True)
class FieldError:
    """Нарушенное ограничение для конкретного поля входа."""

    field: str
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class ValidationWarning:
    """Некритичное замечание (малая выборка, константные данные и т.п.)."""

    field: str
    code: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """
    Итог валидации входа калькулятора.

    Attributes:
        errors: Упорядоченный список нарушений
        warnings: Упорядоченный список предупреждений
    """

    errors: tuple[FieldError, ...] = ()
    warnings: tuple[ValidationWarning, ...] = ()

    @property
    def valid(self) -> bool:
        """True если нет ни одной ошибки."""
        return not self.errors

    @property
    def fields(self) -> tuple[str, ...]:
        """Поля с ошибками в порядке появления (без повторов)."""
        return tuple(dict.fromkeys(error.field for error in self.errors))

    def errors_for(self, field_name: str) -> tuple[FieldError, ...]:
        """Ошибки конкретного поля."""
        return tuple(error for error in self.errors if error.field == field_name)

    def has_error(self, field_name: str, kind: ErrorKind | None = None) -> bool:
        """Есть ли ошибка у поля (опционально — заданной категории)."""
        return any(kind is None or error.kind == kind for error in self.errors_for(field_name))

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Объединение двух результатов (порядок сохраняется)."""
        return ValidationResult(
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
        )

    @classmethod
    def ok(cls) -> "ValidationResult":
        """Успешный результат без ошибок."""
        return cls()


# =============================================================================
# АККУМУЛЯТОР
# =============================================================================


@dataclass(frozen=True)
class ValidationCollector:
    """
    Неизменяемый аккумулятор нарушений.

    Examples:
        >>> collector = ValidationCollector()
        >>> collector = collector.add("value", ErrorKind.OUT_OF_RANGE, "Value cannot be negative")
        >>> collector.result().valid
        False
    """

    errors: tuple[FieldError, ...] = field(default_factory=tuple)
    warnings: tuple[ValidationWarning, ...] = field(default_factory=tuple)

    def add(self, field_name: str, kind: ErrorKind, message: str) -> "ValidationCollector":
        """Новый аккумулятор с добавленной ошибкой."""
        return replace(self, errors=self.errors + (FieldError(field_name, kind, message),))

    def warn(self, field_name: str, code: str, message: str) -> "ValidationCollector":
        """Новый аккумулятор с добавленным предупреждением."""
        return replace(
            self, warnings=self.warnings + (ValidationWarning(field_name, code, message),)
        )

    def extend(self, result: ValidationResult) -> "ValidationCollector":
        """Новый аккумулятор со всеми ошибками и предупреждениями result."""
        return replace(
            self,
            errors=self.errors + result.errors,
            warnings=self.warnings + result.warnings,
        )

    def has_error(self, field_name: str) -> bool:
        """Зафиксирована ли уже ошибка по полю."""
        return any(error.field == field_name for error in self.errors)

    def result(self) -> ValidationResult:
        """Заморозка в ValidationResult."""
        return ValidationResult(errors=self.errors, warnings=self.warnings)


# =============================================================================
# ТИПОВЫЕ ПРОВЕРКИ
# =============================================================================


def check_number(
    collector: ValidationCollector,
    field_name: str,
    value: float | None,
    *,
    label: str,
    required: bool = True,
    min_value: float | None = None,
    min_exclusive: bool = False,
    max_value: float | None = None,
    whole: bool = False,
) -> ValidationCollector:
    """
    Проверка числового поля (не более одной ошибки на поле).

    Порядок: обязательность → конечность → целочисленность → нижняя граница →
    верхняя граница.

    Args:
        collector: Текущий аккумулятор
        field_name: Имя поля во входе
        value: Значение (None если не заполнено)
        label: Отображаемое имя для сообщения
        required: Обязательно ли поле
        min_value: Нижняя граница (None — без границы)
        min_exclusive: Нижняя граница строгая (value > min_value)
        max_value: Верхняя граница включительно (None — без границы)
        whole: Значение обязано быть целым

    Returns:
        Новый аккумулятор
    """
    if value is None:
        if required:
            return collector.add(
                field_name, ErrorKind.MISSING_REQUIRED_FIELD, f"{label} is required"
            )
        return collector

    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return collector.add(
            field_name, ErrorKind.INVALID_FORMAT, f"{label} must be a finite number"
        )

    if whole and value != math.floor(value):
        return collector.add(
            field_name, ErrorKind.INVALID_FORMAT, f"{label} must be a whole number"
        )

    if min_value is not None:
        below = value <= min_value if min_exclusive else value < min_value
        if below:
            if min_value == 0 and not min_exclusive:
                message = f"{label} cannot be negative"
            elif min_exclusive:
                message = f"{label} must be greater than {min_value:g}"
            else:
                message = f"{label} must be at least {min_value:g}"
            return collector.add(field_name, ErrorKind.OUT_OF_RANGE, message)

    if max_value is not None and value > max_value:
        return collector.add(
            field_name, ErrorKind.OUT_OF_RANGE, f"{label} cannot exceed {max_value:g}"
        )

    return collector


def check_choice(
    collector: ValidationCollector,
    field_name: str,
    value: Any,
    choices: Iterable[str],
    *,
    label: str,
    required: bool = True,
) -> ValidationCollector:
    """
    Проверка значения из фиксированного набора (единица измерения, режим).

    Неизвестное значение — domain-precondition-violated.
    """
    if value is None or value == "":
        if required:
            return collector.add(
                field_name, ErrorKind.MISSING_REQUIRED_FIELD, f"{label} is required"
            )
        return collector

    allowed = tuple(choices)
    if value not in allowed:
        return collector.add(
            field_name,
            ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
            f"Unknown {label.lower()}: {value!r}",
        )

    return collector


def check_required(
    collector: ValidationCollector,
    field_name: str,
    value: Any,
    *,
    label: str,
) -> ValidationCollector:
    """Проверка обязательности поля произвольного типа."""
    if value is None or value == "":
        return collector.add(field_name, ErrorKind.MISSING_REQUIRED_FIELD, f"{label} is required")
    return collector
