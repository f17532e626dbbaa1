"""
JSON Schema Contract Validators

Модуль для валидации сырых входов калькуляторов согласно формальным JSON
Schema контрактам на границе движка. Использует библиотеку jsonschema.

Контракт проверяет структуру (типы полей, формат строк "HH:MM" и дат,
допустимые режимы, отсутствие лишних полей). Диапазоны значений и доменные
ограничения проверяет сам калькулятор.

Ошибки jsonschema отображаются в общую таксономию ErrorKind:
- required → missing-required-field
- minimum/maximum/exclusiveMinimum/exclusiveMaximum → out-of-range
- enum/const → domain-precondition-violated
- всё остальное (type, pattern, additionalProperties, ...) → invalid-format

Схемы лежат в schema/ рядом с модулем: <calculator>.json
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from src.core.domain.validation import ErrorKind, ValidationCollector, ValidationResult


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Находит схемы в каталоге schema/ пакета contracts.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        """Каталог со схемами."""
        return self._schema_dir

    def available(self) -> tuple[str, ...]:
        """Имена всех доступных схем (без расширения), отсортированные."""
        return tuple(sorted(path.stem for path in self._schema_dir.glob("*.json")))

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'roi')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# ERROR MAPPING
# =============================================================================

_RANGE_KEYWORDS = frozenset({"minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum"})
_CHOICE_KEYWORDS = frozenset({"enum", "const"})


def _error_kind(error: ValidationError) -> ErrorKind:
    """Категория ошибки по ключевому слову JSON Schema."""
    if error.validator == "required":
        return ErrorKind.MISSING_REQUIRED_FIELD
    if error.validator in _RANGE_KEYWORDS:
        return ErrorKind.OUT_OF_RANGE
    if error.validator in _CHOICE_KEYWORDS:
        return ErrorKind.DOMAIN_PRECONDITION_VIOLATED
    return ErrorKind.INVALID_FORMAT


def _error_field(error: ValidationError) -> str:
    """Путь поля в нотации a.b.0 ('$' для корня)."""
    path = ".".join(str(part) for part in error.absolute_path)
    return path or "$"


# =============================================================================
# CONTRACT VALIDATOR
# =============================================================================


class ContractValidator:
    """
    Валидатор сырого входа калькулятора против JSON Schema.

    Инкапсулирует логику валидации данных и отображение ошибок jsonschema
    в ValidationResult (все ошибки, не только первая).
    """

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        """
        Инициализация валидатора.

        Args:
            schema_name: Имя схемы для валидации
            loader: Загрузчик схем (default: глобальный)
        """
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """
        Итератор по всем ошибкам валидации.

        Yields:
            ValidationError объекты для каждой найденной ошибки
        """
        return self.validator.iter_errors(data)

    def collect(self, data: Any) -> ValidationResult:
        """
        Все нарушения контракта в виде ValidationResult.

        Ошибки упорядочены по пути поля, по одной ошибке на поле.

        Args:
            data: Сырые данные (ожидается dict)

        Returns:
            ValidationResult с ошибками контракта
        """
        collector = ValidationCollector()
        errors = sorted(self.iter_errors(data), key=lambda e: (list(map(str, e.absolute_path)), e.validator))

        for error in errors:
            if error.validator == "required" and isinstance(error.instance, dict):
                for name in error.validator_value:
                    if name not in error.instance and not collector.has_error(name):
                        collector = collector.add(
                            name, ErrorKind.MISSING_REQUIRED_FIELD, f"{name} is required"
                        )
                continue

            if error.validator == "additionalProperties" and isinstance(error.instance, dict):
                allowed = set(error.schema.get("properties", {}))
                for name in sorted(set(error.instance) - allowed):
                    if not collector.has_error(name):
                        collector = collector.add(
                            name, ErrorKind.INVALID_FORMAT, f"Unexpected field: {name}"
                        )
                continue

            field_name = _error_field(error)
            if collector.has_error(field_name):
                continue
            collector = collector.add(field_name, _error_kind(error), error.message)

        return collector.result()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_contract(schema_name: str, data: Any) -> ValidationResult:
    """
    Проверка данных против контракта калькулятора.

    Args:
        schema_name: Имя схемы (имя калькулятора)
        data: Сырые данные

    Returns:
        ValidationResult с ошибками контракта
    """
    return ContractValidator(schema_name).collect(data)


def available_contracts() -> tuple[str, ...]:
    """Имена всех контрактов, поставляемых с пакетом."""
    return _SCHEMA_LOADER.available()
