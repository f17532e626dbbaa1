"""
Тесты для Validation — аккумулятор ошибок и типовые проверки

Проверяемые инварианты:
1. ValidationCollector неизменяем
2. Порядок ошибок совпадает с порядком проверок
3. check_number даёт не более одной ошибки на поле
4. Предупреждения не влияют на valid
"""

import pytest

from src.core.domain.validation import (
    ErrorKind,
    FieldError,
    ValidationCollector,
    ValidationResult,
    check_choice,
    check_number,
    check_required,
)


class TestValidationCollector:
    """Тесты для ValidationCollector"""

    def test_add_returns_new_instance(self) -> None:
        """add не изменяет исходный аккумулятор"""
        empty = ValidationCollector()
        updated = empty.add("value", ErrorKind.OUT_OF_RANGE, "Value cannot be negative")

        assert empty.errors == ()
        assert updated.errors == (
            FieldError("value", ErrorKind.OUT_OF_RANGE, "Value cannot be negative"),
        )

    def test_order_preserved(self) -> None:
        """Ошибки в порядке добавления"""
        collector = (
            ValidationCollector()
            .add("b", ErrorKind.MISSING_REQUIRED_FIELD, "B is required")
            .add("a", ErrorKind.INVALID_FORMAT, "A must be a finite number")
        )
        assert collector.result().fields == ("b", "a")

    def test_warnings_do_not_invalidate(self) -> None:
        """Предупреждения не делают результат невалидным"""
        result = ValidationCollector().warn("data", "small_sample", "Small sample").result()
        assert result.valid
        assert result.warnings[0].code == "small_sample"

    def test_extend(self) -> None:
        """extend переносит ошибки и предупреждения"""
        other = (
            ValidationCollector()
            .add("x", ErrorKind.OUT_OF_RANGE, "X cannot exceed 10")
            .warn("x", "note", "Note")
            .result()
        )
        merged = ValidationCollector().extend(other).result()
        assert merged.errors == other.errors
        assert merged.warnings == other.warnings


class TestValidationResult:
    """Тесты для ValidationResult"""

    def test_ok(self) -> None:
        """Пустой результат валиден"""
        assert ValidationResult.ok().valid

    def test_errors_for_and_has_error(self) -> None:
        """Поиск ошибок по полю и категории"""
        result = (
            ValidationCollector()
            .add("rate", ErrorKind.OUT_OF_RANGE, "Rate cannot exceed 100")
            .add("years", ErrorKind.MISSING_REQUIRED_FIELD, "Years is required")
            .result()
        )
        assert not result.valid
        assert len(result.errors_for("rate")) == 1
        assert result.has_error("rate", ErrorKind.OUT_OF_RANGE)
        assert not result.has_error("rate", ErrorKind.INVALID_FORMAT)
        assert not result.has_error("principal")

    def test_merge_keeps_order(self) -> None:
        """merge: сначала ошибки self, затем other"""
        first = ValidationCollector().add("a", ErrorKind.OUT_OF_RANGE, "A").result()
        second = ValidationCollector().add("b", ErrorKind.OUT_OF_RANGE, "B").result()
        assert first.merge(second).fields == ("a", "b")


class TestCheckNumber:
    """Тесты для check_number"""

    def _errors(self, value: object, **kwargs: object) -> tuple[FieldError, ...]:
        collector = check_number(ValidationCollector(), "value", value, label="Value", **kwargs)  # type: ignore[arg-type]
        return collector.errors

    def test_valid_value(self) -> None:
        """Значение в диапазоне — без ошибок"""
        assert self._errors(5.0, min_value=0, max_value=10) == ()

    def test_missing_required(self) -> None:
        """None для обязательного поля"""
        errors = self._errors(None)
        assert errors[0].kind == ErrorKind.MISSING_REQUIRED_FIELD
        assert errors[0].message == "Value is required"

    def test_missing_optional(self) -> None:
        """None для необязательного поля — без ошибок"""
        assert self._errors(None, required=False) == ()

    def test_non_finite(self) -> None:
        """NaN/Inf — invalid-format"""
        assert self._errors(float("nan"))[0].kind == ErrorKind.INVALID_FORMAT
        assert self._errors(float("inf"))[0].kind == ErrorKind.INVALID_FORMAT

    def test_bool_rejected(self) -> None:
        """bool не считается числом"""
        assert self._errors(True)[0].kind == ErrorKind.INVALID_FORMAT

    def test_negative_message(self) -> None:
        """min 0 — сообщение «cannot be negative»"""
        errors = self._errors(-1.0, min_value=0)
        assert errors[0].kind == ErrorKind.OUT_OF_RANGE
        assert errors[0].message == "Value cannot be negative"

    def test_exclusive_minimum(self) -> None:
        """Строгая нижняя граница"""
        errors = self._errors(0.0, min_value=0, min_exclusive=True)
        assert errors[0].message == "Value must be greater than 0"

    def test_inclusive_minimum(self) -> None:
        """Нестрогая ненулевая нижняя граница"""
        assert self._errors(1.0, min_value=2)[0].message == "Value must be at least 2"

    def test_maximum(self) -> None:
        """Превышение потолка"""
        errors = self._errors(101.0, max_value=100)
        assert errors[0].kind == ErrorKind.OUT_OF_RANGE
        assert errors[0].message == "Value cannot exceed 100"

    def test_whole(self) -> None:
        """Целочисленность"""
        assert self._errors(2.5, whole=True)[0].kind == ErrorKind.INVALID_FORMAT
        assert self._errors(3.0, whole=True) == ()

    def test_at_most_one_error(self) -> None:
        """Нецелое и отрицательное — одна ошибка"""
        assert len(self._errors(-2.5, min_value=0, whole=True)) == 1


class TestCheckChoiceAndRequired:
    """Тесты для check_choice / check_required"""

    def test_known_choice(self) -> None:
        """Допустимое значение"""
        collector = check_choice(ValidationCollector(), "unit", "km", ("m", "km"), label="Unit")
        assert collector.errors == ()

    def test_unknown_choice(self) -> None:
        """Неизвестное значение — domain-precondition-violated"""
        collector = check_choice(ValidationCollector(), "unit", "parsec", ("m",), label="From unit")
        assert collector.errors[0].kind == ErrorKind.DOMAIN_PRECONDITION_VIOLATED
        assert collector.errors[0].message == "Unknown from unit: 'parsec'"

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_choice(self, value: object) -> None:
        """Пустое значение обязательного выбора"""
        collector = check_choice(ValidationCollector(), "unit", value, ("m",), label="Unit")
        assert collector.errors[0].kind == ErrorKind.MISSING_REQUIRED_FIELD

    def test_optional_choice(self) -> None:
        """Необязательный выбор"""
        collector = check_choice(
            ValidationCollector(), "unit", None, ("m",), label="Unit", required=False
        )
        assert collector.errors == ()

    def test_check_required(self) -> None:
        """check_required для произвольного типа"""
        assert check_required(ValidationCollector(), "d", None, label="Date").errors
        assert not check_required(ValidationCollector(), "d", "2024-01-01", label="Date").errors
