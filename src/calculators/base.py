"""
Calculator — Общий протокол validate → compute

Каждый калькулятор реализует две операции:
- validate(inputs) -> ValidationResult: все нарушения ограничений, без исключений
- compute(inputs) -> TResult | None: чистая функция валидного входа

run(payload) выполняет полный конвейер на границе движка:
1. JSON Schema контракт (структура сырого dict)
2. Разбор в неизменяемую Pydantic модель входа
3. Доменная валидация калькулятора
4. Вычисление (только если валидация успешна)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. run() никогда не выбрасывает исключений на некорректном входе
2. compute() вызывается только после успешной валидации
3. Калькуляторы не хранят изменяемого состояния между вызовами
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.core.contracts import validate_contract
from src.core.domain.validation import ErrorKind, ValidationCollector, ValidationResult
from src.core.logging_config import get_logger

logger = get_logger(__name__)

TInput = TypeVar("TInput", bound=BaseModel)
TResult = TypeVar("TResult")


# =============================================================================
# INPUT BASE
# =============================================================================


class CalculationInput(BaseModel):
    """
    Базовая модель входа калькулятора.

    Все поля входа допускают None (форма UI может быть заполнена частично);
    обязательность проверяет validate() калькулятора.
    """

    model_config = {"frozen": True, "extra": "forbid"}


# =============================================================================
# OUTCOME
# =============================================================================


@dataclass(frozen=True)
class CalculationOutcome(Generic[TResult]):
    """Результат полного конвейера run()."""

    validation: ValidationResult
    result: TResult | None = None

    @property
    def ok(self) -> bool:
        """Вход валиден и результат вычислен."""
        return self.validation.valid and self.result is not None


# =============================================================================
# CALCULATOR
# =============================================================================


def _pydantic_errors(exc: PydanticValidationError) -> ValidationResult:
    """Отображение ошибок разбора Pydantic в таксономию ErrorKind."""
    collector = ValidationCollector()
    for error in exc.errors():
        field_name = ".".join(str(part) for part in error["loc"]) or "$"
        if collector.has_error(field_name):
            continue
        kind = (
            ErrorKind.MISSING_REQUIRED_FIELD
            if error["type"] == "missing"
            else ErrorKind.INVALID_FORMAT
        )
        collector = collector.add(field_name, kind, error["msg"])
    return collector.result()


class Calculator(ABC, Generic[TInput, TResult]):
    """
    Базовый класс калькулятора.

    Подклассы задают name (по умолчанию совпадает с именем JSON Schema контракта),
    input_model и реализуют validate/compute.
    """

    name: ClassVar[str]
    input_model: ClassVar[type[CalculationInput]]
    # Имя JSON Schema контракта, если отличается от name
    contract: ClassVar[str | None] = None

    @abstractmethod
    def validate(self, inputs: TInput) -> ValidationResult:
        """Все нарушения ограничений входа."""

    @abstractmethod
    def compute(self, inputs: TInput) -> TResult | None:
        """Результат для валидного входа (None если вычисление не определено)."""

    def parse(self, payload: Mapping[str, Any]) -> tuple[TInput | None, ValidationResult]:
        """
        Проверка контракта и разбор сырого dict в модель входа.

        Args:
            payload: Сырые данные формы (JSON-совместимый dict)

        Returns:
            (inputs, validation): inputs равен None при ошибках контракта/разбора
        """
        contract = validate_contract(self.contract or self.name, payload)
        if not contract.valid:
            return None, contract

        try:
            inputs = self.input_model.model_validate(dict(payload))
        except PydanticValidationError as exc:
            return None, _pydantic_errors(exc)

        return inputs, contract

    def run(self, payload: Mapping[str, Any] | TInput) -> CalculationOutcome[TResult]:
        """
        Полный конвейер: контракт → разбор → валидация → вычисление.

        Args:
            payload: Сырой dict или уже построенная модель входа

        Returns:
            CalculationOutcome с результатом валидации и (если валидно) результатом
        """
        if isinstance(payload, BaseModel):
            inputs, parsed = payload, ValidationResult.ok()
        else:
            inputs, parsed = self.parse(payload)
            if inputs is None:
                logger.debug(
                    "contract_validation_failed",
                    calculator=self.name,
                    error_count=len(parsed.errors),
                    fields=list(parsed.fields),
                )
                return CalculationOutcome(validation=parsed)

        validation = parsed.merge(self.validate(inputs))
        if not validation.valid:
            logger.debug(
                "validation_failed",
                calculator=self.name,
                error_count=len(validation.errors),
                fields=list(validation.fields),
            )
            return CalculationOutcome(validation=validation)

        result = self.compute(inputs)
        logger.debug(
            "calculation_completed",
            calculator=self.name,
            has_result=result is not None,
            warning_count=len(validation.warnings),
        )
        return CalculationOutcome(validation=validation, result=result)
