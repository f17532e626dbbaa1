"""Calculators — реестр калькуляторов движка.

Каждый калькулятор реализует протокол Calculator[TInput, TResult]
(validate → compute) и регистрируется под своим именем (name), которое
совпадает с именем JSON Schema контракта, если contract не задан явно.
"""

from types import MappingProxyType
from typing import Any, Final, Mapping

from src.calculators.base import CalculationInput, CalculationOutcome, Calculator
from src.calculators.conversion import (
    AreaConverter,
    LengthConverter,
    SpeedConverter,
    TemperatureConverter,
    VolumeConverter,
    WeightConverter,
)
from src.calculators.finance import (
    CompoundInterestCalculator,
    LoanCalculator,
    MortgageCalculator,
    ROICalculator,
    SavingsGoalCalculator,
)
from src.calculators.statistics import (
    CentralTendencyCalculator,
    CorrelationCalculator,
    ProbabilityCalculator,
    SampleSizeCalculator,
    StandardDeviationCalculator,
    ZScoreCalculator,
)
from src.calculators.timedate import (
    AgeCalculator,
    BirthdayCalculator,
    BusinessDaysCalculator,
    DateCalculator,
    TimeDurationCalculator,
    WeekNumberCalculator,
)

CALCULATORS: Final[Mapping[str, type[Calculator]]] = MappingProxyType(
    {
        calculator.name: calculator
        for calculator in (
            # Conversion
            LengthConverter,
            VolumeConverter,
            WeightConverter,
            AreaConverter,
            SpeedConverter,
            TemperatureConverter,
            # Statistics
            CentralTendencyCalculator,
            StandardDeviationCalculator,
            CorrelationCalculator,
            ZScoreCalculator,
            ProbabilityCalculator,
            SampleSizeCalculator,
            # Finance
            CompoundInterestCalculator,
            ROICalculator,
            LoanCalculator,
            MortgageCalculator,
            SavingsGoalCalculator,
            # Date / time
            WeekNumberCalculator,
            TimeDurationCalculator,
            BirthdayCalculator,
            AgeCalculator,
            DateCalculator,
            BusinessDaysCalculator,
        )
    }
)


def get_calculator(name: str, config: Any = None) -> Calculator:
    """
    Экземпляр калькулятора по имени.

    Args:
        name: Имя калькулятора (ключ CALCULATORS)
        config: Конфигурация калькулятора (None — default)

    Returns:
        Новый экземпляр калькулятора

    Raises:
        KeyError: Неизвестное имя калькулятора
    """
    try:
        calculator_cls = CALCULATORS[name]
    except KeyError:
        raise KeyError(f"Unknown calculator: {name!r}") from None
    return calculator_cls(config) if config is not None else calculator_cls()


__all__ = [
    "CALCULATORS",
    "CalculationInput",
    "CalculationOutcome",
    "Calculator",
    "get_calculator",
]
