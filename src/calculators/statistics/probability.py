"""
Probability — Вероятность одного события, пересечения, объединения и условная

ФОРМУЛЫ:
    single:       P(A) = благоприятные исходы / все исходы
    and:          P(A ∩ B) = P(A) × P(B)            (независимые)
                  P(A ∩ B) = P(A) × P(B|A)          (зависимые)
    or:           P(A ∪ B) = P(A) + P(B) - P(A) × P(B)   (независимые)
                  P(A ∪ B) = P(A) + P(B) - P(A ∩ B)      (зависимые)
    conditional:  P(A|B) = P(A ∩ B) / P(B)
    шансы «за»:   P / (1 - P) в виде несократимой дроби a:b

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все вероятности входа лежат в [0, 1], результат тоже
2. Несогласованные входы (P(A ∩ B) > min(P(A), P(B)) или P(A ∪ B) > 1) —
   ошибка валидации, результат не обрезается
3. Дробь для single точная (favorable / total), для остальных режимов —
   лучшее приближение со знаменателем не больше MAX_FRACTION_DENOMINATOR
"""

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Final

from src.calculators.base import CalculationInput, Calculator
from src.core.domain.validation import (
    ErrorKind,
    ValidationCollector,
    ValidationResult,
    check_number,
)
from src.core.math.numerical_safeguards import EPS_CALC, SCIENTIFIC_DECIMALS, round_half_up

MAX_FRACTION_DENOMINATOR: Final[int] = 1000
MAX_ODDS_TERM: Final[int] = 100
MIN_PRECISION: Final[int] = 1
MAX_PRECISION: Final[int] = 10


# =============================================================================
# ENUMS
# =============================================================================


class ProbabilityMode(str, Enum):
    """Вид вычисляемой вероятности"""

    SINGLE = "single"
    AND = "and"
    OR = "or"
    CONDITIONAL = "conditional"


class EventRelationship(str, Enum):
    """Связь между событиями A и B"""

    INDEPENDENT = "independent"
    DEPENDENT = "dependent"


class ProbabilityFormula(str, Enum):
    """Применённая формула"""

    SINGLE_EVENT = "single_event"
    AND_INDEPENDENT = "and_independent"
    AND_DEPENDENT = "and_dependent"
    OR_INDEPENDENT = "or_independent"
    OR_GENERAL = "or_general"
    CONDITIONAL = "conditional"


# =============================================================================
# VALUE OBJECTS
# =============================================================================


@dataclass(frozen=True)
class Odds:
    """Шансы a:b (a благоприятных против b неблагоприятных)."""

    favorable: int
    unfavorable: int

    def inverse(self) -> "Odds":
        """Шансы против события."""
        return Odds(favorable=self.unfavorable, unfavorable=self.favorable)


# =============================================================================
# CORE FUNCTIONS
# =============================================================================


def single_event(favorable: float, total: float) -> float:
    """P(A) = favorable / total (total > 0)."""
    return favorable / total


def intersection(
    p_a: float,
    p_b: float,
    relationship: EventRelationship = EventRelationship.INDEPENDENT,
    p_b_given_a: float | None = None,
) -> float:
    """
    P(A ∩ B).

    Examples:
        >>> intersection(0.5, 0.4)
        0.2
        >>> intersection(0.5, 0.4, EventRelationship.DEPENDENT, p_b_given_a=0.3)
        0.15
    """
    if relationship == EventRelationship.INDEPENDENT:
        return p_a * p_b
    return p_a * p_b_given_a


def union(
    p_a: float,
    p_b: float,
    relationship: EventRelationship = EventRelationship.INDEPENDENT,
    p_a_and_b: float | None = None,
) -> float:
    """
    P(A ∪ B) по формуле включений-исключений.

    Examples:
        >>> union(0.5, 0.5)
        0.75
    """
    if relationship == EventRelationship.INDEPENDENT:
        return p_a + p_b - p_a * p_b
    return p_a + p_b - p_a_and_b


def conditional(p_a_and_b: float, p_b: float) -> float | None:
    """P(A|B) = P(A ∩ B) / P(B); None при P(B) = 0."""
    if p_b <= 0:
        return None
    return p_a_and_b / p_b


def as_fraction(probability: float, max_denominator: int = MAX_FRACTION_DENOMINATOR) -> Fraction:
    """
    Ближайшая дробь со знаменателем не больше max_denominator.

    Examples:
        >>> as_fraction(0.375)
        Fraction(3, 8)
        >>> as_fraction(1 / 3)
        Fraction(1, 3)
    """
    return Fraction(probability).limit_denominator(max_denominator)


def odds_for(probability: float, max_term: int = MAX_ODDS_TERM) -> Odds:
    """
    Шансы «за» событие: P / (1 - P) в виде a:b.

    Examples:
        >>> odds_for(0.3)
        Odds(favorable=3, unfavorable=7)
        >>> odds_for(1.0)
        Odds(favorable=1, unfavorable=0)
    """
    if probability <= 0:
        return Odds(favorable=0, unfavorable=1)
    if probability >= 1:
        return Odds(favorable=1, unfavorable=0)

    ratio = probability / (1.0 - probability)
    if ratio >= 1:
        # b не больше max_term
        inverse = Fraction(1.0 / ratio).limit_denominator(max_term)
        return Odds(favorable=inverse.denominator, unfavorable=inverse.numerator)
    fraction = Fraction(ratio).limit_denominator(max_term)
    return Odds(favorable=fraction.numerator, unfavorable=fraction.denominator)


# =============================================================================
# CALCULATOR
# =============================================================================


@dataclass(frozen=True)
class ProbabilityResult:
    """Результат калькулятора вероятностей (округлённый)."""

    mode: ProbabilityMode
    formula: ProbabilityFormula
    probability: float
    probability_percent: float
    complement_probability: float
    complement_percent: float
    odds_for: Odds
    odds_against: Odds
    fraction_numerator: int
    fraction_denominator: int


class ProbabilityInput(CalculationInput):
    """Вход: {mode, favorable/total_outcomes | probability_a/b, relationship, ...}."""

    mode: ProbabilityMode = ProbabilityMode.SINGLE
    favorable_outcomes: float | None = None
    total_outcomes: float | None = None
    probability_a: float | None = None
    probability_b: float | None = None
    relationship: EventRelationship = EventRelationship.INDEPENDENT
    probability_b_given_a: float | None = None
    probability_a_and_b: float | None = None
    decimal_precision: int = SCIENTIFIC_DECIMALS


def _check_probability(
    collector: ValidationCollector,
    field_name: str,
    value: float | None,
    label: str,
    required: bool = True,
) -> ValidationCollector:
    return check_number(
        collector, field_name, value, label=label, required=required, min_value=0.0, max_value=1.0
    )


class ProbabilityCalculator(Calculator[ProbabilityInput, ProbabilityResult]):
    """Вероятность события, шансы и дробное представление."""

    name = "probability"
    input_model = ProbabilityInput

    def validate(self, inputs: ProbabilityInput) -> ValidationResult:
        collector = ValidationCollector()
        mode = inputs.mode

        if mode == ProbabilityMode.SINGLE:
            collector = self._validate_single(collector, inputs)
        elif mode == ProbabilityMode.CONDITIONAL:
            collector = self._validate_conditional(collector, inputs)
        else:
            collector = self._validate_two_events(collector, inputs)

        collector = check_number(
            collector,
            "decimal_precision",
            inputs.decimal_precision,
            label="Decimal precision",
            min_value=MIN_PRECISION,
            max_value=MAX_PRECISION,
            whole=True,
        )
        return collector.result()

    def _validate_single(
        self, collector: ValidationCollector, inputs: ProbabilityInput
    ) -> ValidationCollector:
        collector = check_number(
            collector,
            "favorable_outcomes",
            inputs.favorable_outcomes,
            label="Favorable outcomes",
            min_value=0.0,
            whole=True,
        )
        collector = check_number(
            collector,
            "total_outcomes",
            inputs.total_outcomes,
            label="Total outcomes",
            min_value=0.0,
            min_exclusive=True,
            whole=True,
        )
        if collector.has_error("favorable_outcomes") or collector.has_error("total_outcomes"):
            return collector

        if inputs.favorable_outcomes > inputs.total_outcomes:
            return collector.add(
                "favorable_outcomes",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                "Favorable outcomes cannot exceed total outcomes",
            )
        if inputs.favorable_outcomes == 0:
            collector = collector.warn(
                "favorable_outcomes",
                "impossible_event",
                "Zero favorable outcomes means an impossible event",
            )
        elif inputs.favorable_outcomes == inputs.total_outcomes:
            collector = collector.warn(
                "favorable_outcomes",
                "certain_event",
                "Favorable outcomes equal to total outcomes means a certain event",
            )
        return collector

    def _validate_two_events(
        self, collector: ValidationCollector, inputs: ProbabilityInput
    ) -> ValidationCollector:
        collector = _check_probability(collector, "probability_a", inputs.probability_a, "P(A)")
        collector = _check_probability(collector, "probability_b", inputs.probability_b, "P(B)")
        if inputs.relationship == EventRelationship.INDEPENDENT:
            return collector

        if inputs.mode == ProbabilityMode.AND:
            return _check_probability(
                collector, "probability_b_given_a", inputs.probability_b_given_a, "P(B|A)"
            )

        collector = _check_probability(
            collector, "probability_a_and_b", inputs.probability_a_and_b, "P(A ∩ B)"
        )
        if collector.has_error("probability_a") or collector.has_error("probability_b"):
            return collector
        if collector.has_error("probability_a_and_b"):
            return collector

        p_a, p_b, p_ab = inputs.probability_a, inputs.probability_b, inputs.probability_a_and_b
        if p_ab > min(p_a, p_b):
            return collector.add(
                "probability_a_and_b",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                "P(A ∩ B) cannot exceed P(A) or P(B)",
            )
        if p_a + p_b - p_ab > 1.0 + EPS_CALC:
            return collector.add(
                "probability_a_and_b",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                "P(A ∩ B) must be at least P(A) + P(B) - 1",
            )
        return collector

    def _validate_conditional(
        self, collector: ValidationCollector, inputs: ProbabilityInput
    ) -> ValidationCollector:
        collector = _check_probability(
            collector, "probability_a", inputs.probability_a, "P(A)", required=False
        )
        collector = _check_probability(collector, "probability_b", inputs.probability_b, "P(B)")
        collector = _check_probability(
            collector, "probability_a_and_b", inputs.probability_a_and_b, "P(A ∩ B)"
        )

        if not collector.has_error("probability_b") and inputs.probability_b == 0:
            collector = collector.add(
                "probability_b",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                "P(B) cannot be zero",
            )
        if collector.has_error("probability_b") or collector.has_error("probability_a_and_b"):
            return collector

        if inputs.probability_a_and_b > inputs.probability_b:
            return collector.add(
                "probability_a_and_b",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                "P(A ∩ B) cannot exceed P(B)",
            )
        if (
            inputs.probability_a is not None
            and not collector.has_error("probability_a")
            and inputs.probability_a_and_b > inputs.probability_a
        ):
            collector = collector.add(
                "probability_a_and_b",
                ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
                "P(A ∩ B) cannot exceed P(A)",
            )
        return collector

    def compute(self, inputs: ProbabilityInput) -> ProbabilityResult | None:
        mode = inputs.mode
        dependent = inputs.relationship == EventRelationship.DEPENDENT
        exact: Fraction | None = None

        if mode == ProbabilityMode.SINGLE:
            probability = single_event(inputs.favorable_outcomes, inputs.total_outcomes)
            exact = Fraction(int(inputs.favorable_outcomes), int(inputs.total_outcomes))
            formula = ProbabilityFormula.SINGLE_EVENT
        elif mode == ProbabilityMode.AND:
            probability = intersection(
                inputs.probability_a,
                inputs.probability_b,
                inputs.relationship,
                inputs.probability_b_given_a,
            )
            formula = (
                ProbabilityFormula.AND_DEPENDENT if dependent else ProbabilityFormula.AND_INDEPENDENT
            )
        elif mode == ProbabilityMode.OR:
            probability = union(
                inputs.probability_a,
                inputs.probability_b,
                inputs.relationship,
                inputs.probability_a_and_b,
            )
            formula = ProbabilityFormula.OR_GENERAL if dependent else ProbabilityFormula.OR_INDEPENDENT
        else:
            probability = conditional(inputs.probability_a_and_b, inputs.probability_b)
            formula = ProbabilityFormula.CONDITIONAL

        if probability is None:
            return None

        # Погрешность двоичного представления у границ отрезка
        probability = min(1.0, max(0.0, probability))
        fraction = exact if exact is not None else as_fraction(probability)
        odds = odds_for(probability)

        decimals = inputs.decimal_precision
        percent_decimals = max(0, decimals - 2)
        return ProbabilityResult(
            mode=mode,
            formula=formula,
            probability=round_half_up(probability, decimals),
            probability_percent=round_half_up(probability * 100.0, percent_decimals),
            complement_probability=round_half_up(1.0 - probability, decimals),
            complement_percent=round_half_up((1.0 - probability) * 100.0, percent_decimals),
            odds_for=odds,
            odds_against=odds.inverse(),
            fraction_numerator=fraction.numerator,
            fraction_denominator=fraction.denominator,
        )
