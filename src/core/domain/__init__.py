"""
Domain models and value objects.

Contains unit tables, validation results and the error taxonomy shared by
all calculators.
"""

from src.core.domain.units import (
    MeasurementSystem,
    Unit,
    UnitDomain,
    UnknownUnitError,
)
from src.core.domain.validation import (
    ErrorKind,
    FieldError,
    ValidationCollector,
    ValidationResult,
    ValidationWarning,
    check_choice,
    check_number,
    check_required,
)

__all__ = [
    # Units module
    "MeasurementSystem",
    "Unit",
    "UnitDomain",
    "UnknownUnitError",
    # Validation module
    "ErrorKind",
    "FieldError",
    "ValidationCollector",
    "ValidationResult",
    "ValidationWarning",
    "check_choice",
    "check_number",
    "check_required",
]
