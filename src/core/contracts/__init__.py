"""
Contract Validation Module

Модуль для валидации JSON контрактов входов калькуляторов.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    available_contracts,
    validate_contract,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    # Functions
    "available_contracts",
    "validate_contract",
]
