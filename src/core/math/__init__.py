"""
Core math modules для калькуляторов

Математические примитивы и численные алгоритмы с гарантией стабильности.
"""

# Numerical Safeguards — политика округления и безопасные операции
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    CONVERSION_DECIMALS,
    EPS_CALC,
    MONEY_DECIMALS,
    PERCENT_DECIMALS,
    SCIENTIFIC_DECIMALS,
    # Rounding
    round_conversion,
    round_half_up,
    round_significant,
    # Safe division
    safe_divide,
    # NaN/Inf sanitization
    is_valid_float,
    sanitize_float,
)

# Normal Distribution
from src.core.math.normal_distribution import (
    TailProbabilities,
    erf,
    inverse_normal_upper,
    normal_cdf,
    tail_probabilities,
    z_for_confidence,
)

# Compounding
from src.core.math.compounding import (
    RULE_OF_72_NUMERATOR,
    CompoundingDomainViolation,
    cagr,
    effective_annual_rate,
    exact_doubling_time,
    future_value,
    future_value_annuity,
    growth_factor,
    nominal_from_effective,
    periodic_rate,
    required_annual_rate,
    rule_of_72,
)

__all__ = [
    # Numerical Safeguards — Constants
    "CONVERSION_DECIMALS",
    "EPS_CALC",
    "MONEY_DECIMALS",
    "PERCENT_DECIMALS",
    "SCIENTIFIC_DECIMALS",
    # Numerical Safeguards — Rounding
    "round_conversion",
    "round_half_up",
    "round_significant",
    # Numerical Safeguards — Safe division
    "safe_divide",
    # Numerical Safeguards — NaN/Inf sanitization
    "is_valid_float",
    "sanitize_float",
    # Normal Distribution
    "TailProbabilities",
    "erf",
    "inverse_normal_upper",
    "normal_cdf",
    "tail_probabilities",
    "z_for_confidence",
    # Compounding — Constants
    "RULE_OF_72_NUMERATOR",
    # Compounding — Exceptions
    "CompoundingDomainViolation",
    # Compounding — Functions
    "cagr",
    "effective_annual_rate",
    "exact_doubling_time",
    "future_value",
    "future_value_annuity",
    "growth_factor",
    "nominal_from_effective",
    "periodic_rate",
    "required_annual_rate",
    "rule_of_72",
]
