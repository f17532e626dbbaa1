"""
Core numeric primitives, domain models, and boundary contracts.

This module contains the foundational building blocks shared by all
calculators: rounding and safe numerics, unit tables, the validation
error taxonomy, and JSON Schema contracts for calculator inputs.
"""
