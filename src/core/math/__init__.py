"""
Core math modules

Детерминированные decimal-примитивы для ценовых расчётов.
"""

from src.core.math.decimal_safeguards import (
    # Context and constants
    DECIMAL_CONTEXT,
    DECIMAL_PRECISION,
    ONE_BD,
    TWO_BD,
    ZERO_BD,
    DecimalLike,
    # Conversion
    to_decimal,
    # Safe division
    safe_div,
    # Comparisons
    is_zero,
    # Validation
    validate_non_negative,
)

__all__ = [
    "DECIMAL_CONTEXT",
    "DECIMAL_PRECISION",
    "ONE_BD",
    "TWO_BD",
    "ZERO_BD",
    "DecimalLike",
    "to_decimal",
    "safe_div",
    "is_zero",
    "validate_non_negative",
]
