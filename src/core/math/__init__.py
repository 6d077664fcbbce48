"""
Core math modules

Денежная арифметика на Decimal с гарантией детерминизма.
"""

from src.core.math.numerical_safeguards import (
    # Quantization constants
    HOURS_QUANT,
    MONEY_QUANT,
    RATIO_QUANT,
    ZERO,
    # Types
    Number,
    # Conversion
    is_valid_number,
    to_decimal,
    # Safe division
    safe_divide,
    # Rounding
    quantize_hours,
    quantize_money,
    quantize_ratio,
    # Validation
    validate_fraction,
    validate_non_negative,
    validate_positive,
)

__all__ = [
    # Quantization constants
    "HOURS_QUANT",
    "MONEY_QUANT",
    "RATIO_QUANT",
    "ZERO",
    # Types
    "Number",
    # Conversion
    "is_valid_number",
    "to_decimal",
    # Safe division
    "safe_divide",
    # Rounding
    "quantize_hours",
    "quantize_money",
    "quantize_ratio",
    # Validation
    "validate_fraction",
    "validate_non_negative",
    "validate_positive",
]
