"""
Contract Validation Module

Модуль для валидации JSON контрактов движка ценообразования.
"""

from .validators import (
    ContractValidator,
    PriceBreakdownValidator,
    PriceRequestValidator,
    PricingConfigValidator,
    SchemaLoader,
    validate_price_breakdown,
    validate_price_request,
    validate_pricing_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PriceRequestValidator",
    "PriceBreakdownValidator",
    "PricingConfigValidator",
    # Functions
    "validate_price_request",
    "validate_price_breakdown",
    "validate_pricing_config",
]
