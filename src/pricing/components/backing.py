"""
Backing Pricer - цена подложки

Без таблицы наценок: retail = area * backing_wholesale_per_sq_in * backing_markup_factor.
"""

from decimal import Decimal

from src.core.math.numerical_safeguards import ZERO, Number, to_decimal
from src.pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig


def backing_wholesale_cost(
    area_sq_in: Number,
    *,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> Decimal:
    """Оптовая стоимость подложки (0 для площади <= 0)."""
    area = to_decimal(area_sq_in, "area_sq_in")
    if area <= 0:
        return ZERO
    return area * config.backing_wholesale_per_sq_in


def price_backing(
    area_sq_in: Number,
    *,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> Decimal:
    """
    Розничная цена подложки (без округления).

    Examples:
        >>> price_backing(480)
        Decimal('23.040')
    """
    return backing_wholesale_cost(area_sq_in, config=config) * config.backing_markup_factor
