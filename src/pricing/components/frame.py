"""
Frame Pricer - цена багетной рамы

Ключ таблицы наценок:
- по умолчанию оптовая цена $ за фут (frame_markup_table)
- вариант по размеру: united inches внешнего проёма (frame_size_markup_table)

Формула:
    billed_feet = max(perimeter_feet, minimum_billable_feet)
    retail = price_per_foot * billed_feet * method_factor * multiplier * frame_margin_factor

frame_margin_factor применяется только здесь, поэтому все вызывающие
получают одинаковую цену для одинаковых входов.
"""

from decimal import Decimal
from typing import Optional, Union

from src.core.domain.catalog import FramePricingMethod
from src.core.domain.errors import InvalidGeometry
from src.core.math.numerical_safeguards import (
    Number,
    is_valid_number,
    to_decimal,
    validate_non_negative,
)
from src.pricing.config import (
    DEFAULT_PRICING_CONFIG,
    FRAME_BASIS_UNITED_INCHES,
    PricingConfig,
)
from src.pricing.markup import MarkupTier


def resolve_pricing_method(pricing_method: Union[str, FramePricingMethod]) -> FramePricingMethod:
    """
    Нормализация способа заказа багета.

    Raises:
        ValueError: Неизвестный способ заказа
    """
    try:
        return FramePricingMethod(pricing_method)
    except ValueError:
        raise ValueError(
            f"Unknown frame pricing method: {pricing_method!r} "
            f"(expected one of {[m.value for m in FramePricingMethod]})"
        ) from None


def billable_feet(perimeter_feet: Number, config: PricingConfig = DEFAULT_PRICING_CONFIG) -> Decimal:
    """
    Оплачиваемая длина багета: периметр, но не меньше minimum_billable_feet.

    Raises:
        InvalidGeometry: perimeter_feet <= 0 или не является конечным числом
    """
    if not is_valid_number(perimeter_feet):
        raise InvalidGeometry(f"perimeter_feet must be a finite number, got {perimeter_feet!r}")

    perimeter = to_decimal(perimeter_feet, "perimeter_feet")
    if perimeter <= 0:
        raise InvalidGeometry(f"perimeter_feet must be positive, got {perimeter}")

    return max(perimeter, config.minimum_billable_feet)


def frame_markup_tier(
    wholesale_price_per_foot: Decimal,
    united_inches: Optional[Number],
    config: PricingConfig,
) -> MarkupTier:
    """Уровень наценки рамы согласно config.frame_markup_basis."""
    if config.frame_markup_basis == FRAME_BASIS_UNITED_INCHES:
        if united_inches is None:
            raise ValueError("united_inches is required when frame_markup_basis is 'united_inches'")
        return config.frame_size_markup_table.resolve(united_inches)

    return config.frame_markup_table.resolve(wholesale_price_per_foot)


def price_frame(
    wholesale_price_per_foot: Number,
    perimeter_feet: Number,
    pricing_method: Union[str, FramePricingMethod] = FramePricingMethod.CHOP,
    *,
    united_inches: Optional[Number] = None,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> Decimal:
    """
    Розничная цена рамы (без округления).

    Args:
        wholesale_price_per_foot: Оптовая цена $ за погонный фут
        perimeter_feet: Периметр внешнего проёма (футы)
        pricing_method: chop / join / length
        united_inches: United inches внешнего проёма (нужен для size-варианта таблицы)
        config: Калибровка

    Returns:
        Розничная цена рамы, полная точность Decimal

    Raises:
        InvalidGeometry: perimeter_feet <= 0
        ValueError: Отрицательная цена или неизвестный способ заказа

    Examples:
        >>> price_frame(10, 3)  # 3 фута оплачиваются как 4
        Decimal('95.20000')
    """
    price = validate_non_negative(wholesale_price_per_foot, "wholesale_price_per_foot")
    feet = billable_feet(perimeter_feet, config)
    method = resolve_pricing_method(pricing_method)

    multiplier = frame_markup_tier(price, united_inches, config).multiplier
    method_factor = config.frame_method_factors[method]

    return price * feet * method_factor * multiplier * config.frame_margin_factor


def frame_wholesale_cost(
    wholesale_price_per_foot: Number,
    perimeter_feet: Number,
    pricing_method: Union[str, FramePricingMethod] = FramePricingMethod.CHOP,
    *,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> Decimal:
    """Оптовая стоимость багета у поставщика: price * billed_feet * method_factor."""
    price = validate_non_negative(wholesale_price_per_foot, "wholesale_price_per_foot")
    feet = billable_feet(perimeter_feet, config)
    method = resolve_pricing_method(pricing_method)
    return price * feet * config.frame_method_factors[method]
