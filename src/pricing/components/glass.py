"""
Glass Pricer - цена остекления

Формула:
    base = базовый сбор уровня (minimum_charge таблицы glass_base_charge_table)
    retail = base + area_sq_ft * price_per_sq_ft * multiplier * type_multiplier * glass_scaling_constant

Ключ обеих таблиц: united inches. Множитель типа стекла строго возрастает:
regular < conservation < museum.

Прайсер принимает цену за кв. фут. Запись каталога хранит $ за кв. дюйм,
пересчёт выполняет движок (PricingEngine) на границе.
"""

from decimal import Decimal
from typing import Union

from src.core.domain.catalog import GlassType
from src.core.domain.errors import InvalidGeometry
from src.core.math.numerical_safeguards import (
    Number,
    is_valid_number,
    to_decimal,
    validate_non_negative,
)
from src.pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig


def _glazing_area(area_sq_in: Number) -> Decimal:
    if not is_valid_number(area_sq_in):
        raise InvalidGeometry(f"area_sq_in must be a finite number, got {area_sq_in!r}")

    area = to_decimal(area_sq_in, "area_sq_in")
    if area <= 0:
        raise InvalidGeometry(f"Glazing area must be positive, got {area}")
    return area


def price_glass(
    wholesale_price_per_sq_ft: Number,
    area_sq_in: Number,
    combined_linear: Number,
    glass_type: Union[str, GlassType] = GlassType.REGULAR,
    *,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> Decimal:
    """
    Розничная цена стекла (без округления).

    Args:
        wholesale_price_per_sq_ft: Оптовая цена $ за кв. фут
        area_sq_in: Площадь остекления (внешний проём), кв. дюймы
        combined_linear: United inches внешнего проёма
        glass_type: regular / conservation / museum
        config: Калибровка

    Returns:
        Базовый сбор + переменная часть по площади

    Raises:
        InvalidGeometry: Площадь <= 0
        ValueError: Отрицательная цена или неизвестный тип стекла
    """
    price = validate_non_negative(wholesale_price_per_sq_ft, "wholesale_price_per_sq_ft")
    area = _glazing_area(area_sq_in)

    base_charge = config.glass_base_charge_table.resolve(combined_linear).minimum_charge
    multiplier = config.glass_markup_table.resolve(combined_linear).multiplier
    type_multiplier = config.glass_type_multipliers[GlassType(glass_type)]

    variable = (
        area
        * price
        * multiplier
        * type_multiplier
        * config.glass_scaling_constant
        / config.sq_inches_per_sq_foot
    )
    return base_charge + variable


def glass_wholesale_cost(
    wholesale_price_per_sq_ft: Number,
    area_sq_in: Number,
    *,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> Decimal:
    """Оптовая стоимость стекла: area_sq_ft * price_per_sq_ft."""
    price = validate_non_negative(wholesale_price_per_sq_ft, "wholesale_price_per_sq_ft")
    return _glazing_area(area_sq_in) * price / config.sq_inches_per_sq_foot
