"""
Mat Pricer - цена паспарту

Ключ таблицы наценок: united inches ВНЕШНЕГО проёма (работа + паспарту),
а не размер самой работы.

Формула:
    price_per_sq_in = wholesale / 144  (если цена за кв. фут; шаг обязателен)
    retail = max(price_per_sq_in * area * multiplier * mat_scaling_constant, minimum_charge)

Деление на 144 выполняется последним, чтобы точные входы давали точный результат.
minimum_charge уровня является нижней границей (floor), а не значением по умолчанию.
Площадь <= 0 (паспарту не выбрано) -> ровно 0 без обращения к таблице.
"""

from decimal import Decimal

from src.core.domain.units import PriceUnit
from src.core.math.numerical_safeguards import (
    ZERO,
    Number,
    to_decimal,
    validate_non_negative,
)
from src.pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig


def area_price_divisor(price_unit: PriceUnit, config: PricingConfig = DEFAULT_PRICING_CONFIG) -> Decimal:
    """
    Делитель, приводящий цену площади к $ за кв. дюйм.

    Raises:
        ValueError: Линейная единица цены
    """
    unit = PriceUnit(price_unit)
    if unit == PriceUnit.PER_SQ_FOOT:
        return config.sq_inches_per_sq_foot
    if unit == PriceUnit.PER_SQ_INCH:
        return Decimal("1")
    raise ValueError(f"Area price expected (per_sq_inch / per_sq_foot), got {unit.value}")


def price_mat(
    wholesale_unit_price: Number,
    mat_surface_area_sq_in: Number,
    finished_combined_linear: Number,
    *,
    price_unit: PriceUnit = PriceUnit.PER_SQ_FOOT,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> Decimal:
    """
    Розничная цена паспарту (без округления).

    Args:
        wholesale_unit_price: Оптовая цена листа (по умолчанию $ за кв. фут)
        mat_surface_area_sq_in: Площадь паспарту (внешний проём минус окно), кв. дюймы
        finished_combined_linear: United inches внешнего проёма
        price_unit: Единица оптовой цены
        config: Калибровка

    Returns:
        Розничная цена паспарту; 0 если площадь <= 0

    Raises:
        ValueError: Отрицательная цена или линейная единица цены

    Examples:
        >>> price_mat(4, 400, 54)
        Decimal('40.00')
    """
    area = to_decimal(mat_surface_area_sq_in, "mat_surface_area_sq_in")
    if area <= 0:
        return ZERO

    price = validate_non_negative(wholesale_unit_price, "wholesale_unit_price")
    divisor = area_price_divisor(price_unit, config)
    mat_tier = config.mat_markup_table.resolve(finished_combined_linear)

    computed = price * area * mat_tier.multiplier * config.mat_scaling_constant / divisor
    return max(computed, mat_tier.minimum_charge)


def mat_wholesale_cost(
    wholesale_unit_price: Number,
    mat_surface_area_sq_in: Number,
    *,
    price_unit: PriceUnit = PriceUnit.PER_SQ_FOOT,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> Decimal:
    """Оптовая стоимость паспарту: price_per_sq_in * area (0 без паспарту)."""
    area = to_decimal(mat_surface_area_sq_in, "mat_surface_area_sq_in")
    if area <= 0:
        return ZERO

    price = validate_non_negative(wholesale_unit_price, "wholesale_unit_price")
    return price * area / area_price_divisor(price_unit, config)
