"""
Units - централизованный модуль конверсии единиц измерения

Единственный допустимый способ преобразований между:
- дюймы <-> футы (длина багета)
- кв. дюймы <-> кв. футы (паспарту, стекло, подложка)
- оптовая цена за единицу: $/in, $/ft, $/sq-in, $/sq-ft

ЗАПРЕЩЕНО смешивать единицы без явного конвертера из этого модуля.
Исторически главный источник ошибок: цена $/sq-ft, трактуемая как $/sq-in.
"""

from decimal import Decimal
from enum import Enum
from typing import Final

from src.core.math.numerical_safeguards import Number, to_decimal


# =============================================================================
# КОНСТАНТЫ ПЕРЕСЧЁТА
# =============================================================================

# Дюймов в футе
INCHES_PER_FOOT: Final[Decimal] = Decimal("12")

# Квадратных дюймов в квадратном футе
SQ_INCHES_PER_SQ_FOOT: Final[Decimal] = Decimal("144")


# =============================================================================
# ЕДИНИЦЫ ЦЕНЫ
# =============================================================================


class PriceUnit(str, Enum):
    """Единица, к которой относится оптовая цена позиции каталога."""

    PER_INCH = "per_inch"
    PER_FOOT = "per_foot"
    PER_SQ_INCH = "per_sq_inch"
    PER_SQ_FOOT = "per_sq_foot"

    @property
    def is_linear(self) -> bool:
        return self in (PriceUnit.PER_INCH, PriceUnit.PER_FOOT)


# =============================================================================
# КОНВЕРТЕРЫ РАЗМЕРОВ
# =============================================================================


def inches_to_feet(inches: Number) -> Decimal:
    """Конверсия: дюймы -> футы."""
    return to_decimal(inches, "inches") / INCHES_PER_FOOT


def feet_to_inches(feet: Number) -> Decimal:
    """Конверсия: футы -> дюймы."""
    return to_decimal(feet, "feet") * INCHES_PER_FOOT


def sq_inches_to_sq_feet(sq_inches: Number) -> Decimal:
    """Конверсия: кв. дюймы -> кв. футы."""
    return to_decimal(sq_inches, "sq_inches") / SQ_INCHES_PER_SQ_FOOT


def sq_feet_to_sq_inches(sq_feet: Number) -> Decimal:
    """Конверсия: кв. футы -> кв. дюймы."""
    return to_decimal(sq_feet, "sq_feet") * SQ_INCHES_PER_SQ_FOOT


# =============================================================================
# КОНВЕРТЕР ЦЕН
# =============================================================================


def convert_unit_price(
    price: Number,
    from_unit: PriceUnit,
    to_unit: PriceUnit,
    *,
    inches_per_foot: Number = INCHES_PER_FOOT,
    sq_inches_per_sq_foot: Number = SQ_INCHES_PER_SQ_FOOT,
) -> Decimal:
    """
    Пересчёт оптовой цены между единицами.

    Цена за единицу обратна единице: $/sq-ft -> $/sq-in делится на 144,
    $/in -> $/ft умножается на 12.

    Args:
        price: Оптовая цена в единицах from_unit
        from_unit: Исходная единица
        to_unit: Целевая единица
        inches_per_foot: Дюймов в футе (должно совпадать с конфигурацией расчёта)
        sq_inches_per_sq_foot: Кв. дюймов в кв. футе (аналогично)

    Returns:
        Цена в единицах to_unit

    Raises:
        ValueError: Если единицы несовместимы (линейная vs площадь)

    Examples:
        >>> convert_unit_price(Decimal("4"), PriceUnit.PER_SQ_FOOT, PriceUnit.PER_SQ_INCH)
        Decimal('0.02777777777777777777777777778')
        >>> convert_unit_price(Decimal("0.10"), PriceUnit.PER_SQ_INCH, PriceUnit.PER_SQ_FOOT,
        ...                    sq_inches_per_sq_foot=100)
        Decimal('10.00')
    """
    value = to_decimal(price, "price")

    if from_unit == to_unit:
        return value

    if from_unit.is_linear != to_unit.is_linear:
        raise ValueError(
            f"Cannot convert price from {from_unit.value} to {to_unit.value}: "
            f"linear and area units are incompatible"
        )

    linear = to_decimal(inches_per_foot, "inches_per_foot")
    area = to_decimal(sq_inches_per_sq_foot, "sq_inches_per_sq_foot")

    if from_unit == PriceUnit.PER_INCH:
        return value * linear
    if from_unit == PriceUnit.PER_FOOT:
        return value / linear
    if from_unit == PriceUnit.PER_SQ_INCH:
        return value * area
    # PER_SQ_FOOT -> PER_SQ_INCH
    return value / area
