"""
Catalog - снапшоты позиций каталога, передаваемые в движок

Immutable Pydantic модели. Записи приходят из слоя хранения
(багет, паспарту, стекло) и содержат оптовую цену поставщика.

Единица цены декларируется в самой записи (price_unit), по умолчанию:
- рама: $ за погонный фут
- паспарту: $ за кв. фут
- стекло: $ за кв. дюйм
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.core.domain.units import PriceUnit


# =============================================================================
# ENUMS
# =============================================================================


class FramePricingMethod(str, Enum):
    """
    Способ заказа багета у поставщика.

    - chop: поставщик нарезает багет в размер
    - join: поставщик нарезает и собирает раму
    - length: целые хлысты, нарезка в мастерской
    """

    CHOP = "chop"
    JOIN = "join"
    LENGTH = "length"


class GlassType(str, Enum):
    """Тип остекления."""

    REGULAR = "regular"
    CONSERVATION = "conservation"
    MUSEUM = "museum"


class ChargeKind(str, Enum):
    """Тип дополнительного сбора."""

    FLAT = "flat"
    PERCENTAGE = "percentage"


def infer_glass_type(name: Optional[str]) -> GlassType:
    """
    Определение типа стекла по названию позиции.

    Подстрочный поиск без учёта регистра:
    - "museum" или "uv" -> museum
    - "conservation" или "clear" -> conservation
    - иначе -> regular

    Examples:
        >>> infer_glass_type("Museum Glass")
        <GlassType.MUSEUM: 'museum'>
        >>> infer_glass_type("Conservation Clear")
        <GlassType.CONSERVATION: 'conservation'>
    """
    if not name:
        return GlassType.REGULAR

    lowered = name.lower()
    if "museum" in lowered or "uv" in lowered:
        return GlassType.MUSEUM
    if "conservation" in lowered or "clear" in lowered:
        return GlassType.CONSERVATION
    return GlassType.REGULAR


# =============================================================================
# CATALOG RECORDS
# =============================================================================


class _CatalogRecord(BaseModel):
    """Общие поля позиции каталога."""

    id: str = Field(..., min_length=1, description="Идентификатор позиции (например, 'larson-210286')")
    name: str = Field("", description="Название позиции")
    price: Optional[Decimal] = Field(
        None, ge=0, description="Оптовая цена (nullable: цена может отсутствовать)"
    )
    manufacturer: Optional[str] = Field(None, description="Поставщик")

    model_config = {"frozen": True}

    @field_validator("price", mode="before")
    @classmethod
    def blank_price_is_missing(cls, v):
        """Пустая строка из слоя хранения означает отсутствие цены, а не 0."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class FrameRecord(_CatalogRecord):
    """Позиция багета. Цена по умолчанию: $ за погонный фут."""

    price_unit: PriceUnit = Field(PriceUnit.PER_FOOT, description="Единица оптовой цены")
    material: Optional[str] = Field(None, description="Материал профиля (wood/metal/...)")

    @field_validator("price_unit")
    @classmethod
    def validate_linear_unit(cls, v: PriceUnit) -> PriceUnit:
        if not v.is_linear:
            raise ValueError(f"frame price_unit must be linear, got {v.value}")
        return v


class MatRecord(_CatalogRecord):
    """Позиция паспарту. Цена по умолчанию: $ за кв. фут."""

    price_unit: PriceUnit = Field(PriceUnit.PER_SQ_FOOT, description="Единица оптовой цены")

    @field_validator("price_unit")
    @classmethod
    def validate_area_unit(cls, v: PriceUnit) -> PriceUnit:
        if v.is_linear:
            raise ValueError(f"mat price_unit must be an area unit, got {v.value}")
        return v


class GlassRecord(_CatalogRecord):
    """Позиция стекла. Цена по умолчанию: $ за кв. дюйм."""

    price_unit: PriceUnit = Field(PriceUnit.PER_SQ_INCH, description="Единица оптовой цены")

    @field_validator("price_unit")
    @classmethod
    def validate_area_unit(cls, v: PriceUnit) -> PriceUnit:
        if v.is_linear:
            raise ValueError(f"glass price_unit must be an area unit, got {v.value}")
        return v

    @property
    def glass_type(self) -> GlassType:
        return infer_glass_type(self.name)


# =============================================================================
# EXTRAS
# =============================================================================


class SpecialService(BaseModel):
    """Дополнительная услуга с фиксированной ценой (натяжка, тень, ...)."""

    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, description="Розничная цена услуги")

    model_config = {"frozen": True}


class MiscCharge(BaseModel):
    """
    Прочий сбор.

    flat: фиксированная сумма.
    percentage: процент (0-100) от суммы материалов и услуг.
    """

    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    kind: ChargeKind = Field(ChargeKind.FLAT)

    model_config = {"frozen": True}
