"""
Material Orders - план оптового заказа материалов у поставщика

Для каждого компонента заказа - строка заказа поставщику:
- багет: погонные футы, ceil(периметр / 12 + припуск на рез) на одну раму
- стекло: штуки, размер внешнего проёма с округлением вверх до дюйма
- паспарту: листы, размер внешнего проёма + припуск на обрезку

Оценка оптовой стоимости использует ту же политику отсутствующих цен,
что и PricingEngine (цена по умолчанию + флаг, либо MissingWholesalePrice).
"""

from decimal import ROUND_CEILING, Decimal
from typing import Optional

from pydantic import BaseModel, Field

from src.core.domain.breakdown import PriceComponent
from src.core.domain.units import PriceUnit
from src.core.math.numerical_safeguards import quantize_money
from src.pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig
from src.pricing.engine import PriceRequest, PricingEngine


def _ceil(value: Decimal) -> Decimal:
    return value.to_integral_value(rounding=ROUND_CEILING)


class MaterialOrderLine(BaseModel):
    """Строка оптового заказа поставщику."""

    material_type: PriceComponent = Field(..., description="frame / mat / glass")
    material_id: str = Field(..., min_length=1)
    name: str = Field("")
    manufacturer: Optional[str] = Field(None, description="Поставщик")
    quantity: Decimal = Field(..., gt=0, description="Количество в единицах unit (на весь тираж)")
    unit: str = Field(..., description="feet / piece / sheet")
    cut_width: Optional[Decimal] = Field(None, gt=0, description="Ширина заготовки (дюймы)")
    cut_height: Optional[Decimal] = Field(None, gt=0, description="Высота заготовки (дюймы)")
    estimated_cost: Decimal = Field(..., ge=0, description="Оценка оптовой стоимости ($)")
    used_default_price: bool = Field(False, description="Стоимость оценена по цене по умолчанию")

    model_config = {"frozen": True}


def plan_material_orders(
    request: PriceRequest,
    *,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> tuple[MaterialOrderLine, ...]:
    """
    Строки оптового заказа для запроса.

    Args:
        request: Запрос на расчёт (геометрия, количество, записи каталога)
        config: Калибровка (припуски, цены по умолчанию, strict-режим)

    Returns:
        Строки заказа в порядке: багет, стекло, паспарту

    Raises:
        MissingWholesalePrice: Нет оптовой цены в strict-режиме

    Examples:
        Работа 16x20, паспарту 2" (проём 20x24), количество 2:
        багет ceil(88/12 + 1) = 9 футов на раму -> 18 футов
    """
    engine = PricingEngine(config)
    geometry = request.geometry
    qty = Decimal(request.quantity)
    lines: list[MaterialOrderLine] = []

    if request.frame is not None:
        frame = engine.resolve_wholesale_price(
            PriceComponent.FRAME,
            request.frame,
            config.default_frame_price_per_foot,
            PriceUnit.PER_FOOT,
            PriceUnit.PER_FOOT,
        )
        feet_per_frame = _ceil(
            geometry.perimeter_inches / config.inches_per_foot + config.frame_order_allowance_feet
        )
        feet = feet_per_frame * qty
        method_factor = config.frame_method_factors[request.frame_pricing_method]
        lines.append(
            MaterialOrderLine(
                material_type=PriceComponent.FRAME,
                material_id=request.frame.id,
                name=request.frame.name,
                manufacturer=request.frame.manufacturer,
                quantity=feet,
                unit="feet",
                estimated_cost=quantize_money(frame.price * feet * method_factor),
                used_default_price=frame.defaulted,
            )
        )

    if request.glass is not None:
        glass = engine.resolve_wholesale_price(
            PriceComponent.GLASS,
            request.glass,
            config.default_glass_price_per_sq_in,
            PriceUnit.PER_SQ_INCH,
            PriceUnit.PER_SQ_INCH,
        )
        width = _ceil(geometry.finished_width)
        height = _ceil(geometry.finished_height)
        lines.append(
            MaterialOrderLine(
                material_type=PriceComponent.GLASS,
                material_id=request.glass.id,
                name=request.glass.name,
                manufacturer=request.glass.manufacturer,
                quantity=qty,
                unit="piece",
                cut_width=width,
                cut_height=height,
                estimated_cost=quantize_money(glass.price * width * height * qty),
                used_default_price=glass.defaulted,
            )
        )

    if request.has_mat:
        mat = engine.resolve_wholesale_price(
            PriceComponent.MAT,
            request.mat,
            config.default_mat_price_per_sq_ft,
            PriceUnit.PER_SQ_FOOT,
            PriceUnit.PER_SQ_INCH,
        )
        width = _ceil(geometry.finished_width + config.mat_sheet_allowance_inches)
        height = _ceil(geometry.finished_height + config.mat_sheet_allowance_inches)
        lines.append(
            MaterialOrderLine(
                material_type=PriceComponent.MAT,
                material_id=request.mat.id,
                name=request.mat.name,
                manufacturer=request.mat.manufacturer,
                quantity=qty,
                unit="sheet",
                cut_width=width,
                cut_height=height,
                estimated_cost=quantize_money(mat.price * width * height * qty),
                used_default_price=mat.defaulted,
            )
        )

    return tuple(lines)
