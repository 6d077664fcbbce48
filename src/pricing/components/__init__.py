"""
Component pricers: рама, паспарту, стекло, подложка.

Чистые функции: оптовая цена + геометрия -> розничная цена компонента
(полная точность Decimal, округление выполняет агрегатор).
"""

from .backing import backing_wholesale_cost, price_backing
from .frame import (
    billable_feet,
    frame_markup_tier,
    frame_wholesale_cost,
    price_frame,
    resolve_pricing_method,
)
from .glass import glass_wholesale_cost, price_glass
from .mat import area_price_divisor, mat_wholesale_cost, price_mat

__all__ = [
    # Frame
    "price_frame",
    "frame_wholesale_cost",
    "billable_feet",
    "frame_markup_tier",
    "resolve_pricing_method",
    # Mat
    "price_mat",
    "mat_wholesale_cost",
    "area_price_divisor",
    # Glass
    "price_glass",
    "glass_wholesale_cost",
    # Backing
    "price_backing",
    "backing_wholesale_cost",
]
