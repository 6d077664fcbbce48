"""
Pricing engine: таблицы наценок, прайсеры компонентов, оценка работы,
агрегация итоговой цены и план оптового заказа материалов.

Точка входа: PricingEngine(config).price(PriceRequest(...)).
"""

from src.core.domain.errors import (
    InvalidGeometry,
    InvalidQuantity,
    MissingWholesalePrice,
    PricingError,
    UnresolvableTier,
)
from src.pricing.aggregator import ComponentCosts, ComponentPrices, aggregate
from src.pricing.components import (
    backing_wholesale_cost,
    frame_wholesale_cost,
    glass_wholesale_cost,
    mat_wholesale_cost,
    price_backing,
    price_frame,
    price_glass,
    price_mat,
)
from src.pricing.config import (
    DEFAULT_PRICING_CONFIG,
    LaborCoefficients,
    PricingConfig,
    load_pricing_config,
)
from src.pricing.engine import PriceRequest, PricingEngine, price_order
from src.pricing.labor import (
    LaborHours,
    estimate_labor,
    estimate_labor_hours,
    labor_cost,
    labor_hours,
    summarize_labor,
)
from src.pricing.markup import MarkupTable, MarkupTier, resolve_tier, tier
from src.pricing.material_orders import MaterialOrderLine, plan_material_orders

__all__ = [
    # Markup
    "MarkupTier",
    "MarkupTable",
    "resolve_tier",
    "tier",
    # Config
    "PricingConfig",
    "LaborCoefficients",
    "DEFAULT_PRICING_CONFIG",
    "load_pricing_config",
    # Components
    "price_frame",
    "price_mat",
    "price_glass",
    "price_backing",
    "frame_wholesale_cost",
    "mat_wholesale_cost",
    "glass_wholesale_cost",
    "backing_wholesale_cost",
    # Labor
    "LaborHours",
    "estimate_labor",
    "estimate_labor_hours",
    "labor_cost",
    "labor_hours",
    "summarize_labor",
    # Aggregation
    "ComponentPrices",
    "ComponentCosts",
    "aggregate",
    # Engine
    "PriceRequest",
    "PricingEngine",
    "price_order",
    # Material orders
    "MaterialOrderLine",
    "plan_material_orders",
    # Errors
    "PricingError",
    "InvalidGeometry",
    "InvalidQuantity",
    "UnresolvableTier",
    "MissingWholesalePrice",
]
