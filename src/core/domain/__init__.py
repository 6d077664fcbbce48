"""
Domain models and value objects.

Contains fundamental domain entities: Units, FrameGeometry, catalog records,
PriceBreakdown and the pricing error taxonomy.
"""

from src.core.domain.breakdown import (
    LaborEstimate,
    PriceBreakdown,
    PriceComponent,
    Profitability,
    WholesaleCosts,
)
from src.core.domain.catalog import (
    ChargeKind,
    FramePricingMethod,
    FrameRecord,
    GlassRecord,
    GlassType,
    MatRecord,
    MiscCharge,
    SpecialService,
    infer_glass_type,
)
from src.core.domain.errors import (
    InvalidGeometry,
    InvalidQuantity,
    MissingWholesalePrice,
    PricingError,
    UnresolvableTier,
)
from src.core.domain.geometry import FrameGeometry
from src.core.domain.units import (
    INCHES_PER_FOOT,
    SQ_INCHES_PER_SQ_FOOT,
    PriceUnit,
    convert_unit_price,
    feet_to_inches,
    inches_to_feet,
    sq_feet_to_sq_inches,
    sq_inches_to_sq_feet,
)

__all__ = [
    # Units module
    "INCHES_PER_FOOT",
    "SQ_INCHES_PER_SQ_FOOT",
    "PriceUnit",
    "convert_unit_price",
    "feet_to_inches",
    "inches_to_feet",
    "sq_feet_to_sq_inches",
    "sq_inches_to_sq_feet",
    # Geometry
    "FrameGeometry",
    # Catalog
    "ChargeKind",
    "FramePricingMethod",
    "FrameRecord",
    "GlassRecord",
    "GlassType",
    "MatRecord",
    "MiscCharge",
    "SpecialService",
    "infer_glass_type",
    # Breakdown
    "LaborEstimate",
    "PriceBreakdown",
    "PriceComponent",
    "Profitability",
    "WholesaleCosts",
    # Errors
    "InvalidGeometry",
    "InvalidQuantity",
    "MissingWholesalePrice",
    "PricingError",
    "UnresolvableTier",
]
