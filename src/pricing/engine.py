"""
Pricing Engine - фасад расчёта цены заказа

Единая точка входа для создания заказа и live-превью цены:
    PriceRequest (геометрия + снапшоты каталога) -> PriceBreakdown

Порядок расчёта:
1. Геометрия: внешний проём, united inches, периметр, площади
2. Оптовые цены записей каталога -> единицы прайсеров
   (рама $/фут, паспарту $/кв. фут, стекло $/кв. фут)
3. Компоненты: рама, паспарту, стекло, подложка
4. Работа
5. Агрегация: подытог, налог, количество, (опционально) прибыльность

Отсутствующая оптовая цена:
- strict_wholesale_prices=True -> MissingWholesalePrice
- иначе именованная цена по умолчанию из конфигурации + флаг
  used_default_wholesale_price в результате (молчаливый ноль запрещён)

Движок не хранит состояние между запросами: один экземпляр безопасно
использовать из нескольких потоков.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from src.core.contracts import validate_price_request
from src.core.domain.breakdown import PriceBreakdown, PriceComponent
from src.core.domain.catalog import (
    FramePricingMethod,
    FrameRecord,
    GlassRecord,
    MatRecord,
    MiscCharge,
    SpecialService,
)
from src.core.domain.errors import MissingWholesalePrice
from src.core.domain.geometry import FrameGeometry
from src.core.domain.units import PriceUnit, convert_unit_price
from src.pricing.aggregator import ComponentCosts, ComponentPrices, aggregate, validate_quantity
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
from src.pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig
from src.pricing.labor import labor_cost, labor_hours, summarize_labor

logger = logging.getLogger(__name__)

CatalogRecord = Union[FrameRecord, MatRecord, GlassRecord]


# =============================================================================
# REQUEST
# =============================================================================


@dataclass(frozen=True)
class PriceRequest:
    """
    Запрос на расчёт цены.

    Компонент без записи каталога (frame/mat/glass = None) не входит в заказ.
    Паспарту оплачивается только при mat_width > 0.
    """

    geometry: FrameGeometry
    quantity: int = 1
    frame: Optional[FrameRecord] = None
    mat: Optional[MatRecord] = None
    glass: Optional[GlassRecord] = None
    frame_pricing_method: FramePricingMethod = FramePricingMethod.CHOP
    services: tuple[SpecialService, ...] = field(default_factory=tuple)
    misc_charges: tuple[MiscCharge, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        validate_quantity(self.quantity)
        object.__setattr__(self, "frame_pricing_method", FramePricingMethod(self.frame_pricing_method))
        object.__setattr__(self, "services", tuple(self.services))
        object.__setattr__(self, "misc_charges", tuple(self.misc_charges))

    @property
    def has_frame(self) -> bool:
        return self.frame is not None

    @property
    def has_mat(self) -> bool:
        return self.mat is not None and self.geometry.has_mat

    @property
    def has_glass(self) -> bool:
        return self.glass is not None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PriceRequest":
        """
        Построение запроса из JSON payload (price_request.json).

        Raises:
            jsonschema.ValidationError: Payload не соответствует схеме
            InvalidGeometry: Некорректные размеры
            InvalidQuantity: Некорректное количество
            pydantic.ValidationError: Некорректная запись каталога
        """
        validate_price_request(dict(payload))

        def record(model, key):
            data = payload.get(key)
            return None if data is None else model.model_validate(data)

        return cls(
            geometry=FrameGeometry.from_dimensions(
                payload["artwork"]["width"],
                payload["artwork"]["height"],
                payload.get("mat_width", 0),
            ),
            quantity=payload["quantity"],
            frame=record(FrameRecord, "frame"),
            mat=record(MatRecord, "mat"),
            glass=record(GlassRecord, "glass"),
            frame_pricing_method=FramePricingMethod(payload.get("frame_pricing_method", "chop")),
            services=tuple(SpecialService.model_validate(s) for s in payload.get("services", ())),
            misc_charges=tuple(MiscCharge.model_validate(c) for c in payload.get("misc_charges", ())),
        )


# =============================================================================
# ENGINE
# =============================================================================


@dataclass(frozen=True)
class ResolvedPrice:
    """Оптовая цена компонента в единицах прайсера."""

    price: Decimal
    unit: PriceUnit
    defaulted: bool = False


class PricingEngine:
    """
    Движок ценообразования.

    Args:
        config: Калибровка (default: DEFAULT_PRICING_CONFIG)
    """

    def __init__(self, config: PricingConfig = DEFAULT_PRICING_CONFIG):
        self.config = config

    # -------------------------------------------------------------------------
    # Wholesale prices
    # -------------------------------------------------------------------------

    def resolve_wholesale_price(
        self,
        component: PriceComponent,
        record: CatalogRecord,
        default_price: Decimal,
        default_unit: PriceUnit,
        target_unit: PriceUnit,
    ) -> ResolvedPrice:
        """
        Оптовая цена записи каталога, приведённая к target_unit.

        Raises:
            MissingWholesalePrice: Цена отсутствует и включён strict-режим
        """
        if record.price is None:
            if self.config.strict_wholesale_prices:
                raise MissingWholesalePrice(component.value, record.id)

            logger.warning(
                "No wholesale price for %s item %s, using default %s %s",
                component.value,
                record.id,
                default_price,
                default_unit.value,
                extra={"component": component.value, "item_id": record.id},
            )
            return ResolvedPrice(
                price=self._convert(default_price, default_unit, target_unit),
                unit=target_unit,
                defaulted=True,
            )

        return ResolvedPrice(
            price=self._convert(record.price, record.price_unit, target_unit),
            unit=target_unit,
        )

    def _convert(self, price: Decimal, from_unit: PriceUnit, to_unit: PriceUnit) -> Decimal:
        return convert_unit_price(
            price,
            from_unit,
            to_unit,
            inches_per_foot=self.config.inches_per_foot,
            sq_inches_per_sq_foot=self.config.sq_inches_per_sq_foot,
        )

    # -------------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------------

    def price(self, request: PriceRequest, *, include_wholesale: bool = False) -> PriceBreakdown:
        """
        Расчёт цены заказа.

        Args:
            request: Геометрия, количество и снапшоты каталога
            include_wholesale: Привилегированная ветка: оптовые стоимости и прибыльность.
                Решение о доступе принимает вызывающий слой.

        Returns:
            PriceBreakdown

        Raises:
            InvalidGeometry: Некорректная геометрия
            InvalidQuantity: Некорректное количество
            MissingWholesalePrice: Нет оптовой цены в strict-режиме
        """
        cfg = self.config
        geometry = request.geometry
        united_inches = geometry.finished_united_inches
        perimeter_feet = geometry.perimeter_inches / cfg.inches_per_foot
        glazing_area = geometry.finished_area_sq_in
        mat_area = geometry.mat_area_sq_in if request.has_mat else Decimal("0")

        prices: dict[str, Decimal] = {}
        costs: dict[str, Decimal] = {}
        defaulted: list[PriceComponent] = []

        if request.frame is not None:
            frame = self.resolve_wholesale_price(
                PriceComponent.FRAME,
                request.frame,
                cfg.default_frame_price_per_foot,
                PriceUnit.PER_FOOT,
                PriceUnit.PER_FOOT,
            )
            prices["frame"] = price_frame(
                frame.price,
                perimeter_feet,
                request.frame_pricing_method,
                united_inches=united_inches,
                config=cfg,
            )
            costs["frame"] = frame_wholesale_cost(
                frame.price, perimeter_feet, request.frame_pricing_method, config=cfg
            )
            if frame.defaulted:
                defaulted.append(PriceComponent.FRAME)

        if request.has_mat:
            mat = self.resolve_wholesale_price(
                PriceComponent.MAT,
                request.mat,
                cfg.default_mat_price_per_sq_ft,
                PriceUnit.PER_SQ_FOOT,
                PriceUnit.PER_SQ_FOOT,
            )
            prices["mat"] = price_mat(mat.price, mat_area, united_inches, price_unit=mat.unit, config=cfg)
            costs["mat"] = mat_wholesale_cost(mat.price, mat_area, price_unit=mat.unit, config=cfg)
            if mat.defaulted:
                defaulted.append(PriceComponent.MAT)

        if request.glass is not None:
            glass = self.resolve_wholesale_price(
                PriceComponent.GLASS,
                request.glass,
                cfg.default_glass_price_per_sq_in,
                PriceUnit.PER_SQ_INCH,
                PriceUnit.PER_SQ_FOOT,
            )
            prices["glass"] = price_glass(
                glass.price, glazing_area, united_inches, request.glass.glass_type, config=cfg
            )
            costs["glass"] = glass_wholesale_cost(glass.price, glazing_area, config=cfg)
            if glass.defaulted:
                defaulted.append(PriceComponent.GLASS)

        prices["backing"] = price_backing(glazing_area, config=cfg)
        costs["backing"] = backing_wholesale_cost(glazing_area, config=cfg)

        hours = labor_hours(
            united_inches,
            request.has_frame,
            request.has_mat,
            request.has_glass,
            coefficients=cfg.labor_coefficients,
        )

        breakdown = aggregate(
            ComponentPrices(**prices),
            labor_cost(hours, cfg.base_hourly_labor_rate, cfg.regional_labor_factor),
            request.quantity,
            cfg.tax_rate,
            services=request.services,
            misc_charges=request.misc_charges,
            wholesale_costs=ComponentCosts(**costs) if include_wholesale else None,
            overhead_percentage=cfg.overhead_percentage,
            labor_estimate=summarize_labor(hours, cfg.base_hourly_labor_rate, cfg.regional_labor_factor),
            defaulted_components=defaulted,
        )

        logger.debug(
            "Priced order %sx%s mat=%s qty=%d: unit_total=%s grand_total=%s",
            geometry.artwork_width,
            geometry.artwork_height,
            geometry.mat_width,
            request.quantity,
            breakdown.unit_total,
            breakdown.grand_total,
            extra={
                "united_inches": str(united_inches),
                "frame_id": request.frame.id if request.frame else None,
                "mat_id": request.mat.id if request.mat else None,
                "glass_id": request.glass.id if request.glass else None,
                "defaulted_components": [c.value for c in defaulted],
                "include_wholesale": include_wholesale,
            },
        )
        return breakdown

    def price_payload(self, payload: Mapping[str, Any], *, include_wholesale: bool = False) -> PriceBreakdown:
        """Расчёт цены по JSON payload (см. PriceRequest.from_payload)."""
        return self.price(PriceRequest.from_payload(payload), include_wholesale=include_wholesale)


def price_order(
    request: PriceRequest,
    *,
    include_wholesale: bool = False,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> PriceBreakdown:
    """Функциональная обёртка над PricingEngine.price()."""
    return PricingEngine(config).price(request, include_wholesale=include_wholesale)
