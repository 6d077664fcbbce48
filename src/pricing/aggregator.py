"""
Price Aggregator - сборка итоговой цены заказа

Формулы (полная точность до финального шага):
    material_cost = frame + mat + glass + backing
    subtotal      = material_cost + labor + services + misc_charges
    tax           = subtotal * tax_rate
    unit_total    = subtotal + tax
    grand_total   = unit_total * quantity

Прибыльность (только если переданы оптовые стоимости):
    overhead_cost       = total_wholesale_cost * overhead_percentage
    gross_profit        = subtotal - (total_wholesale_cost + overhead_cost + labor)
    gross_profit_margin = gross_profit / subtotal
    markup_multiplier   = subtotal / total_wholesale_cost

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Округление ROUND_HALF_UP до центов только при построении PriceBreakdown
2. grand_total считается от неокруглённого unit_total
3. quantity - целое >= 1 (bool не является количеством)
4. Деление на ноль невозможно: метрики через safe_divide
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from src.core.domain.breakdown import (
    LaborEstimate,
    PriceBreakdown,
    PriceComponent,
    Profitability,
    WholesaleCosts,
)
from src.core.domain.catalog import ChargeKind, MiscCharge, SpecialService
from src.core.domain.errors import InvalidQuantity
from src.core.math.numerical_safeguards import (
    ZERO,
    Number,
    quantize_money,
    quantize_ratio,
    safe_divide,
    validate_fraction,
    validate_non_negative,
)
_HUNDRED = Decimal("100")


# =============================================================================
# INPUTS
# =============================================================================


@dataclass(frozen=True)
class ComponentPrices:
    """Розничные цены материалов (неокруглённые)."""

    frame: Decimal = ZERO
    mat: Decimal = ZERO
    glass: Decimal = ZERO
    backing: Decimal = ZERO

    def __post_init__(self) -> None:
        for name in ("frame", "mat", "glass", "backing"):
            object.__setattr__(self, name, validate_non_negative(getattr(self, name), name))

    @property
    def total(self) -> Decimal:
        return self.frame + self.mat + self.glass + self.backing


@dataclass(frozen=True)
class ComponentCosts:
    """Оптовые стоимости материалов (неокруглённые)."""

    frame: Decimal = ZERO
    mat: Decimal = ZERO
    glass: Decimal = ZERO
    backing: Decimal = ZERO

    def __post_init__(self) -> None:
        for name in ("frame", "mat", "glass", "backing"):
            object.__setattr__(self, name, validate_non_negative(getattr(self, name), name))

    @property
    def total(self) -> Decimal:
        return self.frame + self.mat + self.glass + self.backing


def validate_quantity(quantity: object) -> int:
    """
    Проверка количества.

    Raises:
        InvalidQuantity: Не целое, bool, или < 1
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity(f"quantity must be a positive integer, got {quantity!r}")
    if quantity < 1:
        raise InvalidQuantity(f"quantity must be >= 1, got {quantity}")
    return quantity


# =============================================================================
# EXTRAS
# =============================================================================


def services_total(services: Iterable[SpecialService]) -> Decimal:
    """Сумма дополнительных услуг."""
    return sum((s.price for s in services), ZERO)


def misc_charges_total(misc_charges: Iterable[MiscCharge], base_amount: Decimal) -> Decimal:
    """
    Сумма прочих сборов.

    percentage-сбор считается от base_amount (материалы + услуги).
    """
    total = ZERO
    for charge in misc_charges:
        if charge.kind == ChargeKind.PERCENTAGE:
            total += base_amount * charge.amount / _HUNDRED
        else:
            total += charge.amount
    return total


# =============================================================================
# AGGREGATION
# =============================================================================


def compute_profitability(
    subtotal: Decimal,
    labor: Decimal,
    total_wholesale_cost: Decimal,
    overhead_percentage: Decimal,
) -> Profitability:
    """Метрики прибыльности (деньги в центах, коэффициенты 4 знака)."""
    overhead_cost = total_wholesale_cost * overhead_percentage
    gross_profit = subtotal - (total_wholesale_cost + overhead_cost + labor)

    return Profitability(
        total_wholesale_cost=quantize_money(total_wholesale_cost),
        overhead_cost=quantize_money(overhead_cost),
        gross_profit=quantize_money(gross_profit),
        gross_profit_margin=quantize_ratio(safe_divide(gross_profit, subtotal, fallback=ZERO)),
        markup_multiplier=quantize_ratio(safe_divide(subtotal, total_wholesale_cost)),
    )


def aggregate(
    components: ComponentPrices,
    labor: Number,
    quantity: int,
    tax_rate: Number,
    *,
    services: Iterable[SpecialService] = (),
    misc_charges: Iterable[MiscCharge] = (),
    wholesale_costs: Optional[ComponentCosts] = None,
    overhead_percentage: Optional[Number] = None,
    labor_estimate: Optional[LaborEstimate] = None,
    defaulted_components: Iterable[PriceComponent] = (),
) -> PriceBreakdown:
    """
    Сборка PriceBreakdown из цен компонентов и стоимости работы.

    Args:
        components: Розничные цены материалов
        labor: Стоимость работы
        quantity: Количество одинаковых рам (целое >= 1)
        tax_rate: Ставка налога [0, 1)
        services: Дополнительные услуги
        misc_charges: Прочие сборы
        wholesale_costs: Оптовые стоимости; если заданы, считается прибыльность
        overhead_percentage: Доля накладных расходов от оптовой стоимости
            (PricingConfig.overhead_percentage); обязательна вместе с wholesale_costs
        labor_estimate: Детализация трудозатрат для отчёта
        defaulted_components: Компоненты, оценённые по цене по умолчанию

    Returns:
        PriceBreakdown (все деньги округлены до центов)

    Raises:
        InvalidQuantity: quantity не является целым >= 1
        ValueError: Отрицательная работа или ставка налога вне [0, 1),
            wholesale_costs без overhead_percentage

    Examples:
        >>> b = aggregate(ComponentPrices(frame=Decimal("100")), 50, 3, "0.08")
        >>> b.unit_total, b.grand_total
        (Decimal('162.00'), Decimal('486.00'))
    """
    qty = validate_quantity(quantity)
    labor_cost = validate_non_negative(labor, "labor")
    rate = validate_fraction(tax_rate, "tax_rate")

    services = tuple(services)
    material_cost = components.total
    extras_services = services_total(services)
    extras_misc = misc_charges_total(misc_charges, material_cost + extras_services)

    subtotal = material_cost + labor_cost + extras_services + extras_misc
    tax = subtotal * rate
    unit_total = subtotal + tax
    grand_total = unit_total * qty

    defaulted = tuple(dict.fromkeys(PriceComponent(c) for c in defaulted_components))

    wholesale: Optional[WholesaleCosts] = None
    profitability: Optional[Profitability] = None
    if wholesale_costs is not None:
        if overhead_percentage is None:
            raise ValueError("overhead_percentage is required when wholesale_costs are given")
        wholesale = WholesaleCosts(
            frame=quantize_money(wholesale_costs.frame),
            mat=quantize_money(wholesale_costs.mat),
            glass=quantize_money(wholesale_costs.glass),
            backing=quantize_money(wholesale_costs.backing),
            total=quantize_money(wholesale_costs.total),
        )
        profitability = compute_profitability(
            subtotal,
            labor_cost,
            wholesale_costs.total,
            validate_fraction(overhead_percentage, "overhead_percentage"),
        )

    return PriceBreakdown(
        frame_price=quantize_money(components.frame),
        mat_price=quantize_money(components.mat),
        glass_price=quantize_money(components.glass),
        backing_price=quantize_money(components.backing),
        material_cost=quantize_money(material_cost),
        labor_cost=quantize_money(labor_cost),
        services_total=quantize_money(extras_services),
        misc_charges_total=quantize_money(extras_misc),
        subtotal=quantize_money(subtotal),
        tax_rate=rate,
        tax=quantize_money(tax),
        unit_total=quantize_money(unit_total),
        quantity=qty,
        grand_total=quantize_money(grand_total),
        used_default_wholesale_price=bool(defaulted),
        defaulted_components=defaulted,
        labor=labor_estimate,
        wholesale_costs=wholesale,
        profitability=profitability,
    )
