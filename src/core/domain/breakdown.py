"""
PriceBreakdown - результат расчёта цены

Immutable Pydantic модели. Создаются заново на каждый запрос,
после построения не изменяются, движком не сохраняются.
Полная совместимость с JSON Schema (contracts/schema/price_breakdown.json).

Все денежные поля округлены до центов (ROUND_HALF_UP) в момент построения;
в JSON сериализуются строками вида "162.00".
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class PriceComponent(str, Enum):
    """Компонент цены."""

    FRAME = "frame"
    MAT = "mat"
    GLASS = "glass"
    BACKING = "backing"
    LABOR = "labor"


# =============================================================================
# NESTED MODELS
# =============================================================================


class LaborEstimate(BaseModel):
    """
    Оценка трудозатрат.

    Часы по операциям + ставка + региональный коэффициент.
    """

    frame_assembly_hours: Decimal = Field(..., ge=0, description="Сборка рамы (часы)")
    mat_cutting_hours: Decimal = Field(..., ge=0, description="Резка паспарту (часы)")
    glass_cutting_hours: Decimal = Field(..., ge=0, description="Резка стекла (часы)")
    fitting_hours: Decimal = Field(..., ge=0, description="Сборка пакета (часы, фиксировано)")
    finishing_hours: Decimal = Field(..., ge=0, description="Финишная обработка (часы, фиксировано)")
    total_hours: Decimal = Field(..., ge=0, description="Суммарное время (часы)")
    base_hourly_rate: Decimal = Field(..., ge=0, description="Базовая ставка ($/час)")
    regional_factor: Decimal = Field(..., gt=0, description="Региональный коэффициент")
    cost: Decimal = Field(..., ge=0, description="Стоимость работы ($)")

    model_config = {"frozen": True}


class WholesaleCosts(BaseModel):
    """Оптовая стоимость материалов (только для привилегированных вызовов)."""

    frame: Decimal = Field(..., ge=0)
    mat: Decimal = Field(..., ge=0)
    glass: Decimal = Field(..., ge=0)
    backing: Decimal = Field(..., ge=0)
    total: Decimal = Field(..., ge=0)

    model_config = {"frozen": True}


class Profitability(BaseModel):
    """
    Метрики прибыльности.

    overhead_cost = total_wholesale_cost * overhead_percentage
    gross_profit = subtotal - (total_wholesale_cost + overhead_cost + labor)
    gross_profit_margin = gross_profit / subtotal
    markup_multiplier = subtotal / total_wholesale_cost (None при нулевой оптовой стоимости)
    """

    total_wholesale_cost: Decimal = Field(..., ge=0)
    overhead_cost: Decimal = Field(..., ge=0)
    gross_profit: Decimal = Field(..., description="Может быть отрицательной")
    gross_profit_margin: Decimal = Field(..., description="Доля от subtotal")
    markup_multiplier: Optional[Decimal] = Field(None, description="Nullable при нулевой оптовой стоимости")

    model_config = {"frozen": True}


# =============================================================================
# PRICE BREAKDOWN MODEL
# =============================================================================


class PriceBreakdown(BaseModel):
    """
    Итоговая разбивка цены заказа.

    Immutable модель (frozen=True). Содержит:
    - Цены компонентов (рама, паспарту, стекло, подложка)
    - Стоимость работы и её оценку
    - Промежуточные суммы, налог, итог за единицу и за весь тираж
    - Флаг использования оптовой цены по умолчанию
    - (опционально) оптовую стоимость и прибыльность
    """

    # Компоненты
    frame_price: Decimal = Field(..., ge=0, description="Рама ($)")
    mat_price: Decimal = Field(..., ge=0, description="Паспарту ($)")
    glass_price: Decimal = Field(..., ge=0, description="Стекло ($)")
    backing_price: Decimal = Field(..., ge=0, description="Подложка ($)")

    # Суммы
    material_cost: Decimal = Field(..., ge=0, description="frame + mat + glass + backing")
    labor_cost: Decimal = Field(..., ge=0, description="Стоимость работы ($)")
    services_total: Decimal = Field(Decimal("0.00"), ge=0, description="Дополнительные услуги ($)")
    misc_charges_total: Decimal = Field(Decimal("0.00"), ge=0, description="Прочие сборы ($)")
    subtotal: Decimal = Field(..., ge=0, description="Материалы + работа (+ услуги и сборы)")
    tax_rate: Decimal = Field(..., ge=0, lt=1, description="Ставка налога")
    tax: Decimal = Field(..., ge=0, description="subtotal * tax_rate")
    unit_total: Decimal = Field(..., ge=0, description="subtotal + tax")
    quantity: int = Field(..., ge=1, description="Количество одинаковых рам")
    grand_total: Decimal = Field(..., ge=0, description="unit_total * quantity")

    # Прозрачность источника оптовых цен
    used_default_wholesale_price: bool = Field(
        False, description="Хотя бы для одного компонента использована цена по умолчанию"
    )
    defaulted_components: tuple[PriceComponent, ...] = Field(
        (), description="Компоненты, для которых использована цена по умолчанию"
    )

    # Детализация
    labor: Optional[LaborEstimate] = Field(None, description="Оценка трудозатрат")
    wholesale_costs: Optional[WholesaleCosts] = Field(
        None, description="Оптовая стоимость (nullable, только для привилегированных вызовов)"
    )
    profitability: Optional[Profitability] = Field(
        None, description="Прибыльность (nullable, только для привилегированных вызовов)"
    )

    model_config = {"frozen": True}

    def component_price(self, component: PriceComponent) -> Decimal:
        """Цена отдельного компонента по enum."""
        return {
            PriceComponent.FRAME: self.frame_price,
            PriceComponent.MAT: self.mat_price,
            PriceComponent.GLASS: self.glass_price,
            PriceComponent.BACKING: self.backing_price,
            PriceComponent.LABOR: self.labor_cost,
        }[component]
