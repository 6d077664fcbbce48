"""
Labor Estimator - оценка трудозатрат мастерской

Часы по операциям:
- сборка рамы, резка паспарту, резка стекла: coefficient * united_inches,
  каждая только при наличии соответствующего компонента
- сборка пакета (fitting) и финишная обработка: фиксированное время, всегда

Стоимость:
    cost = total_hours * base_hourly_rate * regional_factor

Нормы времени берутся из LaborCoefficients (PricingConfig.labor_coefficients).
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from src.core.domain.breakdown import LaborEstimate
from src.core.domain.errors import InvalidGeometry
from src.core.math.numerical_safeguards import (
    ZERO,
    Number,
    is_valid_number,
    quantize_hours,
    quantize_money,
    to_decimal,
    validate_non_negative,
    validate_positive,
)
from src.pricing.config import DEFAULT_PRICING_CONFIG, LaborCoefficients


@dataclass(frozen=True)
class LaborHours:
    """Часы по операциям (полная точность, без округления)."""

    frame_assembly: Decimal
    mat_cutting: Decimal
    glass_cutting: Decimal
    fitting: Decimal
    finishing: Decimal

    @property
    def total(self) -> Decimal:
        return self.frame_assembly + self.mat_cutting + self.glass_cutting + self.fitting + self.finishing


def labor_hours(
    combined_linear: Number,
    has_frame: bool,
    has_mat: bool,
    has_glass: bool,
    *,
    coefficients: Optional[LaborCoefficients] = None,
) -> LaborHours:
    """
    Часы по операциям для заказа.

    Raises:
        InvalidGeometry: combined_linear отрицателен или не является конечным числом
    """
    if not is_valid_number(combined_linear):
        raise InvalidGeometry(f"combined_linear must be a finite number, got {combined_linear!r}")
    united_inches = to_decimal(combined_linear, "combined_linear")
    if united_inches < 0:
        raise InvalidGeometry(f"combined_linear cannot be negative, got {united_inches}")

    coeffs = coefficients or DEFAULT_PRICING_CONFIG.labor_coefficients

    return LaborHours(
        frame_assembly=coeffs.frame_assembly_per_ui * united_inches if has_frame else ZERO,
        mat_cutting=coeffs.mat_cutting_per_ui * united_inches if has_mat else ZERO,
        glass_cutting=coeffs.glass_cutting_per_ui * united_inches if has_glass else ZERO,
        fitting=coeffs.fitting_hours,
        finishing=coeffs.finishing_hours,
    )


def labor_cost(hours: LaborHours, base_hourly_rate: Number, regional_factor: Number) -> Decimal:
    """Стоимость работы по уже посчитанным часам (без округления)."""
    rate = validate_non_negative(base_hourly_rate, "base_hourly_rate")
    factor = validate_positive(regional_factor, "regional_factor")
    return hours.total * rate * factor


def summarize_labor(hours: LaborHours, base_hourly_rate: Number, regional_factor: Number) -> LaborEstimate:
    """Оценка трудозатрат для отчёта: часы по операциям (4 знака), ставка и стоимость (центы)."""
    rate = validate_non_negative(base_hourly_rate, "base_hourly_rate")
    factor = validate_positive(regional_factor, "regional_factor")

    return LaborEstimate(
        frame_assembly_hours=quantize_hours(hours.frame_assembly),
        mat_cutting_hours=quantize_hours(hours.mat_cutting),
        glass_cutting_hours=quantize_hours(hours.glass_cutting),
        fitting_hours=quantize_hours(hours.fitting),
        finishing_hours=quantize_hours(hours.finishing),
        total_hours=quantize_hours(hours.total),
        base_hourly_rate=rate,
        regional_factor=factor,
        cost=quantize_money(hours.total * rate * factor),
    )


def estimate_labor(
    combined_linear: Number,
    has_frame: bool,
    has_mat: bool,
    has_glass: bool,
    base_hourly_rate: Number,
    regional_factor: Number,
    *,
    coefficients: Optional[LaborCoefficients] = None,
) -> Decimal:
    """
    Стоимость работы (без округления).

    Args:
        combined_linear: United inches внешнего проёма
        has_frame: Заказ включает раму
        has_mat: Заказ включает паспарту
        has_glass: Заказ включает стекло
        base_hourly_rate: Базовая ставка $/час
        regional_factor: Региональный коэффициент (> 0)
        coefficients: Нормы времени (default: из DEFAULT_PRICING_CONFIG)

    Returns:
        total_hours * base_hourly_rate * regional_factor

    Examples:
        >>> estimate_labor(44, True, True, True, 35, "1.25")
        Decimal('73.50000')
    """
    hours = labor_hours(combined_linear, has_frame, has_mat, has_glass, coefficients=coefficients)
    return labor_cost(hours, base_hourly_rate, regional_factor)


def estimate_labor_hours(
    combined_linear: Number,
    has_frame: bool,
    has_mat: bool,
    has_glass: bool,
    base_hourly_rate: Number,
    regional_factor: Number,
    *,
    coefficients: Optional[LaborCoefficients] = None,
) -> LaborEstimate:
    """Оценка трудозатрат с разбивкой по операциям (см. summarize_labor)."""
    hours = labor_hours(combined_linear, has_frame, has_mat, has_glass, coefficients=coefficients)
    return summarize_labor(hours, base_hourly_rate, regional_factor)
