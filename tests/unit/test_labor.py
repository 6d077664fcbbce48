"""
Тесты для Labor Estimator

Проверяет:
1. Размерно-зависимые операции включаются только при наличии компонента
2. Фиксированные операции включаются всегда
3. cost = hours * base_rate * regional_factor
4. Детализацию LaborEstimate
"""

from decimal import Decimal

import pytest

from src.core.domain.errors import InvalidGeometry
from src.pricing.config import LaborCoefficients
from src.pricing.labor import (
    estimate_labor,
    estimate_labor_hours,
    labor_cost,
    labor_hours,
    summarize_labor,
)


class TestLaborHours:
    """Тесты часов по операциям"""

    def test_all_operations(self) -> None:
        """UI 44: 0.44 + 0.352 + 0.308 + 0.25 + 0.33 = 1.68 ч"""
        hours = labor_hours(44, True, True, True)
        assert hours.frame_assembly == Decimal("0.44")
        assert hours.mat_cutting == Decimal("0.352")
        assert hours.glass_cutting == Decimal("0.308")
        assert hours.total == Decimal("1.68")

    def test_flags_gate_size_dependent_operations(self) -> None:
        hours = labor_hours(44, True, False, False)
        assert hours.mat_cutting == Decimal("0")
        assert hours.glass_cutting == Decimal("0")
        assert hours.total == Decimal("1.02")

    def test_fixed_operations_always_included(self) -> None:
        """Без компонентов остаются fitting + finishing"""
        hours = labor_hours(44, False, False, False)
        assert hours.total == Decimal("0.58")

    def test_custom_coefficients(self) -> None:
        coeffs = LaborCoefficients(frame_assembly_per_ui="0.02", fitting_hours=0, finishing_hours=0)
        hours = labor_hours(50, True, False, False, coefficients=coeffs)
        assert hours.total == Decimal("1.00")

    @pytest.mark.parametrize("ui", [-1, float("nan"), float("inf")])
    def test_invalid_united_inches(self, ui) -> None:
        with pytest.raises(InvalidGeometry):
            labor_hours(ui, True, True, True)


class TestEstimateLabor:
    """Тесты для estimate_labor"""

    def test_reference_cost(self) -> None:
        """1.68 ч * $35 * 1.25 = $73.50"""
        assert estimate_labor(44, True, True, True, 35, "1.25") == Decimal("73.50")

    def test_regional_factor_scales_linearly(self) -> None:
        base = estimate_labor(44, True, True, True, 35, 1)
        doubled = estimate_labor(44, True, True, True, 35, 2)
        assert doubled == base * 2

    def test_zero_regional_factor_rejected(self) -> None:
        with pytest.raises(ValueError):
            estimate_labor(44, True, True, True, 35, 0)

    def test_negative_rate_rejected(self) -> None:
        with pytest.raises(ValueError):
            estimate_labor(44, True, True, True, -35, 1)


class TestEstimateLaborHours:
    """Тесты для estimate_labor_hours"""

    def test_breakdown(self) -> None:
        estimate = estimate_labor_hours(44, True, True, True, 35, "1.25")
        assert estimate.total_hours == Decimal("1.6800")
        assert estimate.fitting_hours == Decimal("0.2500")
        assert estimate.base_hourly_rate == Decimal("35")
        assert estimate.regional_factor == Decimal("1.25")
        assert estimate.cost == Decimal("73.50")
        assert str(estimate.cost) == "73.50"

    def test_matches_estimate_labor(self) -> None:
        estimate = estimate_labor_hours(37, True, False, True, 40, "1.1")
        cost = estimate_labor(37, True, False, True, 40, "1.1")
        assert estimate.cost == cost.quantize(Decimal("0.01"))


class TestSharedHours:
    """Стоимость и детализация считаются из одних и тех же часов"""

    def test_cost_and_summary_from_one_hours_object(self) -> None:
        hours = labor_hours(44, True, True, True)

        cost = labor_cost(hours, 35, "1.25")
        summary = summarize_labor(hours, 35, "1.25")

        assert cost == Decimal("73.50000")
        assert summary.cost == Decimal("73.50")
        assert summary.total_hours == Decimal("1.6800")

    def test_matches_convenience_wrappers(self) -> None:
        hours = labor_hours(30, True, False, True)
        assert labor_cost(hours, 40, 1) == estimate_labor(30, True, False, True, 40, 1)
        assert summarize_labor(hours, 40, 1) == estimate_labor_hours(30, True, False, True, 40, 1)

    def test_rate_validated(self) -> None:
        hours = labor_hours(44, True, True, True)
        with pytest.raises(ValueError):
            labor_cost(hours, -1, 1)
        with pytest.raises(ValueError):
            summarize_labor(hours, 35, 0)
