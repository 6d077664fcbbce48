"""
Тесты для Glass Pricer

Проверяет:
1. Базовый сбор по размеру проёма + переменная часть по площади
2. Множители типа стекла: regular < conservation < museum
3. Ключ таблиц: united inches
4. InvalidGeometry для площади <= 0
"""

from decimal import Decimal

import pytest

from src.core.domain.catalog import GlassType
from src.core.domain.errors import InvalidGeometry
from src.core.math.numerical_safeguards import quantize_money
from src.pricing.components.glass import glass_wholesale_cost, price_glass
from src.pricing.config import DEFAULT_PRICING_CONFIG


class TestPriceGlass:
    """Тесты для price_glass"""

    def test_reference_order(self) -> None:
        """$11.52/кв. фут, 480 кв. дюймов, UI 44: 45 + 3.33 * 11.52 * 2.6 * 1.0 * 0.25"""
        price = price_glass("11.52", 480, 44, GlassType.REGULAR)
        assert quantize_money(price) == Decimal("69.96")

    def test_museum_strictly_greater_than_regular(self) -> None:
        regular = price_glass(12, 480, 44, GlassType.REGULAR)
        conservation = price_glass(12, 480, 44, GlassType.CONSERVATION)
        museum = price_glass(12, 480, 44, GlassType.MUSEUM)
        assert regular < conservation < museum

    def test_type_from_string(self) -> None:
        assert price_glass(12, 480, 44, "museum") == price_glass(12, 480, 44, GlassType.MUSEUM)

    def test_base_charge_small_vs_large(self) -> None:
        """Базовый сбор: UI <= 40 -> $35, больше -> $45"""
        assert price_glass(0, 100, 40) == Decimal("35.00")
        assert price_glass(0, 100, 41) == Decimal("45.00")

    def test_base_charge_gap_belongs_to_large(self) -> None:
        assert price_glass(0, 100, "40.5") == Decimal("45.00")

    def test_multiplier_tier(self) -> None:
        """UI 20 -> 2.0, UI 21 -> 2.3 (переменная часть)"""
        small = price_glass(144, 144, 20) - Decimal("35.00")
        large = price_glass(144, 144, 21) - Decimal("35.00")
        assert small == Decimal("72.0000")
        assert large == Decimal("82.8000")

    @pytest.mark.parametrize("area", [0, -1, float("nan")])
    def test_invalid_area(self, area) -> None:
        with pytest.raises(InvalidGeometry):
            price_glass(12, area, 44)

    def test_unknown_glass_type(self) -> None:
        with pytest.raises(ValueError):
            price_glass(12, 480, 44, "stained")

    def test_custom_scaling_constant(self) -> None:
        cfg = DEFAULT_PRICING_CONFIG.with_overrides(glass_scaling_constant=1)
        price = price_glass(144, 144, 20, config=cfg)
        assert price - Decimal("35.00") == Decimal("288.0")


class TestGlassWholesaleCost:
    """Тесты оптовой стоимости стекла"""

    def test_cost(self) -> None:
        assert glass_wholesale_cost("11.52", 480) == Decimal("38.40")

    def test_invalid_area(self) -> None:
        with pytest.raises(InvalidGeometry):
            glass_wholesale_cost(12, 0)
