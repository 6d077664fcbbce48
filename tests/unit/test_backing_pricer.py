"""
Тесты для Backing Pricer

Проверяет: area * $0.04/кв. дюйм * 1.2, без таблицы наценок.
"""

from decimal import Decimal

from src.pricing.components.backing import backing_wholesale_cost, price_backing
from src.pricing.config import DEFAULT_PRICING_CONFIG


class TestBacking:
    """Тесты для price_backing / backing_wholesale_cost"""

    def test_price(self) -> None:
        assert price_backing(480) == Decimal("23.04")

    def test_wholesale_cost(self) -> None:
        assert backing_wholesale_cost(480) == Decimal("19.20")

    def test_linear_in_area(self) -> None:
        """Нет уровней: цена пропорциональна площади"""
        assert price_backing(960) == price_backing(480) * 2

    def test_zero_area(self) -> None:
        assert price_backing(0) == Decimal("0")

    def test_config_override(self) -> None:
        cfg = DEFAULT_PRICING_CONFIG.with_overrides(backing_markup_factor="1.5")
        assert price_backing(100, config=cfg) == Decimal("6.000")
