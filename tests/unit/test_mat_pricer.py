"""
Тесты для Mat Pricer

Проверяет:
1. Формулу max(price_per_sq_in * area * multiplier * scaling, minimum_charge)
2. Минимальная сумма - нижняя граница (floor)
3. Обязательный пересчёт $/кв. фут -> $/кв. дюйм
4. Ключ таблицы: united inches внешнего проёма
5. Площадь <= 0 -> ровно 0
"""

from decimal import Decimal

import pytest

from src.core.domain.units import PriceUnit
from src.core.math.numerical_safeguards import quantize_money
from src.pricing.components.mat import area_price_divisor, mat_wholesale_cost, price_mat


class TestPriceMat:
    """Тесты для price_mat"""

    def test_computed_above_minimum(self) -> None:
        """$4/кв. фут, площадь 400, UI 54: 4/144 * 400 * 2.4 * 1.5 = 40.00 > 32.00"""
        assert price_mat(4, 400, 54) == Decimal("40.00")

    def test_minimum_charge_is_floor(self) -> None:
        """Расчётные 16.00 ниже минимума уровня -> 32.00"""
        assert price_mat(4, 160, 44) == Decimal("32.00")

    def test_minimum_is_never_a_default(self) -> None:
        """Большая площадь даёт цену выше минимума"""
        assert price_mat(4, 2000, 54) > Decimal("32.00")

    @pytest.mark.parametrize("area", [0, -10])
    def test_no_mat_is_exact_zero(self, area) -> None:
        assert price_mat(4, area, 54) == Decimal("0")

    def test_no_mat_skips_tier_lookup(self) -> None:
        """Без паспарту даже некорректный ключ не обрабатывается"""
        assert price_mat(4, 0, float("nan")) == Decimal("0")

    def test_per_sq_inch_price_not_divided(self) -> None:
        """Цена за кв. дюйм используется как есть"""
        per_sq_ft = price_mat(144, 400, 54)
        per_sq_in = price_mat(1, 400, 54, price_unit=PriceUnit.PER_SQ_INCH)
        assert per_sq_ft == per_sq_in

    def test_keyed_by_outer_united_inches(self) -> None:
        """Больший внешний проём -> больший множитель уровня"""
        small = price_mat(4, 1000, 40)
        large = price_mat(4, 1000, 90)
        assert quantize_money(small) == Decimal("91.67")
        assert quantize_money(large) == Decimal("116.67")

    def test_linear_unit_rejected(self) -> None:
        with pytest.raises(ValueError, match="Area price expected"):
            price_mat(4, 400, 54, price_unit=PriceUnit.PER_FOOT)

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ValueError):
            price_mat(-4, 400, 54)


class TestMatWholesaleCost:
    """Тесты оптовой стоимости паспарту"""

    def test_cost(self) -> None:
        assert quantize_money(mat_wholesale_cost(4, 160)) == Decimal("4.44")

    def test_no_mat(self) -> None:
        assert mat_wholesale_cost(4, 0) == Decimal("0")

    def test_divisor(self) -> None:
        assert area_price_divisor(PriceUnit.PER_SQ_FOOT) == Decimal("144")
        assert area_price_divisor(PriceUnit.PER_SQ_INCH) == Decimal("1")
