"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Конверсию в Decimal без двоичного шума float
2. Отклонение NaN/Inf/bool
3. Безопасное деление
4. Округление ROUND_HALF_UP (деньги, коэффициенты, часы)
5. Валидацию параметров
"""

from decimal import Decimal

import pytest

from src.core.math.numerical_safeguards import (
    MONEY_QUANT,
    ZERO,
    is_valid_number,
    quantize_hours,
    quantize_money,
    quantize_ratio,
    safe_divide,
    to_decimal,
    validate_fraction,
    validate_non_negative,
    validate_positive,
)


# =============================================================================
# ТЕСТЫ КОНВЕРСИИ
# =============================================================================


class TestIsValidNumber:
    """Тесты для is_valid_number"""

    def test_finite_numbers_accepted(self) -> None:
        """Конечные int/float/Decimal/str принимаются"""
        assert is_valid_number(0)
        assert is_valid_number(1.5)
        assert is_valid_number(Decimal("2.25"))
        assert is_valid_number("3.75")

    def test_non_finite_rejected(self) -> None:
        """NaN и Inf отклоняются"""
        assert not is_valid_number(float("nan"))
        assert not is_valid_number(float("inf"))
        assert not is_valid_number(Decimal("NaN"))
        assert not is_valid_number("Infinity")

    def test_bool_rejected(self) -> None:
        """bool не является числом для движка"""
        assert not is_valid_number(True)
        assert not is_valid_number(False)

    def test_garbage_rejected(self) -> None:
        """Нечисловые значения отклоняются"""
        assert not is_valid_number("abc")
        assert not is_valid_number(None)
        assert not is_valid_number([1])


class TestToDecimal:
    """Тесты для to_decimal"""

    def test_float_has_no_binary_noise(self) -> None:
        """0.1 становится Decimal('0.1')"""
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")

    def test_decimal_returned_as_is(self) -> None:
        """Decimal возвращается без изменений"""
        value = Decimal("12.50")
        assert to_decimal(value) is value

    def test_int_and_str(self) -> None:
        """int и строка конвертируются точно"""
        assert to_decimal(144) == Decimal("144")
        assert to_decimal("0.08") == Decimal("0.08")

    def test_invalid_raises_with_name(self) -> None:
        """Ошибка содержит имя параметра"""
        with pytest.raises(ValueError, match="tax_rate"):
            to_decimal(float("nan"), "tax_rate")


# =============================================================================
# ТЕСТЫ БЕЗОПАСНОГО ДЕЛЕНИЯ
# =============================================================================


class TestSafeDivide:
    """Тесты для safe_divide"""

    def test_regular_division(self) -> None:
        assert safe_divide(Decimal("10"), Decimal("4")) == Decimal("2.5")

    def test_zero_denominator_returns_none(self) -> None:
        """Нулевой знаменатель -> None по умолчанию"""
        assert safe_divide(Decimal("10"), Decimal("0")) is None

    def test_zero_denominator_returns_fallback(self) -> None:
        """Нулевой знаменатель -> fallback"""
        assert safe_divide(Decimal("10"), ZERO, fallback=ZERO) == ZERO


# =============================================================================
# ТЕСТЫ ОКРУГЛЕНИЯ
# =============================================================================


class TestQuantize:
    """Тесты округления ROUND_HALF_UP"""

    def test_money_half_up(self) -> None:
        """Половина цента округляется вверх"""
        assert quantize_money(Decimal("27.845")) == Decimal("27.85")
        assert quantize_money(Decimal("0.005")) == Decimal("0.01")
        assert quantize_money(Decimal("27.844999")) == Decimal("27.84")

    def test_money_has_two_places(self) -> None:
        """Результат всегда имеет ровно 2 знака"""
        result = quantize_money(Decimal("162"))
        assert str(result) == "162.00"
        assert result.as_tuple().exponent == MONEY_QUANT.as_tuple().exponent

    def test_ratio_four_places(self) -> None:
        assert quantize_ratio(Decimal("0.338051")) == Decimal("0.3381")

    def test_ratio_passes_none(self) -> None:
        """None (неопределённая метрика) пропускается"""
        assert quantize_ratio(None) is None

    def test_hours_four_places(self) -> None:
        assert str(quantize_hours(Decimal("1.68"))) == "1.6800"


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidation:
    """Тесты для validate_*"""

    def test_validate_positive(self) -> None:
        assert validate_positive("1.25", "regional_factor") == Decimal("1.25")
        with pytest.raises(ValueError, match="regional_factor"):
            validate_positive(0, "regional_factor")
        with pytest.raises(ValueError):
            validate_positive(-1, "regional_factor")

    def test_validate_non_negative(self) -> None:
        assert validate_non_negative(0, "price") == Decimal("0")
        with pytest.raises(ValueError, match="price"):
            validate_non_negative("-0.01", "price")

    def test_validate_fraction(self) -> None:
        """Доля в диапазоне [0, 1)"""
        assert validate_fraction("0.08", "tax_rate") == Decimal("0.08")
        assert validate_fraction(0, "tax_rate") == Decimal("0")
        with pytest.raises(ValueError, match="< 1"):
            validate_fraction(1, "tax_rate")
        with pytest.raises(ValueError):
            validate_fraction(-0.1, "tax_rate")

    def test_validation_rejects_non_finite(self) -> None:
        with pytest.raises(ValueError):
            validate_positive(float("inf"), "factor")
