"""
Numerical Safeguards - денежная арифметика на Decimal

Модуль обеспечивает детерминированную арифметику для всех денежных расчётов:
- Конверсия входных чисел (int/float/str/Decimal) в Decimal без двоичного шума
- Проверка конечности (NaN/Inf никогда не попадают в расчёт)
- Безопасное деление для метрик (наценка, маржа)
- Округление денег ROUND_HALF_UP до центов только на финальном шаге

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. float никогда не участвует в денежной арифметике напрямую
2. Промежуточные значения не округляются
3. Деление на ноль не происходит (возвращается fallback)
4. Все операции детерминированы и воспроизводимы
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Final, Optional, Union

Number = Union[int, float, str, Decimal]

# =============================================================================
# КВАНТЫ ОКРУГЛЕНИЯ
# =============================================================================

# Денежные суммы: 2 знака после запятой
MONEY_QUANT: Final[Decimal] = Decimal("0.01")

# Безразмерные коэффициенты (маржа, наценка): 4 знака
RATIO_QUANT: Final[Decimal] = Decimal("0.0001")

# Часы работы: 4 знака (используется только для отчёта)
HOURS_QUANT: Final[Decimal] = Decimal("0.0001")

ZERO: Final[Decimal] = Decimal("0")


# =============================================================================
# КОНВЕРСИЯ И ПРОВЕРКА
# =============================================================================


def is_valid_number(value: object) -> bool:
    """
    Проверка, что значение является конечным числом.

    bool отвергается явно (True не является размером в дюймах).

    Examples:
        >>> is_valid_number(1.5)
        True
        >>> is_valid_number(float('nan'))
        False
        >>> is_valid_number(True)
        False
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            return Decimal(value).is_finite()
        except InvalidOperation:
            return False
    return False


def to_decimal(value: Number, name: str = "value") -> Decimal:
    """
    Конверсия числа в Decimal.

    float конвертируется через str(), чтобы 0.1 стал Decimal("0.1"),
    а не 0.1000000000000000055511151231257827.

    Args:
        value: Исходное значение
        name: Имя параметра для сообщения об ошибке

    Returns:
        Конечный Decimal

    Raises:
        ValueError: Если значение не является конечным числом
    """
    if not is_valid_number(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")

    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_divide(
    numerator: Decimal,
    denominator: Decimal,
    fallback: Optional[Decimal] = None,
) -> Optional[Decimal]:
    """
    Безопасное деление для производных метрик.

    Используется там, где знаменатель может легитимно быть нулём
    (например, наценка при нулевой оптовой стоимости).

    Args:
        numerator: Числитель
        denominator: Знаменатель
        fallback: Значение при нулевом знаменателе (default: None)

    Returns:
        numerator / denominator или fallback

    Examples:
        >>> safe_divide(Decimal("10"), Decimal("4"))
        Decimal('2.5')
        >>> safe_divide(Decimal("10"), Decimal("0")) is None
        True
    """
    if denominator == 0:
        return fallback
    return numerator / denominator


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def quantize_money(value: Decimal) -> Decimal:
    """
    Округление денежной суммы до центов (ROUND_HALF_UP).

    Вызывается только при построении итогового результата.

    Examples:
        >>> quantize_money(Decimal("27.848"))
        Decimal('27.85')
        >>> quantize_money(Decimal("0.005"))
        Decimal('0.01')
    """
    return value.quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def quantize_ratio(value: Optional[Decimal]) -> Optional[Decimal]:
    """Округление безразмерного коэффициента до 4 знаков (None пропускается)."""
    if value is None:
        return None
    return value.quantize(RATIO_QUANT, rounding=ROUND_HALF_UP)


def quantize_hours(value: Decimal) -> Decimal:
    """Округление часов работы до 4 знаков."""
    return value.quantize(HOURS_QUANT, rounding=ROUND_HALF_UP)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: Number, name: str) -> Decimal:
    """
    Проверка, что значение строго положительное.

    Returns:
        Значение как Decimal

    Raises:
        ValueError: Если значение не конечное или <= 0
    """
    dec = to_decimal(value, name)
    if dec <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return dec


def validate_non_negative(value: Number, name: str) -> Decimal:
    """
    Проверка, что значение неотрицательное.

    Returns:
        Значение как Decimal

    Raises:
        ValueError: Если значение не конечное или < 0
    """
    dec = to_decimal(value, name)
    if dec < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return dec


def validate_fraction(value: Number, name: str) -> Decimal:
    """
    Проверка доли в диапазоне [0, 1).

    Используется для ставки налога и доли накладных расходов.

    Raises:
        ValueError: Если значение вне [0, 1)
    """
    dec = validate_non_negative(value, name)
    if dec >= 1:
        raise ValueError(f"{name} must be < 1, got {value}")
    return dec
