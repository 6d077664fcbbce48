"""
Markup Tables - табличные наценки по уровням (tiers)

Статические неизменяемые структуры: ключ (оптовая цена за единицу
или united inches) -> множитель наценки и/или минимальная сумма.

Правила разрешения уровня (resolve_tier):
1. Границы включительные: range_low <= key <= range_high
2. Уровни проверяются по возрастанию, первый подходящий выигрывает
3. Ключ в зазоре между уровнями ([0,20] / [21,40], key=20.5) относится к
   следующему уровню
4. Ключ ниже первого уровня или выше конечной границы последнего уровня
   -> последний уровень (историческое поведение, никогда не ошибка)

Таблица без уровней - ошибка конфигурации при построении (UnresolvableTier).
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional

from src.core.domain.errors import UnresolvableTier
from src.core.math.numerical_safeguards import Number, to_decimal


# =============================================================================
# TIER
# =============================================================================


@dataclass(frozen=True)
class MarkupTier:
    """
    Уровень таблицы наценок.

    range_high=None означает неограниченный сверху уровень.
    minimum_charge - нижняя граница розничной суммы (0 = нет минимума).
    """

    range_low: Decimal
    range_high: Optional[Decimal]
    multiplier: Decimal = Decimal("1")
    minimum_charge: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        object.__setattr__(self, "range_low", to_decimal(self.range_low, "range_low"))
        if self.range_high is not None:
            object.__setattr__(self, "range_high", to_decimal(self.range_high, "range_high"))
        object.__setattr__(self, "multiplier", to_decimal(self.multiplier, "multiplier"))
        object.__setattr__(self, "minimum_charge", to_decimal(self.minimum_charge, "minimum_charge"))

        if self.range_high is not None and self.range_low > self.range_high:
            raise ValueError(
                f"Tier range_low {self.range_low} exceeds range_high {self.range_high}"
            )
        if self.multiplier < 0:
            raise ValueError(f"Tier multiplier cannot be negative: {self.multiplier}")
        if self.minimum_charge < 0:
            raise ValueError(f"Tier minimum_charge cannot be negative: {self.minimum_charge}")

    @property
    def is_unbounded(self) -> bool:
        return self.range_high is None

    def contains(self, key: Decimal) -> bool:
        """Проверка попадания ключа в уровень (границы включительные)."""
        if key < self.range_low:
            return False
        return self.range_high is None or key <= self.range_high


def tier(
    range_low: Number,
    range_high: Optional[Number],
    multiplier: Number = 1,
    minimum_charge: Number = 0,
) -> MarkupTier:
    """Короткий конструктор уровня для объявления статических таблиц."""
    return MarkupTier(
        range_low=to_decimal(range_low, "range_low"),
        range_high=None if range_high is None else to_decimal(range_high, "range_high"),
        multiplier=to_decimal(multiplier, "multiplier"),
        minimum_charge=to_decimal(minimum_charge, "minimum_charge"),
    )


# =============================================================================
# TABLE
# =============================================================================


@dataclass(frozen=True)
class MarkupTable:
    """
    Неизменяемая таблица наценок.

    Инварианты (проверяются при построении):
    - хотя бы один уровень (иначе UnresolvableTier)
    - уровни упорядочены по range_low и не пересекаются
    - неограниченным может быть только последний уровень
    """

    name: str
    tiers: tuple[MarkupTier, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tiers", tuple(self.tiers))

        if not self.tiers:
            raise UnresolvableTier(f"Markup table '{self.name}' has no tiers")

        for prev, nxt in zip(self.tiers, self.tiers[1:]):
            if prev.range_high is None:
                raise ValueError(
                    f"Markup table '{self.name}': only the last tier may be unbounded"
                )
            if nxt.range_low <= prev.range_high:
                raise ValueError(
                    f"Markup table '{self.name}': tiers overlap or are out of order "
                    f"([{prev.range_low}, {prev.range_high}] then [{nxt.range_low}, ...])"
                )

    @classmethod
    def from_rows(cls, name: str, rows: Iterable[dict]) -> "MarkupTable":
        """
        Построение таблицы из словарей (формат JSON конфигурации).

        Ключи строк: range_low, range_high (null = без ограничения),
        multiplier (default 1), minimum_charge (default 0).
        """
        return cls(
            name=name,
            tiers=tuple(
                tier(
                    row["range_low"],
                    row.get("range_high"),
                    row.get("multiplier", 1),
                    row.get("minimum_charge", 0),
                )
                for row in rows
            ),
        )

    def resolve(self, key: Number) -> MarkupTier:
        """Разрешение уровня по ключу (см. resolve_tier)."""
        return resolve_tier(self, key)

    @property
    def last(self) -> MarkupTier:
        return self.tiers[-1]


def resolve_tier(table: MarkupTable, key: Number) -> MarkupTier:
    """
    Разрешение уровня таблицы по ключу.

    Никогда не возвращает None и не поднимает исключение для конечного ключа.

    Args:
        table: Таблица наценок
        key: Ключ (оптовая цена за единицу или united inches)

    Returns:
        Подходящий MarkupTier

    Examples:
        >>> t = MarkupTable("demo", (tier(0, 20, 2), tier(21, 40, 3)))
        >>> resolve_tier(t, 20).multiplier
        Decimal('2')
        >>> resolve_tier(t, 21).multiplier
        Decimal('3')
        >>> resolve_tier(t, 500).multiplier  # выше конечной границы -> последний
        Decimal('3')
    """
    value = to_decimal(key, "key")

    # Ниже первого уровня: fallback на последний уровень
    if value < table.tiers[0].range_low:
        return table.last

    for candidate in table.tiers:
        if candidate.range_high is None or value <= candidate.range_high:
            return candidate

    # Выше конечной границы последнего уровня
    return table.last
