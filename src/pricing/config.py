"""
PricingConfig - единственная калибровка движка ценообразования

Все бизнес-константы объявлены здесь и только здесь: таблицы наценок,
ставки работы, налог, накладные расходы, коэффициенты пересчёта.
Вызывающий код получает конфигурацию явно (dependency injection),
что позволяет тестировать альтернативные калибровки без глобального состояния.

Переопределение:
- config.with_overrides(tax_rate=Decimal("0.0825"))
- load_pricing_config(path) / PricingConfig.from_mapping(data) из JSON,
  валидированного по contracts/schema/pricing_config.json

Единицы оптовых цен:
- рама: $ за погонный фут
- паспарту: $ за кв. фут (делится на 144 перед расчётом)
- стекло: $ за кв. фут внутри прайсера (запись каталога хранит $ за кв. дюйм)
- подложка: $ за кв. дюйм
"""

import json
import logging
from dataclasses import dataclass, field, fields, replace
from decimal import Decimal
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final, Mapping, Union

from src.core.contracts import validate_pricing_config
from src.core.domain.catalog import FramePricingMethod, GlassType
from src.core.domain.units import INCHES_PER_FOOT, SQ_INCHES_PER_SQ_FOOT
from src.core.math.numerical_safeguards import (
    to_decimal,
    validate_fraction,
    validate_non_negative,
    validate_positive,
)
from src.pricing.markup import MarkupTable, tier

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Базис ключа таблицы наценок рамы
FRAME_BASIS_WHOLESALE_PRICE: Final[str] = "wholesale_price"
FRAME_BASIS_UNITED_INCHES: Final[str] = "united_inches"

# Минимальная оплачиваемая длина багета (футы)
MINIMUM_BILLABLE_FEET: Final[Decimal] = Decimal("4")

# Понижающий коэффициент розничной цены рамы для выхода на целевую маржу.
# Применяется в одном месте (price_frame) для всех вызывающих.
FRAME_MARGIN_FACTOR: Final[Decimal] = Decimal("0.85")

# Надбавка поставщика за способ заказа багета (к оптовой стоимости).
# Любой заказ, отличный от chop, несёт 30% надбавку за сборку.
FRAME_METHOD_FACTORS: Final[Mapping[FramePricingMethod, Decimal]] = MappingProxyType({
    FramePricingMethod.CHOP: Decimal("1.00"),
    FramePricingMethod.JOIN: Decimal("1.30"),
    FramePricingMethod.LENGTH: Decimal("1.30"),
})

# Коэффициент расхода листа паспарту (обрезки при вырезании окна)
MAT_SCALING_CONSTANT: Final[Decimal] = Decimal("1.5")

# Множители по типу стекла: regular < conservation < museum
GLASS_TYPE_MULTIPLIERS: Final[Mapping[GlassType, Decimal]] = MappingProxyType({
    GlassType.REGULAR: Decimal("1.0"),
    GlassType.CONSERVATION: Decimal("1.5"),
    GlassType.MUSEUM: Decimal("2.0"),
})

# Масштаб переменной части цены стекла (поверх фиксированного базового сбора)
GLASS_SCALING_CONSTANT: Final[Decimal] = Decimal("0.25")

# Подложка: оптовая цена $ за кв. дюйм и наценка
BACKING_WHOLESALE_PER_SQ_IN: Final[Decimal] = Decimal("0.04")
BACKING_MARKUP_FACTOR: Final[Decimal] = Decimal("1.2")

# Работа: базовая ставка ($/час) и региональный коэффициент
BASE_HOURLY_LABOR_RATE: Final[Decimal] = Decimal("35")
REGIONAL_LABOR_FACTOR: Final[Decimal] = Decimal("1.25")

# Налог с продаж и доля накладных расходов
TAX_RATE: Final[Decimal] = Decimal("0.08")
OVERHEAD_PERCENTAGE: Final[Decimal] = Decimal("0.30")

# Именованные оптовые цены по умолчанию (используются только с флагом в результате)
DEFAULT_FRAME_PRICE_PER_FOOT: Final[Decimal] = Decimal("8.00")
DEFAULT_MAT_PRICE_PER_SQ_FT: Final[Decimal] = Decimal("4.00")
DEFAULT_GLASS_PRICE_PER_SQ_IN: Final[Decimal] = Decimal("0.08")

# Припуск на рез при заказе багета у поставщика (футы на одну раму)
FRAME_ORDER_ALLOWANCE_FEET: Final[Decimal] = Decimal("1")

# Припуск листа паспарту на обрезку при заказе (дюймы к каждому размеру)
MAT_SHEET_ALLOWANCE_INCHES: Final[Decimal] = Decimal("4")


# =============================================================================
# MARKUP TABLES
# =============================================================================

# Рама: ключ - оптовая цена $ за фут
FRAME_MARKUP_TABLE: Final[MarkupTable] = MarkupTable(
    name="frame_by_wholesale_price",
    tiers=(
        tier(0, "1.99", "4.0"),
        tier("2.00", "3.99", "3.5"),
        tier("4.00", "5.99", "3.2"),
        tier("6.00", "9.99", "3.0"),
        tier("10.00", "14.99", "2.8"),
        tier("15.00", "19.99", "2.6"),
        tier("20.00", "29.99", "2.4"),
        tier("30.00", "49.99", "2.2"),
        tier("50.00", "99.99", "2.0"),
        tier("100.00", None, "1.8"),
    ),
)

# Рама (вариант по размеру): ключ - united inches внешнего проёма
FRAME_SIZE_MARKUP_TABLE: Final[MarkupTable] = MarkupTable(
    name="frame_by_united_inches",
    tiers=(
        tier(0, 20, "2.0"),
        tier(21, 40, "2.5"),
        tier(41, 60, "3.0"),
        tier(61, 80, "3.5"),
        tier(81, None, "4.0"),
    ),
)

# Паспарту: ключ - united inches внешнего проёма, с минимальной суммой
MAT_MARKUP_TABLE: Final[MarkupTable] = MarkupTable(
    name="mat_by_united_inches",
    tiers=(
        tier(0, 20, "2.0", "18.00"),
        tier(21, 40, "2.2", "25.00"),
        tier(41, 60, "2.4", "32.00"),
        tier(61, 80, "2.6", "38.00"),
        tier(81, None, "2.8", "45.00"),
    ),
)

# Стекло: ключ - united inches
GLASS_MARKUP_TABLE: Final[MarkupTable] = MarkupTable(
    name="glass_by_united_inches",
    tiers=(
        tier(0, 20, "2.0"),
        tier(21, 40, "2.3"),
        tier(41, 60, "2.6"),
        tier(61, 80, "2.9"),
        tier(81, None, "3.2"),
    ),
)

# Стекло: базовый сбор за обработку (minimum_charge уровня), ключ - united inches
GLASS_BASE_CHARGE_TABLE: Final[MarkupTable] = MarkupTable(
    name="glass_base_charge_by_united_inches",
    tiers=(
        tier(0, 40, 1, "35.00"),
        tier(41, None, 1, "45.00"),
    ),
)


# =============================================================================
# LABOR COEFFICIENTS
# =============================================================================


@dataclass(frozen=True)
class LaborCoefficients:
    """
    Нормы времени по операциям.

    Размерно-зависимые операции: часы на один united inch.
    Фиксированные операции: часы на заказ, выполняются всегда.
    """

    frame_assembly_per_ui: Decimal = Decimal("0.01")
    mat_cutting_per_ui: Decimal = Decimal("0.008")
    glass_cutting_per_ui: Decimal = Decimal("0.007")
    fitting_hours: Decimal = Decimal("0.25")
    finishing_hours: Decimal = Decimal("0.33")

    def __post_init__(self) -> None:
        for f in fields(self):
            object.__setattr__(self, f.name, validate_non_negative(getattr(self, f.name), f.name))


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class PricingConfig:
    """
    Конфигурация движка ценообразования.

    Неизменяемое значение. Числовые поля нормализуются в Decimal при построении,
    поэтому with_overrides() принимает int/float/str.
    """

    # Рама
    frame_markup_table: MarkupTable = FRAME_MARKUP_TABLE
    frame_size_markup_table: MarkupTable = FRAME_SIZE_MARKUP_TABLE
    frame_markup_basis: str = FRAME_BASIS_WHOLESALE_PRICE
    frame_margin_factor: Decimal = FRAME_MARGIN_FACTOR
    frame_method_factors: Mapping[FramePricingMethod, Decimal] = field(
        default_factory=lambda: FRAME_METHOD_FACTORS
    )
    minimum_billable_feet: Decimal = MINIMUM_BILLABLE_FEET

    # Паспарту
    mat_markup_table: MarkupTable = MAT_MARKUP_TABLE
    mat_scaling_constant: Decimal = MAT_SCALING_CONSTANT

    # Стекло
    glass_markup_table: MarkupTable = GLASS_MARKUP_TABLE
    glass_base_charge_table: MarkupTable = GLASS_BASE_CHARGE_TABLE
    glass_type_multipliers: Mapping[GlassType, Decimal] = field(
        default_factory=lambda: GLASS_TYPE_MULTIPLIERS
    )
    glass_scaling_constant: Decimal = GLASS_SCALING_CONSTANT

    # Подложка
    backing_wholesale_per_sq_in: Decimal = BACKING_WHOLESALE_PER_SQ_IN
    backing_markup_factor: Decimal = BACKING_MARKUP_FACTOR

    # Работа
    base_hourly_labor_rate: Decimal = BASE_HOURLY_LABOR_RATE
    regional_labor_factor: Decimal = REGIONAL_LABOR_FACTOR
    labor_coefficients: LaborCoefficients = field(default_factory=LaborCoefficients)

    # Налог и накладные
    tax_rate: Decimal = TAX_RATE
    overhead_percentage: Decimal = OVERHEAD_PERCENTAGE

    # Оптовые цены по умолчанию
    default_frame_price_per_foot: Decimal = DEFAULT_FRAME_PRICE_PER_FOOT
    default_mat_price_per_sq_ft: Decimal = DEFAULT_MAT_PRICE_PER_SQ_FT
    default_glass_price_per_sq_in: Decimal = DEFAULT_GLASS_PRICE_PER_SQ_IN
    strict_wholesale_prices: bool = False

    # Заказ материалов
    frame_order_allowance_feet: Decimal = FRAME_ORDER_ALLOWANCE_FEET
    mat_sheet_allowance_inches: Decimal = MAT_SHEET_ALLOWANCE_INCHES

    # Коэффициенты пересчёта единиц
    inches_per_foot: Decimal = INCHES_PER_FOOT
    sq_inches_per_sq_foot: Decimal = SQ_INCHES_PER_SQ_FOOT

    def _set(self, name: str, value: Any) -> None:
        # frozen dataclass: нормализация только в __post_init__
        object.__setattr__(self, name, value)

    def __post_init__(self) -> None:
        if self.frame_markup_basis not in (FRAME_BASIS_WHOLESALE_PRICE, FRAME_BASIS_UNITED_INCHES):
            raise ValueError(f"Unknown frame_markup_basis: {self.frame_markup_basis!r}")

        for name in (
            "frame_margin_factor",
            "mat_scaling_constant",
            "glass_scaling_constant",
            "backing_markup_factor",
            "regional_labor_factor",
            "inches_per_foot",
            "sq_inches_per_sq_foot",
        ):
            self._set(name, validate_positive(getattr(self, name), name))

        for name in (
            "minimum_billable_feet",
            "backing_wholesale_per_sq_in",
            "base_hourly_labor_rate",
            "default_frame_price_per_foot",
            "default_mat_price_per_sq_ft",
            "default_glass_price_per_sq_in",
            "frame_order_allowance_feet",
            "mat_sheet_allowance_inches",
        ):
            self._set(name, validate_non_negative(getattr(self, name), name))

        self._set("tax_rate", validate_fraction(self.tax_rate, "tax_rate"))
        self._set("overhead_percentage", validate_fraction(self.overhead_percentage, "overhead_percentage"))

        method_factors = {
            FramePricingMethod(k): validate_positive(v, f"frame_method_factors[{k}]")
            for k, v in self.frame_method_factors.items()
        }
        missing_methods = set(FramePricingMethod) - set(method_factors)
        if missing_methods:
            raise ValueError(
                f"frame_method_factors missing methods: {sorted(m.value for m in missing_methods)}"
            )
        self._set("frame_method_factors", MappingProxyType(method_factors))

        glass_multipliers = {
            GlassType(k): validate_positive(v, f"glass_type_multipliers[{k}]")
            for k, v in self.glass_type_multipliers.items()
        }
        missing_types = set(GlassType) - set(glass_multipliers)
        if missing_types:
            raise ValueError(
                f"glass_type_multipliers missing types: {sorted(t.value for t in missing_types)}"
            )
        regular = glass_multipliers[GlassType.REGULAR]
        conservation = glass_multipliers[GlassType.CONSERVATION]
        museum = glass_multipliers[GlassType.MUSEUM]
        if not regular < conservation < museum:
            raise ValueError(
                "glass_type_multipliers must satisfy regular < conservation < museum, "
                f"got {regular} / {conservation} / {museum}"
            )
        self._set("glass_type_multipliers", MappingProxyType(glass_multipliers))

    # -------------------------------------------------------------------------
    # Overrides
    # -------------------------------------------------------------------------

    def with_overrides(self, **changes: Any) -> "PricingConfig":
        """Новая конфигурация с переопределёнными полями (исходная не меняется)."""
        return replace(self, **changes)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        base: "PricingConfig | None" = None,
    ) -> "PricingConfig":
        """
        Построение конфигурации из словаря (формат pricing_config.json).

        Отсутствующие ключи берутся из base (по умолчанию DEFAULT_PRICING_CONFIG).

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        validate_pricing_config(dict(data))

        changes: dict[str, Any] = {}
        for key, value in data.items():
            if key.endswith("_table"):
                changes[key] = MarkupTable.from_rows(key, value)
            elif key == "labor_coefficients":
                changes[key] = replace(
                    (base or DEFAULT_PRICING_CONFIG).labor_coefficients,
                    **{k: to_decimal(v, k) for k, v in value.items()},
                )
            elif key in ("frame_method_factors", "glass_type_multipliers"):
                changes[key] = {k: to_decimal(v, k) for k, v in value.items()}
            elif key in ("frame_markup_basis", "strict_wholesale_prices"):
                changes[key] = value
            else:
                changes[key] = to_decimal(value, key)

        return (base or DEFAULT_PRICING_CONFIG).with_overrides(**changes)


DEFAULT_PRICING_CONFIG: Final[PricingConfig] = PricingConfig()


def load_pricing_config(
    path: Union[str, Path],
    base: "PricingConfig | None" = None,
) -> PricingConfig:
    """
    Загрузка конфигурации из JSON файла.

    Args:
        path: Путь к JSON файлу с переопределениями
        base: Базовая конфигурация (default: DEFAULT_PRICING_CONFIG)

    Returns:
        PricingConfig

    Raises:
        FileNotFoundError: Если файл не найден
        json.JSONDecodeError: Если файл не является валидным JSON
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    config_path = Path(path)
    with open(config_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    config = PricingConfig.from_mapping(data, base=base)
    logger.info(
        "Loaded pricing config from %s (%d overrides)",
        config_path,
        len(data),
        extra={"config_path": str(config_path), "overrides": sorted(data)},
    )
    return config
