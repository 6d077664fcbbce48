"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов
- Детекция нарушений constraints (min/enum/pattern)
- Интеграция с Pydantic моделями
"""

from decimal import Decimal

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    PriceBreakdownValidator,
    PriceRequestValidator,
    PricingConfigValidator,
    SchemaLoader,
    validate_price_breakdown,
    validate_price_request,
    validate_pricing_config,
)
from src.core.domain import PriceBreakdown, Profitability


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_price_request():
    """Валидный price_request для тестирования."""
    return {
        "schema_version": "1",
        "artwork": {"width": 16, "height": "20.5"},
        "mat_width": 2,
        "quantity": 2,
        "frame_pricing_method": "join",
        "frame": {
            "id": "larson-210286",
            "name": "Gallery Black",
            "price": "8.00",
            "price_unit": "per_foot",
            "manufacturer": "Larson-Juhl",
        },
        "mat": {"id": "crescent-bright-white", "price": None},
        "glass": {"id": "tru-vue-museum", "name": "Museum Glass", "price": 0.08},
        "services": [{"name": "Float mount", "price": 25}],
        "misc_charges": [{"description": "Rush", "amount": 10, "kind": "percentage"}],
    }


@pytest.fixture
def valid_price_breakdown():
    """Валидный price_breakdown для тестирования."""
    return {
        "frame_price": "149.60",
        "mat_price": "32.00",
        "glass_price": "69.96",
        "backing_price": "23.04",
        "material_cost": "274.60",
        "labor_cost": "73.50",
        "services_total": "0.00",
        "misc_charges_total": "0.00",
        "subtotal": "348.10",
        "tax_rate": "0.08",
        "tax": "27.85",
        "unit_total": "375.95",
        "quantity": 2,
        "grand_total": "751.90",
        "used_default_wholesale_price": False,
        "defaulted_components": [],
        "labor": None,
        "wholesale_costs": None,
        "profitability": None,
    }


# =============================================================================
# TESTS - SCHEMA LOADING
# =============================================================================


def test_schema_loader_loads_all_schemas():
    """Проверка загрузки всех схем."""
    loader = SchemaLoader()

    request_schema = loader.load_schema("price_request")
    breakdown_schema = loader.load_schema("price_breakdown")
    config_schema = loader.load_schema("pricing_config")

    assert request_schema["properties"]["schema_version"]["const"] == "1"
    assert breakdown_schema["title"] == "price_breakdown"
    assert config_schema["additionalProperties"] is False


def test_schema_loader_caches_schemas():
    """Проверка кэширования схем."""
    loader = SchemaLoader()

    schema1 = loader.load_schema("price_request")
    schema2 = loader.load_schema("price_request")

    # Должен вернуть тот же объект (кэш)
    assert schema1 is schema2


def test_schema_loader_raises_on_missing_schema():
    """Проверка ошибки при отсутствующей схеме."""
    loader = SchemaLoader()

    with pytest.raises(FileNotFoundError):
        loader.load_schema("non_existent_schema")


# =============================================================================
# TESTS - PRICE REQUEST VALIDATION
# =============================================================================


def test_price_request_validator_accepts_valid_data(valid_price_request):
    """Валидация правильного price_request."""
    validator = PriceRequestValidator()
    validator.validate(valid_price_request)
    assert validator.is_valid(valid_price_request)


def test_price_request_validate_function(valid_price_request):
    """Проверка функции validate_price_request."""
    validate_price_request(valid_price_request)


def test_price_request_minimal():
    """Только обязательные поля."""
    validate_price_request({"schema_version": "1", "artwork": {"width": 8, "height": 10}, "quantity": 1})


def test_price_request_rejects_missing_required_field(valid_price_request):
    """Валидация отклоняет данные без обязательных полей."""
    data = valid_price_request.copy()
    del data["quantity"]

    with pytest.raises(ValidationError) as exc_info:
        PriceRequestValidator().validate(data)
    assert "'quantity' is a required property" in str(exc_info.value)


def test_price_request_rejects_non_integer_quantity(valid_price_request):
    """Количество должно быть целым."""
    data = valid_price_request.copy()
    data["quantity"] = "2"

    with pytest.raises(ValidationError) as exc_info:
        validate_price_request(data)
    assert "is not of type 'integer'" in str(exc_info.value)


def test_price_request_rejects_boolean_quantity(valid_price_request):
    """bool не является целым количеством."""
    data = valid_price_request.copy()
    data["quantity"] = True

    with pytest.raises(ValidationError):
        validate_price_request(data)


def test_price_request_rejects_unknown_method(valid_price_request):
    data = valid_price_request.copy()
    data["frame_pricing_method"] = "glued"

    with pytest.raises(ValidationError):
        validate_price_request(data)


def test_price_request_rejects_negative_price(valid_price_request):
    data = valid_price_request.copy()
    data["frame"] = dict(data["frame"], price=-8)

    with pytest.raises(ValidationError):
        validate_price_request(data)


def test_price_request_accepts_blank_price(valid_price_request):
    """Пустая строка цены из слоя хранения допустима (цена отсутствует)."""
    data = valid_price_request.copy()
    data["frame"] = dict(data["frame"], price="")

    validate_price_request(data)


def test_price_request_rejects_unknown_field(valid_price_request):
    data = valid_price_request.copy()
    data["discount"] = 10

    with pytest.raises(ValidationError):
        validate_price_request(data)


def test_price_request_rejects_invalid_unit(valid_price_request):
    data = valid_price_request.copy()
    data["glass"] = dict(data["glass"], price_unit="per_yard")

    with pytest.raises(ValidationError):
        validate_price_request(data)


# =============================================================================
# TESTS - PRICE BREAKDOWN VALIDATION
# =============================================================================


def test_price_breakdown_validator_accepts_valid_data(valid_price_breakdown):
    validator = PriceBreakdownValidator()
    validator.validate(valid_price_breakdown)
    assert validator.is_valid(valid_price_breakdown)


def test_price_breakdown_validate_function(valid_price_breakdown):
    validate_price_breakdown(valid_price_breakdown)


def test_price_breakdown_rejects_unrounded_money(valid_price_breakdown):
    """Деньги только с двумя знаками."""
    data = valid_price_breakdown.copy()
    data["tax"] = "27.848"

    with pytest.raises(ValidationError):
        validate_price_breakdown(data)


def test_price_breakdown_rejects_numeric_money(valid_price_breakdown):
    """Деньги сериализуются строками, не float."""
    data = valid_price_breakdown.copy()
    data["grand_total"] = 751.9

    with pytest.raises(ValidationError):
        validate_price_breakdown(data)


def test_price_breakdown_rejects_zero_quantity(valid_price_breakdown):
    data = valid_price_breakdown.copy()
    data["quantity"] = 0

    with pytest.raises(ValidationError):
        validate_price_breakdown(data)


def test_price_breakdown_collects_all_errors(valid_price_breakdown):
    data = valid_price_breakdown.copy()
    data["tax"] = "x"
    data["subtotal"] = -1

    errors = list(PriceBreakdownValidator().iter_errors(data))
    assert len(errors) == 2


def test_price_breakdown_accepts_negative_gross_profit(valid_price_breakdown):
    data = valid_price_breakdown.copy()
    data["profitability"] = {
        "total_wholesale_cost": "200.00",
        "overhead_cost": "60.00",
        "gross_profit": "-10.00",
        "gross_profit_margin": "-0.0287",
        "markup_multiplier": None,
    }

    validate_price_breakdown(data)


# =============================================================================
# TESTS - PRICING CONFIG VALIDATION
# =============================================================================


def test_pricing_config_accepts_partial_overrides():
    PricingConfigValidator().validate({"tax_rate": 0.0725, "strict_wholesale_prices": True})
    validate_pricing_config({})


def test_pricing_config_rejects_tax_rate_of_one():
    with pytest.raises(ValidationError):
        validate_pricing_config({"tax_rate": 1})


def test_pricing_config_requires_all_glass_types():
    with pytest.raises(ValidationError):
        validate_pricing_config({"glass_type_multipliers": {"regular": 1, "museum": 2}})


def test_pricing_config_rejects_table_row_without_low_bound():
    with pytest.raises(ValidationError):
        validate_pricing_config({"mat_markup_table": [{"range_high": 20, "multiplier": 2}]})


# =============================================================================
# TESTS - PYDANTIC INTEGRATION
# =============================================================================


def test_breakdown_model_generates_valid_json():
    """PriceBreakdown.model_dump(mode='json') соответствует контракту."""
    breakdown = PriceBreakdown(
        frame_price=Decimal("100.00"),
        mat_price=Decimal("0.00"),
        glass_price=Decimal("0.00"),
        backing_price=Decimal("0.00"),
        material_cost=Decimal("100.00"),
        labor_cost=Decimal("50.00"),
        subtotal=Decimal("150.00"),
        tax_rate=Decimal("0.08"),
        tax=Decimal("12.00"),
        unit_total=Decimal("162.00"),
        quantity=3,
        grand_total=Decimal("486.00"),
        profitability=Profitability(
            total_wholesale_cost=Decimal("40.00"),
            overhead_cost=Decimal("12.00"),
            gross_profit=Decimal("48.00"),
            gross_profit_margin=Decimal("0.3200"),
            markup_multiplier=Decimal("3.7500"),
        ),
    )

    validate_price_breakdown(breakdown.model_dump(mode="json"))
