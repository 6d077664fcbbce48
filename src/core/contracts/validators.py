"""
JSON Schema Contract Validators

Модуль для валидации JSON данных согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- price_request.json (входной запрос на расчёт цены)
- price_breakdown.json (результат расчёта, деньги строками "0.00")
- pricing_config.json (переопределения калибровки движка)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Определяем корень проекта (4 уровня вверх от этого файла)
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'price_request')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """
        Итератор по всем ошибкам валидации.

        Yields:
            ValidationError объекты для каждой найденной ошибки
        """
        return self.validator.iter_errors(data)


class PriceRequestValidator(ContractValidator):
    """Валидатор входного запроса на расчёт цены."""

    def __init__(self):
        super().__init__("price_request")


class PriceBreakdownValidator(ContractValidator):
    """Валидатор сериализованного PriceBreakdown (model_dump(mode="json"))."""

    def __init__(self):
        super().__init__("price_breakdown")


class PricingConfigValidator(ContractValidator):
    """Валидатор JSON документа с переопределениями калибровки."""

    def __init__(self):
        super().__init__("pricing_config")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_price_request(data: Dict[str, Any]) -> None:
    """
    Валидация запроса на расчёт цены.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PriceRequestValidator().validate(data)


def validate_price_breakdown(data: Dict[str, Any]) -> None:
    """
    Валидация сериализованной разбивки цены.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PriceBreakdownValidator().validate(data)


def validate_pricing_config(data: Dict[str, Any]) -> None:
    """
    Валидация переопределений конфигурации.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PricingConfigValidator().validate(data)
