"""
Pricing errors - таксономия ошибок движка ценообразования

Все ошибки поднимаются синхронно непосредственному вызывающему.
Ретраев нет: одинаковые входы всегда падают одинаково.
Частичных результатов нет: либо полный PriceBreakdown, либо exception.
"""


class PricingError(Exception):
    """Базовый класс ошибок движка ценообразования."""


class InvalidGeometry(PricingError):
    """
    Некорректная геометрия заказа.

    Любой размер <= 0, ширина паспарту < 0, NaN/Inf,
    либо периметр рамы <= 0.
    """


class InvalidQuantity(PricingError):
    """Количество не является положительным целым числом."""


class UnresolvableTier(PricingError):
    """
    Таблица наценок без единого уровня.

    Ошибка конфигурации: поднимается при построении таблицы,
    а не при расчёте цены (при расчёте действует fallback на последний уровень).
    """


class MissingWholesalePrice(PricingError):
    """
    У выбранной позиции каталога нет оптовой цены.

    Поднимается только в strict-режиме. В обычном режиме используется
    именованная цена по умолчанию, и результат помечается флагом
    used_default_wholesale_price=True. Молчаливый ноль запрещён.
    """

    def __init__(self, component: str, item_id: str):
        self.component = component
        self.item_id = item_id
        super().__init__(
            f"{component} item '{item_id}' has no wholesale price (missing_wholesale_price)"
        )
