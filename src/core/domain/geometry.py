"""
FrameGeometry - геометрия оформляемой работы

Все размеры в дюймах. Производные величины (united inches, периметр,
площади) вычисляются из трёх входов и нигде не хранятся отдельно.
Пересчёт в футы делает вызывающий код по коэффициентам PricingConfig.

Инварианты:
- artwork_width > 0, artwork_height > 0
- mat_width >= 0 (0 = без паспарту)
- все значения конечны (NaN/Inf -> InvalidGeometry)
"""

from dataclasses import dataclass
from decimal import Decimal

from src.core.domain.errors import InvalidGeometry
from src.core.math.numerical_safeguards import Number, is_valid_number, to_decimal


def _dimension(value: Number, name: str, allow_zero: bool = False) -> Decimal:
    if not is_valid_number(value):
        raise InvalidGeometry(f"{name} must be a finite number, got {value!r}")

    dec = to_decimal(value, name)
    if allow_zero:
        if dec < 0:
            raise InvalidGeometry(f"{name} cannot be negative, got {value}")
    elif dec <= 0:
        raise InvalidGeometry(f"{name} must be positive, got {value}")
    return dec


@dataclass(frozen=True)
class FrameGeometry:
    """
    Геометрия заказа: размер работы + ширина паспарту.

    Создаётся через from_dimensions(), который валидирует входы.
    Прямой вызов конструктора также валидирует (__post_init__).
    """

    artwork_width: Decimal
    artwork_height: Decimal
    mat_width: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        # frozen dataclass: нормализуем через object.__setattr__
        object.__setattr__(self, "artwork_width", _dimension(self.artwork_width, "artwork_width"))
        object.__setattr__(self, "artwork_height", _dimension(self.artwork_height, "artwork_height"))
        object.__setattr__(self, "mat_width", _dimension(self.mat_width, "mat_width", allow_zero=True))

    @classmethod
    def from_dimensions(
        cls,
        artwork_width: Number,
        artwork_height: Number,
        mat_width: Number = 0,
    ) -> "FrameGeometry":
        """
        Построение геометрии из сырых чисел.

        Raises:
            InvalidGeometry: Если размеры некорректны
        """
        return cls(
            artwork_width=artwork_width,
            artwork_height=artwork_height,
            mat_width=mat_width,
        )

    # -------------------------------------------------------------------------
    # Размеры
    # -------------------------------------------------------------------------

    @property
    def finished_width(self) -> Decimal:
        """Внешняя ширина (работа + паспарту с двух сторон)."""
        return self.artwork_width + self.mat_width * 2

    @property
    def finished_height(self) -> Decimal:
        """Внешняя высота (работа + паспарту с двух сторон)."""
        return self.artwork_height + self.mat_width * 2

    # -------------------------------------------------------------------------
    # United inches
    # -------------------------------------------------------------------------

    @property
    def artwork_united_inches(self) -> Decimal:
        return self.artwork_width + self.artwork_height

    @property
    def finished_united_inches(self) -> Decimal:
        """United inches внешнего проёма: ключ большинства таблиц наценок."""
        return self.finished_width + self.finished_height

    # -------------------------------------------------------------------------
    # Периметр и площади
    # -------------------------------------------------------------------------

    @property
    def perimeter_inches(self) -> Decimal:
        return self.finished_united_inches * 2

    @property
    def artwork_area_sq_in(self) -> Decimal:
        return self.artwork_width * self.artwork_height

    @property
    def finished_area_sq_in(self) -> Decimal:
        """Площадь внешнего проёма: стекло и подложка режутся в этот размер."""
        return self.finished_width * self.finished_height

    @property
    def mat_area_sq_in(self) -> Decimal:
        """Площадь паспарту: внешний проём минус окно под работу."""
        return self.finished_area_sq_in - self.artwork_area_sq_in

    @property
    def has_mat(self) -> bool:
        return self.mat_width > 0
