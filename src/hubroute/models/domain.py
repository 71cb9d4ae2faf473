"""Domain value types for coordinates, package weight and money."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal
from enum import Enum
from typing import Union

from ..services.geospatial import haversine_km

Number = Union[Decimal, int, float, str]

CHINA_MIN_LATITUDE = Decimal("3.86")
CHINA_MAX_LATITUDE = Decimal("53.55")
CHINA_MIN_LONGITUDE = Decimal("73.66")
CHINA_MAX_LONGITUDE = Decimal("135.05")

SUPPORTED_CURRENCIES = ("CNY", "USD")
CENTS = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Convert a numeric value to Decimal without inheriting binary float noise."""

    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Boolean is not a valid numeric value.")
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


class ServiceLevel(str, Enum):
    """Delivery speed tier. Informational only; it does not alter routing."""

    EXPRESS = "Express"
    STANDARD = "Standard"
    ECONOMY = "Economy"

    @classmethod
    def parse(cls, value: str | ServiceLevel) -> ServiceLevel:
        if isinstance(value, ServiceLevel):
            return value
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown service level '{value}'.")


class RouteOptimization(str, Enum):
    """Optimisation objective; each value names one registered strategy."""

    FASTEST = "Fastest"
    CHEAPEST = "Cheapest"
    BALANCED = "Balanced"


class WeightUnit(str, Enum):
    KG = "Kg"
    G = "G"
    JIN = "Jin"
    LB = "Lb"

    @classmethod
    def parse(cls, value: str | WeightUnit) -> WeightUnit:
        if isinstance(value, WeightUnit):
            return value
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown weight unit '{value}'.")


_KILOGRAMS_PER_UNIT = {
    WeightUnit.KG: Decimal("1"),
    WeightUnit.G: Decimal("0.001"),
    WeightUnit.JIN: Decimal("0.5"),
    WeightUnit.LB: Decimal("0.453592"),
}


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A point on Earth in decimal degrees."""

    latitude: Decimal
    longitude: Decimal

    def __post_init__(self) -> None:
        latitude = to_decimal(self.latitude)
        longitude = to_decimal(self.longitude)
        if latitude < -90 or latitude > 90:
            raise ValueError(f"Latitude must be between -90 and 90 (got {latitude}).")
        if longitude < -180 or longitude > 180:
            raise ValueError(f"Longitude must be between -180 and 180 (got {longitude}).")
        object.__setattr__(self, "latitude", latitude)
        object.__setattr__(self, "longitude", longitude)

    def is_within_china(self) -> bool:
        return (
            CHINA_MIN_LATITUDE <= self.latitude <= CHINA_MAX_LATITUDE
            and CHINA_MIN_LONGITUDE <= self.longitude <= CHINA_MAX_LONGITUDE
        )

    def distance_to_km(self, other: Coordinate) -> Decimal:
        """Great-circle distance to ``other``; trigonometry in float, result as Decimal."""

        distance = haversine_km(
            float(self.latitude),
            float(self.longitude),
            float(other.latitude),
            float(other.longitude),
        )
        return Decimal(repr(distance))

    def __str__(self) -> str:
        return f"({self.latitude:.6f}, {self.longitude:.6f})"


@dataclass(frozen=True, slots=True)
class Weight:
    """Package mass with its unit of measure."""

    value: Decimal
    unit: WeightUnit = WeightUnit.KG

    def __post_init__(self) -> None:
        value = to_decimal(self.value)
        if value <= 0:
            raise ValueError("Weight must be positive.")
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "unit", WeightUnit.parse(self.unit))

    @classmethod
    def kilograms(cls, value: Number) -> Weight:
        return cls(to_decimal(value), WeightUnit.KG)

    @classmethod
    def grams(cls, value: Number) -> Weight:
        return cls(to_decimal(value), WeightUnit.G)

    @classmethod
    def jin(cls, value: Number) -> Weight:
        return cls(to_decimal(value), WeightUnit.JIN)

    @classmethod
    def pounds(cls, value: Number) -> Weight:
        return cls(to_decimal(value), WeightUnit.LB)

    def to_kilograms(self) -> Decimal:
        return self.value * _KILOGRAMS_PER_UNIT[self.unit]

    def add(self, other: Weight) -> Weight:
        return Weight.kilograms(self.to_kilograms() + other.to_kilograms())

    def __str__(self) -> str:
        return f"{self.value} {self.unit.value}"


@dataclass(frozen=True, slots=True)
class Money:
    """Non-negative monetary amount, rounded to cents.

    Arithmetic is only defined between amounts of the same currency.
    """

    amount: Decimal
    currency: str = "CNY"

    def __post_init__(self) -> None:
        amount = to_decimal(self.amount)
        if amount < 0:
            raise ValueError("Amount cannot be negative.")
        if not self.currency or not str(self.currency).strip():
            raise ValueError("Currency is required.")
        currency = str(self.currency).strip().upper()
        if currency not in SUPPORTED_CURRENCIES:
            raise ValueError(
                f"Unsupported currency: '{self.currency}'. Supported: {', '.join(SUPPORTED_CURRENCIES)}."
            )
        object.__setattr__(self, "amount", amount.quantize(CENTS, rounding=ROUND_HALF_EVEN))
        object.__setattr__(self, "currency", currency)

    @classmethod
    def zero(cls, currency: str = "CNY") -> Money:
        return cls(Decimal("0"), currency)

    def add(self, other: Money) -> Money:
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency} and {other.currency}: currency mismatch.")
        return Money(self.amount + other.amount, self.currency)

    def multiply(self, factor: Number) -> Money:
        factor = to_decimal(factor)
        if factor < 0:
            raise ValueError("Factor cannot be negative.")
        return Money(self.amount * factor, self.currency)

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"
