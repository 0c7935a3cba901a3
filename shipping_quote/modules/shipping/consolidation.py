"""
Package Consolidation

Turns the items of an order into one equivalent box for rate lookup.
Volumes are added up and the box is sized as a cube of that volume, never
smaller than the carrier's minimum box and never shorter than the longest
single item.
"""
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

# Item defaults (kg / cm)
DEFAULT_WEIGHT = 0.1
DEFAULT_LENGTH = 11.0
DEFAULT_WIDTH = 11.0
DEFAULT_HEIGHT = 2.0
DEFAULT_QUANTITY = 1

# Correios minimums for a box
MIN_WEIGHT = 0.3
MIN_LENGTH = 15.0
MIN_WIDTH = 10.0
MIN_HEIGHT = 1.0


def _coerce_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    # Integers beyond the float range raise OverflowError
    except (OverflowError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _coerce_quantity(value: Any) -> Optional[int]:
    number = _coerce_number(value)
    if number is None or number < 0 or not number.is_integer():
        return None
    return int(number)


def positive_or_default(value: Optional[float], default: float) -> float:
    """Use value when it is a positive number, otherwise the default."""
    if value is None or value <= 0:
        return default
    return value


@dataclass(frozen=True)
class Item:
    """One order line. Fields are None when the client omitted them."""
    weight: Optional[float] = None  # kg
    length: Optional[float] = None  # cm
    width: Optional[float] = None  # cm
    height: Optional[float] = None  # cm
    quantity: Optional[int] = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Item":
        """Build an Item from a JSON record; malformed fields become None."""
        if not isinstance(raw, Mapping):
            return cls()
        return cls(
            weight=_coerce_number(raw.get("weight")),
            length=_coerce_number(raw.get("length")),
            width=_coerce_number(raw.get("width")),
            height=_coerce_number(raw.get("height")),
            quantity=_coerce_quantity(raw.get("quantity")),
        )

    @property
    def effective_weight(self) -> float:
        return positive_or_default(self.weight, DEFAULT_WEIGHT)

    @property
    def effective_length(self) -> float:
        return positive_or_default(self.length, DEFAULT_LENGTH)

    @property
    def effective_width(self) -> float:
        return positive_or_default(self.width, DEFAULT_WIDTH)

    @property
    def effective_height(self) -> float:
        return positive_or_default(self.height, DEFAULT_HEIGHT)

    @property
    def effective_quantity(self) -> int:
        # An explicit 0 is kept as 0, not treated as missing: the line ships
        # nothing. Only absent or negative quantities fall back to 1.
        if self.quantity is None or self.quantity < 0:
            return DEFAULT_QUANTITY
        return self.quantity


@dataclass(frozen=True)
class ConsolidatedPackage:
    """The single billable box sent to the carrier."""
    weight: float  # kg
    volume: float  # cm3
    length: float  # cm
    width: float  # cm
    height: float  # cm


def consolidate(items: Sequence[Item]) -> ConsolidatedPackage:
    """
    Consolidate order items into one equivalent package.

    The caller guarantees ``items`` is non-empty. Weight is the sum of
    weight x quantity with a 0.3 kg floor; the box side is the cube root of
    the summed volume, with length stretched to the longest axis seen on any
    item.
    """
    total_weight = 0.0
    total_volume = 0.0
    max_dimension = 0.0

    for item in items:
        quantity = item.effective_quantity
        length = item.effective_length
        width = item.effective_width
        height = item.effective_height

        total_weight += item.effective_weight * quantity
        total_volume += length * width * height * quantity
        max_dimension = max(max_dimension, length, width, height)

    total_weight = max(total_weight, MIN_WEIGHT)
    cube_side = math.cbrt(total_volume)

    return ConsolidatedPackage(
        weight=total_weight,
        volume=total_volume,
        length=max(MIN_LENGTH, max_dimension, cube_side),
        width=max(MIN_WIDTH, cube_side),
        height=max(MIN_HEIGHT, cube_side),
    )
