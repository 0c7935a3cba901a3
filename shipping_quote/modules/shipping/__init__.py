"""
Shipping quote module.

Consolidates cart items into a single package and quotes it with a carrier.
"""
from shipping_quote.modules.shipping.consolidation import (
    ConsolidatedPackage,
    Item,
    consolidate,
)
from shipping_quote.modules.shipping.carriers import get_carrier
from shipping_quote.modules.shipping.carriers.base import BaseCarrier, ShippingOption

__all__ = [
    "BaseCarrier",
    "ConsolidatedPackage",
    "Item",
    "ShippingOption",
    "consolidate",
    "get_carrier",
]
