"""
Base Carrier Interface

Carrier-agnostic data classes plus the interface every rate provider
implements. A carrier receives one consolidated package and answers with one
ShippingOption per service it was asked about.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from shipping_quote.modules.shipping.consolidation import ConsolidatedPackage


class CarrierCode(str, Enum):
    CORREIOS = "correios"


# =============================================================================
# Carrier-Agnostic Data Classes
# =============================================================================

@dataclass(frozen=True)
class ShippingOption:
    """
    One quoted service.

    A service the carrier refused still produces an option: ``error`` holds
    the carrier's message and price/deadline are whatever the carrier sent.
    """
    code: str
    name: str
    price: float
    deadline: int  # business days
    error: Optional[str] = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "price": self.price,
            "deadline": self.deadline,
            "error": self.error,
        }


# =============================================================================
# Base Carrier Interface
# =============================================================================

class BaseCarrier(ABC):
    """
    Abstract base class for shipping carriers.

    Carriers own their HTTP client; callers either use the carrier as an
    async context manager or call close() when done.
    """

    @property
    @abstractmethod
    def carrier_code(self) -> CarrierCode:
        """Return the carrier code enum value."""
        pass

    @property
    @abstractmethod
    def carrier_name(self) -> str:
        """Return the human-readable carrier name."""
        pass

    @abstractmethod
    async def get_rates(
        self,
        origin_code: str,
        destination_code: str,
        package: ConsolidatedPackage,
    ) -> List[ShippingOption]:
        """
        Get shipping options from the carrier.

        Args:
            origin_code: Origin postal code
            destination_code: Destination postal code
            package: Consolidated package to quote

        Returns:
            List of ShippingOption in the carrier's reply order
        """
        pass

    async def close(self) -> None:
        """Release network resources."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
