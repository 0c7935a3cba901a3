"""
Shipping Schemas

Pydantic models for the quote endpoint. The request keeps item records
loose on purpose: malformed item fields fall back to defaults during
consolidation instead of failing validation.
"""
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from shipping_quote.modules.shipping.carriers.base import ShippingOption


class ShippingQuoteRequest(BaseModel):
    """Body of POST /api/calculate-shipping."""
    model_config = ConfigDict(populate_by_name=True)

    origin_cep: Optional[str] = Field(None, alias="originCep")
    destination_cep: Optional[str] = Field(None, alias="destinationCep")
    items: Optional[List[Any]] = None

    @field_validator("origin_cep", "destination_cep", mode="before")
    @classmethod
    def coerce_cep(cls, v):
        # Some storefronts send the CEP as a number
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    def missing_fields(self) -> List[str]:
        """Names of required fields that are absent or empty."""
        missing = []
        if not self.origin_cep:
            missing.append("originCep")
        if not self.destination_cep:
            missing.append("destinationCep")
        if not self.items:
            missing.append("items")
        return missing


class ShippingOptionResponse(BaseModel):
    """A single quoted service."""
    code: str
    name: str
    price: float
    deadline: int
    error: Optional[str] = None

    @classmethod
    def from_option(cls, option: ShippingOption) -> "ShippingOptionResponse":
        return cls(**option.to_dict())


class ErrorResponse(BaseModel):
    error: str
