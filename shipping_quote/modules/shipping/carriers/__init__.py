"""
Carrier access

get_carrier() is the FastAPI dependency that hands a route a ready carrier
and closes its HTTP client once the response is sent. Tests override it
through app.dependency_overrides.
"""
from typing import AsyncIterator

from shipping_quote.modules.shipping.carriers.base import BaseCarrier
from shipping_quote.modules.shipping.carriers.correios import CorreiosCarrier


async def get_carrier() -> AsyncIterator[BaseCarrier]:
    """Yield a Correios carrier for the duration of one request."""
    async with CorreiosCarrier() as carrier:
        yield carrier
