"""
Shipping API Routes

POST /api/calculate-shipping: consolidate the cart items into one box and
quote PAC and SEDEX for it.

The camelCase path /api/calculateShipping is kept for storefronts built
against the serverless deployment.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from shipping_quote.core.exceptions import (
    CARRIER_FAILURE_MESSAGE,
    CarrierCommunicationError,
    ShippingValidationError,
)
from shipping_quote.modules.shipping import Item, consolidate, get_carrier
from shipping_quote.modules.shipping.carriers.base import BaseCarrier
from shipping_quote.schemas.shipping import (
    ErrorResponse,
    ShippingOptionResponse,
    ShippingQuoteRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def validate_quote_request(quote_request: ShippingQuoteRequest) -> None:
    """Raise ShippingValidationError when a required field is missing or empty."""
    missing = quote_request.missing_fields()
    if missing:
        raise ShippingValidationError(missing_fields=missing)


@router.post(
    "/calculate-shipping",
    response_model=List[ShippingOptionResponse],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@router.post("/calculateShipping", include_in_schema=False)
async def calculate_shipping(
    quote_request: ShippingQuoteRequest,
    carrier: BaseCarrier = Depends(get_carrier),
):
    """
    Quote an order.

    Services the carrier refused come back with their ``error`` set; the
    request as a whole only fails when the carrier cannot be read at all.
    """
    try:
        validate_quote_request(quote_request)
    except ShippingValidationError as e:
        logger.info(f"Invalid quote request: missing {e.details['missing_fields']}")
        return JSONResponse(status_code=400, content={"error": e.message})

    package = consolidate([Item.from_mapping(raw) for raw in quote_request.items])

    try:
        options = await carrier.get_rates(
            quote_request.origin_cep,
            quote_request.destination_cep,
            package,
        )
    except CarrierCommunicationError as e:
        logger.error(f"Erro ao calcular frete: {e.to_dict()}")
        return JSONResponse(status_code=500, content={"error": CARRIER_FAILURE_MESSAGE})

    return [ShippingOptionResponse.from_option(option) for option in options]
