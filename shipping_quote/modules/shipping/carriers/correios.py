"""
Correios Carrier Implementation

Queries the public CalcPrecoPrazo calculator for PAC and SEDEX in a single
GET and maps its XML reply into ShippingOption records.

Per-service errors (bad CEP, route not served) stay on the option they belong
to. Anything that prevents reading the reply as a whole (network failure,
timeout, HTTP error, unexpected document) is logged and raised as a single
CarrierCommunicationError.
"""
import logging
import re
import warnings
from typing import Dict, List, Optional, Sequence

import httpx
from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
from bs4.builder import ParserRejectedMarkup

from shipping_quote.core.config import settings
from shipping_quote.core.exceptions import CarrierCommunicationError
from shipping_quote.modules.shipping.consolidation import ConsolidatedPackage
from shipping_quote.modules.shipping.carriers.base import (
    BaseCarrier,
    CarrierCode,
    ShippingOption,
)

logger = logging.getLogger(__name__)

# Service codes
PAC_SERVICE_CODE = "04510"
SEDEX_SERVICE_CODE = "04014"

# nCdFormato: 1 = box/package, 2 = roll/prism, 3 = envelope
FORMAT_BOX = "1"

NO_ERROR_CODE = "0"

_NON_DIGITS = re.compile(r"\D")


def sanitize_postal_code(value: str) -> str:
    """Keep only the digits of a CEP ("01310-100" -> "01310100")."""
    return _NON_DIGITS.sub("", value or "")


def format_number(value: float) -> str:
    """Render a measure for the query string: 20.0 -> "20", 0.35 -> "0.35"."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def service_name(code: str) -> str:
    # Anything that is not PAC was requested as SEDEX
    return "PAC" if code == PAC_SERVICE_CODE else "SEDEX"


def parse_price(raw: str) -> float:
    """
    Parse a Correios amount ("23,50", "1.234,56") into a float.

    Raises:
        ValueError: the text is not a number
    """
    text = raw.strip()
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    return float(text)


def build_query_params(
    origin_code: str,
    destination_code: str,
    package: ConsolidatedPackage,
    service_codes: Sequence[str] = (PAC_SERVICE_CODE, SEDEX_SERVICE_CODE),
) -> Dict[str, str]:
    """
    Build the CalcPrecoPrazo query.

    Declared value, own-hands delivery and delivery receipt are always off.
    """
    return {
        "nCdEmpresa": "",
        "sDsSenha": "",
        "nCdServico": ",".join(service_codes),
        "sCepOrigem": sanitize_postal_code(origin_code),
        "sCepDestino": sanitize_postal_code(destination_code),
        "nVlPeso": format_number(package.weight),
        "nCdFormato": FORMAT_BOX,
        "nVlComprimento": format_number(package.length),
        "nVlAltura": format_number(package.height),
        "nVlLargura": format_number(package.width),
        "nVlDiametro": "0",
        "sCdMaoPropria": "N",
        "nVlValorDeclarado": "0",
        "sCdAvisoRecebimento": "N",
        "output": "xml",
    }


def _field_text(node, name: str) -> str:
    field = node.find(name.lower(), recursive=False)
    if field is None:
        raise ValueError(f"cServico is missing <{name}>")
    return field.get_text().strip()


def _lenient(parse, raw: str, default):
    try:
        return parse(raw)
    except ValueError:
        return default


def parse_rates_response(body: bytes) -> List[ShippingOption]:
    """
    Map a CalcPrecoPrazo XML document to shipping options.

    Expected shape: ``Servicos/cServico[]`` with ``Codigo``, ``Valor``,
    ``PrazoEntrega``, ``Erro`` and ``MsgErro`` on every entry.

    Raises:
        ValueError: the document does not have that shape
    """
    try:
        # html.parser lowercases tag names; the declared charset is still honored
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
            soup = BeautifulSoup(body, "html.parser")
    except ParserRejectedMarkup as e:
        raise ValueError(f"Response is not XML: {e}") from e

    root = soup.find("servicos")
    if root is None:
        raise ValueError("Response has no <Servicos> element")

    services = root.find_all("cservico", recursive=False)
    if not services:
        raise ValueError("Response has no <cServico> entries")

    options = []
    for service in services:
        code = _field_text(service, "Codigo")
        error_code = _field_text(service, "Erro")
        error_message = _field_text(service, "MsgErro")
        raw_price = _field_text(service, "Valor")
        raw_deadline = _field_text(service, "PrazoEntrega")

        if error_code == NO_ERROR_CODE:
            price = parse_price(raw_price)
            deadline = int(raw_deadline)
        else:
            # A refused service often comes back with blank Valor and PrazoEntrega
            price = _lenient(parse_price, raw_price, 0.0)
            deadline = _lenient(int, raw_deadline, 0)

        options.append(ShippingOption(
            code=code,
            name=service_name(code),
            price=price,
            deadline=deadline,
            error=None if error_code == NO_ERROR_CODE else error_message,
        ))

    return options


class CorreiosCarrier(BaseCarrier):
    """
    Correios rate lookup.

    One instance can serve many quotes; the HTTP client is created lazily and
    released by close().
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        service_codes: Optional[Sequence[str]] = None,
    ):
        self.api_url = api_url or settings.CORREIOS_API_URL
        self.timeout = timeout if timeout is not None else settings.CORREIOS_TIMEOUT_SECONDS
        self.service_codes = list(service_codes or settings.CORREIOS_SERVICE_CODES)
        self._http_client: Optional[httpx.AsyncClient] = None

    @property
    def carrier_code(self) -> CarrierCode:
        return CarrierCode.CORREIOS

    @property
    def carrier_name(self) -> str:
        return "Correios"

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Accept": "application/xml, text/xml;q=0.9, */*;q=0.8"},
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def get_rates(
        self,
        origin_code: str,
        destination_code: str,
        package: ConsolidatedPackage,
    ) -> List[ShippingOption]:
        """Get PAC and SEDEX quotes for the package."""
        params = build_query_params(origin_code, destination_code, package, self.service_codes)
        client = await self._get_http_client()

        try:
            response = await client.get(self.api_url, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"Correios request timed out after {self.timeout}s: {e!r}")
            raise CarrierCommunicationError(carrier=self.carrier_name, reason="timeout") from e
        except httpx.RequestError as e:
            logger.error(f"Correios request failed: {e!r}")
            raise CarrierCommunicationError(carrier=self.carrier_name, reason="network_error") from e

        logger.debug(
            f"Correios GET {params['sCepOrigem']} -> {params['sCepDestino']} "
            f"({params['nVlPeso']} kg) -> {response.status_code}"
        )

        if response.status_code >= 400:
            logger.error(f"Correios API error: {response.status_code} - {response.text[:500]}")
            raise CarrierCommunicationError(
                carrier=self.carrier_name,
                reason="http_error",
                details={"status": response.status_code},
            )

        try:
            options = parse_rates_response(response.content)
        except ValueError as e:
            logger.error(f"Unexpected Correios response: {e} - {response.text[:500]}", exc_info=True)
            raise CarrierCommunicationError(carrier=self.carrier_name, reason="malformed_response") from e

        for option in options:
            if option.has_error:
                logger.info(f"Correios service {option.code} returned error: {option.error}")

        return options
