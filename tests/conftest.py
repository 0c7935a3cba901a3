"""
Pytest configuration and fixtures for the shipping quote tests.
"""
import os
from typing import Callable

import httpx
import pytest

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"
os.environ["CORS_ORIGINS"] = "*"
os.environ["CORREIOS_API_URL"] = "http://correios.test/calculador/CalcPrecoPrazo.aspx"

from shipping_quote.modules.shipping.carriers.correios import CorreiosCarrier  # noqa: E402


CORREIOS_MIXED_XML = """<?xml version="1.0" encoding="ISO-8859-1" ?>
<Servicos>
  <cServico>
    <Codigo>04510</Codigo>
    <Valor>23,50</Valor>
    <PrazoEntrega>7</PrazoEntrega>
    <ValorMaoPropria>0,00</ValorMaoPropria>
    <ValorAvisoRecebimento>0,00</ValorAvisoRecebimento>
    <ValorValorDeclarado>0,00</ValorValorDeclarado>
    <EntregaDomiciliar>S</EntregaDomiciliar>
    <EntregaSabado>N</EntregaSabado>
    <Erro>0</Erro>
    <MsgErro></MsgErro>
  </cServico>
  <cServico>
    <Codigo>04014</Codigo>
    <Valor>0,00</Valor>
    <PrazoEntrega>0</PrazoEntrega>
    <ValorMaoPropria>0,00</ValorMaoPropria>
    <ValorAvisoRecebimento>0,00</ValorAvisoRecebimento>
    <ValorValorDeclarado>0,00</ValorValorDeclarado>
    <EntregaDomiciliar></EntregaDomiciliar>
    <EntregaSabado></EntregaSabado>
    <Erro>1</Erro>
    <MsgErro>Serviço indisponível para o trecho informado.</MsgErro>
  </cServico>
</Servicos>
"""

CORREIOS_OK_XML = """<?xml version="1.0" encoding="ISO-8859-1" ?>
<Servicos>
  <cServico>
    <Codigo>04510</Codigo>
    <Valor>23,50</Valor>
    <PrazoEntrega>7</PrazoEntrega>
    <Erro>0</Erro>
    <MsgErro></MsgErro>
  </cServico>
  <cServico>
    <Codigo>04014</Codigo>
    <Valor>41,90</Valor>
    <PrazoEntrega>2</PrazoEntrega>
    <Erro>0</Erro>
    <MsgErro></MsgErro>
  </cServico>
</Servicos>
"""


def xml_response(body: str, status_code: int = 200) -> httpx.Response:
    """Encode a Correios document the way the live service does."""
    return httpx.Response(
        status_code,
        content=body.encode("iso-8859-1"),
        headers={"Content-Type": "text/xml; charset=ISO-8859-1"},
    )


@pytest.fixture
def make_carrier() -> Callable[..., CorreiosCarrier]:
    """Build a CorreiosCarrier whose HTTP calls go to a mock handler."""

    def _make(handler, timeout: float = 2.0) -> CorreiosCarrier:
        carrier = CorreiosCarrier(timeout=timeout)
        carrier._http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(handler),
            timeout=carrier.timeout,
        )
        return carrier

    return _make


@pytest.fixture
def sample_request_body() -> dict:
    """Quote request as sent by the storefront."""
    return {
        "originCep": "01310-100",
        "destinationCep": "20040-002",
        "items": [
            {"weight": 2, "length": 20, "width": 15, "height": 10, "quantity": 1},
        ],
    }
