"""
Shipping Quote Exception Hierarchy

Structured exception classes for the quote pipeline. All exceptions carry a
code, message and details so the HTTP layer can log the full context while
returning only the public message.

Exception Hierarchy:
    ShippingQuoteBaseError
    └── ShippingError
        ├── ShippingValidationError
        └── ShippingQuoteError
            └── CarrierCommunicationError
"""
from typing import Optional, Dict, Any

# Public messages returned to clients
INVALID_INPUT_MESSAGE = "Dados inválidos para o cálculo do frete."
CARRIER_FAILURE_MESSAGE = "Erro ao comunicar com os Correios."
METHOD_NOT_ALLOWED_MESSAGE = "Método não permitido"


class ShippingQuoteBaseError(Exception):
    """
    Base exception for all shipping quote errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        details: Additional context for debugging
        severity: P0-P3 severity level
    """

    default_code: str = "SHIPPING_QUOTE_ERROR"
    default_severity: str = "P2"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[str] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.severity = severity or self.default_severity
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "severity": self.severity,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ShippingError(ShippingQuoteBaseError):
    """Base exception for shipping-related errors."""
    default_code = "SHIPPING_ERROR"
    default_severity = "P1"


class ShippingValidationError(ShippingError):
    """Quote request is missing required data."""
    default_code = "SHIPPING_VALIDATION_FAILED"
    default_severity = "P3"

    def __init__(
        self,
        message: str = INVALID_INPUT_MESSAGE,
        missing_fields: Optional[list] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details["missing_fields"] = missing_fields or []
        super().__init__(message, details=details, **kwargs)


class ShippingQuoteError(ShippingError):
    """Failed to get shipping quote."""
    default_code = "SHIPPING_QUOTE_FAILED"


class CarrierCommunicationError(ShippingQuoteError):
    """
    Carrier could not be reached or answered with something unusable.

    Network errors, timeouts, HTTP errors and malformed documents all collapse
    into this one error; the underlying cause is kept in ``details`` and on
    ``__cause__`` for the logs, never in ``message``.
    """
    default_code = "CARRIER_COMMUNICATION_FAILED"

    def __init__(
        self,
        message: str = CARRIER_FAILURE_MESSAGE,
        carrier: Optional[str] = None,
        reason: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details.update({
            "carrier": carrier,
            "reason": reason,
        })
        super().__init__(message, details=details, **kwargs)
