"""
Error handling and sanitization

Every error leaves the API as ``{"error": "<public message>"}``:
- body validation errors -> 400 with the static invalid-input message
- wrong HTTP method -> 405
- unhandled exceptions -> logged with traceback, generic 500
"""
import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from shipping_quote.core.config import settings
from shipping_quote.core.exceptions import (
    INVALID_INPUT_MESSAGE,
    METHOD_NOT_ALLOWED_MESSAGE,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Rejected quote request on {request.url.path}: {exc.errors()}")
    return error_response(400, INVALID_INPUT_MESSAGE)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Keep Starlette's headers, e.g. Allow on 405
    headers = getattr(exc, "headers", None)
    if exc.status_code == 405:
        return error_response(405, METHOD_NOT_ALLOWED_MESSAGE, headers=headers)
    return error_response(exc.status_code, str(exc.detail), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)


class ErrorSanitizationMiddleware(BaseHTTPMiddleware):
    """
    Catch unhandled exceptions and return a sanitized 500.

    - In production: generic message, full details in the log
    - In debug: exception text in the response for local troubleshooting
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            error_id = f"{request.client.host if request.client else 'unknown'}-{id(e)}"
            logger.error(
                f"Unhandled exception [{error_id}]: {type(e).__name__}: {str(e)}\n"
                f"Path: {request.url.path}\n"
                f"Method: {request.method}\n"
                f"Traceback:\n{traceback.format_exc()}"
            )

            message = f"{type(e).__name__}: {e}" if settings.DEBUG else INTERNAL_ERROR_MESSAGE
            return error_response(500, message)
