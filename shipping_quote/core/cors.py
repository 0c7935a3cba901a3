"""
CORS headers middleware

Browsers call the quote endpoint straight from storefront pages, so every
response carries permissive CORS headers and any OPTIONS request is answered
immediately with 200, whether or not it is a well-formed preflight.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from shipping_quote.core.config import settings


class CorsHeadersMiddleware(BaseHTTPMiddleware):
    """Add CORS headers to all responses and short-circuit OPTIONS."""

    ALLOW_METHODS = "POST, OPTIONS"
    ALLOW_HEADERS = (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    )

    def _allow_origin(self, request: Request) -> str:
        origins = settings.CORS_ORIGINS
        if "*" in origins:
            return "*"
        origin = request.headers.get("origin")
        if origin and origin in origins:
            return origin
        return origins[0] if origins else ""

    def _apply_headers(self, request: Request, response: Response) -> Response:
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Allow-Origin"] = self._allow_origin(request)
        response.headers["Access-Control-Allow-Methods"] = self.ALLOW_METHODS
        response.headers["Access-Control-Allow-Headers"] = self.ALLOW_HEADERS
        return response

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return self._apply_headers(request, Response(status_code=200))

        response = await call_next(request)
        return self._apply_headers(request, response)
