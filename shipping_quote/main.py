"""
Shipping Quote API
FastAPI application entry point

- CORS headers on every response, OPTIONS answered directly
- Error sanitization: internal failures never reach the client
- Only POST is served on the quote routes (405 otherwise)
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from shipping_quote import __version__
from shipping_quote.api.routes import shipping
from shipping_quote.core.config import settings
from shipping_quote.core.cors import CorsHeadersMiddleware
from shipping_quote.core.error_handler import (
    ErrorSanitizationMiddleware,
    register_exception_handlers,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info(
        f"{settings.APP_NAME} {__version__} started "
        f"(environment={settings.ENVIRONMENT}, carrier={settings.CORREIOS_API_URL}, "
        f"timeout={settings.CORREIOS_TIMEOUT_SECONDS}s)"
    )
    yield
    logger.info(f"{settings.APP_NAME} shutting down")


app = FastAPI(
    lifespan=lifespan,
    title=settings.APP_NAME,
    description="Correios PAC/SEDEX quotes for a consolidated order package",
    version=__version__,
)

register_exception_handlers(app)

# Last added runs first: CORS wraps the sanitized error responses too
app.add_middleware(ErrorSanitizationMiddleware)
app.add_middleware(CorsHeadersMiddleware)

app.include_router(shipping.router, prefix="/api", tags=["Shipping"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe."""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": __version__,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "shipping_quote.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
