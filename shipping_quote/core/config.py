"""
Application configuration

Defaults match the public Correios calculator so the service runs with an
empty environment; every value can be overridden through env vars or .env.
"""
import json
from typing import List, Union
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Any origin may call the quote endpoint (storefront widgets embed it)
DEFAULT_CORS_ORIGINS = ["*"]

DEFAULT_CORREIOS_API_URL = "http://ws.correios.com.br/calculador/CalcPrecoPrazo.aspx"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App
    APP_NAME: str = "Shipping Quote API"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # CORS - accepts JSON array or comma-separated string
    CORS_ORIGINS: Union[str, List[str]] = DEFAULT_CORS_ORIGINS

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            if not v or v.strip() == "":
                return DEFAULT_CORS_ORIGINS
            # Try JSON first
            if v.startswith("["):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # Fallback to comma-separated
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Correios rate lookup
    CORREIOS_API_URL: str = DEFAULT_CORREIOS_API_URL
    CORREIOS_TIMEOUT_SECONDS: float = 10.0
    CORREIOS_SERVICE_CODES: Union[str, List[str]] = ["04510", "04014"]  # PAC, SEDEX

    @field_validator("CORREIOS_SERVICE_CODES", mode="before")
    @classmethod
    def parse_service_codes(cls, v):
        # A single code without a leading zero arrives JSON-decoded as an int
        if isinstance(v, int):
            return [str(v)]
        if isinstance(v, str):
            return [code.strip() for code in v.split(",") if code.strip()]
        return v

    @field_validator("CORREIOS_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("CORREIOS_TIMEOUT_SECONDS must be positive")
        return v


settings = Settings()
