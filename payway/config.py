"""
Configuración del cliente de PayWay.
Carga variables de entorno con prefijo PAYWAY_.
"""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configuración principal del cliente."""

    # API de PayWay
    BASE_URL: str = "https://checkout-sandbox.payway.com.kh"
    MERCHANT_ID: str
    API_KEY: SecretStr

    # Red
    TIMEOUT_SECONDS: float = 30.0

    # Transporte activo: "httpx" o "mock"
    TRANSPORT: Literal["httpx", "mock"] = "httpx"

    # Logging
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_prefix = "PAYWAY_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Retorna instancia cacheada de settings."""
    return Settings()
