# Application Configuration using Pydantic BaseSettings
import logging
import pathlib
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from custody_service.app.service.exceptions import ConfigurationError

PACKAGE_DIR = pathlib.Path(__file__).resolve().parent

# Only ever used when INSECURE_DEV_MODE is switched on
INSECURE_FALLBACK_SECRET = "goldvaultsecret"


class AppSettings(BaseSettings):
    # Service
    SERVICE_NAME: str = "custody-service"

    # MongoDB
    MONGO_DETAILS: str = "mongodb://localhost:27017"
    DB_NAME: str = "gold_vault"

    # Session tokens
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = 10

    # Development-only behavior: fallback signing secret and seeded default accounts
    INSECURE_DEV_MODE: bool = False

    # Reject a transition unless the release request is still pending.
    # Off by default: already processed requests can be processed again.
    REQUIRE_PENDING_FOR_TRANSITION: bool = False

    # Files
    UPLOAD_DIR: str = str(PACKAGE_DIR / "static" / "uploads")
    STATIC_DIR: str = str(PACKAGE_DIR / "static")

    # Observability
    LOG_LEVEL: str = "INFO"
    OTEL_EXPORTER_OTLP_ENDPOINT_HTTP: Optional[str] = None
    OTEL_CONSOLE_EXPORT: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def resolve_jwt_secret(self) -> str:
        """Returns the token signing secret, refusing the hardcoded fallback outside dev mode."""
        if self.JWT_SECRET:
            return self.JWT_SECRET
        if self.INSECURE_DEV_MODE:
            return INSECURE_FALLBACK_SECRET
        raise ConfigurationError("JWT_SECRET is not set and INSECURE_DEV_MODE is off.")


# Instantiate settings to be imported by other modules
settings = AppSettings()

logger = logging.getLogger(__name__)
logger.info("Application settings module initialized.")
