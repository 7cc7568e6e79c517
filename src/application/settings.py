"""Application settings configuration for the Assistant Relay."""

import logging
import sys
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Assistant Relay settings loaded once from the environment (and .env)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Debugging Configuration
    debug: bool = False
    log_level: str = "INFO"

    # Application Configuration
    app_name: str = "Assistant Relay"
    app_version: str = "1.0.0"
    app_host: str = "127.0.0.1"  # Uvicorn bind address
    app_port: int = 7071  # Uvicorn port

    # Azure OpenAI Assistants Configuration
    # Unprefixed names shared with the Azure OpenAI tooling
    assistant_id: Optional[str] = None  # None = create an assistant from the static definition
    azure_deployment_name: Optional[str] = None
    azure_openai_endpoint: Optional[str] = None
    azure_openai_api_key: Optional[str] = None
    openai_api_version: str = "2024-05-01-preview"
    provider_timeout: float = 60.0  # HTTP timeout for provider calls

    # Notification Tool Configuration
    email_receiver: Optional[str] = None
    openai_function_calling_skip_send_email: bool = False  # Short-circuit sendEmail outside production
    email_sender: str = "assistant@localhost"
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True

    # Observability Configuration
    otel_enabled: bool = False
    otel_endpoint: str = "http://otel-collector:4317"
    otel_console_export: bool = False
    otel_instrument_fastapi: bool = True

    @property
    def has_provider_credentials(self) -> bool:
        """True when both the API key and the endpoint are configured."""
        return bool(self.azure_openai_api_key and self.azure_openai_endpoint)


app_settings = Settings()


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure application-wide logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party loggers
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def log_settings_summary(settings: Settings) -> None:
    """Log which provider settings are present without revealing secrets."""

    def presence(value: Optional[str]) -> str:
        return "✅ SET" if value else "❌ MISSING"

    log.info("🔍 Configuration check:")
    log.info(f"   ASSISTANT_ID: {presence(settings.assistant_id)}")
    if not settings.assistant_id:
        log.info("   No ASSISTANT_ID: an assistant will be created from the static definition")
    log.info(f"   AZURE_DEPLOYMENT_NAME: {presence(settings.azure_deployment_name)}")
    log.info(f"   AZURE_OPENAI_ENDPOINT: {presence(settings.azure_openai_endpoint)}")
    log.info(f"   OPENAI_API_VERSION: {presence(settings.openai_api_version)}")
    if settings.azure_openai_api_key:
        log.info(f"   AZURE_OPENAI_API_KEY: ✅ SET (length: {len(settings.azure_openai_api_key)})")
    else:
        log.info("   AZURE_OPENAI_API_KEY: ❌ MISSING")
    log.info(f"   EMAIL_RECEIVER: {presence(settings.email_receiver)}")
    if settings.openai_function_calling_skip_send_email:
        log.info("   sendEmail tool is short-circuited (OPENAI_FUNCTION_CALLING_SKIP_SEND_EMAIL)")
