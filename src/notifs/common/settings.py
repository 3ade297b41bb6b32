"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from notifs.common.errors import ConfigurationError


class Settings(BaseSettings):
    """Settings loaded from ``NOTIFS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NOTIFS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Signing
    webhook_secret: SecretStr | None = Field(
        default=None,
        description="Shared secret used to sign and verify webhook payloads",
    )
    signature_tolerance_seconds: int = Field(
        default=300,
        ge=0,
        description="Max distance (seconds) between a signature timestamp and now",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level for the notifs logger hierarchy",
    )
    log_json: bool = Field(
        default=False,
        description="Render log lines as JSON instead of console output",
    )

    def require_webhook_secret(self) -> str:
        """Return the configured webhook secret or raise ConfigurationError."""
        if self.webhook_secret is None or not self.webhook_secret.get_secret_value():
            raise ConfigurationError("Webhook secret not configured (set NOTIFS_WEBHOOK_SECRET)")
        return self.webhook_secret.get_secret_value()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()
