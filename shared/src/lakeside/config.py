"""Environment-driven application settings.

All values come from environment variables (case-insensitive) or an
optional `.env` file in the working directory. Secrets are never hard-coded;
the Stripe key may alternatively live in SSM Parameter Store.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    environment: str = Field(default="dev", description="Deployment environment")
    log_level: str = Field(default="INFO")

    # Durable store
    database_url: str | None = Field(
        default=None,
        description="PostgreSQL URL; bookings fall back to memory when unset",
    )
    database_timeout_seconds: float = Field(default=5.0, gt=0)
    database_ssl: bool = Field(default=False, description="Require TLS to the database")

    # Payments
    stripe_secret_key: SecretStr | None = None
    stripe_secret_key_parameter: str | None = Field(
        default=None,
        description="SSM parameter holding the Stripe key, used when no key is set",
    )
    payment_currency: str = Field(default="nzd")

    # Pricing source
    uplisting_api_key: SecretStr | None = None
    uplisting_api_url: str | None = None

    # Web
    frontend_url: str = Field(default="http://localhost:3000")

    # Notifications (SES)
    notification_sender: str | None = None
    notification_recipient: str | None = None

    @field_validator("database_url")
    @classmethod
    def use_asyncpg_driver(cls, v: str | None) -> str | None:
        """Normalise Heroku/Railway style URLs to the asyncpg dialect."""
        if not v:
            return None
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v[len(prefix):]
        return v

    @property
    def live_pricing_enabled(self) -> bool:
        return bool(self.uplisting_api_key and self.uplisting_api_url)


@lru_cache
def get_settings() -> Settings:
    """Get the cached Settings instance.

    Call get_settings.cache_clear() in tests after changing the environment.
    """
    return Settings()
