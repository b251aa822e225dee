from __future__ import annotations

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from price_alerts.core.errors import ConfigError


class Settings(BaseSettings):
    database_url: str
    service_key: str

    notification_url: str = "http://localhost:54321/functions/v1/send-email"

    price_api_url: str = "https://api.coingecko.com/api/v3/simple/price"
    price_api_key: str | None = None
    reference_currency: str = "usd"
    http_timeout_seconds: float = 20.0

    fail_fast: bool = True
    auto_create_tables: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=False)

    @field_validator("database_url", "service_key")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("reference_currency")
    @classmethod
    def _lower_currency(cls, value: str) -> str:
        return value.strip().lower()


def load_settings(**overrides) -> Settings:
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]).upper() for err in exc.errors() if err.get("loc")})
        raise ConfigError(f"Invalid or missing settings: {', '.join(fields)}") from exc
