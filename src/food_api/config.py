"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "development")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    usda_api_key: str | None = None
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    port: int = 3000
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"
    app_version: str = "0.1.0"
    public_base_url: str = "https://your-domain.com"
    rate_limit: str = "100 per 15 minutes"
    blocked_food_terms: str = "test,debug,admin,system"
    cors_origins: str = "*"
    health_probe_upstream: bool = True
    search_timeout_seconds: float = 10
    health_timeout_seconds: float = 5

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def base_url(self) -> str:
        """Base URL advertised by the root documentation endpoint."""
        if self.environment == "production":
            return self.public_base_url
        return f"http://localhost:{self.port}"


def parse_term_list(raw: str | None) -> frozenset[str]:
    """Parse a comma separated list into lower-cased terms."""
    if raw is None:
        return frozenset()
    terms: set[str] = set()
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if value:
            terms.add(value)
    return frozenset(terms)


def parse_origins(raw: str | None) -> list[str]:
    """Parse CORS origins from env, ``*`` or empty meaning any origin."""
    if raw is None or raw.strip() in {"", "*"}:
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
