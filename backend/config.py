"""Application configuration using pydantic-settings."""

from decimal import Decimal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = "sqlite:///./carteira.db"

    # CoinGecko (optional demo key for higher rate limits)
    COINGECKO_API_KEY: str = ""

    # Fallback USD -> BRL rate used when the live rate cannot be fetched
    DEFAULT_USD_BRL_RATE: Decimal = Decimal("5.05")

    # Frontend origins allowed by CORS
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    @field_validator("DEFAULT_USD_BRL_RATE")
    @classmethod
    def validate_rate(cls, v: Decimal) -> Decimal:
        """Reject non-positive fallback conversion rates."""
        if v <= 0:
            raise ValueError(f"DEFAULT_USD_BRL_RATE must be positive, got {v}")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize LOG_LEVEL to an uppercase Python logging level."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {valid}, got {v!r}")
        return v.upper()

    # App settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    # Log every SQL statement through the sqlalchemy.engine logger
    LOG_SQL: bool = False


settings = Settings()
