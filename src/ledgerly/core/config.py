"""Ledgerly settings.

Values come from LEDGERLY_* environment variables or a local .env file and
are validated once, when the settings object is first built.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration.

    Example:
        LEDGERLY_DATABASE_URL=postgresql+asyncpg://ledgerly@db/ledgerly
        LEDGERLY_INVOICE_TAX_RATE=0.2
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LEDGERLY_",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Ledgerly"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api"

    # uvicorn
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Pool options are ignored for SQLite
    database_url: str = "sqlite+aiosqlite:///./ld_data/ledgerly.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    secret_key: str = Field(
        default="change-me-in-production-use-openssl-rand-hex-32",
        description="HMAC key for signing access tokens",
    )
    access_token_expire_minutes: int = 60 * 24 * 7

    cors_origins: list[str] = Field(default=["http://localhost:3000", "http://localhost:8000"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    permission_cache_ttl_seconds: int = Field(
        default=300,
        description="How long a role's permission snapshot is reused",
    )

    invoice_tax_rate: float = Field(
        default=0.14,
        description="Fraction of the subtotal charged as tax on every invoice",
    )

    # Created at startup when both are set and the email is unused
    admin_email: str | None = None
    admin_password: str | None = None

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("invoice_tax_rate")
    @classmethod
    def validate_tax_rate(cls, v: float) -> float:
        if not 0 <= v <= 1:
            raise ValueError("invoice_tax_rate must be between 0 and 1")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """SQLite cannot be shared by several worker processes."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers; use --workers 1 or a PostgreSQL URL."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Settings for this process, built on first call."""
    return Settings()
