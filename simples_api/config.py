"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from simples_api.constants import DEFAULT_DB_TIMEOUT_SECONDS, DEFAULT_POOL_SIZE


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)

    # Database
    db_host: str = "localhost"
    db_port: int = Field(default=3306, ge=1, le=65535)
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "eve_pf"
    db_pool_size: int = Field(default=DEFAULT_POOL_SIZE, ge=1)
    db_timeout: float = Field(default=DEFAULT_DB_TIMEOUT_SECONDS, gt=0)  # seconds
    # Full SQLAlchemy URL; takes precedence over the DB_* fields when set
    database_url_override: str | None = Field(default=None, alias="DATABASE_URL")

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        """Accept lower-case level names (``debug``, ``info``)."""
        return str(v).upper()

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL for the async MySQL driver."""
        if self.database_url_override:
            return self.database_url_override
        url = URL.create(
            "mysql+aiomysql",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
