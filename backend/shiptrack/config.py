"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - An explicit DATABASE_URL always wins over the composed APP_DB_* URL

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - ENVIRONMENT selects the database host: LOCAL/TEST share the local host,
      DOCKER uses the compose service name, PRD uses a managed host with no port
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    environment: Literal["LOCAL", "TEST", "DOCKER", "PRD"] = "LOCAL"

    # Database
    database_url: str = ""

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Managed hosts hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    app_db_user: str = "tracker"
    app_db_password: str = "tracker"
    app_db_name: str = "shipments"
    app_db_port: int = 5432
    app_db_host_local: str = "localhost"
    app_db_host_docker: str = "db"
    app_db_host_prd: str = "localhost"

    database_pool_size: int = 10
    database_max_overflow: int = 10
    database_pool_recycle: int = 3600
    database_connect_timeout_seconds: int = 5

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        if self.environment == "DOCKER":
            host = self.app_db_host_docker
        elif self.environment == "PRD":
            host = self.app_db_host_prd
        else:
            host = self.app_db_host_local
        port = "" if self.environment == "PRD" else f":{self.app_db_port}"
        return (
            f"postgresql+asyncpg://{self.app_db_user}:{self.app_db_password}"
            f"@{host}{port}/{self.app_db_name}"
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
