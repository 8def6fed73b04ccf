from functools import lru_cache
from typing import Literal
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings loaded from environment.

    Add new settings here following this pattern:
    - Use type hints
    - Provide sensible defaults for optional settings
    - Use SecretStr for sensitive values
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "abstract-repository"

    # Database
    database_url: SecretStr | None = None
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo_sql: bool = False

    # Observability
    log_level: int = 20  # INFO by default (DEBUG=10, INFO=20, WARNING=30, ERROR=40)
    log_format: Literal["json", "console"] = "json"

    # Repository
    repository_query_logging: bool = False
    repository_search_fields: list[str] = Field(
        default_factory=lambda: ["name", "description"]
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
