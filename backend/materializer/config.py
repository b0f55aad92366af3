"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - The query complexity ceiling is NOT a setting (fixed in core/domain_types.py)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
      (ADR: developer UX)
    - Defaults provided for all settings: works out-of-the-box with the bundled schema
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Schema
    schema_path: str = "schema.graphql"

    # Outbound HTTP (@httpGet)
    http_timeout_seconds: float = 30.0

    @field_validator("http_timeout_seconds")
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be positive")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
