"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - storage_key_prefix applies to all four slots; changing it starts an empty board

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for everything: a local SQLite file works out-of-the-box
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hiresphere.core.credentials import DEFAULT_ITERATIONS


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage: "memory://" or any SQLAlchemy URL
    storage_url: str = "sqlite:///hiresphere.db"
    storage_key_prefix: str = "hiresphere_"

    @field_validator("storage_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgres:// which SQLAlchemy 2 rejects."""
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    # Bootstrap
    seed_sample_jobs: bool = True

    # Credentials
    password_hash_iterations: int = DEFAULT_ITERATIONS

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
