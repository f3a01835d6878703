"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables; JWT_SECRET has no default
    - get_settings() is cached (lru_cache) — single instance per process
    - Settings are read once at startup and never mutated afterwards

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose;
      a missing JWT_SECRET fails at startup instead of signing with a known key
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://conduit:conduit@db:5432/conduit"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_timeout_seconds: float = 10.0

    # Tokens
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = 60

    # Profiles
    default_image: str = (
        "https://static.productionready.io/images/smiley-cyrus.jpg"
    )

    # API
    cors_origins: list[str] = ["http://localhost:4100"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
