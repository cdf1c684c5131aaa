"""Catalog API configuration.

Settings come from environment variables (or a local ``.env`` file).
The defaults run the service against a SQLite file in the working
directory with an empty catalog.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database (any SQLAlchemy async URL; postgres needs the asyncpg extra)
    database_url: str = "sqlite+aiosqlite:///./catalog.db"

    # Shop product listings
    default_page_limit: int = Field(default=10, gt=0)

    # Load the demo catalog on startup when the store is empty
    seed_demo_data: bool = False

    # Logging
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
