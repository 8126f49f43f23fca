"""
Application configuration using Pydantic Settings
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.exceptions import ConfigurationError

REQUIRED_SETTINGS = ("CSV_FILE", "DATABASE_URL", "DB_NAME", "COLLECTION_NAME")

# A batch is one INSERT binding place_id and document per row; PostgreSQL
# accepts at most 32767 bind parameters per statement.
MAX_BATCH_SIZE = 32767 // 2


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Input / sink (required)
    CSV_FILE: str
    DATABASE_URL: str
    DB_NAME: str
    COLLECTION_NAME: str

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # ETL Configuration
    ETL_BATCH_SIZE: int = Field(default=1000, ge=1, le=MAX_BATCH_SIZE)
    READ_CHUNK_SIZE: int = Field(default=10000, ge=1)
    PROGRESS_INTERVAL: int = Field(default=10000, ge=1)
    REGION_FILTER: Optional[str] = None
    SKIP_DUPLICATES: bool = True

    # Checkpointing
    CHECKPOINT_FILE: Optional[str] = None
    CHECKPOINT_SUFFIX: str = "_progress.txt"
    STRICT_CHECKPOINT: bool = False

    @field_validator(*REQUIRED_SETTINGS)
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("REGION_FILTER", "CHECKPOINT_FILE", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def csv_path(self) -> Path:
        return Path(self.CSV_FILE).expanduser()


@lru_cache
def get_settings() -> Settings:
    """
    Load settings from the environment (and `.env` if present).

    Raises:
        ConfigurationError: If a required value is missing or invalid
    """
    try:
        return Settings()
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ConfigurationError(
            f"Invalid or missing configuration: {', '.join(fields)}",
            context={"fields": fields},
            original_exception=e,
        )
