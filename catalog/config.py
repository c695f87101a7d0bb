"""
Settings for the catalog server.

Values come from environment variables (or a local .env file).
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    HOST: str = Field(default="0.0.0.0", description="Interface to bind")
    PORT: int = Field(default=8000, description="HTTP port")

    PUBLIC_DIR: Path = Field(
        default=BASE_DIR / "public", description="Root of the static site"
    )
    # Both default to locations inside PUBLIC_DIR
    DATA_FILE: Optional[Path] = Field(
        default=None, description="JSON file holding the product array"
    )
    IMAGES_DIR: Optional[Path] = Field(
        default=None, description="Directory for uploaded product images"
    )

    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def data_file(self) -> Path:
        return self.DATA_FILE or self.PUBLIC_DIR / "data" / "products.json"

    @property
    def images_dir(self) -> Path:
        return self.IMAGES_DIR or self.PUBLIC_DIR / "images"


@lru_cache
def get_settings() -> Settings:
    return Settings()
