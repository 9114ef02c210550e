"""Application settings loaded from the environment.

Every variable is prefixed with ``STOREFRONT_`` and may also come
from a ``.env`` file. ``STOREFRONT_DATA_DIR`` points at the JSON
store; it defaults to ``./data`` under the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        extra="ignore",
    )

    data_dir: Path = Field(default=Path("data"))
    currency: str = Field(default="USD", min_length=3, max_length=3)
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"


@lru_cache
def get_settings() -> Settings:
    return Settings()
