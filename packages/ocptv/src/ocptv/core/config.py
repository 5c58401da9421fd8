from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogFormat = Literal["json", "console"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="OCPTV_",
        env_file=".env",
        extra="ignore",
    )

    log_level: str = Field(default="WARNING")
    log_format: LogFormat = Field(default="console")
    timezone: str = Field(default="UTC")
    output_path: Optional[Path] = Field(default=None)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    return Settings()
