from __future__ import annotations

from functools import lru_cache

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    trim_caller_paths: bool = Field(default=True)
    diagnostics_level: str = Field(default="DEBUG")
    traceback_limit: int = Field(default=6, ge=1)

    @field_validator("trim_caller_paths", mode="before")
    @classmethod
    def _parse_trim(cls, v: bool | str) -> bool | str:
        if v == "":
            return True
        return v

    @field_validator("diagnostics_level", mode="before")
    @classmethod
    def _known_level(cls, v: object) -> str:
        name = str(v).upper()
        try:
            logger.level(name)
        except ValueError:
            return "DEBUG"
        return name

    model_config = SettingsConfigDict(
        env_prefix="KVERRORS_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
