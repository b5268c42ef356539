"""cefleef configuration management."""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CEFLEEF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "cefleef"
    app_version: str = "0.3.0"
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    # Parser defaults (per-call arguments take precedence)
    preserve_original: bool = False
    raw_event_key: str = "Event"
    include_syslog: bool = False
    resolve_labels: bool = False

    # LEEF attribute delimiter used when the header does not declare one
    leef_default_delimiter: str = "\t"

    @field_validator("leef_default_delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("leef_default_delimiter must be a single character")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
