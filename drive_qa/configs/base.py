"""
Shared settings for the Drive QA service.

Every settings class reads the same .env file; this module also holds the
process-level knobs (service name, environment, log level) that the app
factory and logging setup consume.

Dependencies: pydantic_settings
System role: Root of the configuration hierarchy
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class BaseSettings(PydanticBaseSettings):
    """Common settings shared by the Drive QA config modules."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="Drive QA API",
        description="Title reported by the HTTP API",
    )
    environment: str = Field(
        default="development",
        description="Deployment environment (development, staging, production)",
    )
    debug: bool = Field(
        default=False,
        description="Run FastAPI in debug mode (tracebacks in error responses)",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level applied by configure_logging()",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level
