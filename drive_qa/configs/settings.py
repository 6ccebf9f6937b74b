"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from drive_qa.configs.base import BaseSettings
from drive_qa.configs.llm import LLMSettings
from drive_qa.configs.rag import RagSettings
from drive_qa.configs.s3_documents import S3DocumentsSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    rag: RagSettings = RagSettings()
    llm: LLMSettings = LLMSettings()
    s3_documents: S3DocumentsSettings = S3DocumentsSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from drive_qa.configs import get_settings
        settings = get_settings()
    """
    return Settings()
