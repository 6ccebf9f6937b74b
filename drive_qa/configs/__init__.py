"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from drive_qa.configs.llm import LLMSettings
from drive_qa.configs.rag import RagSettings
from drive_qa.configs.s3_documents import S3DocumentsSettings
from drive_qa.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "RagSettings", "LLMSettings", "S3DocumentsSettings"]
