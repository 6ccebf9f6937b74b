"""
LLM provider configuration settings.

Model identifiers and generation parameters for Google Gemini
chat and embedding models.

Dependencies: pydantic, pydantic_settings
System role: Model provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Chat completion and embedding model configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    chat_model: str = Field(
        default="gemini-2.5-flash",
        description="Google Gemini chat model used for answers",
    )
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID (gemini-embedding-001 supports 1024-dim)",
    )
    temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="Sampling temperature; kept low so answers stay grounded",
    )
    max_output_tokens: int = Field(
        default=1000,
        ge=1,
        description="Upper bound on generated answer length",
    )
