"""
S3 Documents bucket configuration.

Settings for the document bucket that backs the drive corpus.

Dependencies: pydantic_settings
System role: S3 documents bucket configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class S3DocumentsSettings(BaseSettings):
    """Settings for S3 documents bucket operations."""

    model_config = SettingsConfigDict(
        env_prefix="S3_DOCUMENTS_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="drive-qa-dev-documents",
        description="S3 bucket holding the user's drive documents",
    )
    region: str = Field(
        default="ap-southeast-2",
        description="AWS region for S3 bucket",
    )
    prefix: str = Field(
        default="",
        description="Only objects under this key prefix are indexed",
    )
