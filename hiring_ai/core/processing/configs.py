"""
Configuration settings for the resume processing pipeline.

Provides environment-based limits for input validation, summarization,
and embedding.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_MIME_TYPES = [
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
]


class PipelineSettings(BaseSettings):
    """Settings for the resume processing pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RESUME_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Input validation
    max_document_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=1,
        description="Largest accepted resume document in bytes",
    )
    allowed_mime_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_MIME_TYPES),
        description="Accepted document MIME types",
    )

    # Step thresholds
    min_extracted_chars: int = Field(
        default=10,
        ge=1,
        description="Minimum extracted characters for text extraction to count as success",
    )
    min_summary_chars: int = Field(
        default=100,
        ge=0,
        description="Shorter text skips summary generation",
    )
    min_embedding_chars: int = Field(
        default=50,
        ge=1,
        description="Shorter text skips embedding generation",
    )
    max_embedding_chars: int = Field(
        default=8000,
        ge=1,
        description="Text sent to the embedding model is truncated to this length",
    )
    excerpt_chars: int = Field(
        default=500,
        ge=0,
        description="Length of the extracted text excerpt stored on the profile",
    )


@lru_cache
def get_pipeline_settings() -> PipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        PipelineSettings: Singleton settings loaded from environment
    """
    return PipelineSettings()
