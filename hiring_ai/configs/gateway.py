"""
AI gateway configuration settings.

Manages Google Gemini model selection, credentials, per-call timeouts, and
per-operation rate limits for text extraction, embedding, and structured
completion calls.

Dependencies: pydantic, pydantic_settings
System role: External AI service configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewaySettings(BaseSettings):
    """Hosted LLM gateway configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AI_GATEWAY_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str | None = Field(
        default=None,
        description="Google Generative AI API key (falls back to GOOGLE_API_KEY)",
    )
    chat_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model used for structured completions",
    )
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Gemini embedding model (supports reduced output dimensionality)",
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Completion temperature (0.0 for deterministic output)",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout applied to every embed/complete call",
    )
    extraction_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout applied to text extraction calls",
    )

    # Rate limits per gateway operation
    rate_limit_window_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Length of the sliding window the request limits apply to",
    )
    extract_text_max_requests: int = Field(default=120, ge=1)
    extract_text_max_in_flight: int = Field(default=4, ge=1)
    embed_max_requests: int = Field(default=100, ge=1)
    embed_max_in_flight: int = Field(default=8, ge=1)
    complete_max_requests: int = Field(default=60, ge=1)
    complete_max_in_flight: int = Field(default=4, ge=1)
