"""
Test suite for the Settings aggregate.

System role: Verification of environment-driven configuration
"""

import pytest
from pydantic import ValidationError

from hiring_ai.configs import Settings


class TestSettings:
    """Test suite for service-wide settings."""

    def test_log_level_should_be_normalized(self) -> None:
        assert Settings(log_level=" debug ").log_level == "DEBUG"

    def test_unknown_log_level_should_be_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_settings_should_read_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # Arrange
        monkeypatch.setenv("HIRING_AI_LOG_LEVEL", "warning")
        monkeypatch.setenv("JOB_QUEUE_WORKER_COUNT", "5")
        monkeypatch.setenv("AI_GATEWAY_EMBED_MAX_REQUESTS", "42")

        # Act
        settings = Settings()

        # Assert
        assert settings.log_level == "WARNING"
        assert settings.job_queue.worker_count == 5
        assert settings.gateway.embed_max_requests == 42
