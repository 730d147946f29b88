"""
Test suite for GeminiGateway and local text extraction.

Provider clients are replaced with mocks; no network calls are made.

System role: Verification of the hosted AI boundary
"""

import asyncio
from io import BytesIO
from unittest.mock import AsyncMock, MagicMock

import pytest
from docx import Document as DocxDocument

from hiring_ai.boundary.ai.gateway import MIME_DOCX, MIME_PDF, MIME_TEXT, RETRIEVAL_QUERY
from hiring_ai.boundary.ai.gemini_gateway import GeminiGateway
from hiring_ai.boundary.ai.text_extraction import extract_text_sync
from hiring_ai.configs.gateway import GatewaySettings
from hiring_ai.core.exceptions import (
    ConfigurationError,
    GatewayTimeoutError,
    InvalidInputError,
    TransientGatewayError,
)
from hiring_ai.core.processing.models import ResumeSummary

DIMENSION = 4


@pytest.fixture
def gateway() -> GeminiGateway:
    """Provide gateway with mocked chat and embedding clients."""
    gateway = GeminiGateway(
        GatewaySettings(google_api_key="test-key", request_timeout_seconds=0.5),
        embedding_dimension=DIMENSION,
    )
    gateway._embeddings = MagicMock()
    gateway._embeddings.embed_query.return_value = [0.1, 0.2, 0.3, 0.4]
    gateway._chat_model = MagicMock()
    return gateway


def _structured(gateway: GeminiGateway, ainvoke) -> MagicMock:
    runnable = MagicMock()
    runnable.ainvoke = ainvoke
    gateway._chat_model.with_structured_output.return_value = runnable
    return runnable


class TestGeminiGatewayEmbed:
    """Test suite for embed()."""

    @pytest.mark.asyncio
    async def test_embed_should_pass_task_type(self, gateway: GeminiGateway) -> None:
        # Act
        vector = await gateway.embed("golang engineer", RETRIEVAL_QUERY)

        # Assert
        assert vector == [0.1, 0.2, 0.3, 0.4]
        gateway._embeddings.embed_query.assert_called_once_with(
            "golang engineer", task_type="RETRIEVAL_QUERY"
        )

    @pytest.mark.asyncio
    async def test_embed_should_reject_empty_text(self, gateway: GeminiGateway) -> None:
        with pytest.raises(InvalidInputError):
            await gateway.embed("   ")

    @pytest.mark.asyncio
    async def test_embed_should_reject_wrong_dimension(self, gateway: GeminiGateway) -> None:
        gateway._embeddings.embed_query.return_value = [0.1, 0.2]

        with pytest.raises(InvalidInputError):
            await gateway.embed("text")

    @pytest.mark.asyncio
    async def test_provider_error_should_be_transient(self, gateway: GeminiGateway) -> None:
        gateway._embeddings.embed_query.side_effect = RuntimeError("429 Resource exhausted")

        with pytest.raises(TransientGatewayError) as exc_info:
            await gateway.embed("text")
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_missing_api_key_should_be_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # Arrange
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        gateway = GeminiGateway(GatewaySettings(google_api_key=None), embedding_dimension=DIMENSION)

        # Act & Assert
        with pytest.raises(ConfigurationError):
            await gateway.embed("text")


class TestGeminiGatewayComplete:
    """Test suite for complete()."""

    @pytest.mark.asyncio
    async def test_complete_should_return_schema_instance(self, gateway: GeminiGateway) -> None:
        # Arrange
        _structured(gateway, AsyncMock(return_value=ResumeSummary(summary="Seasoned engineer.")))

        # Act
        result = await gateway.complete("Summarize this resume", ResumeSummary)

        # Assert
        assert result.summary == "Seasoned engineer."
        gateway._chat_model.with_structured_output.assert_called_once_with(ResumeSummary)

    @pytest.mark.asyncio
    async def test_complete_should_validate_dict_output(self, gateway: GeminiGateway) -> None:
        _structured(gateway, AsyncMock(return_value={"summary": "From dict."}))

        result = await gateway.complete("Summarize", ResumeSummary)

        assert isinstance(result, ResumeSummary)
        assert result.summary == "From dict."

    @pytest.mark.asyncio
    async def test_complete_should_reuse_structured_runnable(self, gateway: GeminiGateway) -> None:
        _structured(gateway, AsyncMock(return_value=ResumeSummary(summary="x")))

        await gateway.complete("one", ResumeSummary)
        await gateway.complete("two", ResumeSummary)

        assert gateway._chat_model.with_structured_output.call_count == 1

    @pytest.mark.asyncio
    async def test_empty_output_should_be_transient(self, gateway: GeminiGateway) -> None:
        _structured(gateway, AsyncMock(return_value=None))

        with pytest.raises(TransientGatewayError):
            await gateway.complete("Summarize", ResumeSummary)

    @pytest.mark.asyncio
    async def test_slow_provider_should_time_out(self, gateway: GeminiGateway) -> None:
        # Arrange
        async def slow(prompt: str) -> ResumeSummary:
            await asyncio.sleep(5)
            return ResumeSummary(summary="late")

        _structured(gateway, slow)

        # Act & Assert
        with pytest.raises(GatewayTimeoutError) as exc_info:
            await gateway.complete("Summarize", ResumeSummary)
        assert exc_info.value.retryable is True


class TestTextExtraction:
    """Test suite for extract_text() and extract_text_sync()."""

    @pytest.mark.asyncio
    async def test_extract_text_should_decode_plain_text(self, gateway: GeminiGateway) -> None:
        text = await gateway.extract_text(b"  Jane Doe, Go engineer  ", MIME_TEXT)
        assert text == "Jane Doe, Go engineer"

    @pytest.mark.asyncio
    async def test_extract_text_should_reject_empty_document(self, gateway: GeminiGateway) -> None:
        with pytest.raises(InvalidInputError):
            await gateway.extract_text(b"", MIME_TEXT)

    def test_docx_paragraphs_should_be_joined(self) -> None:
        # Arrange
        document = DocxDocument()
        document.add_paragraph("Jane Doe")
        document.add_paragraph("Senior Go Engineer")
        buffer = BytesIO()
        document.save(buffer)

        # Act
        text = extract_text_sync(buffer.getvalue(), MIME_DOCX)

        # Assert
        assert text == "Jane Doe\nSenior Go Engineer"

    def test_unsupported_type_should_be_invalid_input(self) -> None:
        with pytest.raises(InvalidInputError):
            extract_text_sync(b"\x89PNG", "image/png")

    def test_corrupt_pdf_should_be_invalid_input(self) -> None:
        with pytest.raises(InvalidInputError):
            extract_text_sync(b"not really a pdf", MIME_PDF)
