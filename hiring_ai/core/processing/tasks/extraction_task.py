"""
Text extraction task.

Sends the raw document to the AI gateway. This step is mandatory: any
failure aborts the pipeline.

Dependencies: hiring_ai.boundary.ai
System role: First stage of the resume processing pipeline
"""

from hiring_ai.boundary.ai.gateway import AIGateway
from hiring_ai.core.exceptions import ErrorCategory, HiringAIException, TextExtractionError


class ExtractionTask:
    """Extract plain text from a resume document."""

    def __init__(self, gateway: AIGateway, min_chars: int = 10) -> None:
        """
        Initialize extraction task.

        Args:
            gateway: AI gateway
            min_chars: Minimum characters for a usable extraction
        """
        self._gateway = gateway
        self._min_chars = min_chars

    async def extract(self, blob: bytes, mime_type: str, entity_id: str) -> str:
        """
        Extract text from the document.

        Returns:
            str: Stripped extracted text

        Raises:
            TextExtractionError: Gateway failure (category inherited from the cause)
                or too little text (invalid_input)
        """
        try:
            text = await self._gateway.extract_text(blob, mime_type)
        except HiringAIException as e:
            raise TextExtractionError(
                f"Text extraction failed: {e.message}",
                entity_id=entity_id,
                category=e.category,
            ) from e
        except Exception as e:
            raise TextExtractionError(
                f"Text extraction failed: {e}",
                entity_id=entity_id,
            ) from e

        text = (text or "").strip()
        if len(text) < self._min_chars:
            raise TextExtractionError(
                "Could not extract meaningful text from document",
                entity_id=entity_id,
                category=ErrorCategory.INVALID_INPUT,
                details={"extracted_chars": len(text)},
            )
        return text
