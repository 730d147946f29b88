"""
Embedding generation task.

Embeds the generated summary, or the raw extracted text when no summary
exists, through the AI gateway.

Dependencies: hiring_ai.boundary.ai
System role: Third stage of the resume processing pipeline
"""

from hiring_ai.boundary.ai.gateway import RETRIEVAL_DOCUMENT, AIGateway
from hiring_ai.core.exceptions import EmbeddingError, HiringAIException


class EmbeddingTask:
    """Generate document embeddings with a dimension check."""

    def __init__(self, gateway: AIGateway, dimension: int, max_chars: int = 8000) -> None:
        """
        Initialize embedding task.

        Args:
            gateway: AI gateway
            dimension: Required vector length
            max_chars: Input is truncated to this many characters
        """
        self._gateway = gateway
        self._dimension = dimension
        self._max_chars = max_chars

    async def embed(self, text: str, entity_id: str) -> list[float]:
        """
        Embed text for storage.

        Returns:
            list[float]: Vector of the configured dimension

        Raises:
            EmbeddingError: Gateway failure or wrong dimension
        """
        try:
            vector = await self._gateway.embed(text[: self._max_chars], RETRIEVAL_DOCUMENT)
        except HiringAIException as e:
            raise EmbeddingError(
                f"Embedding generation failed: {e.message}",
                entity_id=entity_id,
                category=e.category,
            ) from e
        except Exception as e:
            raise EmbeddingError(f"Embedding generation failed: {e}", entity_id=entity_id) from e

        if len(vector) != self._dimension:
            raise EmbeddingError(
                f"Embedding has dimension {len(vector)}, expected {self._dimension}",
                entity_id=entity_id,
            )
        return vector
