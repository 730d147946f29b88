"""
Gemini implementation of the AI gateway.

Structured completions go through ChatGoogleGenerativeAI with
with_structured_output, embeddings through FixedDimensionEmbeddings.
Every call runs under an explicit timeout and every provider failure is
translated into the shared error taxonomy.

Dependencies: langchain_google_genai, langchain_community, hiring_ai.configs
System role: Hosted LLM access for extraction, embedding, and summarization
"""

import asyncio
import logging
import os
from collections.abc import Awaitable
from typing import TypeVar

from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import BaseModel

from hiring_ai.boundary.ai.embeddings_wrapper import FixedDimensionEmbeddings
from hiring_ai.boundary.ai.gateway import RETRIEVAL_DOCUMENT
from hiring_ai.boundary.ai.text_extraction import extract_text_sync
from hiring_ai.configs.gateway import GatewaySettings
from hiring_ai.core.exceptions import (
    ConfigurationError,
    GatewayTimeoutError,
    HiringAIException,
    InvalidInputError,
    TransientGatewayError,
)

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)
T = TypeVar("T")


class GeminiGateway:
    """
    AIGateway backed by Google Gemini.

    Clients are created lazily so the service can start without
    credentials; the first call then raises ConfigurationError.
    """

    def __init__(self, settings: GatewaySettings, embedding_dimension: int) -> None:
        """
        Initialize gateway.

        Args:
            settings: Model names, credentials, and timeouts
            embedding_dimension: Required length of every returned vector
        """
        self._settings = settings
        self._embedding_dimension = embedding_dimension
        self._chat_model: ChatGoogleGenerativeAI | None = None
        self._embeddings: FixedDimensionEmbeddings | None = None
        self._structured: dict[type, object] = {}

    def _api_key(self) -> str:
        api_key = self._settings.google_api_key or os.getenv("GOOGLE_API_KEY")
        if not api_key:
            raise ConfigurationError(
                "Google API key missing: set AI_GATEWAY_GOOGLE_API_KEY or GOOGLE_API_KEY"
            )
        return api_key

    @property
    def chat_model(self) -> ChatGoogleGenerativeAI:
        """Lazy-initialized chat model."""
        if self._chat_model is None:
            self._chat_model = ChatGoogleGenerativeAI(
                model=self._settings.chat_model,
                temperature=self._settings.temperature,
                google_api_key=self._api_key(),
            )
        return self._chat_model

    @property
    def embeddings(self) -> FixedDimensionEmbeddings:
        """Lazy-initialized embedding client."""
        if self._embeddings is None:
            self._embeddings = FixedDimensionEmbeddings(
                model=self._settings.embedding_model,
                output_dimensionality=self._embedding_dimension,
                google_api_key=self._api_key(),
            )
        return self._embeddings

    async def _call(self, operation: str, awaitable: Awaitable[T], timeout: float) -> T:
        """Run a provider call under a timeout and map its failures."""
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except asyncio.TimeoutError as e:
            logger.warning(
                f"{__name__}:{operation} - Timed out",
                extra={"timeout_seconds": timeout},
            )
            raise GatewayTimeoutError(operation, timeout) from e
        except HiringAIException:
            raise
        except Exception as e:
            logger.warning(
                f"{__name__}:{operation} - Provider call failed",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            raise TransientGatewayError(
                f"{operation} failed: {e}",
                operation=operation,
            ) from e

    async def extract_text(self, blob: bytes, mime_type: str) -> str:
        """
        Extract plain text from a document.

        Args:
            blob: Raw document bytes
            mime_type: Declared MIME type

        Returns:
            str: Extracted text (possibly empty)

        Raises:
            InvalidInputError: Empty, unsupported, or unreadable document
            GatewayTimeoutError: Extraction exceeded extraction_timeout_seconds
        """
        if not blob:
            raise InvalidInputError("Document is empty", {"mime_type": mime_type})

        return await self._call(
            "extract_text",
            asyncio.to_thread(extract_text_sync, blob, mime_type),
            self._settings.extraction_timeout_seconds,
        )

    async def embed(self, text: str, task_type: str = RETRIEVAL_DOCUMENT) -> list[float]:
        """
        Generate a fixed-dimension embedding.

        Args:
            text: Text to embed
            task_type: retrieval_document for stored entities, retrieval_query for searches

        Returns:
            list[float]: Vector of the configured dimension

        Raises:
            InvalidInputError: Empty text or a vector of the wrong dimension
            ConfigurationError: Missing API key
            TransientGatewayError: Provider failure or timeout
        """
        if not text or not text.strip():
            raise InvalidInputError("Cannot embed empty text")

        embeddings = self.embeddings
        vector = await self._call(
            "embed",
            asyncio.to_thread(embeddings.embed_query, text, task_type=task_type.upper()),
            self._settings.request_timeout_seconds,
        )

        if len(vector) != self._embedding_dimension:
            raise InvalidInputError(
                f"Embedding has dimension {len(vector)}, expected {self._embedding_dimension}",
                {"operation": "embed"},
            )
        return [float(v) for v in vector]

    async def complete(self, prompt: str, schema: type[SchemaT]) -> SchemaT:
        """
        Run a structured completion.

        Args:
            prompt: Fully rendered prompt
            schema: Pydantic model the response must conform to

        Returns:
            Instance of schema

        Raises:
            InvalidInputError: Empty prompt
            ConfigurationError: Missing API key
            TransientGatewayError: Provider failure, timeout, or unparseable output
        """
        if not prompt or not prompt.strip():
            raise InvalidInputError("Cannot complete an empty prompt")

        runnable = self._structured.get(schema)
        if runnable is None:
            runnable = self.chat_model.with_structured_output(schema)
            self._structured[schema] = runnable

        result = await self._call(
            "complete",
            runnable.ainvoke(prompt),
            self._settings.request_timeout_seconds,
        )

        if result is None:
            raise TransientGatewayError(
                f"Model returned no {schema.__name__}",
                operation="complete",
            )
        if isinstance(result, dict):
            return schema.model_validate(result)
        return result
