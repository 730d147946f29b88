"""
Shared test fixtures and configuration for entire test suite.

Provides: Deterministic fake AI gateway, in-memory stores, pipeline,
    small-dimension settings, and a fully wired container
Dependencies: pytest, hiring_ai
System role: Test infrastructure and fixture management
"""

import base64
import hashlib
from collections.abc import Callable
from typing import Any

import pytest

from hiring_ai.boundary.ai.gateway import RETRIEVAL_DOCUMENT
from hiring_ai.boundary.db.document_store import InMemoryDocumentStore
from hiring_ai.boundary.vdb.embedding_store import InMemoryEmbeddingStore
from hiring_ai.configs import Settings
from hiring_ai.configs.database import DatabaseSettings
from hiring_ai.configs.job_queue import QueueSettings
from hiring_ai.configs.storage import StorageSettings
from hiring_ai.configs.vector_search import VectorSearchSettings
from hiring_ai.container import Container
from hiring_ai.core.exceptions import InvalidInputError
from hiring_ai.core.processing import PipelineSettings, ProcessingPipeline
from hiring_ai.core.processing.models import (
    CandidateProfileExtraction,
    InterviewAnalysis,
    ProfileHints,
    ResumeDocument,
    ResumeProcessingPayload,
    ResumeSummary,
)

TEST_DIMENSION = 8

RESUME_TEXT = (
    "Jane Doe\n"
    "Senior Software Engineer, Berlin\n"
    "Ten years building distributed systems in Go and Python. Led the migration "
    "of a payments platform to Kubernetes, designed event-driven services on "
    "Kafka, and mentored a team of six engineers."
)

DEFAULT_PROFILE = CandidateProfileExtraction(
    summary=(
        "Senior software engineer with ten years of experience building distributed "
        "systems in Go and Python, including payments infrastructure on Kubernetes."
    ),
    skills=["Go", "Python", "Kubernetes"],
    current_title="Senior Software Engineer",
    experience_level="senior",
    location="Berlin",
)


def hash_vector(text: str, dimension: int = TEST_DIMENSION) -> list[float]:
    """Deterministic vector in [-1, 1] derived from the text's SHA-256."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return [(digest[i] / 127.5) - 1.0 for i in range(dimension)]


class FakeGateway:
    """
    Deterministic AIGateway for tests.

    Text documents are decoded as UTF-8, embeddings are hash-derived, and
    completions return canned schema instances. Set the *_error attributes
    to make the matching operation raise.
    """

    def __init__(self, dimension: int = TEST_DIMENSION) -> None:
        self.dimension = dimension
        self.extract_error: Exception | None = None
        self.embed_error: Exception | None = None
        self.complete_errors: dict[type, Exception] = {}
        self.responses: dict[type, Any] = {
            CandidateProfileExtraction: DEFAULT_PROFILE,
            ResumeSummary: ResumeSummary(summary=DEFAULT_PROFILE.summary),
            InterviewAnalysis: InterviewAnalysis(
                communication_score=8.0,
                technical_score=7.5,
                strengths=["Clear explanations"],
                concerns=["Limited frontend exposure"],
                overall_assessment="Strong backend candidate with good communication.",
            ),
        }
        self.vectors: dict[str, list[float]] = {}
        self.embed_calls: list[tuple[str, str]] = []
        self.complete_calls: list[type] = []

    async def extract_text(self, blob: bytes, mime_type: str) -> str:
        if self.extract_error is not None:
            raise self.extract_error
        if not blob:
            raise InvalidInputError("Document is empty")
        return blob.decode("utf-8")

    async def embed(self, text: str, task_type: str = RETRIEVAL_DOCUMENT) -> list[float]:
        self.embed_calls.append((text, task_type))
        if self.embed_error is not None:
            raise self.embed_error
        if text in self.vectors:
            return list(self.vectors[text])
        return hash_vector(text, self.dimension)

    async def complete(self, prompt: str, schema: type) -> Any:
        self.complete_calls.append(schema)
        if schema in self.complete_errors:
            raise self.complete_errors[schema]
        return self.responses[schema].model_copy(deep=True)


def encode_text(text: str) -> str:
    """Base64-encode text for inline documents."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


@pytest.fixture
def fake_gateway() -> FakeGateway:
    """Provide deterministic fake AI gateway."""
    return FakeGateway()


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    """Provide empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def embedding_store() -> InMemoryEmbeddingStore:
    """Provide empty in-memory embedding store with the test dimension."""
    return InMemoryEmbeddingStore(dimension=TEST_DIMENSION)


@pytest.fixture
def pipeline_settings() -> PipelineSettings:
    """Provide pipeline settings with default limits."""
    return PipelineSettings()


@pytest.fixture
def pipeline(
    fake_gateway: FakeGateway,
    document_store: InMemoryDocumentStore,
    embedding_store: InMemoryEmbeddingStore,
    pipeline_settings: PipelineSettings,
) -> ProcessingPipeline:
    """Provide pipeline wired to fakes and in-memory stores."""
    return ProcessingPipeline(
        gateway=fake_gateway,
        document_store=document_store,
        embedding_store=embedding_store,
        embedding_dimension=TEST_DIMENSION,
        settings=pipeline_settings,
    )


@pytest.fixture
def make_resume_payload() -> Callable[..., ResumeProcessingPayload]:
    """Provide factory for inline plain-text resume payloads."""

    def factory(
        candidate_id: str = "cand-1",
        text: str = RESUME_TEXT,
        mime_type: str = "text/plain",
        **hints: Any,
    ) -> ResumeProcessingPayload:
        return ResumeProcessingPayload(
            candidate_id=candidate_id,
            document=ResumeDocument(
                content_b64=encode_text(text),
                mime_type=mime_type,
                filename=f"{candidate_id}.txt",
            ),
            hints=ProfileHints(**hints),
        )

    return factory


@pytest.fixture
def test_settings() -> Settings:
    """Provide settings with a small embedding dimension and no external services."""
    return Settings(
        vector_search=VectorSearchSettings(embedding_dimension=TEST_DIMENSION, snapshot_path=""),
        job_queue=QueueSettings(
            worker_count=2,
            retry_backoff_seconds=0.0,
            retry_backoff_max_seconds=0.0,
            shutdown_grace_seconds=5.0,
        ),
        database=DatabaseSettings(url=""),
        storage=StorageSettings(bucket=""),
    )


@pytest.fixture
def container(test_settings: Settings, fake_gateway: FakeGateway) -> Container:
    """Provide container wired with the fake gateway and in-memory stores."""
    return Container(
        settings=test_settings,
        gateway=fake_gateway,
        pipeline_settings=PipelineSettings(),
    )
