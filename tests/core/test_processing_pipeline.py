"""Comprehensive tests for the resume processing pipeline.

Tests all stages:
- Document loading and validation
- Text extraction (mandatory)
- Summary, embedding, and embedding store write (best effort)
- Profile save (mandatory)
- Job posting indexing and interview analysis
"""

import base64
from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from hiring_ai.boundary.db.document_store import InMemoryDocumentStore
from hiring_ai.boundary.vdb.embedding_store import InMemoryEmbeddingStore
from hiring_ai.boundary.vdb.vector_schemas import EntityType
from hiring_ai.core.exceptions import (
    EmbeddingError,
    ErrorCategory,
    GatewayTimeoutError,
    InvalidInputError,
    ProfileSaveError,
    TransientGatewayError,
    VectorStoreError,
)
from hiring_ai.core.processing import STAGE_PROGRESS, PipelineSettings, ProcessingPipeline
from hiring_ai.core.processing.models import (
    CandidateProfileExtraction,
    JobPostingPayload,
    ResumeDocument,
    ResumeProcessingPayload,
    VideoAnalysisPayload,
)

MakePayload = Callable[..., ResumeProcessingPayload]


# ============================================================================
# Payload Model Tests
# ============================================================================


class TestResumeDocument:
    """Test ResumeDocument validation."""

    def test_document_should_require_exactly_one_source(self) -> None:
        with pytest.raises(ValueError):
            ResumeDocument(mime_type="text/plain")
        with pytest.raises(ValueError):
            ResumeDocument(content_b64="aGk=", s3_key="resumes/a.pdf", mime_type="application/pdf")

    def test_decode_should_reject_invalid_base64(self) -> None:
        document = ResumeDocument(content_b64="not base64!!", mime_type="text/plain")

        with pytest.raises(InvalidInputError):
            document.decode()

    def test_decode_should_return_bytes(self) -> None:
        document = ResumeDocument(
            content_b64=base64.b64encode(b"hello").decode(), mime_type="text/plain"
        )
        assert document.decode() == b"hello"


# ============================================================================
# Pipeline Tests
# ============================================================================


class TestProcessingPipelineSuccess:
    """Test full pipeline runs."""

    @pytest.mark.asyncio
    async def test_process_should_complete_every_step(
        self,
        pipeline: ProcessingPipeline,
        make_resume_payload: MakePayload,
        document_store: InMemoryDocumentStore,
        embedding_store: InMemoryEmbeddingStore,
    ) -> None:
        # Act
        result = await pipeline.process(make_resume_payload("cand-1", availability="Immediately"))

        # Assert
        assert result.success is True
        assert result.warnings == []
        steps = result.processing_steps
        assert steps.text_extraction and steps.summary_generation and steps.embedding_generation
        assert steps.profile_save and steps.vector_search_save
        assert result.has_embedding is True
        assert result.skills == ["Go", "Python", "Kubernetes"]

        profile = await document_store.get_profile("cand-1")
        assert profile["vector_search_enabled"] is True
        assert profile["summary"].startswith("Senior software engineer")
        assert profile["resume_text_excerpt"].startswith("Jane Doe")

        record = await embedding_store.get("cand-1", EntityType.CANDIDATE)
        assert record is not None
        assert record.metadata.availability == "Immediately"
        assert record.metadata.location == "Berlin"

    @pytest.mark.asyncio
    async def test_process_should_embed_summary_as_document(
        self, pipeline: ProcessingPipeline, make_resume_payload: MakePayload, fake_gateway
    ) -> None:
        # Act
        await pipeline.process(make_resume_payload())

        # Assert
        text, task_type = fake_gateway.embed_calls[-1]
        assert text.startswith("Senior software engineer")
        assert task_type == "retrieval_document"

    @pytest.mark.asyncio
    async def test_reprocessing_should_keep_single_record(
        self,
        pipeline: ProcessingPipeline,
        make_resume_payload: MakePayload,
        embedding_store: InMemoryEmbeddingStore,
    ) -> None:
        # Act
        first = await pipeline.process(make_resume_payload("cand-1"))
        second = await pipeline.process(make_resume_payload("cand-1"))

        # Assert
        assert first.success and second.success
        assert await embedding_store.count(EntityType.CANDIDATE) == 1

    @pytest.mark.asyncio
    async def test_reprocessing_should_reproduce_profile_fields(
        self,
        pipeline: ProcessingPipeline,
        make_resume_payload: MakePayload,
        document_store: InMemoryDocumentStore,
        embedding_store: InMemoryEmbeddingStore,
    ) -> None:
        # Arrange
        first = await pipeline.process(make_resume_payload("cand-1", location="Berlin"))
        stored_first = await document_store.get_profile("cand-1")
        record_first = await embedding_store.get("cand-1", EntityType.CANDIDATE)

        # Act
        second = await pipeline.process(make_resume_payload("cand-1", location="Berlin"))

        # Assert
        for field in ("summary", "skills", "current_title", "experience_level", "location"):
            assert getattr(second, field) == getattr(first, field)
        stored_second = await document_store.get_profile("cand-1")
        for field in ("summary", "skills", "current_title", "experience_level", "location"):
            assert stored_second[field] == stored_first[field]
        record_second = await embedding_store.get("cand-1", EntityType.CANDIDATE)
        assert record_second.vector == record_first.vector
        assert record_second.metadata == record_first.metadata

    @pytest.mark.asyncio
    async def test_process_should_report_every_stage_in_order(
        self, pipeline: ProcessingPipeline, make_resume_payload: MakePayload
    ) -> None:
        # Arrange
        reported: list[tuple[str, int]] = []

        async def on_progress(stage: str, progress: int) -> None:
            reported.append((stage, progress))

        # Act
        result = await pipeline.process(make_resume_payload(), on_progress=on_progress)

        # Assert
        assert result.success is True
        assert [stage for stage, _ in reported] == list(STAGE_PROGRESS)
        percents = [progress for _, progress in reported]
        assert percents == sorted(percents)

    @pytest.mark.asyncio
    async def test_failed_extraction_should_stop_reporting(
        self, pipeline: ProcessingPipeline, make_resume_payload: MakePayload, fake_gateway
    ) -> None:
        # Arrange
        fake_gateway.extract_error = GatewayTimeoutError("extract_text", 60.0)
        reported: list[str] = []

        async def on_progress(stage: str, progress: int) -> None:
            reported.append(stage)

        # Act
        await pipeline.process(make_resume_payload(), on_progress=on_progress)

        # Assert
        assert reported == ["loading_document", "extracting_text"]

    @pytest.mark.asyncio
    async def test_hints_should_fill_fields_the_model_left_empty(
        self, pipeline: ProcessingPipeline, make_resume_payload: MakePayload, fake_gateway
    ) -> None:
        # Arrange
        fake_gateway.responses[CandidateProfileExtraction] = CandidateProfileExtraction(
            summary="Backend developer focused on Go services and cloud infrastructure automation.",
        )

        # Act
        result = await pipeline.process(
            make_resume_payload(skills=["Go"], location="Remote", title="Backend Developer")
        )

        # Assert
        assert result.skills == ["Go"]
        assert result.location == "Remote"
        assert result.current_title == "Backend Developer"


class TestProcessingPipelineHardFailures:
    """Test failures that abort the run."""

    @pytest.mark.asyncio
    async def test_extraction_failure_should_not_write_embedding(
        self,
        pipeline: ProcessingPipeline,
        make_resume_payload: MakePayload,
        fake_gateway,
        embedding_store: InMemoryEmbeddingStore,
        document_store: InMemoryDocumentStore,
    ) -> None:
        # Arrange
        fake_gateway.extract_error = TransientGatewayError("provider down", operation="extract_text")

        # Act
        result = await pipeline.process(make_resume_payload("cand-1"))

        # Assert
        assert result.success is False
        assert result.error_category == ErrorCategory.TRANSIENT
        assert "Text extraction failed" in result.error
        assert await embedding_store.get("cand-1", EntityType.CANDIDATE) is None
        assert await document_store.get_profile("cand-1") is None

    @pytest.mark.asyncio
    async def test_extraction_timeout_should_fail_as_transient(
        self,
        pipeline: ProcessingPipeline,
        make_resume_payload: MakePayload,
        fake_gateway,
        document_store: InMemoryDocumentStore,
    ) -> None:
        # Arrange
        fake_gateway.extract_error = GatewayTimeoutError("extract_text", 60.0)

        # Act
        result = await pipeline.process(make_resume_payload("cand-1"))

        # Assert
        assert result.success is False
        assert result.error_category == ErrorCategory.TRANSIENT
        assert "timed out after 60.0s" in result.error
        assert result.processing_steps.text_extraction is False
        assert fake_gateway.complete_calls == []
        assert await document_store.get_profile("cand-1") is None

    @pytest.mark.asyncio
    async def test_too_little_text_should_fail_as_invalid_input(
        self, pipeline: ProcessingPipeline, make_resume_payload: MakePayload
    ) -> None:
        result = await pipeline.process(make_resume_payload(text="   hi   "))

        assert result.success is False
        assert result.error_category == ErrorCategory.INVALID_INPUT

    @pytest.mark.asyncio
    async def test_unsupported_mime_type_should_fail_as_invalid_input(
        self, pipeline: ProcessingPipeline, make_resume_payload: MakePayload, fake_gateway
    ) -> None:
        # Act
        result = await pipeline.process(make_resume_payload(mime_type="image/png"))

        # Assert
        assert result.success is False
        assert result.error_category == ErrorCategory.INVALID_INPUT
        assert fake_gateway.embed_calls == []

    @pytest.mark.asyncio
    async def test_oversized_document_should_fail(
        self,
        fake_gateway,
        document_store: InMemoryDocumentStore,
        embedding_store: InMemoryEmbeddingStore,
        make_resume_payload: MakePayload,
    ) -> None:
        # Arrange
        pipeline = ProcessingPipeline(
            gateway=fake_gateway,
            document_store=document_store,
            embedding_store=embedding_store,
            embedding_dimension=8,
            settings=PipelineSettings(max_document_bytes=16),
        )

        # Act
        result = await pipeline.process(make_resume_payload())

        # Assert
        assert result.success is False
        assert result.error_category == ErrorCategory.INVALID_INPUT

    @pytest.mark.asyncio
    async def test_s3_document_without_fetcher_should_fail_as_configuration(
        self, pipeline: ProcessingPipeline
    ) -> None:
        # Arrange
        payload = ResumeProcessingPayload(
            candidate_id="cand-1",
            document=ResumeDocument(s3_key="resumes/cand-1.pdf", mime_type="application/pdf"),
        )

        # Act
        result = await pipeline.process(payload)

        # Assert
        assert result.success is False
        assert result.error_category == ErrorCategory.CONFIGURATION

    @pytest.mark.asyncio
    async def test_s3_document_should_be_fetched(
        self,
        fake_gateway,
        document_store: InMemoryDocumentStore,
        embedding_store: InMemoryEmbeddingStore,
    ) -> None:
        # Arrange
        fetcher = AsyncMock()
        fetcher.fetch.return_value = b"Resume of a platform engineer with Terraform and AWS experience."
        pipeline = ProcessingPipeline(
            gateway=fake_gateway,
            document_store=document_store,
            embedding_store=embedding_store,
            embedding_dimension=8,
            settings=PipelineSettings(),
            blob_fetcher=fetcher,
        )
        payload = ResumeProcessingPayload(
            candidate_id="cand-1",
            document=ResumeDocument(s3_key="resumes/cand-1.txt", mime_type="text/plain"),
        )

        # Act
        result = await pipeline.process(payload)

        # Assert
        fetcher.fetch.assert_awaited_once_with("resumes/cand-1.txt")
        assert result.success is True
        assert result.text_excerpt.startswith("Resume of a platform engineer")

    @pytest.mark.asyncio
    async def test_profile_save_failure_should_fail_run(
        self,
        fake_gateway,
        embedding_store: InMemoryEmbeddingStore,
        make_resume_payload: MakePayload,
    ) -> None:
        # Arrange
        document_store = AsyncMock()
        document_store.get_profile.return_value = None
        document_store.update_profile.side_effect = ProfileSaveError("database unavailable")
        pipeline = ProcessingPipeline(
            gateway=fake_gateway,
            document_store=document_store,
            embedding_store=embedding_store,
            embedding_dimension=8,
            settings=PipelineSettings(),
        )

        # Act
        result = await pipeline.process(make_resume_payload("cand-1"))

        # Assert
        assert result.success is False
        assert result.processing_steps.profile_save is False
        assert await embedding_store.get("cand-1", EntityType.CANDIDATE) is None


class TestProcessingPipelineDegradation:
    """Test best-effort steps that only add warnings."""

    @pytest.mark.asyncio
    async def test_embedding_failure_should_still_save_profile(
        self,
        pipeline: ProcessingPipeline,
        make_resume_payload: MakePayload,
        fake_gateway,
        document_store: InMemoryDocumentStore,
        embedding_store: InMemoryEmbeddingStore,
    ) -> None:
        # Arrange
        fake_gateway.embed_error = TransientGatewayError("quota exceeded", operation="embed")

        # Act
        result = await pipeline.process(make_resume_payload("cand-1"))

        # Assert
        assert result.success is True
        assert result.degraded is True
        assert result.processing_steps.profile_save is True
        assert result.has_embedding is False
        assert any("Embedding generation failed" in w for w in result.warnings)

        profile = await document_store.get_profile("cand-1")
        assert profile["vector_search_enabled"] is False
        assert await embedding_store.get("cand-1", EntityType.CANDIDATE) is None

    @pytest.mark.asyncio
    async def test_summary_fallback_should_warn_about_skills(
        self, pipeline: ProcessingPipeline, make_resume_payload: MakePayload, fake_gateway
    ) -> None:
        # Arrange
        fake_gateway.complete_errors[CandidateProfileExtraction] = TransientGatewayError(
            "malformed output", operation="complete"
        )

        # Act
        result = await pipeline.process(make_resume_payload(skills=["SQL"]))

        # Assert
        assert result.success is True
        assert result.processing_steps.summary_generation is True
        assert result.summary.startswith("Senior software engineer")
        assert result.skills == ["SQL"]
        assert any("only a summary" in w for w in result.warnings)

    @pytest.mark.asyncio
    async def test_summary_failure_should_embed_raw_text(
        self, pipeline: ProcessingPipeline, make_resume_payload: MakePayload, fake_gateway
    ) -> None:
        # Arrange
        error = TransientGatewayError("down", operation="complete")
        fake_gateway.complete_errors = {schema: error for schema in fake_gateway.responses}

        # Act
        result = await pipeline.process(make_resume_payload())

        # Assert
        assert result.success is True
        assert result.processing_steps.summary_generation is False
        assert result.has_embedding is True
        assert fake_gateway.embed_calls[-1][0].startswith("Jane Doe")
        assert any("Summary generation failed" in w for w in result.warnings)

    @pytest.mark.asyncio
    async def test_summary_timeout_should_only_warn(
        self,
        pipeline: ProcessingPipeline,
        make_resume_payload: MakePayload,
        fake_gateway,
        document_store: InMemoryDocumentStore,
    ) -> None:
        # Arrange
        timeout = GatewayTimeoutError("complete", 30.0)
        fake_gateway.complete_errors = {schema: timeout for schema in fake_gateway.responses}

        # Act
        result = await pipeline.process(make_resume_payload("cand-1"))

        # Assert
        assert result.success is True
        assert result.error is None
        assert result.processing_steps.summary_generation is False
        assert result.processing_steps.profile_save is True
        assert any(
            "Summary generation failed" in w and "timed out" in w for w in result.warnings
        )
        profile = await document_store.get_profile("cand-1")
        assert profile["resume_text_excerpt"].startswith("Jane Doe")

    @pytest.mark.asyncio
    async def test_embedding_timeout_should_only_warn(
        self,
        pipeline: ProcessingPipeline,
        make_resume_payload: MakePayload,
        fake_gateway,
        embedding_store: InMemoryEmbeddingStore,
    ) -> None:
        # Arrange
        fake_gateway.embed_error = GatewayTimeoutError("embed", 30.0)

        # Act
        result = await pipeline.process(make_resume_payload("cand-1"))

        # Assert
        assert result.success is True
        assert result.has_embedding is False
        assert result.processing_steps.summary_generation is True
        assert result.processing_steps.embedding_generation is False
        assert any("timed out after 30.0s" in w for w in result.warnings)
        assert await embedding_store.get("cand-1", EntityType.CANDIDATE) is None

    @pytest.mark.asyncio
    async def test_short_text_should_skip_summary_and_embedding(
        self, pipeline: ProcessingPipeline, make_resume_payload: MakePayload, fake_gateway
    ) -> None:
        # Act
        result = await pipeline.process(make_resume_payload(text="Go developer, Berlin"))

        # Assert
        assert result.success is True
        assert fake_gateway.complete_calls == []
        assert fake_gateway.embed_calls == []
        assert len(result.warnings) == 2

    @pytest.mark.asyncio
    async def test_vector_store_failure_should_clear_search_flag(
        self,
        fake_gateway,
        document_store: InMemoryDocumentStore,
        make_resume_payload: MakePayload,
    ) -> None:
        # Arrange
        embedding_store = AsyncMock()
        embedding_store.upsert.side_effect = VectorStoreError("index offline", operation="upsert")
        pipeline = ProcessingPipeline(
            gateway=fake_gateway,
            document_store=document_store,
            embedding_store=embedding_store,
            embedding_dimension=8,
            settings=PipelineSettings(),
        )

        # Act
        result = await pipeline.process(make_resume_payload("cand-1"))

        # Assert
        assert result.success is True
        assert result.has_embedding is False
        assert any("Vector search save failed" in w for w in result.warnings)
        profile = await document_store.get_profile("cand-1")
        assert profile["vector_search_enabled"] is False


class TestJobPostingIndexing:
    """Test process_job_posting()."""

    @pytest.mark.asyncio
    async def test_job_posting_should_be_stored_as_job_record(
        self,
        pipeline: ProcessingPipeline,
        embedding_store: InMemoryEmbeddingStore,
        document_store: InMemoryDocumentStore,
    ) -> None:
        # Arrange
        payload = JobPostingPayload(
            job_id="job-1",
            title="Platform Engineer",
            description="Own our Kubernetes platform.",
            skills=["Kubernetes", "Go"],
            location="Berlin",
        )

        # Act
        result = await pipeline.process_job_posting(payload)

        # Assert
        assert result.indexed is True
        record = await embedding_store.get("job-1", EntityType.JOB)
        assert record.metadata.title == "Platform Engineer"
        assert record.metadata.skills == ["Kubernetes", "Go"]
        profile = await document_store.get_profile("job-1")
        assert profile["entity_type"] == "job"

    @pytest.mark.asyncio
    async def test_job_posting_embedding_failure_should_raise(
        self, pipeline: ProcessingPipeline, fake_gateway
    ) -> None:
        fake_gateway.embed_error = TransientGatewayError("down", operation="embed")
        payload = JobPostingPayload(job_id="job-1", title="SRE", description="Keep things up.")

        with pytest.raises(EmbeddingError):
            await pipeline.process_job_posting(payload)


class TestInterviewAnalysis:
    """Test analyze_interview()."""

    @pytest.mark.asyncio
    async def test_analysis_should_be_saved_on_candidate(
        self, pipeline: ProcessingPipeline, document_store: InMemoryDocumentStore
    ) -> None:
        # Arrange
        payload = VideoAnalysisPayload(
            candidate_id="cand-1",
            transcript="Interviewer: Tell me about a hard bug. Candidate: ...",
            interview_id="int-1",
        )

        # Act
        result = await pipeline.analyze_interview(payload)

        # Assert
        assert result.communication_score == 8.0
        assert result.interview_id == "int-1"
        profile = await document_store.get_profile("cand-1")
        assert profile["interview_analysis"]["technical_score"] == 7.5

    @pytest.mark.asyncio
    async def test_blank_transcript_should_raise(self, pipeline: ProcessingPipeline) -> None:
        payload = VideoAnalysisPayload(candidate_id="cand-1", transcript="   ")

        with pytest.raises(InvalidInputError):
            await pipeline.analyze_interview(payload)
