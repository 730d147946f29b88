"""
Resume processing pipeline orchestrator.

Coordinates document loading, text extraction, summary generation,
embedding, profile save, and embedding store upload. Text extraction and
the profile save are the guaranteed baseline; summary, embedding, and the
embedding store write are best-effort enrichment recorded as warnings.

Dependencies: All task modules, configs, hiring_ai.boundary
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

from hiring_ai.boundary.ai.gateway import AIGateway
from hiring_ai.boundary.db.document_store import DocumentStore
from hiring_ai.boundary.storage.s3_blob_fetcher import S3BlobFetcher
from hiring_ai.boundary.vdb.embedding_store import EmbeddingStore
from hiring_ai.boundary.vdb.vector_schemas import EmbeddingMetadata, EmbeddingRecord, EntityType
from hiring_ai.core.exceptions import (
    EmbeddingError,
    HiringAIException,
    InvalidInputError,
    ProfileSaveError,
)
from hiring_ai.core.prompts import render_interview_analysis, render_job_posting
from hiring_ai.observability.log_utils import log_with_context

from .configs import PipelineSettings, get_pipeline_settings
from .models import (
    CandidateProfileExtraction,
    InterviewAnalysis,
    InterviewAnalysisResult,
    JobPostingPayload,
    JobPostingResult,
    PipelineResult,
    ResumeProcessingPayload,
    VideoAnalysisPayload,
)
from .tasks import (
    DocumentTask,
    EmbeddingTask,
    ExtractionTask,
    ProfileTask,
    SummaryTask,
    VectorStoreTask,
)

logger = logging.getLogger(__name__)

# Receives (stage, percent complete) as the resume pipeline advances
ProgressCallback = Callable[[str, int], Awaitable[None]]

# Percent complete when each stage starts
STAGE_PROGRESS = {
    "loading_document": 5,
    "extracting_text": 15,
    "generating_summary": 35,
    "generating_embedding": 60,
    "saving_profile": 80,
    "indexing_embedding": 90,
}


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000


async def _report(on_progress: ProgressCallback | None, stage: str) -> None:
    if on_progress is not None:
        await on_progress(stage, STAGE_PROGRESS[stage])


class ProcessingPipeline:
    """Orchestrate resume processing: load -> extract -> summarize -> embed -> save."""

    def __init__(
        self,
        gateway: AIGateway,
        document_store: DocumentStore,
        embedding_store: EmbeddingStore,
        embedding_dimension: int,
        settings: PipelineSettings | None = None,
        blob_fetcher: S3BlobFetcher | None = None,
    ) -> None:
        """
        Initialize pipeline with collaborators.

        Args:
            gateway: AI gateway for extraction, completion, and embedding
            document_store: Profile document store
            embedding_store: Embedding store written after embedding
            embedding_dimension: Required vector length
            settings: Pipeline settings (uses defaults if None)
            blob_fetcher: S3 fetcher for documents referenced by key
        """
        self._settings = settings or get_pipeline_settings()
        self._gateway = gateway

        self._document_task = DocumentTask(
            allowed_mime_types=self._settings.allowed_mime_types,
            max_document_bytes=self._settings.max_document_bytes,
            blob_fetcher=blob_fetcher,
        )
        self._extraction_task = ExtractionTask(gateway, self._settings.min_extracted_chars)
        self._summary_task = SummaryTask(gateway)
        self._embedding_task = EmbeddingTask(
            gateway,
            dimension=embedding_dimension,
            max_chars=self._settings.max_embedding_chars,
        )
        self._profile_task = ProfileTask(document_store)
        self._vector_store_task = VectorStoreTask(embedding_store)

    async def process(
        self,
        payload: ResumeProcessingPayload,
        on_progress: ProgressCallback | None = None,
    ) -> PipelineResult:
        """
        Process one resume through the full pipeline.

        Never raises for step failures: hard failures come back as
        success=False with error and error_category set, optional step
        failures as warnings on a successful result.

        Args:
            payload: Candidate ID, document reference, and profile hints
            on_progress: Awaited with each stage name from STAGE_PROGRESS
                as the run reaches it

        Returns:
            PipelineResult: Step flags, warnings, and derived profile fields
        """
        start_time = time.perf_counter()
        candidate_id = payload.candidate_id
        result = PipelineResult(entity_id=candidate_id)

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:process - START",
            entity_id=candidate_id,
            mime_type=payload.document.mime_type,
        )

        # Document load and text extraction (mandatory)
        await _report(on_progress, "loading_document")
        try:
            blob = await self._document_task.load(payload.document)
            await _report(on_progress, "extracting_text")
            text = await self._extraction_task.extract(
                blob, payload.document.mime_type, candidate_id
            )
        except HiringAIException as e:
            return self._fail(result, e, start_time)
        result.processing_steps.text_extraction = True
        result.text_excerpt = text[: self._settings.excerpt_chars]

        # Summary and skills (optional)
        profile: CandidateProfileExtraction | None = None
        if len(text) < self._settings.min_summary_chars:
            result.warnings.append("Resume text too short for summary generation")
        else:
            await _report(on_progress, "generating_summary")
            try:
                profile, partial_warning = await self._summary_task.summarize(text, candidate_id)
                result.processing_steps.summary_generation = True
                if partial_warning:
                    result.warnings.append(partial_warning)
            except HiringAIException as e:
                logger.warning(
                    f"{__name__}:process - Summary generation failed",
                    extra={"entity_id": candidate_id, "error": e.message},
                )
                result.warnings.append(f"Summary generation failed: {e.message}")

        # Embedding (optional)
        vector: list[float] | None = None
        embedding_source = profile.summary if profile and profile.summary else text
        if len(embedding_source) < self._settings.min_embedding_chars:
            result.warnings.append("Text too short for embedding generation; vector search disabled")
        else:
            await _report(on_progress, "generating_embedding")
            try:
                vector = await self._embedding_task.embed(embedding_source, candidate_id)
                result.processing_steps.embedding_generation = True
            except EmbeddingError as e:
                logger.warning(
                    f"{__name__}:process - Embedding generation failed",
                    extra={"entity_id": candidate_id, "error": e.message},
                )
                result.warnings.append(
                    f"Embedding generation failed: {e.message}; vector search disabled"
                )

        # Profile save (mandatory)
        await _report(on_progress, "saving_profile")
        stored = await self._profile_task.read(candidate_id)
        metadata = self._build_metadata(profile, payload, stored)
        result.summary = profile.summary if profile else None
        result.skills = metadata.skills
        result.current_title = metadata.title
        result.experience_level = metadata.experience
        result.location = metadata.location

        fields: dict[str, Any] = {
            "resume_text_excerpt": result.text_excerpt,
            "resume_processed_at": datetime.now(timezone.utc).isoformat(),
            "vector_search_enabled": vector is not None,
        }
        if profile is not None:
            fields.update(
                summary=profile.summary,
                skills=metadata.skills,
                current_title=metadata.title,
                experience_level=metadata.experience,
                location=metadata.location,
            )
        try:
            await self._profile_task.save(candidate_id, fields)
        except ProfileSaveError as e:
            return self._fail(result, e, start_time)
        result.processing_steps.profile_save = True

        # Embedding store write (optional, only with an embedding)
        if vector is not None:
            record = EmbeddingRecord(
                entity_id=candidate_id,
                entity_type=EntityType.CANDIDATE,
                vector=vector,
                metadata=metadata,
            )
            await _report(on_progress, "indexing_embedding")
            try:
                await self._vector_store_task.save(record)
                result.processing_steps.vector_search_save = True
                result.has_embedding = True
            except HiringAIException as e:
                logger.warning(
                    f"{__name__}:process - Embedding store write failed",
                    extra={"entity_id": candidate_id, "error": e.message},
                )
                result.warnings.append(f"Vector search save failed: {e.message}")
                await self._disable_vector_search(candidate_id)

        result.success = True
        result.processing_time_ms = _elapsed_ms(start_time)

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:process - END",
            entity_id=candidate_id,
            warnings=len(result.warnings),
            has_embedding=result.has_embedding,
            processing_time_ms=round(result.processing_time_ms, 1),
        )
        return result

    def _fail(
        self,
        result: PipelineResult,
        error: HiringAIException,
        start_time: float,
    ) -> PipelineResult:
        result.success = False
        result.error = error.message
        result.error_category = error.category
        result.processing_time_ms = _elapsed_ms(start_time)
        logger.error(
            f"{__name__}:process - FAILED",
            extra={
                "entity_id": result.entity_id,
                "error": error.message,
                "error_category": error.category.value,
            },
        )
        return result

    async def _disable_vector_search(self, candidate_id: str) -> None:
        try:
            await self._profile_task.save(candidate_id, {"vector_search_enabled": False})
        except ProfileSaveError as e:
            logger.warning(
                f"{__name__}:_disable_vector_search - Could not clear flag",
                extra={"entity_id": candidate_id, "error": e.message},
            )

    @staticmethod
    def _build_metadata(
        profile: CandidateProfileExtraction | None,
        payload: ResumeProcessingPayload,
        stored: dict[str, Any],
    ) -> EmbeddingMetadata:
        """Derived fields first, then caller hints, then the stored profile."""
        hints = payload.hints

        def pick(*values: Any) -> Any:
            for value in values:
                if value:
                    return value
            return None

        return EmbeddingMetadata(
            skills=pick(profile and profile.skills, hints.skills, stored.get("skills")) or [],
            location=pick(profile and profile.location, hints.location, stored.get("location")),
            experience=pick(
                profile and profile.experience_level,
                hints.experience,
                stored.get("experience_level"),
            ),
            availability=pick(hints.availability, stored.get("availability")),
            title=pick(profile and profile.current_title, hints.title, stored.get("current_title")),
        )

    async def process_job_posting(self, payload: JobPostingPayload) -> JobPostingResult:
        """
        Embed a job posting and store it as a job EmbeddingRecord.

        Args:
            payload: Job posting fields

        Returns:
            JobPostingResult: Indexing outcome

        Raises:
            EmbeddingError: Embedding generation failed
            VectorStoreError: Embedding store write failed
        """
        start_time = time.perf_counter()
        text = render_job_posting(
            payload.title,
            payload.description,
            payload.skills,
            payload.location,
            payload.experience,
        )
        vector = await self._embedding_task.embed(text, payload.job_id)

        metadata = EmbeddingMetadata(
            skills=payload.skills,
            location=payload.location,
            experience=payload.experience,
            availability=payload.availability,
            title=payload.title,
        )
        await self._vector_store_task.save(
            EmbeddingRecord(
                entity_id=payload.job_id,
                entity_type=EntityType.JOB,
                vector=vector,
                metadata=metadata,
            )
        )

        result = JobPostingResult(job_id=payload.job_id, indexed=True, skills=metadata.skills)
        try:
            await self._profile_task.save(
                payload.job_id,
                {
                    "vector_search_enabled": True,
                    "embedding_updated_at": datetime.now(timezone.utc).isoformat(),
                },
                entity_type=EntityType.JOB.value,
            )
        except ProfileSaveError as e:
            result.warnings.append(f"Job profile update failed: {e.message}")

        result.processing_time_ms = _elapsed_ms(start_time)
        logger.info(
            f"{__name__}:process_job_posting - Indexed job posting",
            extra={"job_id": payload.job_id, "processing_time_ms": round(result.processing_time_ms, 1)},
        )
        return result

    async def analyze_interview(self, payload: VideoAnalysisPayload) -> InterviewAnalysisResult:
        """
        Analyze an interview transcript and store the analysis on the candidate.

        Args:
            payload: Candidate ID and transcript

        Returns:
            InterviewAnalysisResult: Scores and assessment

        Raises:
            InvalidInputError: Blank transcript
            HiringAIException: Gateway or profile save failure
        """
        start_time = time.perf_counter()
        if not payload.transcript.strip():
            raise InvalidInputError("Transcript is empty", {"candidate_id": payload.candidate_id})

        analysis = await self._gateway.complete(
            render_interview_analysis(payload.transcript, payload.role_context),
            InterviewAnalysis,
        )
        await self._profile_task.save(
            payload.candidate_id,
            {
                "interview_analysis": analysis.model_dump(),
                "interview_analyzed_at": datetime.now(timezone.utc).isoformat(),
            },
        )

        return InterviewAnalysisResult(
            candidate_id=payload.candidate_id,
            interview_id=payload.interview_id,
            processing_time_ms=_elapsed_ms(start_time),
            **analysis.model_dump(),
        )
