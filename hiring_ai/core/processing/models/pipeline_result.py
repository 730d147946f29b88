"""
Pipeline result model for resume processing.

Represents the outcome of processing one resume through the pipeline,
including which steps succeeded and non-fatal warnings.

Dependencies: pydantic
System role: Return type for ProcessingPipeline.process()
"""

from pydantic import BaseModel, Field

from hiring_ai.core.exceptions import ErrorCategory


class ProcessingSteps(BaseModel):
    """Per-step success flags."""

    text_extraction: bool = False
    summary_generation: bool = False
    embedding_generation: bool = False
    profile_save: bool = False
    vector_search_save: bool = False


class PipelineResult(BaseModel):
    """
    Result of resume processing pipeline execution.

    success is True when text extraction and the profile save succeeded,
    regardless of optional step failures, which are listed in warnings.
    """

    entity_id: str = Field(description="Candidate ID")
    success: bool = Field(default=False)
    processing_steps: ProcessingSteps = Field(default_factory=ProcessingSteps)
    warnings: list[str] = Field(default_factory=list, description="Non-fatal step failures")

    summary: str | None = None
    skills: list[str] = Field(default_factory=list)
    current_title: str | None = None
    experience_level: str | None = None
    location: str | None = None
    text_excerpt: str | None = Field(default=None, description="Leading extracted text")
    has_embedding: bool = False

    error: str | None = Field(default=None, description="Hard failure message")
    error_category: ErrorCategory | None = None
    processing_time_ms: float = Field(default=0.0, description="Total processing time in milliseconds")

    @property
    def degraded(self) -> bool:
        """Successful run with at least one optional step failure."""
        return self.success and bool(self.warnings)


class JobPostingResult(BaseModel):
    """Result of indexing one job posting for search."""

    job_id: str
    indexed: bool = Field(default=False, description="Embedding record written")
    skills: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0


class InterviewAnalysisResult(BaseModel):
    """Result of analyzing one interview transcript."""

    candidate_id: str
    interview_id: str | None = None
    communication_score: float
    technical_score: float
    strengths: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    overall_assessment: str
    processing_time_ms: float = 0.0
