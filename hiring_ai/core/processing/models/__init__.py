"""
Models for the resume processing pipeline.

Exports: payload schemas, pipeline results, structured completion schemas
"""

from .extraction import CandidateProfileExtraction, InterviewAnalysis, ResumeSummary
from .payloads import (
    JobPayload,
    JobPostingPayload,
    ProfileHints,
    ResumeDocument,
    ResumeProcessingPayload,
    VideoAnalysisPayload,
)
from .pipeline_result import (
    InterviewAnalysisResult,
    JobPostingResult,
    PipelineResult,
    ProcessingSteps,
)

__all__ = [
    "CandidateProfileExtraction",
    "InterviewAnalysis",
    "ResumeSummary",
    "JobPayload",
    "JobPostingPayload",
    "ProfileHints",
    "ResumeDocument",
    "ResumeProcessingPayload",
    "VideoAnalysisPayload",
    "InterviewAnalysisResult",
    "JobPostingResult",
    "PipelineResult",
    "ProcessingSteps",
]
