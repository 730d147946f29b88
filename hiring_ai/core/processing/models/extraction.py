"""
Structured completion schemas.

Passed to the AI gateway's complete operation; field descriptions are
part of the instructions the model receives.

Dependencies: pydantic
System role: Output contracts for summary, profile, and interview analysis
"""

from pydantic import BaseModel, Field


class CandidateProfileExtraction(BaseModel):
    """Full profile derived from resume text."""

    summary: str = Field(description="2-3 sentence professional summary")
    skills: list[str] = Field(default_factory=list, description="Concrete skills and technologies")
    current_title: str | None = Field(default=None, description="Most recent job title")
    experience_level: str | None = Field(
        default=None,
        description="One of entry, junior, mid, senior, lead, executive",
    )
    location: str | None = Field(default=None, description="Location as written, or Remote")


class ResumeSummary(BaseModel):
    """Summary-only fallback output."""

    summary: str = Field(description="2-3 sentence professional summary")


class InterviewAnalysis(BaseModel):
    """Assessment of an interview transcript."""

    communication_score: float = Field(ge=0, le=10, description="Communication clarity, 0-10")
    technical_score: float = Field(ge=0, le=10, description="Technical depth, 0-10")
    strengths: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    overall_assessment: str = Field(description="2-3 sentence overall assessment")
