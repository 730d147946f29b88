"""
Job payload schemas.

Each job type carries its own typed payload; the `type` field is the
discriminator of the JobPayload union so workers dispatch on a tagged
variant instead of inspecting untyped dicts.

Dependencies: pydantic
System role: Contract between submitters, the job queue, and pipeline handlers
"""

import base64
import binascii
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hiring_ai.core.exceptions import InvalidInputError


class ResumeDocument(BaseModel):
    """
    Resume document reference.

    Exactly one of content_b64 (inline bytes) or s3_key (uploaded object)
    must be provided.
    """

    content_b64: str | None = Field(default=None, description="Base64-encoded document bytes")
    s3_key: str | None = Field(default=None, description="S3 object key of an uploaded resume")
    mime_type: str = Field(description="Document MIME type")
    filename: str | None = Field(default=None, description="Original filename for logging")

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "ResumeDocument":
        if bool(self.content_b64) == bool(self.s3_key):
            raise ValueError("Provide exactly one of content_b64 or s3_key")
        return self

    def decode(self) -> bytes:
        """
        Decode inline content.

        Raises:
            InvalidInputError: When the content is not valid base64
        """
        try:
            return base64.b64decode(self.content_b64 or "", validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidInputError(
                "Document content is not valid base64",
                {"filename": self.filename},
            ) from e


class ProfileHints(BaseModel):
    """Caller-supplied profile fields used when the model cannot derive them."""

    skills: list[str] = Field(default_factory=list)
    location: str | None = None
    experience: str | None = None
    availability: str | None = None
    title: str | None = None


class ResumeProcessingPayload(BaseModel):
    """Process one candidate resume end to end."""

    type: Literal["resume_processing"] = "resume_processing"
    candidate_id: str = Field(min_length=1, description="Candidate ID in the document store")
    document: ResumeDocument
    hints: ProfileHints = Field(default_factory=ProfileHints)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "resume_processing",
                "candidate_id": "cand-123",
                "document": {
                    "content_b64": "SmFuZSBEb2UsIFNlbmlvciBHbyBlbmdpbmVlci4uLg==",
                    "mime_type": "text/plain",
                    "filename": "jane_doe.txt",
                },
                "hints": {"location": "Berlin", "availability": "Immediately"},
            }
        }
    )


class VideoAnalysisPayload(BaseModel):
    """Analyze a recorded interview from its transcript."""

    type: Literal["video_analysis"] = "video_analysis"
    candidate_id: str = Field(min_length=1)
    transcript: str = Field(min_length=1, description="Interview transcript text")
    role_context: str | None = Field(default=None, description="Role the interview was for")
    interview_id: str | None = None


class JobPostingPayload(BaseModel):
    """Embed a job posting so candidates can be matched against it."""

    type: Literal["job_posting_embedding"] = "job_posting_embedding"
    job_id: str = Field(min_length=1, description="Job posting ID in the document store")
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    skills: list[str] = Field(default_factory=list)
    location: str | None = None
    experience: str | None = None
    availability: str | None = None


JobPayload = Annotated[
    Union[ResumeProcessingPayload, VideoAnalysisPayload, JobPostingPayload],
    Field(discriminator="type"),
]
