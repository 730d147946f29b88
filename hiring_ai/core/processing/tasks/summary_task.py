"""
Summary and skill generation task.

Asks the model for a full structured profile; if that fails, falls back
to a summary-only request. Failures here are never fatal to the pipeline.

Dependencies: hiring_ai.boundary.ai, hiring_ai.core.prompts
System role: Second stage of the resume processing pipeline
"""

import logging

from hiring_ai.boundary.ai.gateway import AIGateway
from hiring_ai.core.exceptions import SummaryGenerationError
from hiring_ai.core.prompts import render_profile_extraction, render_summary

from ..models import CandidateProfileExtraction, ResumeSummary

logger = logging.getLogger(__name__)


class SummaryTask:
    """Generate a structured candidate profile from resume text."""

    def __init__(self, gateway: AIGateway) -> None:
        self._gateway = gateway

    async def summarize(
        self,
        text: str,
        entity_id: str,
    ) -> tuple[CandidateProfileExtraction, str | None]:
        """
        Derive summary, skills, title, experience, and location.

        Args:
            text: Extracted resume text
            entity_id: Candidate ID for logs and errors

        Returns:
            tuple: (profile, partial-success warning or None)

        Raises:
            SummaryGenerationError: When both the full and the fallback request fail
        """
        try:
            profile = await self._gateway.complete(
                render_profile_extraction(text),
                CandidateProfileExtraction,
            )
            return profile, None
        except Exception as e:
            logger.warning(
                f"{__name__}:summarize - Full profile extraction failed, trying summary only",
                extra={"entity_id": entity_id, "error": str(e)},
            )

        try:
            fallback = await self._gateway.complete(render_summary(text), ResumeSummary)
        except Exception as e:
            raise SummaryGenerationError(
                f"Summary generation failed: {e}",
                entity_id=entity_id,
            ) from e

        return (
            CandidateProfileExtraction(summary=fallback.summary),
            "Skill extraction failed; only a summary was generated",
        )
