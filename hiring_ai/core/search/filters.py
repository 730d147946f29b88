"""
Metadata filters for vector search.

Pre-filters run against stored metadata before scoring; the availability
post-filter runs on the ranked list.

Dependencies: hiring_ai.boundary.vdb
System role: Candidate-set reduction for the vector search engine
"""

from hiring_ai.boundary.vdb.embedding_store import RecordPredicate
from hiring_ai.boundary.vdb.vector_schemas import EmbeddingMetadata, EmbeddingRecord

from .models import SearchFilters


def _norm(value: str | None) -> str:
    return (value or "").strip().lower()


def matched_skills(metadata: EmbeddingMetadata, skills: list[str]) -> list[str]:
    """Requested skills present on the record (case-insensitive), in request order."""
    have = {_norm(s) for s in metadata.skills}
    return [skill for skill in skills if _norm(skill) in have]


def build_predicate(filters: SearchFilters) -> RecordPredicate | None:
    """
    Build the metadata pre-filter.

    Returns:
        Predicate over records, or None when no pre-filter applies
    """
    wanted_skills = [s for s in filters.skills if s.strip()]
    location = _norm(filters.location)
    experience = _norm(filters.experience)
    excluded = set(filters.exclude_ids)

    if not (wanted_skills or location or experience or excluded):
        return None

    def predicate(record: EmbeddingRecord) -> bool:
        if record.entity_id in excluded:
            return False
        if wanted_skills:
            found = matched_skills(record.metadata, wanted_skills)
            if filters.require_all_skills and len(found) < len(wanted_skills):
                return False
            if not found:
                return False
        if location and _norm(record.metadata.location) != location:
            return False
        if experience and _norm(record.metadata.experience) != experience:
            return False
        return True

    return predicate


def matches_availability(metadata: EmbeddingMetadata | None, availability: str | None) -> bool:
    """Free-text post-filter; records without availability never match a request for one."""
    wanted = _norm(availability)
    if not wanted:
        return True
    return metadata is not None and wanted in _norm(metadata.availability)
