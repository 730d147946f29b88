"""
AI gateway interface.

The processing pipeline and the orchestrator talk to the hosted model only
through this protocol, so tests can substitute a deterministic fake.

Dependencies: pydantic
System role: Seam between core logic and the hosted LLM service
"""

from typing import Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Embedding task types; query and document vectors come from the same model
RETRIEVAL_DOCUMENT = "retrieval_document"
RETRIEVAL_QUERY = "retrieval_query"

MIME_PDF = "application/pdf"
MIME_DOC = "application/msword"
MIME_DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
MIME_TEXT = "text/plain"


@runtime_checkable
class AIGateway(Protocol):
    """
    Hosted AI capabilities used by the background processing core.

    Implementations raise ConfigurationError for missing credentials,
    InvalidInputError for input the model cannot use, and
    TransientGatewayError (including GatewayTimeoutError) otherwise.
    """

    async def extract_text(self, blob: bytes, mime_type: str) -> str: ...

    async def embed(self, text: str, task_type: str = RETRIEVAL_DOCUMENT) -> list[float]: ...

    async def complete(self, prompt: str, schema: type[SchemaT]) -> SchemaT: ...
