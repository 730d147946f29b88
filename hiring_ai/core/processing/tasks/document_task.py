"""
Resume document loading and validation task.

Resolves the document bytes (inline base64 or S3 object) and checks type,
size, and emptiness before anything is sent to the AI gateway.

Dependencies: hiring_ai.boundary.storage
System role: Input gate of the resume processing pipeline
"""

import logging

from hiring_ai.boundary.storage.s3_blob_fetcher import S3BlobFetcher
from hiring_ai.core.exceptions import ConfigurationError, ValidationError

from ..models import ResumeDocument

logger = logging.getLogger(__name__)


class DocumentTask:
    """Load and validate resume documents."""

    def __init__(
        self,
        allowed_mime_types: list[str],
        max_document_bytes: int,
        blob_fetcher: S3BlobFetcher | None = None,
    ) -> None:
        """
        Initialize document task.

        Args:
            allowed_mime_types: Accepted MIME types
            max_document_bytes: Largest accepted document
            blob_fetcher: S3 fetcher for documents referenced by key
        """
        self._allowed_mime_types = set(allowed_mime_types)
        self._max_document_bytes = max_document_bytes
        self._blob_fetcher = blob_fetcher

    def validate_type(self, document: ResumeDocument) -> None:
        """
        Reject unsupported MIME types before loading.

        Raises:
            ValidationError: When the MIME type is not allowed
        """
        if document.mime_type not in self._allowed_mime_types:
            raise ValidationError(
                f"Unsupported document type: {document.mime_type}",
                field="mime_type",
                details={"allowed": sorted(self._allowed_mime_types)},
            )

    async def load(self, document: ResumeDocument) -> bytes:
        """
        Return validated document bytes.

        Args:
            document: Resume document reference

        Returns:
            bytes: Non-empty document content within the size limit

        Raises:
            ValidationError: Unsupported type, empty, or oversized document
            ConfigurationError: Document references S3 but no fetcher is configured
            TransientGatewayError: S3 read failed
        """
        self.validate_type(document)

        if document.s3_key:
            if self._blob_fetcher is None:
                raise ConfigurationError("Resume storage is not configured for S3 documents")
            blob = await self._blob_fetcher.fetch(document.s3_key)
        else:
            blob = document.decode()

        if not blob:
            raise ValidationError("Document is empty", field="document")
        if len(blob) > self._max_document_bytes:
            raise ValidationError(
                f"Document is {len(blob)} bytes, limit is {self._max_document_bytes}",
                field="document",
                details={"size_bytes": len(blob)},
            )

        logger.debug(
            f"{__name__}:load - Document loaded",
            extra={"size_bytes": len(blob), "mime_type": document.mime_type},
        )
        return blob
