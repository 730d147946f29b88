"""
Local document text extraction.

PDF pages are read with LangChain's PyPDFLoader, Word documents with
python-docx, and plain text is decoded as UTF-8. All functions are
blocking and are run in a worker thread by the gateway.

Dependencies: langchain_community.document_loaders, docx
System role: Text extraction backend for the AI gateway
"""

import os
import tempfile
from io import BytesIO

from docx import Document as DocxDocument
from langchain_community.document_loaders import PyPDFLoader

from hiring_ai.boundary.ai.gateway import MIME_DOC, MIME_DOCX, MIME_PDF, MIME_TEXT
from hiring_ai.core.exceptions import InvalidInputError

SUPPORTED_MIME_TYPES = frozenset({MIME_PDF, MIME_DOC, MIME_DOCX, MIME_TEXT})


def extract_pdf_text(blob: bytes) -> str:
    """Concatenate page text from a PDF held in memory."""
    # PyPDFLoader reads from a path
    fd, path = tempfile.mkstemp(prefix="resume_", suffix=".pdf")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(blob)
        documents = PyPDFLoader(path).load()
    finally:
        os.remove(path)
    return "\n".join(doc.page_content for doc in documents).strip()


def extract_docx_text(blob: bytes) -> str:
    """Join paragraph text from a Word document held in memory."""
    with BytesIO(blob) as bio:
        document = DocxDocument(bio)
    return "\n".join(p.text for p in document.paragraphs).strip()


def extract_text_sync(blob: bytes, mime_type: str) -> str:
    """
    Extract plain text from a document by MIME type.

    Args:
        blob: Raw document bytes
        mime_type: Declared MIME type

    Returns:
        str: Extracted text (may be empty when the document has no text layer)

    Raises:
        InvalidInputError: When the type is unsupported or the document cannot be read
    """
    if mime_type not in SUPPORTED_MIME_TYPES:
        raise InvalidInputError(
            f"Unsupported document type: {mime_type}",
            {"mime_type": mime_type},
        )

    if mime_type == MIME_TEXT:
        return blob.decode("utf-8", errors="replace").strip()

    try:
        if mime_type == MIME_PDF:
            return extract_pdf_text(blob)
        return extract_docx_text(blob)
    except Exception as e:
        # Legacy .doc binaries land here too
        raise InvalidInputError(
            f"Unreadable {mime_type} document: {e}",
            {"mime_type": mime_type},
        ) from e
