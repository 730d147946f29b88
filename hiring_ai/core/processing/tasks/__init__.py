"""
Task modules for the resume processing pipeline.

Exports: DocumentTask, ExtractionTask, SummaryTask, EmbeddingTask, ProfileTask, VectorStoreTask
"""

from .document_task import DocumentTask
from .embedding_task import EmbeddingTask
from .extraction_task import ExtractionTask
from .profile_task import ProfileTask
from .summary_task import SummaryTask
from .vector_store_task import VectorStoreTask

__all__ = [
    "DocumentTask",
    "EmbeddingTask",
    "ExtractionTask",
    "ProfileTask",
    "SummaryTask",
    "VectorStoreTask",
]
