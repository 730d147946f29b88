"""
Hiring AI background processing core.

Resume processing pipeline, prioritized job queue with bounded workers,
and cached vector search over candidate and job embeddings.
"""

__version__ = "0.1.0"
