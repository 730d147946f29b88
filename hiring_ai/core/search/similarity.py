"""
Vector similarity.

Cosine similarity mapped into [0, 1] as (cosine + 1) / 2. Zero-norm
vectors have cosine 0 and therefore score 0.5.

Dependencies: numpy
System role: Scoring function of the vector search engine
"""

from collections.abc import Sequence

import numpy as np


def score_matrix(query: Sequence[float], vectors: Sequence[Sequence[float]]) -> np.ndarray:
    """
    Scores of one query against many same-dimension vectors.

    Returns:
        np.ndarray: One score in [0, 1] per row of vectors

    Raises:
        ValueError: When a row's length differs from the query's
    """
    if not vectors:
        return np.zeros(0)

    q = np.asarray(query, dtype=np.float64)
    matrix = np.asarray(vectors, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[1] != q.size:
        raise ValueError(f"Vectors must all have the query's length ({q.size})")

    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(q)
    dots = matrix @ q
    cosines = np.divide(dots, norms, out=np.zeros_like(dots), where=norms != 0)
    return np.clip((cosines + 1.0) / 2.0, 0.0, 1.0)
