"""
Cosine similarity between sentence fingerprints.

Mathematical Background:
    cos(theta) = (A . B) / (||A|| * ||B||)

Interpretation:
- 1.0: Identical direction (same wording)
- 0.0: Orthogonal (no shared features), or one side is a zero vector
- -1.0: Opposite direction (cannot happen for hashing fingerprints,
  whose components are all non-negative)

Robustness:
The scorer never raises. A zero-length or zero-magnitude vector scores
0.0. Vectors of different lengths (e.g. produced by two provider
versions) are truncated to the shorter length before scoring. Padding
the shorter one with zeros instead would let the unused tail of the
longer vector inflate its norm against nothing.
"""

import logging
from typing import List, Sequence

import numpy as np

from simdiff.core.models import Vector


logger = logging.getLogger(__name__)


def cosine_similarity(vec_a: Vector, vec_b: Vector) -> float:
    """
    Compute cosine similarity between two vectors.

    Args:
        vec_a: First embedding vector
        vec_b: Second embedding vector

    Returns:
        Cosine similarity clamped to [-1.0, 1.0]; 0.0 when either vector
        is empty or has zero magnitude
    """
    vec_a = np.ravel(np.asarray(vec_a, dtype=np.float64))
    vec_b = np.ravel(np.asarray(vec_b, dtype=np.float64))

    if vec_a.size == 0 or vec_b.size == 0:
        return 0.0

    if vec_a.size != vec_b.size:
        length = min(vec_a.size, vec_b.size)
        logger.debug(
            "Dimension mismatch (%d vs %d), truncating to %d",
            vec_a.size, vec_b.size, length,
        )
        vec_a = vec_a[:length]
        vec_b = vec_b[:length]

    denominator = np.linalg.norm(vec_a) * np.linalg.norm(vec_b)
    if denominator == 0 or not np.isfinite(denominator):
        return 0.0

    similarity = np.dot(vec_a, vec_b) / denominator

    # Clamp to [-1, 1] to handle floating point errors
    return float(np.clip(similarity, -1.0, 1.0))


def compute_similarities(
    query_vec: Vector,
    document_vecs: Sequence[Vector],
) -> List[float]:
    """
    Compute cosine similarity between one vector and many.

    Args:
        query_vec: Vector to score
        document_vecs: Vectors to score against

    Returns:
        List of similarity scores, same order as document_vecs
    """
    return [cosine_similarity(query_vec, doc_vec) for doc_vec in document_vecs]
