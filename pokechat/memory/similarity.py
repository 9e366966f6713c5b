"""
Vector comparison helpers.

Cosine similarity measures the angle between two vectors, not their
distance, so the score ignores magnitude:
- 1  = same direction (very similar)
- 0  = orthogonal (unrelated)
- -1 = opposite directions
"""

from typing import Sequence

import numpy as np

from pokechat.errors import DimensionMismatchError


EPSILON = 1e-12


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Compute the cosine similarity of two vectors.

    The denominator carries a small epsilon so an all-zero vector scores
    0.0 instead of dividing by zero.

    Args:
        a: First vector
        b: Second vector, same length as `a`

    Returns:
        float: Similarity in approximately [-1, 1]

    Raises:
        DimensionMismatchError: If the vectors differ in length
        ValueError: If either input is not a flat vector

    Examples:
        >>> cosine_similarity([1, 0], [1, 0])
        1.0
        >>> cosine_similarity([1, 0], [0, 1])
        0.0
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    if va.ndim != 1 or vb.ndim != 1:
        raise ValueError(f"Expected 1-D vectors, got shapes {va.shape} and {vb.shape}")
    if va.shape != vb.shape:
        raise DimensionMismatchError(va.shape[0], vb.shape[0])

    denominator = np.linalg.norm(va) * np.linalg.norm(vb) + EPSILON
    return float(np.dot(va, vb) / denominator)
