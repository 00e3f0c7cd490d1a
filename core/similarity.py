# core/similarity.py
from typing import Sequence
import numpy as np


class FingerprintError(ValueError):
    """Arithmetic hazard that would make a similarity score meaningless."""


class DimensionMismatch(FingerprintError):
    def __init__(self, left: int, right: int) -> None:
        super().__init__(f"fingerprint lengths differ: {left} != {right}")
        self.left = left
        self.right = right


class DegenerateVector(FingerprintError):
    pass


def as_fingerprint(values: Sequence[float]) -> np.ndarray:
    """
    Coerce to a 1-D float64 array, rejecting vectors cosine similarity is undefined for
    (empty, zero magnitude, NaN/inf components).
    """
    vec = np.asarray(values, dtype=np.float64)
    if vec.ndim != 1 or vec.size == 0:
        raise DegenerateVector(f"expected a non-empty 1-D vector, got shape {vec.shape}")
    if not np.isfinite(vec).all():
        raise DegenerateVector("fingerprint contains non-finite values")
    if not np.any(vec):
        raise DegenerateVector("fingerprint has zero magnitude")
    return vec


def check_dimensions(fingerprint: Sequence[float], expected: int | None) -> None:
    if expected is not None and len(fingerprint) != expected:
        raise DimensionMismatch(len(fingerprint), expected)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    dot(a, b) / (|a| * |b|), clipped to [-1, 1].

    Raises DimensionMismatch for unequal lengths and DegenerateVector for inputs
    with zero magnitude or non-finite components, so NaN never reaches a caller.
    """
    if len(a) != len(b):
        raise DimensionMismatch(len(a), len(b))
    va = as_fingerprint(a)
    vb = as_fingerprint(b)
    denom = float(np.linalg.norm(va)) * float(np.linalg.norm(vb))
    score = float(np.dot(va, vb)) / denom
    # Finite components can still overflow when squared
    if not np.isfinite(score):
        raise DegenerateVector("similarity is not finite")
    return float(np.clip(score, -1.0, 1.0))
