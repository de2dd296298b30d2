"""Cosine similarity scoring and interpretation of embedding pairs."""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np

from ..errors import DegenerateInputError, InvalidInputError

# (lower bound, label) pairs, checked from the top down
INTERPRETATION_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (0.9, "Nearly identical meaning"),
    (0.7, "Very similar meaning"),
    (0.5, "Moderately similar"),
    (0.3, "Slightly similar"),
)
DIFFERENT_MEANINGS = "Different meanings"


@dataclass(frozen=True)
class SimilarityResult:
    """Similarity score in [-1, 1] with its interpretation label."""

    score: float
    label: str


def _as_vector(value: object, name: str) -> np.ndarray:
    """Validate one input and convert it to a float64 vector.

    Raises:
        InvalidInputError: If value is not a non-empty flat sequence of
            finite real numbers
    """
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(
        value, (Sequence, np.ndarray)
    ):
        raise InvalidInputError(
            f"{name} must be a sequence of numbers, got {type(value).__name__}"
        )

    try:
        vector = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must contain only numbers: {e}", e) from e

    if vector.ndim != 1:
        raise InvalidInputError(
            f"{name} must be one-dimensional, got shape {vector.shape}"
        )
    if vector.size == 0:
        raise InvalidInputError(f"{name} must not be empty")
    if not np.all(np.isfinite(vector)):
        raise InvalidInputError(f"{name} contains NaN or infinite values")

    return vector


def cosine_similarity(vector_a: Sequence[float], vector_b: Sequence[float]) -> float:
    """Calculate cosine similarity between two embeddings.

    Args:
        vector_a: First embedding
        vector_b: Second embedding, same length as vector_a

    Returns:
        Cosine similarity between -1.0 and 1.0
        (1.0 = same direction, 0.0 = orthogonal, -1.0 = opposite)

    Raises:
        InvalidInputError: If inputs are malformed or have different lengths
        DegenerateInputError: If either vector has zero magnitude
    """
    a = _as_vector(vector_a, "vector_a")
    b = _as_vector(vector_b, "vector_b")

    if a.shape != b.shape:
        raise InvalidInputError(
            f"Embeddings must have the same dimension, got {a.size} and {b.size}"
        )

    scale_a = float(np.max(np.abs(a)))
    scale_b = float(np.max(np.abs(b)))
    if scale_a == 0.0 or scale_b == 0.0:
        raise DegenerateInputError(
            "Cosine similarity is undefined for a zero-magnitude vector"
        )

    # Rescale so the largest element is 1; the angle is unchanged and the
    # dot product and norms cannot overflow or underflow
    a = a / scale_a
    b = b / scale_b

    similarity = float(np.dot(a, b)) / float(np.linalg.norm(a) * np.linalg.norm(b))
    if not math.isfinite(similarity):
        raise DegenerateInputError(
            f"Cosine similarity could not be computed, got {similarity}"
        )

    # Clamp to valid range [-1, 1] to handle floating point precision
    return max(-1.0, min(1.0, similarity))


def interpret(score: float) -> str:
    """Map a similarity score to a human-readable label.

    Total over the real line; NaN falls through to "Different meanings".
    """
    if not math.isnan(score):
        for threshold, label in INTERPRETATION_THRESHOLDS:
            if score >= threshold:
                return label
    return DIFFERENT_MEANINGS


class SimilarityScorer:
    """Stateless scorer combining cosine_similarity() and interpret()."""

    def score(self, vector_a: Sequence[float], vector_b: Sequence[float]) -> float:
        return cosine_similarity(vector_a, vector_b)

    def interpret(self, score: float) -> str:
        return interpret(score)

    def compare(
        self, vector_a: Sequence[float], vector_b: Sequence[float]
    ) -> SimilarityResult:
        """Score two embeddings and label the result."""
        score = self.score(vector_a, vector_b)
        return SimilarityResult(score=score, label=self.interpret(score))
