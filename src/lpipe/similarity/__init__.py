"""Semantic similarity scoring for lpipe."""

from .calculator import DEMO_PAIRS, PhraseComparison, SemanticSimilarityCalculator
from .scorer import SimilarityResult, SimilarityScorer, cosine_similarity, interpret

__all__ = [
    "DEMO_PAIRS",
    "PhraseComparison",
    "SemanticSimilarityCalculator",
    "SimilarityResult",
    "SimilarityScorer",
    "cosine_similarity",
    "interpret",
]
