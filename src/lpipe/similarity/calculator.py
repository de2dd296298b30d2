"""Semantic similarity between phrases using an embedding provider."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..embeddings.models import EmbedOptions, Embedding
from ..errors import (
    DegenerateInputError,
    InvalidInputError,
    NotInitializedError,
    ProviderError,
)
from ..providers.base import EmbeddingProvider
from .scorer import SimilarityScorer

logger = logging.getLogger(__name__)

DEMO_PAIRS: tuple[tuple[str, str], ...] = (
    ("I love programming", "I enjoy writing code"),
    ("The weather is nice today", "It's a beautiful sunny day"),
    ("The cat is sleeping", "The dog is barking"),
)


@dataclass(frozen=True)
class PhraseComparison:
    """Result of comparing two phrases.

    Args:
        score: Cosine similarity of the phrase embeddings
        label: Interpretation of the score
        phrase1: First input phrase
        phrase2: Second input phrase
    """

    score: float
    label: str
    phrase1: str
    phrase2: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "similarity": self.score,
            "interpretation": self.label,
            "phrases": {"phrase1": self.phrase1, "phrase2": self.phrase2},
        }


class SemanticSimilarityCalculator:
    """Compare phrases by the cosine similarity of their embeddings.

    Embedding is delegated to an EmbeddingProvider; scoring is pure and
    handled by SimilarityScorer. The provider must be initialized with
    initialize() before any comparison.

    Example:
        calculator = SemanticSimilarityCalculator(SentenceTransformerProvider())
        await calculator.initialize()
        result = await calculator.compare_phrases(
            "I love programming", "I enjoy writing code"
        )
        # result.score ~ 0.7, result.label == "Very similar meaning"
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        options: EmbedOptions | None = None,
        scorer: SimilarityScorer | None = None,
    ) -> None:
        self.provider = provider
        self.options = options or EmbedOptions(pooling="mean", normalize=True)
        self.scorer = scorer or SimilarityScorer()

    @property
    def is_initialized(self) -> bool:
        return self.provider.is_initialized

    async def initialize(self) -> None:
        """Initialize the embedding provider.

        Raises:
            ProviderError: If the provider fails to load its model
                (step="initialization")
        """
        if self.provider.is_initialized:
            return

        try:
            await self.provider.initialize()
        except Exception as e:
            raise ProviderError(
                f"Failed to initialize embeddings model: {e}", "initialization", e
            ) from e

    async def get_embedding(self, text: str) -> Embedding:
        """Embed text with the configured options.

        Raises:
            NotInitializedError: If initialize() has not completed
            ProviderError: If the provider fails (step="embedding")
        """
        if not self.provider.is_initialized:
            raise NotInitializedError("Model not initialized. Call initialize() first.")

        try:
            return await self.provider.embed(text, self.options)
        except Exception as e:
            raise ProviderError(
                f"Failed to generate embedding: {e}", "embedding", e
            ) from e

    async def compare_phrases(self, phrase1: str, phrase2: str) -> PhraseComparison:
        """Compare two phrases.

        Embeddings are fetched one after the other, then scored.

        Returns:
            PhraseComparison with score, label and both phrases

        Raises:
            NotInitializedError: If initialize() has not completed
            ProviderError: If embedding (step="embedding") or scoring
                (step="scoring") fails
        """
        if not self.provider.is_initialized:
            raise NotInitializedError("Model not initialized. Call initialize() first.")

        embedding1 = await self.get_embedding(phrase1)
        embedding2 = await self.get_embedding(phrase2)

        try:
            result = self.scorer.compare(embedding1, embedding2)
        except (InvalidInputError, DegenerateInputError) as e:
            raise ProviderError(
                f"Failed to compare phrases: {e}", "scoring", e
            ) from e

        logger.debug(
            f"Compared {phrase1[:50]!r} with {phrase2[:50]!r}: "
            f"{result.score:.4f} ({result.label})"
        )
        return PhraseComparison(
            score=result.score, label=result.label, phrase1=phrase1, phrase2=phrase2
        )

    async def compare_pairs(
        self, pairs: Iterable[tuple[str, str]]
    ) -> list[PhraseComparison]:
        """Compare each (phrase1, phrase2) pair in order."""
        return [await self.compare_phrases(p1, p2) for p1, p2 in pairs]
