"""Abstract base class for embedding providers.

This module defines the interface that all embedding providers must
implement: a one-time initialize() followed by any number of embed() calls.
"""

from abc import ABC, abstractmethod

from ..embeddings.models import EmbedOptions, Embedding


class EmbeddingProvider(ABC):
    """Abstract base class for embedding providers.

    All embedding providers must inherit from this class and implement
    the required methods for loading a model and embedding text.

    Lifecycle:
        uninitialized -> initialize() -> initialized

    Calling embed() before initialize() raises NotInitializedError.
    """

    @property
    @abstractmethod
    def is_initialized(self) -> bool:
        """Whether initialize() has completed successfully."""
        pass

    @abstractmethod
    async def initialize(self) -> None:
        """Load the model so that embed() can be called.

        Raises:
            Exception: If the model fails to load
        """
        pass

    @abstractmethod
    async def embed(self, text: str, options: EmbedOptions | None = None) -> Embedding:
        """Convert text to a fixed-length embedding.

        Args:
            text: The text to embed
            options: Pooling and normalization options

        Returns:
            1-D numpy array

        Raises:
            NotInitializedError: If initialize() has not completed
            ValueError: If text is empty
            Exception: If inference fails
        """
        pass
