"""Text embedding generation using sentence-transformers."""

import logging
from typing import TYPE_CHECKING, Any

import numpy as np

from .models import EMBEDDING_MODEL, EmbedOptions, Embedding, TokenEmbeddings
from .pooling import pool

if TYPE_CHECKING:
    from sentence_transformers import SentenceTransformer

logger = logging.getLogger(__name__)


def _to_numpy(features: Any) -> np.ndarray:
    """Convert a torch tensor (or anything array-like) to a numpy array."""
    if hasattr(features, "detach"):
        features = features.detach().cpu().numpy()
    return np.asarray(features, dtype=np.float32)


class EmbeddingGenerator:
    """Generate text embeddings using sentence-transformers.

    Uses all-MiniLM-L6-v2 by default (384 dimensions). Token embeddings are
    taken from the model and pooled here so the pooling mode can be chosen
    per call.
    """

    def __init__(
        self,
        model_name: str = EMBEDDING_MODEL,
        device: str | None = None,
        expected_dim: int | None = None,
    ):
        """Initialize embedding generator with specified model.

        Args:
            model_name: Name of sentence-transformers model to use
            device: Torch device to load the model on (None lets the library pick)
            expected_dim: Fail on load if the model reports another dimension
        """
        self.model_name = model_name
        self.device = device
        self.expected_dim = expected_dim
        self._model: SentenceTransformer | None = None  # Lazy load the model
        self.dimension: int | None = expected_dim

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    @property
    def model(self) -> "SentenceTransformer":
        """Lazy-load the model only when actually needed."""
        if self._model is None:
            # Import here to avoid loading at module import time
            from sentence_transformers import SentenceTransformer

            logger.debug(f"Loading sentence-transformers model {self.model_name}")
            self._model = SentenceTransformer(self.model_name, device=self.device)

            # Verify dimension after loading
            actual_dim = self._model.get_sentence_embedding_dimension()
            if self.expected_dim is not None and actual_dim != self.expected_dim:
                raise ValueError(
                    f"Model {self.model_name} has dimension {actual_dim}, "
                    f"expected {self.expected_dim}"
                )
            self.dimension = actual_dim
        return self._model

    def token_embeddings(self, text: str) -> TokenEmbeddings:
        """Return per-token feature vectors for text, shape (tokens, dim).

        Raises:
            ValueError: If text is empty
        """
        if not text or not text.strip():
            raise ValueError("Cannot generate embeddings for empty text")

        features = self.model.encode(text, output_value="token_embeddings")
        return _to_numpy(features)

    def embed(self, text: str, options: EmbedOptions | None = None) -> Embedding:
        """Generate a single pooled embedding for text.

        Args:
            text: Text to embed
            options: Pooling and normalization options

        Returns:
            Numpy array of shape (dim,)

        Raises:
            ValueError: If text is empty
            Exception: If embedding generation fails
        """
        options = options or EmbedOptions()
        tokens = self.token_embeddings(text)
        return pool(tokens, pooling=options.pooling, normalize=options.normalize)
