"""Embedding models and constants."""

from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

# Model configuration constants
EMBEDDING_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
EMBEDDING_DIM = 384

POOLING_MODES = ("mean", "cls")

# Type aliases for clarity
Embedding: TypeAlias = np.ndarray  # Shape: (dim,)
TokenEmbeddings: TypeAlias = np.ndarray  # Shape: (tokens, dim)


@dataclass(frozen=True)
class EmbedOptions:
    """Options applied when reducing token features to one embedding.

    Args:
        pooling: How token vectors are combined ("mean" or "cls")
        normalize: Whether to L2-normalize the pooled vector
    """

    pooling: str = "mean"
    normalize: bool = True

    def __post_init__(self) -> None:
        """Validate pooling mode."""
        if self.pooling not in POOLING_MODES:
            raise ValueError(
                f"pooling must be one of {', '.join(POOLING_MODES)}, "
                f"got {self.pooling!r}"
            )
