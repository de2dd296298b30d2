"""Reduce per-token feature vectors to a single sentence embedding."""

import numpy as np

from .models import POOLING_MODES, Embedding, TokenEmbeddings


def pool(
    token_embeddings: TokenEmbeddings, pooling: str = "mean", normalize: bool = True
) -> Embedding:
    """Pool token embeddings into one vector.

    Args:
        token_embeddings: Array of shape (tokens, dim). A 1-D array is
            treated as an already pooled vector.
        pooling: "mean" averages all tokens, "cls" takes the first token
        normalize: Divide the result by its L2 norm

    Returns:
        Float32 array of shape (dim,)

    Raises:
        ValueError: If pooling mode is unknown or the array is empty
    """
    if pooling not in POOLING_MODES:
        raise ValueError(f"Unknown pooling mode: {pooling!r}")

    features = np.asarray(token_embeddings, dtype=np.float32)

    # Drop a leading batch axis of size one
    if features.ndim == 3 and features.shape[0] == 1:
        features = features[0]

    if features.size == 0:
        raise ValueError("Cannot pool an empty feature array")

    if features.ndim == 1:
        vector = features
    elif features.ndim == 2:
        vector = features.mean(axis=0) if pooling == "mean" else features[0]
    else:
        raise ValueError(
            f"Expected token embeddings of shape (tokens, dim), got {features.shape}"
        )

    if normalize:
        norm = float(np.linalg.norm(vector))
        # Zero vectors stay as they are
        if norm > 0.0:
            vector = vector / norm

    return vector.astype(np.float32)
