"""Text embedding generation and token pooling."""

from .models import EMBEDDING_DIM, EMBEDDING_MODEL, EmbedOptions, Embedding
from .pooling import pool

__all__ = ["EMBEDDING_DIM", "EMBEDDING_MODEL", "EmbedOptions", "Embedding", "pool"]
