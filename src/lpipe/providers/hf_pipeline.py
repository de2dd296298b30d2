"""Embedding provider backed by a transformers feature-extraction pipeline."""

import asyncio
import logging
from typing import Any

from ..embeddings.models import EMBEDDING_MODEL, EmbedOptions, Embedding
from ..embeddings.pooling import pool
from ..errors import NotInitializedError
from .base import EmbeddingProvider

logger = logging.getLogger(__name__)


class TransformersProvider(EmbeddingProvider):
    """Embedding provider using transformers.pipeline("feature-extraction").

    The pipeline returns one feature vector per token; they are pooled
    according to the EmbedOptions passed to embed().
    """

    def __init__(self, model_name: str = EMBEDDING_MODEL, device: str | None = None):
        self.model_name = model_name
        self.device = device
        self._pipeline: Any = None
        self._init_lock = asyncio.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._pipeline is not None

    async def initialize(self) -> None:
        """Create the feature-extraction pipeline.

        Safe to call more than once, including concurrently; the pipeline is
        created once.
        """

        def _load() -> Any:
            # Import here to avoid loading at module import time
            from transformers import pipeline

            return pipeline(
                "feature-extraction", model=self.model_name, device=self.device
            )

        async with self._init_lock:
            if self._pipeline is not None:
                return

            logger.info(
                f"Initializing feature-extraction pipeline for {self.model_name}"
            )
            self._pipeline = await asyncio.to_thread(_load)
            logger.info("Pipeline initialized successfully")

    async def embed(self, text: str, options: EmbedOptions | None = None) -> Embedding:
        if self._pipeline is None:
            raise NotInitializedError("Model not initialized. Call initialize() first.")
        if not text or not text.strip():
            raise ValueError("Cannot generate embeddings for empty text")

        options = options or EmbedOptions()

        def _extract() -> Embedding:
            # Nested lists shaped [1][tokens][dim]
            features = self._pipeline(text)
            return pool(features, pooling=options.pooling, normalize=options.normalize)

        return await asyncio.to_thread(_extract)
