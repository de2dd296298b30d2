"""Embedding provider backed by sentence-transformers."""

import asyncio
import logging

from ..embeddings.generator import EmbeddingGenerator
from ..embeddings.models import EMBEDDING_MODEL, EmbedOptions, Embedding
from ..errors import NotInitializedError
from .base import EmbeddingProvider

logger = logging.getLogger(__name__)


class SentenceTransformerProvider(EmbeddingProvider):
    """Local embedding provider using a SentenceTransformer model.

    The model is loaded by initialize(). CPU-bound model work runs in a
    thread pool via asyncio.to_thread.
    """

    def __init__(self, model_name: str = EMBEDDING_MODEL, device: str | None = None):
        self.generator = EmbeddingGenerator(model_name=model_name, device=device)
        self._initialized = False
        self._init_lock = asyncio.Lock()

    @property
    def model_name(self) -> str:
        return self.generator.model_name

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Load the SentenceTransformer model.

        Safe to call more than once, including concurrently; the model is
        loaded once.
        """
        async with self._init_lock:
            if self._initialized:
                return

            logger.info(f"Initializing embeddings model {self.model_name}")

            # Touching the property triggers the lazy load
            await asyncio.to_thread(lambda: self.generator.model)
            self._initialized = True
            dimension = self.generator.dimension
            logger.info(f"Model initialized successfully (dimension: {dimension})")

    async def embed(self, text: str, options: EmbedOptions | None = None) -> Embedding:
        if not self._initialized:
            raise NotInitializedError("Model not initialized. Call initialize() first.")

        return await asyncio.to_thread(self.generator.embed, text, options)
