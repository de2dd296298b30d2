"""Unit tests for EmbeddingProvider abstract base class."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from lpipe.embeddings.models import EmbedOptions, Embedding
from lpipe.providers.base import EmbeddingProvider


class TestEmbeddingProviderAbstractClass:
    """Test EmbeddingProvider abstract base class behavior."""

    def test_cannot_instantiate_abstract_class(self) -> None:
        """Test that EmbeddingProvider cannot be instantiated directly."""
        with pytest.raises(TypeError) as exc_info:
            EmbeddingProvider()  # type: ignore[abstract]

        error_msg = str(exc_info.value)
        assert "abstract" in error_msg.lower()
        assert "initialize" in error_msg
        assert "embed" in error_msg

    def test_abstract_methods_defined(self) -> None:
        """Test that expected abstract methods are defined."""
        assert EmbeddingProvider.__abstractmethods__ == frozenset(
            {"initialize", "embed", "is_initialized"}
        )

    def test_partial_implementation_fails(self) -> None:
        """Test that implementing only initialize still fails."""

        class PartialProvider(EmbeddingProvider):
            @property
            def is_initialized(self) -> bool:
                return True

            async def initialize(self) -> None:
                pass

        with pytest.raises(TypeError) as exc_info:
            PartialProvider()  # type: ignore[abstract]

        assert "embed" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_complete_implementation_succeeds(self) -> None:
        """Test that implementing all abstract methods allows instantiation."""

        class ConstantProvider(EmbeddingProvider):
            def __init__(self) -> None:
                self._ready = False

            @property
            def is_initialized(self) -> bool:
                return self._ready

            async def initialize(self) -> None:
                self._ready = True

            async def embed(
                self, text: str, options: EmbedOptions | None = None
            ) -> Embedding:
                return np.ones(3)

        provider = ConstantProvider()
        assert isinstance(provider, EmbeddingProvider)
        assert not provider.is_initialized

        await provider.initialize()

        assert provider.is_initialized
        assert np.array_equal(await provider.embed("x"), np.ones(3))
