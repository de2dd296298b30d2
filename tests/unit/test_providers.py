"""Unit tests for the sentence-transformers and transformers providers."""

import asyncio
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from lpipe.embeddings.models import EMBEDDING_MODEL, EmbedOptions
from lpipe.errors import NotInitializedError
from lpipe.providers.hf_pipeline import TransformersProvider
from lpipe.providers.sentence_transformers import SentenceTransformerProvider


class TestSentenceTransformerProvider:
    """Test SentenceTransformerProvider lifecycle and embedding."""

    def test_initial_state(self) -> None:
        provider = SentenceTransformerProvider()

        assert provider.model_name == EMBEDDING_MODEL
        assert not provider.is_initialized

    @pytest.mark.asyncio
    async def test_embed_before_initialize_raises(self) -> None:
        """Test embed() before initialize() raises NotInitializedError."""
        provider = SentenceTransformerProvider()

        with pytest.raises(NotInitializedError, match="Call initialize\\(\\) first"):
            await provider.embed("hello")

    @pytest.mark.asyncio
    async def test_initialize_loads_model(self) -> None:
        """Test that initialize() loads the SentenceTransformer model."""
        mock_model = Mock()
        mock_model.get_sentence_embedding_dimension.return_value = 384

        with patch(
            "sentence_transformers.SentenceTransformer", return_value=mock_model
        ) as mock_transformer:
            provider = SentenceTransformerProvider(model_name="m", device="cpu")
            await provider.initialize()
            await provider.initialize()

        mock_transformer.assert_called_once_with("m", device="cpu")
        assert provider.is_initialized
        assert provider.generator.dimension == 384

    @pytest.mark.asyncio
    async def test_concurrent_initialize_loads_once(self) -> None:
        """Test that overlapping initialize() calls share one model load."""
        mock_model = Mock()
        mock_model.get_sentence_embedding_dimension.return_value = 384

        with patch(
            "sentence_transformers.SentenceTransformer", return_value=mock_model
        ) as mock_transformer:
            provider = SentenceTransformerProvider(model_name="m", device="cpu")
            await asyncio.gather(*(provider.initialize() for _ in range(5)))

        mock_transformer.assert_called_once_with("m", device="cpu")
        assert provider.is_initialized

    @pytest.mark.asyncio
    async def test_initialize_failure_propagates(self) -> None:
        """Test that load failures leave the provider uninitialized."""
        with patch(
            "sentence_transformers.SentenceTransformer",
            side_effect=OSError("not found"),
        ):
            provider = SentenceTransformerProvider()
            with pytest.raises(OSError, match="not found"):
                await provider.initialize()

        assert not provider.is_initialized

    @pytest.mark.asyncio
    async def test_embed_pools_token_embeddings(self) -> None:
        """Test that embed() pools the model's token features."""
        provider = SentenceTransformerProvider()
        provider.generator._model = Mock()
        provider.generator._model.encode.return_value = np.array(
            [[1.0, 0.0], [0.0, 1.0]]
        )
        provider._initialized = True

        result = await provider.embed("hello", EmbedOptions(normalize=False))

        assert np.allclose(result, [0.5, 0.5])


class TestTransformersProvider:
    """Test TransformersProvider lifecycle and embedding."""

    @pytest.mark.asyncio
    async def test_embed_before_initialize_raises(self) -> None:
        provider = TransformersProvider()

        with pytest.raises(NotInitializedError):
            await provider.embed("hello")

    @pytest.mark.asyncio
    async def test_initialize_creates_feature_extraction_pipeline(self) -> None:
        """Test that initialize() builds a feature-extraction pipeline once."""
        with patch("transformers.pipeline", return_value=Mock()) as mock_pipeline:
            provider = TransformersProvider(model_name="m", device="cpu")
            await provider.initialize()
            await provider.initialize()

        mock_pipeline.assert_called_once_with("feature-extraction", model="m", device="cpu")
        assert provider.is_initialized

    @pytest.mark.asyncio
    async def test_concurrent_initialize_creates_one_pipeline(self) -> None:
        """Test that overlapping initialize() calls build one pipeline."""
        with patch("transformers.pipeline", return_value=Mock()) as mock_pipeline:
            provider = TransformersProvider(model_name="m", device="cpu")
            await asyncio.gather(*(provider.initialize() for _ in range(5)))

        mock_pipeline.assert_called_once_with("feature-extraction", model="m", device="cpu")

    @pytest.mark.asyncio
    async def test_embed_pools_pipeline_features(self) -> None:
        """Test mean pooling over [1][tokens][dim] pipeline output."""
        provider = TransformersProvider()
        provider._pipeline = Mock(return_value=[[[3.0, 0.0], [3.0, 8.0]]])

        result = await provider.embed("hello")

        provider._pipeline.assert_called_once_with("hello")
        assert np.allclose(result, [0.6, 0.8])

    @pytest.mark.asyncio
    async def test_embed_cls_pooling(self) -> None:
        provider = TransformersProvider()
        provider._pipeline = Mock(return_value=[[[1.0, 2.0], [3.0, 4.0]]])

        result = await provider.embed(
            "hello", EmbedOptions(pooling="cls", normalize=False)
        )

        assert np.allclose(result, [1.0, 2.0])

    @pytest.mark.asyncio
    async def test_embed_empty_text_raises(self) -> None:
        provider = TransformersProvider()
        provider._pipeline = Mock()

        with pytest.raises(ValueError, match="empty text"):
            await provider.embed("")

        provider._pipeline.assert_not_called()
