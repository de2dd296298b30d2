"""Unit tests for embedding options and token pooling."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from lpipe.embeddings.models import EMBEDDING_DIM, EMBEDDING_MODEL, EmbedOptions
from lpipe.embeddings.pooling import pool


class TestEmbeddingConstants:
    """Test embedding constants are correct values."""

    def test_embedding_model_constant(self) -> None:
        """Test EMBEDDING_MODEL is set to expected value."""
        assert EMBEDDING_MODEL == "sentence-transformers/all-MiniLM-L6-v2"

    def test_embedding_dimension_constant(self) -> None:
        """Test EMBEDDING_DIM is set to expected value."""
        assert EMBEDDING_DIM == 384


class TestEmbedOptions:
    """Test EmbedOptions validation."""

    def test_defaults(self) -> None:
        options = EmbedOptions()
        assert options.pooling == "mean"
        assert options.normalize is True

    def test_cls_pooling_allowed(self) -> None:
        assert EmbedOptions(pooling="cls", normalize=False).pooling == "cls"

    def test_unknown_pooling_raises(self) -> None:
        """Test that an unknown pooling mode is rejected."""
        with pytest.raises(ValueError, match="pooling must be one of mean, cls"):
            EmbedOptions(pooling="max")


class TestPool:
    """Test pool() reduction of token features."""

    def test_mean_pooling(self) -> None:
        """Test that mean pooling averages tokens."""
        tokens = np.array([[1.0, 2.0], [3.0, 4.0]])

        result = pool(tokens, pooling="mean", normalize=False)

        assert np.allclose(result, [2.0, 3.0])

    def test_cls_pooling_takes_first_token(self) -> None:
        """Test that cls pooling keeps the first token vector."""
        tokens = np.array([[1.0, 2.0], [3.0, 4.0]])

        result = pool(tokens, pooling="cls", normalize=False)

        assert np.allclose(result, [1.0, 2.0])

    def test_normalize_gives_unit_length(self) -> None:
        """Test that normalized output has L2 norm 1."""
        tokens = np.array([[3.0, 0.0], [3.0, 8.0]])

        result = pool(tokens, pooling="mean", normalize=True)

        assert np.allclose(result, [0.6, 0.8])
        assert np.linalg.norm(result) == pytest.approx(1.0)

    def test_zero_vector_left_unchanged(self) -> None:
        """Test that normalizing a zero vector does not produce NaN."""
        result = pool(np.zeros((3, 4)), pooling="mean", normalize=True)

        assert np.array_equal(result, np.zeros(4))

    def test_pipeline_nested_lists(self) -> None:
        """Test the [1][tokens][dim] nesting produced by feature-extraction."""
        features = [[[1.0, 0.0], [0.0, 1.0]]]

        result = pool(features, pooling="mean", normalize=False)

        assert result.shape == (2,)
        assert np.allclose(result, [0.5, 0.5])

    def test_already_pooled_vector_passes_through(self) -> None:
        """Test that a 1-D input is treated as a sentence embedding."""
        result = pool(np.array([0.0, 2.0]), pooling="cls", normalize=True)

        assert np.allclose(result, [0.0, 1.0])

    def test_returns_float32(self) -> None:
        result = pool(np.ones((2, 3), dtype=np.float64))
        assert result.dtype == np.float32

    def test_unknown_mode_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown pooling mode"):
            pool(np.ones((2, 3)), pooling="max")

    def test_empty_features_raise(self) -> None:
        with pytest.raises(ValueError, match="empty feature array"):
            pool(np.empty((0, 3)))

    def test_wrong_rank_raises(self) -> None:
        """Test that a real batch (more than one text) is rejected."""
        with pytest.raises(ValueError, match="Expected token embeddings"):
            pool(np.ones((2, 3, 4)))
