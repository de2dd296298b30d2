"""Core functionality for lpipe - orchestrates providers and tasks."""

import asyncio
import logging
from collections.abc import Iterable

from .config import LpipeConfig, load_config, resolve_device
from .embeddings.models import EmbedOptions, Embedding
from .providers import ProviderRegistry
from .similarity.calculator import (
    DEMO_PAIRS,
    PhraseComparison,
    SemanticSimilarityCalculator,
)
from .tasks.generation import TextGenerator
from .tasks.models import GeneratedText, SentimentResult
from .tasks.sentiment import SentimentClassifier

logger = logging.getLogger(__name__)


async def build_calculator(
    provider: str | None = None,
    model: str | None = None,
    options: EmbedOptions | None = None,
    config: LpipeConfig | None = None,
) -> SemanticSimilarityCalculator:
    """Create a calculator on a cached provider instance and initialize it.

    Args:
        provider: Provider name (from config if omitted)
        model: Embedding model name (from config if omitted)
        options: Pooling/normalization options (from config if omitted)
        config: Loaded configuration (loaded if omitted)

    Raises:
        KeyError: If provider not found
        ProviderError: If the model fails to load
    """
    config = config or load_config()
    provider_name = provider or config.embeddings.provider
    model_name = model or config.embeddings.model
    options = options or EmbedOptions(
        pooling=config.embeddings.pooling, normalize=config.embeddings.normalize
    )

    instance = ProviderRegistry.get_instance(
        provider_name, model_name, resolve_device(config.runtime.device)
    )
    calculator = SemanticSimilarityCalculator(instance, options=options)
    await calculator.initialize()
    return calculator


async def embed_text(
    text: str,
    provider: str | None = None,
    model: str | None = None,
    pooling: str | None = None,
    normalize: bool | None = None,
) -> Embedding:
    """Generate the embedding of text.

    Raises:
        ValueError: If text is empty or pooling is unknown
        KeyError: If provider not found
        ProviderError: If model loading or embedding fails
    """
    if not text or not text.strip():
        raise ValueError("Text cannot be empty")

    config = load_config()
    options = EmbedOptions(
        pooling=pooling or config.embeddings.pooling,
        normalize=config.embeddings.normalize if normalize is None else normalize,
    )
    calculator = await build_calculator(provider, model, options, config)
    return await calculator.get_embedding(text)


async def compare_phrases(
    phrase1: str,
    phrase2: str,
    provider: str | None = None,
    model: str | None = None,
) -> PhraseComparison:
    """Compare two phrases by semantic similarity.

    Raises:
        KeyError: If provider not found
        ProviderError: If model loading, embedding or scoring fails
    """
    calculator = await build_calculator(provider, model)
    return await calculator.compare_phrases(phrase1, phrase2)


async def run_similarity_demo(
    pairs: Iterable[tuple[str, str]] = DEMO_PAIRS,
    provider: str | None = None,
    model: str | None = None,
) -> list[PhraseComparison]:
    """Compare each of the example phrase pairs."""
    calculator = await build_calculator(provider, model)
    logger.debug("Analyzing semantic similarities")
    return await calculator.compare_pairs(pairs)


async def classify_sentiment(
    text: str, model: str | None = None
) -> list[SentimentResult]:
    """Classify the sentiment of text.

    Raises:
        ValueError: If text is empty
        ProviderError: If model loading or inference fails
    """
    config = load_config()
    classifier = SentimentClassifier(
        model_name=model or config.sentiment.model,
        device=resolve_device(config.runtime.device),
    )
    return await asyncio.to_thread(classifier.classify, text)


async def generate_text(
    prompt: str, model: str | None = None, max_length: int | None = None
) -> list[GeneratedText]:
    """Continue prompt with the text-generation model.

    Raises:
        ValueError: If prompt is empty or max_length is not positive
        ProviderError: If model loading or inference fails
    """
    config = load_config()
    generator = TextGenerator(
        model_name=model or config.generation.model,
        device=resolve_device(config.runtime.device),
    )
    return await asyncio.to_thread(
        generator.generate,
        prompt,
        config.generation.max_length if max_length is None else max_length,
    )
