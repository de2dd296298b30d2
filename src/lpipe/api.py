"""High-level API for lpipe library usage."""

from .core import classify_sentiment, compare_phrases, embed_text, generate_text
from .embeddings.models import Embedding
from .similarity.calculator import PhraseComparison
from .tasks.models import GeneratedText, SentimentResult


async def embed(
    text: str,
    provider: str | None = None,
    model: str | None = None,
    pooling: str | None = None,
    normalize: bool | None = None,
) -> Embedding:
    """Embed text.

    Args:
        text: Text to embed
        provider: Embedding provider name (from config if omitted)
        model: Embedding model name (from config if omitted)
        pooling: "mean" or "cls" (from config if omitted)
        normalize: L2-normalize the embedding (from config if omitted)

    Returns:
        1-D numpy array

    Raises:
        ValueError: If text is empty or pooling is unknown
        KeyError: If provider not found
        ProviderError: If model loading or embedding fails
    """
    return await embed_text(
        text=text,
        provider=provider,
        model=model,
        pooling=pooling,
        normalize=normalize,
    )


async def compare(
    phrase1: str,
    phrase2: str,
    provider: str | None = None,
    model: str | None = None,
) -> PhraseComparison:
    """Compare two phrases by semantic similarity.

    Returns:
        PhraseComparison with score, interpretation label and inputs

    Raises:
        KeyError: If provider not found
        ProviderError: If model loading, embedding or scoring fails
    """
    return await compare_phrases(
        phrase1=phrase1, phrase2=phrase2, provider=provider, model=model
    )


async def classify(text: str, model: str | None = None) -> list[SentimentResult]:
    """Classify the sentiment of text."""
    return await classify_sentiment(text=text, model=model)


async def generate(
    prompt: str, model: str | None = None, max_length: int | None = None
) -> list[GeneratedText]:
    """Continue prompt with a text-generation model."""
    return await generate_text(prompt=prompt, model=model, max_length=max_length)
