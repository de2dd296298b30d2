"""Sentiment classification using a transformers pipeline."""

import logging
from typing import Any

from ..config import DEFAULT_SENTIMENT_MODEL
from ..errors import ProviderError
from .models import SentimentResult

logger = logging.getLogger(__name__)


class SentimentClassifier:
    """Classify text sentiment with a fine-tuned sequence classifier.

    Uses distilbert-base-uncased-finetuned-sst-2-english by default, which
    predicts POSITIVE or NEGATIVE.
    """

    def __init__(
        self, model_name: str = DEFAULT_SENTIMENT_MODEL, device: str | None = None
    ) -> None:
        self.model_name = model_name
        self.device = device
        self._pipeline: Any = None  # Lazy load the pipeline

    @property
    def pipeline(self) -> Any:
        """Lazy-load the sentiment-analysis pipeline.

        Raises:
            ProviderError: If the model fails to load (step="initialization")
        """
        if self._pipeline is None:
            logger.debug(f"Loading sentiment model {self.model_name}")
            try:
                # Import here to avoid loading at module import time
                from transformers import pipeline

                self._pipeline = pipeline(
                    "sentiment-analysis", model=self.model_name, device=self.device
                )
            except Exception as e:
                raise ProviderError(
                    f"Failed to load sentiment model {self.model_name}: {e}",
                    "initialization",
                    e,
                ) from e
        return self._pipeline

    def classify(self, text: str) -> list[SentimentResult]:
        """Classify the sentiment of text.

        Args:
            text: Text to classify

        Returns:
            List of SentimentResult, one per prediction returned by the model

        Raises:
            ValueError: If text is empty
            ProviderError: If the model fails to load or run
        """
        if not text or not text.strip():
            raise ValueError("Text cannot be empty")

        classifier = self.pipeline
        try:
            predictions = classifier(text)
        except Exception as e:
            raise ProviderError(
                f"Sentiment analysis failed: {e}", "inference", e
            ) from e

        return [
            SentimentResult(label=str(p["label"]), score=float(p["score"]))
            for p in predictions
        ]
