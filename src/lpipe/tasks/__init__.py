"""Sentiment analysis and text generation tasks."""

from .generation import TextGenerator
from .models import GeneratedText, SentimentResult
from .sentiment import SentimentClassifier

__all__ = ["GeneratedText", "SentimentClassifier", "SentimentResult", "TextGenerator"]
