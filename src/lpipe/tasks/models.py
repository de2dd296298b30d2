"""Task result models with validation."""

from dataclasses import asdict, dataclass


@dataclass
class SentimentResult:
    """Sentiment label for a text.

    Args:
        label: Predicted class (e.g., "POSITIVE", "NEGATIVE")
        score: Model confidence for the label (0.0-1.0)
    """

    label: str
    score: float

    def __post_init__(self) -> None:
        """Validate sentiment result."""
        if not self.label or not self.label.strip():
            raise ValueError("label cannot be empty")
        if not 0.0 <= self.score <= 1.0:
            raise ValueError("score must be between 0.0 and 1.0")

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class GeneratedText:
    """One text continuation produced by a generation model."""

    generated_text: str

    def to_dict(self) -> dict:
        return asdict(self)
