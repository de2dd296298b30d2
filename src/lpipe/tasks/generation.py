"""Text continuation using a transformers text-generation pipeline."""

import logging
from typing import Any

from ..config import DEFAULT_GENERATION_MODEL, DEFAULT_MAX_LENGTH
from ..errors import ProviderError
from .models import GeneratedText

logger = logging.getLogger(__name__)


class TextGenerator:
    """Continue a prompt with a causal language model (gpt2 by default)."""

    def __init__(
        self, model_name: str = DEFAULT_GENERATION_MODEL, device: str | None = None
    ) -> None:
        self.model_name = model_name
        self.device = device
        self._pipeline: Any = None

    @property
    def pipeline(self) -> Any:
        """Lazy-load the text-generation pipeline.

        Raises:
            ProviderError: If the model fails to load (step="initialization")
        """
        if self._pipeline is None:
            logger.debug(f"Loading generation model {self.model_name}")
            try:
                from transformers import pipeline

                self._pipeline = pipeline(
                    "text-generation", model=self.model_name, device=self.device
                )
            except Exception as e:
                raise ProviderError(
                    f"Failed to load generation model {self.model_name}: {e}",
                    "initialization",
                    e,
                ) from e
        return self._pipeline

    def generate(
        self, prompt: str, max_length: int = DEFAULT_MAX_LENGTH
    ) -> list[GeneratedText]:
        """Generate continuations of prompt.

        Args:
            prompt: Text to continue
            max_length: Maximum length in tokens, prompt included

        Returns:
            List of GeneratedText (prompt followed by its continuation)

        Raises:
            ValueError: If prompt is empty or max_length is not positive
            ProviderError: If the model fails to load or run
        """
        if not prompt or not prompt.strip():
            raise ValueError("Prompt cannot be empty")
        if max_length < 1:
            raise ValueError("max_length must be a positive integer")

        generator = self.pipeline
        try:
            outputs = generator(prompt, max_length=max_length)
        except Exception as e:
            raise ProviderError(f"Text generation failed: {e}", "inference", e) from e

        return [GeneratedText(generated_text=str(o["generated_text"])) for o in outputs]
