"""Custom lpipe exceptions."""


class LpipeError(Exception):
    """Base exception for lpipe errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error


class InvalidInputError(LpipeError, ValueError):
    """Exception raised for malformed or mismatched embedding vectors.

    This typically occurs when:
    - An input is not a flat sequence of numbers
    - An input is empty or contains NaN/inf
    - The two vectors have different dimensions
    """

    pass


class DegenerateInputError(LpipeError, ValueError):
    """Exception raised when a vector has zero magnitude.

    Cosine similarity is undefined for a zero vector.
    """

    pass


class NotInitializedError(LpipeError, RuntimeError):
    """Exception raised when a provider is used before initialize()."""

    pass


class ProviderError(LpipeError):
    """Exception raised for failures surfaced by an inference provider.

    The step attribute names where the failure happened:
    "initialization", "embedding", "scoring" or "inference".
    """

    def __init__(
        self,
        message: str,
        step: str,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.step = step
