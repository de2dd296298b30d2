"""Provider abstraction for embedding backends.

This module provides a registry pattern for managing embedding providers,
allowing runtime selection of different inference backends.
"""

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .base import EmbeddingProvider

from .hf_pipeline import TransformersProvider
from .sentence_transformers import SentenceTransformerProvider

__all__ = ["ProviderRegistry", "SentenceTransformerProvider", "TransformersProvider"]


class ProviderRegistry:
    """Registry for managing embedding providers.

    This class maintains a registry of available embedding providers,
    allowing registration and retrieval by name.
    """

    _providers: ClassVar[dict[str, type["EmbeddingProvider"]]] = {}
    _instances: ClassVar[
        dict[tuple[str, str | None, str | None], "EmbeddingProvider"]
    ] = {}

    @classmethod
    def register(cls, name: str, provider_class: type["EmbeddingProvider"]) -> None:
        """Register an embedding provider.

        Args:
            name: Name to register the provider under
            provider_class: Provider class that implements EmbeddingProvider
        """
        cls._providers[name] = provider_class

    @classmethod
    def available(cls) -> list[str]:
        """Return registered provider names in registration order."""
        return list(cls._providers)

    @classmethod
    def get(cls, name: str) -> type["EmbeddingProvider"]:
        """Get a provider class by name.

        Args:
            name: Name of the provider to retrieve

        Returns:
            Provider class

        Raises:
            KeyError: If provider name not found
        """
        if name not in cls._providers:
            available = ", ".join(cls._providers.keys()) if cls._providers else "none"
            raise KeyError(
                f"Provider '{name}' not found. Available providers: {available}"
            )
        return cls._providers[name]

    @classmethod
    def get_instance(
        cls, name: str, model_name: str | None = None, device: str | None = None
    ) -> "EmbeddingProvider":
        """Get a cached provider instance.

        Creates the instance on first call for a given (name, model, device),
        returns the cached instance after. Keeps models warm in memory.

        Args:
            name: Name of the provider
            model_name: Optional model override
            device: Optional torch device

        Returns:
            Cached provider instance

        Raises:
            KeyError: If provider name not found
        """
        key = (name, model_name, device)
        if key not in cls._instances:
            provider_class = cls.get(name)
            kwargs: dict[str, str] = {}
            if model_name is not None:
                kwargs["model_name"] = model_name
            if device is not None:
                kwargs["device"] = device
            cls._instances[key] = provider_class(**kwargs)
        return cls._instances[key]


# Register providers
ProviderRegistry.register("sentence-transformers", SentenceTransformerProvider)
ProviderRegistry.register("transformers", TransformersProvider)
