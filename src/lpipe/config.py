"""Configuration management for lpipe.

Loads configuration from ~/.config/lpipe/config.toml.
Priority chain: CLI flags > env vars > config file > built-in defaults.
"""

import logging
import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

from .embeddings.models import POOLING_MODES

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "lpipe"
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_EMBEDDING_PROVIDER = "sentence-transformers"
DEFAULT_EMBEDDING_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
DEFAULT_SENTIMENT_MODEL = "distilbert/distilbert-base-uncased-finetuned-sst-2-english"
DEFAULT_GENERATION_MODEL = "openai-community/gpt2"
DEFAULT_MAX_LENGTH = 30

DEFAULT_CONFIG = """\
# lpipe configuration

[embeddings]
# Provider: "sentence-transformers" or "transformers" (feature-extraction pipeline)
provider = "sentence-transformers"
model = "sentence-transformers/all-MiniLM-L6-v2"

# Token pooling: "mean" or "cls"
pooling = "mean"

# L2-normalize embeddings
normalize = true

[sentiment]
model = "distilbert/distilbert-base-uncased-finetuned-sst-2-english"

[generation]
model = "openai-community/gpt2"
max_length = 30

[runtime]
# Compute device: "auto", "mps" (Apple Silicon), "cuda", "cpu"
device = "auto"
"""


@dataclass(frozen=True)
class EmbeddingsConfig:
    """Embedding provider configuration."""

    provider: str
    model: str
    pooling: str
    normalize: bool


@dataclass(frozen=True)
class SentimentConfig:
    """Sentiment classifier configuration."""

    model: str


@dataclass(frozen=True)
class GenerationConfig:
    """Text generation configuration."""

    model: str
    max_length: int


@dataclass(frozen=True)
class RuntimeConfig:
    """Runtime configuration."""

    device: str


@dataclass(frozen=True)
class LpipeConfig:
    """Top-level lpipe configuration."""

    embeddings: EmbeddingsConfig
    sentiment: SentimentConfig
    generation: GenerationConfig
    runtime: RuntimeConfig


_cached_config: LpipeConfig | None = None


def generate_config(path: Path = CONFIG_PATH) -> Path:
    """Generate default config file at ~/.config/lpipe/config.toml."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG)
    return path


def reset_config_cache() -> None:
    """Forget the cached configuration so the next load re-reads it."""
    global _cached_config
    _cached_config = None


def _reject(config_path: Path, message: str) -> NoReturn:
    print(message, file=sys.stderr)
    print(f"Edit {config_path} or delete it to regenerate.", file=sys.stderr)
    raise SystemExit(1)


def load_config(path: Path | None = None) -> LpipeConfig:
    """Load configuration from config file with env var overrides.

    On first run, writes the default config file and continues with
    its values.

    Args:
        path: Optional config file path (defaults to CONFIG_PATH)

    Returns:
        Loaded and validated LpipeConfig.

    Raises:
        SystemExit: If the config file cannot be parsed or is invalid.
    """
    global _cached_config
    if _cached_config is not None and path is None:
        return _cached_config

    config_path = path or CONFIG_PATH

    if not config_path.exists():
        try:
            generate_config(config_path)
            print(f"No config found. Generated {config_path}", file=sys.stderr)
        except OSError as e:
            logger.warning(f"Could not write default config to {config_path}: {e}")
        data: dict = tomllib.loads(DEFAULT_CONFIG)
    else:
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            _reject(config_path, f"Invalid config file {config_path}: {e}")

    embeddings = data.get("embeddings", {})
    sentiment = data.get("sentiment", {})
    generation = data.get("generation", {})
    runtime = data.get("runtime", {})

    max_length = generation.get("max_length", DEFAULT_MAX_LENGTH)
    # bool is an int subclass, so "max_length = true" must be rejected explicitly
    if (
        isinstance(max_length, bool)
        or not isinstance(max_length, int)
        or max_length < 1
    ):
        _reject(
            config_path,
            f"generation.max_length must be a positive integer, got {max_length!r}",
        )

    pooling = embeddings.get("pooling", "mean")
    if pooling not in POOLING_MODES:
        _reject(
            config_path,
            f"embeddings.pooling must be one of {', '.join(POOLING_MODES)}, "
            f"got {pooling!r}",
        )

    normalize = embeddings.get("normalize", True)
    if not isinstance(normalize, bool):
        _reject(
            config_path,
            f"embeddings.normalize must be true or false, got {normalize!r}",
        )

    # Env vars override config file values
    config = LpipeConfig(
        embeddings=EmbeddingsConfig(
            provider=os.getenv(
                "LPIPE_EMBEDDING_PROVIDER",
                embeddings.get("provider", DEFAULT_EMBEDDING_PROVIDER),
            ),
            model=os.getenv(
                "LPIPE_EMBEDDING_MODEL",
                embeddings.get("model", DEFAULT_EMBEDDING_MODEL),
            ),
            pooling=pooling,
            normalize=normalize,
        ),
        sentiment=SentimentConfig(
            model=os.getenv(
                "LPIPE_SENTIMENT_MODEL",
                sentiment.get("model", DEFAULT_SENTIMENT_MODEL),
            ),
        ),
        generation=GenerationConfig(
            model=os.getenv(
                "LPIPE_GENERATION_MODEL",
                generation.get("model", DEFAULT_GENERATION_MODEL),
            ),
            max_length=max_length,
        ),
        runtime=RuntimeConfig(
            device=os.getenv("LPIPE_DEVICE", runtime.get("device", "auto")),
        ),
    )

    if path is None:
        _cached_config = config
    return config


def resolve_device(device: str) -> str:
    """Resolve a configured compute device.

    Config value 'auto' selects the best available device.
    Explicit values ('mps', 'cuda', 'cpu') are passed through.
    """
    if device != "auto":
        return device

    import torch

    if torch.cuda.is_available():
        return "cuda"
    if torch.backends.mps.is_available():
        return "mps"
    return "cpu"
