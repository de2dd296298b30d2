"""Model management for lpipe - handles downloading and caching of ML models."""

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path

from .config import LpipeConfig, load_config

logger = logging.getLogger(__name__)

OFFLINE_ENV_VARS = ("HF_HUB_OFFLINE", "TRANSFORMERS_OFFLINE")

# Files a snapshot must hold, besides weights, before a task can load offline
TASK_FILES: dict[str, tuple[str, ...]] = {
    "embeddings": ("config.json", "modules.json"),
    "sentiment": ("config.json",),
    "generation": ("config.json",),
}
WEIGHT_SUFFIXES = (".safetensors", ".bin")


def get_model_cache_dir() -> Path:
    """Get the huggingface cache directory for models."""
    cache_home = os.environ.get("HF_HOME", Path.home() / ".cache/huggingface")
    return Path(cache_home) / "hub"


def _snapshots(model_name: str) -> list[Path]:
    root = get_model_cache_dir() / f"models--{model_name.replace('/', '--')}"
    snapshots = root / "snapshots"
    if not snapshots.is_dir():
        return []
    return [p for p in snapshots.iterdir() if p.is_dir()]


def check_model_cached(model_name: str, task: str) -> bool:
    """Check whether a cached snapshot can serve task without the network.

    Args:
        model_name: Hub name of the model (e.g., "openai-community/gpt2")
        task: One of "embeddings", "sentiment", "generation"

    Raises:
        KeyError: If task is unknown
    """
    needed = set(TASK_FILES[task])
    for snapshot in _snapshots(model_name):
        files = {p.name for p in snapshot.iterdir()}
        if needed <= files and any(f.endswith(WEIGHT_SUFFIXES) for f in files):
            return True
    return False


def required_models(config: LpipeConfig) -> dict[str, str]:
    """Map each task to the model it is configured to use."""
    return {
        "embeddings": config.embeddings.model,
        "sentiment": config.sentiment.model,
        "generation": config.generation.model,
    }


def _download(task: str, model_name: str) -> None:
    # Import here to avoid loading at module import time
    if task == "embeddings":
        from sentence_transformers import SentenceTransformer

        model = SentenceTransformer(model_name)
        dim = model.get_sentence_embedding_dimension()
        print(f"✓ {model_name} downloaded (dimension: {dim})")
        return

    from transformers import pipeline

    hf_task = "sentiment-analysis" if task == "sentiment" else "text-generation"
    pipeline(hf_task, model=model_name)
    print(f"✓ {model_name} downloaded")


def download_models(config: LpipeConfig | None = None) -> None:
    """Download all models lpipe is configured to use.

    Shows progress and exits with status 1 if any download fails.
    """
    config = config or load_config()
    models = required_models(config)

    print("Downloading models for lpipe...")

    # Force online mode for downloading
    for var in OFFLINE_ENV_VARS:
        os.environ.pop(var, None)

    try:
        for task, model_name in models.items():
            if check_model_cached(model_name, task):
                print(f"✓ {model_name} already cached")
                continue
            print(f"{task}: {model_name} (this may take a few minutes)")
            _download(task, model_name)
        print(f"✓ Models cached at: {get_model_cache_dir()}")

    except Exception as e:
        print(f"✗ Failed to download models: {e}", file=sys.stderr)
        print("\nTroubleshooting:", file=sys.stderr)
        print("1. Check your internet connection", file=sys.stderr)
        print("2. Try setting HF_HUB_DISABLE_SYMLINKS=1", file=sys.stderr)
        print("3. Check disk space in ~/.cache/huggingface/", file=sys.stderr)
        sys.exit(1)


def configure_offline_mode(models: Mapping[str, str]) -> tuple[bool, list[str]]:
    """Configure offline mode if every task's model is cached.

    Args:
        models: Task name to model name, as returned by required_models()

    Returns:
        Tuple of (all_cached, missing_models)
        - (True, []) if models are cached and offline mode set
        - (False, [...]) if some are missing; they will be fetched on first use
    """
    missing = [
        name for task, name in models.items() if not check_model_cached(name, task)
    ]
    if missing:
        logger.debug(f"Models not cached, online mode kept: {', '.join(missing)}")
        return False, missing

    # Models are cached, use offline mode to avoid network checks
    for var in OFFLINE_ENV_VARS:
        os.environ[var] = "1"
    return True, []
