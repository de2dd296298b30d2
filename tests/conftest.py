"""Pytest configuration and fixtures for lpipe tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from lpipe import config as config_module
from lpipe.providers import ProviderRegistry
from test_helpers import FakeProvider

LPIPE_ENV_VARS = (
    "LPIPE_EMBEDDING_PROVIDER",
    "LPIPE_EMBEDDING_MODEL",
    "LPIPE_SENTIMENT_MODEL",
    "LPIPE_GENERATION_MODEL",
    "LPIPE_DEVICE",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch) -> Generator[Path]:
    """Point lpipe at a throwaway config file and a CPU device for every test."""
    config_path = tmp_path / "lpipe" / "config.toml"
    monkeypatch.setattr(config_module, "CONFIG_PATH", config_path)
    for var in LPIPE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    # Keeps resolve_device() from importing torch
    monkeypatch.setenv("LPIPE_DEVICE", "cpu")
    monkeypatch.setenv("HF_HOME", str(tmp_path / "hf"))
    config_module.reset_config_cache()
    ProviderRegistry._instances.clear()

    yield config_path

    config_module.reset_config_cache()
    ProviderRegistry._instances.clear()


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provider with vectors for a handful of phrases."""
    return FakeProvider(
        vectors={
            "I love programming": [1.0, 0.0, 0.0],
            "I enjoy writing code": [0.8, 0.6, 0.0],
            "The weather is nice today": [0.0, 1.0, 0.0],
            "It's a beautiful sunny day": [0.0, 0.95, 0.312],
            "The cat is sleeping": [0.0, 0.0, 1.0],
            "The dog is barking": [1.0, 0.0, 0.2],
            "zero": [0.0, 0.0, 0.0],
            "short": [1.0, 0.0],
        }
    )
