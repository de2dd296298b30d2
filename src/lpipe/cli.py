"""Typer CLI definition for lpipe."""

import asyncio
import json
import logging
import sys
from typing import NoReturn

import typer

from .config import load_config
from .core import (
    classify_sentiment,
    compare_phrases,
    embed_text,
    generate_text,
    run_similarity_demo,
)
from .errors import NotInitializedError, ProviderError
from .models_manager import configure_offline_mode, download_models
from .similarity.calculator import PhraseComparison

app = typer.Typer(help="Run pre-trained transformer pipelines from the command line")

_state = {"debug": False}


def process_text_input(text: str | None) -> str:
    """Process text input and return the text to use.

    Falls back to stdin when no argument is given and stdin is piped.

    Args:
        text: Optional text input from CLI argument

    Returns:
        The text to process

    Raises:
        ValueError: If no text is provided
    """
    if text is None and not sys.stdin.isatty():
        text = sys.stdin.read().strip()

    if text is None:
        raise ValueError("No text provided")

    return text


def prepare_models(task: str, model_name: str) -> None:
    """Switch Hugging Face libraries to offline mode when the model is cached."""
    cached, missing = configure_offline_mode({task: model_name})
    if not cached:
        logging.getLogger(__name__).debug(
            f"Will download on first use: {', '.join(missing)}"
        )


def format_comparison(result: PhraseComparison) -> str:
    """Render a comparison the way the demo prints it."""
    return (
        f'Comparing:\n"{result.phrase1}"\nwith:\n"{result.phrase2}"\n\n'
        f"Similarity score: {result.score:.4f}\n"
        f"Interpretation: {result.label}\n"
    )


def fail(e: Exception, debug: bool) -> NoReturn:
    """Report an error on stderr and exit with status 1."""
    if isinstance(e, ProviderError):
        detail = f"Provider error during {e.step}"
        message = f"Error: {e}"
    elif isinstance(e, NotInitializedError):
        detail = "Provider not initialized"
        message = f"Error: {e}"
    elif isinstance(e, KeyError):
        detail = "Unknown provider"
        message = f"Error: {e.args[0] if e.args else e}"
    elif isinstance(e, ValueError):
        detail = "Input error"
        message = f"Error: {e}"
    else:
        detail = "Unexpected error"
        message = "Error: An unexpected error occurred"

    if debug:
        typer.echo(f"Debug - {detail}: {e!r}", err=True)
    else:
        typer.echo(message, err=True)
    raise typer.Exit(1) from None


@app.callback()
def configure(
    debug: bool = typer.Option(
        False, "--debug", help="Show verbose error messages and model activity"
    ),
) -> None:
    """Run pre-trained transformer pipelines from the command line."""
    # Configure logging for debug mode
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    _state["debug"] = debug


@app.command()
def embed(
    text: str | None = typer.Argument(None, help="Text to embed (stdin if omitted)"),
    provider: str | None = typer.Option(
        None, "-p", "--provider", help="Embedding provider (from config if omitted)"
    ),
    model: str | None = typer.Option(
        None, "-m", "--model", help="Embedding model (from config if omitted)"
    ),
    pooling: str | None = typer.Option(
        None, "--pooling", help="Token pooling: mean or cls (from config if omitted)"
    ),
    no_normalize: bool = typer.Option(
        False, "--no-normalize", help="Do not L2-normalize the embedding"
    ),
) -> None:
    """Print the embedding of a text as a JSON array."""
    debug = _state["debug"]
    try:
        input_text = process_text_input(text)
        prepare_models("embeddings", model or load_config().embeddings.model)
        embedding = asyncio.run(
            embed_text(
                input_text,
                provider=provider,
                model=model,
                pooling=pooling,
                normalize=False if no_normalize else None,
            )
        )
    except Exception as e:
        fail(e, debug)

    typer.echo(json.dumps([float(x) for x in embedding]))


@app.command()
def sentiment(
    text: str | None = typer.Argument(
        None, help="Text to classify (stdin if omitted)"
    ),
    model: str | None = typer.Option(
        None, "-m", "--model", help="Sentiment model (from config if omitted)"
    ),
) -> None:
    """Classify the sentiment of a text."""
    debug = _state["debug"]
    try:
        input_text = process_text_input(text)
        prepare_models("sentiment", model or load_config().sentiment.model)
        results = asyncio.run(classify_sentiment(input_text, model=model))
    except Exception as e:
        fail(e, debug)

    typer.echo(json.dumps([r.to_dict() for r in results]))


@app.command()
def similarity(
    phrase1: str = typer.Argument(..., help="First phrase"),
    phrase2: str = typer.Argument(..., help="Second phrase"),
    provider: str | None = typer.Option(
        None, "-p", "--provider", help="Embedding provider (from config if omitted)"
    ),
    model: str | None = typer.Option(
        None, "-m", "--model", help="Embedding model (from config if omitted)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Compare two phrases by semantic similarity."""
    debug = _state["debug"]
    try:
        prepare_models("embeddings", model or load_config().embeddings.model)
        result = asyncio.run(
            compare_phrases(phrase1, phrase2, provider=provider, model=model)
        )
    except Exception as e:
        fail(e, debug)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        typer.echo(format_comparison(result))


@app.command()
def demo(
    provider: str | None = typer.Option(
        None, "-p", "--provider", help="Embedding provider (from config if omitted)"
    ),
    model: str | None = typer.Option(
        None, "-m", "--model", help="Embedding model (from config if omitted)"
    ),
) -> None:
    """Compare the built-in example phrase pairs."""
    debug = _state["debug"]
    try:
        prepare_models("embeddings", model or load_config().embeddings.model)
        results = asyncio.run(run_similarity_demo(provider=provider, model=model))
    except Exception as e:
        fail(e, debug)

    typer.echo("Analyzing semantic similarities...\n")
    for result in results:
        typer.echo(format_comparison(result))


@app.command()
def generate(
    prompt: str | None = typer.Argument(
        None, help="Prompt to continue (stdin if omitted)"
    ),
    model: str | None = typer.Option(
        None, "-m", "--model", help="Generation model (from config if omitted)"
    ),
    max_length: int | None = typer.Option(
        None, "--max-length", help="Maximum length in tokens, prompt included"
    ),
) -> None:
    """Continue a prompt and print the result as JSON."""
    debug = _state["debug"]
    try:
        input_text = process_text_input(prompt)
        prepare_models("generation", model or load_config().generation.model)
        results = asyncio.run(
            generate_text(input_text, model=model, max_length=max_length)
        )
    except Exception as e:
        fail(e, debug)

    typer.echo(json.dumps([r.to_dict() for r in results], indent=2))


@app.command("download-models")
def download_models_command() -> None:
    """Download the configured models and exit."""
    download_models()
