"""Entry point for running lpipe as a module."""

from .cli import app


def main() -> None:
    """Main entry point for the lpipe CLI application."""
    app()


if __name__ == "__main__":
    main()
