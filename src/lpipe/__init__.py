"""lpipe - run pre-trained transformer pipelines from the command line."""

__version__ = "0.1.0"
__all__ = ["classify", "compare", "embed", "generate"]


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name in __all__:
        from . import api

        return getattr(api, name)
    raise AttributeError(f"module 'lpipe' has no attribute {name!r}")
