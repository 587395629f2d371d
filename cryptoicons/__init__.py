"""Scaffolding CLI for crypto token, wallet and system icon components."""

__version__ = "0.1.0"

__all__ = ["__version__"]
