"""Command-line interface for specsearch."""

from .main import cli, main

__all__ = ["cli", "main"]
