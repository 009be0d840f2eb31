"""Command-line interface for tinymarkup."""

from .main import main

__all__ = ["main"]
