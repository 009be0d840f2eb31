"""Character scanning layer for tinymarkup.

This module provides the forward-only cursor the tokenizer scans the input
buffer with, along with the read errors it raises.
"""

from .cursor import (
    Cursor,
    DelimiterNotFound,
    ReadError,
)

__all__ = [
    "Cursor",
    "DelimiterNotFound",
    "ReadError",
]
