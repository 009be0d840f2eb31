"""Public parsing API for tinymarkup."""

from .parser import (
    MarkupParser,
    parse,
    parse_bytes,
    parse_file,
    serialize,
    tokenize,
)

__all__ = [
    "MarkupParser",
    "parse",
    "parse_bytes",
    "parse_file",
    "serialize",
    "tokenize",
]
