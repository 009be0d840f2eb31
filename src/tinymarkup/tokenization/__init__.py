"""Tokenization engine for tinymarkup.

Key Components:
    MarkupTokenizer: Single-pass tokenizer driven by a Cursor
    Token: One lexical unit with its type, name, value and offset
    TokenType: START_TAG, ATTRIBUTE, END_TAG and TEXT
"""

from .tokenizer import (
    MarkupTokenizer,
    Token,
    TokenType,
    split_attribute,
    tokenize,
)

__all__ = [
    "MarkupTokenizer",
    "Token",
    "TokenType",
    "split_attribute",
    "tokenize",
]
