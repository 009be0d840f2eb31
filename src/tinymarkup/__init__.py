"""tinymarkup.

A minimal, strict markup parser: text is tokenized into a flat token stream,
reduced into a forest of elements, and can be serialized back into markup.

Progressive API Disclosure:
- Level 1: Simple functions - tokenize(), parse(), serialize()
- Level 2: Configured parser - MarkupParser with a ParserConfig
"""

__version__ = "0.1.0"
__author__ = "tinymarkup developers"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Configured parser
from .api import MarkupParser, parse, parse_bytes, parse_file, serialize, tokenize

# Errors and configuration
from .shared import (
    DecodeFailedError,
    InvalidAstError,
    MarkupError,
    ParserConfig,
    ReaderError,
)

# Data model
from .tokenization import Token, TokenType
from .tree import Attribute, Element

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "tokenize",
    "parse",
    "parse_bytes",
    "parse_file",
    "serialize",

    # Level 2: Configured parser
    "MarkupParser",
    "ParserConfig",

    # Data model
    "Attribute",
    "Element",
    "Token",
    "TokenType",

    # Errors
    "MarkupError",
    "ReaderError",
    "InvalidAstError",
    "DecodeFailedError",
]
