"""Shared utilities for tinymarkup.

This module provides the exception hierarchy, configuration objects, metrics
and logging helpers used across all processing layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    ParserConfig,
    TokenizationConfig,
    TreeConfig,
)
from .errors import (
    DecodeFailedError,
    InvalidAstError,
    MarkupError,
    ReaderError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import PerformanceMetrics

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "ParserConfig",
    "TokenizationConfig",
    "TreeConfig",
    "DecodeFailedError",
    "InvalidAstError",
    "MarkupError",
    "ReaderError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "PerformanceMetrics",
]
