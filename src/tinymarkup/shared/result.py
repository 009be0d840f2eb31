"""Performance metrics collected by the parsing pipeline."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class PerformanceMetrics:
    """Performance metrics for one tokenize/parse/serialize call."""

    processing_time_ms: float = 0.0
    memory_used_bytes: int = 0  # RSS growth during the call
    characters_processed: int = 0
    tokens_generated: int = 0
    elements_built: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def tokens_per_second(self) -> float:
        """Calculate tokens generated per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.tokens_generated * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        return {
            "processing_time_ms": self.processing_time_ms,
            "memory_used_bytes": self.memory_used_bytes,
            "characters_processed": self.characters_processed,
            "tokens_generated": self.tokens_generated,
            "elements_built": self.elements_built,
            "characters_per_second": self.characters_per_second,
            "tokens_per_second": self.tokens_per_second,
        }
