"""Developer tools for tinymarkup."""

from .profiling import PerformanceProfiler, ProfilingSession, StagePerformance

__all__ = [
    "PerformanceProfiler",
    "ProfilingSession",
    "StagePerformance",
]
