"""Performance profiling tools for tinymarkup.

Times the tokenization, tree building and serialization stages of a parse
separately and tracks resident memory around each stage with psutil.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import psutil

from tinymarkup.api import MarkupParser
from tinymarkup.shared import ParserConfig, get_logger

STAGE_TOKENIZATION = "tokenization"
STAGE_TREE_BUILDING = "tree_building"
STAGE_SERIALIZATION = "serialization"


@dataclass
class StagePerformance:
    """Performance metrics for one pipeline stage."""

    stage_name: str
    start_time: float
    end_time: float = 0.0
    memory_start: int = 0  # bytes
    memory_end: int = 0  # bytes
    operations_count: int = 0

    @property
    def duration_ms(self) -> float:
        return (self.end_time - self.start_time) * 1000

    @property
    def memory_delta(self) -> int:
        return self.memory_end - self.memory_start

    @property
    def ops_per_second(self) -> float:
        duration_s = self.end_time - self.start_time
        return self.operations_count / duration_s if duration_s > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage_name": self.stage_name,
            "duration_ms": self.duration_ms,
            "memory_delta": self.memory_delta,
            "operations_count": self.operations_count,
            "ops_per_second": self.ops_per_second,
        }


@dataclass
class ProfilingSession:
    """Container for one profiled run through the pipeline."""

    session_id: str
    start_time: float
    end_time: float = 0.0
    input_size: int = 0  # characters
    stages: List[StagePerformance] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_duration_ms(self) -> float:
        return (self.end_time - self.start_time) * 1000

    def stage(self, stage_name: str) -> Optional[StagePerformance]:
        for stage in self.stages:
            if stage.stage_name == stage_name:
                return stage
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "input_size": self.input_size,
            "total_duration_ms": self.total_duration_ms,
            "metadata": dict(self.metadata),
            "stages": [stage.to_dict() for stage in self.stages],
        }


class StageProfiler:
    """Context manager recording one stage into a session."""

    def __init__(
        self, profiler: "PerformanceProfiler", session: ProfilingSession, stage_name: str
    ) -> None:
        self.profiler = profiler
        self.session = session
        self.stage_name = stage_name
        self.stage_perf: Optional[StagePerformance] = None

    def __enter__(self) -> StagePerformance:
        self.stage_perf = StagePerformance(
            stage_name=self.stage_name,
            start_time=time.time(),
            memory_start=self.profiler.memory_usage(),
        )
        return self.stage_perf

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.stage_perf is None:
            return
        self.stage_perf.end_time = time.time()
        self.stage_perf.memory_end = self.profiler.memory_usage()
        self.profiler.add_stage_performance(self.session, self.stage_perf)


class PerformanceProfiler:
    """Stage-level profiler for the parsing pipeline.

    Examples:
        >>> profiler = PerformanceProfiler()
        >>> session = profiler.profile('<p>Hi</p>')
        >>> [stage.stage_name for stage in session.stages]
        ['tokenization', 'tree_building', 'serialization']
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        enable_memory_tracking: bool = True
    ) -> None:
        """Initialize performance profiler.

        Args:
            config: Parser configuration used for profiled runs
            enable_memory_tracking: Whether to sample process RSS around stages
        """
        self.parser = MarkupParser(config)
        self.enable_memory_tracking = enable_memory_tracking
        self.sessions: List[ProfilingSession] = []
        self.logger = get_logger(__name__, None, "performance_profiler")
        self._process = psutil.Process() if enable_memory_tracking else None

    def memory_usage(self) -> int:
        """Current resident set size in bytes, 0 when tracking is off."""
        if self._process is None:
            return 0
        return self._process.memory_info().rss

    def start_session(self, session_id: str, input_size: int = 0) -> ProfilingSession:
        session = ProfilingSession(
            session_id=session_id,
            start_time=time.time(),
            input_size=input_size,
        )
        self.logger.debug(
            "Started profiling session",
            extra={"session_id": session_id, "input_size": input_size},
        )
        return session

    def end_session(self, session: ProfilingSession) -> None:
        session.end_time = time.time()
        self.sessions.append(session)
        self.logger.debug(
            "Ended profiling session",
            extra={
                "session_id": session.session_id,
                "duration_ms": session.total_duration_ms,
                "stage_count": len(session.stages),
            },
        )

    def profile_stage(self, session: ProfilingSession, stage_name: str) -> StageProfiler:
        return StageProfiler(self, session, stage_name)

    def add_stage_performance(
        self, session: ProfilingSession, stage_perf: StagePerformance
    ) -> None:
        session.stages.append(stage_perf)

    def profile(self, data: str, session_id: Optional[str] = None) -> ProfilingSession:
        """Run ``data`` through every stage and record a session.

        Parse errors propagate; the partial session is not stored.
        """
        session = self.start_session(
            session_id or f"session_{len(self.sessions) + 1}", len(data)
        )

        with self.profile_stage(session, STAGE_TOKENIZATION) as stage:
            tokens = self.parser.tokenize(data)
            stage.operations_count = len(tokens)

        with self.profile_stage(session, STAGE_TREE_BUILDING) as stage:
            forest = self.parser.build_tree(tokens)
            stage.operations_count = self.parser.elements_built

        with self.profile_stage(session, STAGE_SERIALIZATION) as stage:
            output = self.parser.serialize(forest)
            stage.operations_count = len(output)

        session.metadata.update({
            "token_count": len(tokens),
            "element_count": self.parser.elements_built,
            "root_count": len(forest),
            "memory_tracking": self.enable_memory_tracking,
        })
        self.end_session(session)
        return session

    def clear_sessions(self) -> None:
        self.sessions.clear()
