from dataclasses import dataclass, field
from typing import List

from profiler.util.cal_utils import StatSummary


@dataclass(frozen=True)
class ProcessRollup:
    """Statistics for every process sharing one name across a run"""
    name: str
    avg_working_set_mb: float
    max_working_set_mb: float
    avg_thread_count: float


@dataclass
class RunStatistics:
    """Aggregated statistics over all samples of a run"""
    sample_count: int
    cpu: StatSummary
    memory: StatSummary
    process_rollups: List[ProcessRollup] = field(default_factory=list)
