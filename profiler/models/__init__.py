"""Models for profiler data structures."""

from .memory_info import MemoryInfo
from .process_metric import ProcessMetric
from .run_metadata import RunMetadata
from .run_statistics import ProcessRollup, RunStatistics
from .system_sample import SystemSample

__all__ = [
    "MemoryInfo",
    "ProcessMetric",
    "ProcessRollup",
    "RunMetadata",
    "RunStatistics",
    "SystemSample",
]
