from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessMetric:
    """Per-process resource usage captured at enumeration time"""
    pid: int
    name: str
    working_set_mb: float  # Resident Set Size (physical memory)
    private_memory_mb: float
    thread_count: int
    # Cumulative CPU seconds (user + system). Captured but not aggregated or reported.
    total_processor_time: float = 0.0
