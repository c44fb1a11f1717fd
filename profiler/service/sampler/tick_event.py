from dataclasses import dataclass

from profiler.models.system_sample import SystemSample


@dataclass(frozen=True)
class TickEvent:
    """Notification handed to the per-tick callback"""
    sample: SystemSample
    elapsed_seconds: float
    progress: float  # fraction of the run duration, 0..1
    is_final: bool = False
