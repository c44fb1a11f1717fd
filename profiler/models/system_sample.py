"""Point-in-time host measurement."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Tuple

from profiler.models.memory_info import MemoryInfo
from profiler.models.process_metric import ProcessMetric
from profiler.util.cal_utils import clamp_percent


@dataclass(frozen=True)
class SystemSample:
    """
    One sample of host CPU, memory and the process list.

    ``processes`` is ordered descending by working set. Build instances with
    :meth:`create`, which clamps the percentages and sorts the processes.
    """
    sequence: int
    timestamp: datetime
    cpu_percent: float
    total_memory_mb: float
    used_memory_mb: float
    available_memory_mb: float
    memory_percent: float
    processes: Tuple[ProcessMetric, ...] = field(default_factory=tuple)

    @classmethod
    def create(
        cls,
        sequence: int,
        timestamp: datetime,
        cpu_percent: float,
        memory: MemoryInfo,
        processes: Iterable[ProcessMetric] = (),
    ) -> "SystemSample":
        # sorted() is stable, so equal working sets keep enumeration order
        ordered = tuple(sorted(processes, key=lambda p: p.working_set_mb, reverse=True))
        return cls(
            sequence=sequence,
            timestamp=timestamp,
            cpu_percent=clamp_percent(cpu_percent),
            total_memory_mb=memory.total_mb,
            used_memory_mb=memory.used_mb,
            available_memory_mb=memory.available_mb,
            memory_percent=clamp_percent(memory.used_percent),
            processes=ordered,
        )

    def top_processes(self, count: int) -> Tuple[ProcessMetric, ...]:
        return self.processes[:count]
