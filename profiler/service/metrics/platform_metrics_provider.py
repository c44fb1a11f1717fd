"""
Platform Metrics Provider

Host-wide CPU and memory readings behind one interface, with one
implementation per operating system family.
"""
from abc import ABC, abstractmethod

from profiler.models.memory_info import MemoryInfo


class PlatformMetricsProvider(ABC):
    """Abstract base provider.

    Implementations never raise from ``get_cpu_percent`` or
    ``get_memory_info``: a failed read yields a degraded value (0 or an
    estimate) so that sampling can continue.
    """

    # True when CPU figures are a heuristic rather than a measurement
    cpu_is_estimated: bool = False

    def __enter__(self) -> "PlatformMetricsProvider":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @abstractmethod
    def get_cpu_percent(self) -> float:
        """Overall CPU utilization in [0, 100]."""
        pass

    @abstractmethod
    def get_memory_info(self) -> MemoryInfo:
        """Total, used and available memory in MB with the used percentage."""
        pass

    def close(self) -> None:
        """Release any state held by the provider."""
        pass
