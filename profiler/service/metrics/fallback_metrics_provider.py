import psutil

from profiler.models.memory_info import MemoryInfo
from profiler.service.metrics.platform_metrics_provider import PlatformMetricsProvider
from profiler.util.cal_utils import BYTES_PER_MB, clamp_percent
from profiler.util.log_config import setup_logger

logger = setup_logger(__name__)

# Active processes per logical CPU that count as a fully busy host
PROCESSES_PER_CPU = 10


def estimate_cpu_from_processes() -> float:
    """
    Approximate CPU load from the number of processes with live threads.

    This is NOT a measurement: it is ``active / (cpu_count * 10)`` expressed
    as a percentage and capped at 100. Used where no CPU counter is available.
    """
    try:
        active = 0
        for proc in psutil.process_iter():
            try:
                if proc.num_threads() > 0:
                    active += 1
            except (psutil.Error, OSError):
                continue

        cpu_count = psutil.cpu_count(logical=True) or 1
        return clamp_percent(min(100.0, round(active / (cpu_count * PROCESSES_PER_CPU) * 100, 1)))
    except Exception as e:
        logger.debug(f"CPU estimate failed: {e}")
        return 0.0


def fallback_memory_info() -> MemoryInfo:
    """
    Report the total memory visible to the runtime as both total and available.

    Used and percent stay 0 because no better source is assumed.
    """
    try:
        total_mb = psutil.virtual_memory().total / BYTES_PER_MB
    except Exception as e:
        logger.debug(f"Memory total unavailable: {e}")
        return MemoryInfo.empty()
    return MemoryInfo(total_mb, 0.0, total_mb, 0.0)


class FallbackMetricsProvider(PlatformMetricsProvider):
    """Provider for platforms without a dedicated implementation.

    CPU readings are an estimate (see ``estimate_cpu_from_processes``).
    """

    cpu_is_estimated = True

    def get_cpu_percent(self) -> float:
        return estimate_cpu_from_processes()

    def get_memory_info(self) -> MemoryInfo:
        return fallback_memory_info()
