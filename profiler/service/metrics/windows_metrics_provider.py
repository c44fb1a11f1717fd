import time

import psutil

from profiler.models.memory_info import MemoryInfo
from profiler.service.metrics.fallback_metrics_provider import (
    estimate_cpu_from_processes,
    fallback_memory_info,
)
from profiler.service.metrics.platform_metrics_provider import PlatformMetricsProvider
from profiler.util.cal_utils import BYTES_PER_MB, clamp_percent, usage_percent
from profiler.util.log_config import setup_logger

logger = setup_logger(__name__)

DEFAULT_WARMUP_SECONDS = 0.1


class WindowsMetricsProvider(PlatformMetricsProvider):
    """CPU from the system processor-time counters, memory from the OS memory status"""

    def __init__(self, warmup_seconds: float = DEFAULT_WARMUP_SECONDS):
        """
        Prime the processor-time counter.

        The first counter read has no previous value to diff against and is
        discarded.

        Args:
            warmup_seconds: Pause after the priming read
        """
        self.counter_available = True
        try:
            psutil.cpu_percent(interval=None)
        except Exception as e:
            logger.debug(f"Processor time counter unavailable: {e}")
            self.counter_available = False

        if self.counter_available and warmup_seconds > 0:
            time.sleep(warmup_seconds)

    def get_cpu_percent(self) -> float:
        if not self.counter_available:
            return estimate_cpu_from_processes()

        try:
            return clamp_percent(round(psutil.cpu_percent(interval=None), 1))
        except Exception as e:
            logger.debug(f"Processor time counter read failed: {e}")
            return estimate_cpu_from_processes()

    def get_memory_info(self) -> MemoryInfo:
        try:
            vm = psutil.virtual_memory()
            total_mb = vm.total / BYTES_PER_MB
            available_mb = vm.available / BYTES_PER_MB
        except Exception as e:
            logger.debug(f"Memory counters unavailable: {e}")
            return fallback_memory_info()

        used_mb = total_mb - available_mb
        return MemoryInfo(
            total_mb=total_mb,
            used_mb=used_mb,
            available_mb=available_mb,
            used_percent=usage_percent(used_mb, total_mb),
        )
