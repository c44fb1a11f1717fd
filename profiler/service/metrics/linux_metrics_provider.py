"""
Linux Metrics Provider

Reads /proc/stat and /proc/meminfo directly. CPU usage is the busy share of
the jiffies elapsed between two consecutive reads.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from profiler.models.memory_info import MemoryInfo
from profiler.service.metrics.platform_metrics_provider import PlatformMetricsProvider
from profiler.util.cal_utils import KB_PER_MB, clamp_percent, usage_percent
from profiler.util.log_config import setup_logger

logger = setup_logger(__name__)

DEFAULT_PROC_ROOT = Path("/proc")


@dataclass
class CpuMonitorState:
    """Jiffie counters from the previous /proc/stat read"""
    last_total_jiffies: float
    last_idle_jiffies: float


def parse_cpu_line(stat_text: str) -> Optional[Tuple[float, float]]:
    """
    Extract (total, idle) jiffies from the aggregate ``cpu`` line.

    Total is user + nice + system + idle + iowait; idle is idle + iowait.
    iowait is optional (treated as 0 when missing).

    Returns:
        (total, idle) or None when the line is missing or malformed
    """
    cpu_line = next((line for line in stat_text.splitlines() if line.startswith("cpu ")), None)
    if cpu_line is None:
        return None

    parts = cpu_line.split()
    if len(parts) < 5:
        return None

    try:
        user, nice, system, idle = (float(v) for v in parts[1:5])
        iowait = float(parts[5]) if len(parts) > 5 else 0.0
    except ValueError:
        return None

    total = user + nice + system + idle + iowait
    return total, idle + iowait


def parse_meminfo(meminfo_text: str) -> Dict[str, int]:
    """Parse ``Key:   value kB`` lines into a dict of integer values."""
    values: Dict[str, int] = {}
    for line in meminfo_text.splitlines():
        key, sep, rest = line.partition(":")
        if not sep:
            continue
        fields = rest.split()
        if not fields:
            continue
        try:
            values[key.strip()] = int(fields[0])
        except ValueError:
            continue
    return values


class LinuxMetricsProvider(PlatformMetricsProvider):
    """CPU and memory from procfs"""

    def __init__(self, proc_root: Union[str, Path] = DEFAULT_PROC_ROOT):
        """
        Args:
            proc_root: procfs mount point (default: /proc)
        """
        self.proc_root = Path(proc_root)
        self.state: Optional[CpuMonitorState] = None

    def get_cpu_percent(self) -> float:
        """
        Busy percentage since the previous call.

        The first call only records a baseline and returns 0. Two reads with
        no elapsed jiffies also return 0.
        """
        try:
            counters = parse_cpu_line((self.proc_root / "stat").read_text())
        except (OSError, ValueError) as e:
            logger.debug(f"Cannot read {self.proc_root / 'stat'}: {e}")
            return 0.0

        if counters is None:
            return 0.0

        total, idle = counters
        previous = self.state
        self.state = CpuMonitorState(last_total_jiffies=total, last_idle_jiffies=idle)

        if previous is None:
            return 0.0

        total_delta = total - previous.last_total_jiffies
        idle_delta = idle - previous.last_idle_jiffies
        if total_delta == 0:
            return 0.0

        return clamp_percent(round((1.0 - idle_delta / total_delta) * 100, 1))

    def get_memory_info(self) -> MemoryInfo:
        try:
            values = parse_meminfo((self.proc_root / "meminfo").read_text())
        except (OSError, ValueError) as e:
            logger.debug(f"Cannot read {self.proc_root / 'meminfo'}: {e}")
            return MemoryInfo.empty()

        total_kb = values.get("MemTotal", 0)
        available_kb = values.get("MemAvailable", 0)
        used_kb = total_kb - available_kb

        return MemoryInfo(
            total_mb=total_kb / KB_PER_MB,
            used_mb=used_kb / KB_PER_MB,
            available_mb=available_kb / KB_PER_MB,
            used_percent=usage_percent(used_kb, total_kb),
        )

    def close(self) -> None:
        self.state = None
