"""
Process Snapshotter Module

Enumerates the processes running on the host and captures per-process memory
and thread metrics. Process lists are racy: a process may exit or deny access
between enumeration and read, so unreadable processes are skipped.
"""
from typing import List, Optional

import psutil

from profiler.models.process_metric import ProcessMetric
from profiler.util.cal_utils import BYTES_PER_MB
from profiler.util.log_config import setup_logger

logger = setup_logger(__name__)

# Errors that mean "this process can't be read right now"
PROCESS_READ_ERRORS = (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess, OSError)


def private_memory_bytes(mem_info) -> int:
    """
    Private (non-shared) memory of a process.

    Windows reports ``private`` directly; on Linux the closest figure is
    ``data`` (VmData). Platforms exposing neither report 0.
    """
    for attr in ("private", "data"):
        value = getattr(mem_info, attr, None)
        if value is not None:
            return value
    return 0


def processor_time_seconds(proc: psutil.Process) -> float:
    """Cumulative user + system CPU seconds, or 0 when they can't be read."""
    try:
        times = proc.cpu_times()
        return float(times.user + times.system)
    except PROCESS_READ_ERRORS:
        return 0.0


class ProcessSnapshotter:
    """Capture a snapshot of all running processes"""

    def snapshot(self) -> List[ProcessMetric]:
        """
        Read every running process.

        Returns:
            ProcessMetric list sorted descending by working set (ties keep
            enumeration order). Empty if the process table itself can't be read.
        """
        metrics: List[ProcessMetric] = []

        try:
            processes = list(psutil.process_iter())
        except Exception as e:
            logger.debug(f"Process enumeration failed: {e}")
            return metrics

        for proc in processes:
            metric = self.read_process(proc)
            if metric is not None:
                metrics.append(metric)

        metrics.sort(key=lambda m: m.working_set_mb, reverse=True)
        return metrics

    def read_process(self, proc: psutil.Process) -> Optional[ProcessMetric]:
        """
        Read one process, or None when it exited or can't be accessed.

        Reads happen inside ``oneshot()`` so the per-process cache is released
        when the block exits, whatever the outcome.
        """
        try:
            with proc.oneshot():
                mem_info = proc.memory_info()
                return ProcessMetric(
                    pid=proc.pid,
                    name=proc.name(),
                    working_set_mb=mem_info.rss / BYTES_PER_MB,
                    private_memory_mb=private_memory_bytes(mem_info) / BYTES_PER_MB,
                    thread_count=proc.num_threads(),
                    total_processor_time=processor_time_seconds(proc),
                )
        except PROCESS_READ_ERRORS as e:
            logger.debug(f"Skipping process {getattr(proc, 'pid', '?')}: {e}")
            return None
