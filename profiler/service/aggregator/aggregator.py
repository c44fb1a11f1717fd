"""
Aggregator Module

Turns the samples of a run into min/avg/max statistics and per-process-name
rollups. Processes are grouped by name rather than pid because pids are
recycled and short-lived processes with the same image recur across samples.
"""
from typing import Dict, Iterable, List, Optional

from profiler.models.process_metric import ProcessMetric
from profiler.models.run_statistics import ProcessRollup, RunStatistics
from profiler.models.system_sample import SystemSample
from profiler.util.cal_utils import calculate_stat_summary, clamp_percent

# Rollup rows shown in the console summary
SUMMARY_TOP_N = 10
# Rollup rows written to the persisted report
REPORT_TOP_N = 15
# Processes listed per sample in the detailed report section
DETAIL_TOP_N = 10


def build_process_rollups(samples: Iterable[SystemSample], top_n: Optional[int] = None) -> List[ProcessRollup]:
    """
    Group every ProcessMetric of every sample by process name.

    Groups are ordered descending by average working set; equal averages keep
    the order in which the names were first seen.

    Args:
        samples: Samples of the run
        top_n: Keep only the first N rollups (None keeps all)
    """
    groups: Dict[str, List[ProcessMetric]] = {}
    for sample in samples:
        for metric in sample.processes:
            groups.setdefault(metric.name, []).append(metric)

    rollups = [
        ProcessRollup(
            name=name,
            avg_working_set_mb=sum(m.working_set_mb for m in metrics) / len(metrics),
            max_working_set_mb=max(m.working_set_mb for m in metrics),
            avg_thread_count=sum(m.thread_count for m in metrics) / len(metrics),
        )
        for name, metrics in groups.items()
    ]
    rollups.sort(key=lambda r: r.avg_working_set_mb, reverse=True)

    if top_n is not None:
        rollups = rollups[:top_n]
    return rollups


class Aggregator:
    """Summarize a run, either from a finished sample list or sample by sample"""

    def __init__(self, top_n: int = SUMMARY_TOP_N):
        self.top_n = top_n
        self.samples: List[SystemSample] = []

    def add(self, sample: SystemSample) -> None:
        self.samples.append(sample)

    def summarize(self, samples: Optional[Iterable[SystemSample]] = None) -> Optional[RunStatistics]:
        """
        Compute run statistics.

        Args:
            samples: Samples to summarize; defaults to those passed to add()

        Returns:
            RunStatistics, or None when there are no samples (nothing to report)
        """
        samples = list(self.samples if samples is None else samples)
        if not samples:
            return None

        return RunStatistics(
            sample_count=len(samples),
            cpu=calculate_stat_summary(clamp_percent(s.cpu_percent) for s in samples),
            memory=calculate_stat_summary(clamp_percent(s.memory_percent) for s in samples),
            process_rollups=build_process_rollups(samples, self.top_n),
        )


def summarize(samples: Iterable[SystemSample], top_n: int = SUMMARY_TOP_N) -> Optional[RunStatistics]:
    return Aggregator(top_n=top_n).summarize(samples)
