"""
Report Formatter Module

Serializes a run into the plain-text profile report. The layout (column
widths, one decimal for percentages and process memory, whole MB for host
memory) is fixed so existing consumers can parse it.
"""
from datetime import datetime
from typing import List, Sequence

from profiler.models.run_metadata import RunMetadata
from profiler.models.run_statistics import RunStatistics
from profiler.models.system_sample import SystemSample
from profiler.service.aggregator.aggregator import DETAIL_TOP_N, REPORT_TOP_N, Aggregator
from profiler.util.cal_utils import format_fixed

WIDTH = 80
HEAVY_RULE = "=" * WIDTH
LIGHT_RULE = "-" * WIDTH
TITLE_LINE = " " * 27 + "SYSTEM PROFILE REPORT"


def format_time(ts: datetime) -> str:
    return ts.strftime("%H:%M:%S")


def format_datetime(ts: datetime) -> str:
    return ts.strftime("%Y-%m-%d %H:%M:%S")


def format_datetime_ms(ts: datetime) -> str:
    return f"{format_datetime(ts)}.{ts.microsecond // 1000:03d}"


class ReportFormatter:
    """Build the text report for a finished run"""

    def __init__(self, report_top_n: int = REPORT_TOP_N, detail_top_n: int = DETAIL_TOP_N):
        """
        Args:
            report_top_n: Rollup rows in the top processes section
            detail_top_n: Processes listed for each sample
        """
        self.report_top_n = report_top_n
        self.detail_top_n = detail_top_n

    def format(self, samples: Sequence[SystemSample], metadata: RunMetadata) -> str:
        """
        Render the report.

        Sections: header, summary, top processes, detailed samples. With no
        samples only the header and a "No samples collected." line are written.
        """
        lines: List[str] = []
        self._append_header(lines, samples, metadata)

        statistics = Aggregator(top_n=self.report_top_n).summarize(samples)
        if statistics is None:
            lines.append("No samples collected.")
            return "\n".join(lines) + "\n"

        self._append_summary(lines, statistics)
        self._append_top_processes(lines, statistics)
        self._append_details(lines, samples)
        return "\n".join(lines) + "\n"

    def _append_header(self, lines: List[str], samples: Sequence[SystemSample], metadata: RunMetadata) -> None:
        lines.extend([
            HEAVY_RULE,
            TITLE_LINE,
            HEAVY_RULE,
            "",
            f"Generated: {format_datetime(metadata.generated_at)}",
            f"Platform: {metadata.platform_description}",
            f"Processors: {metadata.processor_count}",
            f"Total Samples: {len(samples)}",
        ])
        if samples:
            lines.append(f"Duration: {format_time(samples[0].timestamp)} - {format_time(samples[-1].timestamp)}")
        lines.append("")

    def _append_summary(self, lines: List[str], statistics: RunStatistics) -> None:
        cpu, mem = statistics.cpu, statistics.memory
        lines.extend([
            LIGHT_RULE,
            "SUMMARY",
            LIGHT_RULE,
            f"CPU Usage:    Min: {format_fixed(cpu.min, 1)}%   Avg: {format_fixed(cpu.avg, 1)}%   Max: {format_fixed(cpu.max, 1)}%",
            f"Memory Usage: Min: {format_fixed(mem.min, 1)}%   Avg: {format_fixed(mem.avg, 1)}%   Max: {format_fixed(mem.max, 1)}%",
            "",
        ])

    def _append_top_processes(self, lines: List[str], statistics: RunStatistics) -> None:
        lines.extend([
            LIGHT_RULE,
            "TOP PROCESSES (by average memory usage)",
            LIGHT_RULE,
            f"{'Process':<30} {'Avg Memory':<15} {'Max Memory':<15} {'Avg Threads':<12}",
            "-" * WIDTH,
        ])
        for rollup in statistics.process_rollups:
            lines.append(
                f"{rollup.name:<30} "
                f"{format_fixed(rollup.avg_working_set_mb, 1):>10} MB   "
                f"{format_fixed(rollup.max_working_set_mb, 1):>10} MB   "
                f"{format_fixed(rollup.avg_thread_count, 0):>8}"
            )

    def _append_details(self, lines: List[str], samples: Sequence[SystemSample]) -> None:
        lines.extend([
            "",
            HEAVY_RULE,
            "DETAILED SAMPLES",
            HEAVY_RULE,
        ])
        for sample in samples:
            lines.extend([
                "",
                f"--- Sample {sample.sequence} at {format_datetime_ms(sample.timestamp)} ---",
                "",
                f"CPU Usage: {format_fixed(sample.cpu_percent, 1)}%",
                f"Memory: {format_fixed(sample.used_memory_mb, 0)} MB used / "
                f"{format_fixed(sample.total_memory_mb, 0)} MB total ({format_fixed(sample.memory_percent, 1)}%)",
                f"Available Memory: {format_fixed(sample.available_memory_mb, 0)} MB",
                "",
                f"Top {self.detail_top_n} Processes by Memory:",
                f"  {'PID':<8} {'Process':<25} {'Working Set':<15} {'Private Mem':<15} {'Threads':<8}",
                f"  {'-' * 74}",
            ])
            for proc in sample.top_processes(self.detail_top_n):
                lines.append(
                    f"  {proc.pid:<8} {proc.name:<25} "
                    f"{format_fixed(proc.working_set_mb, 1):>10} MB   "
                    f"{format_fixed(proc.private_memory_mb, 1):>10} MB   "
                    f"{proc.thread_count:<8}"
                )
