"""
Console output for a profiler run: header, one line per tick, end-of-run summary.
"""
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from profiler.config.profile_config import ProfileConfig
from profiler.models.run_statistics import RunStatistics
from profiler.service.sampler.tick_event import TickEvent
from profiler.util.cal_utils import format_fixed
from profiler.util.log_config import setup_logger

logger = setup_logger(__name__)

NAME_WIDTH = 25


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def format_seconds(value: float) -> str:
    return f"{value:g}"


def print_run_header(config: ProfileConfig, output_path: Path, platform: str, processors: int) -> None:
    print("\n" + "=" * 70)
    print("=== System Profiler ===")
    print("=" * 70)
    rows = [
        ["Platform:", platform],
        ["Processors:", processors],
        ["Duration:", f"{format_seconds(config.duration_seconds)} seconds"],
        ["Sample Rate:", f"Every {format_seconds(config.interval_seconds)} second(s)"],
        ["Log Path:", str(output_path)],
    ]
    print(tabulate(rows, tablefmt="plain"))
    print()


def log_tick(event: TickEvent) -> None:
    """Print one line per stored sample; the final completion event prints progress only."""
    sample = event.sample
    if event.is_final:
        logger.info(f"Progress 100% ({sample.sequence} samples)")
        return

    top = ""
    if sample.processes:
        proc = sample.processes[0]
        top = f"  top: {truncate(proc.name, 15)} {format_fixed(proc.working_set_mb, 0)} MB"

    logger.info(
        f"Sample #{sample.sequence} {sample.timestamp:%H:%M:%S}  "
        f"progress {format_fixed(event.progress * 100, 0)}%  "
        f"CPU {format_fixed(sample.cpu_percent, 1)}%  "
        f"Memory {format_fixed(sample.used_memory_mb, 0)} / {format_fixed(sample.total_memory_mb, 0)} MB "
        f"({format_fixed(sample.memory_percent, 1)}%){top}"
    )


def summary_rows(statistics: RunStatistics) -> List[List[str]]:
    cpu, mem = statistics.cpu, statistics.memory
    return [
        ["CPU Usage", f"{format_fixed(cpu.min, 1)}%", f"{format_fixed(cpu.avg, 1)}%", f"{format_fixed(cpu.max, 1)}%"],
        ["Memory Usage", f"{format_fixed(mem.min, 1)}%", f"{format_fixed(mem.avg, 1)}%", f"{format_fixed(mem.max, 1)}%"],
    ]


def rollup_rows(statistics: RunStatistics) -> List[List[str]]:
    return [
        [
            truncate(r.name, NAME_WIDTH),
            f"{format_fixed(r.avg_working_set_mb, 1)} MB",
            f"{format_fixed(r.max_working_set_mb, 1)} MB",
            format_fixed(r.avg_thread_count, 0),
        ]
        for r in statistics.process_rollups
    ]


def print_summary(statistics: Optional[RunStatistics]) -> None:
    """Print the summary and top processes tables; nothing when no samples were collected."""
    if statistics is None:
        logger.warning("No samples collected")
        return

    print("\nSummary")
    print(tabulate(summary_rows(statistics), headers=["Metric", "Min", "Avg", "Max"],
                   tablefmt="heavy_grid", stralign="right"))

    print("\nTop Processes by Memory")
    print(tabulate(rollup_rows(statistics), headers=["Process", "Avg Memory", "Max Memory", "Avg Threads"],
                   tablefmt="heavy_grid", stralign="right"))
