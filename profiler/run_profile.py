"""
Profiler run orchestration.

Validates the configuration, runs the sampler, then summarizes the samples
and persists the text report.
"""
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from profiler.config.profile_config import ProfileConfig
from profiler.models.run_metadata import RunMetadata
from profiler.models.run_statistics import RunStatistics
from profiler.models.system_sample import SystemSample
from profiler.service.aggregator.aggregator import Aggregator
from profiler.service.report.report_formatter import ReportFormatter
from profiler.service.report.report_writer import ReportWriter
from profiler.service.sampler.sampler import Sampler, TickCallback
from profiler.util.file_utils import ensure_writable_parent, resolve_output_path
from profiler.util.log_config import setup_logger

logger = setup_logger(__name__)


@dataclass
class ProfileRunResult:
    samples: List[SystemSample]
    statistics: Optional[RunStatistics]  # None when no samples were collected
    report_path: Path
    cancelled: bool = False


def prepare_output(config: ProfileConfig) -> Path:
    """
    Validate the configuration and make sure the report location is usable.

    Raises:
        ConfigurationError: If a setting is invalid or the output is not writable
    """
    config.validate()
    return ensure_writable_parent(resolve_output_path(config.output_path))


def run_profile(
    config: ProfileConfig,
    stop_event: Optional[threading.Event] = None,
    on_sample: Optional[TickCallback] = None,
    sampler: Optional[Sampler] = None,
    output_path: Optional[Path] = None,
) -> ProfileRunResult:
    """
    Run one profiling session end to end.

    Args:
        config: Run configuration
        stop_event: Setting it ends the run early; the partial run is still reported
        on_sample: Per-tick callback for live display
        sampler: Pre-built sampler (default: a Sampler built from config). It
            carries its own stop event, so it cannot be combined with stop_event
        output_path: Already prepared report path (default: prepare_output(config))

    Returns:
        ProfileRunResult with samples, console statistics and the report path

    Raises:
        ConfigurationError: Before sampling, on invalid configuration
        SamplingError: If the sampling loop fails; no report is written
        OSError: If the report cannot be written
        ValueError: If both sampler and stop_event are given
    """
    if sampler is not None and stop_event is not None:
        raise ValueError("Pass stop_event or sampler, not both; stop a pre-built sampler with sampler.stop()")

    report_path = output_path or prepare_output(config)

    if sampler is None:
        sampler = Sampler(settle_seconds=config.settle_seconds, stop_event=stop_event)

    samples = sampler.start(config.duration_seconds, config.interval_seconds, on_sample=on_sample)
    if sampler.cancelled:
        logger.info(f"Profiling stopped early after {len(samples)} sample(s)")

    statistics = Aggregator(top_n=config.summary_top_n).summarize(samples)

    formatter = ReportFormatter(report_top_n=config.report_top_n, detail_top_n=config.detail_top_n)
    report = formatter.format(samples, RunMetadata.capture())
    ReportWriter().write(report_path, report)

    return ProfileRunResult(
        samples=samples,
        statistics=statistics,
        report_path=report_path,
        cancelled=sampler.cancelled,
    )
