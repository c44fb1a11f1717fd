#!/usr/bin/env python3
"""
Command-line entry point for the system profiler.

Examples:
  # Sample every 2 seconds for one minute (report in ~/profile.log)
  python3 -m profiler

  # Sample every second for 30 seconds into a custom file
  python3 -m profiler --duration 30 --rate 1 --path logs/run.log
"""
import argparse
import signal
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from profiler.config.config_loader import ConfigLoader
from profiler.config.profile_config import ProfileConfig
from profiler.consts.PlatformType import PlatformType
from profiler.exceptions import ConfigurationError, SamplingError
from profiler.models.run_metadata import platform_label, processor_count
from profiler.cli.console import log_tick, print_run_header, print_summary
from profiler.run_profile import prepare_output, run_profile
from profiler.util.log_config import set_log_level, setup_logger

logger = setup_logger(__name__)


def build_env_parser(description: Optional[str] = None) -> argparse.ArgumentParser:
    """
    Create an ArgumentParser with the common --env option.

    Args:
        description: Optional parser description shown in CLI help.

    Returns:
        argparse.ArgumentParser: parser preconfigured with the --env argument.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help=(
            "Environment name for configuration override (e.g., 'dev'). "
            "Loads config_<env>.yaml in addition to the base config.yaml."
        ),
    )
    return parser


def build_profile_parser() -> argparse.ArgumentParser:
    ap = build_env_parser(description="Sample host CPU, memory and processes, then write a profile report")
    ap.add_argument("-d", "--duration", type=float, default=None,
                    help="Total duration to sample in seconds (default from config: 60)")
    ap.add_argument("-r", "--rate", type=float, default=None,
                    help="Interval between samples in seconds (default from config: 2)")
    ap.add_argument("-p", "--path", type=str, default=None,
                    help="Path to the output log file (default: ~/profile.log)")
    ap.add_argument("--config-dir", type=Path, default=None,
                    help="Directory holding config.yaml (default: packaged config)")
    ap.add_argument("--log-level", type=str, default=None,
                    help="Console log level: DEBUG, INFO, WARNING, ERROR")
    ap.add_argument("--no-settle", action="store_true",
                    help="Skip the settle pause between the warm-up read and the first sample")
    return ap


def parse_profile_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_profile_parser().parse_args(argv)


def load_run_config(args: argparse.Namespace) -> ProfileConfig:
    """
    Merge YAML configuration with command-line overrides and validate.

    Raises:
        ConfigurationError: If the merged configuration is invalid
    """
    config = ConfigLoader(args.config_dir, env=args.env).config_data
    config = config.with_overrides(
        duration_seconds=args.duration,
        interval_seconds=args.rate,
        output_path=args.path,
        log_level=args.log_level,
        settle_seconds=0.0 if args.no_settle else None,
    )
    return config.validate()


@contextmanager
def stop_on_interrupt(stop_event: threading.Event) -> Iterator[None]:
    """Turn Ctrl+C into a cooperative stop request while the block runs."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = signal.getsignal(signal.SIGINT)

    def _request_stop(signum, frame):
        logger.info("Stop requested, finishing current sample...")
        stop_event.set()

    signal.signal(signal.SIGINT, _request_stop)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_profile_args(argv)

    try:
        config = load_run_config(args)
        set_log_level(config.log_level, config.log_file_path)
        output_path = prepare_output(config)
    except ConfigurationError as e:
        logger.error(f"Error: {e}")
        return 1

    platform_type = PlatformType.detect()
    print_run_header(config, output_path, platform_label(platform_type), processor_count())
    if platform_type == PlatformType.OTHER:
        logger.warning("CPU usage on this platform is estimated from process activity, not measured")

    logger.info("Starting profiler... Press Ctrl+C to stop early.")

    stop_event = threading.Event()
    try:
        with stop_on_interrupt(stop_event):
            result = run_profile(config, stop_event=stop_event, on_sample=log_tick, output_path=output_path)
    except (ConfigurationError, SamplingError) as e:
        logger.error(f"Error: {e}")
        return 1
    except OSError as e:
        logger.error(f"Error: could not write report to {output_path}: {e}")
        return 1

    print_summary(result.statistics)
    logger.info(f"✓ Profiling complete. Results saved to: {result.report_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
