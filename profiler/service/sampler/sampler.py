"""
Sampler Module

Drives the sampling loop: one host measurement per tick, at multiples of the
interval measured from the start of the run, for a bounded duration.
"""
import threading
import time
from datetime import datetime
from typing import Callable, List, Optional

from profiler.consts.SamplerState import SamplerState
from profiler.exceptions import ConfigurationError, SamplingError
from profiler.models.system_sample import SystemSample
from profiler.service.metrics.platform_metrics_provider import PlatformMetricsProvider
from profiler.service.metrics.provider_factory import create_metrics_provider
from profiler.service.monitor.process_snapshotter import ProcessSnapshotter
from profiler.service.sampler.tick_event import TickEvent
from profiler.util.cal_utils import is_finite_number
from profiler.util.log_config import setup_logger

logger = setup_logger(__name__)

DEFAULT_SETTLE_SECONDS = 0.5

TickCallback = Callable[[TickEvent], None]


class Sampler:
    """Collect SystemSamples at a fixed cadence.

    The state moves IDLE -> RUNNING -> COMPLETED (or FAILED when the loop
    raises). A sampler runs once; create a new one for another run.
    """

    def __init__(
        self,
        provider_factory: Callable[[], PlatformMetricsProvider] = create_metrics_provider,
        snapshotter: Optional[ProcessSnapshotter] = None,
        settle_seconds: float = DEFAULT_SETTLE_SECONDS,
        emit_final: bool = True,
        clock: Callable[[], float] = time.monotonic,
        stop_event: Optional[threading.Event] = None,
    ):
        """
        Args:
            provider_factory: Builds the CPU/memory provider at run start
            snapshotter: Process snapshotter (default: ProcessSnapshotter())
            settle_seconds: Pause between the warm-up read and the first tick
            emit_final: Re-emit the last sample with progress 1.0 when the run completes
            clock: Monotonic time source in seconds
            stop_event: Event that requests a stop when set
        """
        self.provider_factory = provider_factory
        self.snapshotter = snapshotter or ProcessSnapshotter()
        self.settle_seconds = settle_seconds
        self.emit_final = emit_final
        self.clock = clock
        self.stop_event = stop_event or threading.Event()
        self.state = SamplerState.IDLE
        self.cancelled = False
        self.samples: List[SystemSample] = []

    def stop(self) -> None:
        """Request the loop to finish; safe from other threads and signal handlers."""
        self.stop_event.set()

    def start(self, duration: float, interval: float, on_sample: Optional[TickCallback] = None) -> List[SystemSample]:
        """
        Run the sampling loop until ``duration`` seconds have elapsed or a stop is requested.

        Args:
            duration: Total sampling window in seconds
            interval: Seconds between ticks
            on_sample: Called with a TickEvent after every stored sample

        Returns:
            The collected samples in sequence order (possibly fewer than
            expected when stopped early)

        Raises:
            ConfigurationError: If duration or interval is not positive
            SamplingError: If the sampler already ran, or the loop failed
        """
        if not is_finite_number(duration) or duration <= 0:
            raise ConfigurationError("Duration must be a positive number")
        if not is_finite_number(interval) or interval <= 0:
            raise ConfigurationError("Rate must be a positive number")
        if self.state != SamplerState.IDLE:
            raise SamplingError(f"Sampler cannot start from state {self.state.value}")

        self.state = SamplerState.RUNNING
        provider: Optional[PlatformMetricsProvider] = None
        try:
            provider = self.provider_factory()

            # Delta-based CPU readings need a baseline before the first tick
            provider.get_cpu_percent()
            if self.settle_seconds > 0 and self.stop_event.wait(self.settle_seconds):
                self.cancelled = True
            else:
                self._run_loop(provider, duration, interval, on_sample)
        except Exception as e:
            self.state = SamplerState.FAILED
            logger.debug(f"Sampling aborted after {len(self.samples)} sample(s): {e}")
            raise SamplingError(f"Sampling aborted: {e}", samples=self.samples) from e
        finally:
            if provider is not None:
                provider.close()

        self.state = SamplerState.COMPLETED
        return list(self.samples)

    def _run_loop(
        self,
        provider: PlatformMetricsProvider,
        duration: float,
        interval: float,
        on_sample: Optional[TickCallback],
    ) -> None:
        start_time = self.clock()
        sequence = 0

        while True:
            if self.stop_event.is_set():
                self.cancelled = True
                break

            elapsed = self.clock() - start_time
            if elapsed >= duration:
                break

            sequence += 1
            sample = self.collect_sample(sequence, provider)
            self.samples.append(sample)

            elapsed = self.clock() - start_time
            if on_sample is not None:
                on_sample(TickEvent(sample=sample, elapsed_seconds=elapsed, progress=min(1.0, elapsed / duration)))

            # Next tick is anchored to the run start, not to the end of this one
            target = sequence * interval
            elapsed = self.clock() - start_time
            wait_time = min(target, duration) - elapsed
            if wait_time > 0 and self.stop_event.wait(wait_time):
                self.cancelled = True
                break

        if not self.cancelled and self.samples and self.emit_final and on_sample is not None:
            on_sample(TickEvent(
                sample=self.samples[-1],
                elapsed_seconds=self.clock() - start_time,
                progress=1.0,
                is_final=True,
            ))

    def collect_sample(self, sequence: int, provider: PlatformMetricsProvider) -> SystemSample:
        """Take one measurement of the host."""
        timestamp = datetime.now()
        processes = self.snapshotter.snapshot()
        cpu_percent = provider.get_cpu_percent()
        memory = provider.get_memory_info()

        return SystemSample.create(
            sequence=sequence,
            timestamp=timestamp,
            cpu_percent=cpu_percent,
            memory=memory,
            processes=processes,
        )
