"""Shared fixtures: sample factories, a fake clock and scripted providers.

The fake clock and stop event make scheduling tests deterministic: waiting on
the stop event advances the clock instead of sleeping.
"""
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

import pytest

from profiler.models.memory_info import MemoryInfo
from profiler.models.process_metric import ProcessMetric
from profiler.models.system_sample import SystemSample
from profiler.service.metrics.platform_metrics_provider import PlatformMetricsProvider

BASE_TIME = datetime(2024, 3, 5, 14, 7, 9, 123456)


def make_metric(name: str = "proc", working_set_mb: float = 10.0, pid: int = 100,
                private_memory_mb: float = 5.0, thread_count: int = 4) -> ProcessMetric:
    return ProcessMetric(
        pid=pid,
        name=name,
        working_set_mb=working_set_mb,
        private_memory_mb=private_memory_mb,
        thread_count=thread_count,
    )


def make_sample(sequence: int = 1, cpu_percent: float = 10.0, memory_percent: float = 50.0,
                processes: Iterable[ProcessMetric] = (), timestamp: Optional[datetime] = None,
                total_mb: float = 16000.0) -> SystemSample:
    used_mb = total_mb * memory_percent / 100
    return SystemSample.create(
        sequence=sequence,
        timestamp=timestamp or BASE_TIME + timedelta(seconds=2 * (sequence - 1)),
        cpu_percent=cpu_percent,
        memory=MemoryInfo(total_mb, used_mb, total_mb - used_mb, memory_percent),
        processes=processes,
    )


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeStopEvent:
    """Stand-in for threading.Event whose waits move a FakeClock forward.

    ``stop_at`` sets the event once the clock reaches that time, interrupting
    any wait spanning it.
    """

    def __init__(self, clock: FakeClock, stop_at: Optional[float] = None):
        self.clock = clock
        self.stop_at = stop_at
        self.flag = False
        self.waits: List[float] = []

    def is_set(self) -> bool:
        return self.flag

    def set(self) -> None:
        self.flag = True

    def wait(self, timeout: float) -> bool:
        self.waits.append(timeout)
        if self.flag:
            return True
        if self.stop_at is not None and self.clock.now + timeout >= self.stop_at:
            self.clock.now = max(self.clock.now, self.stop_at)
            self.flag = True
            return True
        self.clock.advance(timeout)
        return False


class ScriptedProvider(PlatformMetricsProvider):
    """Provider returning a fixed CPU script and memory figure"""

    def __init__(self, cpu_values: Sequence[float] = (0.0,), memory: Optional[MemoryInfo] = None):
        self.cpu_values = list(cpu_values)
        self.memory = memory or MemoryInfo(16000.0, 8000.0, 8000.0, 50.0)
        self.cpu_calls = 0
        self.closed = False

    def get_cpu_percent(self) -> float:
        value = self.cpu_values[min(self.cpu_calls, len(self.cpu_values) - 1)]
        self.cpu_calls += 1
        return value

    def get_memory_info(self) -> MemoryInfo:
        return self.memory

    def close(self) -> None:
        self.closed = True


class StubSnapshotter:
    """Snapshotter returning fixed processes, optionally advancing the clock per call"""

    def __init__(self, processes: Sequence[ProcessMetric] = (), clock: Optional[FakeClock] = None,
                 cost: float = 0.0, fail_on_call: Optional[int] = None):
        self.processes = list(processes)
        self.clock = clock
        self.cost = cost
        self.fail_on_call = fail_on_call
        self.calls = 0

    def snapshot(self) -> List[ProcessMetric]:
        self.calls += 1
        if self.fail_on_call is not None and self.calls >= self.fail_on_call:
            raise RuntimeError("process table exploded")
        if self.clock is not None:
            self.clock.advance(self.cost)
        return list(self.processes)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def provider() -> ScriptedProvider:
    return ScriptedProvider()
