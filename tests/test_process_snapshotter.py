"""Tests for process enumeration with per-process failure tolerance."""
from collections import namedtuple
from contextlib import contextmanager
from unittest.mock import patch

import psutil
import pytest

from profiler.service.monitor.process_snapshotter import ProcessSnapshotter, private_memory_bytes

MB = 1024 * 1024

LinuxMem = namedtuple("LinuxMem", "rss vms shared text lib data dirty")
WindowsMem = namedtuple("WindowsMem", "rss vms private")
OtherMem = namedtuple("OtherMem", "rss vms")
CpuTimes = namedtuple("CpuTimes", "user system")


class FakeProcess:
    """Minimal psutil.Process double that records oneshot() scopes"""

    def __init__(self, pid, name, rss_mb, data_mb=1, threads=2, fail_on=None, cpu_error=None):
        self.pid = pid
        self._name = name
        self._mem = LinuxMem(int(rss_mb * MB), 0, 0, 0, 0, int(data_mb * MB), 0)
        self._threads = threads
        self.fail_on = fail_on or {}
        self.cpu_error = cpu_error
        self.entered = 0
        self.exited = 0

    @contextmanager
    def oneshot(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1

    def _check(self, attr):
        if attr in self.fail_on:
            raise self.fail_on[attr]

    def name(self):
        self._check("name")
        return self._name

    def memory_info(self):
        self._check("memory_info")
        return self._mem

    def num_threads(self):
        self._check("num_threads")
        return self._threads

    def cpu_times(self):
        if self.cpu_error is not None:
            raise self.cpu_error
        return CpuTimes(user=1.5, system=0.5)


def run_snapshot(processes):
    with patch.object(psutil, "process_iter", return_value=processes):
        return ProcessSnapshotter().snapshot()


def test_sorted_descending_by_working_set():
    metrics = run_snapshot([
        FakeProcess(1, "small", 10),
        FakeProcess(2, "big", 300),
        FakeProcess(3, "medium", 50),
    ])
    assert [m.name for m in metrics] == ["big", "medium", "small"]


def test_ties_keep_enumeration_order():
    metrics = run_snapshot([
        FakeProcess(1, "first", 20),
        FakeProcess(2, "second", 20),
        FakeProcess(3, "third", 20),
    ])
    assert [m.pid for m in metrics] == [1, 2, 3]


def test_metric_fields():
    (metric,) = run_snapshot([FakeProcess(42, "worker", 128, data_mb=64, threads=7)])

    assert metric.pid == 42
    assert metric.name == "worker"
    assert metric.working_set_mb == 128.0
    assert metric.private_memory_mb == 64.0
    assert metric.thread_count == 7
    assert metric.total_processor_time == 2.0


@pytest.mark.parametrize("failure", [
    {"memory_info": psutil.AccessDenied(pid=2)},
    {"name": psutil.NoSuchProcess(pid=2)},
    {"num_threads": psutil.ZombieProcess(pid=2)},
    {"memory_info": PermissionError("denied")},
])
def test_unreadable_process_is_skipped(failure):
    broken = FakeProcess(2, "broken", 500, fail_on=failure)
    processes = [FakeProcess(1, "ok", 10), broken, FakeProcess(3, "also-ok", 20)]

    metrics = run_snapshot(processes)

    assert [m.pid for m in metrics] == [3, 1]


def test_oneshot_scope_released_for_every_process():
    processes = [
        FakeProcess(1, "ok", 10),
        FakeProcess(2, "broken", 10, fail_on={"memory_info": psutil.AccessDenied(pid=2)}),
    ]
    run_snapshot(processes)

    for proc in processes:
        assert proc.entered == 1
        assert proc.exited == 1


def test_processor_time_is_best_effort():
    (metric,) = run_snapshot([FakeProcess(1, "locked", 10, cpu_error=psutil.AccessDenied(pid=1))])
    assert metric.total_processor_time == 0.0


def test_enumeration_failure_yields_empty_snapshot():
    with patch.object(psutil, "process_iter", side_effect=OSError("no /proc")):
        assert ProcessSnapshotter().snapshot() == []


@pytest.mark.parametrize("mem, expected", [
    (WindowsMem(rss=10, vms=20, private=7), 7),
    (LinuxMem(10, 20, 0, 0, 0, 5, 0), 5),
    (OtherMem(rss=10, vms=20), 0),
])
def test_private_memory_source(mem, expected):
    assert private_memory_bytes(mem) == expected
