"""Tests for the plain-text profile report layout."""
from datetime import datetime

import pytest

from conftest import make_metric, make_sample
from profiler.models.run_metadata import RunMetadata
from profiler.service.report.report_formatter import ReportFormatter
from profiler.service.report.report_writer import ReportWriter
from profiler.util.cal_utils import format_fixed

METADATA = RunMetadata(
    generated_at=datetime(2024, 3, 5, 15, 0, 0),
    platform_description="Linux 6.1.0 test",
    processor_count=8,
)

HEAVY = "=" * 80
LIGHT = "-" * 80


@pytest.fixture
def samples():
    return [
        make_sample(1, cpu_percent=10.0, memory_percent=50.0, processes=[
            make_metric("python", 512.25, pid=101, private_memory_mb=300.0, thread_count=8),
            make_metric("bash", 10.0, pid=7, private_memory_mb=2.5, thread_count=1),
        ]),
        make_sample(2, cpu_percent=30.0, memory_percent=52.5, processes=[
            make_metric("python", 600.0, pid=101, private_memory_mb=320.0, thread_count=10),
            make_metric("bash", 10.0, pid=7, private_memory_mb=2.5, thread_count=1),
        ]),
    ]


@pytest.fixture
def report_lines(samples):
    return ReportFormatter().format(samples, METADATA).split("\n")


def test_empty_report():
    text = ReportFormatter().format([], METADATA)

    assert text == "\n".join([
        HEAVY,
        " " * 27 + "SYSTEM PROFILE REPORT",
        HEAVY,
        "",
        "Generated: 2024-03-05 15:00:00",
        "Platform: Linux 6.1.0 test",
        "Processors: 8",
        "Total Samples: 0",
        "",
        "No samples collected.",
    ]) + "\n"


def test_header(report_lines):
    assert report_lines[:10] == [
        HEAVY,
        " " * 27 + "SYSTEM PROFILE REPORT",
        HEAVY,
        "",
        "Generated: 2024-03-05 15:00:00",
        "Platform: Linux 6.1.0 test",
        "Processors: 8",
        "Total Samples: 2",
        "Duration: 14:07:09 - 14:07:11",
        "",
    ]


def test_summary(report_lines):
    start = report_lines.index("SUMMARY")
    assert report_lines[start - 1] == LIGHT
    assert report_lines[start + 1:start + 4] == [
        LIGHT,
        "CPU Usage:    Min: 10.0%   Avg: 20.0%   Max: 30.0%",
        "Memory Usage: Min: 50.0%   Avg: 51.3%   Max: 52.5%",
    ]


def test_top_processes(report_lines):
    start = report_lines.index("TOP PROCESSES (by average memory usage)")
    assert report_lines[start + 2] == (
        "Process" + " " * 24 + "Avg Memory" + " " * 6 + "Max Memory" + " " * 6 + "Avg Threads "
    )
    assert report_lines[start + 3] == "-" * 80
    assert report_lines[start + 4] == (
        "python" + " " * 25 + "     556.1 MB" + " " * 8 + "600.0 MB" + " " * 10 + "9"
    )
    assert report_lines[start + 5] == (
        "bash" + " " * 27 + "      10.0 MB" + " " * 9 + "10.0 MB" + " " * 10 + "1"
    )


def test_detailed_sample(report_lines):
    start = report_lines.index("--- Sample 1 at 2024-03-05 14:07:09.123 ---")
    assert report_lines[start + 1:start + 10] == [
        "",
        "CPU Usage: 10.0%",
        "Memory: 8000 MB used / 16000 MB total (50.0%)",
        "Available Memory: 8000 MB",
        "",
        "Top 10 Processes by Memory:",
        "  PID      Process" + " " * 19 + "Working Set     Private Mem     Threads ",
        "  " + "-" * 74,
        "  101" + " " * 6 + "python" + " " * 25 + "512.3 MB" + " " * 8 + "300.0 MB" + " " * 3 + "8" + " " * 7,
    ]


def test_section_order(report_lines):
    positions = [
        report_lines.index("SUMMARY"),
        report_lines.index("TOP PROCESSES (by average memory usage)"),
        report_lines.index("DETAILED SAMPLES"),
        report_lines.index("--- Sample 1 at 2024-03-05 14:07:09.123 ---"),
        report_lines.index("--- Sample 2 at 2024-03-05 14:07:11.123 ---"),
    ]
    assert positions == sorted(positions)
    assert report_lines[-1] == ""


def test_top_n_limits():
    processes = [make_metric(f"proc{i}", float(i), pid=i) for i in range(1, 21)]
    text = ReportFormatter(report_top_n=3, detail_top_n=2).format([make_sample(processes=processes)], METADATA)
    lines = text.split("\n")

    rollup_start = lines.index("TOP PROCESSES (by average memory usage)") + 4
    assert [line.split()[0] for line in lines[rollup_start:rollup_start + 3]] == ["proc20", "proc19", "proc18"]
    assert lines[rollup_start + 3] == ""
    assert "Top 2 Processes by Memory:" in lines
    assert sum(1 for line in lines if line.startswith("  20 ") or line.startswith("  19 ")) == 2
    assert not any(line.startswith("  18 ") for line in lines)


@pytest.mark.parametrize("value, digits, expected", [
    (2.5, 0, "3"),
    (3.5, 0, "4"),
    (0.25, 1, "0.3"),
    (51.25, 1, "51.3"),
    (-0.04, 1, "0.0"),
    (-1.25, 1, "-1.3"),
    (16000.0, 0, "16000"),
    (7, 1, "7.0"),
])
def test_format_fixed(value, digits, expected):
    assert format_fixed(value, digits) == expected


def test_writer_creates_parent(tmp_path, samples):
    target = tmp_path / "nested" / "dir" / "profile.log"
    text = ReportFormatter().format(samples, METADATA)

    written = ReportWriter().write(target, text)

    assert written == target
    assert target.read_text(encoding="utf-8") == text
