"""System profiler: host CPU, memory and per-process sampling with a text report."""

__version__ = "0.1.0"
