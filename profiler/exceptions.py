"""Exceptions raised by the profiler."""
from typing import List, Optional


class ProfilerError(Exception):
    """Base class for profiler errors."""


class ConfigurationError(ProfilerError, ValueError):
    """Raised before sampling begins when the run configuration is unusable."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class SamplingError(ProfilerError, RuntimeError):
    """Raised when the sampling loop aborts on an unexpected failure.

    The samples collected before the failure are kept on ``samples``; no
    report is guaranteed for them.
    """

    def __init__(self, message: str, samples: Optional[List] = None) -> None:
        super().__init__(message)
        self.samples = list(samples or [])
