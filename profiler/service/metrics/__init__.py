"""Platform-specific CPU and memory providers."""

from .fallback_metrics_provider import FallbackMetricsProvider
from .linux_metrics_provider import CpuMonitorState, LinuxMetricsProvider
from .platform_metrics_provider import PlatformMetricsProvider
from .provider_factory import create_metrics_provider
from .windows_metrics_provider import WindowsMetricsProvider

__all__ = [
    "CpuMonitorState",
    "FallbackMetricsProvider",
    "LinuxMetricsProvider",
    "PlatformMetricsProvider",
    "WindowsMetricsProvider",
    "create_metrics_provider",
]
