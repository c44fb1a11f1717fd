from typing import Optional

from profiler.consts.PlatformType import PlatformType
from profiler.service.metrics.fallback_metrics_provider import FallbackMetricsProvider
from profiler.service.metrics.linux_metrics_provider import LinuxMetricsProvider
from profiler.service.metrics.platform_metrics_provider import PlatformMetricsProvider
from profiler.service.metrics.windows_metrics_provider import WindowsMetricsProvider
from profiler.util.log_config import setup_logger

logger = setup_logger(__name__)


def create_metrics_provider(platform_type: Optional[PlatformType] = None) -> PlatformMetricsProvider:
    """
    Build the provider for the given (or the current) platform.

    Args:
        platform_type: Platform to build for; detected from sys.platform when None

    Returns:
        PlatformMetricsProvider for that platform
    """
    platform_type = platform_type or PlatformType.detect()

    if platform_type == PlatformType.WINDOWS:
        provider = WindowsMetricsProvider()
    elif platform_type == PlatformType.LINUX:
        provider = LinuxMetricsProvider()
    else:
        provider = FallbackMetricsProvider()

    logger.debug(f"Using {type(provider).__name__} for platform {platform_type.value}")
    return provider
