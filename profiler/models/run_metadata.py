import os
import platform
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import psutil

from profiler.consts.PlatformType import PlatformType


def describe_platform() -> str:
    """Human readable OS description, e.g. 'Linux 6.1.0 #1 SMP ...'"""
    parts = [platform.system(), platform.release(), platform.version()]
    text = " ".join(p for p in parts if p)
    return text or platform.platform()


def platform_label(platform_type: Optional[PlatformType] = None) -> str:
    """Short platform name shown in the run header"""
    platform_type = platform_type or PlatformType.detect()
    if platform_type == PlatformType.WINDOWS:
        return "Windows"
    if platform_type == PlatformType.LINUX:
        return "Linux"
    return "macOS" if platform.system() == "Darwin" else platform.system() or "Unknown"


def processor_count() -> int:
    return psutil.cpu_count(logical=True) or os.cpu_count() or 1


@dataclass(frozen=True)
class RunMetadata:
    """Facts about the host written into the report header"""
    generated_at: datetime
    platform_description: str
    processor_count: int

    @classmethod
    def capture(cls) -> "RunMetadata":
        return cls(
            generated_at=datetime.now(),
            platform_description=describe_platform(),
            processor_count=processor_count(),
        )
