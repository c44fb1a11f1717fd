import sys
from enum import Enum
from typing import Optional


class PlatformType(Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    OTHER = "other"

    @classmethod
    def detect(cls, platform_name: Optional[str] = None) -> "PlatformType":
        """Map ``sys.platform`` (or the given value) onto a platform type."""
        name = (platform_name if platform_name is not None else sys.platform).lower()
        if name.startswith("win"):
            return cls.WINDOWS
        if name.startswith("linux"):
            return cls.LINUX
        return cls.OTHER
