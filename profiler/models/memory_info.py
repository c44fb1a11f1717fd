from typing import NamedTuple


class MemoryInfo(NamedTuple):
    """Host memory totals in MB plus the used percentage"""
    total_mb: float
    used_mb: float
    available_mb: float
    used_percent: float

    @classmethod
    def empty(cls) -> "MemoryInfo":
        return cls(0.0, 0.0, 0.0, 0.0)
