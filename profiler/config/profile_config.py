from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from profiler.exceptions import ConfigurationError
from profiler.service.aggregator.aggregator import DETAIL_TOP_N, REPORT_TOP_N, SUMMARY_TOP_N
from profiler.service.sampler.sampler import DEFAULT_SETTLE_SECONDS
from profiler.util.cal_utils import is_finite_number
from profiler.util.file_utils import DEFAULT_REPORT_FILE_NAME
from profiler.util.log_config import parse_level


@dataclass
class ProfileConfig:
    duration_seconds: float = 60
    interval_seconds: float = 2
    output_path: str = DEFAULT_REPORT_FILE_NAME
    settle_seconds: float = DEFAULT_SETTLE_SECONDS
    summary_top_n: int = SUMMARY_TOP_N
    report_top_n: int = REPORT_TOP_N
    detail_top_n: int = DETAIL_TOP_N
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfileConfig":
        """
        Build a config from a parsed YAML mapping.

        Raises:
            ConfigurationError: On keys the profiler does not recognize
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    def with_overrides(self, **overrides: Any) -> "ProfileConfig":
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @property
    def log_file_path(self) -> Optional[Path]:
        return Path(self.log_file).expanduser() if self.log_file else None

    def validate(self) -> "ProfileConfig":
        """
        Check the configuration before any sampling begins.

        Raises:
            ConfigurationError: Describing the first invalid setting
        """
        if not is_finite_number(self.duration_seconds) or self.duration_seconds <= 0:
            raise ConfigurationError("Duration must be a positive number")
        if not is_finite_number(self.interval_seconds) or self.interval_seconds <= 0:
            raise ConfigurationError("Rate must be a positive number")
        if not is_finite_number(self.settle_seconds) or self.settle_seconds < 0:
            raise ConfigurationError("Settle time must be a non-negative number")
        for name in ("summary_top_n", "report_top_n", "detail_top_n"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer")
        if not self.output_path or not str(self.output_path).strip():
            raise ConfigurationError("Log path cannot be empty")
        try:
            parse_level(self.log_level)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        return self

