"""Configuration module for profiler runs."""

from .config_loader import ConfigLoader
from .profile_config import ProfileConfig

__all__ = ["ConfigLoader", "ProfileConfig"]
