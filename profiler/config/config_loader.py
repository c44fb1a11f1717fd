"""
Configuration loader for profiler runs.

This module provides the ConfigLoader class for loading and validating
profiler configuration from YAML files.
"""
from pathlib import Path
from typing import Optional

import yaml

from profiler.config.profile_config import ProfileConfig
from profiler.exceptions import ConfigurationError

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "config_yaml"


class ConfigLoader:

    def __init__(self, config_path: Optional[Path] = None, env: Optional[str] = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_DIR
        self.env = env
        self.config_data = self._load_config()

    def _load_config(self) -> ProfileConfig:
        """
        Load and parse profiler configuration from YAML file.
        Supports environment-specific overrides via config_<env>.yaml

        Returns:
            ProfileConfig: Parsed (not yet validated) configuration

        Raises:
            ConfigurationError: If a file is missing, malformed or has unknown keys
        """
        # Load base YAML file
        data = self._read_yaml(self.config_path / "config.yaml")

        # Load environment-specific override if specified
        if self.env:
            env_data = self._read_yaml(self.config_path / f"config_{self.env}.yaml")
            # dict.update() will overwrite existing keys
            data.update(env_data)

        return ProfileConfig.from_dict(data)

    @staticmethod
    def _read_yaml(config_file: Path) -> dict:
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Configuration file not found: {config_file}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {config_file}")
        return data
