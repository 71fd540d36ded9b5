"""
Config system - Layered configuration for backlink.

Supports files, .env files and environment variables with merge precedence.
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass, fields, asdict
from pathlib import Path
import logging
import os
import json

import yaml
from dotenv import dotenv_values

from .faults import ConfigInvalidFault

logger = logging.getLogger("backlink.config")


@dataclass(frozen=True)
class BacklinkConfig:
    """
    Runtime settings.

    Attributes:
        strict_inverse: Raise instead of skipping belongs_to_many candidates
            that declare neither the plural nor the singular association
        log_level: Level applied to the ``backlink`` logger by configure()
    """

    strict_inverse: bool = False
    log_level: str = "WARNING"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources with precedence:
    overrides > environment variables > .env file > config files > defaults
    """

    def __init__(self, env_prefix: str = "BACKLINK_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[list[str]] = None,
        env_prefix: str = "BACKLINK_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "ConfigLoader":
        """
        Load configuration from multiple sources.

        Merge order (later overrides earlier):
        1. Config files (JSON or YAML)
        2. .env file (only keys with the prefix)
        3. Environment variables (prefix)
        4. Manual overrides

        Args:
            paths: List of config file paths (glob patterns supported)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)

        Returns:
            Configured ConfigLoader instance
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader.config_data.update(overrides)

        return loader

    def _load_from_files(self, pattern: str):
        """Load config from JSON or YAML files."""
        from glob import glob

        for path_str in sorted(glob(pattern)):
            path = Path(path_str)
            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)

    def _load_json_file(self, path: Path):
        """Load config from JSON file."""
        with open(path) as f:
            self._merge_section(json.load(f))

    def _load_yaml_file(self, path: Path):
        """Load config from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
            if data is not None:
                self._merge_section(data)

    def _merge_section(self, data: Any):
        # Settings may live at top level or under a "backlink" section
        if not isinstance(data, dict):
            raise ConfigInvalidFault("backlink", f"expected a mapping, got {type(data).__name__}")
        section = data.get("backlink", data)
        if section is None:
            section = {}
        if not isinstance(section, dict):
            raise ConfigInvalidFault("backlink", f"expected a mapping, got {type(section).__name__}")
        self.config_data.update(section)

    def _load_env_file(self, path: str):
        """Load config from .env file."""
        if not Path(path).exists():
            logger.debug("No .env file at %s", path)
            return
        for key, value in dotenv_values(path).items():
            if key.startswith(self.env_prefix) and value is not None:
                self._set(key, value)

    def _load_from_env(self):
        """Load config from environment variables."""
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set(key, value)

    def _set(self, key: str, value: str):
        """BACKLINK_STRICT_INVERSE=true → {"strict_inverse": True}."""
        self.config_data[key[len(self.env_prefix):].lower()] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False
        return value

    def to_config(self) -> BacklinkConfig:
        """Build a BacklinkConfig, ignoring keys it does not define."""
        known = {f.name for f in fields(BacklinkConfig)}
        values: Dict[str, Any] = {}
        for key, value in self.config_data.items():
            if key not in known:
                continue
            if key == "strict_inverse" and not isinstance(value, bool):
                raise ConfigInvalidFault(key, f"expected a boolean, got {value!r}")
            if key == "log_level":
                value = self._parse_level(value)
            values[key] = value
        return BacklinkConfig(**values)

    def _parse_level(self, value: Any) -> str:
        """``debug``, ``10`` or ``"10"`` → ``DEBUG``."""
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        if isinstance(value, int) and not isinstance(value, bool):
            level = logging.getLevelName(value)
            if not isinstance(level, str) or level.startswith("Level "):
                raise ConfigInvalidFault("log_level", f"unknown log level {value!r}")
            return level
        level = str(value).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigInvalidFault("log_level", f"unknown log level {value!r}")
        return level


def configure(config: Optional[BacklinkConfig] = None) -> BacklinkConfig:
    """Install ``config`` (or one loaded from the environment) as the active settings."""
    from .models.registry import ModelRegistry

    if config is None:
        config = ConfigLoader.load().to_config()
    ModelRegistry.configure(config)
    logging.getLogger("backlink").setLevel(config.log_level)
    logger.debug("Configured backlink: %s", config.to_dict())
    return config
