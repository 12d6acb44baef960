"""Configuration management for unitbench runners."""

import logging
import math
import os
from dataclasses import asdict, fields
from typing import Any

import yaml

from unitbench.configs.config_io import config_format, read_config_file, write_config_file
from unitbench.configs.defaults import RunnerConfig
from unitbench.utils.errors import ConfigError


LOGGER = logging.getLogger(__name__)

SECTION = "benchmark"

# Camel-case spellings accepted in config files
KEY_ALIASES = {
    "warmupTime": "warmup_time",
    "maxUnitTime": "max_unit_time",
    "runsPerUnit": "runs_per_unit",
}


def _coerce_time(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    try:
        ms = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be a number, got {value!r}") from e
    if math.isnan(ms) or ms < 0:
        raise ConfigError(f"{key} must be a non-negative number of milliseconds, got {value!r}")
    return ms


def _coerce_runs(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    try:
        runs = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from e
    if runs < 1:
        raise ConfigError(f"{key} must be at least 1, got {value!r}")
    return runs


def runner_config_from_dict(config_dict: dict[str, Any], base: RunnerConfig | None = None) -> RunnerConfig:
    """Build a RunnerConfig from a config file dictionary.

    Values are read from the ``benchmark`` section when present, otherwise
    from the top level. Unknown keys are logged and ignored.

    Args:
        config_dict: Parsed YAML/JSON content
        base: Config supplying values for missing keys (defaults if None)

    Returns:
        New RunnerConfig

    Raises:
        ConfigError: If a value has the wrong type or range
    """
    if not isinstance(config_dict, dict):
        raise ConfigError(f"Config must be a mapping, got {type(config_dict).__name__}")
    section = config_dict.get(SECTION, config_dict)
    if not isinstance(section, dict):
        raise ConfigError(f"'{SECTION}' section must be a mapping")

    values = asdict(base) if base is not None else asdict(RunnerConfig())
    known = {f.name for f in fields(RunnerConfig)}
    for raw_key, value in section.items():
        key = KEY_ALIASES.get(raw_key, raw_key)
        if key not in known:
            LOGGER.warning("Ignoring unknown config key %r", raw_key)
            continue
        if key == "runs_per_unit":
            values[key] = _coerce_runs(raw_key, value)
        else:
            values[key] = _coerce_time(raw_key, value)
    return RunnerConfig(**values)


class ConfigManager:
    """Manages loading and saving runner configuration files."""

    @staticmethod
    def load(filepath: str) -> RunnerConfig:
        """Load a YAML or JSON config file.

        Args:
            filepath: Path ending in .yaml, .yml or .json

        Returns:
            RunnerConfig with defaults for keys the file omits

        Raises:
            ConfigError: If the file is missing, unreadable, unsupported or invalid
        """
        if not os.path.exists(filepath):
            raise ConfigError(f"Config file not found: {filepath}")
        if config_format(filepath) is None:
            raise ConfigError(f"Unsupported config file type: {filepath}")
        try:
            data = read_config_file(filepath)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Could not read config file {filepath}: {e}") from e
        return runner_config_from_dict(data)

    @staticmethod
    def save(config: RunnerConfig, filepath: str) -> None:
        """Save configuration under a ``benchmark`` section.

        Args:
            config: RunnerConfig to save
            filepath: Output path; .yaml/.yml writes YAML, .json writes JSON
        """
        if config_format(filepath) is None:
            raise ConfigError(f"Unsupported config file type: {filepath}")
        write_config_file(filepath, {SECTION: asdict(config)})

    @staticmethod
    def load_or_default(filepath: str | None = None) -> RunnerConfig:
        """Load configuration from file or return defaults.

        Args:
            filepath: Optional path to configuration file

        Returns:
            RunnerConfig (loaded from file, or defaults if no file)
        """
        if filepath and os.path.exists(filepath):
            return ConfigManager.load(filepath)
        return RunnerConfig()
