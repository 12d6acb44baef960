"""Configuration load/save and config types."""

from .config import ConfigManager, runner_config_from_dict
from .config_io import config_format, read_config_file, write_config_file
from .defaults import (
    DEFAULT_MAX_UNIT_TIME_MS,
    DEFAULT_RUNS_PER_UNIT,
    DEFAULT_WARMUP_TIME_MS,
    RunnerConfig,
)

__all__ = [
    "config_format",
    "read_config_file",
    "write_config_file",
    "ConfigManager",
    "RunnerConfig",
    "runner_config_from_dict",
    "DEFAULT_WARMUP_TIME_MS",
    "DEFAULT_MAX_UNIT_TIME_MS",
    "DEFAULT_RUNS_PER_UNIT",
]
