"""Shared utilities: errors and sample statistics."""

from .errors import (
    ABORT_ERROR_NAME,
    AbortError,
    ConfigError,
    SuiteLoadError,
    UnitBenchError,
)
from .stats import aggregate_samples, mean_and_stddev, relative_std_dev, to_per_second

__all__ = [
    "ABORT_ERROR_NAME",
    "AbortError",
    "ConfigError",
    "SuiteLoadError",
    "UnitBenchError",
    "aggregate_samples",
    "mean_and_stddev",
    "relative_std_dev",
    "to_per_second",
]
