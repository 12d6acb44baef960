"""Custom exceptions for unitbench.

This module defines package-specific errors so callers can tell a
cancelled run apart from failures raised by the benchmarked code.
"""

ABORT_ERROR_NAME = "AbortError"


class UnitBenchError(Exception):
    """Base exception for all unitbench errors."""

    pass


class AbortError(UnitBenchError):
    """Raised when abort() was observed at a cancellation checkpoint.

    ``name`` is the stable discriminator callers can branch on.
    """

    name = ABORT_ERROR_NAME

    def __init__(self, message: str = "abort() was called"):
        super().__init__(message)
        self.message = message


class ConfigError(UnitBenchError):
    """Raised when a configuration file or value is invalid."""

    pass


class SuiteLoadError(UnitBenchError):
    """Raised when a benchmark suite file cannot be loaded."""

    pass
