"""unitbench - sequential micro-benchmark runner.

Provides:
- runners (Benchmark, the sampling engine)
- schema (UnitDescriptor, UnitOptions, Sample, Totals, UnitResult)
- utils (AbortError and other errors, sample statistics)
- configs (RunnerConfig, ConfigManager)
- reporting (TerminalReporter, pandas views)
- serializer (save_results, load_results)
"""

__version__ = "0.1.0"

from unitbench.configs import ConfigManager, RunnerConfig
from unitbench.reporting import TerminalReporter, results_to_dataframe, samples_to_dataframe
from unitbench.runners import Benchmark
from unitbench.schema import Sample, Totals, UnitDescriptor, UnitOptions, UnitResult
from unitbench.serializer import load_results, save_results
from unitbench.suite import load_suite
from unitbench.utils.errors import (
    ABORT_ERROR_NAME,
    AbortError,
    ConfigError,
    SuiteLoadError,
    UnitBenchError,
)

__all__ = [
    # Runner
    "Benchmark",
    # Schema
    "UnitDescriptor",
    "UnitOptions",
    "Sample",
    "Totals",
    "UnitResult",
    # Errors
    "ABORT_ERROR_NAME",
    "AbortError",
    "ConfigError",
    "SuiteLoadError",
    "UnitBenchError",
    # Config
    "RunnerConfig",
    "ConfigManager",
    # Reporting
    "TerminalReporter",
    "results_to_dataframe",
    "samples_to_dataframe",
    # Serialization
    "save_results",
    "load_results",
    "load_suite",
]
