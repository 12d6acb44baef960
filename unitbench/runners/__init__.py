"""Benchmark runner module for unitbench.

Provides the Benchmark class and the sampling engine it drives.
"""

from .benchmark_runner import Benchmark, CycleCallback
from .sampling import AsyncUnit, SyncUnit, TimedUnit, maybe_await, probe_unit, sample_unit

__all__ = [
    "Benchmark",
    "CycleCallback",
    "TimedUnit",
    "SyncUnit",
    "AsyncUnit",
    "maybe_await",
    "probe_unit",
    "sample_unit",
]
