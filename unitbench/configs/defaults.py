"""Default configuration for unitbench."""

from dataclasses import dataclass

DEFAULT_WARMUP_TIME_MS = 50
DEFAULT_MAX_UNIT_TIME_MS = 5000
DEFAULT_RUNS_PER_UNIT = 10


@dataclass
class RunnerConfig:
    """Timing configuration for a Benchmark.

    warmup_time: Warmup enabled when > 0 (milliseconds)
    max_unit_time: Time budget per unit, split across runs (milliseconds)
    runs_per_unit: Number of measured samples per unit
    """

    warmup_time: float = DEFAULT_WARMUP_TIME_MS
    max_unit_time: float = DEFAULT_MAX_UNIT_TIME_MS
    runs_per_unit: int = DEFAULT_RUNS_PER_UNIT
