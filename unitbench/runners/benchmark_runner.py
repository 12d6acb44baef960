"""Benchmark runner for unitbench.

Provides the Benchmark class: a registry of named units, the timing
configuration, a cancellation flag, and ``run`` which samples every unit in
registration order and reports one UnitResult per completed cycle.
"""

import asyncio
import logging
import threading
from collections.abc import Callable
from typing import Any, List, Optional, Tuple

from unitbench.configs.defaults import RunnerConfig
from unitbench.runners.sampling import maybe_await, sample_unit
from unitbench.schema import UnitDescriptor, UnitResult
from unitbench.utils.errors import AbortError
from unitbench.utils.stats import aggregate_samples


LOGGER = logging.getLogger(__name__)

CycleCallback = Callable[[UnitResult], Any]


class Benchmark:
    """Sequential micro-benchmark runner.

    Example:
        results = await (
            Benchmark()
            .add("join", lambda: "".join(parts))
            .add("concat", {"prepare": setup, "unit": concat})
            .set_max_unit_time(1000)
            .run(on_cycle=print)
        )
    """

    def __init__(self, config: Optional[RunnerConfig] = None):
        """Initialize runner.

        Args:
            config: Optional timing configuration (defaults 50ms/5000ms/10 runs)
        """
        config = config or RunnerConfig()
        self._units: List[UnitDescriptor] = []
        self._aborted = threading.Event()
        self._warmup_time = config.warmup_time
        self._max_unit_time = config.max_unit_time
        self._runs_per_unit = config.runs_per_unit

    @classmethod
    def from_config(cls, config: RunnerConfig) -> "Benchmark":
        """Create a runner from a RunnerConfig."""
        return cls(config)

    def apply_config(self, config: RunnerConfig) -> "Benchmark":
        """Replace the timing configuration; returns self."""
        self._warmup_time = config.warmup_time
        self._max_unit_time = config.max_unit_time
        self._runs_per_unit = config.runs_per_unit
        return self

    def to_config(self) -> RunnerConfig:
        """Snapshot the current timing configuration."""
        return RunnerConfig(
            warmup_time=self._warmup_time,
            max_unit_time=self._max_unit_time,
            runs_per_unit=self._runs_per_unit,
        )

    @property
    def units(self) -> Tuple[UnitDescriptor, ...]:
        """Registered units, in registration order."""
        return tuple(self._units)

    @property
    def aborted(self) -> bool:
        return self._aborted.is_set()

    def add(self, name: str, unit_or_options: Any) -> "Benchmark":
        """Register a unit.

        Args:
            name: Label used in results (need not be unique)
            unit_or_options: The unit function, or an options object / mapping
                carrying ``unit`` and optional ``prepare`` and ``teardown``

        Returns:
            self
        """
        self._units.append(UnitDescriptor.from_options(name, unit_or_options))
        return self

    def abort(self) -> "Benchmark":
        """Abort the run as soon as possible.

        Safe to call from another thread, a signal handler, an event loop
        timer or an ``on_cycle`` callback. A run in progress raises
        AbortError within about one sample window
        (``max_unit_time / runs_per_unit``). A thread or signal handler
        ends the running window at once; an event loop timer is seen when
        the running window closes.
        """
        self._aborted.set()
        return self

    def set_warmup_time(self, ms: float) -> "Benchmark":
        """Enable (ms > 0) or disable the warmup sample; does not count against max_unit_time."""
        self._warmup_time = ms
        return self

    def get_warmup_time(self) -> float:
        return self._warmup_time

    def set_max_unit_time(self, ms: float) -> "Benchmark":
        """Set the time budget spent sampling each unit, in milliseconds."""
        self._max_unit_time = ms
        return self

    def get_max_unit_time(self) -> float:
        return self._max_unit_time

    def set_runs_per_unit(self, runs: int) -> "Benchmark":
        """Set how many samples the unit budget is split into.

        More runs give a better standard deviation at the cost of shorter
        windows.
        """
        self._runs_per_unit = runs
        return self

    def get_runs_per_unit(self) -> int:
        return self._runs_per_unit

    def _check_aborted(self) -> None:
        if self._aborted.is_set():
            LOGGER.warning("Benchmark run aborted")
            raise AbortError()

    async def run(self, on_cycle: Optional[CycleCallback] = None) -> List[UnitResult]:
        """Run every registered unit in order.

        Args:
            on_cycle: Optional callback invoked with each UnitResult right
                after that unit's teardown

        Returns:
            UnitResults in registration order

        Raises:
            AbortError: If abort() is observed before all units complete
        """
        self._aborted.clear()
        results: List[UnitResult] = []

        for unit in self._units:
            self._check_aborted()

            runs_per_unit = max(int(self._runs_per_unit), 1)
            sample_run_time = self._max_unit_time / runs_per_unit
            has_warmup = self._warmup_time > 0
            run_count = runs_per_unit + 1 if has_warmup else runs_per_unit

            if unit.prepare is not None:
                await maybe_await(unit.prepare())

            try:
                await sample_unit(unit, sample_run_time, run_count, self._aborted, has_warmup)
            except AbortError:
                LOGGER.warning("Benchmark run aborted while sampling %r", unit.name)
                raise

            if unit.teardown is not None:
                await maybe_await(unit.teardown())

            self._check_aborted()

            result = UnitResult(
                name=unit.name,
                totals=aggregate_samples(unit.samples, sample_run_time),
                samples=tuple(unit.samples),
                warmup=unit.warmup,
            )
            LOGGER.info(
                "%s: %.2f hits/s +/- %.2f (%d runs)",
                result.name,
                result.totals.avg,
                result.totals.std_dev,
                result.totals.runs,
            )

            if on_cycle is not None:
                on_cycle(result)
            results.append(result)

        return results

    def run_sync(self, on_cycle: Optional[CycleCallback] = None) -> List[UnitResult]:
        """Run the suite from synchronous code (starts its own event loop)."""
        return asyncio.run(self.run(on_cycle))
