"""Sampling engine for unitbench.

Turns a unit function and a fixed window length into a sequence of
hit-count samples. Whether the unit is asynchronous is detected once, by an
untimed probe call, and the matching ``TimedUnit`` variant is used for every
window of that unit.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
import time
from typing import Any, Callable, Optional

from unitbench.schema import Sample, UnitDescriptor
from unitbench.utils.errors import AbortError


LOGGER = logging.getLogger(__name__)


def now_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.perf_counter() * 1000.0


class TimedUnit:
    """Base for the two unit variants; see SyncUnit and AsyncUnit."""

    is_async = False

    def __init__(self, fn: Callable[[], Any]):
        self.fn = fn

    async def sample(self, sample_run_time: float, aborted: threading.Event) -> Optional[Sample]:
        """Run one window of ``sample_run_time`` milliseconds.

        Returns:
            The closed Sample, or None if abort() ended the window early
        """
        raise NotImplementedError


class SyncUnit(TimedUnit):
    """Unit whose calls complete without suspending."""

    async def sample(self, sample_run_time: float, aborted: threading.Event) -> Optional[Sample]:
        fn = self.fn
        start = now_ms()
        end = start + sample_run_time
        hits = 0
        while not aborted.is_set():
            fn()
            hits += 1
            now = now_ms()
            if now >= end:
                return Sample(hits=hits, duration=now - start)
        return None


class AsyncUnit(TimedUnit):
    """Unit whose calls return an awaitable that is awaited before counting.

    A later call returning a plain value still counts as a hit.
    """

    is_async = True

    async def sample(self, sample_run_time: float, aborted: threading.Event) -> Optional[Sample]:
        fn = self.fn
        start = now_ms()
        end = start + sample_run_time
        hits = 0
        while not aborted.is_set():
            await maybe_await(fn())
            hits += 1
            now = now_ms()
            if now >= end:
                return Sample(hits=hits, duration=now - start)
        return None


async def maybe_await(value: Any) -> Any:
    """Await value if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


async def _yield_to_loop() -> None:
    # The first sleep(0) requeues this task ahead of timers that came due
    # during the last window; the second lets those timers run first.
    await asyncio.sleep(0)
    await asyncio.sleep(0)


async def probe_unit(fn: Callable[[], Any]) -> TimedUnit:
    """Call fn once, untimed, and pick the unit variant from its result.

    An awaitable result is awaited so no coroutine is left pending.
    """
    result = fn()
    if inspect.isawaitable(result):
        await result
        LOGGER.debug("Probe detected async unit %r", fn)
        return AsyncUnit(fn)
    LOGGER.debug("Probe detected sync unit %r", fn)
    return SyncUnit(fn)


async def sample_unit(
    descriptor: UnitDescriptor,
    sample_run_time: float,
    run_count: int,
    aborted: threading.Event,
    warmup: bool,
) -> None:
    """Fill descriptor.samples (and descriptor.warmup) for one unit.

    Args:
        descriptor: Unit to sample; its sample data is reset first
        sample_run_time: Nominal window length in milliseconds
        run_count: Number of windows, including the warmup window
        aborted: Cancellation flag checked before and during each window
        warmup: If True, the first recorded sample becomes the warmup sample

    Raises:
        AbortError: If the flag is set before or during a window
    """
    descriptor.reset()
    timed = await probe_unit(descriptor.unit)

    for run in range(run_count):
        await _yield_to_loop()
        if aborted.is_set():
            raise AbortError()

        sample = await timed.sample(sample_run_time, aborted)
        if sample is None:
            raise AbortError()
        LOGGER.debug(
            "%s run %d/%d: %d hits in %.2fms",
            descriptor.name,
            run + 1,
            run_count,
            sample.hits,
            sample.duration,
        )
        descriptor.samples.append(sample)

    if warmup and descriptor.samples:
        descriptor.warmup = descriptor.samples.pop(0)
