"""Tests for the unitbench sampling engine."""

import asyncio
import threading
import warnings

import pytest

from unitbench.runners.sampling import AsyncUnit, SyncUnit, maybe_await, probe_unit, sample_unit
from unitbench.schema import UnitDescriptor
from unitbench.utils.errors import AbortError


class TestProbeUnit:
    """Async detection by a single untimed call."""

    def test_sync_function_gives_sync_unit(self):
        calls = []
        timed = asyncio.run(probe_unit(lambda: calls.append(1)))

        assert isinstance(timed, SyncUnit)
        assert not timed.is_async
        assert calls == [1]

    def test_coroutine_function_gives_async_unit(self):
        calls = []

        async def unit():
            calls.append(1)

        with warnings.catch_warnings():
            warnings.simplefilter("error", RuntimeWarning)
            timed = asyncio.run(probe_unit(unit))

        assert isinstance(timed, AsyncUnit)
        assert timed.is_async
        assert calls == [1]

    def test_function_returning_future_gives_async_unit(self):
        async def scenario():
            loop = asyncio.get_running_loop()

            def unit():
                fut = loop.create_future()
                fut.set_result(None)
                return fut

            return await probe_unit(unit)

        assert isinstance(asyncio.run(scenario()), AsyncUnit)

    def test_maybe_await_passes_plain_values(self):
        async def value():
            return 7

        assert asyncio.run(maybe_await(3)) == 3
        assert asyncio.run(maybe_await(value())) == 7


class TestTimedUnitSample:
    """One sample window."""

    def test_sync_window_closes_after_duration(self):
        sample = asyncio.run(SyncUnit(lambda: None).sample(5.0, threading.Event()))

        assert sample is not None
        assert sample.duration >= 5.0
        assert sample.hits >= 1

    def test_async_window_counts_awaited_calls(self):
        async def unit():
            await asyncio.sleep(0.002)

        sample = asyncio.run(AsyncUnit(unit).sample(10.0, threading.Event()))

        assert sample.duration >= 10.0
        assert 1 <= sample.hits <= 5

    def test_set_flag_yields_no_sample(self):
        aborted = threading.Event()
        aborted.set()
        calls = []

        sample = asyncio.run(SyncUnit(lambda: calls.append(1)).sample(5.0, aborted))

        assert sample is None
        assert calls == []


class TestSampleUnit:
    """Sampling a whole unit."""

    def test_warmup_sample_is_split_off(self):
        descriptor = UnitDescriptor.from_options("noop", lambda: None)
        asyncio.run(sample_unit(descriptor, 2.0, 4, threading.Event(), warmup=True))

        assert len(descriptor.samples) == 3
        assert descriptor.warmup is not None
        assert descriptor.warmup.duration >= 2.0

    def test_without_warmup_all_samples_kept(self):
        descriptor = UnitDescriptor.from_options("noop", lambda: None)
        asyncio.run(sample_unit(descriptor, 2.0, 3, threading.Event(), warmup=False))

        assert len(descriptor.samples) == 3
        assert descriptor.warmup is None

    def test_previous_samples_are_reset(self):
        descriptor = UnitDescriptor.from_options("noop", lambda: None)
        asyncio.run(sample_unit(descriptor, 1.0, 2, threading.Event(), warmup=True))
        asyncio.run(sample_unit(descriptor, 1.0, 2, threading.Event(), warmup=False))

        assert len(descriptor.samples) == 2
        assert descriptor.warmup is None

    def test_flag_set_before_first_window_raises(self):
        aborted = threading.Event()
        aborted.set()
        descriptor = UnitDescriptor.from_options("noop", lambda: None)

        with pytest.raises(AbortError):
            asyncio.run(sample_unit(descriptor, 1.0, 2, aborted, warmup=False))

        assert descriptor.samples == []


class TestWindowClock:
    """Window arithmetic against a scripted clock."""

    def test_window_overruns_by_at_most_one_call(self, mocker):
        mocker.patch("unitbench.runners.sampling.now_ms", side_effect=[100.0, 104.0, 108.0, 112.0])

        sample = asyncio.run(SyncUnit(lambda: None).sample(10.0, threading.Event()))

        assert sample.hits == 3
        assert sample.duration == 12.0

    def test_exact_end_time_closes_window(self, mocker):
        mocker.patch("unitbench.runners.sampling.now_ms", side_effect=[0.0, 5.0, 10.0])

        sample = asyncio.run(SyncUnit(lambda: None).sample(10.0, threading.Event()))

        assert sample.hits == 2
        assert sample.duration == 10.0


class TestLoopAbort:
    """abort() from an event loop timer between windows."""

    def test_timer_due_during_window_stops_next_window(self):
        """A timer that came due mid-window runs before the next window starts."""
        aborted = threading.Event()
        descriptor = UnitDescriptor.from_options("noop", lambda: None)

        async def scenario():
            asyncio.get_running_loop().call_later(0.01, aborted.set)
            await sample_unit(descriptor, 50.0, 2, aborted, warmup=False)

        with pytest.raises(AbortError):
            asyncio.run(scenario())

        assert len(descriptor.samples) == 1


class TestMixedAsyncUnit:
    """Async units whose later calls return plain values."""

    def test_plain_value_after_async_first_call_counts(self):
        calls = []

        def unit():
            calls.append(1)
            if len(calls) == 1:
                return asyncio.sleep(0)
            return None

        descriptor = UnitDescriptor.from_options("mixed", unit)
        asyncio.run(sample_unit(descriptor, 2.0, 2, threading.Event(), warmup=False))

        assert len(descriptor.samples) == 2
        assert all(s.hits >= 1 for s in descriptor.samples)
