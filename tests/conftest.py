"""Pytest configuration and fixtures."""

import tempfile

import pytest

from unitbench import Benchmark, Sample, Totals, UnitResult


@pytest.fixture
def fast_bench():
    """Benchmark with a short budget: 5 windows of 10ms plus warmup."""
    return Benchmark().set_warmup_time(10).set_max_unit_time(50).set_runs_per_unit(5)


@pytest.fixture
def sample_results():
    """Provide two completed unit results."""
    return [
        UnitResult(
            name="join",
            totals=Totals(runs=2, avg=1500.0, std_dev=500.0),
            samples=(Sample(hits=10, duration=10.2), Sample(hits=20, duration=10.4)),
            warmup=Sample(hits=7, duration=10.1),
        ),
        UnitResult(
            name="concat",
            totals=Totals(runs=2, avg=3000.0, std_dev=0.0),
            samples=(Sample(hits=30, duration=10.0), Sample(hits=30, duration=10.3)),
            warmup=None,
        ),
    ]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir
