"""Sample aggregation (mean, population stddev, per-second rates)."""

import math
from collections.abc import Sequence

import numpy as np

from unitbench.schema import Sample, Totals


def mean_and_stddev(values: Sequence[float]) -> tuple[float, float]:
    """Calculate the mean and population standard deviation of values.

    Args:
        values: Numeric values (hit counts)

    Returns:
        (mean, stddev); both NaN if values is empty
    """
    if len(values) == 0:
        return math.nan, math.nan
    arr = np.asarray(values, dtype=float)
    return float(np.mean(arr)), float(np.std(arr, ddof=0))


def to_per_second(value: float, sample_run_time: float) -> float:
    """Scale a per-window count to a per-second rate.

    Args:
        value: Count measured in one window
        sample_run_time: Nominal window length in milliseconds

    Returns:
        Rate in hits per second; NaN for a zero-length window
    """
    if sample_run_time <= 0:
        return math.nan
    return value * (1000 / sample_run_time)


def aggregate_samples(samples: Sequence[Sample], sample_run_time: float) -> Totals:
    """Reduce recorded samples to run count, average and stddev rates.

    Rates are normalized by the nominal window length, not by each
    sample's measured duration.
    """
    avg, std_dev = mean_and_stddev([s.hits for s in samples])
    return Totals(
        runs=len(samples),
        avg=to_per_second(avg, sample_run_time),
        std_dev=to_per_second(std_dev, sample_run_time),
    )


def relative_std_dev(totals: Totals) -> float:
    """Return std_dev / avg, or NaN when avg is zero or undefined."""
    if math.isnan(totals.avg) or totals.avg == 0:
        return math.nan
    return totals.std_dev / totals.avg
