"""pandas views of benchmark results."""

from collections.abc import Sequence

import pandas as pd

from unitbench.schema import UnitResult

SUMMARY_COLUMNS = ["name", "runs", "avg", "std_dev", "warmup_hits", "warmup_duration_ms"]
SAMPLE_COLUMNS = ["name", "run", "hits", "duration_ms"]


def results_to_dataframe(results: Sequence[UnitResult]) -> pd.DataFrame:
    """One row per unit with its totals and warmup sample."""
    rows = []
    for r in results:
        rows.append(
            {
                "name": r.name,
                "runs": r.totals.runs,
                "avg": r.totals.avg,
                "std_dev": r.totals.std_dev,
                "warmup_hits": r.warmup.hits if r.warmup is not None else None,
                "warmup_duration_ms": r.warmup.duration if r.warmup is not None else None,
            }
        )
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def samples_to_dataframe(results: Sequence[UnitResult]) -> pd.DataFrame:
    """One row per recorded (non-warmup) sample, in run order."""
    rows = [
        {"name": r.name, "run": i, "hits": s.hits, "duration_ms": s.duration}
        for r in results
        for i, s in enumerate(r.samples)
    ]
    return pd.DataFrame(rows, columns=SAMPLE_COLUMNS)
