"""Serialization helpers for benchmark results."""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import List, Union

from unitbench.schema import UnitResult


PathLike = Union[str, Path]

SCHEMA_VERSION = "1.0.0"


def results_to_dict(results: Sequence[UnitResult]) -> dict:
    """Wrap results in the versioned JSON document shape."""
    return {
        "schema_version": SCHEMA_VERSION,
        "results": [r.to_dict() for r in results],
    }


def save_results(results: Sequence[UnitResult], path: PathLike) -> None:
    """Save UnitResults to JSON."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as handle:
        json.dump(results_to_dict(results), handle, indent=2)


def load_results(path: PathLike) -> List[UnitResult]:
    """Load UnitResults from JSON written by save_results."""
    in_path = Path(path)
    with in_path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    return [UnitResult.from_dict(item) for item in payload.get("results", [])]
