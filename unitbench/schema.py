"""Benchmark unit and result schema.

This module defines the descriptor a Benchmark stores for each registered
unit, and the result shape passed to ``on_cycle`` and returned by ``run``.
"""

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


UnitFn = Callable[[], Any]


@dataclass(frozen=True)
class Sample:
    """One measured window: completed calls and elapsed milliseconds."""

    hits: int
    duration: float

    def to_dict(self) -> Dict[str, object]:
        return {"hits": self.hits, "duration": self.duration}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Sample":
        return cls(hits=int(payload["hits"]), duration=float(payload["duration"]))


@dataclass(frozen=True)
class Totals:
    """Aggregated rates for one unit, in hits per second."""

    runs: int
    avg: float
    std_dev: float


@dataclass(frozen=True)
class UnitResult:
    """Public result for one completed unit.

    ``samples`` excludes the warmup sample, which is kept separately in
    ``warmup`` when warmup was enabled.
    """

    name: str
    totals: Totals
    samples: Tuple[Sample, ...]
    warmup: Optional[Sample] = None

    def to_dict(self) -> Dict[str, object]:
        """Convert to JSON-serializable dictionary (NaN becomes None)."""
        return {
            "name": self.name,
            "totals": {
                "runs": self.totals.runs,
                "avg": _nan_to_none(self.totals.avg),
                "std_dev": _nan_to_none(self.totals.std_dev),
            },
            "samples": [s.to_dict() for s in self.samples],
            "warmup": self.warmup.to_dict() if self.warmup is not None else None,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "UnitResult":
        """Build a UnitResult from dictionary data."""
        totals = payload.get("totals") or {}
        warmup = payload.get("warmup")
        return cls(
            name=str(payload["name"]),
            totals=Totals(
                runs=int(totals.get("runs", 0)),
                avg=_none_to_nan(totals.get("avg")),
                std_dev=_none_to_nan(totals.get("std_dev")),
            ),
            samples=tuple(Sample.from_dict(s) for s in payload.get("samples", [])),
            warmup=Sample.from_dict(warmup) if isinstance(warmup, Mapping) else None,
        )


@dataclass
class UnitOptions:
    """Options form accepted by ``Benchmark.add``."""

    unit: Optional[UnitFn] = None
    prepare: Optional[UnitFn] = None
    teardown: Optional[UnitFn] = None


@dataclass
class UnitDescriptor:
    """A registered unit plus the transient samples of the current run."""

    name: str
    unit: Optional[UnitFn]
    prepare: Optional[UnitFn] = None
    teardown: Optional[UnitFn] = None
    samples: List[Sample] = field(default_factory=list, repr=False)
    warmup: Optional[Sample] = field(default=None, repr=False)

    @classmethod
    def from_options(cls, name: str, unit_or_options: Any) -> "UnitDescriptor":
        """Normalize a bare callable or an options object into a descriptor.

        ``unit_or_options`` may be the unit function itself, a ``UnitOptions``, a mapping
        with ``prepare``/``unit``/``teardown`` keys, or any object exposing
        those attributes. Missing entries become None.
        """
        if callable(unit_or_options):
            return cls(name=name, unit=unit_or_options)
        if isinstance(unit_or_options, Mapping):
            return cls(
                name=name,
                unit=unit_or_options.get("unit"),
                prepare=unit_or_options.get("prepare"),
                teardown=unit_or_options.get("teardown"),
            )
        return cls(
            name=name,
            unit=getattr(unit_or_options, "unit", None),
            prepare=getattr(unit_or_options, "prepare", None),
            teardown=getattr(unit_or_options, "teardown", None),
        )

    def reset(self) -> None:
        """Drop sample data left over from a previous run."""
        self.samples = []
        self.warmup = None


def _nan_to_none(value: float) -> Optional[float]:
    if value is None or math.isnan(value):
        return None
    return value


def _none_to_nan(value: object) -> float:
    if value is None:
        return math.nan
    return float(value)
