"""Terminal reporter for benchmark results using rich output."""

import importlib
import math
import sys
from collections.abc import Sequence
from typing import Any, List, Optional, TextIO

from unitbench.schema import UnitResult
from unitbench.utils.stats import relative_std_dev

SORT_KEYS = ("registration", "avg", "name")


def _load_optional_module(module_name: str) -> Any:
    """Import optional dependency module, returning None if unavailable."""
    try:
        return importlib.import_module(module_name)
    except ImportError:  # pragma: no cover - fallback path only when rich is absent
        return None


rich_console: Any = _load_optional_module("rich.console")
rich_table: Any = _load_optional_module("rich.table")


def sort_results(results: Sequence[UnitResult], sort_by: str = "registration") -> List[UnitResult]:
    """Order results for display; "avg" puts the fastest first."""
    if sort_by == "registration":
        return list(results)
    if sort_by == "name":
        return sorted(results, key=lambda r: r.name)
    if sort_by == "avg":
        return sorted(results, key=lambda r: -r.totals.avg if not math.isnan(r.totals.avg) else math.inf)
    raise ValueError(f"Unknown sort key {sort_by!r}; expected one of {SORT_KEYS}")


class TerminalReporter:
    """Render results as a terminal table, one line per completed cycle."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        sort_by: str = "registration",
        console: Any | None = None,
    ):
        self.stream = stream or sys.stdout
        self.sort_by = sort_by
        if console is None and rich_console is not None:
            console = rich_console.Console(file=stream) if stream is not None else rich_console.Console()
        self.console = console

    def on_cycle(self, result: UnitResult) -> None:
        """Print one line as soon as a unit completes (usable as on_cycle)."""
        print(self.format_line(result), file=self.stream)

    def format_line(self, result: UnitResult) -> str:
        rsd = relative_std_dev(result.totals)
        return (
            f"{result.name}: {self._fmt(result.totals.avg)} hits/s "
            f"+/- {self._fmt_percent(rsd)} ({result.totals.runs} runs)"
        )

    def render(self, results: Sequence[UnitResult]) -> None:
        """Print the summary table."""
        if rich_table is None or self.console is None:
            self._render_plain(results)
            return

        table = rich_table.Table(title="unitbench results")
        table.add_column("Unit", style="bold")
        table.add_column("hits/s", justify="right")
        table.add_column("+/-", justify="right")
        table.add_column("runs", justify="right")
        table.add_column("relative", justify="right")

        for result, relative in self._rows(results):
            table.add_row(
                result.name,
                self._fmt(result.totals.avg),
                self._fmt_percent(relative_std_dev(result.totals)),
                str(result.totals.runs),
                self._relative_text(relative),
            )
        self.console.print(table)

    def format_table(self, results: Sequence[UnitResult]) -> str:
        """Format the summary table as plain text, relative to the fastest unit."""
        rows = self._rows(results)
        name_width = max([len("Unit")] + [len(r.name) for r, _ in rows])

        lines = [
            f"{'Unit':{name_width}}  {'hits/s':>14}  {'+/-':>8}  {'runs':>5}  {'relative':>9}",
            "-" * (name_width + 46),
        ]
        for r, relative in rows:
            lines.append(
                f"{r.name:{name_width}}  "
                f"{self._fmt(r.totals.avg):>14}  "
                f"{self._fmt_percent(relative_std_dev(r.totals)):>8}  "
                f"{r.totals.runs:>5}  "
                f"{self._fmt_percent(relative):>9}"
            )
        return "\n".join(lines)

    def _render_plain(self, results: Sequence[UnitResult]) -> None:
        """Fallback renderer when rich is unavailable."""
        print(self.format_table(results), file=self.stream)

    def _rows(self, results: Sequence[UnitResult]) -> List[tuple]:
        ordered = sort_results(results, self.sort_by)
        finite = [r.totals.avg for r in ordered if not math.isnan(r.totals.avg)]
        fastest = max(finite) if finite else math.nan
        return [
            (r, r.totals.avg / fastest if fastest and not math.isnan(fastest) else math.nan)
            for r in ordered
        ]

    def _relative_text(self, relative: float) -> str:
        text = self._fmt_percent(relative)
        if math.isnan(relative):
            return f"[dim]{text}[/dim]"
        if relative >= 1.0:
            return f"[green]{text}[/green]"
        return text

    @staticmethod
    def _fmt(value: float) -> str:
        if math.isnan(value):
            return "n/a"
        return f"{value:,.2f}"

    @staticmethod
    def _fmt_percent(value: float) -> str:
        if math.isnan(value):
            return "n/a"
        return f"{value * 100:.2f}%"
