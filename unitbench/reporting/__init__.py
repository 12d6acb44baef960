"""Presentation helpers for benchmark results."""

from .dataframe import results_to_dataframe, samples_to_dataframe
from .terminal import SORT_KEYS, TerminalReporter, sort_results

__all__ = [
    "SORT_KEYS",
    "TerminalReporter",
    "sort_results",
    "results_to_dataframe",
    "samples_to_dataframe",
]
