from __future__ import annotations

import sys
from typing import TextIO

from rich.markup import escape
from rich.table import Table

from .utils.logging_utils import console
from .utils.stats import RunResult


def format_result(result: RunResult) -> str:
    """
    One report line: ``<path> <representation> <algorithm> <ansatz> <seconds>s``.
    """
    return (
        f"{result.input_path} {result.representation.label} "
        f"{result.algorithm.label} {result.ansatz.label} "
        f"{result.elapsed_seconds:.1f}s"
    )


class ResultReporter:
    """
    Streams one line per result to ``stream`` (stdout by default), flushed
    immediately so progress stays visible when the sweep is interrupted.
    """

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved late so that a replaced sys.stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def emit(self, result: RunResult) -> None:
        stream = self.stream
        stream.write(format_result(result) + "\n")
        stream.flush()


def print_summary_table(summary) -> None:
    """
    Render the aggregated summary DataFrame as a rich table on stderr.
    """
    table = Table(title="Runtime summary (seconds)")
    for column in ["input_path", "algorithm", "representation", "ansatz"]:
        table.add_column(column)
    for column in ["count", "mean", "min", "max"]:
        table.add_column(column, justify="right")

    for row in summary.to_dict("records"):
        table.add_row(
            escape(str(row["input_path"])),
            str(row["algorithm"]),
            str(row["representation"]),
            str(row["ansatz"]),
            str(row["count"]),
            f"{row['mean']:.3f}",
            f"{row['min']:.3f}",
            f"{row['max']:.3f}",
        )
    console.print(table)
