"""Yearly CSV report writer.

Each processed year appends one block to the report file:

    2010 schools,id,pass
    Some College,100654,1
    Other College,100663,0
    2010 number of passed schools: 1
    2010 number of failed schools: 1
"""

import csv
import logging
from pathlib import Path
from typing import Any, TextIO

from src.evaluators.outcome import YearEvaluation, YearTally
from src.exceptions import FileIOError
from src.models.school import SchoolOutcome


logger = logging.getLogger(__name__)


def format_header(year: int) -> list[str]:
    return [f"{year} schools", "id", "pass"]


def format_row(outcome: SchoolOutcome) -> list[str]:
    return [outcome.name, outcome.school_id, str(outcome.flag)]


def format_trailer(year: int, tally: YearTally) -> list[str]:
    return [
        f"{year} number of passed schools: {tally.passed}",
        f"{year} number of failed schools: {tally.failed}",
    ]


class ReportWriter:
    """Append-mode writer for the multi-year report.

    The file is opened once on enter and closed once on exit, so every year
    of a run lands in the same handle.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._fh: TextIO | None = None
        self._writer: Any = None
        self.years_written = 0
        self.rows_written = 0

    def __enter__(self) -> "ReportWriter":
        self.open()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def open(self) -> None:
        """Open the report file in append mode."""
        if self._fh is not None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = open(self.path, "a", encoding="utf-8", newline="")
        except OSError as e:
            raise FileIOError(
                f"Cannot open report file {self.path}: {e}",
                context={"path": str(self.path), "operation": "open"},
            ) from e
        self._writer = csv.writer(self._fh, lineterminator="\n")
        logger.debug(f"Opened report file: {self.path}")

    def close(self) -> None:
        """Close the report file."""
        if self._fh is None:
            return
        fh, self._fh, self._writer = self._fh, None, None
        try:
            fh.close()
        except OSError as e:
            raise FileIOError(
                f"Cannot close report file {self.path}: {e}",
                context={"path": str(self.path), "operation": "close"},
            ) from e

    def _write_rows(self, rows: list[list[str]]) -> None:
        if self._writer is None:
            raise FileIOError(
                f"Report file {self.path} is not open",
                context={"path": str(self.path), "operation": "write"},
            )
        try:
            self._writer.writerows(rows)
        except OSError as e:
            raise FileIOError(
                f"Cannot write report file {self.path}: {e}",
                context={"path": str(self.path), "operation": "write"},
            ) from e

    def write_year(self, evaluation: YearEvaluation) -> None:
        """Write header, one row per outcome, and the pass/fail trailer."""
        rows = [format_header(evaluation.year)]
        rows.extend(format_row(outcome) for outcome in evaluation.outcomes)
        rows.extend([line] for line in format_trailer(evaluation.year, evaluation.tally))

        self._write_rows(rows)
        try:
            self._fh.flush()  # type: ignore[union-attr]
        except OSError as e:
            raise FileIOError(
                f"Cannot flush report file {self.path}: {e}",
                context={"path": str(self.path), "operation": "flush"},
            ) from e

        self.years_written += 1
        self.rows_written += len(evaluation.outcomes)
        logger.debug(f"Wrote year {evaluation.year}: {len(evaluation.outcomes)} rows")
