"""Multi-year report orchestration."""

import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Literal

from src.evaluators.outcome import evaluate_year
from src.exceptions import FetchError, ParseError
from src.fetchers.scorecard import ScorecardFetcher
from src.models.config import ScorecardConfig
from src.models.summary import RunSummary, YearSummary
from src.storage.report import ReportWriter


logger = logging.getLogger(__name__)

ErrorPolicy = Literal["halt", "skip"]


def run_report(
    config: ScorecardConfig,
    fetcher: ScorecardFetcher,
    writer: ReportWriter,
    *,
    on_error: ErrorPolicy = "halt",
    on_year_done: Callable[[int], None] | None = None,
) -> RunSummary:
    """Fetch, evaluate and write every year of the configured span.

    A year's block is written only after all of its pages were fetched, so a
    failed year never leaves a truncated block in the report.

    Args:
        config: Scorecard config (year span, thresholds)
        fetcher: Open fetcher
        writer: Open report writer
        on_error: 'halt' re-raises fetch/parse errors, 'skip' moves to the next year
        on_year_done: Called with each year once it is finished or skipped

    Raises:
        FetchError, ParseError: A year failed and on_error is 'halt'
        FileIOError: The report file could not be written
    """
    summary = RunSummary(
        started_at=datetime.now(timezone.utc),
        output_path=str(writer.path),
    )
    start_time = time.time()

    try:
        for year in config.years():
            try:
                state = fetcher.fetch_year(year)
            except (FetchError, ParseError) as e:
                if on_error == "halt":
                    logger.error(f"Year {year} failed, stopping run: {e}")
                    raise
                logger.error(f"Year {year} failed, skipping: {e}")
                summary.failed_years.append({
                    "year": year,
                    "type": type(e).__name__,
                    "error": str(e),
                })
            else:
                evaluation = evaluate_year(state.results, year, config)
                writer.write_year(evaluation)

                summary.years.append(YearSummary(
                    year=year,
                    total_reported=state.total_reported,
                    total_pages=state.total_pages,
                    records=state.record_count,
                    passed=evaluation.tally.passed,
                    failed=evaluation.tally.failed,
                    skipped=evaluation.tally.skipped,
                    errors=evaluation.errors,
                ))
                logger.info(
                    f"Year {year}: {evaluation.tally.passed} passed, "
                    f"{evaluation.tally.failed} failed, {evaluation.tally.skipped} skipped"
                )

            if on_year_done is not None:
                on_year_done(year)
    finally:
        summary.duration_seconds = time.time() - start_time

    return summary
