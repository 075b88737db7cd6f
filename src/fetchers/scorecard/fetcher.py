"""Scorecard year fetcher with pagination."""

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from src.exceptions import ParseError
from src.models.config import ScorecardConfig

from .client import ScorecardClient


logger = logging.getLogger(__name__)


def compute_total_pages(total_records: int, page_size: int) -> int:
    """Number of pages to request for a year.

    Always floor(total / page_size) + 1, so an exact multiple of page_size
    requests one trailing page that comes back empty.
    """
    return total_records // page_size + 1


@dataclass
class YearState:
    """Result Set and progress for one year's retrieval."""

    year: int
    results: list[dict[str, Any]] = field(default_factory=list)
    total_reported: int = 0
    total_pages: int = 0
    pages_fetched: int = 0
    start_time: float = field(default_factory=time.time)

    @property
    def record_count(self) -> int:
        return len(self.results)

    @property
    def duration(self) -> float:
        return time.time() - self.start_time


class ScorecardFetcher:
    """Fetcher for all Scorecard records of a year.

    Handles page counting and accumulation. Any page failure aborts the year.
    """

    def __init__(
        self,
        config: ScorecardConfig,
        transport: httpx.BaseTransport | None = None,
    ):
        self.config = config
        self.client = ScorecardClient(config, transport=transport)

    def close(self) -> None:
        """Close resources."""
        self.client.close()

    def __enter__(self) -> "ScorecardFetcher":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def fetch_year(self, year: int) -> YearState:
        """Collect every record of a year into a fresh YearState.

        Page 0 is requested once: its metadata sets the page count and its
        results seed the Result Set.

        Raises:
            FetchError: A page request failed
            ParseError: A page response was malformed
        """
        page_size = self.config.pagination.page_size
        state = YearState(year=year)

        logger.debug(f"Starting fetch: year={year}, state={self.config.state}, page_size={page_size}")

        results, metadata = self.client.get_page(year, 0)
        state.pages_fetched = 1
        try:
            state.total_reported = self.client.total_records(metadata)
        except ParseError as e:
            e.context.update({"year": year, "page": 0})
            e.message = f"Year {year} page 0: {e.message}"
            e.args = (e.message,)
            raise
        state.total_pages = compute_total_pages(state.total_reported, page_size)
        state.results.extend(results)

        for page in range(1, state.total_pages):
            results, _ = self.client.get_page(year, page)
            state.pages_fetched += 1
            state.results.extend(results)

        if state.record_count != state.total_reported:
            logger.warning(
                f"Year {year}: API reported {state.total_reported} records, "
                f"collected {state.record_count}"
            )

        logger.info(
            f"Fetched year {year}: {state.pages_fetched} pages, "
            f"{state.record_count} records, {state.duration:.1f}s"
        )
        return state
