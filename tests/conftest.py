"""
Pytest configuration for the scorecard report.

Provides fixtures for:
- A small test configuration (page size 2, output under tmp_path)
- A fake Scorecard API served through httpx.MockTransport
- Synthetic school records
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx
import pytest

from src.models.config import PaginationConfig, ScorecardConfig

TEST_API_KEY = "test-key"
EARNINGS_FIELD = "earnings.10_yrs_after_entry.working_not_enrolled.mean_earnings"
DEFAULT_RATE_FIELD = "repayment.3_yr_default_rate"


def make_record(
    school_id: int | None,
    name: str | None,
    year: int,
    earnings: float | None,
    default_rate: float | None,
) -> dict[str, Any]:
    """Build a raw API result the way the Scorecard endpoint returns it."""
    record: dict[str, Any] = {
        "school.state": "IL",
        f"{year}.{EARNINGS_FIELD}": earnings,
        f"{year}.{DEFAULT_RATE_FIELD}": default_rate,
    }
    if school_id is not None:
        record["id"] = school_id
    if name is not None:
        record["school.name"] = name
    return record


class FakeScorecardApi:
    """In-memory stand-in for the Scorecard schools endpoint.

    Serves records per year, sliced by the request's page and per_page
    parameters, and records every request it receives.
    """

    def __init__(self) -> None:
        self.records: dict[int, list[dict[str, Any]]] = {}
        self.reported_totals: dict[int, Any] = {}
        self.failures: dict[tuple[int, int], httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def add_year(self, year: int, records: list[dict[str, Any]], total: Any = None) -> None:
        self.records[year] = records
        if total is not None:
            self.reported_totals[year] = total

    def fail(self, year: int, page: int, response: httpx.Response) -> None:
        self.failures[(year, page)] = response

    @staticmethod
    def year_of(request: httpx.Request) -> int:
        # fields=id,school.name,school.state,<year>.earnings...,<year>.repayment...
        metric_field = request.url.params["fields"].split(",")[-1]
        return int(metric_field.split(".")[0])

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        year = self.year_of(request)
        page = int(request.url.params["page"])
        per_page = int(request.url.params["per_page"])

        if (year, page) in self.failures:
            return self.failures[(year, page)]

        records = self.records.get(year, [])
        total = self.reported_totals.get(year, len(records))
        return httpx.Response(
            200,
            json={
                "metadata": {"total": str(total), "page": page, "per_page": per_page},
                "results": records[page * per_page:(page + 1) * per_page],
            },
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def pages_requested(self, year: int) -> list[int]:
        return [
            int(r.url.params["page"]) for r in self.requests if self.year_of(r) == year
        ]


@pytest.fixture
def fake_api() -> FakeScorecardApi:
    return FakeScorecardApi()


@pytest.fixture
def report_path(tmp_path: Path) -> Path:
    return tmp_path / "Desktop" / "CollegeScoreCard.csv"


@pytest.fixture
def config(report_path: Path) -> ScorecardConfig:
    """Two-record pages, one year starting at 2010."""
    return ScorecardConfig(
        api_key=TEST_API_KEY,
        base_year=2010,
        year_span=1,
        pagination=PaginationConfig(page_size=2),
        output_path=report_path,
    )


@pytest.fixture
def scenario_2010() -> list[dict[str, Any]]:
    """Pass, fail on low earnings, fail on null earnings."""
    return [
        make_record(100001, "Alpha College", 2010, 50000, 0.02),
        make_record(100002, "Beta University", 2010, 40000, 0.01),
        make_record(100003, "Gamma Institute", 2010, None, 0.01),
    ]
