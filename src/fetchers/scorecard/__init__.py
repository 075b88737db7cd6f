"""College Scorecard fetcher module."""

from .client import ScorecardClient
from .fetcher import ScorecardFetcher, YearState, compute_total_pages
from .request import build_query_url

__all__ = [
    "ScorecardClient",
    "ScorecardFetcher",
    "YearState",
    "build_query_url",
    "compute_total_pages",
]
