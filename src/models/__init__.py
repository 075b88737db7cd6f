"""Data models for scorecard fetching and reporting."""

from .school import SchoolRecord, SchoolOutcome
from .summary import RunSummary, YearSummary
from .config import ScorecardConfig, PaginationConfig, ThresholdConfig

__all__ = [
    "SchoolRecord",
    "SchoolOutcome",
    "RunSummary",
    "YearSummary",
    "ScorecardConfig",
    "PaginationConfig",
    "ThresholdConfig",
]
