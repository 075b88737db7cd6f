"""Run summary models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class YearSummary(BaseModel):
    """Statistics for one processed year."""

    year: int = Field(description="Data year")
    total_reported: int = Field(description="metadata.total reported by the API")
    total_pages: int = Field(description="Pages requested for the year")
    records: int = Field(description="Records collected across all pages")
    passed: int = Field(default=0)
    failed: int = Field(default=0)
    skipped: int = Field(default=0, description="Records rejected by field extraction")
    errors: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Skipped-record error samples (first N)"
    )


class RunSummary(BaseModel):
    """Summary of a multi-year report run."""

    started_at: datetime = Field(description="Run start timestamp")
    output_path: str = Field(description="Report file the run appended to")
    years: list[YearSummary] = Field(default_factory=list)
    failed_years: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Years skipped after a fetch or parse error",
    )
    duration_seconds: float = Field(default=0.0)

    @property
    def total_passed(self) -> int:
        return sum(y.passed for y in self.years)

    @property
    def total_failed(self) -> int:
        return sum(y.failed for y in self.years)

    @property
    def total_skipped(self) -> int:
        return sum(y.skipped for y in self.years)

    @property
    def total_records(self) -> int:
        return sum(y.records for y in self.years)
