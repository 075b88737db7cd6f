"""Configuration models for the scorecard report."""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_API_KEY_ENV = "COLLEGE_API"


def _default_output_path() -> Path:
    return Path.home() / "Desktop" / "CollegeScoreCard.csv"


class PaginationConfig(BaseModel):
    """Pagination configuration."""

    model_config = ConfigDict(frozen=True)

    page_size: int = Field(default=100, ge=1, le=100)


class ThresholdConfig(BaseModel):
    """Pass rule thresholds (both comparisons are strict)."""

    model_config = ConfigDict(frozen=True)

    min_earnings: float = Field(default=45000.0, gt=0)
    max_default_rate: float = Field(default=0.025, gt=0.0, lt=1.0)


class ScorecardConfig(BaseModel):
    """College Scorecard fetcher and report configuration."""

    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(default="https://api.data.gov/ed/collegescorecard/v1/schools")
    sort: str = Field(default="school.name")

    base_fields: list[str] = Field(default_factory=lambda: ["id", "school.name", "school.state"])
    earnings_field: str = Field(
        default="earnings.10_yrs_after_entry.working_not_enrolled.mean_earnings"
    )
    default_rate_field: str = Field(default="repayment.3_yr_default_rate")
    state: str = Field(default="IL")

    api_key_env: str = Field(default=DEFAULT_API_KEY_ENV)
    api_key: str = Field(default_factory=lambda: os.environ.get(DEFAULT_API_KEY_ENV, ""))

    base_year: int = Field(default=1996, ge=1990)
    year_span: int = Field(default=22, ge=1)

    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    thresholds: ThresholdConfig = Field(default_factory=ThresholdConfig)
    timeout: float = Field(default=30.0, ge=1.0)
    output_path: Path = Field(default_factory=_default_output_path)

    @classmethod
    def from_yaml(cls, data: dict[str, Any]) -> "ScorecardConfig":
        """Create config from parsed YAML data."""
        config_data = {
            "endpoint": data.get("endpoint"),
            "sort": data.get("sort"),
            "base_fields": data.get("base_fields"),
            "earnings_field": data.get("earnings_field"),
            "default_rate_field": data.get("default_rate_field"),
            "state": data.get("state"),
            "base_year": data.get("base_year"),
            "year_span": data.get("year_span"),
            "timeout": data.get("timeout"),
            "output_path": data.get("output_path"),
        }

        if "pagination" in data:
            config_data["pagination"] = PaginationConfig(**data["pagination"])
        if "thresholds" in data:
            config_data["thresholds"] = ThresholdConfig(**data["thresholds"])

        # The key itself never lives in the YAML file, only the variable name
        api_key_env = data.get("api_key_env")
        if api_key_env:
            config_data["api_key_env"] = api_key_env
            config_data["api_key"] = os.environ.get(api_key_env, "")

        if config_data.get("output_path") is not None:
            config_data["output_path"] = Path(config_data["output_path"]).expanduser()

        # Filter out None values
        config_data = {k: v for k, v in config_data.items() if v is not None}

        return cls(**config_data)

    def years(self) -> range:
        """Years covered by one run, in processing order."""
        return range(self.base_year, self.base_year + self.year_span)

    def earnings_key(self, year: int) -> str:
        """Year-qualified earnings field name, e.g. '2010.earnings...'."""
        return f"{year}.{self.earnings_field}"

    def default_rate_key(self, year: int) -> str:
        """Year-qualified default rate field name."""
        return f"{year}.{self.default_rate_field}"

    def get_safe_dict(self) -> dict[str, Any]:
        """Config dump safe for logging (API key redacted)."""
        data = self.model_dump(mode="json")
        data["api_key"] = "***" if self.api_key else ""
        return data
