"""Scorecard raw record normalization to the SchoolRecord schema."""

from typing import Any

from pydantic import ValidationError

from src.exceptions import MissingFieldError, RecordError
from src.models.config import ScorecardConfig
from src.models.school import SchoolRecord


ID_FIELD = "id"
NAME_FIELD = "school.name"


def _required(raw: dict[str, Any], key: str, year: int) -> Any:
    value = raw.get(key)
    if value is None:
        raise MissingFieldError(key, context={"year": year, "id": raw.get(ID_FIELD)})
    return value


def parse_record(raw: dict[str, Any], year: int, config: ScorecardConfig) -> SchoolRecord:
    """Normalize one raw API result to a SchoolRecord.

    Args:
        raw: Result object from the API's 'results' array
        year: Data year the metric field names are qualified with
        config: Scorecard config (metric field suffixes)

    Returns:
        SchoolRecord with None for null or absent metrics

    Raises:
        MissingFieldError: 'id' or 'school.name' is absent or null
        RecordError: A value has the wrong type (e.g. text earnings)
    """
    if not isinstance(raw, dict):
        raise RecordError(
            f"Expected a record object, got {type(raw).__name__}",
            context={"year": year},
        )

    school_id = _required(raw, ID_FIELD, year)
    name = _required(raw, NAME_FIELD, year)

    try:
        return SchoolRecord(
            school_id=school_id,
            name=name,
            year=year,
            mean_earnings=raw.get(config.earnings_key(year)),
            default_rate=raw.get(config.default_rate_key(year)),
        )
    except ValidationError as e:
        raise RecordError(
            f"Invalid record {school_id}: {e.error_count()} bad field(s)",
            context={"year": year, "id": school_id, "errors": e.errors(include_url=False)},
        ) from e
