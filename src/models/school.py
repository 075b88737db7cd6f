"""School record models."""

from pydantic import BaseModel, ConfigDict, Field


class SchoolRecord(BaseModel):
    """One institution's data for one year.

    Metric fields are None when the API reports them as null (or leaves them
    out of the response).
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    school_id: str = Field(description="Scorecard unit id")
    name: str = Field(description="School display name (school.name)")
    year: int = Field(description="Data year the metrics belong to")
    mean_earnings: float | None = Field(
        default=None,
        description="Mean earnings of students working and not enrolled 10 years after entry",
    )
    default_rate: float | None = Field(default=None, description="3-year cohort default rate")


class SchoolOutcome(BaseModel):
    """Pass/fail result for one school, as written to the report."""

    model_config = ConfigDict(frozen=True)

    school_id: str
    name: str
    passed: bool

    @property
    def flag(self) -> int:
        """Report column value: 1 for pass, 0 for fail."""
        return 1 if self.passed else 0
