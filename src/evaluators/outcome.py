"""Pass/fail rule and per-year evaluation."""

import logging
from dataclasses import dataclass, field
from typing import Any

from src.exceptions import RecordError
from src.models.config import ScorecardConfig, ThresholdConfig
from src.models.school import SchoolOutcome, SchoolRecord
from src.normalizers.scorecard import parse_record


logger = logging.getLogger(__name__)

# Substitutes for null metrics; both always fail the thresholds
EARNINGS_SENTINEL = -1
DEFAULT_RATE_SENTINEL = 1.0

# Maximum skipped-record errors kept for the summary
MAX_ERROR_SAMPLES = 10


def school_passes(record: SchoolRecord, thresholds: ThresholdConfig) -> bool:
    """Return True if earnings beat and default rate stays under the thresholds."""
    # Earnings compare as whole dollars, fractional cents dropped
    earnings = int(record.mean_earnings) if record.mean_earnings is not None else EARNINGS_SENTINEL
    default_rate = (
        record.default_rate if record.default_rate is not None else DEFAULT_RATE_SENTINEL
    )
    return earnings > thresholds.min_earnings and default_rate < thresholds.max_default_rate


@dataclass
class YearTally:
    """Pass/fail counters for one year."""

    passed: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def evaluated(self) -> int:
        return self.passed + self.failed

    def record(self, passed: bool) -> None:
        if passed:
            self.passed += 1
        else:
            self.failed += 1


@dataclass
class YearEvaluation:
    """Outcomes of one year's Result Set, in Result Set order."""

    year: int
    outcomes: list[SchoolOutcome] = field(default_factory=list)
    tally: YearTally = field(default_factory=YearTally)
    errors: list[dict[str, Any]] = field(default_factory=list)


def evaluate_year(
    results: list[dict[str, Any]],
    year: int,
    config: ScorecardConfig,
) -> YearEvaluation:
    """Evaluate every record of a year.

    Does not touch its inputs; evaluating the same results twice gives the
    same outcomes and tally. Records that fail extraction are skipped.
    """
    evaluation = YearEvaluation(year=year)

    for index, raw in enumerate(results):
        try:
            record = parse_record(raw, year, config)
        except RecordError as e:
            evaluation.tally.skipped += 1
            logger.warning(f"Year {year}: skipping record {index}: {e}")
            if len(evaluation.errors) < MAX_ERROR_SAMPLES:
                evaluation.errors.append({
                    "type": type(e).__name__,
                    "index": index,
                    "error": str(e),
                })
            continue

        passed = school_passes(record, config.thresholds)
        evaluation.tally.record(passed)
        evaluation.outcomes.append(
            SchoolOutcome(school_id=record.school_id, name=record.name, passed=passed)
        )

    logger.debug(
        f"Year {year}: {evaluation.tally.passed} passed, {evaluation.tally.failed} failed, "
        f"{evaluation.tally.skipped} skipped"
    )
    return evaluation
