"""Pass/fail evaluation of school records."""

from .outcome import YearEvaluation, YearTally, evaluate_year, school_passes

__all__ = ["YearEvaluation", "YearTally", "evaluate_year", "school_passes"]
