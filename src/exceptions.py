"""Error types raised by the scorecard pipeline."""

from typing import Any, Mapping


class ScorecardError(Exception):
    """Base error for the scorecard pipeline.

    Carries a small structured context (year, page, url, field...) so the CLI
    can tell the user which operation failed.
    """

    def __init__(self, message: str, *, context: Mapping[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})


class FetchError(ScorecardError):
    """Network or HTTP failure while calling the Scorecard API."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_text: str | None = None,
        context: Mapping[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.status_code = status_code
        self.response_text = response_text


class ParseError(ScorecardError):
    """Response body is not valid JSON or lacks expected top-level keys."""

    def __init__(
        self,
        message: str,
        *,
        response_text: str | None = None,
        context: Mapping[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.response_text = response_text


class RecordError(ScorecardError):
    """A single record could not be turned into a SchoolRecord."""


class MissingFieldError(RecordError):
    """A required record field is absent or null."""

    def __init__(self, field: str, *, context: Mapping[str, Any] | None = None):
        super().__init__(f"Record is missing required field '{field}'", context=context)
        self.field = field


class FileIOError(ScorecardError):
    """The report file cannot be opened, written or closed."""
