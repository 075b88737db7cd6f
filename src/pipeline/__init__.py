"""Report pipeline orchestration."""

from .runner import run_report

__all__ = ["run_report"]
