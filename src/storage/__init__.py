"""Storage layer for the yearly report."""

from .report import ReportWriter

__all__ = ["ReportWriter"]
