"""Data normalizers for converting API results to the SchoolRecord schema."""

from .scorecard import parse_record

__all__ = ["parse_record"]
