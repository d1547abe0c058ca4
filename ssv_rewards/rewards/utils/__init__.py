"""Utility functions for the reward engine."""

from .report_export import ReportExporter, write_csv, write_json

__all__ = [
    "ReportExporter",
    "write_csv",
    "write_json",
]
