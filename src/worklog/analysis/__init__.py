"""Reporting on logged time."""

from worklog.analysis.reports import ReportGenerator

__all__ = ["ReportGenerator"]
