"""Core report services."""

from .reference_cursor import ReferenceCursor
from .report_aggregator import ReportAggregator
from .report_writer import ReportWriter

__all__ = ["ReferenceCursor", "ReportAggregator", "ReportWriter"]
