"""Conformer report: compare generated conformers against reference structures."""

from .core import (
    BIN_THRESHOLDS,
    ConfabReportError,
    ExhaustedError,
    MissingReferenceError,
    ReferenceCursor,
    ReportAggregator,
    ReportConfig,
    RMSDHistogram,
    UnreadableFileError,
    UnsupportedFormatError,
)

__version__ = "0.1.0"

__all__ = [
    "BIN_THRESHOLDS",
    "ConfabReportError",
    "ExhaustedError",
    "MissingReferenceError",
    "ReferenceCursor",
    "ReportAggregator",
    "ReportConfig",
    "RMSDHistogram",
    "UnreadableFileError",
    "UnsupportedFormatError",
]
