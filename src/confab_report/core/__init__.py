"""Core domain models, interfaces and services for the conformer report."""

from .config import ReportConfig
from .domain.models.alignment_result import AlignmentResult
from .domain.models.histogram import BIN_THRESHOLDS, RMSDHistogram
from .domain.models.structure_record import StructureRecord
from .domain.interfaces.structure_source import StructureSource
from .domain.interfaces.structure_superimposer import StructureSuperimposer
from .exceptions import (
    ConfabReportError,
    ExhaustedError,
    MissingReferenceError,
    ReportFinishedError,
    UnreadableFileError,
    UnsupportedFormatError,
)
from .services.reference_cursor import ReferenceCursor
from .services.report_aggregator import ReportAggregator

__all__ = [
    "ReportConfig",
    "AlignmentResult",
    "BIN_THRESHOLDS",
    "RMSDHistogram",
    "StructureRecord",
    "StructureSource",
    "StructureSuperimposer",
    "ConfabReportError",
    "ExhaustedError",
    "MissingReferenceError",
    "ReportFinishedError",
    "UnreadableFileError",
    "UnsupportedFormatError",
    "ReferenceCursor",
    "ReportAggregator",
]
