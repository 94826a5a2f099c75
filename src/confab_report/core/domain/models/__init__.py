"""Domain model classes."""

from .aggregator_state import AggregatorState
from .alignment_result import AlignmentResult
from .histogram import BIN_THRESHOLDS, RMSDHistogram
from .structure_record import Conformer, ReferenceEntry, StructureRecord

__all__ = [
    "AggregatorState",
    "AlignmentResult",
    "BIN_THRESHOLDS",
    "RMSDHistogram",
    "Conformer",
    "ReferenceEntry",
    "StructureRecord",
]
