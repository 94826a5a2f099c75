"""Core domain models and interfaces."""

from .models.aggregator_state import AggregatorState
from .models.alignment_result import AlignmentResult
from .models.histogram import BIN_THRESHOLDS, RMSDHistogram
from .models.structure_record import Conformer, ReferenceEntry, StructureRecord
from .interfaces.structure_source import StructureSource
from .interfaces.structure_superimposer import StructureSuperimposer

__all__ = [
    "AggregatorState",
    "AlignmentResult",
    "BIN_THRESHOLDS",
    "RMSDHistogram",
    "Conformer",
    "ReferenceEntry",
    "StructureRecord",
    "StructureSource",
    "StructureSuperimposer",
]
