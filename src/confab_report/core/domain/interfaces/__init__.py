"""Interfaces of the report's external collaborators."""

from .structure_source import StructureSource
from .structure_superimposer import StructureSuperimposer

__all__ = ["StructureSource", "StructureSuperimposer"]
