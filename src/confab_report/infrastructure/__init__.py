"""Infrastructure implementations of core interfaces."""

from .readers.rdkit_structure_source import RDKitStructureSource, open_structure_source

__all__ = [
    "RDKitStructureSource",
    "open_structure_source",
]
