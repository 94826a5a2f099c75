"""Readers for structure files."""

from .rdkit_structure_source import (
    FORMAT_EXTENSIONS,
    RDKitStructureSource,
    format_from_filename,
    open_structure_source,
)

__all__ = [
    "FORMAT_EXTENSIONS",
    "RDKitStructureSource",
    "format_from_filename",
    "open_structure_source",
]
