"""Domain model for a titled 3D structure."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class StructureRecord:
    """A named 3D structure read from a structure file.

    The structure itself is opaque to the report; only superimposers look
    inside it.
    """

    title: str
    structure: Any


# A generated conformer and the reference it is compared against share a shape.
Conformer = StructureRecord
ReferenceEntry = StructureRecord
