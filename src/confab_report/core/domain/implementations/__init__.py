"""Superimposer implementations."""

from typing import Dict, Type

from ..interfaces.structure_superimposer import StructureSuperimposer
from .kabsch_superimposer import KabschSuperimposer
from .rdkit_best_rms_superimposer import RDKitBestRMSSuperimposer

SUPERIMPOSERS: Dict[str, Type[StructureSuperimposer]] = {
    "rdkit": RDKitBestRMSSuperimposer,
    "kabsch": KabschSuperimposer,
}

__all__ = ["KabschSuperimposer", "RDKitBestRMSSuperimposer", "SUPERIMPOSERS"]
