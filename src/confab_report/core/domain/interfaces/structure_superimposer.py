"""Interface for structure superimposition strategies."""

from abc import ABC, abstractmethod
from typing import Any

from ..models.alignment_result import AlignmentResult


class StructureSuperimposer(ABC):
    """Abstract base class for superimposing conformers onto a fixed reference."""

    @abstractmethod
    def set_reference(self, reference: Any) -> None:
        """
        Set the reference structure used by subsequent alignments.

        Args:
            reference: Reference structure
        """
        pass

    @abstractmethod
    def align(self, target: Any) -> AlignmentResult:
        """
        Superimpose a structure onto the current reference.

        Args:
            target: Structure to align

        Returns:
            AlignmentResult containing the RMSD after optimal superposition

        Raises:
            ValueError: If no reference has been set
        """
        pass
