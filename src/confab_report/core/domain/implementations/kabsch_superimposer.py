"""Implementation of structure superimposition using the Kabsch algorithm."""

import logging
from typing import Any, Optional, Tuple

import numpy as np
from rdkit import Chem

from ..interfaces.structure_superimposer import StructureSuperimposer
from ..models.alignment_result import AlignmentResult


class KabschSuperimposer(StructureSuperimposer):
    """Superimpose structures by minimizing RMSD over index-paired atoms.

    Structures may be RDKit molecules with a 3D conformer or plain
    (n_atoms, 3) coordinate arrays.
    """

    def __init__(self, include_hydrogens: bool = False):
        """Initialize superimposer.

        Args:
            include_hydrogens: Whether hydrogens of RDKit molecules take part
        """
        self.include_hydrogens = include_hydrogens
        self._reference_coords: Optional[np.ndarray] = None
        self.logger = logging.getLogger(__name__)

    def set_reference(self, reference: Any) -> None:
        self._reference_coords = self._get_coordinates(reference)

    def align(self, target: Any) -> AlignmentResult:
        """
        Align a structure onto the reference.

        Args:
            target: Structure to align

        Returns:
            AlignmentResult; rmsd is inf when the atom counts differ
        """
        if self._reference_coords is None:
            raise ValueError("No reference structure set")

        target_coords = self._get_coordinates(target)
        if target_coords.shape != self._reference_coords.shape or not len(target_coords):
            self.logger.warning(
                f"Cannot pair atoms: reference has {len(self._reference_coords)}, "
                f"target has {len(target_coords)}"
            )
            return AlignmentResult(rmsd=float("inf"), matched_atoms=0)

        rotation, translation = self._calculate_transformation(
            self._reference_coords, target_coords
        )
        aligned_coords = np.dot(target_coords, rotation) + translation
        rmsd = np.sqrt(
            np.mean(np.sum((self._reference_coords - aligned_coords) ** 2, axis=1))
        )

        return AlignmentResult(rmsd=float(rmsd), matched_atoms=len(target_coords))

    def _get_coordinates(self, structure: Any) -> np.ndarray:
        """Get an (n_atoms, 3) coordinate array from a molecule or array."""
        if isinstance(structure, Chem.Mol):
            mol = structure if self.include_hydrogens else Chem.RemoveHs(structure)
            if mol.GetNumConformers() == 0:
                raise ValueError("Molecule has no 3D coordinates")
            return np.asarray(mol.GetConformer().GetPositions(), dtype=float)
        return np.asarray(structure, dtype=float).reshape(-1, 3)

    def _calculate_transformation(
        self, ref_coords: np.ndarray, target_coords: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Calculate the rotation and translation mapping target onto reference."""
        # Center coordinates
        ref_center = np.mean(ref_coords, axis=0)
        target_center = np.mean(target_coords, axis=0)

        ref_centered = ref_coords - ref_center
        target_centered = target_coords - target_center

        # Coordinates are rows, so the rotation is applied as target @ rotation
        correlation_matrix = np.dot(target_centered.T, ref_centered)

        # SVD
        U, _, Vt = np.linalg.svd(correlation_matrix)

        rotation = np.dot(U, Vt)

        # Ensure right-handed coordinate system
        if np.linalg.det(rotation) < 0:
            Vt[-1] *= -1
            rotation = np.dot(U, Vt)

        translation = ref_center - np.dot(target_center, rotation)

        return rotation, translation
