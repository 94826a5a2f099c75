"""Implementation of structure superimposition using RDKit's rdMolAlign."""

import logging
from typing import Optional

from rdkit import Chem
from rdkit.Chem import rdMolAlign

from ..interfaces.structure_superimposer import StructureSuperimposer
from ..models.alignment_result import AlignmentResult


class RDKitBestRMSSuperimposer(StructureSuperimposer):
    """Superimposer that takes the best RMSD over symmetry-equivalent atom maps."""

    def __init__(self, include_hydrogens: bool = False, use_symmetry: bool = True):
        """Initialize superimposer.

        Args:
            include_hydrogens: Whether hydrogens take part in the alignment
            use_symmetry: Try every symmetry-equivalent atom mapping instead of
                pairing atoms by index
        """
        self.include_hydrogens = include_hydrogens
        self.use_symmetry = use_symmetry
        self._reference_mol: Optional[Chem.Mol] = None
        self.logger = logging.getLogger(__name__)

    def _prepare(self, mol: Chem.Mol) -> Chem.Mol:
        """Copy a molecule so alignment never moves the caller's coordinates."""
        if mol.GetNumConformers() == 0:
            raise ValueError(f"Molecule '{_title(mol)}' has no 3D coordinates")
        if self.include_hydrogens:
            return Chem.Mol(mol)
        return Chem.RemoveHs(mol, sanitize=False)

    def set_reference(self, reference: Chem.Mol) -> None:
        """Set a reference structure that will be cached for future alignments."""
        self._reference_mol = self._prepare(reference)

    def align(self, target: Chem.Mol) -> AlignmentResult:
        """
        Align a conformer onto the reference.

        Args:
            target: Conformer to align

        Returns:
            AlignmentResult; rmsd is inf when no atom mapping exists
        """
        if self._reference_mol is None:
            raise ValueError("No reference structure set")

        probe = self._prepare(target)
        n_atoms = probe.GetNumAtoms()

        try:
            if self.use_symmetry:
                rmsd = rdMolAlign.GetBestRMS(probe, self._reference_mol)
            else:
                if n_atoms != self._reference_mol.GetNumAtoms():
                    raise RuntimeError("atom counts differ")
                atom_map = [(i, i) for i in range(n_atoms)]
                rmsd = rdMolAlign.AlignMol(probe, self._reference_mol, atomMap=atom_map)
        except (RuntimeError, ValueError) as e:
            self.logger.warning(
                f"Failed to align '{_title(target)}' onto "
                f"'{_title(self._reference_mol)}': {str(e)}"
            )
            return AlignmentResult(rmsd=float("inf"), matched_atoms=0)

        return AlignmentResult(rmsd=float(rmsd), matched_atoms=n_atoms)


def _title(mol: Chem.Mol) -> str:
    return mol.GetProp("_Name") if mol.HasProp("_Name") else ""
