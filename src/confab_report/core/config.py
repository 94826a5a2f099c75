"""
Configuration for a conformer report run.
"""

import argparse
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_RMSD_CUTOFF = 0.5


@dataclass
class ReportConfig:
    """
    Options of a report run.

    Attributes:
        reference_file: Reference structure file (option ``f``)
        rmsd_cutoff: Minimum-RMSD threshold for a molecule to pass (option ``r``)
        conformer_file: Conformer file name, shown in the report header
        include_hydrogens: Whether hydrogens take part in alignment
        use_symmetry: Whether the RDKit superimposer tries symmetry-equivalent maps
        aligner: Name of the superimposer to use
    """

    reference_file: Optional[str] = None
    rmsd_cutoff: float = DEFAULT_RMSD_CUTOFF
    conformer_file: str = ""
    include_hydrogens: bool = False
    use_symmetry: bool = True
    aligner: str = "rdkit"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ReportConfig":
        """Build a config from parsed command-line options."""
        return cls(
            reference_file=args.reference,
            rmsd_cutoff=args.rmsd_cutoff,
            conformer_file=args.conformers,
            include_hydrogens=args.include_hydrogens,
            use_symmetry=not args.no_symmetry,
            aligner=args.aligner,
        )

    def validate(self) -> List[str]:
        """
        Check option values.

        Returns:
            List of problems; empty when the config is usable
        """
        from .domain.implementations import SUPERIMPOSERS

        errors = []
        if self.rmsd_cutoff < 0:
            errors.append(f"rmsd_cutoff must be non-negative, got {self.rmsd_cutoff}")
        if self.aligner not in SUPERIMPOSERS:
            errors.append(
                f"Unknown aligner '{self.aligner}', "
                f"choose from {', '.join(sorted(SUPERIMPOSERS))}"
            )
        return errors
