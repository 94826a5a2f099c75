"""Domain model for structure alignment results."""

from dataclasses import dataclass


@dataclass
class AlignmentResult:
    """Contains results from superimposing a conformer onto its reference."""

    rmsd: float
    matched_atoms: int

    @property
    def failed(self) -> bool:
        return self.matched_atoms == 0
