"""Running state of one report run."""

from dataclasses import dataclass, field
from typing import List, Optional

from .structure_record import ReferenceEntry


@dataclass
class AggregatorState:
    """
    Counters and the open molecule group of a report run.

    Attributes:
        n_molecules: Molecules reported so far, including skipped references
        cutoff_passed: Molecules whose best conformer was within the cutoff
        current_title: Title of the open group, None before the first conformer
        current_reference: Reference entry matched for the open group
        rmsds: RMSD values collected for the open group
        n_conformers: Conformers processed over the whole run
        finished: True once the summary has been written
        failed: True once a fatal error stopped the run
    """

    n_molecules: int = 0
    cutoff_passed: int = 0
    current_title: Optional[str] = None
    current_reference: Optional[ReferenceEntry] = None
    rmsds: List[float] = field(default_factory=list)
    n_conformers: int = 0
    finished: bool = False
    failed: bool = False

    @property
    def started(self) -> bool:
        return self.n_conformers > 0
