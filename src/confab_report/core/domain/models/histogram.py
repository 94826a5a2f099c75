#!/usr/bin/env python3
# src/confab_report/core/domain/models/histogram.py

"""
Cumulative RMSD histogram for the conformers of one molecule.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

# Upper edges of the RMSD bins. The last one is a catch-all ceiling.
BIN_THRESHOLDS: Tuple[float, ...] = (0.2, 0.5, 1.0, 1.5, 2.0, 3.0, 4.0, 100.0)


@dataclass(frozen=True)
class RMSDHistogram:
    """Binned RMSD values of a closed molecule group."""

    thresholds: Tuple[float, ...]
    counts: Tuple[int, ...]
    sorted_rmsds: Tuple[float, ...]

    @classmethod
    def from_rmsds(
        cls, rmsds: Iterable[float], thresholds: Tuple[float, ...] = BIN_THRESHOLDS
    ) -> "RMSDHistogram":
        """
        Bin RMSD values by the first threshold they do not exceed.

        Values are walked in ascending order alongside the thresholds, so a
        value equal to a threshold falls into that threshold's bin. Anything
        above the last threshold is clamped into the last bin.

        Args:
            rmsds: RMSD values of one molecule group, in any order
            thresholds: Ascending upper bin edges

        Returns:
            RMSDHistogram with one count per threshold
        """
        values = sorted(rmsds)
        counts = [0] * len(thresholds)
        last = len(thresholds) - 1

        bin_idx = 0
        for value in values:
            while bin_idx < last and value > thresholds[bin_idx]:
                bin_idx += 1
            counts[bin_idx] += 1

        return cls(
            thresholds=tuple(thresholds),
            counts=tuple(counts),
            sorted_rmsds=tuple(values),
        )

    @property
    def size(self) -> int:
        return len(self.sorted_rmsds)

    @property
    def minimum(self) -> float:
        """Smallest RMSD in the group.

        Raises:
            ValueError: If the group has no conformers
        """
        if not self.sorted_rmsds:
            raise ValueError("Histogram of an empty group has no minimum")
        return self.sorted_rmsds[0]

    def cumulative_counts(self) -> List[int]:
        """Number of conformers at or below each threshold."""
        cumulative = []
        running = 0
        for count in self.counts:
            running += count
            cumulative.append(running)
        return cumulative

    def passes(self, cutoff: float) -> bool:
        """Whether the best conformer is within the cutoff."""
        return self.minimum <= cutoff
