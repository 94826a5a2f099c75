"""Formatting of report lines onto a text stream."""

from typing import TextIO

from ..domain.models.histogram import RMSDHistogram


def format_number(value: float) -> str:
    """Format a float the way the report always has: six significant digits, no padding."""
    return f"{value:g}"


class ReportWriter:
    """Writes the sections of a conformer report to an output stream."""

    def __init__(self, stream: TextIO):
        self._stream = stream

    def _write(self, text: str) -> None:
        self._stream.write(text)

    def write_header(self, reference_file: str, conformer_file: str) -> None:
        self._write("**Generating Confab Report \n")
        self._write(f"..Reference file = {reference_file}\n")
        self._write(f"..Conformer file = {conformer_file}\n\n")

    def write_molecule(self, number: int, title: str) -> None:
        self._write(f"..Molecule {number}\n..title = {title}\n")

    def write_skipped_molecule(self, number: int, title: str) -> None:
        """Block for a reference molecule that has no conformers."""
        self.write_molecule(number, title)
        self.write_conformer_count(0)

    def write_conformer_count(self, count: int) -> None:
        self._write(f"..number of confs = {count}\n")

    def write_histogram(self, histogram: RMSDHistogram, cutoff: float, passed: bool) -> None:
        """
        Write minimum RMSD, cumulative bin counts and the cutoff verdict.

        Args:
            histogram: Histogram of a closed, non-empty molecule group
            cutoff: RMSD cutoff of the run
            passed: Whether the minimum RMSD is within the cutoff
        """
        self._write(f"..minimum rmsd = {format_number(histogram.minimum)}\n")

        labels = " ".join(format_number(t) for t in histogram.thresholds)
        self._write(f"..confs less than cutoffs: {labels}\n")

        counts = " ".join(str(c) for c in histogram.cumulative_counts())
        self._write(f"..{counts}\n")

        verdict = "Yes" if passed else "No"
        self._write(f"..cutoff ({format_number(cutoff)}) passed =  {verdict}\n")
        self._write("\n")

    def write_summary(self, n_molecules: int, cutoff: float, cutoff_passed: int) -> None:
        self._write("\n**Summary\n")
        self._write(f"..number of molecules = {n_molecules}\n")
        self._write(
            f"..less than cutoff({format_number(cutoff)}) = {cutoff_passed}\n"
        )
