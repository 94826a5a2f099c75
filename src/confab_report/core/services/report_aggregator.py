"""Service that turns a stream of conformers into a conformer report."""

import logging
from typing import Any, Callable, Iterable, Optional, TextIO, Tuple

from ..config import ReportConfig
from ..domain.interfaces.structure_source import StructureSource
from ..domain.interfaces.structure_superimposer import StructureSuperimposer
from ..domain.models.aggregator_state import AggregatorState
from ..domain.models.histogram import RMSDHistogram
from ..domain.models.structure_record import ReferenceEntry
from ..exceptions import ConfabReportError, MissingReferenceError, ReportFinishedError
from .reference_cursor import ReferenceCursor
from .report_writer import ReportWriter

SourceOpener = Callable[[str], StructureSource]


class ReportAggregator:
    """
    Compare conformers against their reference structures, one molecule at a time.

    Conformers arrive in order, grouped by title. Each title change closes
    the previous molecule (writing its histogram) and moves the reference
    cursor forward to the new title. The summary is written after the
    conformer flagged as last.
    """

    def __init__(
        self,
        output: TextIO,
        superimposer: StructureSuperimposer,
        config: Optional[ReportConfig] = None,
        source_opener: Optional[SourceOpener] = None,
    ):
        """
        Initialize the aggregator.

        Args:
            output: Stream the report is written to
            superimposer: Strategy used to score each conformer
            config: Run options; defaults to ReportConfig()
            source_opener: Opens the reference file; defaults to the RDKit readers
        """
        if source_opener is None:
            from ...infrastructure.readers.rdkit_structure_source import (
                open_structure_source,
            )

            source_opener = open_structure_source

        self.config = config or ReportConfig()
        self._writer = ReportWriter(output)
        self._superimposer = superimposer
        self._open_source = source_opener
        self._cursor: Optional[ReferenceCursor] = None
        self._reference_file: Optional[str] = None
        self._state = AggregatorState()
        self.logger = logging.getLogger(__name__)

    @property
    def state(self) -> AggregatorState:
        return self._state

    def begin(self, reference_file: Optional[str]) -> None:
        """
        Open the reference source.

        Args:
            reference_file: Reference structure file name

        Raises:
            MissingReferenceError: If no file name was given
            UnsupportedFormatError: If the format cannot be told from the name
            UnreadableFileError: If the file cannot be opened
        """
        if not reference_file:
            raise MissingReferenceError()
        if self._cursor is not None:
            self._cursor.close()
        self._cursor = ReferenceCursor(self._open_source(reference_file))
        self._reference_file = reference_file
        self.logger.info(f"Opened reference file {reference_file}")

    def process_conformer(self, title: str, structure: Any, is_last: bool = False) -> float:
        """
        Score one conformer against the reference of its molecule.

        Args:
            title: Molecule title of the conformer
            structure: Conformer structure, passed through to the superimposer
            is_last: Whether this is the final conformer of the stream

        Returns:
            RMSD of the conformer

        Raises:
            ConfabReportError: On any fatal error; output written so far stands
        """
        state = self._state
        if state.finished:
            raise ReportFinishedError("Report summary has already been written")
        if state.failed:
            raise ReportFinishedError("Report was stopped by an earlier fatal error")

        try:
            return self._process(title, structure, is_last)
        except ConfabReportError:
            state.failed = True
            raise

    def _process(self, title: str, structure: Any, is_last: bool) -> float:
        state = self._state
        first = not state.started
        if first:
            # begin() may already have been called by the owner of the run
            if self._cursor is None:
                self.begin(self.config.reference_file)
            self._writer.write_header(self._reference_file, self.config.conformer_file)
        state.n_conformers += 1

        if first or title != state.current_title:
            if not first:
                self._writer.write_conformer_count(len(state.rmsds))
            self._close_group()
            self._open_group(title)

        result = self._superimposer.align(structure)
        state.rmsds.append(result.rmsd)
        state.current_title = title

        if is_last:
            self._finalize()

        return result.rmsd

    def run(self, conformers: Iterable[Tuple[str, Any]]) -> AggregatorState:
        """
        Process a whole conformer stream, flagging its final record as last.

        An empty stream writes nothing.

        Args:
            conformers: (title, structure) pairs in file order

        Returns:
            Final state of the run
        """
        try:
            iterator = iter(conformers)
            pending = next(iterator, None)
            while pending is not None:
                following = next(iterator, None)
                title, structure = pending
                self.process_conformer(title, structure, is_last=following is None)
                pending = following
        finally:
            self.close()
        return self._state

    def close(self) -> None:
        """Release the reference source."""
        if self._cursor is not None:
            self._cursor.close()

    def __enter__(self) -> "ReportAggregator":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def _open_group(self, title: str) -> None:
        state = self._state
        reference = self._cursor.advance_to(title, on_skip=self._report_skipped)

        state.n_molecules += 1
        self._writer.write_molecule(state.n_molecules, reference.title)
        state.rmsds = []
        state.current_reference = reference
        self._superimposer.set_reference(reference.structure)

    def _report_skipped(self, entry: ReferenceEntry) -> None:
        self._state.n_molecules += 1
        self._writer.write_skipped_molecule(self._state.n_molecules, entry.title)

    def _close_group(self) -> Optional[RMSDHistogram]:
        """Write the histogram block of the open group, if it has any RMSDs."""
        state = self._state
        if not state.rmsds:
            return None

        histogram = RMSDHistogram.from_rmsds(state.rmsds)
        passed = histogram.passes(self.config.rmsd_cutoff)
        if passed:
            state.cutoff_passed += 1

        self._writer.write_histogram(histogram, self.config.rmsd_cutoff, passed)
        self.logger.debug(
            f"Closed '{state.current_title}': {histogram.size} conformers, "
            f"minimum rmsd {histogram.minimum:.3f}"
        )
        # reported counts are final; the open group starts from a fresh list
        state.rmsds = []
        return histogram

    def _finalize(self) -> None:
        state = self._state
        self._writer.write_conformer_count(len(state.rmsds))
        self._close_group()
        self._writer.write_summary(
            state.n_molecules, self.config.rmsd_cutoff, state.cutoff_passed
        )
        state.finished = True
        self.logger.info(
            f"Report finished: {state.n_molecules} molecules, "
            f"{state.cutoff_passed} within cutoff {self.config.rmsd_cutoff}"
        )
