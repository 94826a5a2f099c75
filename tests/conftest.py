"""Pytest configuration and fixtures for confab_report tests."""

from typing import Callable, List, Optional, Sequence, Tuple

import pytest

from confab_report.core.domain.interfaces.structure_source import StructureSource
from confab_report.core.domain.interfaces.structure_superimposer import (
    StructureSuperimposer,
)
from confab_report.core.domain.models.alignment_result import AlignmentResult
from confab_report.core.domain.models.structure_record import StructureRecord


class ListStructureSource(StructureSource):
    """In-memory structure source over (title, structure) pairs."""

    def __init__(self, entries: Sequence[Tuple[str, object]]):
        self._entries = [StructureRecord(title, structure) for title, structure in entries]
        self._index = 0
        self.closed = False

    def read_next(self) -> Optional[StructureRecord]:
        if self._index >= len(self._entries):
            return None
        entry = self._entries[self._index]
        self._index += 1
        return entry

    def close(self) -> None:
        self.closed = True


class ScriptedSuperimposer(StructureSuperimposer):
    """Treats each conformer 'structure' as its own RMSD and records every call."""

    def __init__(self):
        self.reference = None
        self.calls: List[Tuple[object, object]] = []

    def set_reference(self, reference) -> None:
        self.reference = reference

    def align(self, target) -> AlignmentResult:
        if self.reference is None:
            raise ValueError("No reference structure set")
        self.calls.append((self.reference, target))
        return AlignmentResult(rmsd=float(target), matched_atoms=1)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def superimposer() -> ScriptedSuperimposer:
    return ScriptedSuperimposer()


@pytest.fixture
def source_factory() -> Callable[[Sequence[Tuple[str, object]]], ListStructureSource]:
    """Build in-memory reference sources."""
    return ListStructureSource


@pytest.fixture
def opener_for():
    """Build a source opener that hands out one in-memory reference source.

    The returned opener records the file names it was asked to open.
    """

    def make(entries: Sequence[Tuple[str, object]]):
        source = ListStructureSource(entries)
        opened: List[str] = []

        def opener(filename: str) -> ListStructureSource:
            opened.append(filename)
            return source

        opener.source = source
        opener.opened = opened
        return opener

    return make
