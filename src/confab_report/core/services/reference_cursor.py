"""Forward-only cursor over the reference structures of a report run."""

import logging
from typing import Callable, Optional

from ..domain.interfaces.structure_source import StructureSource
from ..domain.models.structure_record import ReferenceEntry
from ..exceptions import ExhaustedError

logger = logging.getLogger(__name__)


class ReferenceCursor:
    """
    Walks a reference source in step with the conformer stream.

    References are expected in the same order as the molecules first appear
    in the conformer stream. References with no conformers in between are
    skipped, and the caller is told about each of them.
    """

    def __init__(self, source: StructureSource):
        self._source = source
        self._current: Optional[ReferenceEntry] = None
        self._position = 0

    @property
    def current(self) -> Optional[ReferenceEntry]:
        return self._current

    @property
    def position(self) -> int:
        """Number of reference entries consumed so far."""
        return self._position

    def advance_to(
        self,
        title: str,
        on_skip: Optional[Callable[[ReferenceEntry], None]] = None,
    ) -> ReferenceEntry:
        """
        Read forward until a reference titled ``title`` is found.

        Args:
            title: Title of the molecule to find
            on_skip: Called with every reference passed over before the match

        Returns:
            The matching reference entry, which becomes ``current``

        Raises:
            ExhaustedError: If the source ends before a match
        """
        while True:
            entry = self._source.read_next()
            if entry is None:
                raise ExhaustedError(title)
            self._position += 1

            if entry.title == title:
                self._current = entry
                return entry

            logger.info(f"Reference '{entry.title}' has no conformers, skipping")
            if on_skip is not None:
                on_skip(entry)

    def close(self) -> None:
        self._source.close()
