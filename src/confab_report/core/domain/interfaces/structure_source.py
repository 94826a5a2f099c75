"""Interface for sequential readers of titled structures."""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from ..models.structure_record import StructureRecord


class StructureSource(ABC):
    """
    Forward-only reader of named 3D structures.

    Sources own an open file handle; close them when done, or use them as a
    context manager.
    """

    @abstractmethod
    def read_next(self) -> Optional[StructureRecord]:
        """Read the next structure, or None at the end of the source."""
        pass

    def close(self) -> None:
        """Release the underlying file handle."""
        pass

    def __iter__(self) -> Iterator[StructureRecord]:
        while True:
            record = self.read_next()
            if record is None:
                return
            yield record

    def __enter__(self) -> "StructureSource":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
