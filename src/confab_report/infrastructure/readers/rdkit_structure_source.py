# src/confab_report/infrastructure/readers/rdkit_structure_source.py
"""Structure sources reading multi-structure files with RDKit."""

import logging
import os
from typing import Callable, Dict, IO, Iterator, List, Optional, Tuple

from rdkit import Chem

from ...core.domain.interfaces.structure_source import StructureSource
from ...core.domain.models.structure_record import StructureRecord
from ...core.exceptions import UnreadableFileError, UnsupportedFormatError

logger = logging.getLogger(__name__)

# Extension -> format name
FORMAT_EXTENSIONS: Dict[str, str] = {
    ".sdf": "sdf",
    ".sd": "sdf",
    ".mol": "sdf",
    ".mol2": "mol2",
    ".pdb": "pdb",
    ".ent": "pdb",
    ".xyz": "xyz",
}


def format_from_filename(filename: str) -> str:
    """
    Determine the structure format from a file extension.

    Args:
        filename: Structure file name

    Returns:
        Format name

    Raises:
        UnsupportedFormatError: If the extension is not recognized
    """
    _, ext = os.path.splitext(filename)
    fmt = FORMAT_EXTENSIONS.get(ext.lower())
    if fmt is None:
        raise UnsupportedFormatError(filename)
    return fmt


def _mol_title(mol: Chem.Mol) -> str:
    return mol.GetProp("_Name").strip() if mol.HasProp("_Name") else ""


def _read_sdf(handle: IO) -> Iterator[Optional[Chem.Mol]]:
    yield from Chem.ForwardSDMolSupplier(handle, removeHs=False)


def _read_mol2(handle: IO) -> Iterator[Optional[Chem.Mol]]:
    block: List[str] = []
    for line in handle:
        if line.startswith("@<TRIPOS>MOLECULE"):
            if block:
                yield Chem.MolFromMol2Block("".join(block), removeHs=False)
            block = [line]
        elif block:
            # lines before the first molecule are comments
            block.append(line)
    if block:
        yield Chem.MolFromMol2Block("".join(block), removeHs=False)


def _pdb_title(line: str) -> str:
    """Title from a COMPND or HEADER record."""
    text = line[10:].strip() if line.startswith("COMPND") else line[10:50].strip()
    if text.startswith("MOLECULE:"):
        text = text[len("MOLECULE:"):].strip().rstrip(";")
    return text


def _read_pdb(handle: IO) -> Iterator[Optional[Chem.Mol]]:
    """Split a PDB file on ENDMDL/END; header titles carry over to later models."""
    title = ""
    block: List[str] = []
    has_atoms = False

    for line in handle:
        record = line[:6].strip()
        if record in ("COMPND", "HEADER"):
            candidate = _pdb_title(line)
            # COMPND wins over HEADER
            if candidate and (record == "COMPND" or not title):
                title = candidate
        if record in ("ATOM", "HETATM"):
            has_atoms = True
        block.append(line)

        if record in ("ENDMDL", "END"):
            if has_atoms:
                yield _pdb_block_to_mol("".join(block), title)
            block = []
            has_atoms = False

    if has_atoms:
        yield _pdb_block_to_mol("".join(block), title)


def _pdb_block_to_mol(block: str, title: str) -> Optional[Chem.Mol]:
    mol = Chem.MolFromPDBBlock(block, removeHs=False)
    if mol is not None and title:
        mol.SetProp("_Name", title)
    return mol


def _read_xyz(handle: IO) -> Iterator[Optional[Chem.Mol]]:
    lines = iter(handle)
    for line in lines:
        if not line.strip():
            continue
        try:
            n_atoms = int(line.split()[0])
        except ValueError:
            raise ValueError(f"Bad XYZ atom count line: {line.strip()!r}") from None
        title_line = next(lines, "")
        atom_lines = [next(lines, "") for _ in range(n_atoms)]

        block = f"{n_atoms}\n{title_line.rstrip()}\n" + "".join(atom_lines)
        mol = Chem.MolFromXYZBlock(block)
        if mol is not None:
            mol.SetProp("_Name", title_line.strip())
        yield mol


# Format -> (file mode, reader)
_READERS: Dict[str, Tuple[str, Callable[[IO], Iterator[Optional[Chem.Mol]]]]] = {
    "sdf": ("rb", _read_sdf),
    "mol2": ("r", _read_mol2),
    "pdb": ("r", _read_pdb),
    "xyz": ("r", _read_xyz),
}


class RDKitStructureSource(StructureSource):
    """Reads titled structures one at a time from an open structure file."""

    def __init__(self, handle: IO, fmt: str, filename: str = ""):
        """
        Initialize the source.

        Args:
            handle: Open file handle, in the mode the format's reader expects
            fmt: Format name, one of the values of FORMAT_EXTENSIONS
            filename: File name, for log messages
        """
        _, reader = _READERS[fmt]
        self._handle = handle
        self._mols = reader(handle)
        self.format = fmt
        self.filename = filename
        self.n_read = 0
        self.n_failed = 0

    def read_next(self) -> Optional[StructureRecord]:
        """
        Read the next structure RDKit can parse; unparsable records are skipped.

        Raises:
            UnreadableFileError: If the file layout itself is broken
        """
        try:
            return self._read_next()
        except ValueError as e:
            raise UnreadableFileError(self.filename, str(e)) from e

    def _read_next(self) -> Optional[StructureRecord]:
        for mol in self._mols:
            if mol is None:
                self.n_failed += 1
                logger.warning(
                    f"Skipping unreadable record {self.n_read + self.n_failed} "
                    f"in {self.filename}"
                )
                continue
            self.n_read += 1
            return StructureRecord(title=_mol_title(mol), structure=mol)
        return None

    def close(self) -> None:
        self._handle.close()


def open_structure_source(filename: str) -> RDKitStructureSource:
    """
    Open a structure file for sequential reading.

    Args:
        filename: Structure file name; the format is taken from its extension

    Returns:
        RDKitStructureSource positioned before the first structure

    Raises:
        UnsupportedFormatError: If the format cannot be determined
        UnreadableFileError: If the file cannot be opened
    """
    fmt = format_from_filename(filename)
    mode, _ = _READERS[fmt]
    try:
        handle = open(filename, mode)
    except OSError as e:
        raise UnreadableFileError(filename, str(e)) from e
    return RDKitStructureSource(handle, fmt, filename)

