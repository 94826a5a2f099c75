"""
Custom exceptions for the conformer report.

Every error raised while producing a report is fatal to the run. Lines already
written to the output stream are left in place.
"""


class ConfabReportError(Exception):
    """Base exception for all report errors."""
    pass


class MissingReferenceError(ConfabReportError):
    """Raised when no reference file was specified."""

    def __init__(self, message: str = "Need to specify a reference file"):
        super().__init__(message)


class UnsupportedFormatError(ConfabReportError):
    """Raised when the structure format cannot be determined from a file name."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Cannot determine structure format of '{filename}'")


class UnreadableFileError(ConfabReportError):
    """Raised when a structure file cannot be opened or its layout is broken."""

    def __init__(self, filename: str, reason: str = ""):
        self.filename = filename
        message = f"Cannot read structure file '{filename}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ExhaustedError(ConfabReportError):
    """
    Raised when the reference source runs out before a title is matched.

    The conformer file and the reference file must list molecules in the
    same order, with every conformer title present in the reference file.
    """

    def __init__(self, title: str):
        self.title = title
        super().__init__(
            f"Reference file exhausted while looking for molecule '{title}'"
        )


class ReportFinishedError(ConfabReportError):
    """Raised when conformers are fed to a report whose summary was already written."""
    pass
