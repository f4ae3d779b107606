"""Exceptions raised by the log writer"""

from pathlib import Path
from typing import Optional


class LogWriterError(Exception):
    """Base class for log writer errors."""


class SinkClosedError(LogWriterError):
    """Raised when an operation is attempted on a closed sink."""

    def __init__(self, uid: str):
        super().__init__(f"log writer '{uid}' is closed")
        self.uid = uid


class HotFileUnavailableError(LogWriterError):
    """Raised when a previous rotation failed to open a new hot file."""

    def __init__(self, path: Path):
        super().__init__(f"hot file {path} is not open")
        self.path = path


class ShortWriteError(LogWriterError):
    """Raised when the hot file accepted fewer bytes than requested."""

    def __init__(self, written: int, expected: int):
        super().__init__(f"short write: {written} of {expected} bytes")
        self.written = written
        self.expected = expected


class ArchiveError(LogWriterError):
    """
    Raised (and handed to the error callback) when a frozen hot file
    could not be moved into the cold directory.

    The data is not lost: it stays in the hot directory under the
    temporary name held in ``source``.
    """

    def __init__(
        self,
        source: Path,
        destination: Path,
        cause: Optional[BaseException] = None
    ):
        message = f"failed to archive {source} to {destination}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.source = source
        self.destination = destination
        self.__cause__ = cause


class ConsoleMirrorError(LogWriterError):
    """
    Raised when the hot file accepted a write but the console mirror failed.

    ``written`` is the number of bytes that reached the hot file.
    """

    def __init__(self, written: int, cause: BaseException):
        super().__init__(f"console mirror failed after {written} bytes: {cause}")
        self.written = written
        self.__cause__ = cause
