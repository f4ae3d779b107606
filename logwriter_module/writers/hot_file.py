"""Hot file handle"""

import os
from pathlib import Path
from typing import Optional

from logwriter_module.core.errors import HotFileUnavailableError


class HotFile:
    """Append-only, unbuffered handle of the actively written log file."""

    def __init__(self, path: Path):
        """
        Initialize hot file handle. The file is not opened yet.

        Args:
            path: Canonical hot file path (``<hot_path>/<uid><ext>``)
        """
        self.path = Path(path)
        self._file = None

    def open(self) -> int:
        """
        Open or create the hot file for appending.

        Returns:
            Current size of the file in bytes
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "ab", buffering=0)
        return os.fstat(self._file.fileno()).st_size

    @property
    def is_open(self) -> bool:
        """True while the handle is usable."""
        return self._file is not None

    def write(self, data) -> int:
        """
        Write bytes to the hot file.

        Returns:
            Number of bytes accepted by the OS (may be short)

        Raises:
            HotFileUnavailableError: If the handle is not open
        """
        if self._file is None:
            raise HotFileUnavailableError(self.path)
        written: Optional[int] = self._file.write(data)
        return written or 0

    def close(self) -> None:
        """Close the hot file. The handle is dropped even if close fails."""
        if self._file is None:
            return
        f, self._file = self._file, None
        f.close()
