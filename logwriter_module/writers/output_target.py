"""
Output targets

The set of places a write can go is closed and small, so it is modelled
as two variants chosen by running mode rather than an open writer
interface.
"""

from dataclasses import dataclass
from typing import Any, Union

from logwriter_module.core.errors import ConsoleMirrorError
from logwriter_module.core.running_mode import RunningMode
from logwriter_module.writers.hot_file import HotFile


def _write_console(stream: Any, data) -> None:
    """Copy raw bytes to a console stream, text or binary."""
    binary = getattr(stream, "buffer", None)
    if binary is not None:
        binary.write(data)
    else:
        stream.write(bytes(data).decode("utf-8", errors="replace"))
    stream.flush()


@dataclass(frozen=True)
class FileOnly:
    """Write to the hot file only."""

    file: HotFile

    def write(self, data) -> int:
        return self.file.write(data)


@dataclass(frozen=True)
class FileAndMirror:
    """
    Write to the hot file, then mirror the accepted bytes to the console.

    A console failure is raised as ConsoleMirrorError carrying the byte
    count the hot file already accepted.
    """

    file: HotFile
    console: Any

    def write(self, data) -> int:
        written = self.file.write(data)
        if written:
            try:
                _write_console(self.console, memoryview(data)[:written])
            except Exception as e:
                raise ConsoleMirrorError(written, e) from e
        return written


OutputTarget = Union[FileOnly, FileAndMirror]


def make_target(mode: RunningMode, file: HotFile, console: Any) -> OutputTarget:
    """
    Build the output target for a running mode.

    Args:
        mode: Running mode
        file: Open hot file
        console: Console stream used by DEBUG mode

    Returns:
        FileAndMirror in DEBUG mode, FileOnly otherwise
    """
    if mode.mirrors_console:
        return FileAndMirror(file, console)
    return FileOnly(file)
