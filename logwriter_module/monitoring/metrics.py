"""
Log writer statistics

Counters are updated by LogWriter under its lock; get_stats() hands
out copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class SinkStats:
    """
    Statistics for log writer monitoring.

    Tracks bytes, buffer flushes, rotations and archive results.
    """

    bytes_written: int = 0
    writes: int = 0
    buffered_writes: int = 0
    buffer_flushes: int = 0
    rotations: int = 0
    write_errors: int = 0
    archived_files: int = 0
    archive_failures: int = 0
    last_rotation_time: Optional[datetime] = None
    last_error: Optional[str] = None

    def record_write(self, bytes_count: int) -> None:
        """Record bytes that reached the hot file."""
        self.writes += 1
        self.bytes_written += bytes_count

    def record_buffered(self) -> None:
        """Record a payload that was kept in the buffer."""
        self.buffered_writes += 1

    def record_flush(self, bytes_count: int) -> None:
        """Record a buffer flush."""
        self.buffer_flushes += 1
        self.bytes_written += bytes_count

    def record_rotation(self) -> None:
        """Record a completed hot file rotation."""
        self.rotations += 1
        self.last_rotation_time = datetime.now()

    def record_error(self, error: BaseException) -> None:
        """Record a failed write or flush."""
        self.write_errors += 1
        self.last_error = str(error)

    def to_dict(self) -> dict:
        """Convert stats to dictionary for serialization."""
        return {
            "bytes_written": self.bytes_written,
            "writes": self.writes,
            "buffered_writes": self.buffered_writes,
            "buffer_flushes": self.buffer_flushes,
            "rotations": self.rotations,
            "write_errors": self.write_errors,
            "archived_files": self.archived_files,
            "archive_failures": self.archive_failures,
            "last_rotation_time": (
                self.last_rotation_time.isoformat()
                if self.last_rotation_time
                else None
            ),
            "last_error": self.last_error,
        }
