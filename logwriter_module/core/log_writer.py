"""
LogWriter - buffered hot/cold rotating log sink

Writes caller-formatted records into a hot file and freezes it into
timestamped cold files by size, interval and midnight policies.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
import time
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Union

from logwriter_module.core.cold_name import ColdNameFormatter, default_cold_name
from logwriter_module.core.errors import (
    ConsoleMirrorError,
    HotFileUnavailableError,
    LogWriterError,
    ShortWriteError,
    SinkClosedError,
)
from logwriter_module.core.running_mode import RunningMode
from logwriter_module.core.sink_config import SinkConfig
from logwriter_module.monitoring.metrics import SinkStats
from logwriter_module.rotation.archiver import ArchiveMover, ErrorCallback, unique_path
from logwriter_module.rotation.policy import RotationSchedule, evaluate
from logwriter_module.rotation.scheduler import RotationScheduler
from logwriter_module.writers.hot_file import HotFile
from logwriter_module.writers.output_target import OutputTarget, make_target

logger = logging.getLogger(__name__)

# Suffix of a frozen hot file waiting in the hot directory for its move
TEMP_SUFFIX = ".tmp"


class LogWriter:
    """
    Concurrency-safe log sink with hot file rotation.

    Records are appended to ``<hot_path>/<uid><hot_ext>``. When a rotation
    policy fires (size, interval, midnight) or rotate() is called, the
    hot file is flushed, closed, renamed in place and replaced by a new
    empty hot file; the renamed file is then moved to
    ``<cold_path>/<cold name>`` by a background mover.

    Features:
    - Optional in-memory buffer with timer driven flush
    - Size, interval and midnight rotation
    - Console mirroring in DEBUG mode
    - Reconfiguration without losing buffered bytes

    Thread Safety:
        This class is thread-safe. All public methods use one internal
        lock; the background scheduler takes the same lock.

    Example:
        writer = LogWriter("app", SinkConfig(hot_max_size=10 * MB))
        handler = logging.StreamHandler(writer)
        logging.getLogger().addHandler(handler)
    """

    def __init__(
        self,
        uid: str,
        config: Optional[SinkConfig] = None,
        freeze_existing: bool = False,
        error_callback: Optional[ErrorCallback] = None,
        *,
        hot_ext: str = ".log",
        cold_ext: str = ".log",
        console: Any = None,
        time_func: Optional[Callable[[], datetime]] = None,
        cold_name_formatter: Optional[ColdNameFormatter] = None,
    ):
        """
        Initialize log writer and open (or create) the hot file.

        Args:
            uid: Sink identifier, used as the hot file stem
            config: Sink configuration (default: SinkConfig.default())
            freeze_existing: Rotate a non-empty pre-existing hot file
            error_callback: Receives archive and timer-triggered errors
            hot_ext: Hot file extension, including the dot
            cold_ext: Cold file extension, including the dot
            console: Mirror stream for DEBUG mode (default: sys.stdout)
            time_func: Clock returning the current datetime
            cold_name_formatter: Cold file name generator

        Raises:
            OSError: If the hot file cannot be opened or created
        """
        if not uid:
            raise ValueError("uid must not be empty")

        self._uid = uid
        self._config = config or SinkConfig.default()
        self._hot_ext = hot_ext
        self._cold_ext = cold_ext
        self._console = console if console is not None else sys.stdout
        self._time_func = time_func or datetime.now
        self._error_callback = error_callback
        self._cold_name_formatter: ColdNameFormatter = cold_name_formatter or default_cold_name

        self._lock = threading.Lock()
        self._control_lock = threading.Lock()
        self._buffer: Optional[bytearray] = (
            bytearray(self._config.buffer_size) if self._config.buffered else None
        )
        self._buffered = 0
        self._length = 0
        self._last_flush = time.monotonic()
        self._hot: Optional[HotFile] = None
        self._target: Optional[OutputTarget] = None
        self._schedule = RotationSchedule()
        self._stats = SinkStats()
        self._scheduler: Optional[RotationScheduler] = None
        self._closed = False

        self._open_hot_file()
        self._mover = ArchiveMover(on_error=error_callback, name=f"{uid}-archiver")

        if freeze_existing and self._length > 0:
            logger.debug("Freezing existing hot file %s (%d bytes)", self._hot.path, self._length)
            try:
                with self._lock:
                    self._rotate()
            except Exception:
                if self._hot is not None:
                    self._hot.close()
                self._mover.close()
                raise

        self._start_scheduler()
        logger.debug("Log writer '%s' writing to %s", uid, self.hot_file_path)

    # ------------------------------------------------------------------
    # Properties

    @property
    def uid(self) -> str:
        """Sink identifier."""
        return self._uid

    @property
    def config(self) -> SinkConfig:
        """Active configuration."""
        return self._config

    @property
    def hot_file_path(self) -> Path:
        """Canonical hot file path for the active configuration."""
        return self._config.hot_path / f"{self._uid}{self._hot_ext}"

    @property
    def closed(self) -> bool:
        """True once close() has run."""
        return self._closed

    # ------------------------------------------------------------------
    # Write path

    def write(self, data: Union[bytes, bytearray, memoryview, str]) -> int:
        """
        Write a record.

        The payload is copied into the buffer when it fits, otherwise the
        buffer is flushed first. Payloads are never split. Text is encoded
        as UTF-8, so the writer can back a logging.StreamHandler.

        Args:
            data: Formatted record

        Returns:
            Number of bytes accepted

        Raises:
            SinkClosedError: If the writer is closed
            HotFileUnavailableError: If a failed rotation left no hot file
            ShortWriteError: If the hot file accepted only part of the data
            ConsoleMirrorError: If mirroring failed after the hot file write
            OSError: On I/O failure (buffered bytes are discarded)
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        size = len(data)
        if size == 0:
            self._ensure_open()
            return 0

        with self._lock:
            self._ensure_writable()
            if self._buffer is not None:
                return self._write_buffered(data, size)
            return self._write_direct(data, size)

    def _write_buffered(self, data, size: int) -> int:
        """Buffer a payload, flushing first if it does not fit (caller must hold lock)."""
        start = self._buffered
        capacity = len(self._buffer)
        if start + size <= capacity:
            self._buffer[start:start + size] = data
            self._buffered = start + size
            self._stats.record_buffered()
            return size

        if self._flush_locked():
            self._check_rotation()
        self._ensure_writable()

        if size > capacity:
            return self._write_direct(data, size)

        self._buffer[0:size] = data
        self._buffered = size
        self._stats.record_buffered()
        return size

    def _write_direct(self, data, size: int) -> int:
        """Write straight to the output target (caller must hold lock)."""
        written = self._write_target(data, size)
        self._stats.record_write(written)
        self._check_rotation()
        return written

    def _write_target(self, data, size: int) -> int:
        """
        Write to the output target and account the bytes.

        Any failure resets the buffer fill count. Bytes the hot file
        accepted are accounted even when the console mirror fails, so a
        retry never writes them twice. Caller must hold lock.
        """
        error: Optional[LogWriterError] = None
        try:
            written = self._target.write(data)
        except ConsoleMirrorError as e:
            written = e.written
            error = e
        except Exception as e:
            self._buffered = 0
            self._stats.record_error(e)
            raise

        self._length += written
        if written < size:
            error = ShortWriteError(written, size)
        if error is not None:
            self._buffered = 0
            self._stats.record_error(error)
            raise error
        return written

    def _flush_locked(self) -> int:
        """Write buffered bytes to the hot file (caller must hold lock)."""
        pending = self._buffered
        if not pending:
            return 0
        written = self._write_target(memoryview(self._buffer)[:pending], pending)
        self._buffered = 0
        self._last_flush = time.monotonic()
        self._stats.record_flush(written)
        return written

    def flush_buffer(self) -> None:
        """
        Flush buffered bytes to the hot file.

        The rotation policy is evaluated afterwards, so a flush can
        trigger a rotation.
        """
        with self._lock:
            self._ensure_open()
            if not self._buffered:
                return
            self._ensure_writable()
            self._flush_locked()
            self._check_rotation()

    # ------------------------------------------------------------------
    # Rotation

    def _check_rotation(self) -> bool:
        """Evaluate the rotation policy and rotate if it fires (caller must hold lock)."""
        now = self._time_func()
        trigger = evaluate(self._config, self._length, now, self._schedule)
        if trigger is None:
            return False
        if self._rotate():
            return True
        self._schedule.advance(trigger, self._config, now)
        return False

    def rotate(self) -> bool:
        """
        Freeze the hot file now.

        If a previous rotation left the writer without a hot file, this
        reopens it instead.

        Returns:
            True if a cold file was produced, False for an empty hot file

        Raises:
            OSError: If flushing, closing, renaming or reopening fails
        """
        with self._lock:
            self._ensure_open()
            if self._hot is None:
                self._open_hot_file()
                return False
            return self._rotate()

    def _rotate(self) -> bool:
        """
        Flush, name, close, rename in place, reopen, then queue the archive move.

        Until the rename succeeds any failure leaves the canonical hot
        file open.

        Caller must hold lock.
        """
        if self._length == 0 and self._buffered == 0:
            return False

        self._flush_locked()

        hot = self._hot
        cold_name = self._cold_name_formatter(
            self._uid, self._cold_ext, self._config.freeze_interval
        )
        temp_path = unique_path(hot.path.with_name(cold_name + TEMP_SUFFIX))

        try:
            hot.close()
            os.rename(hot.path, temp_path)
        except Exception:
            self._reopen(hot)
            raise

        self._hot = None
        self._target = None
        try:
            self._open_hot_file()
        finally:
            self._mover.submit(temp_path, self._config.cold_path / cold_name)
            self._stats.record_rotation()
        return True

    def _open_hot_file(self) -> None:
        """Open the canonical hot file and reset length and schedule."""
        hot = HotFile(self.hot_file_path)
        self._length = hot.open()
        self._hot = hot
        self._target = make_target(self._config.mode, hot, self._console)
        self._schedule.reset(self._config, self._time_func())

    def _reopen(self, hot: HotFile) -> None:
        """Reopen a hot file after an aborted rotation."""
        self._hot = None
        self._target = None
        self._length = hot.open()
        self._hot = hot
        self._target = make_target(self._config.mode, hot, self._console)

    # ------------------------------------------------------------------
    # Control

    def set_mode(self, mode: RunningMode) -> None:
        """
        Switch between file-only and console-mirrored output.

        The hot file stays open. Setting the current mode is a no-op.
        """
        mode = RunningMode(mode)
        with self._lock:
            self._ensure_open()
            if mode == self._config.mode:
                return
            self._config = replace(self._config, mode=mode)
            if self._hot is not None:
                self._target = make_target(mode, self._hot, self._console)

    def set_config(self, config: Optional[SinkConfig]) -> None:
        """
        Install a new configuration.

        Stops the scheduler, flushes the buffer under the old
        configuration, swaps the configuration (reallocating the buffer
        if its size changed) and restarts the scheduler. Concurrent
        writes wait on the lock meanwhile. New hot and cold paths take
        effect at the next rotation.

        Args:
            config: New configuration (None installs the defaults)
        """
        new = config or SinkConfig.default()
        with self._control_lock:
            self._ensure_open()
            self._stop_scheduler()
            try:
                with self._lock:
                    self._ensure_open()
                    old = self._config
                    if self._target is not None:
                        self._flush_locked()

                    self._config = new
                    if new.buffer_size != old.buffer_size:
                        self._buffer = bytearray(new.buffer_size) if new.buffered else None

                    if self._hot is None:
                        self._open_hot_file()
                    else:
                        if new.mode != old.mode:
                            self._target = make_target(new.mode, self._hot, self._console)
                        self._schedule.reconfigure(old, new, self._time_func())
            finally:
                self._start_scheduler()

    def set_cold_name_formatter(self, formatter: Optional[ColdNameFormatter]) -> None:
        """Replace the cold file name generator (None restores the default)."""
        with self._lock:
            self._cold_name_formatter = formatter or default_cold_name

    def set_error_callback(self, callback: Optional[ErrorCallback]) -> None:
        """Replace the error callback (None discards background errors)."""
        self._error_callback = callback
        self._mover.set_error_callback(callback)

    def wait_for_archive(self) -> None:
        """Block until every queued cold file move has finished."""
        self._mover.wait_idle()

    def get_buffer_size(self) -> int:
        """
        Get number of bytes waiting in the buffer.

        Returns:
            Buffered, not yet written bytes
        """
        with self._lock:
            return self._buffered

    def get_stats(self) -> SinkStats:
        """
        Get writer statistics.

        Returns:
            Copy of current statistics
        """
        with self._lock:
            stats = replace(self._stats)
        stats.archived_files = self._mover.moved
        stats.archive_failures = self._mover.failed
        return stats

    def close(self, wait_for_archive: bool = True) -> None:
        """
        Flush the buffer, close the hot file and stop background work.

        Calling close() again is a no-op. Writes after close() raise
        SinkClosedError.

        Args:
            wait_for_archive: Finish queued cold file moves before
                              returning; False abandons them
        """
        with self._control_lock:
            if self._closed:
                return
            self._stop_scheduler()
            try:
                with self._lock:
                    try:
                        if self._target is not None:
                            self._flush_locked()
                    finally:
                        self._closed = True
                        self._buffered = 0
                        hot, self._hot, self._target = self._hot, None, None
                        if hot is not None:
                            hot.close()
            finally:
                self._mover.close(wait=wait_for_archive)
        logger.debug("Log writer '%s' closed", self._uid)

    # ------------------------------------------------------------------
    # Background work

    def _start_scheduler(self) -> None:
        if self._closed or not self._config.uses_timer:
            return
        tick = RotationScheduler.tick_for(self._config)
        self._scheduler = RotationScheduler(tick, self._on_tick, name=f"{self._uid}-scheduler")
        self._scheduler.start()

    def _stop_scheduler(self) -> None:
        scheduler, self._scheduler = self._scheduler, None
        if scheduler is not None:
            scheduler.stop()

    def _on_tick(self) -> None:
        """Timer driven flush and rotation check (scheduler thread)."""
        error: Optional[BaseException] = None
        with self._lock:
            if self._closed or self._target is None:
                return
            config = self._config
            try:
                if (
                    self._buffered
                    and config.buffer_flush_interval
                    and time.monotonic() - self._last_flush
                    >= config.buffer_flush_interval.total_seconds()
                ):
                    self._flush_locked()
                self._check_rotation()
            except Exception as e:
                error = e
        if error is not None:
            self._report_error(error)

    def _report_error(self, error: BaseException) -> None:
        callback = self._error_callback
        if callback is None:
            logger.debug("Background error dropped: %s", error)
            return
        try:
            callback(error)
        except Exception:
            logger.debug("Error callback failed", exc_info=True)

    # ------------------------------------------------------------------
    # Guards

    def _ensure_open(self) -> None:
        if self._closed:
            raise SinkClosedError(self._uid)

    def _ensure_writable(self) -> None:
        self._ensure_open()
        if self._target is None:
            raise HotFileUnavailableError(self.hot_file_path)

    def __enter__(self) -> "LogWriter":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
