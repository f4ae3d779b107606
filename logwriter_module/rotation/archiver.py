"""
Archive mover

Moves frozen hot files into the cold directory on a dedicated worker
thread, so a slow or cross-device move never holds up writers.
"""

from __future__ import annotations

import logging
import queue
import shutil
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from logwriter_module.core.errors import ArchiveError, LogWriterError

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[BaseException], None]

_STOP = object()


def unique_path(path: Path) -> Path:
    """
    Return ``path`` or, if it is taken, the first free ``<stem>.<n><suffix>``.

    Args:
        path: Desired file path

    Returns:
        A path that does not exist yet
    """
    if not path.exists():
        return path
    n = 1
    while True:
        candidate = path.with_name(f"{path.stem}.{n}{path.suffix}")
        if not candidate.exists():
            return candidate
        n += 1


@dataclass(frozen=True)
class ArchiveJob:
    """A frozen hot file waiting to be moved."""

    source: Path
    destination: Path


class ArchiveMover:
    """
    Queue-fed worker that relocates frozen hot files.

    Jobs are processed in submission order by a single thread. Failures
    are never raised to the submitter: they are handed to the error
    callback as ArchiveError, or dropped when no callback is set. A
    failed job leaves its file in place under the temporary name.

    Thread Safety:
        submit() may be called from any thread.
    """

    def __init__(
        self,
        on_error: Optional[ErrorCallback] = None,
        name: str = "logwriter-archiver",
    ):
        """
        Initialize archive mover and start its worker thread.

        Args:
            on_error: Callback receiving ArchiveError on failed moves
            name: Worker thread name
        """
        self._on_error = on_error
        self._queue: "queue.Queue" = queue.Queue()
        self._counter_lock = threading.Lock()
        self._moved = 0
        self._failed = 0
        self._closed = False
        self._abandon = False
        self._worker_thread = threading.Thread(
            target=self._process_queue,
            name=name,
            daemon=True
        )
        self._worker_thread.start()

    def set_error_callback(self, on_error: Optional[ErrorCallback]) -> None:
        """Replace the error callback (None discards errors)."""
        self._on_error = on_error

    def submit(self, source: Path, destination: Path) -> None:
        """
        Queue a file move.

        Args:
            source: Frozen file in the hot directory
            destination: Desired path in the cold directory

        Raises:
            LogWriterError: If the mover is closed
        """
        if self._closed:
            raise LogWriterError("archive mover is closed")
        self._queue.put(ArchiveJob(Path(source), Path(destination)))

    def _process_queue(self) -> None:
        """Move queued files (worker thread)."""
        while True:
            job = self._queue.get()
            try:
                if job is _STOP:
                    return
                if not self._abandon:
                    self._move(job)
            finally:
                self._queue.task_done()

    def _move(self, job: ArchiveJob) -> None:
        try:
            job.destination.parent.mkdir(parents=True, exist_ok=True)
            destination = unique_path(job.destination)
            shutil.move(str(job.source), str(destination))
        except OSError as e:
            with self._counter_lock:
                self._failed += 1
            self._report(ArchiveError(job.source, job.destination, e))
            return

        with self._counter_lock:
            self._moved += 1
        logger.debug("Archived %s to %s", job.source, destination)

    def _report(self, error: ArchiveError) -> None:
        callback = self._on_error
        if callback is None:
            logger.debug("Archive error dropped: %s", error)
            return
        try:
            callback(error)
        except Exception:
            logger.debug("Archive error callback failed", exc_info=True)

    def wait_idle(self) -> None:
        """
        Block until every queued move has been processed.

        Returns at once when called from the worker thread (an error
        callback), which cannot wait for itself.
        """
        if threading.current_thread() is self._worker_thread:
            return
        self._queue.join()

    @property
    def moved(self) -> int:
        """Number of files moved successfully."""
        with self._counter_lock:
            return self._moved

    @property
    def failed(self) -> int:
        """Number of moves that failed."""
        with self._counter_lock:
            return self._failed

    def close(self, wait: bool = True) -> None:
        """
        Stop the worker.

        Args:
            wait: Finish queued moves and join the worker. When False,
                  moves not yet started are abandoned and the call does
                  not block; abandoned files stay in the hot directory.
                  Called from the worker thread (an error callback),
                  the stop is only queued and never joined.
        """
        if self._closed:
            return
        self._closed = True
        if not wait:
            self._abandon = True
        self._queue.put(_STOP)
        if wait and threading.current_thread() is not self._worker_thread:
            self._worker_thread.join()
