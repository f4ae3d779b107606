"""
Rotation scheduler

A single background thread that periodically calls back into the log
writer to flush the buffer and evaluate time-based rotation.
"""

from __future__ import annotations

import threading
from datetime import timedelta
from typing import Callable, Optional

from logwriter_module.core.sink_config import SinkConfig


class RotationScheduler:
    """
    Background timer loop.

    The owner stops the loop with a two-way handshake: stop() sets the
    stop event and waits until the loop acknowledges through the done
    event, so no tick can run after stop() returns.

    Example:
        scheduler = RotationScheduler(0.5, writer._on_tick)
        scheduler.start()
        ...
        scheduler.stop()
    """

    # Upper bound on tick period while interval or midnight rotation is on
    MAX_TICK_SECONDS = 1.0

    def __init__(
        self,
        tick_seconds: float,
        on_tick: Callable[[], None],
        name: str = "logwriter-scheduler",
    ):
        """
        Initialize rotation scheduler.

        Args:
            tick_seconds: Time between ticks in seconds
            on_tick: Called on every tick from the scheduler thread
            name: Thread name
        """
        if tick_seconds <= 0:
            raise ValueError("tick_seconds must be positive")
        self.tick_seconds = tick_seconds
        self._on_tick = on_tick
        self._name = name
        self._stop = threading.Event()
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @classmethod
    def tick_for(cls, config: SinkConfig) -> Optional[float]:
        """
        Compute the tick period a configuration needs.

        Args:
            config: Sink configuration

        Returns:
            Tick period in seconds, or None if no timer is needed
        """
        periods = []
        if config.buffered and config.buffer_flush_interval:
            periods.append(config.buffer_flush_interval)
        if config.freeze_interval:
            periods.append(min(config.freeze_interval, timedelta(seconds=cls.MAX_TICK_SECONDS)))
        if config.freeze_at_midnight:
            periods.append(timedelta(seconds=cls.MAX_TICK_SECONDS))
        if not periods:
            return None
        return min(periods).total_seconds()

    @property
    def running(self) -> bool:
        """True while the loop thread is alive."""
        return self._thread is not None and not self._done.is_set()

    def start(self) -> None:
        """Start the loop thread."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        try:
            while not self._stop.wait(self.tick_seconds):
                self._on_tick()
        finally:
            self._done.set()

    def stop(self, timeout: Optional[float] = None) -> bool:
        """
        Signal the loop to stop and wait for its acknowledgment.

        Calling stop() from inside a tick only signals; the loop exits
        once the tick returns.

        Args:
            timeout: Maximum seconds to wait (None waits forever)

        Returns:
            True once the loop has fully exited
        """
        self._stop.set()
        if self._thread is None:
            return True
        if threading.current_thread() is self._thread:
            return False
        acknowledged = self._done.wait(timeout)
        if acknowledged:
            self._thread.join()
        return acknowledged
