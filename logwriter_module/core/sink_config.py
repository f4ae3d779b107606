"""
Log writer configuration

A SinkConfig is an immutable value object. LogWriter.set_config() swaps
it as a whole, never field by field.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Optional, Union

from logwriter_module.core.running_mode import RunningMode

KB = 1024
MB = 1024 * KB
GB = 1024 * MB

Interval = Union[timedelta, int, float, None]


def _to_timedelta(value: Interval) -> timedelta:
    """Accept a timedelta, a number of seconds or None (disabled)."""
    if value is None:
        return timedelta(0)
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return timedelta(seconds=value)
    raise TypeError(f"interval must be timedelta or seconds, got {type(value).__name__}")


@dataclass(frozen=True)
class SinkConfig:
    """
    Log writer configuration.

    Zero values disable the matching feature: no buffering, no timer
    driven flush, no size, interval or midnight rotation.
    """

    # Output settings
    mode: RunningMode = RunningMode.PRODUCTION

    # Buffer settings
    buffer_size: int = 0
    buffer_flush_interval: timedelta = field(default_factory=timedelta)

    # Rotation settings
    hot_max_size: int = 0
    freeze_interval: timedelta = field(default_factory=timedelta)
    freeze_at_midnight: bool = False

    # Location settings
    hot_path: Path = Path(".")
    cold_path: Path = Path(".")

    def __post_init__(self):
        """Validate and normalize configuration after initialization."""
        if isinstance(self.mode, str):
            object.__setattr__(self, "mode", RunningMode.from_string(self.mode))
        else:
            object.__setattr__(self, "mode", RunningMode(self.mode))

        object.__setattr__(
            self, "buffer_flush_interval", _to_timedelta(self.buffer_flush_interval)
        )
        object.__setattr__(self, "freeze_interval", _to_timedelta(self.freeze_interval))
        object.__setattr__(self, "hot_path", Path(self.hot_path))
        object.__setattr__(self, "cold_path", Path(self.cold_path))

        if self.buffer_size < 0:
            raise ValueError("buffer_size cannot be negative")
        if self.hot_max_size < 0:
            raise ValueError("hot_max_size cannot be negative")
        if self.buffer_flush_interval < timedelta(0):
            raise ValueError("buffer_flush_interval cannot be negative")
        if self.freeze_interval < timedelta(0):
            raise ValueError("freeze_interval cannot be negative")

    @property
    def buffered(self) -> bool:
        """True when writes are batched in memory."""
        return self.buffer_size > 0

    @property
    def uses_timer(self) -> bool:
        """True when a background scheduler is needed."""
        return (
            (self.buffered and bool(self.buffer_flush_interval))
            or bool(self.freeze_interval)
            or self.freeze_at_midnight
        )

    @classmethod
    def default(cls) -> "SinkConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def debug_config(cls, hot_path: Optional[Path] = None) -> "SinkConfig":
        """Create configuration for debugging: unbuffered, mirrored to console."""
        return cls(
            mode=RunningMode.DEBUG,
            hot_path=hot_path or Path("."),
            cold_path=hot_path or Path("."),
        )

    @classmethod
    def production_config(
        cls,
        hot_path: Optional[Path] = None,
        cold_path: Optional[Path] = None,
    ) -> "SinkConfig":
        """Create configuration for production: buffered, rotated daily or at 100 MB."""
        return cls(
            mode=RunningMode.PRODUCTION,
            buffer_size=1 * MB,
            buffer_flush_interval=timedelta(seconds=1),
            hot_max_size=100 * MB,
            freeze_at_midnight=True,
            hot_path=hot_path or Path("."),
            cold_path=cold_path or hot_path or Path("."),
        )
