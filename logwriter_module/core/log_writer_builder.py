"""Log writer builder pattern"""

from dataclasses import replace
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Optional, Union

from logwriter_module.core.cold_name import ColdNameFormatter
from logwriter_module.core.log_writer import LogWriter
from logwriter_module.core.running_mode import RunningMode
from logwriter_module.core.sink_config import SinkConfig
from logwriter_module.rotation.archiver import ErrorCallback


class LogWriterBuilder:
    """Builder pattern for log writer construction."""

    def __init__(self, uid: str):
        self._uid = uid
        self._config = SinkConfig()
        self._freeze_existing = False
        self._error_callback: Optional[ErrorCallback] = None
        self._cold_name_formatter: Optional[ColdNameFormatter] = None
        self._hot_ext = ".log"
        self._cold_ext = ".log"
        self._console: Any = None
        self._time_func: Optional[Callable[[], datetime]] = None

    def with_mode(self, mode: RunningMode) -> "LogWriterBuilder":
        """Set running mode."""
        self._config = replace(self._config, mode=mode)
        return self

    def with_console(self, stream: Any = None) -> "LogWriterBuilder":
        """
        Mirror writes to the console (DEBUG mode).

        Args:
            stream: Console stream (default: sys.stdout)

        Returns:
            Self for method chaining
        """
        self._console = stream
        return self.with_mode(RunningMode.DEBUG)

    def with_buffer(
        self,
        size: int,
        flush_interval: Union[timedelta, float, None] = None
    ) -> "LogWriterBuilder":
        """
        Enable write buffering.

        Args:
            size: Buffer capacity in bytes
            flush_interval: Timer driven flush period (None disables it)

        Returns:
            Self for method chaining

        Example:
            writer = (LogWriterBuilder("app")
                .with_buffer(1 * MB, timedelta(seconds=1))
                .build())
        """
        self._config = replace(
            self._config,
            buffer_size=size,
            buffer_flush_interval=flush_interval,
        )
        return self

    def with_max_size(self, size: int) -> "LogWriterBuilder":
        """Rotate when the hot file grows past ``size`` bytes."""
        self._config = replace(self._config, hot_max_size=size)
        return self

    def with_freeze_interval(self, interval: Union[timedelta, float]) -> "LogWriterBuilder":
        """Rotate every ``interval``."""
        self._config = replace(self._config, freeze_interval=interval)
        return self

    def with_midnight_freeze(self, enabled: bool = True) -> "LogWriterBuilder":
        """Rotate at local midnight."""
        self._config = replace(self._config, freeze_at_midnight=enabled)
        return self

    def with_paths(
        self,
        hot_path: Union[str, Path],
        cold_path: Union[str, Path, None] = None
    ) -> "LogWriterBuilder":
        """
        Set hot and cold directories.

        Args:
            hot_path: Directory of the hot file
            cold_path: Archive directory (default: same as hot_path)

        Returns:
            Self for method chaining
        """
        self._config = replace(
            self._config,
            hot_path=hot_path,
            cold_path=hot_path if cold_path is None else cold_path,
        )
        return self

    def with_extensions(self, hot_ext: str, cold_ext: Optional[str] = None) -> "LogWriterBuilder":
        """Set hot and cold file extensions (with leading dot)."""
        self._hot_ext = hot_ext
        self._cold_ext = cold_ext or hot_ext
        return self

    def with_config(self, config: SinkConfig) -> "LogWriterBuilder":
        """Start from an existing configuration."""
        self._config = config
        return self

    def freeze_existing(self, enabled: bool = True) -> "LogWriterBuilder":
        """Rotate a non-empty pre-existing hot file on build."""
        self._freeze_existing = enabled
        return self

    def with_error_callback(self, callback: ErrorCallback) -> "LogWriterBuilder":
        """Set callback for archive and timer-triggered errors."""
        self._error_callback = callback
        return self

    def with_cold_name_formatter(self, formatter: ColdNameFormatter) -> "LogWriterBuilder":
        """Set cold file name generator."""
        self._cold_name_formatter = formatter
        return self

    def with_clock(self, time_func: Callable[[], datetime]) -> "LogWriterBuilder":
        """Set clock used by interval and midnight rotation."""
        self._time_func = time_func
        return self

    def build_config(self) -> SinkConfig:
        """Return the configuration assembled so far."""
        return self._config

    def build(self) -> LogWriter:
        """Build and return configured log writer."""
        return LogWriter(
            self._uid,
            self._config,
            freeze_existing=self._freeze_existing,
            error_callback=self._error_callback,
            hot_ext=self._hot_ext,
            cold_ext=self._cold_ext,
            console=self._console,
            time_func=self._time_func,
            cold_name_formatter=self._cold_name_formatter,
        )
