"""
Core module for the log writer

This module contains the fundamental classes:
- LogWriter: The hot/cold rotating sink
- LogWriterBuilder: Builder pattern for writer construction
- SinkConfig: Configuration value object
- RunningMode: File-only or console-mirrored output
"""

from logwriter_module.core.log_writer import LogWriter
from logwriter_module.core.log_writer_builder import LogWriterBuilder
from logwriter_module.core.running_mode import RunningMode
from logwriter_module.core.sink_config import SinkConfig

__all__ = ["LogWriter", "LogWriterBuilder", "RunningMode", "SinkConfig"]
