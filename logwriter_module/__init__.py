"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

Python LogWriter - A buffered hot/cold rotating log sink
"""

import logging

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

from logwriter_module.core.log_writer import LogWriter
from logwriter_module.core.log_writer_builder import LogWriterBuilder
from logwriter_module.core.running_mode import RunningMode
from logwriter_module.core.sink_config import GB, KB, MB, SinkConfig
from logwriter_module.core.errors import (
    ArchiveError,
    ConsoleMirrorError,
    HotFileUnavailableError,
    LogWriterError,
    ShortWriteError,
    SinkClosedError,
)

# Import submodules (not all classes by default)
from logwriter_module import monitoring
from logwriter_module import rotation
from logwriter_module import writers

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "LogWriter",
    "LogWriterBuilder",
    "RunningMode",
    "SinkConfig",
    "KB",
    "MB",
    "GB",
    "ArchiveError",
    "ConsoleMirrorError",
    "HotFileUnavailableError",
    "LogWriterError",
    "ShortWriteError",
    "SinkClosedError",
    "monitoring",
    "rotation",
    "writers",
]
