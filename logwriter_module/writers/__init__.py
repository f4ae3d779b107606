"""Writers module - Hot file handle and output targets"""

from logwriter_module.writers.hot_file import HotFile
from logwriter_module.writers.output_target import FileAndMirror, FileOnly, make_target

__all__ = ["HotFile", "FileOnly", "FileAndMirror", "make_target"]
