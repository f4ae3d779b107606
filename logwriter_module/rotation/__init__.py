"""Rotation module - policy evaluation, scheduling and archiving"""

from logwriter_module.rotation.archiver import ArchiveJob, ArchiveMover, unique_path
from logwriter_module.rotation.policy import (
    RotationSchedule,
    RotationTrigger,
    evaluate,
    next_midnight,
)
from logwriter_module.rotation.scheduler import RotationScheduler

__all__ = [
    "ArchiveJob",
    "ArchiveMover",
    "unique_path",
    "RotationSchedule",
    "RotationTrigger",
    "evaluate",
    "next_midnight",
    "RotationScheduler",
]
