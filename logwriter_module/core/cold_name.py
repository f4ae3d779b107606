"""Cold file name generation"""

from datetime import datetime, timedelta
from typing import Callable, Optional

# (uid, extension, freeze_interval) -> file name
ColdNameFormatter = Callable[[str, str, timedelta], str]

TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


def default_cold_name(
    uid: str,
    ext: str,
    freeze_interval: timedelta,
    now: Optional[datetime] = None,
) -> str:
    """
    Build the default cold file name.

    Produces ``<uid>-<YYYYMMDD-HHMMSS><ext>``. When the freeze interval is
    shorter than a second, ``-.<microseconds>`` is appended to the
    timestamp so that rotations inside the same second get distinct names.

    Args:
        uid: Sink identifier (hot file stem)
        ext: Cold file extension, including the leading dot
        freeze_interval: Configured rotation interval
        now: Timestamp to use (default: current local time)

    Returns:
        Cold file name without directory
    """
    now = now or datetime.now()
    stamp = now.strftime(TIMESTAMP_FORMAT)
    if timedelta(0) < freeze_interval < timedelta(seconds=1):
        stamp = f"{stamp}-.{now.microsecond:06d}"
    return f"{uid}-{stamp}{ext}"
