"""
Rotation policy evaluator

Pure decision logic: given the configuration, the running hot file
length and the current time, answer whether the hot file must be frozen
now. Evaluated after every accounted write and on every scheduler tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from enum import Enum
from typing import Optional

from logwriter_module.core.sink_config import SinkConfig


class RotationTrigger(Enum):
    """Reason a rotation was requested."""

    SIZE = "size"
    INTERVAL = "interval"
    MIDNIGHT = "midnight"


def next_midnight(now: datetime) -> datetime:
    """
    Get the first local midnight strictly after ``now``.

    Args:
        now: Reference time

    Returns:
        Midnight at the start of the following day, same tzinfo as ``now``
    """
    return datetime.combine(now.date() + timedelta(days=1), time.min, tzinfo=now.tzinfo)


@dataclass
class RotationSchedule:
    """
    Next scheduled interval and midnight rotations.

    A ``None`` field means the matching policy is disabled.
    """

    next_switch: Optional[datetime] = None
    next_midnight: Optional[datetime] = None

    def reset(self, config: SinkConfig, now: datetime) -> None:
        """Reschedule both policies from ``now`` (called when a hot file is opened)."""
        self.next_switch = now + config.freeze_interval if config.freeze_interval else None
        self.next_midnight = next_midnight(now) if config.freeze_at_midnight else None

    def reconfigure(self, old: SinkConfig, new: SinkConfig, now: datetime) -> None:
        """Reschedule only the policies whose settings changed."""
        if old.freeze_interval != new.freeze_interval:
            self.next_switch = now + new.freeze_interval if new.freeze_interval else None
        if old.freeze_at_midnight != new.freeze_at_midnight:
            self.next_midnight = next_midnight(now) if new.freeze_at_midnight else None

    def advance(self, trigger: RotationTrigger, config: SinkConfig, now: datetime) -> None:
        """Move the schedule past a trigger that fired."""
        if trigger is RotationTrigger.INTERVAL and config.freeze_interval:
            self.next_switch = now + config.freeze_interval
        elif trigger is RotationTrigger.MIDNIGHT and config.freeze_at_midnight:
            self.next_midnight = next_midnight(now)


def evaluate(
    config: SinkConfig,
    length: int,
    now: datetime,
    schedule: RotationSchedule,
) -> Optional[RotationTrigger]:
    """
    Decide whether the hot file should be rotated.

    Checks run in order and the first match wins, so one evaluation
    yields at most one rotation:

    1. size threshold exceeded
    2. fixed interval elapsed
    3. midnight boundary crossed

    Args:
        config: Active configuration
        length: Bytes currently in the hot file
        now: Current time
        schedule: Next scheduled interval and midnight rotations

    Returns:
        The trigger that fired, or None
    """
    if config.hot_max_size > 0 and length > config.hot_max_size:
        return RotationTrigger.SIZE

    if (
        config.freeze_interval
        and schedule.next_switch is not None
        and now >= schedule.next_switch
    ):
        return RotationTrigger.INTERVAL

    if (
        config.freeze_at_midnight
        and schedule.next_midnight is not None
        and now >= schedule.next_midnight
    ):
        return RotationTrigger.MIDNIGHT

    return None
