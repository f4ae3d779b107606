"""
Running mode enumeration

Selects where written bytes go: the hot file only, or the hot file
mirrored to the console.
"""

from enum import IntEnum


class RunningMode(IntEnum):
    """
    Sink running mode.

    DEBUG mirrors every write to the console stream, PRODUCTION writes
    to the hot file only.
    """

    DEBUG = 0        # Hot file + console mirror
    PRODUCTION = 1   # Hot file only

    def __str__(self) -> str:
        """String representation of running mode."""
        return self.name

    @classmethod
    def from_string(cls, mode_str: str) -> "RunningMode":
        """
        Convert string to RunningMode.

        Args:
            mode_str: Mode name (case-insensitive)

        Returns:
            RunningMode enum value

        Raises:
            ValueError: If mode_str is not valid
        """
        mode_str = mode_str.upper()
        if mode_str in cls.__members__:
            return cls[mode_str]
        raise ValueError(f"Invalid running mode: {mode_str}")

    @property
    def mirrors_console(self) -> bool:
        """True when writes are copied to the console."""
        return self is RunningMode.DEBUG
