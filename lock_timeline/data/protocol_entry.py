"""
Protocol Entry - Record types for lock-protocol traces.

This module defines the closed set of lock-protocol event kinds and the
ProtocolEntry record that a trace is made of.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class EntryType(IntEnum):
    """Lock-protocol event kinds. Ordinals match the trace file encoding."""
    RequestRead = 0
    RequestWrite = 1
    ReadGranted = 2
    WriteGranted = 3
    ReadReleased = 4
    WriteReleased = 5
    RequestRejected = 6
    DeadlockDetected = 7
    DeadlockResolved = 8
    Unlocked = 9
    Created = 10

    @classmethod
    def from_value(cls, value):
        """
        Resolve an entry type from its ordinal or its name.

        Args:
            value (int or str): Ordinal (e.g. 7) or name (e.g. 'DeadlockDetected')

        Returns:
            EntryType: Matching entry type

        Raises:
            ValueError: If the value matches no entry type
        """
        if isinstance(value, bool):
            raise ValueError(f"Invalid entry type: {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            if value in cls.__members__:
                return cls.__members__[value]
            if value.isdigit():
                return cls(int(value))
        raise ValueError(f"Invalid entry type: {value!r}")


@dataclass(frozen=True)
class ProtocolEntry:
    """One recorded lock-protocol event."""
    time: float
    actor_id: int
    type: EntryType
    extra_info: Optional[str] = None

    @property
    def is_deadlock(self) -> bool:
        return self.type == EntryType.DeadlockDetected
