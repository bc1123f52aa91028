"""
Theme - Colour table for the lock timeline.
"""

from dataclasses import dataclass, field
from typing import Dict

from lock_timeline.data.protocol_entry import EntryType


# Entry type colour mapping
DEFAULT_ENTRY_COLORS = {
    EntryType.RequestRead: 'lightseagreen',
    EntryType.RequestWrite: 'lightcoral',
    EntryType.ReadGranted: 'seagreen',
    EntryType.WriteGranted: 'coral',
    EntryType.ReadReleased: 'darkseagreen',
    EntryType.WriteReleased: '#8b3e2f',  # Dark coral
    EntryType.RequestRejected: 'orange',
    EntryType.DeadlockDetected: 'darkred',
    EntryType.DeadlockResolved: 'darkgreen',
    EntryType.Unlocked: 'yellow',
    EntryType.Created: 'white',
}


@dataclass(frozen=True)
class Theme:
    """Colours and stroke widths used when building a frame."""
    background: str = '#494848'
    light_lines: str = '#444444'
    main_lines: str = '#666666'
    border: str = 'black'
    border_width: float = 1
    fill: str = 'white'
    fill_warn: str = 'lightcoral'
    label: str = 'white'
    colors: Dict[EntryType, str] = field(default_factory=lambda: dict(DEFAULT_ENTRY_COLORS))
    unknown: str = '#95a5a6'

    def color_for(self, entry_type):
        """
        Get the tick colour for an entry type.

        Args:
            entry_type (EntryType): Entry type

        Returns:
            str: Colour name or hex string
        """
        return self.colors.get(entry_type, self.unknown)


DEFAULT_THEME = Theme()
