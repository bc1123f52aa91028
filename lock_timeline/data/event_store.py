"""
Event Store - Holds the protocol entries of the currently loaded trace.

The store is replaced wholesale on every load; entries are never merged.
A version counter identifies each installed trace so derived state can be
memoized against it.
"""

import logging
from typing import Iterable, Tuple

from lock_timeline.data.protocol_entry import ProtocolEntry

# Configure logger
logger = logging.getLogger(__name__)


class EventStore:
    """
    Ordered, immutable-per-version sequence of protocol entries.
    """

    def __init__(self, entries: Iterable[ProtocolEntry] = ()):
        self._entries: Tuple[ProtocolEntry, ...] = tuple(entries)
        self._version = 0
        self.source = None

    @property
    def entries(self) -> Tuple[ProtocolEntry, ...]:
        return self._entries

    @property
    def version(self) -> int:
        """Identity of the installed trace; bumped on every replace."""
        return self._version

    def replace(self, entries: Iterable[ProtocolEntry], source=None):
        """
        Atomically install a new trace, discarding the previous one.

        Args:
            entries: Complete replacement entry sequence
            source: Optional description of where the trace came from
        """
        self._entries = tuple(entries)
        self._version += 1
        self.source = source
        logger.info(
            f"Installed trace v{self._version} with {len(self._entries)} entries"
            + (f" from {source}" if source else "")
        )

    def clear(self):
        self.replace(())

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __repr__(self):
        return f"EventStore(version={self._version}, entries={len(self._entries)})"
