"""
Trace Data

Protocol entry records, the event store and trace file parsing.
"""

from .protocol_entry import EntryType, ProtocolEntry
from .event_store import EventStore

__all__ = ['EntryType', 'ProtocolEntry', 'EventStore']
