"""
Grouping Engine - Builds per-actor timelines from raw protocol entries.

This module partitions a trace by actor, drops actors with too few events to be
meaningful, and derives each timeline's label, time span, warning flag and
display row. Correlated actors (those whose first annotation carries the same
transaction identifier) share a row.
"""

import json
import logging
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

from lock_timeline.correlation.row_allocator import RowAllocator
from lock_timeline.data.protocol_entry import ProtocolEntry

# Configure logger
logger = logging.getLogger(__name__)

# Annotations containing this marker are decoded as correlation payloads
CORRELATION_MARKER = 'eventId'

# Label shown on a row already occupied by a correlated actor
MERGED_LABEL = '**'

# Actors with this many entries or fewer are noise
MIN_GROUP_SIZE = 2


@dataclass(frozen=True)
class CorrelationPayload:
    """Transaction reference embedded in an entry annotation."""
    transaction_id: str
    event_kind: str

    @property
    def short_label(self) -> str:
        prefix = self.transaction_id.split('-')[0]
        return f"{prefix} {self.event_kind}".strip()


@dataclass(frozen=True)
class TimelineGroup:
    """One actor's timeline, laid out on a display row."""
    actor_id: int
    entries: Tuple[ProtocolEntry, ...]
    label: str
    row: int
    begin: float
    end: float
    warn: bool
    correlation_id: Optional[str] = None

    @property
    def duration(self) -> float:
        return self.end - self.begin

    @property
    def span(self) -> Tuple[float, float]:
        return (self.begin, self.end)


def parse_correlation(extra_info: Optional[str]) -> Optional[CorrelationPayload]:
    """
    Decode a correlation payload from an entry annotation.

    Args:
        extra_info (str): Free-text annotation, possibly JSON

    Returns:
        CorrelationPayload or None: None if the annotation is plain text or
                                    the payload is malformed
    """
    if not extra_info or CORRELATION_MARKER not in extra_info:
        return None

    try:
        data = json.loads(extra_info)
    except json.JSONDecodeError as e:
        logger.debug(f"Treating malformed correlation payload as text: {e}")
        return None

    if not isinstance(data, dict):
        return None

    transaction_id = data.get(CORRELATION_MARKER)
    if not isinstance(transaction_id, str):
        return None

    event_kind = data.get('eventType', '')
    return CorrelationPayload(
        transaction_id=transaction_id,
        event_kind='' if event_kind is None else str(event_kind)
    )


def partition_by_actor(entries: Iterable[ProtocolEntry]) -> Dict[int, List[ProtocolEntry]]:
    """
    Group entries by actor, keeping actors in order of first appearance.

    Args:
        entries: Entries in trace order

    Returns:
        dict: actor_id -> entries for that actor in trace order
    """
    by_actor: Dict[int, List[ProtocolEntry]] = {}
    for entry in entries:
        by_actor.setdefault(entry.actor_id, []).append(entry)
    return by_actor


def group_entries(entries: Iterable[ProtocolEntry], max_rows: int,
                  correlation_rows: Optional[Dict[Hashable, int]] = None) -> List[TimelineGroup]:
    """
    Build the laid-out timeline groups for a trace.

    Args:
        entries: All entries of the trace in trace order
        max_rows (int): Number of display rows available
        correlation_rows (dict): Correlation id -> row mapping for this
                                 recomputation; filled in place. A fresh
                                 mapping is used when omitted.

    Returns:
        list: TimelineGroup objects in actor encounter order
    """
    allocator = RowAllocator(max_rows, correlation_rows)
    groups = []

    for actor_id, protocol in partition_by_actor(entries).items():
        if len(protocol) <= MIN_GROUP_SIZE:
            continue

        first = protocol[0]
        payload = parse_correlation(first.extra_info)

        if payload is not None:
            row, reused = allocator.allocate(payload.transaction_id)
            label = MERGED_LABEL if reused else payload.short_label
        else:
            row, _ = allocator.allocate()
            label = first.extra_info if first.extra_info is not None else str(actor_id)

        groups.append(TimelineGroup(
            actor_id=actor_id,
            entries=tuple(protocol),
            label=label,
            row=row,
            begin=first.time,
            end=protocol[-1].time,
            warn=any(entry.is_deadlock for entry in protocol),
            correlation_id=payload.transaction_id if payload else None
        ))

    logger.debug(
        f"Grouped trace into {len(groups)} timelines over {allocator.max_rows} rows "
        f"({allocator.reused_count} correlated row reuses)"
    )
    return groups
