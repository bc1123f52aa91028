"""
Trace Loader
============

Parses lock-protocol trace files into ProtocolEntry sequences.

A trace is a JSON array of objects:

    [{"time": 0, "actorId": 1, "type": 10, "extraInfo": "..."}, ...]

`type` may be the EntryType ordinal or its name, and `lockerId` is accepted as
an alias for `actorId`. Parsing is all-or-nothing: any malformed entry rejects
the whole trace with a TraceLoadError.

Author: Lock Timeline Development Team
Version: 1.0
"""

import json
import math
import logging
from pathlib import Path
from typing import Any, List, Union

from lock_timeline.data.protocol_entry import EntryType, ProtocolEntry
from lock_timeline.utils.error_handler import TraceLoadError

# Configure logger
logger = logging.getLogger(__name__)

ACTOR_ID_KEYS = ('actorId', 'lockerId')


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _parse_entry(raw: Any, index: int, source: str) -> ProtocolEntry:
    if not isinstance(raw, dict):
        raise TraceLoadError(
            f"Trace entry {index} is not an object",
            source=source, index=index
        )

    time = raw.get('time')
    if not _is_number(time):
        raise TraceLoadError(
            f"Trace entry {index} has a missing or non-finite 'time'",
            source=source, index=index
        )

    actor_id = None
    for key in ACTOR_ID_KEYS:
        if key in raw:
            actor_id = raw[key]
            break
    if not isinstance(actor_id, int) or isinstance(actor_id, bool):
        raise TraceLoadError(
            f"Trace entry {index} has a missing or non-integer 'actorId'",
            source=source, index=index
        )

    if 'type' not in raw:
        raise TraceLoadError(
            f"Trace entry {index} has no 'type'",
            source=source, index=index
        )
    try:
        entry_type = EntryType.from_value(raw['type'])
    except ValueError as e:
        raise TraceLoadError(
            f"Trace entry {index} has an unknown 'type'",
            source=source, index=index, original_error=e
        ) from e

    extra_info = raw.get('extraInfo')
    if extra_info is not None and not isinstance(extra_info, str):
        raise TraceLoadError(
            f"Trace entry {index} has a non-string 'extraInfo'",
            source=source, index=index
        )

    return ProtocolEntry(
        time=time,
        actor_id=actor_id,
        type=entry_type,
        extra_info=extra_info
    )


def parse_entries(data: Any, source: str = "<memory>") -> List[ProtocolEntry]:
    """
    Convert decoded JSON data into protocol entries.

    Args:
        data: Decoded JSON document (must be a list of entry objects)
        source: Description of the trace origin, used in error messages

    Returns:
        list: Parsed ProtocolEntry objects in trace order

    Raises:
        TraceLoadError: If the document or any entry is malformed
    """
    if not isinstance(data, list):
        raise TraceLoadError(
            f"Trace must be a JSON array of entries, got {type(data).__name__}",
            source=source
        )
    return [_parse_entry(raw, index, source) for index, raw in enumerate(data)]


def parse_trace(text: Union[str, bytes], source: str = "<memory>") -> List[ProtocolEntry]:
    """
    Parse trace JSON text into protocol entries.

    Args:
        text: JSON document text
        source: Description of the trace origin, used in error messages

    Returns:
        list: Parsed ProtocolEntry objects in trace order

    Raises:
        TraceLoadError: If the text is not valid JSON or any entry is malformed
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise TraceLoadError(
            "Trace file is not valid JSON",
            source=source, original_error=e
        ) from e

    entries = parse_entries(data, source)
    logger.debug(f"Parsed {len(entries)} entries from {source}")
    return entries


def load_trace_file(path: Union[str, Path]) -> List[ProtocolEntry]:
    """
    Read and parse a trace file.

    Args:
        path: Path to a JSON trace file

    Returns:
        list: Parsed ProtocolEntry objects in trace order

    Raises:
        TraceLoadError: If the file cannot be read or parsed
    """
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise TraceLoadError(
            "Cannot read trace file",
            source=str(path), original_error=e
        ) from e

    return parse_trace(text, source=str(path))
