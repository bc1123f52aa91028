"""Shared fixtures for lock timeline tests."""

import json
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from lock_timeline.data.protocol_entry import EntryType, ProtocolEntry
from lock_timeline.utils.timeline_config import TimelineConfig


def make_actor(actor_id, times, types=None, extra_info=None):
    """Build one actor's entries; extra_info goes on the first entry only."""
    types = types or [EntryType.RequestRead] * len(times)
    return [
        ProtocolEntry(
            time=t,
            actor_id=actor_id,
            type=kind,
            extra_info=extra_info if i == 0 else None
        )
        for i, (t, kind) in enumerate(zip(times, types))
    ]


def correlation_info(event_id, event_type="commit"):
    return json.dumps({"eventId": event_id, "eventType": event_type})


@pytest.fixture
def config():
    return TimelineConfig()


@pytest.fixture
def simple_trace():
    """Actor 1 with 4 plain entries and actor 2 with a single entry."""
    return make_actor(1, [0, 1, 2, 3], extra_info="locker one") + make_actor(2, [4])


@pytest.fixture(scope="session")
def qapp():
    from PyQt5.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
