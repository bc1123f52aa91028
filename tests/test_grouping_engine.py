"""Tests for actor grouping and row allocation."""

import pytest

from conftest import correlation_info, make_actor
from lock_timeline.correlation.grouping_engine import (
    MERGED_LABEL,
    group_entries,
    parse_correlation,
    partition_by_actor,
)
from lock_timeline.correlation.row_allocator import RowAllocator
from lock_timeline.data.protocol_entry import EntryType


class TestRowAllocator:
    """Tests for cyclic row assignment."""

    def test_sequential_rows_wrap_at_capacity(self):
        allocator = RowAllocator(3)
        rows = [allocator.allocate()[0] for _ in range(5)]
        assert rows == [0, 1, 2, 0, 1]

    def test_correlated_id_reuses_row(self):
        allocator = RowAllocator(10)
        assert allocator.allocate("tx-1") == (0, False)
        assert allocator.allocate() == (1, False)
        assert allocator.allocate("tx-1") == (0, True)
        assert allocator.next_row == 2

    def test_mapping_is_filled_in_place(self):
        mapping = {}
        allocator = RowAllocator(4, mapping)
        allocator.allocate("a")
        allocator.allocate("b")
        assert mapping == {"a": 0, "b": 1}

    def test_zero_capacity_is_floored_to_one_row(self):
        allocator = RowAllocator(0)
        assert [allocator.allocate()[0] for _ in range(3)] == [0, 0, 0]

    def test_reset(self):
        allocator = RowAllocator(4)
        allocator.allocate("a")
        allocator.allocate("a")
        allocator.reset()
        assert allocator.next_row == 0
        assert allocator.reused_count == 0
        assert allocator.correlation_rows == {}


class TestParseCorrelation:
    """Tests for correlation payload decoding."""

    def test_valid_payload(self):
        payload = parse_correlation(correlation_info("abc123-def-456", "begin"))
        assert payload.transaction_id == "abc123-def-456"
        assert payload.event_kind == "begin"
        assert payload.short_label == "abc123 begin"

    @pytest.mark.parametrize("text", [
        None,
        "",
        "plain annotation",
        '{"eventId": broken',
        '["eventId"]',
        '{"eventId": 42, "eventType": "x"}',
    ])
    def test_non_payloads_return_none(self, text):
        assert parse_correlation(text) is None


class TestGroupEntries:
    """Tests for building laid-out timeline groups."""

    def test_single_group_scenario(self, simple_trace):
        groups = group_entries(simple_trace, max_rows=20)

        assert len(groups) == 1
        group = groups[0]
        assert group.actor_id == 1
        assert group.row == 0
        assert group.span == (0, 3)
        assert group.warn is False
        assert group.label == "locker one"
        assert len(group.entries) == 4

    def test_groups_with_two_or_fewer_entries_are_dropped(self):
        entries = make_actor(1, [0, 1]) + make_actor(2, [2, 3, 4]) + make_actor(3, [5])
        groups = group_entries(entries, max_rows=10)
        assert [g.actor_id for g in groups] == [2]
        assert all(len(g.entries) > 2 for g in groups)

    def test_deadlock_sets_warning(self):
        types = [EntryType.RequestWrite, EntryType.DeadlockDetected,
                 EntryType.DeadlockResolved, EntryType.WriteGranted]
        groups = group_entries(make_actor(1, [0, 1, 2, 3], types), max_rows=10)
        assert groups[0].warn is True

    def test_rows_cycle_for_uncorrelated_actors(self):
        entries = []
        for actor in range(5):
            entries += make_actor(actor, [actor, actor + 1, actor + 2])
        groups = group_entries(entries, max_rows=3)
        assert [g.row for g in groups] == [0, 1, 2, 0, 1]

    def test_correlated_actors_share_row(self):
        entries = (
            make_actor(1, [0, 1, 2], extra_info=correlation_info("tx9-a", "lock"))
            + make_actor(2, [1, 2, 3], extra_info="plain")
            + make_actor(3, [2, 3, 4], extra_info=correlation_info("tx9-a", "unlock"))
        )
        mapping = {}
        groups = group_entries(entries, max_rows=10, correlation_rows=mapping)

        assert [g.row for g in groups] == [0, 1, 0]
        assert [g.label for g in groups] == ["tx9 lock", "plain", MERGED_LABEL]
        assert groups[2].correlation_id == "tx9-a"
        assert mapping == {"tx9-a": 0}

    def test_malformed_payload_gets_fresh_row_and_raw_label(self):
        broken = '{"eventId": "tx1", oops'
        entries = (
            make_actor(1, [0, 1, 2], extra_info=correlation_info("tx1"))
            + make_actor(2, [0, 1, 2], extra_info=broken)
        )
        groups = group_entries(entries, max_rows=10)
        assert groups[1].row == 1
        assert groups[1].label == broken

    def test_missing_annotation_labels_with_actor_id(self):
        groups = group_entries(make_actor(42, [0, 1, 2]), max_rows=10)
        assert groups[0].label == "42"

    def test_actor_encounter_order_is_preserved(self):
        entries = make_actor(7, [0]) + make_actor(3, [1, 2, 3]) + make_actor(7, [4, 5])
        groups = group_entries(entries, max_rows=10)
        assert [g.actor_id for g in groups] == [7, 3]
        assert groups[0].span == (0, 5)

    def test_interleaved_entries_keep_per_actor_order(self):
        a = make_actor(1, [0, 2, 4])
        b = make_actor(2, [1, 3, 5])
        entries = [a[0], b[0], a[1], b[1], a[2], b[2]]
        by_actor = partition_by_actor(entries)
        assert [e.time for e in by_actor[1]] == [0, 2, 4]
        assert [e.time for e in by_actor[2]] == [1, 3, 5]

    def test_recomputation_is_idempotent(self):
        entries = []
        for actor in range(6):
            info = correlation_info(f"tx{actor % 2}-x") if actor % 3 == 0 else None
            entries += make_actor(actor, [actor, actor + 1, actor + 2], extra_info=info)

        first = group_entries(entries, max_rows=4)
        second = group_entries(entries, max_rows=4)
        assert first == second
