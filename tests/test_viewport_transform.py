"""Tests for the pan/zoom viewport transform."""

from types import SimpleNamespace

import pytest

from lock_timeline.rendering.viewport_transform import ViewportTransform


def span(begin, end):
    return SimpleNamespace(begin=begin, end=end)


@pytest.fixture
def transform():
    """800px wide viewport over a recording spanning [0, 1000]."""
    t = ViewportTransform(800, 600)
    t.set_bounds([span(0, 400), span(200, 1000)])
    t.reset()
    return t


def assert_window_within_bounds(t):
    begin, end = t.visible_window()
    assert begin >= t.recording_begin - 1e-9
    assert end <= t.recording_end + 1e-9


class TestBounds:
    """Tests for data bounds and fallbacks."""

    def test_no_data_defaults(self):
        t = ViewportTransform(800, 600)
        assert t.has_data is False
        assert t.recording_begin == 0
        assert t.recording_end == 800
        assert t.fit_scale == pytest.approx(1.0)
        assert t.clamp_x(-50) == 0
        assert t.clamp_x(500) == 0

    def test_bounds_from_groups(self, transform):
        assert transform.recording_begin == 0
        assert transform.recording_end == 1000
        assert transform.fit_scale == pytest.approx(0.8)
        assert transform.scale_x == pytest.approx(0.8)
        assert transform.visible_window() == pytest.approx((0, 1000))

    def test_zero_length_recording_does_not_divide_by_zero(self):
        t = ViewportTransform(800, 600)
        t.set_bounds([span(5, 5)])
        assert t.recording_end == 805
        assert t.fit_scale == pytest.approx(1.0)

    def test_unrepresentable_span_falls_back_to_one_viewport(self):
        t = ViewportTransform(800, 600)
        t.set_bounds([span(-1e308, 1e308)])
        assert (t.recording_begin, t.recording_end) == (0, 800)
        assert t.fit_scale == pytest.approx(1.0)
        assert_window_within_bounds(t)

    def test_zero_span_at_large_time(self):
        t = ViewportTransform(800, 600)
        t.set_bounds([span(1e12, 1e12)])
        assert t.total_duration == pytest.approx(800)
        t.set_bounds([span(1e20, 1e20)])
        assert (t.recording_begin, t.recording_end) == (0, 800)

    def test_clearing_bounds_restores_defaults(self, transform):
        transform.set_bounds([])
        assert transform.recording_end == 800
        assert transform.scale_x >= transform.fit_scale

    def test_invalid_zoom_factor(self):
        with pytest.raises(ValueError):
            ViewportTransform(800, 600, zoom_factor=1.0)


class TestConversion:
    """Tests for time/pixel conversion."""

    def test_to_screen_x_is_absolute(self, transform):
        transform.scale_x = 2.0
        transform.x = 100
        assert transform.to_screen_x(50) == 100
        assert transform.to_view_x(150) == 100

    def test_to_time_inverts_to_view_x(self, transform):
        transform.zoom(300, 1)
        assert transform.to_view_x(transform.to_time(123.0)) == pytest.approx(123.0)


class TestZoom:
    """Tests for cursor-anchored zoom."""

    def test_zoom_in_preserves_cursor_anchor(self, transform):
        cursor = 400
        anchor_time = transform.to_time(cursor)

        changed = transform.zoom(cursor, 1)

        assert changed is True
        assert transform.scale_x == pytest.approx(0.8 * 1.3)
        assert transform.to_view_x(anchor_time) == pytest.approx(cursor)

    def test_repeated_zoom_preserves_anchor_away_from_edges(self, transform):
        cursor = 400
        anchor_time = transform.to_time(cursor)
        for _ in range(5):
            transform.zoom(cursor, 1)
            assert transform.to_view_x(anchor_time) == pytest.approx(cursor)

    def test_zoom_out_is_floored_at_fit_scale(self, transform):
        changed = transform.zoom(400, -1)
        assert changed is False
        assert transform.scale_x == pytest.approx(transform.fit_scale)
        assert transform.x == 0

    def test_zoom_out_uses_reciprocal_factor(self, transform):
        transform.zoom(400, 1)
        transform.zoom(400, 1)
        scale = transform.scale_x
        transform.zoom(400, -1)
        assert transform.scale_x == pytest.approx(scale / 1.3)

    def test_zoom_sequences_keep_invariants(self, transform):
        for direction, cursor in [(1, 0), (1, 799), (1, 10), (-1, 700),
                                  (1, 400), (-1, 0), (-1, 800), (-1, 400)]:
            transform.zoom(cursor, direction)
            assert transform.scale_x >= transform.fit_scale
            assert_window_within_bounds(transform)

    def test_zoom_near_edge_is_clamped(self, transform):
        transform.zoom(0, 1)
        assert transform.x == 0
        assert_window_within_bounds(transform)


class TestPan:
    """Tests for drag panning."""

    def test_pan_moves_window_by_time_delta(self, transform):
        for _ in range(3):
            transform.zoom(400, 1)
        x = transform.x
        transform.pan(-52, 0)
        assert transform.x == pytest.approx(x + 52 / transform.scale_x)

    def test_pan_is_clamped_to_begin(self, transform):
        transform.zoom(400, 1)
        transform.pan(10000, 0)
        assert transform.x == 0

    def test_pan_is_clamped_to_end(self, transform):
        transform.zoom(400, 1)
        transform.pan(-10000, 0)
        assert transform.visible_window()[1] == pytest.approx(1000)

    def test_pan_at_fit_scale_cannot_move(self, transform):
        transform.pan(-100, 0)
        assert transform.x == 0

    def test_vertical_scroll_never_goes_above_first_row(self, transform):
        transform.pan(0, 50)
        assert transform.y == 0
        transform.pan(0, -120)
        assert transform.y == 120
        transform.pan(0, 200)
        assert transform.y == 0


class TestResize:
    """Tests for viewport resize handling."""

    def test_narrower_viewport_keeps_scale(self, transform):
        transform.zoom(400, 1)
        scale = transform.scale_x
        transform.resize(400, 300)
        assert transform.scale_x == pytest.approx(scale)
        assert_window_within_bounds(transform)

    def test_wider_viewport_raises_scale_to_fit(self, transform):
        transform.resize(1600, 600)
        assert transform.scale_x == pytest.approx(1.6)
        assert_window_within_bounds(transform)

    def test_degenerate_size_is_floored(self):
        t = ViewportTransform(0, -10)
        assert t.viewport_width == 1
        assert t.viewport_height == 1
        assert t.scale_x > 0
