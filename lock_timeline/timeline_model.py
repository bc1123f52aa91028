"""
Timeline Model - Coordinates trace data, layout and viewport state.

This module provides the TimelineModel class which owns the event store and the
viewport transform, and derives everything else from them:
- Timeline groups, memoized against (store version, row capacity)
- Visible groups, memoized against (groups generation, x, scale, viewport width)
- Gridlines and the per-frame draw command list

All updates happen synchronously in response to input events.
"""

import logging
from typing import List, Optional

from lock_timeline.correlation.grouping_engine import group_entries, TimelineGroup
from lock_timeline.data.event_store import EventStore
from lock_timeline.data.trace_loader import load_trace_file, parse_trace
from lock_timeline.rendering.draw_commands import build_frame
from lock_timeline.rendering.grid_generator import generate_grid_lines
from lock_timeline.rendering.theme import DEFAULT_THEME
from lock_timeline.rendering.viewport_transform import ViewportTransform
from lock_timeline.rendering.visibility_filter import VisibilityFilter
from lock_timeline.utils.timeline_config import TimelineConfig


class TimelineModel:
    """
    Layout and viewport engine for a lock-protocol trace.
    """

    def __init__(self, config=None, theme=None, viewport_width=800, viewport_height=600):
        """
        Initialize the model with an empty trace.

        Args:
            config (TimelineConfig): Layout preferences (defaults if omitted)
            theme (Theme): Colour table (defaults if omitted)
            viewport_width (float): Initial viewport width in pixels
            viewport_height (float): Initial viewport height in pixels
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config = config or TimelineConfig()
        self.theme = theme or DEFAULT_THEME

        self.store = EventStore()
        self.transform = ViewportTransform(
            viewport_width, viewport_height, zoom_factor=self.config.zoom_factor
        )
        self.visibility_filter = VisibilityFilter(self.config.max_rendered_groups)

        self._groups_key = None
        self._groups_generation = 0
        self._groups: List[TimelineGroup] = []
        self._visible_key = None
        self._visible: List[TimelineGroup] = []

    # ------------------------------------------------------------------
    # Trace loading
    # ------------------------------------------------------------------

    def load_entries(self, entries, source=None):
        """
        Install a new trace and fit it into the viewport.

        Args:
            entries (iterable): ProtocolEntry objects in trace order
            source (str): Optional description of where the trace came from
        """
        self.store.replace(entries, source)
        self.fit_to_trace()

    def load_trace_text(self, text, source="<memory>"):
        """
        Parse and install a trace from JSON text.

        Raises:
            TraceLoadError: If parsing fails; the prior trace stays installed
        """
        entries = parse_trace(text, source=source)
        self.load_entries(entries, source)

    def load_trace_file(self, path):
        """
        Read, parse and install a trace file.

        Raises:
            TraceLoadError: If reading or parsing fails; the prior trace stays installed
        """
        entries = load_trace_file(path)
        self.load_entries(entries, str(path))

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def max_rows(self):
        """Number of display rows that fit in the viewport (at least 1)."""
        return max(1, int(self.transform.viewport_height // self.config.row_height))

    def groups(self) -> List[TimelineGroup]:
        """
        Get the laid-out timeline groups for the current trace.

        Returns:
            list: TimelineGroup objects in actor encounter order
        """
        key = (self.store.version, self.max_rows)
        if key != self._groups_key:
            self._groups = group_entries(self.store.entries, self.max_rows)
            self._groups_key = key
            self._groups_generation += 1
            self.transform.set_bounds(self._groups)
            self.logger.debug(f"Viewport after regroup: {self.transform.get_state()}")
        return self._groups

    def visible_groups(self) -> List[TimelineGroup]:
        """
        Get the groups that intersect the visible window, capped for rendering.

        Returns:
            list: Visible TimelineGroup objects in layout order
        """
        groups = self.groups()
        key = (
            self._groups_generation, self.transform.x,
            self.transform.scale_x, self.transform.viewport_width
        )
        if key != self._visible_key:
            begin, end = self.transform.visible_window()
            self._visible = self.visibility_filter.apply(groups, begin, end)
            self._visible_key = key
        return self._visible

    def grid_lines(self):
        """Get gridlines for the visible window."""
        self.groups()
        return generate_grid_lines(
            self.transform.x, self.transform.scale_x,
            self.transform.viewport_width, self.config
        )

    def build_frame(self):
        """
        Lay out the current frame.

        Returns:
            list: Draw commands in viewport pixel coordinates
        """
        visible = self.visible_groups()
        return build_frame(self.transform, visible, self.grid_lines(), self.config, self.theme)

    # ------------------------------------------------------------------
    # Viewport input
    # ------------------------------------------------------------------

    def set_viewport_size(self, width, height):
        """
        Handle a viewport resize.

        Args:
            width (float): New width in pixels
            height (float): New height in pixels
        """
        self.transform.resize(width, height)
        self.groups()

    def zoom(self, cursor_x, direction):
        """
        Zoom one tick around the cursor.

        Args:
            cursor_x (float): Cursor position in viewport pixels
            direction (int): Positive to zoom in, negative to zoom out

        Returns:
            bool: True if the scale changed
        """
        self.groups()
        return self.transform.zoom(cursor_x, direction)

    def pan(self, dx, dy=0.0):
        """Pan by a drag delta in pixels."""
        self.groups()
        self.transform.pan(dx, dy)

    def fit_to_trace(self):
        """Zoom out to show the whole trace."""
        self.groups()
        self.transform.reset()
        self.logger.debug(f"Fit to trace: {self.transform.get_state()}")

    def group_at(self, view_x, view_y) -> Optional[TimelineGroup]:
        """
        Find the visible group drawn under a viewport position.

        Later groups paint over earlier ones on a shared row, so the last
        match wins.

        Args:
            view_x (float): Viewport x in pixels
            view_y (float): Viewport y in pixels

        Returns:
            TimelineGroup or None
        """
        row_height = self.config.row_height
        border = self.theme.border_width
        hit = None
        for group in self.visible_groups():
            top = group.row * row_height - self.transform.y
            if not top <= view_y <= top + row_height:
                continue
            left = self.transform.to_view_x(group.begin)
            right = self.transform.to_view_x(group.end) + border * 2
            if left <= view_x <= right:
                hit = group
        return hit

    def summary(self):
        """
        Get a summary of the loaded trace and the current view.

        Returns:
            dict: Counts and bounds for status display
        """
        groups = self.groups()
        visible = self.visible_groups()
        begin, end = self.transform.visible_window()
        return {
            'entries': len(self.store),
            'groups': len(groups),
            'visible': len(visible),
            'warnings': sum(1 for g in groups if g.warn),
            'rows': self.max_rows,
            'window_begin': begin,
            'window_end': end,
            'scale_x': self.transform.scale_x,
        }
