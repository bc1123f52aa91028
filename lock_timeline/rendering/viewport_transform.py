"""
Viewport Transform - Controls pan offset and zoom scale for the timeline.

This module provides the ViewportTransform class which manages:
- Time-to-pixel conversion
- Pan clamping to the recorded data bounds
- Cursor-anchored zooming, floored at the whole-trace fit
- Vertical scroll offset
"""

import logging
import math

# Configure logger
logger = logging.getLogger(__name__)


class ViewportTransform:
    """
    Maintains the visible window over the trace's time axis.

    State:
        x: Left edge of the visible window in time units
        y: Vertical scroll offset in pixels (never negative)
        scale_x: Pixels per time unit

    The scale never drops below the scale that fits the whole recording into
    one viewport width, and x is always clamped so the visible window stays
    inside the recording.
    """

    ZOOM_IN = 1
    ZOOM_OUT = -1

    # Smallest viewport dimension used in scale math
    MIN_VIEWPORT_PIXELS = 1

    def __init__(self, viewport_width=800, viewport_height=600, zoom_factor=1.3):
        """
        Initialize the transform with no data loaded.

        Args:
            viewport_width (float): Viewport width in pixels
            viewport_height (float): Viewport height in pixels
            zoom_factor (float): Scale multiplier per zoom-in tick (> 1)

        Raises:
            ValueError: If zoom_factor is not greater than 1
        """
        if zoom_factor <= 1:
            raise ValueError(f"Zoom factor must be greater than 1, got {zoom_factor}")

        self.zoom_factor = zoom_factor
        self.viewport_width = max(self.MIN_VIEWPORT_PIXELS, viewport_width)
        self.viewport_height = max(self.MIN_VIEWPORT_PIXELS, viewport_height)

        self._has_data = False
        self._data_begin = 0.0
        self._data_end = 0.0

        self.x = 0.0
        self.y = 0.0
        self.scale_x = self.fit_scale

    # ------------------------------------------------------------------
    # Data bounds
    # ------------------------------------------------------------------

    def set_bounds(self, groups):
        """
        Recompute data bounds from laid-out timeline groups.

        Args:
            groups (list): TimelineGroup objects (anything with begin/end)
        """
        if groups:
            self._has_data = True
            self._data_begin = min(group.begin for group in groups)
            self._data_end = max(group.end for group in groups)
        else:
            self._has_data = False
            self._data_begin = 0.0
            self._data_end = 0.0

        self._enforce_invariants()

    @property
    def has_data(self):
        return self._has_data

    def _bounds(self):
        """
        Resolve the (begin, end) interval the viewport is clamped to.

        The data bounds are used when their span yields a finite, positive
        fit scale. Otherwise the window falls back to one viewport width past
        the data begin, and to [0, viewport_width] when even that cannot be
        represented.
        """
        width = self.viewport_width
        if self._has_data:
            begin, end = self._data_begin, self._data_end
            span = end - begin
            if math.isfinite(span) and span > 0 and 0 < width / span < math.inf:
                return begin, end
            if math.isfinite(begin) and begin + width > begin:
                return begin, begin + width
        return 0.0, float(width)

    @property
    def recording_begin(self):
        """Earliest group begin, or 0 with no data."""
        return self._bounds()[0]

    @property
    def recording_end(self):
        """
        Latest group end.

        Falls back to one viewport width past the beginning when there is no
        data or the recording has zero length.
        """
        return self._bounds()[1]

    @property
    def total_duration(self):
        return self.recording_end - self.recording_begin

    @property
    def fit_scale(self):
        """Scale at which the whole recording spans one viewport width."""
        return self.viewport_width / self.total_duration

    # ------------------------------------------------------------------
    # Coordinate conversion
    # ------------------------------------------------------------------

    def to_screen_x(self, time):
        """
        Convert a domain time to an absolute layer x-coordinate.

        Args:
            time (float): Domain time

        Returns:
            float: scale_x * time
        """
        return self.scale_x * time

    def to_view_x(self, time):
        """Convert a domain time to a pixel column within the viewport."""
        return self.scale_x * (time - self.x)

    def to_time(self, view_x):
        """Convert a viewport pixel column back to domain time."""
        return self.x + view_x / self.scale_x

    def visible_span(self):
        """Width of the visible window in time units."""
        return self.viewport_width / self.scale_x

    def visible_window(self):
        """
        Get the visible time window.

        Returns:
            tuple: (begin, end) in time units
        """
        return (self.x, self.x + self.visible_span())

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def clamp_x(self, x):
        """
        Clamp a left-edge position to the recording bounds.

        Args:
            x (float): Proposed left edge in time units

        Returns:
            float: x limited to [recording_begin, recording_end - visible span]
        """
        lower = self.recording_begin
        upper = max(lower, self.recording_end - self.visible_span())
        return min(max(x, lower), upper)

    def zoom(self, cursor_x, direction):
        """
        Zoom one wheel tick around a cursor position.

        The domain time under the cursor keeps its pixel column unless the
        resulting window has to be clamped to the recording bounds.

        Args:
            cursor_x (float): Cursor position in viewport pixels
            direction (int): Positive to zoom in, negative or zero to zoom out

        Returns:
            bool: True if the scale changed
        """
        old_scale = self.scale_x
        factor = self.zoom_factor if direction > 0 else 1.0 / self.zoom_factor
        new_scale = max(old_scale * factor, self.fit_scale)
        if not math.isfinite(new_scale):
            logger.debug(f"Zoom limit reached at scale {old_scale:.6g}")
            return False

        self.scale_x = new_scale
        self.x = self.clamp_x(self.x - (cursor_x / new_scale - cursor_x / old_scale))

        logger.debug(
            f"Zoom {'in' if direction > 0 else 'out'} at {cursor_x}px: "
            f"scale {old_scale:.6g} -> {new_scale:.6g}, x={self.x:.6g}"
        )
        return new_scale != old_scale

    def pan(self, dx, dy=0.0):
        """
        Pan by a pointer drag delta.

        Args:
            dx (float): Horizontal drag in pixels (positive drags content right)
            dy (float): Vertical drag in pixels (positive drags content down)
        """
        self.x = self.clamp_x(self.x - dx / self.scale_x)
        self.y = max(0.0, self.y - dy)

    def reset(self):
        """Fit the whole recording into the viewport and scroll to the top."""
        self.scale_x = self.fit_scale
        self.x = self.recording_begin
        self.y = 0.0

    def resize(self, viewport_width, viewport_height):
        """
        Update viewport dimensions.

        Args:
            viewport_width (float): New width in pixels
            viewport_height (float): New height in pixels
        """
        self.viewport_width = max(self.MIN_VIEWPORT_PIXELS, viewport_width)
        self.viewport_height = max(self.MIN_VIEWPORT_PIXELS, viewport_height)
        self._enforce_invariants()

    def _enforce_invariants(self):
        if self.scale_x <= 0 or self.scale_x < self.fit_scale:
            self.scale_x = self.fit_scale
        self.x = self.clamp_x(self.x)

    def get_state(self):
        """
        Get the current viewport state.

        Returns:
            dict: Dictionary with keys 'x', 'y', 'scale_x', 'duration',
                  'recording_begin', 'recording_end'
        """
        return {
            'x': self.x,
            'y': self.y,
            'scale_x': self.scale_x,
            'duration': self.total_duration,
            'recording_begin': self.recording_begin,
            'recording_end': self.recording_end,
        }

    def __repr__(self):
        return (
            f"ViewportTransform(x={self.x:.6g}, y={self.y:.6g}, "
            f"scale_x={self.scale_x:.6g}, width={self.viewport_width})"
        )
