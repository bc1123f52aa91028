"""
Grid Generator - Computes background gridlines for the visible window.

The interval between lines adapts to the zoom level so the number of lines
drawn stays bounded: a coarse interval when zoomed far out, a fine one
otherwise. If the window would still hold more than `max_grid_lines` lines, the
interval is widened by the major-line multiple until it fits. Every Nth line is
flagged as major for styling.
"""

import math
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class GridLine:
    """A vertical gridline at a domain time position."""
    time: float
    index: int
    major: bool


def select_interval(scale_x, config):
    """
    Choose the gridline interval for a zoom level.

    Args:
        scale_x (float): Pixels per time unit
        config (TimelineConfig): Supplies thresholds and intervals

    Returns:
        int: Interval in time units
    """
    if scale_x < config.coarse_scale_threshold:
        return config.coarse_grid_interval
    return config.fine_grid_interval


def generate_grid_lines(x, scale_x, viewport_width, config) -> List[GridLine]:
    """
    Produce the gridlines intersecting the visible window.

    Args:
        x (float): Left edge of the visible window in time units
        scale_x (float): Pixels per time unit (must be positive)
        viewport_width (float): Viewport width in pixels
        config (TimelineConfig): Grid settings

    Returns:
        list: GridLine objects in ascending time order
    """
    if scale_x <= 0 or viewport_width <= 0:
        return []

    window_end = x + viewport_width / scale_x
    if not math.isfinite(window_end):
        return []

    interval = select_interval(scale_x, config)
    widen_by = max(2, config.major_line_every)
    first = math.ceil(x / interval)
    last = math.floor(window_end / interval)
    while last - first + 1 > config.max_grid_lines:
        interval *= widen_by
        first = math.ceil(x / interval)
        last = math.floor(window_end / interval)

    major_span = config.major_line_every * interval

    return [
        GridLine(
            time=index * interval,
            index=index,
            major=(index * interval) % major_span == 0
        )
        for index in range(first, last + 1)
    ]
