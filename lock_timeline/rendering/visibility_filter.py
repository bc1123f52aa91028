"""
Visibility Filter - Culls timeline groups outside the visible window.

This module provides viewport culling for the timeline: only groups whose span
touches the visible time window are rendered, and the rendered set is capped
so a pathological zoom-out over many actors keeps render cost bounded.
"""

import logging

# Configure logger
logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 1000


def is_between(value, bound_a, bound_b):
    """Inclusive range test that accepts the bounds in either order."""
    return bound_b <= value <= bound_a or bound_a <= value <= bound_b


def overlaps_window(group, window_begin, window_end):
    """
    Check whether a group's span touches the window.

    A group counts as visible when its begin or its end lies inside the
    window.
    """
    return (is_between(group.begin, window_begin, window_end) or
            is_between(group.end, window_begin, window_end))


def filter_visible(groups, window_begin, window_end, limit=DEFAULT_LIMIT):
    """
    Select the groups to render for a window.

    Args:
        groups (list): TimelineGroup objects in layout order
        window_begin (float): Visible window start in time units
        window_end (float): Visible window end in time units
        limit (int): Maximum number of groups returned

    Returns:
        list: Visible groups in their original order, at most `limit` long
    """
    visible = [g for g in groups if overlaps_window(g, window_begin, window_end)]
    return visible[:limit]


class VisibilityFilter:
    """
    Viewport culling with statistics.

    Tracks how many groups were considered, how many intersected the window
    and how many were dropped by the render cap on the last call.
    """

    def __init__(self, limit=DEFAULT_LIMIT):
        """
        Initialize the filter.

        Args:
            limit (int): Maximum number of groups rendered per frame
        """
        self.limit = limit
        self.last_total = 0
        self.last_visible = 0
        self.last_truncated = 0

    def apply(self, groups, window_begin, window_end):
        """
        Filter groups to those visible in the window.

        Args:
            groups (list): TimelineGroup objects in layout order
            window_begin (float): Visible window start
            window_end (float): Visible window end

        Returns:
            list: Visible groups, capped at the limit
        """
        visible = filter_visible(groups, window_begin, window_end, limit=len(groups))

        self.last_total = len(groups)
        self.last_visible = len(visible)
        self.last_truncated = max(0, len(visible) - self.limit)

        if self.last_truncated:
            logger.debug(
                f"Render cap reached: drawing {self.limit} of {len(visible)} visible timelines"
            )

        return visible[:self.limit]

    def get_stats(self):
        """
        Get culling statistics for the last call.

        Returns:
            dict: Dictionary with 'total', 'visible', 'truncated' and 'culled' counts
        """
        return {
            'total': self.last_total,
            'visible': self.last_visible,
            'truncated': self.last_truncated,
            'culled': self.last_total - self.last_visible,
        }
