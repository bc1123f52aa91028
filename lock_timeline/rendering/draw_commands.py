"""
Draw Commands - Screen-space shapes produced for each frame.

A frame is a flat list of immutable commands in paint order. Commands carry
final pixel coordinates and colours, so any surface able to draw rectangles,
lines and text can render a frame without knowing about the timeline.
"""

from dataclasses import dataclass
from typing import List, Optional, Union

# Command kinds
KIND_BACKGROUND = 'background'
KIND_GRID_MAJOR = 'grid_major'
KIND_GRID_MINOR = 'grid_minor'
KIND_GROUP = 'group'
KIND_TICK = 'tick'
KIND_LABEL = 'label'


@dataclass(frozen=True)
class DrawRect:
    kind: str
    x: float
    y: float
    width: float
    height: float
    fill: str
    stroke: Optional[str] = None
    stroke_width: float = 0
    group: object = None


@dataclass(frozen=True)
class DrawLine:
    kind: str
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str


@dataclass(frozen=True)
class DrawText:
    kind: str
    x: float
    y: float
    text: str
    fill: str
    group: object = None


DrawCommand = Union[DrawRect, DrawLine, DrawText]


def build_frame(transform, visible_groups, grid_lines, config, theme) -> List[DrawCommand]:
    """
    Lay out one frame in viewport pixel coordinates.

    Args:
        transform (ViewportTransform): Current pan/zoom state
        visible_groups (list): TimelineGroup objects to draw, in paint order
        grid_lines (list): GridLine objects for the visible window
        config (TimelineConfig): Row height and detail thresholds
        theme (Theme): Colours

    Returns:
        list: Draw commands in paint order
    """
    width = transform.viewport_width
    height = transform.viewport_height
    row_height = config.row_height

    commands: List[DrawCommand] = [
        DrawRect(KIND_BACKGROUND, 0, 0, width, height, theme.background)
    ]

    for line in grid_lines:
        x = transform.to_view_x(line.time)
        commands.append(DrawLine(
            KIND_GRID_MAJOR if line.major else KIND_GRID_MINOR,
            x, 0, x, height,
            theme.main_lines if line.major else theme.light_lines
        ))

    border = theme.border_width
    for group in visible_groups:
        x = transform.to_view_x(group.begin)
        y = group.row * row_height - transform.y
        span_width = transform.to_view_x(group.end) - x

        commands.append(DrawRect(
            KIND_GROUP, x, y, span_width + border * 2, row_height,
            theme.fill_warn if group.warn else theme.fill,
            stroke=theme.border, stroke_width=border, group=group
        ))

        if span_width < config.detail_min_width:
            continue

        for entry in group.entries:
            commands.append(DrawRect(
                KIND_TICK, transform.to_view_x(entry.time), y + row_height / 2,
                config.tick_width, row_height / 2,
                theme.color_for(entry.type), group=group
            ))

        commands.append(DrawText(
            KIND_LABEL,
            x + span_width + border + config.label_padding,
            y + config.label_padding,
            group.label, theme.label, group=group
        ))

    return commands
