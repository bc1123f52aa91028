"""
Qt Render Adapter - Draws frame commands onto a QGraphicsScene.

This module provides the QtRenderAdapter class which converts the flat list of
draw commands produced by the layout engine into QGraphicsItem objects.
"""

import logging

from PyQt5.QtWidgets import QGraphicsRectItem, QGraphicsLineItem, QGraphicsSimpleTextItem
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QPen, QBrush

from lock_timeline.rendering.draw_commands import DrawLine, DrawRect, DrawText
from lock_timeline.utils.error_handler import RenderError

# Configure logger
logger = logging.getLogger(__name__)

# Item data roles
ROLE_KIND = 0
ROLE_GROUP = 1


class QtRenderAdapter:
    """
    Renders draw commands as scene items.

    Colours are cached as QColor objects since a frame repeats the same handful
    of theme colours many times.
    """

    # Z-ORDER CONSTANTS
    Z_BACKGROUND = -200
    Z_GRID = -100
    Z_GROUPS = 0
    Z_TICKS = 5
    Z_LABELS = 10

    Z_ORDER = {
        'background': Z_BACKGROUND,
        'grid_major': Z_GRID,
        'grid_minor': Z_GRID,
        'group': Z_GROUPS,
        'tick': Z_TICKS,
        'label': Z_LABELS,
    }

    def __init__(self):
        """Initialize the render adapter."""
        self._colors = {}

    def _color(self, name):
        color = self._colors.get(name)
        if color is None:
            color = QColor(name)
            if not color.isValid():
                raise RenderError(f"Invalid colour in theme: {name!r}")
            self._colors[name] = color
        return color

    def render(self, scene, commands):
        """
        Replace the scene contents with a frame.

        Args:
            scene (QGraphicsScene): Target scene
            commands (list): Draw commands in paint order

        Returns:
            list: Created QGraphicsItem objects
        """
        scene.clear()
        items = []
        for command in commands:
            item = self.create_item(command)
            scene.addItem(item)
            items.append(item)
        return items

    def create_item(self, command):
        """
        Create a QGraphicsItem for one draw command.

        Args:
            command: DrawRect, DrawLine or DrawText

        Returns:
            QGraphicsItem: Item positioned in viewport pixel coordinates

        Raises:
            RenderError: If the command type is not supported
        """
        if isinstance(command, DrawRect):
            item = QGraphicsRectItem(command.x, command.y, command.width, command.height)
            item.setBrush(QBrush(self._color(command.fill)))
            if command.stroke and command.stroke_width > 0:
                item.setPen(QPen(self._color(command.stroke), command.stroke_width))
            else:
                item.setPen(QPen(Qt.NoPen))
            item.setData(ROLE_GROUP, command.group)
        elif isinstance(command, DrawLine):
            item = QGraphicsLineItem(command.x1, command.y1, command.x2, command.y2)
            item.setPen(QPen(self._color(command.stroke), 1))
        elif isinstance(command, DrawText):
            item = QGraphicsSimpleTextItem(command.text)
            item.setPos(command.x, command.y)
            item.setBrush(QBrush(self._color(command.fill)))
            item.setData(ROLE_GROUP, command.group)
        else:
            raise RenderError(f"Unsupported draw command: {type(command).__name__}")

        item.setData(ROLE_KIND, command.kind)
        item.setZValue(self.Z_ORDER.get(command.kind, 0))
        return item
