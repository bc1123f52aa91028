"""
Timeline Canvas - Main visualization component for the lock timeline.

This module provides the TimelineCanvas class which uses QGraphicsView and
QGraphicsScene to show the laid-out trace with wheel zoom, drag panning and
click selection of actor timelines.

The canvas holds no layout logic: every input event is forwarded to the
TimelineModel, and the resulting frame is redrawn through the QtRenderAdapter.
"""

import logging

from PyQt5.QtWidgets import QGraphicsView, QGraphicsScene
from PyQt5.QtCore import Qt, pyqtSignal, QRectF
from PyQt5.QtGui import QPainter

from lock_timeline.rendering.qt_render_adapter import QtRenderAdapter
from lock_timeline.timeline_model import TimelineModel

# Configure logger
logger = logging.getLogger(__name__)


class TimelineCanvas(QGraphicsView):
    """
    Timeline visualization canvas using QGraphicsView.

    The scene always matches the viewport: items are placed in viewport pixel
    coordinates and the scene is rebuilt after every pan, zoom, resize or load.

    Signals:
        group_clicked: Emitted when an actor timeline is clicked (TimelineGroup)
        viewport_changed: Emitted when the visible window changes (begin, end)
    """

    group_clicked = pyqtSignal(object)  # TimelineGroup
    viewport_changed = pyqtSignal(float, float)  # Window begin and end times

    # Minimum pointer travel in pixels before a press becomes a drag
    DRAG_THRESHOLD = 3

    def __init__(self, model=None, parent=None):
        """
        Initialize the timeline canvas.

        Args:
            model (TimelineModel): Layout engine (a new one if omitted)
            parent: Parent widget
        """
        super().__init__(parent)

        self.model = model or TimelineModel()
        self.render_adapter = QtRenderAdapter()

        self.scene = QGraphicsScene(self)
        self.setScene(self.scene)

        # Panning state
        self._is_panning = False
        self._pan_start_pos = None
        self._press_pos = None
        self._dragged = False

        self._setup_viewport()

    def _setup_viewport(self):
        """Configure the view so scene coordinates equal viewport pixels."""
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setFrameShape(QGraphicsView.NoFrame)
        self.setViewportUpdateMode(QGraphicsView.MinimalViewportUpdate)
        self.setOptimizationFlag(QGraphicsView.DontSavePainterState, True)
        self.setRenderHint(QPainter.Antialiasing, False)
        self.setDragMode(QGraphicsView.NoDrag)
        self.setCursor(Qt.OpenHandCursor)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def load_trace_file(self, path):
        """
        Load a trace file and redraw.

        Raises:
            TraceLoadError: If the file is rejected; the current trace stays displayed
        """
        self.model.load_trace_file(path)
        self.refresh()

    def load_entries(self, entries, source=None):
        """Install entries and redraw."""
        self.model.load_entries(entries, source)
        self.refresh()

    def fit_to_trace(self):
        """Zoom out to the whole trace."""
        self.model.fit_to_trace()
        self.refresh()

    def refresh(self):
        """Rebuild the scene from the model's current frame."""
        viewport_rect = self.viewport().rect()
        self.scene.setSceneRect(QRectF(0, 0, viewport_rect.width(), viewport_rect.height()))

        commands = self.model.build_frame()
        self.render_adapter.render(self.scene, commands)

        begin, end = self.model.transform.visible_window()
        self.viewport_changed.emit(begin, end)

    # ------------------------------------------------------------------
    # Qt event handlers
    # ------------------------------------------------------------------

    def wheelEvent(self, event):
        """
        Handle mouse wheel events for zooming around the cursor.

        Args:
            event: QWheelEvent
        """
        delta = event.angleDelta().y()
        if delta == 0:
            event.ignore()
            return

        cursor_x = event.position().x()
        self.model.zoom(cursor_x, 1 if delta > 0 else -1)
        self.refresh()
        event.accept()

    def mousePressEvent(self, event):
        """
        Handle mouse press events to start panning.

        Args:
            event: QMouseEvent
        """
        if event.button() == Qt.LeftButton:
            self._is_panning = True
            self._pan_start_pos = event.pos()
            self._press_pos = event.pos()
            self._dragged = False
            self.setCursor(Qt.ClosedHandCursor)
            event.accept()
            return

        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        """
        Handle mouse move events for panning.

        Args:
            event: QMouseEvent
        """
        if self._is_panning and self._pan_start_pos is not None:
            delta = event.pos() - self._pan_start_pos
            self._pan_start_pos = event.pos()

            travel = event.pos() - self._press_pos
            if abs(travel.x()) + abs(travel.y()) >= self.DRAG_THRESHOLD:
                self._dragged = True

            self.model.pan(delta.x(), delta.y())
            self.refresh()
            event.accept()
            return

        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        """
        Handle mouse release events; a release without drag is a click.

        Args:
            event: QMouseEvent
        """
        if event.button() == Qt.LeftButton and self._is_panning:
            self._is_panning = False
            self._pan_start_pos = None
            self.setCursor(Qt.OpenHandCursor)

            if not self._dragged:
                self._handle_click(event.pos().x(), event.pos().y())

            event.accept()
            return

        super().mouseReleaseEvent(event)

    def _handle_click(self, view_x, view_y):
        group = self.model.group_at(view_x, view_y)
        if group is None:
            return

        logger.debug(
            f"Actor {group.actor_id} (row {group.row}, {len(group.entries)} entries): "
            + ", ".join(f"{e.time}:{e.type.name}" for e in group.entries)
        )
        self.group_clicked.emit(group)

    def resizeEvent(self, event):
        """
        Handle resize events by updating viewport size and row capacity.

        Args:
            event: QResizeEvent
        """
        super().resizeEvent(event)

        size = self.viewport().size()
        self.model.set_viewport_size(size.width(), size.height())
        self.refresh()
