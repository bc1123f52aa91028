"""
Timeline Window - Main window for the lock timeline viewer.

This module provides the main window, integrating the timeline canvas with
trace loading (File > Open and drag-and-drop), error reporting and a status
bar summary.
"""

import logging
from pathlib import Path

from PyQt5.QtWidgets import QMainWindow, QFileDialog, QAction
from PyQt5.QtGui import QKeySequence

from lock_timeline.timeline_canvas import TimelineCanvas
from lock_timeline.timeline_model import TimelineModel
from lock_timeline.utils.error_handler import ErrorHandler, TraceLoadError

# Configure logger
logger = logging.getLogger(__name__)


class TimelineWindow(QMainWindow):
    """
    Main lock timeline window.

    Accepts JSON trace files dropped onto it. A rejected trace is reported
    through the ErrorHandler and leaves the current trace on screen.
    """

    def __init__(self, model=None, parent=None, show_dialogs=True):
        """
        Initialize the timeline window.

        Args:
            model (TimelineModel): Layout engine (a new one if omitted)
            parent: Parent widget
            show_dialogs (bool): Show message boxes for load errors
        """
        super().__init__(parent)

        self.model = model or TimelineModel()
        self.show_dialogs = show_dialogs
        self.error_handler = ErrorHandler(self)
        self.error_handler.error_occurred.connect(self._on_error)

        self.canvas = TimelineCanvas(self.model, self)
        self.setCentralWidget(self.canvas)

        self.canvas.viewport_changed.connect(self._update_status)
        self.canvas.group_clicked.connect(self._on_group_clicked)

        self.setWindowTitle("Lock Timeline")
        self.setAcceptDrops(True)
        self.resize(1200, 600)

        self._create_menu()

    def _create_menu(self):
        file_menu = self.menuBar().addMenu("&File")

        open_action = QAction("&Open Trace...", self)
        open_action.setShortcut(QKeySequence.Open)
        open_action.triggered.connect(self._open_trace_dialog)
        file_menu.addAction(open_action)

        view_menu = self.menuBar().addMenu("&View")

        fit_action = QAction("&Fit Whole Trace", self)
        fit_action.setShortcut("Ctrl+0")
        fit_action.triggered.connect(self.canvas.fit_to_trace)
        view_menu.addAction(fit_action)

    def load_trace(self, path):
        """
        Load a trace file, reporting failures instead of raising.

        Args:
            path (str or Path): JSON trace file

        Returns:
            bool: True if the trace was installed
        """
        try:
            self.canvas.load_trace_file(path)
        except TraceLoadError as e:
            self.error_handler.handle_error(e, "loading trace", show_dialog=self.show_dialogs)
            return False

        self.setWindowTitle(f"Lock Timeline - {Path(path).name}")
        return True

    def _open_trace_dialog(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Trace", "", "JSON traces (*.json);;All files (*)"
        )
        if path:
            self.load_trace(path)

    @staticmethod
    def _dropped_trace_path(mime_data):
        if not mime_data.hasUrls():
            return None
        for url in mime_data.urls():
            if url.isLocalFile() and url.toLocalFile().lower().endswith('.json'):
                return url.toLocalFile()
        return None

    def dragEnterEvent(self, event):
        if self._dropped_trace_path(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        path = self._dropped_trace_path(event.mimeData())
        if path is None:
            event.ignore()
            return

        logger.info(f"Trace dropped: {path}")
        self.load_trace(path)
        event.acceptProposedAction()

    def _update_status(self, begin, end):
        summary = self.model.summary()
        self.statusBar().showMessage(
            f"{summary['groups']} timelines ({summary['visible']} visible, "
            f"{summary['warnings']} with deadlocks) | "
            f"window {begin:.1f} - {end:.1f} | {summary['entries']} entries"
        )

    def _on_error(self, severity, message, details):
        count = self.error_handler.get_error_count()
        self.statusBar().showMessage(f"{message} ({count} error(s) this session)")

    def _on_group_clicked(self, group):
        self.statusBar().showMessage(
            f"Actor {group.actor_id}: {len(group.entries)} events, "
            f"{group.begin} - {group.end}" + (" [deadlock]" if group.warn else "")
        )
