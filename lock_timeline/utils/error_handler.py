"""
Error Handler Utility
=====================

Exception types raised by the lock timeline, and the ErrorHandler that turns
them into log records, a Qt signal and, optionally, a message box.

Author: Lock Timeline Development Team
Version: 1.0
"""

import logging
import traceback
from typing import Optional
from PyQt5.QtWidgets import QMessageBox
from PyQt5.QtCore import QObject, pyqtSignal

# Configure logger
logger = logging.getLogger(__name__)


class ErrorSeverity:
    """Error severity levels."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class TimelineError(Exception):
    """Base exception for timeline-related errors."""

    def __init__(self, message: str, details: Optional[str] = None,
                 severity: str = ErrorSeverity.ERROR):
        """
        Initialize timeline error.

        Args:
            message: Short message shown to the user
            details: Technical details for the log and the dialog's detail pane
            severity: Error severity level
        """
        super().__init__(message)
        self.message = message
        self.details = details or message
        self.severity = severity


class DataLoadError(TimelineError):
    """Exception for data loading errors."""
    pass


class TraceLoadError(DataLoadError):
    """
    Exception raised when a trace cannot be installed.

    The prior trace always stays in place when this is raised.
    """

    def __init__(self, message: str, source: Optional[str] = None,
                 index: Optional[int] = None, original_error: Optional[Exception] = None):
        """
        Initialize trace load error.

        Args:
            message: Short message shown to the user
            source: File path or description of the rejected trace
            index: Position of the offending entry, if the failure is entry-specific
            original_error: Original exception that was caught
        """
        lines = [message]
        if source:
            lines.append(f"Source: {source}")
        if index is not None:
            lines.append(f"Entry index: {index}")
        if original_error:
            lines.append(f"Original error: {original_error}")

        super().__init__(message, "\n".join(lines) + "\n", ErrorSeverity.ERROR)
        self.source = source
        self.index = index
        self.original_error = original_error


class RenderError(TimelineError):
    """Exception for rendering errors."""
    pass


class ErrorHandler(QObject):
    """
    Reports errors caught by the timeline window.

    Every handled error is logged at a level matching its severity and
    announced through `error_occurred`; a message box is shown on request.

    Signals:
        error_occurred: Emitted when an error is handled (severity, message, details)
    """

    error_occurred = pyqtSignal(str, str, str)  # severity, message, details

    _LOG_LEVELS = {
        ErrorSeverity.WARNING: logging.WARNING,
        ErrorSeverity.ERROR: logging.ERROR,
        ErrorSeverity.CRITICAL: logging.CRITICAL,
    }

    def __init__(self, parent=None):
        """
        Initialize error handler.

        Args:
            parent: Parent widget for message boxes
        """
        super().__init__(parent)
        self.parent_widget = parent
        self._error_count = 0

    def handle_error(self, error: Exception, context: str = "",
                     show_dialog: bool = True) -> None:
        """
        Log and announce an error.

        Args:
            error: The exception that occurred
            context: What was being done (e.g., "loading trace")
            show_dialog: Whether to show a message box
        """
        self._error_count += 1

        if isinstance(error, TimelineError):
            message, details, severity = error.message, error.details, error.severity
        else:
            message = f"An unexpected error occurred while {context}" if context else "An unexpected error occurred"
            details = "".join(traceback.format_exception(type(error), error, error.__traceback__))
            severity = ErrorSeverity.ERROR

        prefix = f"Error in {context}" if context else "Error"
        logger.log(self._LOG_LEVELS.get(severity, logging.ERROR), f"{prefix}: {details}")

        self.error_occurred.emit(severity, message, details)

        if show_dialog and self.parent_widget is not None:
            self._show_error_dialog(message, details, severity)

    def _show_error_dialog(self, message: str, details: str, severity: str):
        if severity == ErrorSeverity.WARNING:
            icon, title = QMessageBox.Warning, "Warning"
        elif severity == ErrorSeverity.CRITICAL:
            icon, title = QMessageBox.Critical, "Critical Error"
        else:
            icon, title = QMessageBox.Critical, "Error"

        msg_box = QMessageBox(self.parent_widget)
        msg_box.setIcon(icon)
        msg_box.setWindowTitle(title)
        msg_box.setText(message)
        msg_box.setDetailedText(details)
        msg_box.addButton(QMessageBox.Ok)
        msg_box.exec_()

    def get_error_count(self) -> int:
        """Number of errors handled since the window opened."""
        return self._error_count
