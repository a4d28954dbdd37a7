"""
EventBus - application-wide notifications

Pattern: Observer/Publisher-Subscriber

Editing signals (redraw, frame, selection) live on EditorSession. The bus
carries what the window chrome needs to hear about from services: export
progress and errors.
"""

from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal


class EventBus(QObject):
    """
    Central event bus for decoupled communication between components

    Usage:
        event_bus = get_event_bus()
        event_bus.error_occurred.connect(show_error)
        event_bus.report_error("export", "Render service unreachable")
    """

    # Export events
    export_started = pyqtSignal()
    export_progress = pyqtSignal(int, int)  # current, total
    export_finished = pyqtSignal(bool, str)  # success, message

    # Error events
    error_occurred = pyqtSignal(str, str)  # error_type, error_message

    # Status bar text
    status_message = pyqtSignal(str)

    def __init__(self):
        super().__init__()
        self._export_running = False

    def is_export_running(self) -> bool:
        return self._export_running

    def start_export(self):
        """Signal that an export has begun"""
        self._export_running = True
        self.export_started.emit()

    def finish_export(self, success: bool, message: str):
        """Signal that an export has completed (either way)"""
        self._export_running = False
        self.export_finished.emit(success, message)
        if not success:
            self.report_error("export", message)

    def update_progress(self, current: int, total: int):
        self.export_progress.emit(current, total)

    def report_error(self, error_type: str, message: str):
        """
        Report an error to the UI

        Args:
            error_type: Type of error (e.g., "export")
            message: Human-readable error message
        """
        self.error_occurred.emit(error_type, message)

    def show_status(self, message: str):
        self.status_message.emit(message)


# Singleton instance (lazy initialization)
_event_bus_instance: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """
    Get global EventBus singleton instance

    Returns:
        Global EventBus instance
    """
    global _event_bus_instance
    if _event_bus_instance is None:
        _event_bus_instance = EventBus()
    return _event_bus_instance


__all__ = ['EventBus', 'get_event_bus']
