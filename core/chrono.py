# core/chrono.py
from PySide6.QtCore import QObject, QTimer, Signal


class TickTimer(QObject):
    """Periodic tick for the session driver, backed by a QTimer on the GUI thread."""

    armed = Signal(int)
    cancelled = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._callback = None
        self._tick = QTimer(self)
        self._tick.timeout.connect(self._on_tick)

    @property
    def active(self) -> bool:
        return self._tick.isActive()

    def arm(self, interval_ms: int, callback):
        self._tick.stop()
        self._callback = callback
        self._tick.setInterval(interval_ms)
        self._tick.start()
        self.armed.emit(interval_ms)

    def cancel(self):
        was_active = self._tick.isActive()
        self._tick.stop()
        self._callback = None
        if was_active:
            self.cancelled.emit()

    def _on_tick(self):
        if self._callback is not None:
            self._callback()
