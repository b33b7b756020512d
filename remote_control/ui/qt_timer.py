"""
Qt timer module.

Cancellable one-shot callbacks for code running on the Qt GUI thread, where
no asyncio loop is running. A QCoreApplication must exist for them to fire.
"""

from typing import Callable

from PyQt6.QtCore import QTimer


class QtTimerHandle:
    """One-shot QTimer with the ``cancel()`` shape of ``asyncio.TimerHandle``."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self._callback = callback
        self._cancelled = False
        self._timer = QTimer()
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)
        self._timer.start(max(0, int(delay * 1000)))

    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self):
        self._cancelled = True
        self._timer.stop()

    def _fire(self):
        if not self._cancelled:
            self._callback()


def call_later(delay: float, callback: Callable[[], None]) -> QtTimerHandle:
    """Schedule ``callback`` after ``delay`` seconds on the Qt event loop."""
    return QtTimerHandle(delay, callback)
