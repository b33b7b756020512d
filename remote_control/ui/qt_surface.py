"""
Qt rendering surface module.

This module binds the widget showing the controlled participant's screen
to InputCapture through a Qt event filter.
"""

from typing import Optional

from PyQt6.QtCore import QObject, QEvent
from PyQt6.QtGui import QInputDevice
from PyQt6.QtWidgets import QWidget

from remote_control.common.constants import ControlEventTypes
from remote_control.common.protocol_definitions import Rect
from remote_control.control.input_capture import POINTER_SOURCE_MOUSE


_POINTER_EVENTS = {
    QEvent.Type.MouseMove: ControlEventTypes.POINTER_MOVE,
    QEvent.Type.MouseButtonPress: ControlEventTypes.POINTER_DOWN,
    QEvent.Type.MouseButtonRelease: ControlEventTypes.POINTER_UP,
}


def _event_source(event) -> str:
    device = event.device()
    if device is not None and device.type() == QInputDevice.DeviceType.TouchScreen:
        return 'touch'
    return POINTER_SOURCE_MOUSE


class QtRenderingSurface(QObject):
    """Event filter feeding a QWidget's mouse activity into InputCapture."""

    def __init__(self, widget: QWidget):
        super().__init__(widget)
        self.widget = widget
        self._capture = None
        self._had_mouse_tracking = False

    @property
    def installed(self) -> bool:
        return self._capture is not None

    def bounds(self) -> Optional[Rect]:
        """Widget-local bounds; positions are reported in the same space."""
        if self.widget is None:
            return None
        return Rect(0, 0, self.widget.width(), self.widget.height())

    def install(self, capture):
        """Start forwarding widget events to ``capture``."""
        if self._capture is not None:
            self.uninstall(self._capture)
        self._capture = capture
        self._had_mouse_tracking = self.widget.hasMouseTracking()
        # Moves without a pressed button are only delivered with tracking on
        self.widget.setMouseTracking(True)
        self.widget.installEventFilter(self)

    def uninstall(self, capture):
        """Stop forwarding widget events."""
        if self._capture is None or self._capture is not capture:
            return
        self.widget.removeEventFilter(self)
        self.widget.setMouseTracking(self._had_mouse_tracking)
        self._capture = None

    def eventFilter(self, obj, event):
        capture = self._capture
        if capture is None:
            return False

        event_type = event.type()
        if event_type in _POINTER_EVENTS:
            position = event.position()
            capture.handle_pointer(_POINTER_EVENTS[event_type], position.x(), position.y(),
                                   _event_source(event))
        elif event_type == QEvent.Type.Enter:
            capture.handle_enter()
        elif event_type == QEvent.Type.Leave:
            capture.handle_leave()

        # Never consume: the widget keeps its own behavior
        return False
