"""
Input capture module.

This module translates raw input on the rendering surface into normalized
pointer events for the control protocol.
"""

from typing import Callable, Optional, Tuple

from remote_control.common.constants import (
    ControlEventTypes, POSITIONAL_EVENT_TYPES, MIN_COORDINATE, MAX_COORDINATE
)
from remote_control.common.protocol_definitions import Rect, ControlEvent, create_pointer_event
from remote_control.utils.logger import logger


POINTER_SOURCE_MOUSE = 'mouse'
POINTER_SOURCES = frozenset({POINTER_SOURCE_MOUSE})


def _clamp(value: float) -> float:
    return max(MIN_COORDINATE, min(MAX_COORDINATE, value))


def normalize_position(client_x: float, client_y: float, bounds: Optional[Rect]) -> Optional[Tuple[float, float]]:
    """Map a client-space position onto the unit square of ``bounds``.

    Positions outside the surface are clamped to its edges. Returns None when
    there is no usable surface.
    """
    if bounds is None or bounds.is_empty():
        return None
    x = _clamp((client_x - bounds.left) / bounds.width)
    y = _clamp((client_y - bounds.top) / bounds.height)
    return x, y


class InputCapture:
    """Listens to a rendering surface while attached and emits pointer events."""

    def __init__(self, bounds_provider: Callable[[], Optional[Rect]],
                 on_pointer_event: Callable[[ControlEvent], None],
                 on_pointer_enter: Optional[Callable[[], None]] = None,
                 on_pointer_leave: Optional[Callable[[], None]] = None,
                 surface=None):
        self.bounds_provider = bounds_provider
        self.on_pointer_event = on_pointer_event
        self.on_pointer_enter = on_pointer_enter
        self.on_pointer_leave = on_pointer_leave
        # Object with install(capture) / uninstall(capture), e.g. QtRenderingSurface
        self.surface = surface
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self):
        """Start listening to the rendering surface."""
        if self._attached:
            return
        if self.surface is not None:
            self.surface.install(self)
        self._attached = True
        logger.debug("[INPUT] Capture attached")

    def detach(self):
        """Stop listening to the rendering surface. Safe to call repeatedly."""
        if not self._attached:
            return
        self._attached = False
        if self.surface is not None:
            self.surface.uninstall(self)
        logger.debug("[INPUT] Capture detached")

    def handle_pointer(self, event_type: str, client_x, client_y,
                       source: str = POINTER_SOURCE_MOUSE) -> Optional[ControlEvent]:
        """Normalize a raw pointer move/down/up and emit it.

        Returns the emitted event, or None when the input was dropped.
        """
        if not self._attached:
            return None
        if source not in POINTER_SOURCES or event_type not in POSITIONAL_EVENT_TYPES:
            return None
        if not isinstance(client_x, (int, float)) or not isinstance(client_y, (int, float)):
            logger.debug(f"[INPUT] Ignoring {event_type} without client coordinates")
            return None

        position = normalize_position(client_x, client_y, self.bounds_provider())
        if position is None:
            logger.debug("[INPUT] No rendering surface available, dropping input")
            return None

        event = create_pointer_event(event_type, *position)
        self.on_pointer_event(event)
        return event

    def handle_move(self, client_x, client_y, source: str = POINTER_SOURCE_MOUSE):
        return self.handle_pointer(ControlEventTypes.POINTER_MOVE, client_x, client_y, source)

    def handle_down(self, client_x, client_y, source: str = POINTER_SOURCE_MOUSE):
        return self.handle_pointer(ControlEventTypes.POINTER_DOWN, client_x, client_y, source)

    def handle_up(self, client_x, client_y, source: str = POINTER_SOURCE_MOUSE):
        return self.handle_pointer(ControlEventTypes.POINTER_UP, client_x, client_y, source)

    def handle_enter(self):
        if self._attached and self.on_pointer_enter is not None:
            self.on_pointer_enter()

    def handle_leave(self):
        if self._attached and self.on_pointer_leave is not None:
            self.on_pointer_leave()
