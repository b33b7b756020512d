"""
Protocol definitions for the remote control protocol.

This module defines the control event structures and the frame format
exchanged between the controller and the controlled participant over the
host session's endpoint messages.
"""

import json
import time
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field

from remote_control.common.constants import (
    PROTOCOL_NAME, ENDPOINT_TEXT_MESSAGE_NAME, ControlEventTypes,
    POSITIONAL_EVENT_TYPES, ALL_EVENT_TYPES, MIN_COORDINATE, MAX_COORDINATE,
    DEFAULT_COUNTDOWN_SECONDS
)
from remote_control.common.exceptions import InvalidControlEventError


@dataclass(frozen=True)
class Rect:
    """Client-space bounds of a rendering surface."""
    left: float
    top: float
    width: float
    height: float

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class ControlEvent:
    """A single control protocol event.

    ``x`` and ``y`` are only carried by pointer move/down/up and are
    fractions of the rendering surface's width and height.
    """
    type: str
    x: Optional[float] = None
    y: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.type, str) or self.type not in ALL_EVENT_TYPES:
            raise InvalidControlEventError(self.type, "unknown event kind")

        if self.type in POSITIONAL_EVENT_TYPES:
            for name, value in (('x', self.x), ('y', self.y)):
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise InvalidControlEventError(self.type, f"missing numeric '{name}'")
                if not MIN_COORDINATE <= value <= MAX_COORDINATE:
                    raise InvalidControlEventError(self.type, f"'{name}'={value} outside [0, 1]")
        elif self.x is not None or self.y is not None:
            raise InvalidControlEventError(self.type, "coordinates not allowed")

    @property
    def is_positional(self) -> bool:
        return self.type in POSITIONAL_EVENT_TYPES

    def to_frame(self) -> Dict[str, Any]:
        """Build the wire frame for this event."""
        frame = {
            "name": PROTOCOL_NAME,
            "type": self.type
        }
        if self.is_positional:
            frame["x"] = float(self.x)
            frame["y"] = float(self.y)
        return frame


@dataclass
class AuthorizationRequest:
    """Pending authorization handshake with one participant."""
    participant_id: str
    countdown_seconds: int = DEFAULT_COUNTDOWN_SECONDS
    created_at: float = field(default_factory=time.monotonic)


def create_start_event() -> ControlEvent:
    """Create a start event."""
    return ControlEvent(ControlEventTypes.START)


def create_stop_event() -> ControlEvent:
    """Create a stop event."""
    return ControlEvent(ControlEventTypes.STOP)


def create_request_event() -> ControlEvent:
    """Create an authorization request event."""
    return ControlEvent(ControlEventTypes.REQUEST)


def create_grant_event() -> ControlEvent:
    """Create an authorization grant event."""
    return ControlEvent(ControlEventTypes.GRANT)


def create_deny_event() -> ControlEvent:
    """Create an authorization deny event."""
    return ControlEvent(ControlEventTypes.DENY)


def create_pointer_event(event_type: str, x: float, y: float) -> ControlEvent:
    """Create a pointer move/down/up event."""
    return ControlEvent(event_type, x, y)


def create_pointer_show_event() -> ControlEvent:
    """Create a pointer show event."""
    return ControlEvent(ControlEventTypes.POINTER_SHOW)


def create_pointer_hide_event() -> ControlEvent:
    """Create a pointer hide event."""
    return ControlEvent(ControlEventTypes.POINTER_HIDE)


def create_endpoint_text_message(frame: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a serialized frame in the host's endpoint text message."""
    return {
        "name": ENDPOINT_TEXT_MESSAGE_NAME,
        "text": json.dumps(frame)
    }


def unwrap_endpoint_payload(payload: Union[str, bytes, Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Extract a decoded frame dict from an inbound payload.

    Accepts an endpoint text message envelope, a JSON string, or an already
    decoded frame. Returns None when the payload cannot be decoded.
    """
    if isinstance(payload, dict) and payload.get("name") == ENDPOINT_TEXT_MESSAGE_NAME:
        payload = payload.get("text")

    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError:
            return None

    if not isinstance(payload, dict):
        return None
    return payload


def parse_control_frame(frame: Dict[str, Any]) -> Optional[ControlEvent]:
    """Turn a decoded frame into a ControlEvent, or None if it is not ours or malformed."""
    if frame.get("name") != PROTOCOL_NAME:
        return None

    event_type = frame.get("type")
    if not isinstance(event_type, str) or event_type not in ALL_EVENT_TYPES:
        return None

    try:
        if event_type in POSITIONAL_EVENT_TYPES:
            return ControlEvent(event_type, frame.get("x"), frame.get("y"))
        return ControlEvent(event_type)
    except InvalidControlEventError:
        return None
