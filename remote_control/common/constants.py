"""
Shared constants for the remote control protocol.

This module contains all constants used across the controller and
controlled-side components.
"""

# Protocol
PROTOCOL_NAME = 'remote-control-protocol'
ENDPOINT_TEXT_MESSAGE_NAME = 'endpoint-text-message'

# Authorization countdown
DEFAULT_COUNTDOWN_SECONDS = 5
DEFAULT_TICK_INTERVAL = 1.0  # seconds per countdown tick

# Coordinate range for normalized pointer positions
MIN_COORDINATE = 0.0
MAX_COORDINATE = 1.0

# Logging
LOGGER_NAME = 'remote_control'


# Control event kinds
class ControlEventTypes:
    # Device-command (direct) flavor
    START = 'start'
    STOP = 'stop'
    POINTER_MOVE = 'pointer-move'
    POINTER_DOWN = 'pointer-down'
    POINTER_UP = 'pointer-up'
    POINTER_SHOW = 'pointer-show'
    POINTER_HIDE = 'pointer-hide'

    # Authorized (desktop) flavor
    REQUEST = 'request'
    GRANT = 'grant'
    DENY = 'deny'


POSITIONAL_EVENT_TYPES = frozenset({
    ControlEventTypes.POINTER_MOVE,
    ControlEventTypes.POINTER_DOWN,
    ControlEventTypes.POINTER_UP,
})

DIRECT_EVENT_TYPES = frozenset({
    ControlEventTypes.START,
    ControlEventTypes.STOP,
    ControlEventTypes.POINTER_SHOW,
    ControlEventTypes.POINTER_HIDE,
}) | POSITIONAL_EVENT_TYPES

NEGOTIATED_EVENT_TYPES = frozenset({
    ControlEventTypes.REQUEST,
    ControlEventTypes.GRANT,
    ControlEventTypes.DENY,
    ControlEventTypes.STOP,
}) | POSITIONAL_EVENT_TYPES

ALL_EVENT_TYPES = DIRECT_EVENT_TYPES | NEGOTIATED_EVENT_TYPES


# Participant context-menu button states
class RemoteControlButtonStates:
    NOT_AVAILABLE = 0
    AVAILABLE = 1
    ACTIVE = 2


# Notification keys
class NotificationKeys:
    TITLE = 'remoteControl.title'
    STARTED = 'remoteControl.started'
    STOPPED = 'remoteControl.stopped'
    DENIED = 'remoteControl.denied'
