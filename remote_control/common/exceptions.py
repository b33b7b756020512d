"""
Exceptions for the remote control protocol.
"""


class ControlError(Exception):
    """Base class for remote control errors."""


class InvalidControlEventError(ControlError):
    """Raised when a control event is built with an unknown kind or bad coordinates."""

    def __init__(self, event_type, reason: str):
        self.event_type = event_type
        self.reason = reason
        super().__init__(f"Invalid control event '{event_type}': {reason}")
