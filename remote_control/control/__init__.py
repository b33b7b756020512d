"""
Control module for remote control functionality.

This module handles:
- Remote control of other participants
- Input forwarding
- Control session management
- Authorization handshake
"""

from remote_control.control.authorization import AuthorizationNegotiator
from remote_control.control.input_capture import InputCapture, normalize_position
from remote_control.control.message_channel import MessageChannel
from remote_control.control.responder import RemoteControlResponder
from remote_control.control.session import Session, SessionState
from remote_control.control.session_controller import SessionController

__all__ = [
    'AuthorizationNegotiator',
    'InputCapture',
    'MessageChannel',
    'RemoteControlResponder',
    'Session',
    'SessionController',
    'SessionState',
    'normalize_position',
]
