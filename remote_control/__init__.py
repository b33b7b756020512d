"""
Remote control package for multi-party collaboration sessions.

This package contains the controller-side and controlled-side logic for
driving another participant's pointer over the host session's
peer-messaging channel:
- Control protocol framing
- Input capture and coordinate normalization
- Authorization handshake
- Session lifecycle
"""
