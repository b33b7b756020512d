"""
Shared definitions for the remote control protocol.

Handles:
- Protocol constants and event kinds
- Control event structures
- Exceptions
"""
