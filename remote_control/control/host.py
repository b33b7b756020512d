"""
Host session collaborator interface.

The conferencing layer that owns the transport and the participant list is
consumed only through the methods below.
"""

from typing import Any, Callable, Optional, Protocol

from remote_control.common.protocol_definitions import Rect


class HostSession(Protocol):
    """Capabilities the remote control core needs from the host session."""

    def has_active_session(self) -> bool:
        ...

    def send_to_participant(self, participant_id: str, payload: Any) -> bool:
        ...

    def on_participant_left(self, callback: Callable[[str], None]) -> None:
        ...

    def get_rendering_surface_bounds(self) -> Optional[Rect]:
        ...

    def on_inbound_message(self, callback: Callable[[str, Any], None]) -> None:
        ...


def is_participant_sharing_screen(host, participant_id: str) -> bool:
    """Ask the host whether a participant is sharing a desktop track.

    Hosts without screen-share information treat every participant as sharing.
    """
    checker = getattr(host, 'is_screen_sharing', None)
    if checker is None:
        return True
    return bool(checker(participant_id))
