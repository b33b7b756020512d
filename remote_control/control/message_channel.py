"""
Message channel module.

This module frames control events for the host session's endpoint messages
and validates inbound frames addressed to the remote control protocol.
"""

from typing import Any, Optional

from remote_control.common.protocol_definitions import (
    ControlEvent, create_endpoint_text_message, unwrap_endpoint_payload,
    parse_control_frame
)
from remote_control.utils.logger import logger


class MessageChannel:
    """Protocol adapter over the host's single-recipient message primitive."""
    
    def __init__(self, host, allowed_types=None):
        self.host = host
        # Inbound kinds this endpoint will accept; None accepts every known kind
        self.allowed_types = frozenset(allowed_types) if allowed_types is not None else None
    
    def send(self, target_id: str, event: ControlEvent) -> bool:
        """Send a control event to one participant. Never raises."""
        event_type = getattr(event, 'type', None)
        try:
            payload = create_endpoint_text_message(event.to_frame())
            sent = self.host.send_to_participant(target_id, payload)
        except Exception as e:
            logger.log_send_failed(target_id, event_type, e)
            return False
        
        if sent is False:
            logger.log_send_failed(target_id, event_type, RuntimeError("host refused message"))
            return False
        return True
    
    def parse(self, payload: Any) -> Optional[ControlEvent]:
        """Decode an inbound payload; returns None for foreign or malformed frames."""
        frame = unwrap_endpoint_payload(payload)
        if frame is None:
            logger.log_frame_dropped("undecodable payload")
            return None
        
        event = parse_control_frame(frame)
        if event is None:
            logger.log_frame_dropped(f"not a valid control frame (name={frame.get('name')!r})")
            return None
        
        if self.allowed_types is not None and event.type not in self.allowed_types:
            logger.log_frame_dropped(f"event kind '{event.type}' not accepted here")
            return None
        return event
