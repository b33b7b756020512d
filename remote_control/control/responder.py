"""
Authorization responder module.

Controlled (desktop) side of the negotiated flavor: answers remote control
requests, either from the local user or automatically when the countdown
runs out.
"""

import asyncio
from typing import Any, Callable, Optional

from remote_control.common.constants import ControlEventTypes, NEGOTIATED_EVENT_TYPES
from remote_control.common.protocol_definitions import create_grant_event, create_deny_event
from remote_control.control.authorization import AuthorizationNegotiator
from remote_control.control.host import HostSession
from remote_control.control.message_channel import MessageChannel
from remote_control.utils.config import ControlConfig
from remote_control.utils.logger import logger


class RemoteControlResponder:
    """Handles inbound remote control requests on the controlled participant."""

    def __init__(self, host: HostSession, config: Optional[ControlConfig] = None,
                 on_request: Optional[Callable[[str, int], None]] = None,
                 on_countdown: Optional[Callable[[str, int], None]] = None,
                 on_controller_changed: Optional[Callable[[Optional[str]], None]] = None,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.host = host
        self.config = config or ControlConfig()
        # Dialog hooks
        self.on_request = on_request
        self.on_controller_changed = on_controller_changed
        self.controller_id: Optional[str] = None

        self.channel = MessageChannel(host, allowed_types=NEGOTIATED_EVENT_TYPES)
        self.negotiator = AuthorizationNegotiator(
            on_decision=self._on_decision,
            on_countdown=on_countdown,
            countdown_seconds=self.config.countdown_seconds,
            tick_interval=self.config.tick_interval,
            loop=loop
        )

        host.on_inbound_message(self.on_inbound_message)
        host.on_participant_left(self.on_participant_left)

    @property
    def pending_participant(self) -> Optional[str]:
        return self.negotiator.participant_id

    @property
    def countdown(self) -> Optional[int]:
        return self.negotiator.countdown

    def grant(self) -> bool:
        """Accept the pending request."""
        return self.negotiator.respond(True)

    def deny(self) -> bool:
        """Reject the pending request."""
        return self.negotiator.respond(False)

    def on_inbound_message(self, sender_id: str, payload: Any):
        """Host notification: an endpoint message arrived."""
        event = self.channel.parse(payload)
        if event is None:
            return

        if event.type == ControlEventTypes.REQUEST:
            self._handle_request(sender_id)
        elif event.type == ControlEventTypes.STOP:
            self._handle_stop(sender_id)

    def on_participant_left(self, participant_id: str):
        """Host notification: a participant left the session."""
        if participant_id is None:
            return
        if participant_id == self.negotiator.participant_id:
            self.negotiator.cancel()
        if participant_id == self.controller_id:
            self._set_controller(None)

    def _handle_request(self, sender_id: str):
        if sender_id == self.controller_id and not self.negotiator.pending:
            # Already authorized; repeat the answer instead of asking again
            logger.log_authorization(sender_id, "Request re-granted", "already in control")
            self.channel.send(sender_id, create_grant_event())
            return

        busy = self.negotiator.pending or self.controller_id is not None
        if busy:
            logger.log_authorization(sender_id, "Request denied", "another request or session in progress")
            self.channel.send(sender_id, create_deny_event())
            return

        if not self.negotiator.begin(sender_id):
            return
        if self.on_request is not None:
            self.on_request(sender_id, self.negotiator.countdown)

    def _handle_stop(self, sender_id: str):
        if sender_id == self.negotiator.participant_id:
            self.negotiator.cancel()
        if sender_id == self.controller_id:
            self._set_controller(None)

    def _on_decision(self, participant_id: str, granted: bool):
        if granted:
            self.channel.send(participant_id, create_grant_event())
            self._set_controller(participant_id)
        else:
            self.channel.send(participant_id, create_deny_event())

    def _set_controller(self, participant_id: Optional[str]):
        if participant_id == self.controller_id:
            return
        self.controller_id = participant_id
        if participant_id is None:
            logger.info("[CONTROL] No longer being controlled")
        else:
            logger.info(f"[CONTROL] Being controlled by {participant_id}")
        if self.on_controller_changed is not None:
            self.on_controller_changed(participant_id)
