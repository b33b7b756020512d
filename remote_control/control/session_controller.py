"""
Session controller module.

This module owns the local control session and drives its lifecycle:
- Starting and stopping control of one participant
- Gating captured input on the session state
- Authorization handshake for the negotiated flavor
- Cleanup when the controlled participant leaves
"""

import asyncio
from typing import Any, Callable, List, Optional

from remote_control.common.constants import (
    ControlEventTypes, DIRECT_EVENT_TYPES, NEGOTIATED_EVENT_TYPES,
    RemoteControlButtonStates, NotificationKeys
)
from remote_control.common.protocol_definitions import (
    ControlEvent, create_start_event, create_stop_event, create_request_event,
    create_pointer_show_event, create_pointer_hide_event
)
from remote_control.control.authorization import AuthorizationNegotiator
from remote_control.control.host import HostSession, is_participant_sharing_screen
from remote_control.control.input_capture import InputCapture
from remote_control.control.message_channel import MessageChannel
from remote_control.control.session import Session, SessionState
from remote_control.utils.config import ControlConfig
from remote_control.utils.logger import logger


def _bounds_provider(host, surface):
    # Positions and bounds must come from the same coordinate space
    surface_bounds = getattr(surface, "bounds", None)
    if callable(surface_bounds):
        return surface_bounds
    return host.get_rendering_surface_bounds


class SessionController:
    """Controller-side remote control state machine.

    IDLE -> ACTIVE -> IDLE for the direct flavor,
    IDLE -> PENDING_AUTHORIZATION -> ACTIVE -> IDLE for the negotiated one.
    The session is only written here; everyone else gets snapshots.
    """

    def __init__(self, host: HostSession, config: Optional[ControlConfig] = None,
                 surface=None, notifier: Optional[Callable[[str, str], None]] = None,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.host = host
        self.config = config or ControlConfig()
        self.notifier = notifier
        self._session = Session()
        self._state_listeners: List[Callable[[Session], None]] = []

        allowed = NEGOTIATED_EVENT_TYPES if self.config.is_negotiated else DIRECT_EVENT_TYPES
        self.channel = MessageChannel(host, allowed_types=allowed)
        self.capture = InputCapture(
            bounds_provider=_bounds_provider(host, surface),
            on_pointer_event=self.on_pointer_event,
            on_pointer_enter=self.on_pointer_enter,
            on_pointer_leave=self.on_pointer_leave,
            surface=surface
        )
        self.negotiator = None
        if self.config.is_negotiated:
            self.negotiator = AuthorizationNegotiator(
                on_decision=self._on_authorization_decision,
                on_cancel=self._on_authorization_cancelled,
                countdown_seconds=self.config.countdown_seconds,
                tick_interval=self.config.tick_interval,
                loop=loop
            )

        host.on_participant_left(self.on_participant_left)
        if self.config.is_negotiated:
            host.on_inbound_message(self.on_inbound_message)

    # State

    @property
    def state(self) -> SessionState:
        return self._session.state

    @property
    def controlled_id(self) -> Optional[str]:
        return self._session.controlled_id

    def snapshot(self) -> Session:
        """Get the current session (immutable copy)."""
        return self._session

    def add_state_listener(self, listener: Callable[[Session], None]):
        """Subscribe to session transitions."""
        if listener not in self._state_listeners:
            self._state_listeners.append(listener)

    def remove_state_listener(self, listener: Callable[[Session], None]):
        """Unsubscribe from session transitions."""
        if listener in self._state_listeners:
            self._state_listeners.remove(listener)

    def _transition(self, state: SessionState, controlled_id: Optional[str] = None):
        previous = self._session
        self._session = Session(state, controlled_id)

        # Input capture lives exactly as long as the ACTIVE state
        if state is SessionState.ACTIVE:
            self.capture.attach()
        else:
            self.capture.detach()

        if self._session != previous:
            logger.debug(f"[CONTROL] {previous.state.value} -> {state.value} (controlled={controlled_id})")
            for listener in list(self._state_listeners):
                try:
                    listener(self._session)
                except Exception as e:
                    # Observers never hold up a transition
                    logger.log_error("session state listener", e)

    def _notify(self, description_key: str):
        if self.notifier is not None and self.config.notifications_enabled:
            self.notifier(NotificationKeys.TITLE, description_key)

    # Lifecycle

    def start(self, participant_id: str):
        """Start controlling ``participant_id``. No-op without a host session."""
        if not self.host.has_active_session():
            logger.debug(f"[CONTROL] No active session, cannot control {participant_id}")
            return

        if self._session.controlled_id is not None:
            if self._session.controlled_id == participant_id:
                return
            # Only one controlled participant at a time
            self.stop()

        if self.config.is_negotiated:
            if not self.negotiator.begin(participant_id):
                return
            self._transition(SessionState.PENDING_AUTHORIZATION, participant_id)
            self.channel.send(participant_id, create_request_event())
        else:
            self._transition(SessionState.ACTIVE, participant_id)
            self.channel.send(participant_id, create_start_event())
            logger.log_session_started(participant_id, self.config.flavor)
            self._notify(NotificationKeys.STARTED)

    def stop(self):
        """Stop the current session. Idempotent."""
        controlled_id = self._session.controlled_id
        was_idle = self._session.is_idle

        self._transition(SessionState.IDLE)
        if self.negotiator is not None:
            self.negotiator.cancel()

        if controlled_id is not None:
            self.channel.send(controlled_id, create_stop_event())

        logger.log_session_stopped(controlled_id)
        if not was_idle:
            self._notify(NotificationKeys.STOPPED)

    def toggle(self, participant_id: str):
        """Participant context-menu action: stop if controlling them, otherwise start."""
        if self._session.controlled_id == participant_id:
            self.stop()
        else:
            self.start(participant_id)

    def get_button_state(self, participant_id: str) -> int:
        """Get the context-menu button state for a participant."""
        if self._session.is_active and self._session.controlled_id == participant_id:
            return RemoteControlButtonStates.ACTIVE
        if not self.host.has_active_session():
            return RemoteControlButtonStates.NOT_AVAILABLE
        if not is_participant_sharing_screen(self.host, participant_id):
            return RemoteControlButtonStates.NOT_AVAILABLE
        return RemoteControlButtonStates.AVAILABLE

    def on_participant_left(self, participant_id: str):
        """Host notification: a participant left the session."""
        if participant_id is not None and participant_id == self._session.controlled_id:
            logger.info(f"[CONTROL] Controlled participant {participant_id} left")
            self.stop()

    # Authorization

    def respond(self, granted: bool) -> bool:
        """Settle the pending authorization locally (e.g. from a dialog)."""
        if self.negotiator is None:
            return False
        return self.negotiator.respond(granted)

    def cancel_authorization(self) -> bool:
        """Abandon the pending authorization without a decision."""
        if self.negotiator is None:
            return False
        return self.negotiator.cancel()

    @property
    def countdown(self) -> Optional[int]:
        return self.negotiator.countdown if self.negotiator is not None else None

    def _on_authorization_decision(self, participant_id: str, granted: bool):
        session = self._session
        if session.state is not SessionState.PENDING_AUTHORIZATION or session.controlled_id != participant_id:
            return

        if granted:
            self._transition(SessionState.ACTIVE, participant_id)
            logger.log_session_started(participant_id, self.config.flavor)
            self._notify(NotificationKeys.STARTED)
        else:
            self._transition(SessionState.IDLE)
            self._notify(NotificationKeys.DENIED)

    def _on_authorization_cancelled(self, participant_id: str):
        session = self._session
        if session.state is SessionState.PENDING_AUTHORIZATION and session.controlled_id == participant_id:
            self.stop()

    def on_inbound_message(self, sender_id: str, payload: Any):
        """Host notification: an endpoint message arrived."""
        event = self.channel.parse(payload)
        if event is None:
            return
        if self._session.controlled_id is None or sender_id != self._session.controlled_id:
            logger.log_frame_dropped(f"'{event.type}' from {sender_id} who is not being controlled")
            return

        if event.type == ControlEventTypes.GRANT:
            self.negotiator.respond(True)
        elif event.type == ControlEventTypes.DENY:
            self.negotiator.respond(False)
        elif event.type == ControlEventTypes.STOP:
            # The controlled side ended the session
            self._transition(SessionState.IDLE)
            if self.negotiator is not None:
                self.negotiator.cancel()
            logger.log_session_stopped(sender_id)
            self._notify(NotificationKeys.STOPPED)

    # Input

    def on_pointer_event(self, event: ControlEvent) -> bool:
        """Forward a normalized pointer event while ACTIVE."""
        session = self._session
        if not session.is_active or session.controlled_id is None:
            return False
        if not event.is_positional:
            return False
        return self.channel.send(session.controlled_id, event)

    def on_pointer_enter(self) -> bool:
        return self._send_cursor_visibility(create_pointer_show_event())

    def on_pointer_leave(self) -> bool:
        return self._send_cursor_visibility(create_pointer_hide_event())

    def _send_cursor_visibility(self, event: ControlEvent) -> bool:
        # Only the device flavor renders its own cursor remotely
        session = self._session
        if self.config.is_negotiated or not session.is_active or session.controlled_id is None:
            return False
        return self.channel.send(session.controlled_id, event)
