"""
Authorization negotiator module.

This module turns a remote control request into a grant/deny decision,
either from an explicit response or from the auto-accept countdown.
"""

import asyncio
from typing import Callable, Optional

from remote_control.common.constants import DEFAULT_COUNTDOWN_SECONDS, DEFAULT_TICK_INTERVAL
from remote_control.common.protocol_definitions import AuthorizationRequest
from remote_control.ui import qt_timer
from remote_control.utils.logger import logger


class AuthorizationNegotiator:
    """Request/grant/deny handshake with an auto-accept countdown.

    The countdown is a cancellable ``call_later`` callback on the injected
    loop, the running asyncio loop, or the Qt event loop when neither exists.
    Exactly one of explicit response, countdown expiry or cancellation
    settles a request; whichever comes first wins and the rest are no-ops.
    """

    def __init__(self, on_decision: Callable[[str, bool], None],
                 on_cancel: Optional[Callable[[str], None]] = None,
                 on_countdown: Optional[Callable[[str, int], None]] = None,
                 countdown_seconds: int = DEFAULT_COUNTDOWN_SECONDS,
                 tick_interval: float = DEFAULT_TICK_INTERVAL,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.on_decision = on_decision
        self.on_cancel = on_cancel
        self.on_countdown = on_countdown
        self.countdown_seconds = countdown_seconds
        self.tick_interval = tick_interval
        self.loop = loop

        self._request: Optional[AuthorizationRequest] = None
        self._timer = None

    @property
    def pending(self) -> bool:
        return self._request is not None

    @property
    def participant_id(self) -> Optional[str]:
        return self._request.participant_id if self._request else None

    @property
    def countdown(self) -> Optional[int]:
        """Seconds left before auto-accept, or None when nothing is pending."""
        return self._request.countdown_seconds if self._request else None

    @property
    def timer_running(self) -> bool:
        return self._timer is not None

    def begin(self, participant_id: str) -> bool:
        """Open a request for ``participant_id`` and start the countdown.

        Returns False if a request is already pending. Nothing is stored if the
        countdown cannot be scheduled.
        """
        if self._request is not None:
            logger.warning(f"[AUTH] Request for {participant_id} ignored, "
                           f"{self._request.participant_id} still pending")
            return False

        timer = self._call_later(self.tick_interval, self._on_tick)
        self._request = AuthorizationRequest(participant_id, self.countdown_seconds)
        self._timer = timer
        logger.log_authorization(participant_id, "Request opened",
                                 f"auto-accept in {self.countdown_seconds}s")
        return True

    def respond(self, granted: bool) -> bool:
        """Settle the pending request explicitly. Returns False if already settled."""
        if self._request is None:
            return False
        self._settle(granted, "granted" if granted else "denied")
        return True

    def cancel(self) -> bool:
        """Discard the pending request without a decision."""
        request = self._request
        if request is None:
            return False

        self._release_timer()
        self._request = None
        logger.log_authorization(request.participant_id, "Request cancelled")
        if self.on_cancel is not None:
            self.on_cancel(request.participant_id)
        return True

    def _call_later(self, delay: float, callback: Callable[[], None]):
        loop = self.loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                # Qt GUI thread: no asyncio loop runs here
                return qt_timer.call_later(delay, callback)
        return loop.call_later(delay, callback)

    def _schedule_tick(self):
        self._timer = self._call_later(self.tick_interval, self._on_tick)

    def _on_tick(self):
        request = self._request
        if request is None:
            return

        request.countdown_seconds -= 1
        if self.on_countdown is not None:
            self.on_countdown(request.participant_id, max(request.countdown_seconds, 0))

        if request.countdown_seconds <= 0:
            self._settle(True, "auto-accepted after countdown")
        else:
            self._schedule_tick()

    def _settle(self, granted: bool, how: str):
        request = self._request
        # Timer and request are released before the callback so that a
        # re-entrant respond()/cancel() from it is a no-op.
        self._release_timer()
        self._request = None
        logger.log_authorization(request.participant_id, "Request settled", how)
        self.on_decision(request.participant_id, granted)

    def _release_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
