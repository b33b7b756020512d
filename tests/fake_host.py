"""
Test doubles for the host session and the event loop.
"""

import json

from remote_control.common.protocol_definitions import Rect


class FakeHost:
    """In-memory host session recording every endpoint message."""
    
    def __init__(self, active: bool = True, bounds: Rect = Rect(100, 50, 400, 300)):
        self.active = active
        self.bounds = bounds
        self.sent = []
        self.refuse_sends = False
        self.send_error = None
        self.left_callbacks = []
        self.inbound_callbacks = []
    
    def has_active_session(self):
        return self.active
    
    def send_to_participant(self, participant_id, payload):
        if self.send_error is not None:
            raise self.send_error
        if self.refuse_sends:
            return False
        self.sent.append((participant_id, payload))
        return True
    
    def on_participant_left(self, callback):
        self.left_callbacks.append(callback)
    
    def get_rendering_surface_bounds(self):
        return self.bounds
    
    def on_inbound_message(self, callback):
        self.inbound_callbacks.append(callback)
    
    # Test helpers
    
    def participant_left(self, participant_id):
        for callback in list(self.left_callbacks):
            callback(participant_id)
    
    def deliver(self, sender_id, payload):
        for callback in list(self.inbound_callbacks):
            callback(sender_id, payload)
    
    def frames(self):
        """Decoded (target, frame) pairs in send order."""
        return [(target, json.loads(payload['text'])) for target, payload in self.sent]
    
    def frame_types(self, target=None):
        return [frame['type'] for to, frame in self.frames() if target is None or to == target]


class ScreenSharingHost(FakeHost):
    """Host that knows which participants share their screen."""
    
    def __init__(self, sharing=(), **kwargs):
        super().__init__(**kwargs)
        self.sharing = set(sharing)
    
    def is_screen_sharing(self, participant_id):
        return participant_id in self.sharing


class FakeTimerHandle:
    def __init__(self, callback):
        self.callback = callback
        self.cancel_calls = 0
        self.fired = False
    
    @property
    def cancelled(self):
        return self.cancel_calls > 0
    
    def cancel(self):
        self.cancel_calls += 1


class FakeLoop:
    """Manually advanced stand-in for ``loop.call_later``."""
    
    def __init__(self):
        self.handles = []
        self.delays = []
    
    def call_later(self, delay, callback):
        handle = FakeTimerHandle(callback)
        self.handles.append(handle)
        self.delays.append(delay)
        return handle
    
    def pending(self):
        return [h for h in self.handles if not h.fired and not h.cancelled]
    
    def tick(self) -> bool:
        """Fire the oldest live timer. Returns False if none is scheduled."""
        pending = self.pending()
        if not pending:
            return False
        handle = pending[0]
        handle.fired = True
        handle.callback()
        return True
    
    def run_all(self, limit: int = 100) -> int:
        fired = 0
        while fired < limit and self.tick():
            fired += 1
        return fired
    
    @property
    def cancel_calls(self):
        return sum(h.cancel_calls for h in self.handles)
