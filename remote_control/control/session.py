"""
Control session state.

Holds the single session record owned by the SessionController.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SessionState(Enum):
    IDLE = 'idle'
    PENDING_AUTHORIZATION = 'pending_authorization'
    ACTIVE = 'active'


@dataclass(frozen=True)
class Session:
    """Snapshot of the local endpoint's control session.

    ``controlled_id`` is only set while ACTIVE or PENDING_AUTHORIZATION.
    """
    state: SessionState = SessionState.IDLE
    controlled_id: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    @property
    def is_idle(self) -> bool:
        return self.state is SessionState.IDLE
