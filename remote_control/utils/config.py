"""
Remote control configuration module.

This module handles remote control configuration settings.
"""

from remote_control.common.constants import DEFAULT_COUNTDOWN_SECONDS, DEFAULT_TICK_INTERVAL


class ControlFlavor:
    """Remote control variants."""
    DIRECT = 'direct'
    NEGOTIATED = 'negotiated'


class ControlConfig:
    """Remote control configuration class."""
    
    def __init__(self, flavor: str = ControlFlavor.DIRECT,
                 countdown_seconds: int = DEFAULT_COUNTDOWN_SECONDS,
                 tick_interval: float = DEFAULT_TICK_INTERVAL):
        if flavor not in (ControlFlavor.DIRECT, ControlFlavor.NEGOTIATED):
            raise ValueError(f"Unknown remote control flavor: {flavor}")
        self.flavor = flavor
        
        # Authorization countdown settings
        self.countdown_seconds = DEFAULT_COUNTDOWN_SECONDS
        self.tick_interval = DEFAULT_TICK_INTERVAL
        self.update_countdown_settings(countdown_seconds, tick_interval)

        # Notification settings
        self.notifications_enabled = True
    
    @property
    def is_negotiated(self) -> bool:
        return self.flavor == ControlFlavor.NEGOTIATED
    
    def update_countdown_settings(self, countdown_seconds: int = None, tick_interval: float = None):
        """Update authorization countdown settings."""
        if countdown_seconds is not None:
            if countdown_seconds < 1:
                raise ValueError("countdown_seconds must be at least 1")
            self.countdown_seconds = countdown_seconds
        if tick_interval is not None:
            if tick_interval <= 0:
                raise ValueError("tick_interval must be positive")
            self.tick_interval = tick_interval
    
    def get_countdown_settings(self):
        """Get authorization countdown settings."""
        return {
            'countdown_seconds': self.countdown_seconds,
            'tick_interval': self.tick_interval
        }
