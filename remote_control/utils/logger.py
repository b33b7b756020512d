"""
Remote control logging module.

This module handles logging for the remote control components.
"""

import logging
import sys

from remote_control.common.constants import LOGGER_NAME


class ControlLogger:
    """Remote control logging class."""
    
    def __init__(self, log_level: int = logging.INFO):
        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(log_level)
        
        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
        
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)
        
        self.logger.addHandler(console_handler)
    
    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)
    
    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)
    
    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)
    
    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)
    
    def log_session_started(self, participant_id: str, flavor: str):
        """Log a control session becoming active."""
        self.info(f"[CONTROL] Controlling participant {participant_id} ({flavor})")
    
    def log_session_stopped(self, participant_id):
        """Log a control session returning to idle."""
        if participant_id:
            self.info(f"[CONTROL] Stopped controlling participant {participant_id}")
        else:
            self.debug("[CONTROL] Stop requested while idle")
    
    def log_authorization(self, participant_id: str, action: str, details: str = ""):
        """Log authorization handshake activity."""
        if details:
            self.info(f"[AUTH] {action} for {participant_id}: {details}")
        else:
            self.info(f"[AUTH] {action} for {participant_id}")
    
    def log_send_failed(self, target_id: str, event_type: str, error: Exception):
        """Log a control frame that could not be sent."""
        self.warning(f"[CONTROL] Failed to send '{event_type}' to {target_id}: {error}")
    
    def log_frame_dropped(self, reason: str):
        """Log an inbound frame that was ignored."""
        self.debug(f"[CONTROL] Dropped inbound frame: {reason}")
    
    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Global logger instance
logger = ControlLogger()
