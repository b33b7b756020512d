"""
UI adapters for remote control.

Handles:
- Binding a Qt video widget to input capture
"""
