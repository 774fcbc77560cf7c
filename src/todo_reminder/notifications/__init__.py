"""
Notification subsystem.

- gateway.py: permission negotiation + reminder dispatch with explicit results
- console_notifier.py: terminal notification surface
"""
