"""Session wiring and the command line entry point."""

from .session import GameSession, MessageLogMirror

__all__ = [
    'GameSession',
    'MessageLogMirror'
]
