"""RPG UI state: the in-memory state container behind a turn-based game's UI."""

__version__ = "0.1.0"
