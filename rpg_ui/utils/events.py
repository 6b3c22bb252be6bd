"""
Event handling system for the RPG UI state layer.

This module provides a simple process-wide event bus that lets the
configuration layer and the session bootstrap announce lifecycle events
without direct dependencies on their listeners.
"""
import logging
from typing import Any, Callable, Dict, List

# Type definition for event handlers
EventHandler = Callable[[Dict[str, Any]], None]

# Plain stdlib logger: the category logger imports config, which imports us
_logger = logging.getLogger('rpg_ui.events')


class EventManager:
    """
    Event manager for publishing and subscribing to events.

    Handlers are called in the order they subscribed.
    """

    def __init__(self):
        """Initialize the event manager."""
        self._subscribers: Dict[str, List[EventHandler]] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The function to call when the event is published
        """
        handlers = self._subscribers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """
        Unsubscribe from an event type.

        Args:
            event_type: The type of event to unsubscribe from
            handler: The handler to remove
        """
        if event_type in self._subscribers and handler in self._subscribers[event_type]:
            self._subscribers[event_type].remove(handler)
            if not self._subscribers[event_type]:
                del self._subscribers[event_type]

    def publish(self, event_type: str, data: Dict[str, Any] = None) -> None:
        """
        Publish an event to all subscribers.

        Args:
            event_type: The type of event to publish
            data: Data associated with the event
        """
        if data is None:
            data = {}

        event_data = {'event_type': event_type, **data}

        for handler in list(self._subscribers.get(event_type, [])):
            try:
                handler(event_data)
            except Exception as e:
                # Log error but don't stop event propagation
                _logger.error(f"Error in event handler for {event_type}: {e}", extra={'category': 'ERROR'})

    def subscriber_count(self, event_type: str) -> int:
        """Number of handlers registered for an event type."""
        return len(self._subscribers.get(event_type, []))


# Create singleton instance
event_manager = EventManager()

# Event types
CONFIG_CHANGED = 'config_changed'
SYSTEM_SHUTDOWN = 'system_shutdown'

# Convenience functions
def subscribe(event_type: str, handler: EventHandler) -> None:
    """Subscribe to an event."""
    event_manager.subscribe(event_type, handler)

def unsubscribe(event_type: str, handler: EventHandler) -> None:
    """Unsubscribe from an event."""
    event_manager.unsubscribe(event_type, handler)

def publish(event_type: str, data: Dict[str, Any] = None) -> None:
    """Publish an event."""
    event_manager.publish(event_type, data)
