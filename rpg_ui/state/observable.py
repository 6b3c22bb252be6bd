"""
Writable observable value.

Holds one value, a list of subscribers in registration order, and publishes
every new value to all of them. Writes issued from inside a subscriber are
queued and applied once the running notification cycle has finished, so
subscribers always see values in the order the writes were made.
"""
from collections import deque
from typing import Callable, Deque, Dict, Generic, TypeVar

from rpg_ui.utils.logging import LogCategory, error, trace

T = TypeVar('T')

Subscriber = Callable[[T], None]
Unsubscribe = Callable[[], None]


class Observable(Generic[T]):
    """
    Minimal observable value in the style of a writable store.

    Every set() or update() publishes exactly once, even when the new value
    equals the old one.
    """

    def __init__(self, initial: T, name: str = "observable"):
        """
        Args:
            initial: Starting value
            name: Label used in log output
        """
        self.name = name
        self._value = initial
        self._subscribers: Dict[int, Subscriber] = {}
        self._next_token = 0
        self._pending: Deque[Callable[[T], T]] = deque()
        self._publishing = False

    def get(self) -> T:
        """Current value."""
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, subscriber: Subscriber) -> Unsubscribe:
        """
        Register a subscriber and call it once with the current value.

        Args:
            subscriber: Called with each published value

        Returns:
            Function that stops further notifications to this subscriber
        """
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = subscriber
        trace(f"{self.name}: subscriber {token} registered", LogCategory.STATE)

        self._call(token, subscriber, self._value)

        def unsubscribe() -> None:
            if self._subscribers.pop(token, None) is not None:
                trace(f"{self.name}: subscriber {token} removed", LogCategory.STATE)

        return unsubscribe

    def set(self, value: T) -> None:
        """Replace the value and publish it."""
        self.update(lambda _current: value)

    def update(self, updater: Callable[[T], T]) -> None:
        """
        Compute the next value from the current one and publish it.

        Args:
            updater: Pure function from the current value to the next one
        """
        self._pending.append(updater)
        if self._publishing:
            # Applied by the outer call once the current cycle completes
            return

        self._publishing = True
        try:
            while self._pending:
                next_updater = self._pending.popleft()
                self._value = next_updater(self._value)
                self._notify(self._value)
        finally:
            self._publishing = False
            self._pending.clear()

    def _notify(self, value: T) -> None:
        for token, subscriber in list(self._subscribers.items()):
            # Skip subscribers removed earlier in this cycle
            if token in self._subscribers:
                self._call(token, subscriber, value)

    def _call(self, token: int, subscriber: Subscriber, value: T) -> None:
        try:
            subscriber(value)
        except Exception as e:
            error(f"{self.name}: error in subscriber {token}: {e}", LogCategory.STATE)
