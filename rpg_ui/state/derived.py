"""
Derived views over the game state store.
"""
from typing import Callable, Generic, Optional, TypeVar

from rpg_ui.utils.logging import LogCategory, debug
from .game_state_store import GameStateStore
from .models import GameState
from .observable import Observable, Subscriber, Unsubscribe

T = TypeVar('T')


class DerivedView(Generic[T]):
    """
    Read-only value computed from the store's snapshots.

    The value is recomputed on every snapshot the store publishes and
    republished to the view's own subscribers each time, whether or not it
    changed.
    """

    def __init__(self, source: GameStateStore, compute: Callable[[GameState], T],
                 name: str = "derived"):
        """
        Args:
            source: Store to follow
            compute: Pure function of a snapshot
            name: Label used in log output
        """
        self.name = name
        self._compute = compute
        # Computed here so a failing projection raises at construction
        self._value: Observable[T] = Observable(compute(source.get()), name=name)
        self._unsubscribe_source: Optional[Unsubscribe] = source.subscribe(self._recompute)

    def _recompute(self, state: GameState) -> None:
        self._value.set(self._compute(state))

    def get(self) -> T:
        return self._value.get()

    def subscribe(self, subscriber: Subscriber) -> Unsubscribe:
        """Register a subscriber; it is called now and after every recompute."""
        return self._value.subscribe(subscriber)

    def close(self) -> None:
        """Stop following the store. The last value stays readable."""
        if self._unsubscribe_source is not None:
            self._unsubscribe_source()
            self._unsubscribe_source = None
            debug(f"{self.name}: detached from store", LogCategory.STATE)


def enemy_health_percent(state: GameState) -> float:
    """
    Current enemy's health as a percentage of its maximum; 0 with no enemy.
    """
    if state.current_enemy is None:
        return 0
    return state.current_enemy.health_percent()


def create_enemy_health_percent(store: GameStateStore) -> DerivedView[float]:
    return DerivedView(store, enemy_health_percent, name="enemy_health_percent")
