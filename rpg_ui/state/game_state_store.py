"""
Game state store.

The single owner of the current GameState. Callers change state only through
the mutation methods below; each one builds a new snapshot from the current
one and publishes it to every subscriber exactly once, including when the
change turns out to be a no-op. No mutation raises.
"""
import time
import uuid
from dataclasses import replace
from typing import Callable, Optional, Union

from rpg_ui.utils.config import get_config
from rpg_ui.utils.logging import LogCategory, debug, info, warning
from .models import (
    Enemy,
    EquipmentHand,
    GameMessage,
    GameState,
    Item,
    ItemStack,
    MessageLevel,
    PlayerStats,
    initial_state,
)
from .observable import Observable, Subscriber, Unsubscribe

DEFAULT_MESSAGE_LOG_LIMIT = 50


def _coerce_level(level: Union[MessageLevel, str]) -> Union[MessageLevel, str]:
    try:
        return MessageLevel(level)
    except ValueError:
        return level


def _resolve_log_limit(limit: Optional[int]) -> int:
    """Explicit limit, else store.message_log_limit; anything below 1 falls back to the default."""
    if limit is None:
        limit = get_config('store.message_log_limit', DEFAULT_MESSAGE_LOG_LIMIT)
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        warning(f"Invalid message log limit {limit!r}, using {DEFAULT_MESSAGE_LOG_LIMIT}",
                LogCategory.STATE)
        return DEFAULT_MESSAGE_LOG_LIMIT
    return limit


class GameStateStore:
    """
    Holds the game UI state and broadcasts each new snapshot.

    Observers receive the current snapshot when they subscribe and then one
    snapshot per mutation, in the order the mutations were made.
    """

    def __init__(self, player_stats: Optional[PlayerStats] = None,
                 message_log_limit: Optional[int] = None):
        """
        Args:
            player_stats: Starting stats; defaults to the store.initial_player config
            message_log_limit: Maximum log entries kept; defaults to store.message_log_limit
        """
        self._initial = initial_state(player_stats)
        self.message_log_limit = _resolve_log_limit(message_log_limit)
        self._state = Observable(self._initial, name="game_state")

        info(f"Game state store initialized (message log limit {self.message_log_limit})",
             LogCategory.STATE)

    @property
    def initial_state(self) -> GameState:
        return self._initial

    def get(self) -> GameState:
        """Current snapshot."""
        return self._state.get()

    def subscribe(self, observer: Subscriber) -> Unsubscribe:
        """
        Register an observer of state snapshots.

        Args:
            observer: Called now with the current snapshot and after every mutation

        Returns:
            Function that stops notifications to this observer
        """
        return self._state.subscribe(observer)

    def _update(self, updater: Callable[[GameState], GameState]) -> None:
        self._state.update(updater)

    # Inventory

    def add_to_inventory(self, item: Item) -> None:
        """
        Add a new stack of one item.

        Stacks are not merged: adding an item already in the inventory adds
        a second stack for it.
        """
        def updater(state: GameState) -> GameState:
            items = state.inventory.items + (ItemStack(item=item, count=1),)
            return replace(state, inventory=replace(state.inventory, items=items))

        debug(f"Adding item {item.id} to inventory", LogCategory.INVENTORY)
        self._update(updater)

    def remove_from_inventory(self, item_id: str) -> None:
        """Remove every stack of the item with this id. Unknown ids are ignored."""
        def updater(state: GameState) -> GameState:
            items = tuple(stack for stack in state.inventory.items if stack.item.id != item_id)
            removed = len(state.inventory.items) - len(items)
            debug(f"Removed {removed} stack(s) of {item_id} from inventory", LogCategory.INVENTORY)
            return replace(state, inventory=replace(state.inventory, items=items))

        self._update(updater)

    # Equipment

    def equip_item(self, item: Item, slot: Union[EquipmentHand, str]) -> None:
        """
        Put item in a hand slot, replacing whatever was there.

        The replaced item is not returned to the inventory.
        """
        debug(f"Equipping {item.id} in {slot}", LogCategory.EQUIPMENT)
        self._update(lambda state: replace(state, equipment=state.equipment.with_slot(slot, item)))

    def unequip_item(self, slot: Union[EquipmentHand, str]) -> None:
        """Empty a hand slot."""
        debug(f"Emptying {slot}", LogCategory.EQUIPMENT)
        self._update(lambda state: replace(state, equipment=state.equipment.with_slot(slot, None)))

    # Message log

    def add_message(self, text: str, level: Union[MessageLevel, str] = MessageLevel.INFO) -> None:
        """
        Append an entry to the message log.

        If the newest entry already has the same text and level nothing is
        appended. The log keeps only the most recent message_log_limit entries.

        Args:
            text: Message text
            level: Message level
        """
        level = _coerce_level(level)
        limit = self.message_log_limit

        def updater(state: GameState) -> GameState:
            last = state.last_message
            if last is not None and last.text == text and last.level == level:
                debug(f"Skipping repeated message: {text!r}", LogCategory.MESSAGES)
                return state

            timestamp = time.time()
            if last is not None and timestamp < last.timestamp:
                timestamp = last.timestamp

            message = GameMessage(
                id=str(uuid.uuid4()),
                text=text,
                level=level,
                timestamp=timestamp
            )
            return replace(state, messages=(state.messages + (message,))[-limit:])

        self._update(updater)

    # Selection

    def set_selected_item_index(self, index: int) -> None:
        self._update(lambda state: replace(state, selected_item_index=index))

    def set_selected_equipment_slot(self, slot: Optional[Union[EquipmentHand, str]]) -> None:
        selected = EquipmentHand.parse(slot) or slot
        self._update(lambda state: replace(state, selected_equipment_slot=selected))

    # Panels

    def toggle_inventory(self) -> None:
        self._update(lambda state: replace(state, is_inventory_open=not state.is_inventory_open))

    def toggle_equipment(self) -> None:
        self._update(lambda state: replace(state, is_equipment_open=not state.is_equipment_open))

    def toggle_skills(self) -> None:
        self._update(lambda state: replace(state, is_skills_open=not state.is_skills_open))

    # Combat

    def set_current_enemy(self, enemy: Optional[Enemy]) -> None:
        """Set the enemy being fought, or None to clear it."""
        if enemy is None:
            debug("Clearing current enemy", LogCategory.COMBAT)
        else:
            debug(f"Current enemy: {enemy.name} ({enemy.health}/{enemy.max_health})",
                  LogCategory.COMBAT)
        self._update(lambda state: replace(state, current_enemy=enemy))

    def set_in_battle(self, in_battle: bool) -> None:
        self._update(lambda state: replace(state, is_in_battle=in_battle))

    # Lifecycle

    def reset(self) -> None:
        """Return to the initial snapshot."""
        info("Resetting game state", LogCategory.STATE)
        self._state.set(self._initial)
