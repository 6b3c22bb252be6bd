"""
Data model for the game UI state.

Every type here is a frozen dataclass and sequences are tuples, so a snapshot
handed to an observer can never change underneath it. Updates go through
dataclasses.replace() and produce new values.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from rpg_ui.utils.config import get_config
from rpg_ui.utils.logging import LogCategory, warning


class ItemType(str, Enum):
    """Kinds of item the player can carry."""
    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"
    CONSUMABLE = "consumable"


class ItemEffectType(str, Enum):
    """What using an item does."""
    HEAL = "heal"
    BUFF = "buff"
    DAMAGE = "damage"


class MessageLevel(str, Enum):
    """Severity/colour of an entry in the in-game message log."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    COMBAT = "combat"


class EquipmentHand(str, Enum):
    """Equipment slots. Values match the names the UI layer uses."""
    MAIN_HAND = "mainHand"
    OFF_HAND = "offHand"

    @classmethod
    def parse(cls, value: Any) -> Optional['EquipmentHand']:
        """Return the matching slot, or None if value names no slot."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class ItemEffect:
    type: ItemEffectType
    value: int


@dataclass(frozen=True)
class Item:
    """
    An item descriptor. Two items are the same item when their ids match.
    """
    id: str
    name: str = ""
    type: ItemType = ItemType.CONSUMABLE
    description: str = ""
    stats: Mapping[str, int] = field(default_factory=dict, hash=False)
    effect: Optional[ItemEffect] = None

    def __post_init__(self):
        # Read-only copy so the caller's dict cannot reach into a snapshot
        object.__setattr__(self, 'stats', MappingProxyType(dict(self.stats)))


@dataclass(frozen=True)
class ItemStack:
    """A quantity of one item in the inventory."""
    item: Item
    count: int = 1


@dataclass(frozen=True)
class Inventory:
    gold: int = 0
    items: Tuple[ItemStack, ...] = ()

    def stacks_of(self, item_id: str) -> Tuple[ItemStack, ...]:
        """All stacks holding the item with this id."""
        return tuple(stack for stack in self.items if stack.item.id == item_id)


@dataclass(frozen=True)
class PlayerStats:
    health: int = 100
    max_health: int = 100
    level: int = 1
    experience: int = 0
    strength: int = 10
    defense: int = 5

    def health_percent(self) -> float:
        """Get current health as a percentage."""
        if self.max_health <= 0:
            return 0.0
        return (self.health / self.max_health) * 100.0


@dataclass(frozen=True)
class Equipment:
    """
    What the player holds in each hand. A slot holds at most one item.
    """
    main_hand: Optional[Item] = None
    off_hand: Optional[Item] = None

    _FIELDS = {
        EquipmentHand.MAIN_HAND: "main_hand",
        EquipmentHand.OFF_HAND: "off_hand",
    }

    def get(self, slot: Union[EquipmentHand, str]) -> Optional[Item]:
        hand = EquipmentHand.parse(slot)
        if hand is None:
            return None
        return getattr(self, self._FIELDS[hand])

    def with_slot(self, slot: Union[EquipmentHand, str], item: Optional[Item]) -> 'Equipment':
        """
        Return a copy with the slot set to item (None empties it).

        An unknown slot name leaves the equipment as it is.
        """
        hand = EquipmentHand.parse(slot)
        if hand is None:
            warning(f"Ignoring unknown equipment slot: {slot!r}", LogCategory.EQUIPMENT)
            return self
        return replace(self, **{self._FIELDS[hand]: item})

    def items(self) -> Tuple[Tuple[EquipmentHand, Optional[Item]], ...]:
        return tuple((hand, getattr(self, name)) for hand, name in self._FIELDS.items())


@dataclass(frozen=True)
class GameMessage:
    """One entry in the in-game message log."""
    id: str
    text: str
    level: MessageLevel
    timestamp: float


@dataclass(frozen=True)
class Enemy:
    """The combatant the player is currently fighting."""
    id: str
    name: str
    health: int
    max_health: int
    damage: int = 0
    defense: int = 0
    sprite: str = ""

    def health_percent(self) -> float:
        """Remaining health as a percentage, 0 when max_health is not positive."""
        if self.max_health <= 0:
            return 0.0
        return (self.health / self.max_health) * 100.0


@dataclass(frozen=True)
class GameState:
    """
    Root snapshot of everything the game UI shows.
    """
    player_stats: PlayerStats = field(default_factory=PlayerStats)
    inventory: Inventory = field(default_factory=Inventory)
    equipment: Equipment = field(default_factory=Equipment)
    messages: Tuple[GameMessage, ...] = ()
    current_enemy: Optional[Enemy] = None

    # Panel visibility, independent of each other
    is_in_battle: bool = False
    is_inventory_open: bool = False
    is_equipment_open: bool = False
    is_skills_open: bool = False

    # Selection; bounds are the caller's business
    selected_item_index: int = 0
    selected_equipment_slot: Optional[EquipmentHand] = None

    @property
    def last_message(self) -> Optional[GameMessage]:
        return self.messages[-1] if self.messages else None


def initial_player_stats(overrides: Optional[Dict[str, int]] = None) -> PlayerStats:
    """
    Starting player stats, taken from the store.initial_player config section.

    Args:
        overrides: Explicit values that take precedence over configuration
    """
    configured = dict(get_config('store.initial_player', {}) or {})
    if overrides:
        configured.update(overrides)
    return PlayerStats(**configured)


def initial_state(player_stats: Optional[PlayerStats] = None) -> GameState:
    """
    The snapshot a new session starts from and reset() returns to.

    Args:
        player_stats: Starting stats; defaults to the configured ones
    """
    return GameState(player_stats=player_stats or initial_player_stats())
