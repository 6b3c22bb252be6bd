"""
Game UI state.

This package holds the authoritative in-memory state of the game UI: player
stats, inventory, equipment, current enemy, panel visibility and the message
log, plus the observable store that publishes it and views derived from it.
"""

from .models import (
    Enemy,
    Equipment,
    EquipmentHand,
    GameMessage,
    GameState,
    Inventory,
    Item,
    ItemEffect,
    ItemEffectType,
    ItemStack,
    ItemType,
    MessageLevel,
    PlayerStats,
    initial_state,
)
from .observable import Observable
from .game_state_store import GameStateStore
from .derived import DerivedView, create_enemy_health_percent, enemy_health_percent

__all__ = [
    'Enemy',
    'Equipment',
    'EquipmentHand',
    'GameMessage',
    'GameState',
    'Inventory',
    'Item',
    'ItemEffect',
    'ItemEffectType',
    'ItemStack',
    'ItemType',
    'MessageLevel',
    'PlayerStats',
    'initial_state',
    'Observable',
    'GameStateStore',
    'DerivedView',
    'create_enemy_health_percent',
    'enemy_health_percent',
]
