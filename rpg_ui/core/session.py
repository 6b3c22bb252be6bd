"""
Session wiring for the game UI state.

This module owns the store for one play session and connects it to the
things that follow it: the enemy health view and the mirror that copies the
in-game message log into the application log.
"""

from typing import Callable, List, Optional

from rpg_ui.state.derived import DerivedView, create_enemy_health_percent
from rpg_ui.state.game_state_store import GameStateStore
from rpg_ui.state.models import GameMessage, GameState, MessageLevel, PlayerStats
from rpg_ui.utils.logging import LogCategory, get_logger, debug, info

# Application log level for each in-game message level
MESSAGE_LOG_LEVELS = {
    MessageLevel.INFO: "info",
    MessageLevel.SUCCESS: "info",
    MessageLevel.COMBAT: "info",
    MessageLevel.WARNING: "warning",
    MessageLevel.ERROR: "error",
}


class MessageLogMirror:
    """
    Store observer that writes each newly appended game message to the log.

    Entries are recognised by id, so repeated snapshots, deduplicated
    messages and entries dropped off the front of the log are not logged
    again.
    """

    def __init__(self):
        self._last_seen_id: Optional[str] = None
        self.mirrored: List[GameMessage] = []

    def __call__(self, state: GameState) -> None:
        new_messages = self._unseen(state.messages)
        if state.messages:
            self._last_seen_id = state.messages[-1].id
        else:
            self._last_seen_id = None

        logger = get_logger(LogCategory.MESSAGES)
        for message in new_messages:
            level_name = MESSAGE_LOG_LEVELS.get(message.level, "info")
            label = getattr(message.level, "value", message.level)
            getattr(logger, level_name)(f"[{label}] {message.text}")
            self.mirrored.append(message)

    def _unseen(self, messages) -> List[GameMessage]:
        if self._last_seen_id is None:
            return list(messages)
        for index in range(len(messages) - 1, -1, -1):
            if messages[index].id == self._last_seen_id:
                return list(messages[index + 1:])
        # Last seen entry is gone (reset or evicted), everything is new
        return list(messages)


class GameSession:
    """
    One play session: a store plus the views and observers attached to it.
    """

    def __init__(self, player_stats: Optional[PlayerStats] = None,
                 message_log_limit: Optional[int] = None,
                 mirror_messages: bool = True):
        self.store = GameStateStore(player_stats=player_stats,
                                    message_log_limit=message_log_limit)
        self.enemy_health_percent: DerivedView[float] = create_enemy_health_percent(self.store)
        self.message_mirror: Optional[MessageLogMirror] = None
        self._detach: List[Callable[[], None]] = []

        if mirror_messages:
            self.message_mirror = MessageLogMirror()
            self._detach.append(self.store.subscribe(self.message_mirror))

        debug(f"GameSession initialized with {len(self._detach)} observer(s)", LogCategory.SYSTEM)

    def close(self) -> None:
        """Detach every observer and view from the store."""
        for detach in self._detach:
            detach()
        self._detach = []
        self.enemy_health_percent.close()
        info("Game session closed", LogCategory.SYSTEM)
