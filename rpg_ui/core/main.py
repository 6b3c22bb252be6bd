#!/usr/bin/env python3
"""
Main entry point for the RPG UI state layer.

Loads and validates configuration, sets up logging and starts a game session
for the UI to attach to.
"""
import argparse
import sys
from typing import List, Optional

from rpg_ui.core.session import GameSession
from rpg_ui.utils.config import ConfigError, config_manager as shared_config, get_config, set_config, use_config_file
from rpg_ui.utils.events import publish, SYSTEM_SHUTDOWN
from rpg_ui.utils.logging import configure as configure_logging, info, debug, exception, LogCategory
from rpg_ui.utils.schemas.config_schema import FULL_CONFIG_SCHEMA

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Game UI state store")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (defaults to the packaged config.yml)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=LOG_LEVELS,
        default=None,
        help="Set the logging level"
    )
    return parser.parse_args(argv)


def init_config(config_path, debug_mode, log_level):
    """Load configuration, apply command line overrides and validate it."""
    config_manager = use_config_file(config_path) if config_path else shared_config

    if debug_mode:
        set_config('system.debug_mode', True)
        set_config('system.log_level', 'DEBUG')

    if log_level:
        set_config('system.log_level', log_level)

    config_manager.validate(FULL_CONFIG_SCHEMA)
    return config_manager


def init_logging(config_manager):
    """Initialize the logging system."""
    configure_logging()

    info("RPG UI state starting up", LogCategory.SYSTEM)
    info(f"Configuration loaded from {config_manager.config_path}", LogCategory.CONFIG)
    debug(f"Debug mode: {get_config('system.debug_mode', False)}", LogCategory.SYSTEM)
    debug(f"Log level: {get_config('system.log_level', 'INFO')}", LogCategory.SYSTEM)


def main(argv: Optional[List[str]] = None) -> int:
    """Start a session, report its initial state and shut down."""
    args = parse_args(argv)
    session = None

    try:
        config_manager = init_config(args.config, args.debug, args.log_level)
        init_logging(config_manager)

        session = GameSession()
        state = session.store.get()
        info(f"Session ready: level {state.player_stats.level}, "
             f"health {state.player_stats.health}/{state.player_stats.max_health}, "
             f"message log limit {session.store.message_log_limit}", LogCategory.SYSTEM)
        return 0

    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        exception(f"Unhandled exception: {e}", LogCategory.ERROR)
        return 1
    finally:
        if session is not None:
            session.close()
        publish(SYSTEM_SHUTDOWN, {'reason': 'exit'})
        info("RPG UI state shut down", LogCategory.SYSTEM)


if __name__ == "__main__":
    sys.exit(main())
