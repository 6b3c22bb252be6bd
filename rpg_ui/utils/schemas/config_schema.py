"""
JSON Schema definitions for configuration validation.

This module defines the expected structure of the configuration
in JSON Schema format (https://json-schema.org/).
"""
from typing import Dict, Any

# Schema for system configuration
SYSTEM_SCHEMA = {
    "type": "object",
    "properties": {
        "debug_mode": {"type": "boolean"},
        "log_level": {
            "type": "string",
            "enum": ["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        },
        "log_dir": {"type": "string"},
        "logging": {
            "type": "object",
            "properties": {
                "console": {"type": "boolean"},
                "file": {"type": "boolean"},
                "max_size_mb": {"type": "integer", "minimum": 1},
                "backup_count": {"type": "integer", "minimum": 0}
            }
        }
    },
    "required": ["log_level"]
}

# Schema for the starting player stats
INITIAL_PLAYER_SCHEMA = {
    "type": "object",
    "properties": {
        "health": {"type": "integer", "minimum": 0},
        "max_health": {"type": "integer", "minimum": 0},
        "level": {"type": "integer", "minimum": 1},
        "experience": {"type": "integer", "minimum": 0},
        "strength": {"type": "integer", "minimum": 0},
        "defense": {"type": "integer", "minimum": 0}
    },
    "additionalProperties": False
}

# Schema for state store configuration
STORE_SCHEMA = {
    "type": "object",
    "properties": {
        "message_log_limit": {"type": "integer", "minimum": 1},
        "initial_player": INITIAL_PLAYER_SCHEMA
    }
}

# Combined schema for the entire configuration
FULL_CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "system": SYSTEM_SCHEMA,
        "store": STORE_SCHEMA
    },
    "required": ["system"]
}
