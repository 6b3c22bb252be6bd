"""
Default configuration values for the RPG UI state layer.

These are used whenever a key is missing from the YAML configuration files.
"""
import copy
from typing import Dict, Any

# Default system configuration
DEFAULT_SYSTEM = {
    "debug_mode": False,
    "log_level": "INFO",
    "log_dir": "./logs",
    "logging": {
        "console": True,
        "file": False,
        "max_size_mb": 10,
        "backup_count": 5
    }
}

# Default state store configuration
DEFAULT_STORE = {
    "message_log_limit": 50,
    "initial_player": {
        "health": 100,
        "max_health": 100,
        "level": 1,
        "experience": 0,
        "strength": 10,
        "defense": 5
    }
}

# Combined default configuration
DEFAULT_CONFIG = {
    "system": DEFAULT_SYSTEM,
    "store": DEFAULT_STORE
}

def get_default_config() -> Dict[str, Any]:
    """
    Get the complete default configuration.

    Returns:
        A copy of the default configuration dictionary
    """
    return copy.deepcopy(DEFAULT_CONFIG)

def get_default_value(key_path: str) -> Any:
    """
    Get a default value for a specific configuration key.

    Args:
        key_path: Dot-notation path to the configuration key (e.g., 'store.message_log_limit')

    Returns:
        The default value for the specified key

    Raises:
        ValueError: If the key is not found in the default configuration
    """
    config = get_default_config()

    for key in key_path.split('.'):
        if isinstance(config, dict) and key in config:
            config = config[key]
        else:
            raise ValueError(f"No default value found for key: {key_path}")

    return config
