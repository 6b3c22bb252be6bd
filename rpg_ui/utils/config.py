"""
Configuration management module for the RPG UI state layer.

This module provides functionality to load, validate, and access configuration
settings from YAML files with support for environment-specific overrides.
"""
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from jsonschema import validate as json_validate, ValidationError as JsonSchemaError
from yaml.parser import ParserError

from rpg_ui.utils.default_config import get_default_value
from rpg_ui.utils.env import get_current_env
from rpg_ui.utils.events import publish, CONFIG_CHANGED


class ConfigError(Exception):
    """Exception raised for configuration errors."""
    pass


class ConfigManager:
    """
    Configuration manager that handles loading and accessing configuration from YAML files.

    Files are layered in this order, later files overriding earlier ones:
    default_config.yml, config.yml, config.<env>.yml, config.local.yml.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the main configuration file. If None, will look for
                        config.yml in the package's configs directory.
        """
        self._config_path = config_path or self._get_default_config_path()
        self._config: Dict[str, Any] = {}
        self.load_config()

    def _get_default_config_path(self) -> Path:
        """Get the default configuration file path."""
        package_dir = Path(__file__).parent.parent
        return package_dir / "configs" / "config.yml"

    @property
    def config_path(self) -> Path:
        return Path(self._config_path)

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> None:
        """
        Load configuration from the config files.

        Args:
            config_path: Switch to this main configuration file before loading

        Raises:
            ConfigError: If the configuration file cannot be loaded or parsed.
        """
        if config_path is not None:
            self._config_path = config_path
        self._config = {}
        try:
            config_path = Path(self._config_path)

            default_config_path = config_path.parent / "default_config.yml"
            if default_config_path.exists():
                self._update_nested_dict(self._config, self._read_yaml(default_config_path))

            if config_path.exists():
                self._update_nested_dict(self._config, self._read_yaml(config_path))
            elif not default_config_path.exists():
                raise ConfigError(f"Configuration file not found: {config_path}")

            env_config_path = config_path.parent / f"config.{get_current_env()}.yml"
            if env_config_path.exists():
                self._update_nested_dict(self._config, self._read_yaml(env_config_path))

            # Local overrides for development
            local_config_path = config_path.parent / "config.local.yml"
            if local_config_path.exists():
                self._update_nested_dict(self._config, self._read_yaml(local_config_path))

        except ConfigError:
            raise
        except ParserError as e:
            raise ConfigError(f"Error parsing configuration file: {e}")
        except Exception as e:
            raise ConfigError(f"Error loading configuration: {e}")

    def _update_nested_dict(self, d: Dict[str, Any], u: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a nested dictionary with values from another dictionary.

        Args:
            d: The dictionary to update
            u: The dictionary with updates

        Returns:
            The updated dictionary
        """
        for k, v in u.items():
            if isinstance(v, dict) and k in d and isinstance(d[k], dict):
                d[k] = self._update_nested_dict(d[k], v)
            else:
                d[k] = v
        return d

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.

        Args:
            key: The configuration key, dot notation for nested keys (e.g., 'store.message_log_limit')
            default: Default value to return if key is not found. If None, the
                     programmatic default from default_config is used.

        Returns:
            The configuration value or default if not found
        """
        value = self._config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                if default is None:
                    try:
                        return get_default_value(key)
                    except ValueError:
                        return None
                return default

        return value

    def set(self, key: str, value: Any, notify: bool = True) -> None:
        """
        Set a configuration value at runtime.

        Args:
            key: The configuration key, dot notation for nested keys
            value: The value to set
            notify: Whether to publish a CONFIG_CHANGED event
        """
        keys = key.split('.')
        config = self._config

        old_value = self.get(key)

        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

        if notify and old_value != value:
            self._notify_change(key, old_value, value)

    def _notify_change(self, key: str, old_value: Any, new_value: Any) -> None:
        """
        Publish change events for a key and each of its parent keys.

        Args:
            key: The configuration key that changed
            old_value: The previous value
            new_value: The new value
        """
        publish(CONFIG_CHANGED, {
            'action': 'updated',
            'key': key,
            'old_value': old_value,
            'new_value': new_value
        })

        parts = key.split('.')
        for i in range(1, len(parts)):
            parent_key = '.'.join(parts[:-i])
            publish(CONFIG_CHANGED, {
                'action': 'child_updated',
                'key': parent_key,
                'child_key': key
            })

    def validate(self, schema: Dict[str, Any]) -> bool:
        """
        Validate the configuration against a JSON schema.

        Args:
            schema: JSON Schema describing the expected configuration structure

        Returns:
            True if the configuration is valid

        Raises:
            ConfigError: If the configuration is invalid
        """
        try:
            json_validate(instance=self._config, schema=schema)
            return True
        except JsonSchemaError as e:
            path = '.'.join(str(p) for p in e.path)
            raise ConfigError(f"Configuration validation error at '{path}': {e.message}")


# Singleton instance of the ConfigManager
config_manager = ConfigManager()

def use_config_file(config_path: Union[str, Path]) -> ConfigManager:
    """Point the shared configuration at another file and reload it."""
    config_manager.load_config(config_path)
    return config_manager

# Convenience functions to access the singleton
def get_config(key: str, default: Any = None) -> Any:
    """Get a configuration value by key."""
    return config_manager.get(key, default)

def set_config(key: str, value: Any, notify: bool = True) -> None:
    """Set a configuration value."""
    config_manager.set(key, value, notify)
