"""
Environment variable handling for the RPG UI state layer.

Loads values from a .env file at import time and exposes the active
environment name used to pick config.<env>.yml overrides.
"""
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

ENV_VAR = 'RPG_UI_ENV'


def load_env_file(env_file: Optional[str] = None) -> None:
    """
    Load environment variables from a .env file.

    Args:
        env_file: Path to the .env file. If None, looks for .env in the project root.
    """
    if env_file is None:
        project_root = Path(__file__).parent.parent.parent
        env_file = project_root / '.env'

    load_dotenv(env_file)


def get_env(name: str, default: Any = None) -> Any:
    """Get an environment variable, or the default if unset."""
    return os.environ.get(name, default)


def get_current_env() -> str:
    """
    Get the current environment (development, production, test).

    Returns:
        The current environment name (defaults to 'development')
    """
    return get_env(ENV_VAR, 'development')


# Load environment variables when the module is imported
load_env_file()
