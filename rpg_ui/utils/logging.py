"""
Logging system for the RPG UI state layer.

This module provides:
1. Multiple log levels (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
2. Categories matching the areas of game state (inventory, equipment, messages...)
3. Configurable output (console and file)
4. Log rotation and retention
"""
import logging
import os
import sys
from enum import Enum
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Dict, Optional, Union

from rpg_ui.utils.config import get_config

# Create a TRACE level (more detailed than DEBUG)
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

ROOT_LOGGER_NAME = 'rpg_ui'


class LogCategory(Enum):
    """Categories for logging to allow filtering and organization."""
    SYSTEM = "SYSTEM"         # Bootstrap and lifecycle
    STATE = "STATE"           # Store publishing and observers
    INVENTORY = "INVENTORY"   # Item stacks and gold
    EQUIPMENT = "EQUIPMENT"   # Hand slots
    COMBAT = "COMBAT"         # Current enemy and battle flag
    MESSAGES = "MESSAGES"     # In-game message log
    UI = "UI"                 # Panel toggles and selection
    CONFIG = "CONFIG"         # Configuration-related logs
    ERROR = "ERROR"           # Error handling and recovery


class CategoryFilter(logging.Filter):
    """Fill in category fields for records logged without an adapter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, 'category'):
            record.category = LogCategory.SYSTEM.value
        if not hasattr(record, 'category_str'):
            record.category_str = f"[{record.category}]"
        return True


class ColorFormatter(logging.Formatter):
    """
    Formatter that adds colors to log messages based on their level.
    Only applies colors when outputting to a terminal.
    """
    # ANSI color codes
    COLORS = {
        'TRACE': '\033[35m',     # Magenta
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[41m',  # Red background
        'RESET': '\033[0m',      # Reset
        # Category colors
        'SYSTEM': '\033[37m',    # White
        'STATE': '\033[34m',     # Blue
        'INVENTORY': '\033[33m', # Yellow
        'EQUIPMENT': '\033[36m', # Cyan
        'COMBAT': '\033[31m',    # Red
        'MESSAGES': '\033[32m',  # Green
        'UI': '\033[35m',        # Magenta
        'CONFIG': '\033[37m',    # White
    }

    def __init__(self, fmt: str = None, datefmt: str = None, use_colors: bool = True):
        """
        Initialize the formatter.

        Args:
            fmt: Format string
            datefmt: Date format string
            use_colors: Whether to use colors
        """
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record with colors if enabled.

        Args:
            record: The log record to format

        Returns:
            The formatted log message
        """
        # Work on a copy so other handlers see the uncoloured record
        record_copy = logging.makeLogRecord(record.__dict__)

        category = getattr(record_copy, 'category', LogCategory.SYSTEM.value)
        if not hasattr(record_copy, 'category_str'):
            record_copy.category_str = f"[{category}]"

        if self.use_colors:
            level_color = self.COLORS.get(record_copy.levelname, self.COLORS['RESET'])
            category_color = self.COLORS.get(category, self.COLORS['RESET'])
            reset = self.COLORS['RESET']

            record_copy.levelname = f"{level_color}{record_copy.levelname}{reset}"
            record_copy.category_str = f"{category_color}{record_copy.category_str}{reset}"

        return super().format(record_copy)


class CategoryAdapter(logging.LoggerAdapter):
    """Logger adapter that stamps every record with its category."""

    def process(self, msg, kwargs):
        kwargs['extra'] = kwargs.get('extra', {})
        kwargs['extra']['category'] = self.extra['category']
        kwargs['extra']['category_str'] = f"[{self.extra['category']}]"
        return msg, kwargs


class UILogger:
    """
    Logger for the RPG UI state layer that supports multiple levels and categories.
    """
    # Singleton instance
    _instance = None

    def __new__(cls, *args, **kwargs):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super(UILogger, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        # Only initialize once (singleton pattern)
        if self._initialized:
            return

        self._initialized = True
        self._loggers: Dict[str, logging.LoggerAdapter] = {}
        self._default_category = LogCategory.SYSTEM

        self.configure()

    def configure(self) -> None:
        """Configure handlers and levels from the current configuration."""
        log_level = str(get_config('system.log_level', 'INFO')).upper()
        log_dir = get_config('system.log_dir', './logs')
        console_logging = get_config('system.logging.console', True)
        file_logging = get_config('system.logging.file', False)
        max_log_size_mb = get_config('system.logging.max_size_mb', 10)
        backup_count = get_config('system.logging.backup_count', 5)

        if log_level == 'TRACE':
            numeric_level = TRACE_LEVEL
        else:
            numeric_level = getattr(logging, log_level, None)
            if not isinstance(numeric_level, int):
                numeric_level = logging.INFO
                print(f"Invalid log level: {log_level}, defaulting to INFO", file=sys.stderr)

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(numeric_level)

        # Clear existing handlers
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()

        handlers = []
        log_format = "%(asctime)s - %(levelname)-8s %(category_str)s - %(message)s"

        if console_logging:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(numeric_level)
            console_handler.setFormatter(ColorFormatter(log_format, datefmt="%H:%M:%S"))
            handlers.append(console_handler)

        if file_logging:
            os.makedirs(log_dir, exist_ok=True)

            # Regular log file (rotating by size)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, 'rpg_ui.log'),
                maxBytes=max_log_size_mb * 1024 * 1024,
                backupCount=backup_count
            )
            file_handler.setLevel(numeric_level)

            # Error log file (rotating daily)
            error_file_handler = TimedRotatingFileHandler(
                os.path.join(log_dir, 'error.log'),
                when='midnight',
                interval=1,
                backupCount=backup_count * 2
            )
            error_file_handler.setLevel(logging.ERROR)

            file_formatter = logging.Formatter(log_format, datefmt="%Y-%m-%d %H:%M:%S")
            file_handler.setFormatter(file_formatter)
            error_file_handler.setFormatter(file_formatter)

            handlers.append(file_handler)
            handlers.append(error_file_handler)

        category_filter = CategoryFilter()
        for handler in handlers:
            handler.addFilter(category_filter)
            root_logger.addHandler(handler)

        for category in LogCategory:
            self._create_category_logger(category)

    def _create_category_logger(self, category: LogCategory) -> logging.LoggerAdapter:
        """Create the adapter for a specific category."""
        category_name = category.value
        logger = logging.getLogger(f'{ROOT_LOGGER_NAME}.{category_name.lower()}')
        adapter = CategoryAdapter(logger, {'category': category_name})
        self._loggers[category_name] = adapter
        return adapter

    def get_logger(self, category: Optional[Union[str, LogCategory]] = None) -> logging.LoggerAdapter:
        """
        Get a logger for the specified category.

        Args:
            category: The category to get a logger for (string or enum)

        Returns:
            A logger adapter
        """
        if isinstance(category, str):
            try:
                category = LogCategory[category.upper()]
            except KeyError:
                category = self._default_category

        if category is None:
            category = self._default_category

        if category.value not in self._loggers:
            self._create_category_logger(category)

        return self._loggers[category.value]

    def trace(self, msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
        """Log a message at TRACE level."""
        self.get_logger(category).log(TRACE_LEVEL, msg, *args, **kwargs)

    def debug(self, msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
        """Log a message at DEBUG level."""
        self.get_logger(category).debug(msg, *args, **kwargs)

    def info(self, msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
        """Log a message at INFO level."""
        self.get_logger(category).info(msg, *args, **kwargs)

    def warning(self, msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
        """Log a message at WARNING level."""
        self.get_logger(category).warning(msg, *args, **kwargs)

    def error(self, msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
        """Log a message at ERROR level."""
        self.get_logger(category).error(msg, *args, **kwargs)

    def critical(self, msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
        """Log a message at CRITICAL level."""
        self.get_logger(category).critical(msg, *args, **kwargs)

    def exception(self, msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
        """Log an exception at ERROR level, including the stack trace."""
        self.get_logger(category).exception(msg, *args, **kwargs)


# Create a singleton instance
ui_logger = UILogger()

# Convenience functions
def get_logger(category: Optional[Union[str, LogCategory]] = None) -> logging.LoggerAdapter:
    """Get a logger for the specified category."""
    return ui_logger.get_logger(category)

def trace(msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
    ui_logger.trace(msg, category, *args, **kwargs)

def debug(msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
    ui_logger.debug(msg, category, *args, **kwargs)

def info(msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
    ui_logger.info(msg, category, *args, **kwargs)

def warning(msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
    ui_logger.warning(msg, category, *args, **kwargs)

def error(msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
    ui_logger.error(msg, category, *args, **kwargs)

def critical(msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
    ui_logger.critical(msg, category, *args, **kwargs)

def exception(msg: str, category: Optional[Union[str, LogCategory]] = None, *args, **kwargs):
    ui_logger.exception(msg, category, *args, **kwargs)

def configure() -> None:
    """Reconfigure the logger from the current configuration."""
    ui_logger.configure()
