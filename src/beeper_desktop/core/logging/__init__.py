"""
Logging system for the Beeper Desktop client.

Example:
    >>> from beeper_desktop import BeeperDesktop, ClientConfig
    >>> from beeper_desktop.core.logging import LoggingConfig
    >>>
    >>> config = ClientConfig.create(
    ...     logging=LoggingConfig.create(level="DEBUG", format="colored")
    ... )
    >>> client = BeeperDesktop(config=config)
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import ClientLogger
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "ClientLogger",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
