"""Beeper Desktop API - typed Python client for the local Beeper Desktop service."""

import logging

from ._version import __version__
from .client import BeeperDesktop
from .async_client import AsyncBeeperDesktop
from .core.config import ClientConfig
from .core.env_config import load_from_env
from .core.exceptions import (
    BeeperDesktopError,
    APIConnectionError,
    APITimeoutError,
    SerializationError,
    InvalidURLError,
    ConfigurationError,
    APIStatusError,
    BadRequestError,
    AuthenticationError,
    PermissionDeniedError,
    NotFoundError,
    ConflictError,
    UnprocessableEntityError,
    RateLimitError,
    InternalServerError,
    is_retryable,
)
from .core.logging import LoggingConfig
from .core.pagination import Cursor, PaginationInfo

# Silent unless the application or a LoggingConfig adds handlers
logging.getLogger('beeper_desktop').addHandler(logging.NullHandler())

__license__ = "MIT"

__all__ = [
    # Clients
    "BeeperDesktop",
    "AsyncBeeperDesktop",

    # Config
    "ClientConfig",
    "LoggingConfig",
    "load_from_env",

    # Pagination
    "Cursor",
    "PaginationInfo",

    # Exceptions
    "BeeperDesktopError",
    "APIConnectionError",
    "APITimeoutError",
    "SerializationError",
    "InvalidURLError",
    "ConfigurationError",
    "APIStatusError",
    "BadRequestError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "UnprocessableEntityError",
    "RateLimitError",
    "InternalServerError",
    "is_retryable",

    # Version
    "__version__",
]
