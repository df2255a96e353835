"""Request engine of the Beeper Desktop client: config, errors, retries, query encoding, pagination."""

from .config import ClientConfig, DEFAULT_BASE_URL, DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT
from .error_handler import ErrorHandler, ErrorResponse, parse_error_body
from .exceptions import (
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
from .pagination import Cursor, PaginationInfo, iter_pages, iter_items, aiter_pages, aiter_items
from .query import encode_query, indexed_pairs
from .retry_engine import RetryEngine

__all__ = [
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "ErrorHandler",
    "ErrorResponse",
    "parse_error_body",
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
    "Cursor",
    "PaginationInfo",
    "iter_pages",
    "iter_items",
    "aiter_pages",
    "aiter_items",
    "encode_query",
    "indexed_pairs",
    "RetryEngine",
]
