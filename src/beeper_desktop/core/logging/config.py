"""
Logging configuration for the Beeper Desktop client.

Logging is opt-in: a client built without a LoggingConfig installs no
handlers and only proxies to ``logging.getLogger("beeper_desktop...")``.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5


class LogLevel(str, Enum):
    """Log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""
    JSON = "json"
    TEXT = "text"
    COLORED = "colored"


@dataclass(frozen=True)
class LoggingConfig:
    """
    How a client reports its requests.

    Every API call produces "Request started", then either "Request
    completed" or one "Request error (will retry)" per failed attempt and a
    final "Request failed". All records of one call share a correlation id.

    Attributes:
        level: Minimum level; INFO shows every call, WARNING only retries and failures
        format: json (one object per line), text or colored
        enable_console: Log to stderr (stdout stays free for CLI output)
        enable_file: Log to a rotating file at ``file_path``
        file_path: Path of the log file
        max_bytes: File size that triggers rotation
        backup_count: Rotated files to keep
        enable_correlation_id: Tag records with the id of the current call
        extra_fields: Static fields added to every record (app name, host...)

    Strings are accepted for ``level`` and ``format``.

    Example:
        >>> LoggingConfig(level="DEBUG", format="json")
        >>> LoggingConfig.create(level="INFO", file_path="~/beeper-api.log")
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = DEFAULT_MAX_BYTES
    backup_count: int = DEFAULT_BACKUP_COUNT
    enable_correlation_id: bool = True
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # LogLevel("loud") raises ValueError, which is what callers get
        object.__setattr__(self, 'level', LogLevel(str(getattr(self.level, 'value', self.level)).upper()))
        object.__setattr__(self, 'format', LogFormat(str(getattr(self.format, 'value', self.format)).lower()))

        if self.enable_file and not self.file_path:
            raise ValueError("file_path is required when enable_file=True")
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must be non-negative")

    @property
    def level_number(self) -> int:
        """Numeric stdlib level (``logging.DEBUG`` ...)."""
        return getattr(logging, self.level.value)

    @classmethod
    def create(
        cls,
        level: str = "INFO",
        format: str = "text",
        file_path: Optional[str] = None,
        enable_console: bool = True,
        enable_file: Optional[bool] = None,
        max_bytes: int = DEFAULT_MAX_BYTES,
        backup_count: int = DEFAULT_BACKUP_COUNT,
        enable_correlation_id: bool = True,
        extra_fields: Optional[Dict[str, Any]] = None
    ) -> "LoggingConfig":
        """
        Build a config from plain values.

        File logging is switched on by giving ``file_path``; pass
        ``enable_file`` only to override that.

        Example:
            >>> config = LoggingConfig.create(
            ...     level="DEBUG",
            ...     format="json",
            ...     file_path="/tmp/beeper.log",
            ...     enable_console=False,
            ... )
        """
        if enable_file is None:
            enable_file = file_path is not None

        return cls(
            level=LogLevel(level.upper()),
            format=LogFormat(format.lower()),
            enable_console=enable_console,
            enable_file=enable_file,
            file_path=file_path,
            max_bytes=max_bytes,
            backup_count=backup_count,
            enable_correlation_id=enable_correlation_id,
            extra_fields=extra_fields or {}
        )
