"""
Structured logger used by the Beeper Desktop clients.
"""

import logging
from typing import Optional, Any

from .config import LoggingConfig
from .formatters import get_formatter
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .handlers import create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data


class ClientLogger:
    """
    Thin wrapper over a stdlib logger that takes structured fields as kwargs.

    Every field passes through ``mask_sensitive_data`` before reaching a
    handler, so tokens and Authorization headers never get logged.

    Without a config the wrapper only proxies to ``logging.getLogger(name)``:
    no handlers are installed and the library stays silent unless the
    application configures the ``beeper_desktop`` logger itself.

    Example:
        >>> logger = ClientLogger(LoggingConfig.create(level="DEBUG"))
        >>> logger.info("Request started", method="GET", url="http://localhost:23373/v0/get-accounts")
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "beeper_desktop"):
        self.config = config
        self.name = name
        self._closed = False
        self._logger = logging.getLogger(name)

        if config is None:
            return

        # Reinitializing with the same name replaces previous handlers
        self.close()
        self._closed = False

        level = config.level_number
        self._logger.setLevel(level)
        self._logger.propagate = False

        filters = []
        if config.enable_correlation_id:
            filters.append(CorrelationIdFilter())
        if config.extra_fields:
            filters.append(ExtraFieldsFilter(config.extra_fields))

        formatter = get_formatter(config.format.value)

        if config.enable_console:
            self._logger.addHandler(create_console_handler(level, formatter, filters))

        if config.enable_file and config.file_path:
            self._logger.addHandler(create_file_handler(
                file_path=config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=config.max_bytes,
                backup_count=config.backup_count,
                filters=filters
            ))

    def _log(self, level: int, message: str, fields: dict) -> None:
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(level, message, extra=mask_sensitive_data(fields))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Log info message.

        Example:
            >>> logger.info("Request completed", status_code=200, duration_ms=150)
        """
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def close(self) -> None:
        """
        Flush and close the handlers this logger installed.

        Idempotent. A logger created without config owns no handlers and
        leaves the application's handlers alone.
        """
        if self._closed or self.config is None:
            self._closed = True
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        # Back to a plain proxy of the application logging setup
        self._logger.setLevel(logging.NOTSET)
        self._logger.propagate = True
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
