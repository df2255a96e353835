# src/beeper_desktop/core/error_handler.py

import json
from typing import Any, Dict, Optional, Tuple

import httpx
import requests
from pydantic import BaseModel, field_validator
from requests.exceptions import (
    InvalidSchema,
    InvalidURL,
    MissingSchema,
    RequestException,
    Timeout,
)

from .exceptions import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    BadRequestError,
    BeeperDesktopError,
    ConflictError,
    InternalServerError,
    InvalidURLError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    UnprocessableEntityError,
    is_retryable,
)

_STATUS_ERRORS = {
    400: BadRequestError,
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    409: ConflictError,
    422: UnprocessableEntityError,
    429: RateLimitError,
}


class ErrorResponse(BaseModel):
    """Error envelope sent with non-2xx responses; every field is optional."""

    error: Optional[str] = None
    code: Optional[str] = None
    details: Optional[Dict[str, str]] = None

    @field_validator("error", "code", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) and value else None

    @field_validator("details", mode="before")
    @classmethod
    def _details_as_text(cls, value: Any) -> Optional[Dict[str, str]]:
        if not isinstance(value, dict):
            return None
        return {str(k): str(v) for k, v in value.items()}


def parse_error_body(raw_body: str) -> Tuple[str, Optional[str], Optional[Dict[str, str]]]:
    """
    Разобрать тело ошибки вида ``{"error": ..., "code": ..., "details": {...}}``.

    Разбор best-effort: если тело не JSON-объект или поле ``error``
    пустое, сообщением становится сырое тело.

    Returns:
        (message, code, details)
    """
    try:
        payload: Any = json.loads(raw_body) if raw_body else None
    except ValueError:
        payload = None

    if not isinstance(payload, dict):
        return raw_body, None, None

    envelope = ErrorResponse.model_validate(payload)
    return envelope.error or raw_body, envelope.code, envelope.details


class ErrorHandler:
    """Класс для классификации ошибок API и транспорта"""

    @staticmethod
    def classify(status_code: int, raw_body: str) -> APIStatusError:
        """
        Построить типизированную ошибку по статусу и телу ответа.

        Чистая функция: ничего не бросает, только возвращает.

        Args:
            status_code: HTTP статус (не 2xx)
            raw_body: Тело ответа как текст

        Returns:
            Экземпляр одного из подклассов APIStatusError

        Examples:
            >>> err = ErrorHandler.classify(404, '{"error": "chat not found"}')
            >>> type(err).__name__, err.message
            ('NotFoundError', 'chat not found')
        """
        message, code, details = parse_error_body(raw_body)

        error_class = _STATUS_ERRORS.get(status_code)
        if error_class is not None:
            return error_class(message, code=code, details=details)

        if 500 <= status_code < 600:
            return InternalServerError(message, code=code, details=details, status_code=status_code)

        return APIStatusError(status_code, message, code=code, details=details)

    @staticmethod
    def is_retryable_error(error: Exception) -> bool:
        """Проверяет, можно ли повторить запрос после этой ошибки"""
        return is_retryable(error)


def classify_requests_exception(error: RequestException, url: str, timeout: Optional[float] = None) -> BeeperDesktopError:
    """
    Преобразовать исключение requests в ошибку клиента.

    Args:
        error: Исключение requests
        url: URL запроса
        timeout: Таймаут запроса (для сообщения)

    Returns:
        InvalidURLError, APITimeoutError или APIConnectionError
    """
    if isinstance(error, (InvalidURL, MissingSchema, InvalidSchema)):
        return InvalidURLError(str(error), url)

    # ConnectTimeout наследует и ConnectionError, и Timeout - проверяем Timeout первым
    if isinstance(error, Timeout):
        return APITimeoutError(str(error), url, timeout)

    if isinstance(error, requests.exceptions.ConnectionError):
        return APIConnectionError(str(error), url)

    return APIConnectionError(f"Request failed: {error}", url)


def classify_httpx_exception(error: httpx.HTTPError, url: str, timeout: Optional[float] = None) -> BeeperDesktopError:
    """
    Преобразовать исключение httpx в ошибку клиента.

    PoolTimeout тоже считается таймаутом: запрос не отправлен вовремя.
    """
    if isinstance(error, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return InvalidURLError(str(error), url)

    if isinstance(error, httpx.TimeoutException):
        return APITimeoutError(str(error) or type(error).__name__, url, timeout)

    return APIConnectionError(str(error) or type(error).__name__, url)
