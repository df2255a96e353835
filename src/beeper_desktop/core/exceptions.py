"""
Иерархия исключений Beeper Desktop API.

Классификация:
- retryable=True  - можно повторить (сеть, таймауты, 409, 429, 5xx)
- retryable=False - повторять бессмысленно (4xx, JSON, URL, конфиг)

Каждая ошибка клиента - ровно один класс из этого модуля.
"""

from typing import Dict, Optional

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class BeeperDesktopError(Exception):
    """Базовое исключение клиента."""

    retryable: bool = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ТРАНСПОРТ (retryable=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class APIConnectionError(BeeperDesktopError):
    """
    Ошибка транспорта: соединение не установлено или оборвано.

    Примеры:
    - Connection refused
    - Connection reset
    - DNS resolution failed
    """
    retryable = True

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = message
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)


class APITimeoutError(APIConnectionError):
    """
    Таймаут запроса (connect, read или ожидание пула).

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        timeout: Значение таймаута (сек)
    """

    def __init__(self, message: str, url: Optional[str] = None, timeout: Optional[float] = None):
        self.timeout = timeout
        msg = message
        if timeout:
            msg += f" (timeout: {timeout}s)"
        super().__init__(msg, url)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ЛОКАЛЬНЫЕ ОШИБКИ (retryable=False)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class SerializationError(BeeperDesktopError):
    """
    Ошибка JSON: тело запроса не сериализуется или ответ 2xx
    не соответствует ожидаемой схеме.
    """


class InvalidURLError(BeeperDesktopError):
    """Не удалось собрать или разобрать URL."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = message
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)


class ConfigurationError(BeeperDesktopError):
    """Невалидная конфигурация клиента."""

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ API (HTTP статус)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class APIStatusError(BeeperDesktopError):
    """
    Ответ сервера с не-2xx статусом.

    Используется напрямую для статусов без отдельного класса
    (например 408, 418). Повторяется только при 408 и >= 500.

    Args:
        status_code: HTTP статус
        message: Поле ``error`` тела ответа или сырое тело
        code: Машиночитаемый код ошибки (если есть)
        details: Дополнительные детали (если есть)
    """

    def __init__(
        self,
        status_code: int,
        message: str = "",
        code: Optional[str] = None,
        details: Optional[Dict[str, str]] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.details = details

        msg = f"HTTP {status_code}"
        if message:
            msg += f": {message}"
        super().__init__(msg)

        # message - именно текст сервера, без префикса статуса
        self.message = message

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.status_code == 408 or self.status_code >= 500


class _FixedStatusError(APIStatusError):
    """
    Ошибка с фиксированным статусом.

    Статус задан классом, поэтому первым аргументом идёт ``message``;
    остальные параметры только именованные.
    """

    retryable = False  # type: ignore[assignment]
    status: int = 0

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, str]] = None,
        status_code: Optional[int] = None,
    ):
        if not isinstance(message, str):
            raise TypeError(
                f"{type(self).__name__} takes the message first, got {message!r}; "
                f"the status is fixed by the class"
            )
        super().__init__(status_code or self.status, message, code, details)


class BadRequestError(_FixedStatusError):
    """400 Bad Request."""
    status = 400


class AuthenticationError(_FixedStatusError):
    """401 Unauthorized: токен не передан, просрочен или отозван."""
    status = 401


class PermissionDeniedError(_FixedStatusError):
    """403 Forbidden."""
    status = 403


class NotFoundError(_FixedStatusError):
    """404 Not Found."""
    status = 404


class ConflictError(_FixedStatusError):
    """409 Conflict."""
    status = 409
    retryable = True  # type: ignore[assignment]


class UnprocessableEntityError(_FixedStatusError):
    """422 Unprocessable Entity."""
    status = 422


class RateLimitError(_FixedStatusError):
    """429 Too Many Requests."""
    status = 429
    retryable = True  # type: ignore[assignment]


class InternalServerError(_FixedStatusError):
    """
    5xx ошибка сервера.

    Фактический статус (500, 502, 503...) хранится в ``status_code``.
    """
    status = 500
    retryable = True  # type: ignore[assignment]


def is_retryable(error: BaseException) -> bool:
    """
    Единственный предикат повторяемости.

    Args:
        error: Исключение

    Returns:
        True если запрос с этой ошибкой стоит повторить

    Examples:
        >>> is_retryable(RateLimitError("slow down"))
        True
        >>> is_retryable(NotFoundError("no such chat"))
        False
    """
    if isinstance(error, BeeperDesktopError):
        return bool(error.retryable)
    return False
