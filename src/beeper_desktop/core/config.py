"""
Конфигурация клиента Beeper Desktop API.

Конфиг immutable (frozen dataclass): валидируется один раз при создании,
после чего безопасно разделяется между потоками и задачами asyncio.
"""

import os
from dataclasses import dataclass, replace
from typing import Any, Optional, TYPE_CHECKING
from urllib.parse import urlparse

from .._version import __version__
from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .logging import LoggingConfig

DEFAULT_BASE_URL = "http://localhost:23373"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_BACKOFF = 1.0
DEFAULT_USER_AGENT = f"beeper-desktop-api-python/{__version__}"

ENV_ACCESS_TOKEN = "BEEPER_ACCESS_TOKEN"
ENV_BASE_URL = "BEEPER_DESKTOP_BASE_URL"


def normalize_base_url(base_url: str) -> str:
    """
    Проверить base URL и привести его к виду с завершающим ``/``.

    Raises:
        ConfigurationError: URL пустой или не абсолютный
    """
    if not base_url or not base_url.strip():
        raise ConfigurationError("base_url is required")

    base_url = base_url.strip()
    try:
        parsed = urlparse(base_url)
    except ValueError as e:
        raise ConfigurationError(f"invalid base_url {base_url!r}: {e}") from e

    if not parsed.scheme or not parsed.netloc:
        raise ConfigurationError(f"invalid base_url {base_url!r}: scheme and host are required")

    if not base_url.endswith("/"):
        base_url += "/"
    return base_url


@dataclass(frozen=True)
class ClientConfig:
    """
    Главная конфигурация клиента.

    Args:
        access_token: Bearer токен (обязателен)
        base_url: Адрес Beeper Desktop (нормализуется к виду с ``/`` в конце)
        timeout: Таймаут одного HTTP обмена (сек)
        max_retries: Количество повторов (не включая первую попытку)
        user_agent: Значение заголовка User-Agent
        retry_backoff: Шаг линейной задержки между повторами (сек)
        http_client: Свой транспорт (requests.Session или httpx.AsyncClient)
        logging: Конфигурация логирования (None = только NullHandler)

    Examples:
        >>> ClientConfig(access_token="tok")
        >>> ClientConfig.create(access_token="tok", timeout=10, max_retries=0)
    """
    access_token: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    user_agent: str = DEFAULT_USER_AGENT
    retry_backoff: float = DEFAULT_RETRY_BACKOFF
    http_client: Optional[Any] = None
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Валидация и нормализация."""
        if not self.access_token:
            raise ConfigurationError("access_token is required")

        object.__setattr__(self, 'base_url', normalize_base_url(self.base_url))

        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.max_retries < 0:
            raise ConfigurationError("max_retries must be non-negative")
        if self.retry_backoff < 0:
            raise ConfigurationError("retry_backoff must be non-negative")
        if not self.user_agent:
            raise ConfigurationError("user_agent must not be empty")

    def __repr__(self) -> str:
        # токен не должен попадать в логи и трейсбеки
        return (
            f"ClientConfig(base_url={self.base_url!r}, timeout={self.timeout}, "
            f"max_retries={self.max_retries}, user_agent={self.user_agent!r})"
        )

    @classmethod
    def create(
        cls,
        access_token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        user_agent: Optional[str] = None,
        retry_backoff: float = DEFAULT_RETRY_BACKOFF,
        http_client: Optional[Any] = None,
        logging: Optional['LoggingConfig'] = None,
    ) -> 'ClientConfig':
        """
        Удобный конструктор конфигурации.

        Токен и base URL, если не переданы явно, читаются из
        BEEPER_ACCESS_TOKEN и BEEPER_DESKTOP_BASE_URL.

        Returns:
            ClientConfig instance

        Raises:
            ConfigurationError: токен не найден ни в аргументах, ни в окружении

        Examples:
            >>> config = ClientConfig.create(timeout=60)
            >>> config = ClientConfig.create(access_token="tok", max_retries=5)
        """
        if access_token is None:
            access_token = os.environ.get(ENV_ACCESS_TOKEN, "")
        if base_url is None:
            base_url = os.environ.get(ENV_BASE_URL) or DEFAULT_BASE_URL

        return cls(
            access_token=access_token,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            user_agent=user_agent or DEFAULT_USER_AGENT,
            retry_backoff=retry_backoff,
            http_client=http_client,
            logging=logging,
        )

    def with_timeout(self, timeout: float) -> 'ClientConfig':
        """
        Создать новый конфиг с изменённым timeout.

        Example:
            >>> new_config = config.with_timeout(60)
        """
        return replace(self, timeout=timeout)

    def with_retries(self, max_retries: int) -> 'ClientConfig':
        """
        Создать новый конфиг с другим количеством повторов.

        Args:
            max_retries: Количество повторов (не включая первую попытку)
        """
        return replace(self, max_retries=max_retries)

    def with_access_token(self, access_token: str) -> 'ClientConfig':
        """Создать новый конфиг с другим токеном."""
        return replace(self, access_token=access_token)

    @property
    def max_attempts(self) -> int:
        """Общее количество попыток (включая первую)."""
        return self.max_retries + 1
