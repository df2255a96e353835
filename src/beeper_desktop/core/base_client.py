"""
Общая часть синхронного и асинхронного клиентов.

Здесь всё, что не зависит от транспорта: сборка URL и заголовков,
сериализация тела, разбор ответа в модель и логирование попыток.
Транспорт (requests или httpx) и цикл повторов живут в подклассах.
"""

import json
import time
import uuid
from functools import lru_cache
from typing import Any, Dict, Optional, Sequence, Tuple, Type, TypeVar
from urllib.parse import quote, urlparse

from pydantic import BaseModel, TypeAdapter, ValidationError

from .config import ClientConfig
from .error_handler import ErrorHandler
from .exceptions import BeeperDesktopError, InvalidURLError, SerializationError
from .logging import ClientLogger, set_correlation_id
from .retry_engine import RetryEngine
from ..utils.sanitizer import mask_url

ResponseT = TypeVar("ResponseT")


@lru_cache(maxsize=None)
def _type_adapter(cast_to: Any) -> TypeAdapter:
    return TypeAdapter(cast_to)


class BaseClient:
    """
    Базовый класс клиентов Beeper Desktop.

    Args:
        config: ClientConfig (если не указан, собирается через ClientConfig.create)
        **kwargs: Параметры для ClientConfig.create (access_token, base_url, ...)
    """

    def __init__(self, config: Optional[ClientConfig] = None, **kwargs: Any):
        if config is None:
            config = ClientConfig.create(**kwargs)
        elif kwargs:
            raise TypeError("pass either config or keyword options, not both")

        self._config = config

        # Отдельный логгер на каждый клиент
        host = urlparse(config.base_url).netloc or "unknown"
        self._logger = ClientLogger(
            config=config.logging,
            name=f"beeper_desktop.{host}.{id(self):x}",
        )

    # ==================== Сборка запроса ====================

    def _build_url(self, path: str, query: Optional[Sequence[Tuple[str, str]]] = None) -> str:
        """
        Склеить base_url, относительный путь и query.

        Ключи и значения query кодируются в percent-encoding здесь и
        только здесь, в исходном порядке.

        Raises:
            InvalidURLError: путь абсолютный или содержит недопустимые символы
        """
        if "://" in path:
            raise InvalidURLError("path must be relative to base_url", path)
        if any(ch in path for ch in ("\n", "\r", " ")):
            raise InvalidURLError("path contains whitespace", path)

        url = self._config.base_url + path.lstrip("/")

        if query:
            encoded = "&".join(
                f"{quote(str(key), safe='')}={quote(str(value), safe='')}"
                for key, value in query
            )
            url += ("&" if "?" in url else "?") + encoded

        return url

    def _build_headers(self, has_body: bool) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._config.access_token}",
            "User-Agent": self._config.user_agent,
            "Accept": "application/json",
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    @staticmethod
    def _serialize_body(body: Any) -> Optional[bytes]:
        """
        Сериализовать тело запроса в JSON.

        Модели pydantic выгружаются по алиасам (wire-имена), поля None
        пропускаются.

        Raises:
            SerializationError: тело не сериализуется
        """
        if body is None:
            return None
        try:
            if isinstance(body, BaseModel):
                return body.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
            return json.dumps(body).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"failed to encode request body: {e}") from e

    # ==================== Разбор ответа ====================

    @staticmethod
    def _process_response(status_code: int, content: bytes, cast_to: Any) -> Any:
        """
        Превратить HTTP ответ в результат или исключение.

        Args:
            status_code: HTTP статус
            content: Тело ответа
            cast_to: Тип результата (модель pydantic, List[...], None)

        Raises:
            SerializationError: 2xx ответ не соответствует cast_to
            APIStatusError: не-2xx ответ (конкретный подкласс по статусу)
        """
        if not 200 <= status_code < 300:
            raise ErrorHandler.classify(status_code, content.decode("utf-8", errors="replace"))

        if cast_to is None:
            return None

        try:
            return _type_adapter(cast_to).validate_json(content)
        except ValidationError as e:
            raise SerializationError(
                f"failed to decode response as {getattr(cast_to, '__name__', cast_to)}: {e}"
            ) from e

    # ==================== Логирование ====================

    def _start_call(self, method: str, url: str) -> Tuple[str, float, RetryEngine]:
        """Начать логический вызов: correlation id, таймер, свой RetryEngine."""
        correlation_id = str(uuid.uuid4())
        set_correlation_id(correlation_id)
        self._logger.info(
            "Request started",
            method=method,
            url=mask_url(url),
            correlation_id=correlation_id,
            timeout=self._config.timeout,
            max_retries=self._config.max_retries,
        )
        return correlation_id, time.time(), RetryEngine(self._config.max_retries, self._config.retry_backoff)

    def _log_success(self, method: str, url: str, status_code: int, start_time: float,
                     engine: RetryEngine, correlation_id: str) -> None:
        self._logger.info(
            "Request completed",
            method=method,
            url=mask_url(url),
            status_code=status_code,
            duration_ms=round((time.time() - start_time) * 1000, 2),
            attempt=engine.attempt + 1,
            correlation_id=correlation_id,
        )

    def _log_retry(self, method: str, url: str, error: BeeperDesktopError, start_time: float,
                   engine: RetryEngine, correlation_id: str) -> None:
        self._logger.warning(
            "Request error (will retry)",
            method=method,
            url=mask_url(url),
            error=str(error),
            error_type=type(error).__name__,
            attempt=engine.attempt + 1,
            max_attempts=self._config.max_attempts,
            duration_ms=round((time.time() - start_time) * 1000, 2),
            wait_time_s=round(engine.get_wait_time(), 2),
            correlation_id=correlation_id,
        )

    def _log_failure(self, method: str, url: str, error: BeeperDesktopError, start_time: float,
                     engine: RetryEngine, correlation_id: str) -> None:
        self._logger.error(
            "Request failed",
            method=method,
            url=mask_url(url),
            error=str(error),
            error_type=type(error).__name__,
            attempt=engine.attempt + 1,
            max_attempts=self._config.max_attempts,
            duration_ms=round((time.time() - start_time) * 1000, 2),
            correlation_id=correlation_id,
            is_max_attempts=engine.attempt >= self._config.max_retries,
        )

    # ==================== Health Check ====================

    def _health_base(self, client_type: str) -> Dict[str, Any]:
        return {
            "healthy": True,
            "base_url": self._config.base_url,
            "client_type": client_type,
            "timeout": self._config.timeout,
            "max_retries": self._config.max_retries,
            "connectivity": None,
        }

    # ==================== Properties ====================

    @property
    def config(self) -> ClientConfig:
        """Конфигурация клиента (immutable)."""
        return self._config

    @property
    def base_url(self) -> str:
        """Базовый URL."""
        return self._config.base_url
