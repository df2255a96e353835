# src/beeper_desktop/async_client.py
"""
Асинхронный клиент Beeper Desktop API на базе httpx.

Предоставляет async/await API для использования в asyncio приложениях.
Несколько вызовов могут выполняться конкурентно: конфиг read-only,
httpx.AsyncClient (пул соединений) общий, RetryEngine свой у каждого вызова.
"""

import time
from typing import Any, Dict, Optional, Sequence, Tuple

import httpx

from .core.base_client import BaseClient
from .core.config import ClientConfig
from .core.error_handler import classify_httpx_exception
from .core.exceptions import BeeperDesktopError
from .core.logging import clear_correlation_id
from .resources.accounts import AsyncAccounts
from .resources.app import AsyncApp
from .resources.chats import AsyncChats
from .resources.contacts import AsyncContacts
from .resources.messages import AsyncMessages
from .resources.token import AsyncToken


class AsyncBeeperDesktop(BaseClient):
    """
    Асинхронный клиент с retry, классификацией ошибок и пагинацией.

    Example:
        >>> async with AsyncBeeperDesktop(access_token="tok") as client:
        ...     accounts = await client.accounts.list()
        ...     async for chat in client.chats.search_all(limit=50):
        ...         print(chat.title)

        >>> # Или без context manager
        >>> client = AsyncBeeperDesktop(access_token="tok")
        >>> info = await client.token.info()
        >>> await client.close()

    Отмена задачи (asyncio.CancelledError) не перехватывается и не
    повторяется; таймаут httpx (включая ожидание пула) становится
    APITimeoutError и повторяется как сетевая ошибка.
    """

    def __init__(self, config: Optional[ClientConfig] = None, **kwargs: Any):
        super().__init__(config, **kwargs)

        if self._config.http_client is not None:
            if not isinstance(self._config.http_client, httpx.AsyncClient):
                raise TypeError("http_client must be an httpx.AsyncClient for AsyncBeeperDesktop")
            self._client: Optional[httpx.AsyncClient] = self._config.http_client
            self._owns_client = False
        else:
            # Клиент создаётся лениво или при входе в context manager
            self._client = None
            self._owns_client = True

        self.accounts = AsyncAccounts(self)
        self.app = AsyncApp(self)
        self.chats = AsyncChats(self)
        self.contacts = AsyncContacts(self)
        self.messages = AsyncMessages(self)
        self.token = AsyncToken(self)

    async def _get_client(self) -> httpx.AsyncClient:
        """Получить или создать httpx клиент."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._config.timeout))
        return self._client

    async def __aenter__(self) -> "AsyncBeeperDesktop":
        await self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Закрыть клиент и освободить ресурсы."""
        self._logger.close()
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ==================== Request engine ====================

    async def execute(self, method: str, path: str, body: Any = None, cast_to: Any = None) -> Any:
        """
        Выполнить запрос с JSON телом.

        Raises:
            BeeperDesktopError: подкласс по виду ошибки
        """
        return await self._request(method, path, body=body, cast_to=cast_to)

    async def execute_with_query(
        self,
        method: str,
        path: str,
        query_pairs: Sequence[Tuple[str, str]],
        cast_to: Any = None,
    ) -> Any:
        """Выполнить запрос с параметрами в query string."""
        return await self._request(method, path, query=query_pairs, cast_to=cast_to)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: Optional[Sequence[Tuple[str, str]]] = None,
        cast_to: Any = None,
    ) -> Any:
        url = self._build_url(path, query)
        content = self._serialize_body(body)
        headers = self._build_headers(content is not None)

        client = await self._get_client()
        correlation_id, start_time, retry_engine = self._start_call(method, url)

        try:
            while True:
                cause: Optional[BaseException] = None
                try:
                    response = await client.request(
                        method,
                        url,
                        headers=headers,
                        content=content,
                        timeout=self._config.timeout,
                        follow_redirects=False,
                    )
                    result = self._process_response(response.status_code, response.content, cast_to)
                    self._log_success(method, url, response.status_code, start_time, retry_engine, correlation_id)
                    return result

                except (httpx.HTTPError, httpx.InvalidURL) as e:
                    error: BeeperDesktopError = classify_httpx_exception(e, url, self._config.timeout)
                    cause = e
                except BeeperDesktopError as e:
                    error = e

                if not retry_engine.should_retry(error):
                    self._log_failure(method, url, error, start_time, retry_engine, correlation_id)
                    if cause is not None:
                        raise error from cause
                    raise error

                self._log_retry(method, url, error, start_time, retry_engine, correlation_id)
                await retry_engine.async_wait()
                retry_engine.increment()
        finally:
            clear_correlation_id()

    # ==================== Health Check ====================

    async def health_check(self, check_token: bool = False) -> Dict[str, Any]:
        """
        Асинхронная диагностика клиента.

        Args:
            check_token: Сделать запрос ``/oauth/userinfo`` для проверки связи и токена
        """
        result = self._health_base("async")

        if check_token:
            connectivity: Dict[str, Any] = {"reachable": False, "response_time_ms": None, "error": None}
            start = time.time()
            try:
                info = await self.token.info()
                connectivity["reachable"] = True
                connectivity["scope"] = info.scope
            except BeeperDesktopError as e:
                connectivity["error"] = str(e)[:100]
                connectivity["reachable"] = getattr(e, "status_code", None) is not None
                result["healthy"] = False
            connectivity["response_time_ms"] = round((time.time() - start) * 1000, 2)
            result["connectivity"] = connectivity

        return result
