# src/beeper_desktop/client.py
"""
Синхронный клиент Beeper Desktop API на базе requests.

Example:
    >>> with BeeperDesktop(access_token="...") as client:
    ...     for account in client.accounts.list():
    ...         print(account.network, account.user.full_name)
"""

import time
from typing import Any, Dict, Optional, Sequence, Tuple

import requests
from requests.adapters import HTTPAdapter

from .core.base_client import BaseClient
from .core.config import ClientConfig
from .core.error_handler import classify_requests_exception
from .core.exceptions import BeeperDesktopError
from .core.logging import clear_correlation_id
from .resources.accounts import Accounts
from .resources.app import App
from .resources.chats import Chats
from .resources.contacts import Contacts
from .resources.messages import Messages
from .resources.token import Token


class BeeperDesktop(BaseClient):
    """
    Синхронный клиент с retry, классификацией ошибок и пагинацией.

    Args:
        config: ClientConfig (если не указан, собирается из kwargs и окружения)
        **kwargs: access_token, base_url, timeout, max_retries, ...

    Example:
        >>> client = BeeperDesktop(access_token="tok", max_retries=0)
        >>> chat = client.chats.retrieve(chat_id="!room:beeper.local")
        >>> client.close()

    Features:
        - Одна requests.Session (connection pool) на клиент
        - Повтор при сетевых ошибках, 408, 409, 429 и 5xx с линейной задержкой
        - Ответы разбираются в модели pydantic
    """

    def __init__(self, config: Optional[ClientConfig] = None, **kwargs: Any):
        super().__init__(config, **kwargs)

        if self._config.http_client is not None:
            if not isinstance(self._config.http_client, requests.Session):
                raise TypeError("http_client must be a requests.Session for BeeperDesktop")
            self._session = self._config.http_client
            self._owns_session = False
        else:
            self._session = self._create_session()
            self._owns_session = True

        self.accounts = Accounts(self)
        self.app = App(self)
        self.chats = Chats(self)
        self.contacts = Contacts(self)
        self.messages = Messages(self)
        self.token = Token(self)

    def _create_session(self) -> requests.Session:
        """Create configured session."""
        session = requests.Session()
        # Ретраи через RetryEngine, не через urllib3
        adapter = HTTPAdapter(max_retries=0)
        session.mount('http://', adapter)
        session.mount('https://', adapter)
        return session

    def __enter__(self) -> "BeeperDesktop":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """
        Закрыть сессию (если её создал клиент) и файловые логгеры.

        Переданную снаружи сессию клиент не закрывает.
        """
        self._logger.close()
        if self._owns_session:
            self._session.close()

    # ==================== Request engine ====================

    def execute(self, method: str, path: str, body: Any = None, cast_to: Any = None) -> Any:
        """
        Выполнить запрос с JSON телом.

        Args:
            method: HTTP метод
            path: Путь относительно base_url (например ``/v0/send-message``)
            body: Модель pydantic или dict (None = без тела)
            cast_to: Тип результата

        Returns:
            Разобранный ответ (экземпляр cast_to) или None если cast_to=None

        Raises:
            BeeperDesktopError: подкласс по виду ошибки
        """
        return self._request(method, path, body=body, cast_to=cast_to)

    def execute_with_query(
        self,
        method: str,
        path: str,
        query_pairs: Sequence[Tuple[str, str]],
        cast_to: Any = None,
    ) -> Any:
        """
        Выполнить запрос с параметрами в query string.

        Args:
            query_pairs: Упорядоченные пары из encode_query (ещё не закодированные)
        """
        return self._request(method, path, query=query_pairs, cast_to=cast_to)

    def _request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: Optional[Sequence[Tuple[str, str]]] = None,
        cast_to: Any = None,
    ) -> Any:
        url = self._build_url(path, query)
        data = self._serialize_body(body)
        headers = self._build_headers(data is not None)

        correlation_id, start_time, retry_engine = self._start_call(method, url)

        try:
            while True:
                cause: Optional[BaseException] = None
                try:
                    response = self._session.request(
                        method=method,
                        url=url,
                        headers=headers,
                        data=data,
                        timeout=self._config.timeout,
                        allow_redirects=False,
                    )
                    result = self._process_response(response.status_code, response.content, cast_to)
                    self._log_success(method, url, response.status_code, start_time, retry_engine, correlation_id)
                    return result

                except requests.exceptions.RequestException as e:
                    error: BeeperDesktopError = classify_requests_exception(e, url, self._config.timeout)
                    cause = e
                except BeeperDesktopError as e:
                    error = e

                if not retry_engine.should_retry(error):
                    self._log_failure(method, url, error, start_time, retry_engine, correlation_id)
                    if cause is not None:
                        raise error from cause
                    raise error

                self._log_retry(method, url, error, start_time, retry_engine, correlation_id)
                retry_engine.wait()
                retry_engine.increment()
        finally:
            clear_correlation_id()

    # ==================== Health Check ====================

    def health_check(self, check_token: bool = False) -> Dict[str, Any]:
        """
        Диагностика клиента.

        Args:
            check_token: Сделать запрос ``/oauth/userinfo`` для проверки связи и токена

        Returns:
            Словарь с диагностической информацией
        """
        result = self._health_base("sync")

        if check_token:
            connectivity: Dict[str, Any] = {"reachable": False, "response_time_ms": None, "error": None}
            start = time.time()
            try:
                info = self.token.info()
                connectivity["reachable"] = True
                connectivity["scope"] = info.scope
            except BeeperDesktopError as e:
                connectivity["error"] = str(e)[:100]
                connectivity["reachable"] = getattr(e, "status_code", None) is not None
                result["healthy"] = False
            connectivity["response_time_ms"] = round((time.time() - start) * 1000, 2)
            result["connectivity"] = connectivity

        return result

    @property
    def session(self) -> requests.Session:
        """Используемая requests.Session."""
        return self._session
