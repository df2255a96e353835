"""
Retry engine для повторных попыток одного логического вызова.

Включает:
- Линейный backoff: retry_backoff * номер повтора (1s, 2s, 3s, ...)
- Единый предикат повторяемости из exceptions.is_retryable
"""

import asyncio
import logging
import time

from .exceptions import is_retryable

logger = logging.getLogger(__name__)


class RetryEngine:
    """
    Счётчик повторов с линейной задержкой.

    Создаётся на каждый вызов: состояние не разделяется между запросами.

    Examples:
        >>> engine = RetryEngine(max_retries=2, backoff=1.0)
        >>> if engine.should_retry(error):
        >>>     engine.wait()
        >>>     engine.increment()
    """

    def __init__(self, max_retries: int, backoff: float = 1.0):
        """
        Args:
            max_retries: Количество повторов (не включая первую попытку)
            backoff: Шаг задержки (сек)
        """
        self.max_retries = max_retries
        self.backoff = backoff
        self._attempt = 0

    def should_retry(self, error: Exception) -> bool:
        """
        Решить нужен ли retry.

        Args:
            error: Исключение последней попытки

        Returns:
            True если ошибка повторяемая и лимит не исчерпан
        """
        if self._attempt >= self.max_retries:
            return False
        return is_retryable(error)

    def get_wait_time(self) -> float:
        """
        Вычислить время ожидания перед следующей попыткой.

        Returns:
            Секунды для ожидания
        """
        return self.backoff * (self._attempt + 1)

    def wait(self) -> None:
        """Синхронное ожидание перед retry."""
        wait_time = self.get_wait_time()
        logger.debug(f"Retry {self._attempt + 1}/{self.max_retries} after {wait_time:.1f}s")
        time.sleep(wait_time)

    async def async_wait(self) -> None:
        """
        Асинхронное ожидание перед retry (async-версия).

        Examples:
            >>> await engine.async_wait()
        """
        wait_time = self.get_wait_time()
        logger.debug(f"Retry {self._attempt + 1}/{self.max_retries} after {wait_time:.1f}s")
        await asyncio.sleep(wait_time)

    def increment(self):
        """Увеличить счётчик попыток."""
        self._attempt += 1

    def reset(self):
        """Сбросить счётчик."""
        self._attempt = 0

    @property
    def attempt(self) -> int:
        """Сколько повторов уже сделано."""
        return self._attempt
