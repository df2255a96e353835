"""Тесты RetryEngine."""

from unittest.mock import patch

import pytest

from src.beeper_desktop.core.retry_engine import RetryEngine
from src.beeper_desktop.core.exceptions import (
    APITimeoutError,
    InternalServerError,
    BadRequestError,
    RateLimitError,
    SerializationError,
)


def test_retry_engine_init():
    """Тест инициализации."""
    engine = RetryEngine(max_retries=2)
    assert engine.attempt == 0
    assert engine.backoff == 1.0


def test_should_retry_timeout_error():
    engine = RetryEngine(max_retries=3)
    assert engine.should_retry(APITimeoutError("Timeout")) is True


def test_should_retry_server_error():
    engine = RetryEngine(max_retries=1)
    assert engine.should_retry(InternalServerError("down", status_code=503)) is True


def test_should_retry_rate_limit():
    engine = RetryEngine(max_retries=1)
    assert engine.should_retry(RateLimitError("slow down")) is True


def test_should_not_retry_fatal():
    """НЕ retry для fatal ошибок."""
    engine = RetryEngine(max_retries=5)
    assert engine.should_retry(BadRequestError("bad")) is False
    assert engine.should_retry(SerializationError("json")) is False


def test_should_not_retry_max_attempts():
    """НЕ retry после лимита."""
    engine = RetryEngine(max_retries=2)
    error = APITimeoutError("Timeout")

    engine.increment()
    assert engine.should_retry(error) is True
    engine.increment()
    assert engine.should_retry(error) is False


def test_zero_retries():
    assert RetryEngine(max_retries=0).should_retry(APITimeoutError("Timeout")) is False


def test_get_wait_time_linear():
    """Linear backoff: backoff * (attempt + 1)."""
    engine = RetryEngine(max_retries=3, backoff=1.0)

    assert engine.get_wait_time() == 1.0
    engine.increment()
    assert engine.get_wait_time() == 2.0
    engine.increment()
    assert engine.get_wait_time() == 3.0


def test_get_wait_time_custom_backoff():
    engine = RetryEngine(max_retries=3, backoff=0.5)
    engine.increment()
    assert engine.get_wait_time() == 1.0


def test_reset():
    engine = RetryEngine(max_retries=3)
    engine.increment()
    engine.increment()
    engine.reset()
    assert engine.attempt == 0


def test_wait_sleeps():
    engine = RetryEngine(max_retries=3, backoff=0.25)
    engine.increment()
    with patch("src.beeper_desktop.core.retry_engine.time.sleep") as sleep:
        engine.wait()
    sleep.assert_called_once_with(0.5)


@pytest.mark.asyncio
async def test_async_wait_sleeps():
    engine = RetryEngine(max_retries=3, backoff=0.0)
    with patch("src.beeper_desktop.core.retry_engine.asyncio.sleep") as sleep:
        await engine.async_wait()
    sleep.assert_awaited_once_with(0.0)
