"""
Tests for AsyncBeeperDesktop using respx mocks.
"""

import asyncio
import json
from datetime import datetime

import httpx
import pytest
import respx

from src.beeper_desktop.async_client import AsyncBeeperDesktop
from src.beeper_desktop.core.exceptions import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    InternalServerError,
    NotFoundError,
    SerializationError,
)

BASE = "http://localhost:23373"
USER_INFO = {"iat": 1700000000, "scope": "read", "sub": "user-1", "token_use": "access"}


@pytest.fixture
def async_client(token):
    return AsyncBeeperDesktop(access_token=token, retry_backoff=0)


class TestAsyncInit:

    def test_wrong_http_client_type(self, token):
        with pytest.raises(TypeError, match="httpx.AsyncClient"):
            AsyncBeeperDesktop(access_token=token, http_client=object())

    @pytest.mark.asyncio
    async def test_lazy_client(self, async_client):
        assert async_client._client is None
        async with async_client:
            assert isinstance(async_client._client, httpx.AsyncClient)
        assert async_client._client is None

    @pytest.mark.asyncio
    async def test_user_client_left_open(self, token):
        http_client = httpx.AsyncClient()
        client = AsyncBeeperDesktop(access_token=token, http_client=http_client)
        await client.close()
        assert http_client.is_closed is False
        await http_client.aclose()


class TestAsyncRequests:

    @respx.mock
    @pytest.mark.asyncio
    async def test_headers_and_result(self, async_client, token):
        route = respx.get(f"{BASE}/oauth/userinfo").mock(return_value=httpx.Response(200, json=USER_INFO))

        async with async_client:
            info = await async_client.token.info()

        assert info.sub == "user-1"
        request = route.calls.last.request
        assert request.headers["Authorization"] == f"Bearer {token}"
        assert request.headers["Accept"] == "application/json"
        assert "Content-Type" not in request.headers

    @respx.mock
    @pytest.mark.asyncio
    async def test_post_body(self, async_client):
        route = respx.post(f"{BASE}/v0/set-chat-reminder").mock(
            return_value=httpx.Response(200, json={"success": True})
        )

        async with async_client:
            result = await async_client.chats.reminders.create(
                chat_id="!room", timestamp=datetime(2024, 6, 1, 9, 30), message="call back"
            )

        assert result.success is True
        request = route.calls.last.request
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {
            "chatID": "!room",
            "timestamp": "2024-06-01T09:30:00Z",
            "message": "call back",
        }

    @respx.mock
    @pytest.mark.asyncio
    async def test_query_encoding(self, async_client):
        route = respx.get(f"{BASE}/v0/search-users").mock(return_value=httpx.Response(200, json={"items": []}))

        async with async_client:
            result = await async_client.contacts.search(account_id="whatsapp", query="a b&c")

        assert result.items == []
        assert str(route.calls.last.request.url) == f"{BASE}/v0/search-users?accountID=whatsapp&query=a%20b%26c"

    @respx.mock
    @pytest.mark.asyncio
    async def test_not_found_not_retried(self, async_client):
        route = respx.get(f"{BASE}/v0/get-chat").mock(
            return_value=httpx.Response(404, json={"error": "chat not found", "code": "NOT_FOUND"})
        )

        async with async_client:
            with pytest.raises(NotFoundError) as exc_info:
                await async_client.chats.retrieve(chat_id="!missing")

        assert exc_info.value.code == "NOT_FOUND"
        assert route.call_count == 1

    @respx.mock
    @pytest.mark.asyncio
    async def test_redirect_not_followed(self, token):
        route = respx.get(f"{BASE}/oauth/userinfo").mock(
            return_value=httpx.Response(302, headers={"Location": f"{BASE}/other"}, text="moved")
        )
        other = respx.get(f"{BASE}/other").mock(return_value=httpx.Response(200, json=USER_INFO))

        # a client that follows redirects on its own is overridden per request
        http_client = httpx.AsyncClient(follow_redirects=True)
        client = AsyncBeeperDesktop(access_token=token, http_client=http_client, retry_backoff=0)
        try:
            with pytest.raises(APIStatusError) as exc_info:
                await client.token.info()
        finally:
            await http_client.aclose()

        assert type(exc_info.value) is APIStatusError
        assert exc_info.value.status_code == 302
        assert exc_info.value.message == "moved"
        assert route.call_count == 1
        assert other.call_count == 0

    @respx.mock
    @pytest.mark.asyncio
    async def test_server_error_retried(self, async_client):
        route = respx.get(f"{BASE}/oauth/userinfo").mock(return_value=httpx.Response(500))

        async with async_client:
            with pytest.raises(InternalServerError):
                await async_client.token.info()

        assert route.call_count == 3

    @respx.mock
    @pytest.mark.asyncio
    async def test_retry_then_success(self, async_client):
        route = respx.get(f"{BASE}/oauth/userinfo").mock(side_effect=[
            httpx.Response(503),
            httpx.Response(200, json=USER_INFO),
        ])

        async with async_client:
            info = await async_client.token.info()

        assert info.scope == "read"
        assert route.call_count == 2

    @respx.mock
    @pytest.mark.asyncio
    async def test_malformed_not_retried(self, async_client):
        route = respx.get(f"{BASE}/oauth/userinfo").mock(return_value=httpx.Response(200, text="<html>"))

        async with async_client:
            with pytest.raises(SerializationError):
                await async_client.token.info()

        assert route.call_count == 1

    @respx.mock
    @pytest.mark.asyncio
    async def test_connect_error(self, async_client):
        route = respx.get(f"{BASE}/oauth/userinfo").mock(side_effect=httpx.ConnectError("refused"))

        async with async_client:
            with pytest.raises(APIConnectionError) as exc_info:
                await async_client.token.info()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert route.call_count == 3

    @respx.mock
    @pytest.mark.asyncio
    async def test_pool_timeout(self, async_client):
        respx.get(f"{BASE}/oauth/userinfo").mock(side_effect=httpx.PoolTimeout("pool exhausted"))

        async with async_client:
            with pytest.raises(APITimeoutError):
                await async_client.token.info()

    @respx.mock
    @pytest.mark.asyncio
    async def test_concurrent_calls(self, async_client, make_chat):
        respx.get(f"{BASE}/v0/get-chat").mock(return_value=httpx.Response(200, json=make_chat()))

        async with async_client:
            chats = await asyncio.gather(*[async_client.chats.retrieve(chat_id=f"!{i}") for i in range(5)])

        assert len(chats) == 5

    @respx.mock
    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, token):
        async def slow(request):
            await asyncio.sleep(10)
            return httpx.Response(200, json=USER_INFO)

        respx.get(f"{BASE}/oauth/userinfo").mock(side_effect=slow)

        async with AsyncBeeperDesktop(access_token=token, retry_backoff=0) as client:
            task = asyncio.create_task(client.token.info())
            await asyncio.sleep(0.01)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

    @respx.mock
    @pytest.mark.asyncio
    async def test_health_check(self, async_client):
        respx.get(f"{BASE}/oauth/userinfo").mock(return_value=httpx.Response(200, json=USER_INFO))

        async with async_client:
            health = await async_client.health_check(check_token=True)

        assert health["client_type"] == "async"
        assert health["connectivity"]["reachable"] is True
