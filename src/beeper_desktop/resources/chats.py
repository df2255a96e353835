"""
Chats: search, create, retrieve and archive chats, plus chat reminders.
"""

from typing import AsyncIterator, Iterator, List, Optional

from pydantic import Field

from ..core.pagination import aiter_items, aiter_pages, iter_items, iter_pages
from ..core.query import encode_query
from .base import AsyncAPIResource, SyncAPIResource, UTCDateTime, build_params
from .shared import ApiModel, BaseResponse, Chat, ChatsCursor

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# PARAMS / RESPONSES
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ChatCreateParams(ApiModel):
    account_id: str = Field(alias="accountID")
    participant_ids: List[str] = Field(alias="participantIDs")
    type: str = Field(description="single or group")
    title: Optional[str] = None


class ChatCreateResponse(ApiModel):
    chat: Chat
    success: bool
    error: Optional[str] = None


class ChatRetrieveParams(ApiModel):
    chat_id: str = Field(alias="chatID")


class ChatArchiveParams(ApiModel):
    chat_id: str = Field(alias="chatID")
    archived: bool = True


class ChatSearchParams(ApiModel):
    """Filters for ``GET /v0/search-chats``. Field order is the query order."""

    account_ids: Optional[List[str]] = Field(default=None, alias="accountIDs")
    chat_type: Optional[str] = Field(default=None, alias="chatType")
    include_muted: Optional[bool] = Field(default=None, alias="includeMuted")
    limit: Optional[int] = None
    cursor: Optional[str] = None
    scope: Optional[str] = None
    query: Optional[str] = None


class ReminderCreateParams(ApiModel):
    chat_id: str = Field(alias="chatID")
    timestamp: UTCDateTime
    message: Optional[str] = None


class ReminderDeleteParams(ApiModel):
    chat_id: str = Field(alias="chatID")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SYNC
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class Reminders(SyncAPIResource):
    def create(self, params: Optional[ReminderCreateParams] = None, **kwargs) -> BaseResponse:
        """Set a reminder on a chat."""
        params = build_params(ReminderCreateParams, params, kwargs)
        return self._client.execute("POST", "/v0/set-chat-reminder", params, cast_to=BaseResponse)

    def delete(self, params: Optional[ReminderDeleteParams] = None, **kwargs) -> BaseResponse:
        """Clear the reminder of a chat."""
        params = build_params(ReminderDeleteParams, params, kwargs)
        return self._client.execute("POST", "/v0/clear-chat-reminder", params, cast_to=BaseResponse)


class Chats(SyncAPIResource):
    def __init__(self, client):
        super().__init__(client)
        self.reminders = Reminders(client)

    def create(self, params: Optional[ChatCreateParams] = None, **kwargs) -> ChatCreateResponse:
        params = build_params(ChatCreateParams, params, kwargs)
        return self._client.execute("POST", "/v0/create-chat", params, cast_to=ChatCreateResponse)

    def retrieve(self, params: Optional[ChatRetrieveParams] = None, **kwargs) -> Chat:
        params = build_params(ChatRetrieveParams, params, kwargs)
        return self._client.execute_with_query("GET", "/v0/get-chat", encode_query(params), cast_to=Chat)

    def archive(self, params: Optional[ChatArchiveParams] = None, **kwargs) -> BaseResponse:
        """Archive (or, with ``archived=False``, unarchive) a chat."""
        params = build_params(ChatArchiveParams, params, kwargs)
        return self._client.execute("POST", "/v0/archive-chat", params, cast_to=BaseResponse)

    def search(self, params: Optional[ChatSearchParams] = None, **kwargs) -> ChatsCursor:
        """
        Fetch one page of chats.

        Example:
            >>> page = client.chats.search(query="team", limit=20)
            >>> page.next_cursor
        """
        params = build_params(ChatSearchParams, params, kwargs)
        return self._client.execute_with_query(
            "GET", "/v0/search-chats", encode_query(params), cast_to=ChatsCursor
        )

    def search_pages(self, params: Optional[ChatSearchParams] = None, **kwargs) -> Iterator[ChatsCursor]:
        """Iterate over pages, following the cursor until the last one."""
        return iter_pages(self.search, build_params(ChatSearchParams, params, kwargs))

    def search_all(self, params: Optional[ChatSearchParams] = None, **kwargs) -> Iterator[Chat]:
        """
        Iterate over the chats of every page.

        Example:
            >>> for chat in client.chats.search_all(limit=100):
            ...     print(chat.title)
        """
        return iter_items(self.search, build_params(ChatSearchParams, params, kwargs))

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ASYNC
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class AsyncReminders(AsyncAPIResource):
    async def create(self, params: Optional[ReminderCreateParams] = None, **kwargs) -> BaseResponse:
        params = build_params(ReminderCreateParams, params, kwargs)
        return await self._client.execute("POST", "/v0/set-chat-reminder", params, cast_to=BaseResponse)

    async def delete(self, params: Optional[ReminderDeleteParams] = None, **kwargs) -> BaseResponse:
        params = build_params(ReminderDeleteParams, params, kwargs)
        return await self._client.execute("POST", "/v0/clear-chat-reminder", params, cast_to=BaseResponse)


class AsyncChats(AsyncAPIResource):
    def __init__(self, client):
        super().__init__(client)
        self.reminders = AsyncReminders(client)

    async def create(self, params: Optional[ChatCreateParams] = None, **kwargs) -> ChatCreateResponse:
        params = build_params(ChatCreateParams, params, kwargs)
        return await self._client.execute("POST", "/v0/create-chat", params, cast_to=ChatCreateResponse)

    async def retrieve(self, params: Optional[ChatRetrieveParams] = None, **kwargs) -> Chat:
        params = build_params(ChatRetrieveParams, params, kwargs)
        return await self._client.execute_with_query("GET", "/v0/get-chat", encode_query(params), cast_to=Chat)

    async def archive(self, params: Optional[ChatArchiveParams] = None, **kwargs) -> BaseResponse:
        params = build_params(ChatArchiveParams, params, kwargs)
        return await self._client.execute("POST", "/v0/archive-chat", params, cast_to=BaseResponse)

    async def search(self, params: Optional[ChatSearchParams] = None, **kwargs) -> ChatsCursor:
        params = build_params(ChatSearchParams, params, kwargs)
        return await self._client.execute_with_query(
            "GET", "/v0/search-chats", encode_query(params), cast_to=ChatsCursor
        )

    def search_pages(self, params: Optional[ChatSearchParams] = None, **kwargs) -> AsyncIterator[ChatsCursor]:
        """
        Async iterator over pages.

        Example:
            >>> async for page in client.chats.search_pages(limit=50):
            ...     print(len(page.items))
        """
        return aiter_pages(self.search, build_params(ChatSearchParams, params, kwargs))

    def search_all(self, params: Optional[ChatSearchParams] = None, **kwargs) -> AsyncIterator[Chat]:
        return aiter_items(self.search, build_params(ChatSearchParams, params, kwargs))
