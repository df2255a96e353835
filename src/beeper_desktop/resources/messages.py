"""Messages: search across chats and send messages."""

from typing import AsyncIterator, Iterator, List, Optional

from pydantic import Field

from ..core.pagination import aiter_items, aiter_pages, iter_items, iter_pages
from ..core.query import encode_query
from .base import AsyncAPIResource, SyncAPIResource, UTCDateTime, build_params
from .shared import ApiModel, Message, MessagesCursor


class MessageSearchParams(ApiModel):
    """
    Filters for ``GET /v0/search-messages``.

    List fields are sent as ``accountIDs[0]=...&accountIDs[1]=...``;
    field order below is the order of the query string.
    """

    account_ids: List[str] = Field(default_factory=list, alias="accountIDs")
    chat_ids: List[str] = Field(default_factory=list, alias="chatIDs")
    chat_type: Optional[str] = Field(default=None, alias="chatType")
    cursor: Optional[str] = None
    date_after: Optional[UTCDateTime] = Field(default=None, alias="dateAfter")
    date_before: Optional[UTCDateTime] = Field(default=None, alias="dateBefore")
    direction: Optional[str] = None
    exclude_low_priority: Optional[bool] = Field(default=None, alias="excludeLowPriority")
    include_muted: Optional[bool] = Field(default=None, alias="includeMuted")
    limit: Optional[int] = None
    media_types: List[str] = Field(default_factory=list, alias="mediaTypes")
    query: Optional[str] = None
    sender_ids: List[str] = Field(default_factory=list, alias="senderIDs")


class MessageSendParams(ApiModel):
    chat_id: str = Field(alias="chatID")
    text: str
    reply_to_id: Optional[str] = Field(default=None, alias="replyToId")
    attachment: Optional[str] = None


class MessageSendResponse(ApiModel):
    message_id: str = Field(alias="messageID")
    deeplink: str
    success: bool
    error: Optional[str] = None


class Messages(SyncAPIResource):
    def search(self, params: Optional[MessageSearchParams] = None, **kwargs) -> MessagesCursor:
        """
        Fetch one page of messages.

        Example:
            >>> page = client.messages.search(chat_ids=["!abc:beeper.local"], limit=25)
        """
        params = build_params(MessageSearchParams, params, kwargs)
        return self._client.execute_with_query(
            "GET", "/v0/search-messages", encode_query(params), cast_to=MessagesCursor
        )

    def search_pages(self, params: Optional[MessageSearchParams] = None, **kwargs) -> Iterator[MessagesCursor]:
        return iter_pages(self.search, build_params(MessageSearchParams, params, kwargs))

    def search_all(self, params: Optional[MessageSearchParams] = None, **kwargs) -> Iterator[Message]:
        """Iterate over the messages of every page, in page order."""
        return iter_items(self.search, build_params(MessageSearchParams, params, kwargs))

    def send(self, params: Optional[MessageSendParams] = None, **kwargs) -> MessageSendResponse:
        """
        Send a text message, optionally as a reply or with an attachment.

        Retried like every other call on retryable errors, so a message
        may be delivered twice if the first response was lost.
        """
        params = build_params(MessageSendParams, params, kwargs)
        return self._client.execute("POST", "/v0/send-message", params, cast_to=MessageSendResponse)


class AsyncMessages(AsyncAPIResource):
    async def search(self, params: Optional[MessageSearchParams] = None, **kwargs) -> MessagesCursor:
        params = build_params(MessageSearchParams, params, kwargs)
        return await self._client.execute_with_query(
            "GET", "/v0/search-messages", encode_query(params), cast_to=MessagesCursor
        )

    def search_pages(self, params: Optional[MessageSearchParams] = None, **kwargs) -> AsyncIterator[MessagesCursor]:
        return aiter_pages(self.search, build_params(MessageSearchParams, params, kwargs))

    def search_all(self, params: Optional[MessageSearchParams] = None, **kwargs) -> AsyncIterator[Message]:
        return aiter_items(self.search, build_params(MessageSearchParams, params, kwargs))

    async def send(self, params: Optional[MessageSendParams] = None, **kwargs) -> MessageSendResponse:
        params = build_params(MessageSendParams, params, kwargs)
        return await self._client.execute("POST", "/v0/send-message", params, cast_to=MessageSendResponse)
