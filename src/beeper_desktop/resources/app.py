"""App: global search, opening the desktop app and downloading assets."""

from typing import List, Optional

from pydantic import Field

from ..core.query import encode_query
from .base import AsyncAPIResource, SyncAPIResource, build_params
from .shared import ApiModel, Chat, Message, User


class AppDownloadAssetParams(ApiModel):
    asset_url: str = Field(alias="assetUrl")


class AppDownloadAssetResponse(ApiModel):
    local_path: str = Field(alias="localPath")
    success: bool
    error: Optional[str] = None


class AppOpenParams(ApiModel):
    """Every field is optional: with none set the app is just focused."""

    chat_id: Optional[str] = Field(default=None, alias="chatId")
    message_id: Optional[str] = Field(default=None, alias="messageId")
    draft_text: Optional[str] = Field(default=None, alias="draftText")
    draft_attachment: Optional[str] = Field(default=None, alias="draftAttachment")


class AppOpenResponse(ApiModel):
    success: bool
    error: Optional[str] = None


class AppSearchParams(ApiModel):
    query: str
    account_ids: Optional[List[str]] = Field(default=None, alias="accountIDs")
    chat_type: Optional[str] = Field(default=None, alias="chatType")
    include_muted: Optional[bool] = Field(default=None, alias="includeMuted")
    limit: Optional[int] = None
    message_limit: Optional[int] = Field(default=None, alias="messageLimit")
    participant_limit: Optional[int] = Field(default=None, alias="participantLimit")


class ChatSearchResult(ApiModel):
    chat: Chat
    participants: List[User]
    messages: List[Message]


class MessageSearchResult(ApiModel):
    message: Message
    chat: Chat


class AppSearchResponse(ApiModel):
    chats: List[ChatSearchResult]
    messages: List[MessageSearchResult]


class App(SyncAPIResource):
    def download_asset(self, params: Optional[AppDownloadAssetParams] = None, **kwargs) -> AppDownloadAssetResponse:
        """Ask the desktop app to download an ``mxc://`` asset and return its local path."""
        params = build_params(AppDownloadAssetParams, params, kwargs)
        return self._client.execute("POST", "/v0/download-asset", params, cast_to=AppDownloadAssetResponse)

    def open(self, params: Optional[AppOpenParams] = None, **kwargs) -> AppOpenResponse:
        """Bring Beeper Desktop to the front, optionally at a chat, a message or with a draft."""
        params = build_params(AppOpenParams, params, kwargs)
        return self._client.execute("POST", "/v0/open-app", params, cast_to=AppOpenResponse)

    def search(self, params: Optional[AppSearchParams] = None, **kwargs) -> AppSearchResponse:
        """Search chats and messages at once."""
        params = build_params(AppSearchParams, params, kwargs)
        return self._client.execute_with_query("GET", "/v0/search", encode_query(params), cast_to=AppSearchResponse)


class AsyncApp(AsyncAPIResource):
    async def download_asset(self, params: Optional[AppDownloadAssetParams] = None, **kwargs) -> AppDownloadAssetResponse:
        params = build_params(AppDownloadAssetParams, params, kwargs)
        return await self._client.execute("POST", "/v0/download-asset", params, cast_to=AppDownloadAssetResponse)

    async def open(self, params: Optional[AppOpenParams] = None, **kwargs) -> AppOpenResponse:
        params = build_params(AppOpenParams, params, kwargs)
        return await self._client.execute("POST", "/v0/open-app", params, cast_to=AppOpenResponse)

    async def search(self, params: Optional[AppSearchParams] = None, **kwargs) -> AppSearchResponse:
        params = build_params(AppSearchParams, params, kwargs)
        return await self._client.execute_with_query(
            "GET", "/v0/search", encode_query(params), cast_to=AppSearchResponse
        )
