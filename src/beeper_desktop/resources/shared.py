"""
Shared data models of the Beeper Desktop API.

Plain DTOs: Python attribute names are snake_case, wire names are the
camelCase aliases. Models accept either form on construction.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from ..core.error_handler import ErrorResponse
from ..core.pagination import Cursor, PaginationInfo

# Documented as "string or number"; both forms are kept as sent
SortKey = Union[StrictStr, StrictInt]


class ApiModel(BaseModel):
    """Base for every request and response model."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        """Dump with wire names, skipping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class AttachmentSize(ApiModel):
    height: Optional[int] = None
    width: Optional[int] = None


class Attachment(ApiModel):
    """File attached to a message."""

    type: str = Field(description="unknown, img, video or audio")
    duration: Optional[int] = None
    file_name: Optional[str] = Field(default=None, alias="fileName")
    file_size: Optional[int] = Field(default=None, alias="fileSize")
    is_gif: Optional[bool] = Field(default=None, alias="isGif")
    is_sticker: Optional[bool] = Field(default=None, alias="isSticker")
    is_voice_note: Optional[bool] = Field(default=None, alias="isVoiceNote")
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    poster_img: Optional[str] = Field(default=None, alias="posterImg")
    size: Optional[AttachmentSize] = None
    src_url: Optional[str] = Field(default=None, alias="srcURL")


class BaseResponse(ApiModel):
    """Plain ``{success, error}`` acknowledgement."""

    success: bool
    error: Optional[str] = None


class Reaction(ApiModel):
    id: str
    participant_id: str = Field(alias="participantID")
    reaction_key: str = Field(alias="reactionKey")
    emoji: Optional[bool] = None
    img_url: Optional[str] = Field(default=None, alias="imgURL")


class User(ApiModel):
    """A person on, or reachable through, Beeper."""

    id: str
    cannot_message: Optional[bool] = Field(default=None, alias="cannotMessage")
    email: Optional[str] = None
    full_name: Optional[str] = Field(default=None, alias="fullName")
    img_url: Optional[str] = Field(default=None, alias="imgURL")
    is_self: Optional[bool] = Field(default=None, alias="isSelf")
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    username: Optional[str] = None


class Message(ApiModel):
    id: str
    account_id: str = Field(alias="accountID")
    chat_id: str = Field(alias="chatID")
    message_id: str = Field(alias="messageID")
    sender_id: str = Field(alias="senderID")
    sort_key: SortKey = Field(alias="sortKey")
    timestamp: datetime
    attachments: Optional[List[Attachment]] = None
    is_sender: Optional[bool] = Field(default=None, alias="isSender")
    is_unread: Optional[bool] = Field(default=None, alias="isUnread")
    reactions: Optional[List[Reaction]] = None
    sender_name: Optional[str] = Field(default=None, alias="senderName")
    text: Optional[str] = None


class ChatParticipants(ApiModel):
    has_more: bool = Field(alias="hasMore")
    items: List[User]
    total: int


class Chat(ApiModel):
    id: str
    account_id: str = Field(alias="accountID")
    network: str
    title: str
    type: str = Field(description="single or group")
    unread_count: int = Field(alias="unreadCount")
    participants: ChatParticipants
    is_archived: Optional[bool] = Field(default=None, alias="isArchived")
    is_muted: Optional[bool] = Field(default=None, alias="isMuted")
    is_pinned: Optional[bool] = Field(default=None, alias="isPinned")
    last_activity: Optional[str] = Field(default=None, alias="lastActivity")
    last_read_message_sort_key: Optional[SortKey] = Field(default=None, alias="lastReadMessageSortKey")
    local_chat_id: Optional[str] = Field(default=None, alias="localChatID")


class Account(ApiModel):
    """A chat account added to Beeper (one per connected network login)."""

    account_id: str = Field(alias="accountID")
    network: str
    user: User


MessagesCursor = Cursor[Message]
ChatsCursor = Cursor[Chat]

__all__ = [
    "SortKey",
    "ApiModel",
    "Attachment",
    "AttachmentSize",
    "BaseResponse",
    "ErrorResponse",
    "Reaction",
    "User",
    "Message",
    "ChatParticipants",
    "Chat",
    "Account",
    "Cursor",
    "PaginationInfo",
    "MessagesCursor",
    "ChatsCursor",
]
