"""Resource facades and their request/response models."""

from .accounts import Accounts, AsyncAccounts
from .app import (
    App,
    AppDownloadAssetParams,
    AppDownloadAssetResponse,
    AppOpenParams,
    AppOpenResponse,
    AppSearchParams,
    AppSearchResponse,
    AsyncApp,
    ChatSearchResult,
    MessageSearchResult,
)
from .chats import (
    AsyncChats,
    AsyncReminders,
    ChatArchiveParams,
    ChatCreateParams,
    ChatCreateResponse,
    ChatRetrieveParams,
    Chats,
    ChatSearchParams,
    ReminderCreateParams,
    ReminderDeleteParams,
    Reminders,
)
from .contacts import AsyncContacts, Contacts, ContactSearchParams, ContactSearchResponse
from .messages import (
    AsyncMessages,
    Messages,
    MessageSearchParams,
    MessageSendParams,
    MessageSendResponse,
)
from .shared import (
    Account,
    Attachment,
    AttachmentSize,
    BaseResponse,
    Chat,
    ChatParticipants,
    ChatsCursor,
    ErrorResponse,
    Message,
    MessagesCursor,
    Reaction,
    SortKey,
    User,
)
from .token import AsyncToken, Token, UserInfo

__all__ = [
    # Facades
    "Accounts", "AsyncAccounts",
    "App", "AsyncApp",
    "Chats", "AsyncChats", "Reminders", "AsyncReminders",
    "Contacts", "AsyncContacts",
    "Messages", "AsyncMessages",
    "Token", "AsyncToken",
    # Params / responses
    "AppDownloadAssetParams", "AppDownloadAssetResponse",
    "AppOpenParams", "AppOpenResponse",
    "AppSearchParams", "AppSearchResponse", "ChatSearchResult", "MessageSearchResult",
    "ChatArchiveParams", "ChatCreateParams", "ChatCreateResponse", "ChatRetrieveParams",
    "ChatSearchParams", "ReminderCreateParams", "ReminderDeleteParams",
    "ContactSearchParams", "ContactSearchResponse",
    "MessageSearchParams", "MessageSendParams", "MessageSendResponse",
    "UserInfo",
    # Shared
    "Account", "Attachment", "AttachmentSize", "BaseResponse", "Chat", "ChatParticipants",
    "ChatsCursor", "ErrorResponse", "Message", "MessagesCursor", "Reaction", "SortKey", "User",
]
