"""Token: introspection of the access token in use."""

from typing import Optional

from .base import AsyncAPIResource, SyncAPIResource
from .shared import ApiModel


class UserInfo(ApiModel):
    """Information about the authenticated token (OAuth userinfo)."""

    iat: int
    scope: str
    sub: str
    token_use: str
    aud: Optional[str] = None
    client_id: Optional[str] = None
    exp: Optional[int] = None

    @property
    def scopes(self) -> list:
        """Granted scopes as a list."""
        return self.scope.split()


class Token(SyncAPIResource):
    def info(self) -> UserInfo:
        """Return information about the token used by this client."""
        return self._client.execute("GET", "/oauth/userinfo", cast_to=UserInfo)


class AsyncToken(AsyncAPIResource):
    async def info(self) -> UserInfo:
        """Return information about the token used by this client."""
        return await self._client.execute("GET", "/oauth/userinfo", cast_to=UserInfo)
