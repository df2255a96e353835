"""Accounts: chat networks connected to Beeper Desktop."""

from typing import List

from .base import AsyncAPIResource, SyncAPIResource
from .shared import Account


class Accounts(SyncAPIResource):
    def list(self) -> List[Account]:
        """List every account connected to Beeper Desktop."""
        return self._client.execute("GET", "/v0/get-accounts", cast_to=List[Account])


class AsyncAccounts(AsyncAPIResource):
    async def list(self) -> List[Account]:
        """List every account connected to Beeper Desktop."""
        return await self._client.execute("GET", "/v0/get-accounts", cast_to=List[Account])
