"""Contacts: user lookup within one account."""

from typing import List, Optional

from pydantic import Field

from ..core.query import encode_query
from .base import AsyncAPIResource, SyncAPIResource, build_params
from .shared import ApiModel, User


class ContactSearchParams(ApiModel):
    account_id: str = Field(alias="accountID")
    query: str


class ContactSearchResponse(ApiModel):
    items: List[User]


class Contacts(SyncAPIResource):
    def search(self, params: Optional[ContactSearchParams] = None, **kwargs) -> ContactSearchResponse:
        """
        Search users reachable through one account.

        Example:
            >>> client.contacts.search(account_id="whatsapp", query="alice")
        """
        params = build_params(ContactSearchParams, params, kwargs)
        return self._client.execute_with_query(
            "GET", "/v0/search-users", encode_query(params), cast_to=ContactSearchResponse
        )


class AsyncContacts(AsyncAPIResource):
    async def search(self, params: Optional[ContactSearchParams] = None, **kwargs) -> ContactSearchResponse:
        params = build_params(ContactSearchParams, params, kwargs)
        return await self._client.execute_with_query(
            "GET", "/v0/search-users", encode_query(params), cast_to=ContactSearchResponse
        )
