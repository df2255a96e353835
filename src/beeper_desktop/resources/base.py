"""Base classes for the resource facades."""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated, Any, Dict, Optional, Type, TypeVar

from pydantic import PlainSerializer

from ..core.query import format_datetime

if TYPE_CHECKING:
    from ..async_client import AsyncBeeperDesktop
    from ..client import BeeperDesktop

ParamsT = TypeVar("ParamsT")

# Datetime sent as ISO-8601 UTC ("...Z") in JSON bodies, same as in query strings
UTCDateTime = Annotated[datetime, PlainSerializer(format_datetime, return_type=str)]


def build_params(model: Type[ParamsT], params: Optional[ParamsT], kwargs: Dict[str, Any]) -> ParamsT:
    """
    Accept either a ready params model or keyword arguments.

    Example:
        >>> build_params(ChatSearchParams, None, {"query": "team"})
        ChatSearchParams(account_ids=None, ..., query='team')
    """
    if params is not None:
        if kwargs:
            raise TypeError(f"pass either a {model.__name__} or keyword arguments, not both")
        return params
    return model(**kwargs)


class SyncAPIResource:
    def __init__(self, client: "BeeperDesktop"):
        self._client = client


class AsyncAPIResource:
    def __init__(self, client: "AsyncBeeperDesktop"):
        self._client = client
