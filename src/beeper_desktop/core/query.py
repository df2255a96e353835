"""
Query string encoding for GET endpoints.

Turns a parameter record into an ordered list of ``(name, value)`` string
pairs. Lists use the indexed convention ``name[0]``, ``name[1]``, ...
Percent-encoding is NOT done here; it happens once, when the URL is built.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, List, Mapping, Tuple, Union

from pydantic import BaseModel

QueryPairs = List[Tuple[str, str]]


def format_datetime(value: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with a ``Z`` suffix.

    Naive datetimes are treated as already being in UTC.

    Example:
        >>> format_datetime(datetime(2024, 1, 2, 3, 4, 5))
        '2024-01-02T03:04:05Z'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(tzinfo=None).isoformat() + "Z"


def format_scalar(value: Any) -> str:
    """Render a single scalar value the way the API expects it."""
    # bool before int: bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, Enum):
        return format_scalar(value.value)
    return str(value)


def indexed_pairs(name: str, values: Iterable[Any]) -> QueryPairs:
    """
    Expand a sequence into indexed query pairs.

    Example:
        >>> indexed_pairs("ids", ["a", "b"])
        [('ids[0]', 'a'), ('ids[1]', 'b')]
        >>> indexed_pairs("ids", [])
        []
    """
    return [(f"{name}[{i}]", format_scalar(v)) for i, v in enumerate(values)]


def _iter_fields(params: Union[BaseModel, Mapping[str, Any]]) -> Iterable[Tuple[str, Any]]:
    if isinstance(params, BaseModel):
        for field_name, field_info in type(params).model_fields.items():
            yield field_info.alias or field_name, getattr(params, field_name)
    else:
        yield from params.items()


def encode_query(params: Union[BaseModel, Mapping[str, Any], None]) -> QueryPairs:
    """
    Encode a parameter record into ordered query pairs.

    Fields are visited in declaration order (mapping insertion order for
    plain dicts) and keyed by their wire name. Rules:

    - ``None`` is omitted
    - ``bool`` -> ``"true"`` / ``"false"``
    - ``int`` -> base-10
    - ``datetime`` -> ISO-8601 UTC
    - list/tuple -> ``name[i]`` pairs, nothing for an empty list

    Example:
        >>> encode_query({"accountIDs": ["a", "b"], "limit": 25, "query": None})
        [('accountIDs[0]', 'a'), ('accountIDs[1]', 'b'), ('limit', '25')]
    """
    if params is None:
        return []

    pairs: QueryPairs = []
    for name, value in _iter_fields(params):
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend(indexed_pairs(name, value))
        else:
            pairs.append((name, format_scalar(value)))
    return pairs
