"""Query-string parameter encoding.

These functions are pure: each takes a URL and returns a new URL with the
parameter appended. The HTTP client builds every request URL through them,
and the simulation's query engine interprets the same options.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Type
from urllib.parse import quote_plus

from ..models.enums import WIRE_NAMES
from ..utils.time import format_round_trip

KEYSET_ORDER_KEY = "id"

WireNameTable = Mapping[Type[Enum], Dict[Enum, str]]


def wire_name(member: Enum, wire_names: WireNameTable = WIRE_NAMES) -> str:
    """Return the declared wire name for an enum member, else its own name."""
    table = wire_names.get(type(member)) or {}
    declared = table.get(member)
    if declared is not None:
        return declared
    return member.name


def _format_value(value: Any, wire_names: WireNameTable) -> str:
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return wire_name(value, wire_names)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, datetime):
        return format_round_trip(value)
    if isinstance(value, (list, tuple)):
        return ",".join(_format_value(v, wire_names) for v in value)
    return str(value)


def _append(url: str, name: str, string_value: str) -> str:
    operator = "?" if "?" not in url else "&"
    return f"{url}{operator}{name}={quote_plus(string_value)}"


def add_parameter(url: str, name: str, value: Any, wire_names: WireNameTable = WIRE_NAMES) -> str:
    """
    Append name=value to url.

    None leaves the url unchanged. Enums go through the wire-name table,
    datetimes are rendered round-trippably, and lists of scalars are
    comma-joined. Use add_array_parameter for repeated name[]=value pairs.
    """
    if value is None:
        return url
    return _append(url, name, _format_value(value, wire_names))


def add_array_parameter(
    url: str,
    name: str,
    values: Optional[Iterable[Any]],
    wire_names: WireNameTable = WIRE_NAMES,
) -> str:
    """Append one name[]=value pair per element, in input order."""
    if values is None:
        return url
    for value in values:
        url = _append(url, f"{name}[]", _format_value(value, wire_names))
    return url


def add_order_by(
    url: str,
    order_by: Any = None,
    support_keyset_pagination: bool = True,
) -> str:
    """
    Append ordering parameters.

    Default (or id) ordering switches to keyset pagination
    (order_by=id&pagination=keyset) unless keyset support is turned off;
    any other key is sent as a plain order_by parameter.
    """
    key = wire_name(order_by) if isinstance(order_by, Enum) else order_by
    if support_keyset_pagination and (not key or key == KEYSET_ORDER_KEY):
        url = add_parameter(url, "order_by", KEYSET_ORDER_KEY)
        return add_parameter(url, "pagination", "keyset")
    # An empty key with keyset support off sends no order_by at all.
    return add_parameter(url, "order_by", key or None)


def add_page_params(url: str, page: Optional[int] = None, per_page: Optional[int] = None) -> str:
    """Append page / per_page when given."""
    url = add_parameter(url, "page", page)
    return add_parameter(url, "per_page", per_page)
