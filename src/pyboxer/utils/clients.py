"""Util functions for the API clients."""

from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING
from urllib.parse import urlencode

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

QueryParams = list[tuple[str, "str | int | bool | None"]]
"""Ordered query parameters, the order is kept in the rendered query string."""


@cache
def build_api_url(url: str, api_version: str, api_path: str) -> str:
    """Cached function for building the api URLs."""
    return url + "/" + api_version + "/" + api_path.lstrip("/")


def build_fields_query_params(fields: Sequence[str] | None) -> QueryParams:
    """Returns the field projection parameter.

    An empty or missing list returns no parameter at all,
    which makes the API respond with its default set of fields.
    """
    if not fields:
        return []
    return [("fields", ",".join(fields))]


def _query_value(value: str | int | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: Iterable[tuple[str, str | int | bool | None]]) -> str:
    """Renders the params in the given order, parameters with a None value are left out.

    Booleans are rendered as ``true``/``false`` and commas stay readable.
    """
    return urlencode([(k, _query_value(v)) for k, v in params if v is not None], safe=",")


def build_url_with_query(url: str, params: Iterable[tuple[str, str | int | bool | None]] | None) -> str:
    """Appends the encoded query string to url, if there is one."""
    if params and (query := encode_query(params)):
        return url + "?" + query
    return url
