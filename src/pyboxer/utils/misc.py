"""These are miscellaneous utility functions."""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Any


def parse_iso(iso_str: str) -> datetime:
    """Parses iso string to datetime.

    The Box API sends timestamps like ``2012-12-12T10:53:43-08:00``.
    """
    if sys.version_info < (3, 11) and iso_str.endswith("Z"):
        iso_str = iso_str[:-1] + "+00:00"
    return datetime.fromisoformat(iso_str)


def to_json_value(value: Any) -> Any:  # noqa: ANN401
    """Converts values that :py:mod:`json` can't serialize on its own."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return [to_json_value(v) for v in value]
    if isinstance(value, list):
        return [to_json_value(v) for v in value]
    if isinstance(value, dict):
        return {k: to_json_value(v) for k, v in value.items()}
    return value
