"""Change tracking for resource fields and the selective payload built from it."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pyboxer.utils.misc import to_json_value

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class ChangeTracker:
    """Records which fields of a resource instance were explicitly set.

    Only fields of the registry passed on creation can be tracked.
    A field can be marked but never unmarked, marking twice has no further effect.
    Not thread-safe, one owner mutates an instance until it is submitted.
    """

    __slots__ = ("_fields", "_changed")

    def __init__(self, fields: Iterable[str]) -> None:
        self._fields = tuple(fields)
        self._changed: set[str] = set()

    @property
    def fields(self) -> tuple[str, ...]:
        """The fields that can be tracked, in registry order."""
        return self._fields

    def mark_changed(self, field: str) -> None:
        """Marks `field` as changed.

        Raises:
            ValueError: if the field is not in the registry
        """
        if field not in self._fields:
            msg = f"'{field}' is not a tracked field, valid fields are {self._fields}"
            raise ValueError(msg)
        self._changed.add(field)

    def is_changed(self, field: str) -> bool:
        """Returns whether `field` was marked as changed."""
        return field in self._changed

    def __contains__(self, field: object) -> bool:
        return field in self._changed

    def __iter__(self) -> Iterator[str]:
        return (f for f in self._fields if f in self._changed)

    def __len__(self) -> int:
        return len(self._changed)

    def __bool__(self) -> bool:
        return bool(self._changed)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({list(self)})>"


def build_selective_payload(
    source: object,
    tracker: ChangeTracker,
    always: Iterable[str] = (),
) -> dict[str, Any]:
    """Builds the json body of a create or update request.

    Contains the fields in `always` whose value is not None,
    and every changed field with its current value, even if that value is None, empty or zero.
    Fields that were not changed are never part of the payload,
    the API would otherwise overwrite them on the server.

    Args:
        source: the object to read the attribute values from
        tracker: the change tracker of `source`
        always: identity fields that are sent whenever they have a value
    """
    always = tuple(always)
    payload = {}
    for field in always:
        if field not in tracker.fields and (value := getattr(source, field)) is not None:
            payload[field] = to_json_value(value)
    for field in tracker.fields:
        if field in always:
            value = getattr(source, field)
            if value is not None or tracker.is_changed(field):
                payload[field] = to_json_value(value)
        elif tracker.is_changed(field):
            payload[field] = to_json_value(getattr(source, field))
    return payload
