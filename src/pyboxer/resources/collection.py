"""Paginated collection of resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pyboxer.errors.meta import BoxDecodeError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pyboxer.clients.request import ResponseEnvelope
    from pyboxer.config.context import BoxContext
    from pyboxer.resources.resource import Resource

R = TypeVar("R", bound="Resource")

COLLECTION_INT_KEYS = ("total_count", "offset", "limit")


@dataclass
class PaginatedCollection(Generic[R]):
    """One page of a list response.

    The entries keep the order of the server,
    ``offset + len(entries) <= total_count`` is what the server promises, it is not checked.
    """

    offset: int
    limit: int
    total_count: int
    entries: list[R] = field(default_factory=list)

    @classmethod
    def from_json(
        cls,
        context: BoxContext,
        json: Any,  # noqa: ANN401
        entry_class: type[R],
        response: ResponseEnvelope | None = None,
    ) -> PaginatedCollection[R]:
        """Decodes the collection envelope, every entry gets the context attached.

        Raises:
            BoxDecodeError: if the json is not a collection envelope
        """
        if not isinstance(json, dict):
            msg = f"Expected a collection json object, got {type(json).__name__}."
            raise BoxDecodeError(response=response, info=msg)
        for key in COLLECTION_INT_KEYS:
            if not isinstance(json.get(key), int) or isinstance(json.get(key), bool):
                msg = f"The collection is missing the integer '{key}'."
                raise BoxDecodeError(response=response, info=msg)
        if not isinstance(entries := json.get("entries"), list):
            msg = "The collection is missing the 'entries' list."
            raise BoxDecodeError(response=response, info=msg)
        return cls(
            offset=json["offset"],
            limit=json["limit"],
            total_count=json["total_count"],
            entries=[
                entry_class._create_instance(context, entry, response=response)  # noqa: SLF001
                for entry in entries
            ],
        )

    @classmethod
    def from_response(
        cls, context: BoxContext, response: ResponseEnvelope, entry_class: type[R]
    ) -> PaginatedCollection[R]:
        """Decodes the body of a successful list response."""
        try:
            json = response.json()
        except ValueError as e:
            msg = f"The response body is not valid json: {e}"
            raise BoxDecodeError(response=response, info=msg) from e
        return cls.from_json(context, json, entry_class, response=response)

    @property
    def next_offset(self) -> int:
        """The offset of the page after this one."""
        return self.offset + len(self.entries)

    @property
    def has_more(self) -> bool:
        """Whether the server has entries after this page."""
        return len(self.entries) > 0 and self.next_offset < self.total_count

    def __iter__(self) -> Iterator[R]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> R:
        return self.entries[index]
