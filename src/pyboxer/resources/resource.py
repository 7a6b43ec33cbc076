"""Resource helper base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from pyboxer.errors.meta import BoxDecodeError
from pyboxer.resources.tracking import ChangeTracker, build_selective_payload

if TYPE_CHECKING:
    import sys
    from collections.abc import Iterable

    from pyboxer.clients.request import ResponseEnvelope
    from pyboxer.config.context import BoxContext

    if sys.version_info < (3, 11):
        from typing_extensions import Self
    else:
        from typing import Self


class Resource(ABC):
    """Helper base class for Box resources.

    A resource is either created empty by the caller with :py:meth:`Resource.new`
    and then filled through its setters, or decoded from an API response.
    Decoded resources never have changed fields, they represent the state on the server.
    Operations never modify the instance they are called on, they return new instances.
    """

    _context: BoxContext
    _tracker: ChangeTracker

    tracked_fields: ClassVar[tuple[str, ...]] = ()
    """The fields that have a setter, in the order they are serialized."""
    required_fields: ClassVar[tuple[str, ...]] = ("id",)
    """Keys that a response must contain to be decoded as this resource."""

    def __init__(self, *args, **kwargs) -> None:
        """Not intended to be initialized directly. Use :py:meth:`Resource.new` or the classmethods of the subclasses."""  # noqa: E501
        self._from_json(*args, **kwargs)

    @abstractmethod
    def _from_json(self, *args, **kwargs) -> None:
        pass

    @classmethod
    def _new_instance(cls, context: BoxContext) -> Self:
        instance = cls.__new__(cls)
        instance._context = context  # noqa: SLF001
        instance._tracker = ChangeTracker(cls.tracked_fields)  # noqa: SLF001
        return instance

    @classmethod
    def new(cls, context: BoxContext) -> Self:
        """Returns an empty resource without changed fields.

        Args:
            context: the box context used for the operations of this resource
        """
        instance = cls._new_instance(context)
        cls.__init__(instance)
        return instance

    @classmethod
    def _create_instance(cls, context: BoxContext, json: Any, response: ResponseEnvelope | None = None) -> Self:  # noqa: ANN401
        """Decodes a json object into a new instance with an empty change tracker.

        Raises:
            BoxDecodeError: if the json does not have the shape of this resource
        """
        if not isinstance(json, dict):
            msg = f"Expected a json object for {cls.__name__}, got {type(json).__name__}."
            raise BoxDecodeError(response=response, info=msg)
        if missing := [k for k in cls.required_fields if json.get(k) is None]:
            msg = f"The json object for {cls.__name__} is missing {', '.join(missing)}."
            raise BoxDecodeError(response=response, info=msg)
        instance = cls._new_instance(context)
        try:
            cls.__init__(instance, **json)
        except (TypeError, ValueError) as e:
            msg = f"Could not decode {cls.__name__}: {e}"
            raise BoxDecodeError(response=response, info=msg) from e
        return instance

    @classmethod
    def _from_response(cls, context: BoxContext, response: ResponseEnvelope) -> Self:
        """Decodes the body of a successful response."""
        try:
            json = response.json()
        except ValueError as e:
            msg = f"The response body is not valid json: {e}"
            raise BoxDecodeError(response=response, info=msg) from e
        return cls._create_instance(context, json, response=response)

    def _set(self, field: str, value: Any) -> Self:  # noqa: ANN401
        setattr(self, field, value)
        self._tracker.mark_changed(field)
        return self

    @property
    def context(self) -> BoxContext:
        """The box context this resource uses for its operations."""
        return self._context

    @property
    def changed_fields(self) -> tuple[str, ...]:
        """The fields that were set through a setter, in registry order."""
        return tuple(self._tracker)

    def is_changed(self, field: str) -> bool:
        """Returns whether the setter for `field` has been called on this instance."""
        return self._tracker.is_changed(field)

    def selective_payload(self, always: Iterable[str] = ()) -> dict[str, Any]:
        """Returns the json body with the changed fields and the `always` fields that have a value.

        See :py:func:`pyboxer.resources.tracking.build_selective_payload`.
        """
        return build_selective_payload(self, self._tracker, always=always)

    def _get_repr_dict(self) -> dict:
        return {k: v for k, v in self.__dict__.items() if v is not None and not k.startswith("_")}

    def __repr__(self):
        return f"<{self.__class__.__name__}({self._get_repr_dict()!s})>"
