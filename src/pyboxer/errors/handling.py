"""Classifies API responses and raises the matching pyboxer errors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pyboxer.errors.meta import StatusMismatchError
from pyboxer.errors.users import (
    BadRequestError,
    ConflictError,
    InsufficientPermissionsError,
    UserHasContentError,
    UserLoginAlreadyUsedError,
    UserNotFoundError,
)

if TYPE_CHECKING:
    from pyboxer.clients.request import ResponseEnvelope


DEFAULT_ERROR_MAPPING: dict[str | None, type[StatusMismatchError]] = {
    None: StatusMismatchError,
    "user_login_already_used": UserLoginAlreadyUsedError,
    "not_found": UserNotFoundError,
    "user_delete_has_content": UserHasContentError,
    "user_has_content": UserHasContentError,
    "access_denied_insufficient_permissions": InsufficientPermissionsError,
    "insufficient_scope": InsufficientPermissionsError,
    "bad_request": BadRequestError,
    "conflict": ConflictError,
}
"""This mapping maps the error codes coming from the API to the pyboxer classes."""

ERROR_ENVELOPE_KEYS = ("code", "message", "help_url", "request_id", "context_info")


def parse_error_envelope(response: ResponseEnvelope) -> dict | None:
    """Best-effort decode of the Box error envelope.

    Returns the envelope parameters as exception kwargs,
    or None if the body is not a recognizable error object.
    """
    try:
        error_response = response.json()
    except ValueError:
        return None
    if not isinstance(error_response, dict):
        return None
    if error_response.get("type") != "error" and not ("code" in error_response and "status" in error_response):
        return None
    kwargs = {k: error_response[k] for k in ERROR_ENVELOPE_KEYS if error_response.get(k) is not None}
    # code is looked up in the error mapping and message becomes the exception message
    for k in ("code", "message"):
        if k in kwargs and not isinstance(kwargs[k], str):
            kwargs[k] = str(kwargs[k])
    if (status := error_response.get("status")) is not None:
        kwargs["error_status"] = status
    return kwargs


class ErrorHandlingConfig:
    """Configuration for Box API error handling."""

    def __init__(
        self,
        api_error_mapping: dict[str | int, type[StatusMismatchError]] | type[StatusMismatchError] | None = None,
        info: str | None = None,
        **kwargs,
    ):
        """Configuration for Box API error handling.

        Args:
            api_error_mapping: Either a dictionary which maps either status codes
                or error codes to python Exception classes,
                or just a python exception class to use it for every unexpected status code.
            info: additionial information about the error, passed to the constructor of the Exception
            kwargs: will be passed to the constructor of the Exception
        """
        self.api_error_mapping = api_error_mapping
        self.kwargs = kwargs
        self.info = info

    def get_exception_class(
        self, response: ResponseEnvelope, expected_status: int, envelope: dict | None = None
    ) -> type[StatusMismatchError] | None:
        """Returns the python exception class for the response, None if the status is the expected one."""
        if response.status_code == expected_status:
            return None
        error_code = envelope.get("code") if envelope else None
        if self.api_error_mapping is not None:
            if not isinstance(self.api_error_mapping, dict):
                return self.api_error_mapping
            if status_exception := self.api_error_mapping.get(response.status_code):
                return status_exception
            if error_code and (exc := self.api_error_mapping.get(error_code)):
                return exc
        if error_code and (exc := DEFAULT_ERROR_MAPPING.get(error_code)):
            return exc
        return DEFAULT_ERROR_MAPPING[None]

    def get_exception(self, response: ResponseEnvelope, expected_status: int) -> StatusMismatchError | None:
        """Returns exception determined by :py:meth:`ErrorHandlingConfig.get_exception_class` filled out with the response and kwargs."""  # noqa: E501
        if response.status_code == expected_status:
            return None
        envelope = parse_error_envelope(response)
        exc = self.get_exception_class(response, expected_status, envelope)
        if exc is None:
            return None
        kwargs = {**(envelope or {}), **self.kwargs}
        return exc(response=response, info=self.info, expected_status=expected_status, **kwargs)


def raise_box_api_error(
    response: ResponseEnvelope,
    expected_status: int,
    error_handling: ErrorHandlingConfig | Literal[False] | None = None,
):
    """Raise a Box API error through the ErrorHandlingConfig.

    Convenience function around ErrorHandlingConfig.get_exception.
    Every operation has exactly one success status, any other status raises,
    including other 2xx codes.
    """
    if error_handling is not False and (
        exc := (error_handling or ErrorHandlingConfig()).get_exception(response, expected_status)
    ):
        raise exc
