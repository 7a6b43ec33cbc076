"""Base classes for all pyboxer exceptions/errors."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pyboxer.clients.request import RequestEnvelope, ResponseEnvelope


class BoxerError(Exception):
    """Base class for every error raised by pyboxer.

    Catch all pyboxer errors:

    .. code-block:: python

        try:
            user.create()  # raise UserLoginAlreadyUsedError or any other
        except BoxerError:
            print("Some pyboxer error")

    """


class RequestAlreadySentError(BoxerError):
    """Raised when a request envelope is sent a second time."""

    def __init__(self, request: RequestEnvelope) -> None:
        self.request = request
        super().__init__(f"{request!r} has already been sent, build a new request instead.")


class BoxTransportError(BoxerError):
    """The request could not be sent or no response was received.

    The original :py:mod:`requests` exception is available as ``__cause__``.
    """

    def __init__(self, request: RequestEnvelope, info: str | None = None) -> None:
        self.request = request
        self.info = info
        msg = f"Could not complete {request.method} request to {request.url}"
        if info:
            msg += f": {info}"
        super().__init__(msg)


class BoxAPIError(BoxerError):
    """Parent class for all errors caused by a response of the Box API.

    All "child" errors can be caught with this parent class e.g.:

    .. code-block:: python

        try:
            user.update()  # could raise UserNotFoundError or StatusMismatchError
        except BoxAPIError as e:
            print(e)

    The parameters of the error envelope sent by the API are available as attributes,
    e.g. ``e.code``, ``e.request_id`` or ``e.help_url``.
    """

    message = "Details about the Box API error:\n"
    expected_status: int | None = None

    def __init__(self, response: ResponseEnvelope | None = None, info: str | None = None, **kwargs) -> None:
        """Initialize a Box API error.

        Args:
            response: the response envelope where the API error occured
            info: add additional information to this error
            kwargs: error specific parameters which may contain more information about the error
        """
        self.response = response
        self.request = response.request if response is not None else None
        self.kwargs = kwargs
        self.info = info
        if api_message := self.kwargs.get("message"):
            # shown as the error message, not again as a parameter
            self.message = api_message
            del self.kwargs["message"]
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        term_size = shutil.get_terminal_size().columns
        msg = self.message
        if self.info:
            msg += f"\n{self.info}\n"
        else:
            msg += "\n"
        request_sep = "-" * int((term_size - 7) / 2)
        msg += request_sep + "REQUEST" + request_sep + "\n"
        if self.request is not None:
            msg += "METHOD = " + self.request.method + "\n"
            if ct := self.request.headers.get("content-type"):
                msg += "CONTENT-TYPE = " + ct + "\n"
            msg += "ENDPOINT = " + self.request.url + "\n"

        if len(self.kwargs) > 0:
            param_sep = "-" * int((term_size - 10) / 2)
            msg += param_sep + "PARAMETERS" + param_sep + "\n"
            for k, v in self.kwargs.items():
                msg += str(k) + " = " + str(v) + "\n"

        response_sep = "-" * int((term_size - 8) / 2)
        msg += response_sep + "RESPONSE" + response_sep + "\n"

        if (code := self.kwargs.get("code")) and (rid := self.kwargs.get("request_id")):
            msg += f"ERROR_CODE = {code}\nREQUEST_ID = {rid}\n"

        if self.response is not None:
            msg += f"STATUS = {self.response.status_code}\n"
        if self.expected_status is not None:
            msg += f"EXPECTED_STATUS = {self.expected_status}\n"
        return msg

    def __dir__(self):
        yield from super().__dir__()
        yield from self.kwargs.keys()

    def __getattr__(self, name: str):
        # only called if normal attribute lookup failed
        kwargs = self.__dict__.get("kwargs")
        if kwargs is not None and name in kwargs:
            return kwargs[name]
        raise AttributeError(name)


class StatusMismatchError(BoxAPIError):
    """The API responded, but not with the single status code expected for the operation.

    Carries the structured error envelope parameters when the body contained one,
    otherwise only the raw status code and body.
    """

    message = "The Box API responded with an unexpected status code."

    def __init__(
        self,
        response: ResponseEnvelope | None = None,
        info: str | None = None,
        expected_status: int | None = None,
        **kwargs,
    ) -> None:
        self.expected_status = int(expected_status) if expected_status is not None else None
        self.status_code = response.status_code if response is not None else None
        self.raw_body = response.content if response is not None else None
        super().__init__(response=response, info=info, **kwargs)


class BoxDecodeError(BoxAPIError):
    """The API accepted the operation, but the response body could not be decoded."""

    message = "The Box API response could not be decoded."
