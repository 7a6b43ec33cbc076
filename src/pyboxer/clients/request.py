"""Request and response envelopes passed between the API clients and the transport."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from requests.structures import CaseInsensitiveDict

if TYPE_CHECKING:
    from collections.abc import Mapping

    import requests


class RequestEnvelope:
    """A fully constructed request, ready to be sent exactly once.

    Attributes are read-only, building a new request is cheap and
    :py:func:`pyboxer.clients.context_client.send_request` refuses to send an envelope twice.
    """

    __slots__ = ("_method", "_url", "_body", "_headers", "_sent")

    def __init__(
        self,
        method: str,
        url: str,
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._method = method.upper()
        self._url = url
        self._body = body
        self._headers = CaseInsensitiveDict(headers or {})
        self._sent = False

    @property
    def method(self) -> str:
        """The HTTP method."""
        return self._method

    @property
    def url(self) -> str:
        """The absolute URL, including the query string."""
        return self._url

    @property
    def body(self) -> bytes | None:
        """The request body."""
        return self._body

    @property
    def headers(self) -> CaseInsensitiveDict[str]:
        """A copy of the request headers."""
        return CaseInsensitiveDict(self._headers)

    @property
    def sent(self) -> bool:
        """Whether this request has already been handed to the transport."""
        return self._sent

    def json(self) -> Any:  # noqa: ANN401
        """Returns the decoded json body or None if the request has no body."""
        if self._body is None:
            return None
        return json.loads(self._body)

    def mark_sent(self) -> None:
        """Marks the envelope as sent, only called by the transport."""
        self._sent = True

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({self._method} {self._url})>"


class ResponseEnvelope:
    """The response to a :py:class:`RequestEnvelope`."""

    def __init__(
        self,
        request: RequestEnvelope,
        status_code: int,
        headers: Mapping[str, str],
        content: bytes,
        rtt_in_millis: int = 0,
        raw: requests.Response | None = None,
    ) -> None:
        self.request = request
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers)
        self.content = content
        self.rtt_in_millis = rtt_in_millis
        self.raw = raw

    @classmethod
    def from_requests_response(
        cls, request: RequestEnvelope, response: requests.Response, rtt_in_millis: int
    ) -> ResponseEnvelope:
        """Creates the envelope from a :py:class:`requests.Response`, reads the whole body."""
        return cls(
            request=request,
            status_code=response.status_code,
            headers=response.headers,
            content=response.content,
            rtt_in_millis=rtt_in_millis,
            raw=response,
        )

    @property
    def content_type(self) -> str | None:
        """The content type header of the response."""
        return self.headers.get("content-type")

    @property
    def text(self) -> str:
        """The body decoded as utf-8, undecodable bytes are replaced."""
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:  # noqa: ANN401
        """Decodes the body as json, raises :py:class:`ValueError` if it is not valid json."""
        return json.loads(self.content)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(status={self.status_code}, request={self.request!r})>"
