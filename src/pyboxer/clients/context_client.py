"""HTTP client implementation for the context, the transport used by every API client."""

from __future__ import annotations

import logging
import numbers
import os
import time
from pathlib import Path
from typing import TYPE_CHECKING

import requests

from pyboxer.clients.request import ResponseEnvelope
from pyboxer.errors.meta import BoxTransportError, RequestAlreadySentError

if TYPE_CHECKING:
    from os import PathLike

    from requests import Response
    from requests.sessions import _Timeout  # type: ignore[attr-defined]

    from pyboxer.clients.request import RequestEnvelope


DEFAULT_TIMEOUT = (60, None)
LOGGER = logging.getLogger(__name__)


class ContextHTTPClient(requests.Session):
    """Requests Session with the CA bundle and debug logging of the config."""

    def __init__(self, debug: bool = False, requests_ca_bundle: PathLike[str] | str | None = None) -> None:
        self.debug = debug
        super().__init__()
        if requests_ca_bundle is not None and Path(requests_ca_bundle).is_file():
            self.verify = os.fspath(requests_ca_bundle)

        self._counter = 0

    def request(self, method: str | bytes, url: str | bytes, *args, **kwargs) -> Response:
        """Same as :py:meth:`requests.Session.request`, logs request and response if debug is enabled."""
        if not self.debug:
            return super().request(method, url, *args, **kwargs)

        self._counter = count = self._counter + 1
        LOGGER.debug(f"(r{count}) Making {method!s} request to {url!s}")  # noqa: G004
        response = super().request(method, url, *args, **kwargs)
        LOGGER.debug(
            f"(r{count}) Got response status={response.status_code}, "  # noqa: G004
            f"content_type={response.headers.get('content-type')}, "
            f"content_length={response.headers.get('content-length')}, "
            f"elapsed={response.elapsed.total_seconds():.3f}s",
        )
        return response


def _with_connect_timeout(timeout: _Timeout | None) -> _Timeout:
    if isinstance(timeout, numbers.Number):
        # a single number is the read timeout
        return (DEFAULT_TIMEOUT[0], timeout)
    if timeout is None:
        return DEFAULT_TIMEOUT
    return timeout


def send_request(
    session: requests.Session,
    envelope: RequestEnvelope,
    timeout: _Timeout | None = None,
) -> ResponseEnvelope:
    """Sends the request envelope with the session and returns the response envelope.

    An HTTP error status is not an error here, the status is part of the returned envelope.
    Nothing is retried.

    Args:
        session: the session of the context, authentication is applied by the session
        envelope: the request, can only be sent once
        timeout: see :py:meth:`requests.Session.request`, a number only sets the read timeout,
            the connect timeout is always set

    Raises:
        RequestAlreadySentError: if the envelope was sent before
        BoxTransportError: if the request could not be sent or no (complete) response was received
    """
    if envelope.sent:
        raise RequestAlreadySentError(envelope)
    envelope.mark_sent()

    start = time.perf_counter()
    try:
        response = session.request(
            method=envelope.method,
            url=envelope.url,
            data=envelope.body,
            headers=envelope.headers,
            timeout=_with_connect_timeout(timeout),
        )
        # reading the body can fail too, e.g. when the connection drops
        response.content  # noqa: B018
    except requests.exceptions.RequestException as e:
        raise BoxTransportError(envelope, info=str(e)) from e
    rtt_in_millis = int((time.perf_counter() - start) * 1000)
    return ResponseEnvelope.from_requests_response(envelope, response, rtt_in_millis)
