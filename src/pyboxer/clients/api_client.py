"""API client parent class."""

from __future__ import annotations

import json as jsonlib
from typing import TYPE_CHECKING, Literal

from pyboxer.clients.context_client import send_request
from pyboxer.clients.request import RequestEnvelope
from pyboxer.errors.handling import ErrorHandlingConfig, raise_box_api_error
from pyboxer.utils.clients import build_api_url, build_url_with_query
from pyboxer.utils.misc import to_json_value

if TYPE_CHECKING:
    from collections.abc import Iterable

    from requests.sessions import _Timeout  # type: ignore[attr-defined]

    from pyboxer.clients.request import ResponseEnvelope
    from pyboxer.config.context import BoxContext


class APIClient:
    """Base class for API clients."""

    def __init__(self, context: BoxContext) -> None:
        self.context = context

    def api_url(self, api_path: str) -> str:
        """Returns the API URL for the specified path, without query string."""
        return build_api_url(
            self.context.host.url,
            self.context.config.api_version,
            api_path,
        )

    def build_request(
        self,
        method: str,
        api_path: str,
        params: Iterable[tuple[str, str | int | bool | None]] | None = None,
        json: dict | None = None,
        headers: dict | None = None,
    ) -> RequestEnvelope:
        """Builds the request for the Box API, does not send it.

        The `api_path` argument is only the api path and not the full URL.
        For https://api.box.com/2.0/users/me this would be only "users/me".

        Args:
            method: the HTTP method
            api_path: **only** the api path
            params: ordered query parameters, rendered in this order, None values are left out
            json: the body, serialized as json
            headers: extra headers, content-type defaults to application/json if a body is set
        """
        headers = dict(headers) if headers else {}
        body = None
        if json is not None:
            body = jsonlib.dumps(to_json_value(json)).encode("utf-8")
            headers["content-type"] = headers.get("content-type") or headers.get("Content-Type") or "application/json"
        return RequestEnvelope(
            method=method,
            url=build_url_with_query(self.api_url(api_path), params),
            body=body,
            headers=headers,
        )

    def send(
        self,
        request: RequestEnvelope,
        expected_status: int,
        timeout: _Timeout | None = None,
        error_handling: ErrorHandlingConfig | Literal[False] | None = None,
    ) -> ResponseEnvelope:
        """Sends an already built request and checks the response status.

        Args:
            request: the request built by :py:meth:`APIClient.build_request`
            expected_status: the only status code that counts as success
            timeout: see :py:meth:`requests.Session.request`
            error_handling: error handling config; if set to False, errors won't be automatically handled
        """
        response = send_request(self.context.client, request, timeout=timeout)
        raise_box_api_error(response, expected_status, error_handling)
        return response

    def api_request(
        self,
        method: str,
        api_path: str,
        expected_status: int,
        params: Iterable[tuple[str, str | int | bool | None]] | None = None,
        json: dict | None = None,
        headers: dict | None = None,
        timeout: _Timeout | None = None,
        error_handling: ErrorHandlingConfig | Literal[False] | None = None,
    ) -> ResponseEnvelope:
        """Make an authenticated request to the Box API.

        Args:
            method: the HTTP method
            api_path: **only** the api path
            expected_status: the only status code that counts as success
            params: see :py:meth:`APIClient.build_request`
            json: see :py:meth:`APIClient.build_request`
            headers: see :py:meth:`APIClient.build_request`
            timeout: see :py:meth:`requests.Session.request`
            error_handling: error handling config; if set to False, errors won't be automatically handled
        """
        return self.send(
            self.build_request(method, api_path, params=params, json=json, headers=headers),
            expected_status,
            timeout=timeout,
            error_handling=error_handling,
        )
