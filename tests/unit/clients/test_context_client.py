import logging
import os
from pathlib import Path
from unittest import mock

import pytest
import requests
from requests_mock import ANY

from pyboxer import Config
from pyboxer.__about__ import __version__
from pyboxer.clients.context_client import DEFAULT_TIMEOUT, ContextHTTPClient, send_request
from pyboxer.clients.request import RequestEnvelope
from pyboxer.errors.meta import BoxTransportError, RequestAlreadySentError
from tests.unit.mocks import BoxMockContext, MockTokenProvider


def test_context_http_client(test_context_mock):
    # check if args are passed
    with mock.patch("requests.Session.request") as m:
        test_context_mock.client.request("GET", "test_call_args")
        assert m.call_args[0] == ("GET", "test_call_args")
        test_context_mock.client.request("GET", "test_kwargs_passed", headers={"a": "b"}, timeout=5)
        assert m.call_args[0] == ("GET", "test_kwargs_passed")
        assert m.call_args[1] == {"headers": {"a": "b"}, "timeout": 5}

    test_context_mock.mock_adapter.register_uri(ANY, ANY)

    req = test_context_mock.client.request("POST", "http+mock://test_authorization").request
    assert req.headers["Authorization"] == f"Bearer {test_context_mock.token}"
    from requests import __version__ as requests_version

    assert req.headers["User-Agent"] == f"pyboxer/{__version__}/python-requests/{requests_version}"


@pytest.mark.parametrize(
    ("timeout", "sent_timeout"),
    [(None, DEFAULT_TIMEOUT), (5, (DEFAULT_TIMEOUT[0], 5)), ((1, 2), (1, 2))],
)
def test_send_request_timeout(test_context_mock, timeout, sent_timeout):
    test_context_mock.mock_adapter.register_uri(ANY, ANY, json={"type": "user", "id": "1"})
    send_request(test_context_mock.client, RequestEnvelope("GET", "http+mock://pyboxer.test/x"), timeout=timeout)
    assert test_context_mock.mock_adapter.last_request.timeout == sent_timeout


def test_authorization_header_is_not_overwritten(test_context_mock):
    test_context_mock.mock_adapter.register_uri(ANY, ANY)
    req = test_context_mock.client.request(
        "GET", "http+mock://test_authorization", headers={"Authorization": "Bearer other"}
    ).request
    assert req.headers["Authorization"] == "Bearer other"


def test_no_retry_on_connection_error(test_context_mock):
    response_mock = mock.Mock()
    envelope = RequestEnvelope("GET", "http+mock://pyboxer.test/2.0/users/me")
    with mock.patch("requests.Session.request") as m:
        m.side_effect = [requests.exceptions.ConnectionError("connection refused"), response_mock]
        with pytest.raises(BoxTransportError, match="connection refused") as exc_info:
            send_request(test_context_mock.client, envelope)
        assert m.call_count == 1
    assert exc_info.value.request is envelope
    assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)


def test_timeout_is_a_transport_error(test_context_mock):
    test_context_mock.mock_adapter.register_uri(ANY, ANY, exc=requests.exceptions.ConnectTimeout)
    with pytest.raises(BoxTransportError):
        test_context_mock.users.api_get_current_user()


def test_request_can_only_be_sent_once(test_context_mock):
    test_context_mock.mock_adapter.register_uri(ANY, ANY, status_code=200, json={"type": "user", "id": "1"})
    envelope = test_context_mock.users.build_get_current_user_request()
    response = send_request(test_context_mock.client, envelope)
    assert response.status_code == 200
    assert response.request is envelope
    assert response.rtt_in_millis >= 0
    assert envelope.sent

    with pytest.raises(RequestAlreadySentError):
        send_request(test_context_mock.client, envelope)
    assert test_context_mock.mock_adapter.call_count == 1


def test_error_status_is_not_a_transport_error(test_context_mock):
    test_context_mock.mock_adapter.register_uri(ANY, ANY, status_code=500, text="oops")
    response = send_request(test_context_mock.client, RequestEnvelope("GET", "http+mock://pyboxer.test/x"))
    assert response.status_code == 500
    assert response.text == "oops"


def test_plain_requests_session(box_token):
    session = requests.Session()
    ctx = BoxMockContext(Config(requests_session=session), MockTokenProvider(token=box_token))
    assert ctx.client is session
    ctx.mock_adapter.register_uri("GET", ANY, json={"type": "user", "id": "1"})
    assert ctx.get_current_user().id == "1"
    assert ctx.mock_adapter.last_request.headers["Authorization"] == f"Bearer {box_token}"


def test_debug_logging(box_token, caplog):
    ctx = BoxMockContext(Config(debug=True), MockTokenProvider(token=box_token))
    ctx.mock_adapter.register_uri("GET", ANY, json={"type": "user", "id": "1"})
    with caplog.at_level(logging.DEBUG, logger="pyboxer.clients.context_client"):
        ctx.get_current_user()
    messages = [r.getMessage() for r in caplog.records]
    assert any("Making GET request to http+mock://pyboxer.test/2.0/users/me" in m for m in messages)
    assert any("Got response status=200" in m for m in messages)


def test_requests_ca_bundle(request, tmp_path_factory):
    cert_dir = tmp_path_factory.mktemp(f"pyboxer_test__{request.node.name}").absolute()
    with Path.open(cert_dir / "ca-bundle.pem", "w") as f:
        f.write("test")
    client1 = BoxMockContext(
        Config(requests_ca_bundle=os.fspath(cert_dir / "ca-bundle.pem")),
        MockTokenProvider(token=request.node.name + "_token"),
    ).client
    assert client1.verify == os.fspath(cert_dir / "ca-bundle.pem")
    client_with_pathlib = BoxMockContext(
        Config(requests_ca_bundle=cert_dir / "ca-bundle.pem"),
        MockTokenProvider(token=request.node.name + "_token"),
    ).client
    assert client_with_pathlib.verify == os.fspath(cert_dir / "ca-bundle.pem")

    client = ContextHTTPClient(debug=False, requests_ca_bundle=None)
    assert client.verify is True
