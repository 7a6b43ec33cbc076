import pytest
import requests

from pyboxer.config.config_types import Host
from pyboxer.config.token_provider import AccessTokenProvider, TokenFileProvider, TokenProvider
from pyboxer.errors.config import TokenProviderConfigError


def test_token_provider_host():
    assert TokenProvider().host == Host("api.box.com", "https")
    assert TokenProvider("example.com").host == Host("example.com")
    assert TokenProvider(Host("example.com", "http")).host.url == "http://example.com"
    with pytest.raises(NotImplementedError):
        _ = TokenProvider().token


def test_access_token_provider():
    tp = AccessTokenProvider("secret")
    assert tp.token == "secret"  # noqa: S105
    req = requests.Request("GET", "https://api.box.com/2.0/users/me").prepare()
    assert tp.requests_auth_handler(req).headers["Authorization"] == "Bearer secret"
    assert "secret" not in repr(tp)


def test_token_file_provider(tmp_path):
    token_file = tmp_path / "token"
    tp = TokenFileProvider(token_file)
    with pytest.raises(TokenProviderConfigError, match="Could not read the token file"):
        _ = tp.token

    token_file.write_text("")
    with pytest.raises(TokenProviderConfigError, match="is empty"):
        _ = tp.token

    token_file.write_text("first\n")
    assert tp.token == "first"  # noqa: S105
    # the file is read again for every token
    token_file.write_text("second")
    assert tp.token == "second"  # noqa: S105
