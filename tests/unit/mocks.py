from __future__ import annotations

import requests_mock

from pyboxer.config.config import Config
from pyboxer.config.config_types import Host, Token
from pyboxer.config.context import BoxContext
from pyboxer.config.token_provider import AccessTokenProvider

"""The domain for unit tests."""
TEST_DOMAIN = "pyboxer.test"
"""The url scheme, useful for :py:class:`requests_mock.Adapter`"""
TEST_SCHEME = "http+mock"
"""The default host for all tests."""
TEST_HOST = Host(TEST_DOMAIN, TEST_SCHEME)
"""Default token if no token was provided."""
DEFAULT_TOKEN = "default_mock_token"  # noqa: S105
"""The mock adapter for :py:class:`BoxMockContext`."""
MOCK_ADAPTER = requests_mock.Adapter()


class MockTokenProvider(AccessTokenProvider):
    """The mock token provider, sets the host to :py:attr:`TEST_HOST`."""

    def __init__(self, token: Token):
        super().__init__(token, TEST_HOST)


class BoxMockContext(BoxContext):
    """The box mock context uses a mock token provider and mounts a requests mock adapter."""

    mock_adapter: requests_mock.Adapter

    def __init__(
        self,
        config: Config | None = None,
        token_provider: MockTokenProvider | None = None,
        profile: str | None = None,
        mock_adapter: requests_mock.Adapter | None = None,
    ):
        super().__init__(
            config=config or Config(),
            token_provider=token_provider or MockTokenProvider(token=DEFAULT_TOKEN),
            profile=profile,
        )
        self.mock_adapter = mock_adapter or MOCK_ADAPTER
        self.client.mount("http+mock://", self.mock_adapter)
