"""The pyboxer token providers."""

from __future__ import annotations

import os
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING

from pyboxer.config.config_types import Host
from pyboxer.errors.config import TokenProviderConfigError

if TYPE_CHECKING:
    import requests

    from pyboxer.config.config_types import Token


class TokenProvider:
    """Parent class for all TokenProviders.

    TokenProvider implementations always need to have these properties:
        host: the Box API host
        token: the access token, needs to be implemented
    """

    def __init__(self, host: Host | str | None = None):
        """The TokenProvider base class.

        Args:
            host: the Box API host, defaults to api.box.com
        """
        if host is None:
            host = Host()
        elif isinstance(host, str):
            host = Host(host)
        self.host = host

    @property
    def token(self) -> Token:
        """Returns the token from the provider."""
        msg = "This is only the base TokenProvider class and does not implement getting a token."
        raise NotImplementedError(msg)

    def requests_auth_handler(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        """Sets bearer authentication header on PreparedRequest object.

        Does not overwrite authorization header if present.
        """
        r.headers.setdefault("authorization", f"Bearer {self.token}")
        return r

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(host={self.host!r})>"


class AccessTokenProvider(TokenProvider):
    """Provides Host and a static access token (e.g. a developer token)."""

    def __init__(self, token: Token, host: Host | str | None = None) -> None:
        """Initialize the AccessTokenProvider.

        Args:
            token: the access token
            host: the Box API host
        """
        super().__init__(host)
        self._token = token

    @cached_property
    def token(self) -> Token:
        """Returns the token supplied when creating this Provider."""
        return self._token


class TokenFileProvider(TokenProvider):
    """Reads the access token from a file on every request.

    Useful when another process refreshes the token and writes it to disk.
    """

    def __init__(self, token_file: os.PathLike[str] | str, host: Host | str | None = None) -> None:
        """Initialize the TokenFileProvider.

        Args:
            token_file: path to a file that only contains the access token
            host: the Box API host
        """
        super().__init__(host)
        self.token_file = Path(token_file).expanduser()

    @property
    def token(self) -> Token:
        """Returns the stripped content of the token file."""
        try:
            token = self.token_file.read_text().strip()
        except OSError as e:
            msg = f"Could not read the token file {self.token_file}."
            raise TokenProviderConfigError(msg) from e
        if not token:
            msg = f"The token file {self.token_file} is empty."
            raise TokenProviderConfigError(msg)
        return token


TOKEN_PROVIDER_MAPPING: dict[str, type[TokenProvider]] = {
    "token": AccessTokenProvider,
    "token_file": TokenFileProvider,
}
"""Maps the name of the credentials config section to the token provider implementation."""
