"""Contains the BoxContext class, a state object for API clients."""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import requests

from pyboxer.__about__ import __version__
from pyboxer.clients.context_client import ContextHTTPClient
from pyboxer.clients.users import DEFAULT_USERS_PAGE_SIZE, UsersClient
from pyboxer.config.config import Config, get_config_dict, parse_credentials_config, parse_general_config
from pyboxer.resources.user import User

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pyboxer.config.config_types import Host, Token
    from pyboxer.config.token_provider import TokenProvider
    from pyboxer.resources.collection import PaginatedCollection
    from pyboxer.utils import api_types


class BoxContext:
    """BoxContext holds config and token provider for API clients."""

    config: Config
    token_provider: TokenProvider
    client: requests.Session

    def __init__(
        self,
        config: Config | None = None,
        token_provider: TokenProvider | None = None,
        profile: str | None = None,
    ) -> None:
        if config is None or token_provider is None:
            config_dict = get_config_dict(profile)
            self.config = config or parse_general_config(config_dict)
            self.token_provider = token_provider or parse_credentials_config(config_dict)
        else:
            self.token_provider = token_provider
            self.config = config

        if not self.config.requests_session:
            self.client = ContextHTTPClient(
                debug=self.config.debug, requests_ca_bundle=self.config.requests_ca_bundle
            )
        else:
            self.client = self.config.requests_session

        self.client.auth = lambda r: self.token_provider.requests_auth_handler(r)
        self.client.headers["User-Agent"] = requests.utils.default_user_agent(f"pyboxer/{__version__}/python-requests")

        if self.config.rich_traceback:
            from rich.traceback import install

            install()

    @property
    def host(self) -> Host:
        """Returns the host from the token provider."""
        return self.token_provider.host

    @property
    def token(self) -> Token:
        """Returns the token from the token provider."""
        return self.token_provider.token

    @cached_property
    def users(self) -> UsersClient:
        """Returns :py:class:`pyboxer.clients.users.UsersClient`."""
        return UsersClient(self)

    def new_user(self) -> User:
        """Returns an empty :py:class:`pyboxer.resources.user.User`, fill it with the setters and call create."""
        return User.new(self)

    def get_user(self, user_id: api_types.UserId, /, *, fields: Sequence[api_types.FieldName] | None = None) -> User:
        """Returns the user with the id.

        Args:
            user_id: the id of the user
            fields: the fields to fetch, empty for the default fields
        """
        return User.from_id(self, user_id, fields)

    def get_current_user(self, *, fields: Sequence[api_types.FieldName] | None = None) -> User:
        """Returns the user the token belongs to."""
        return User.me(self, fields)

    def get_enterprise_users(
        self,
        *,
        filter_term: str | None = None,
        offset: int = 0,
        limit: int = DEFAULT_USERS_PAGE_SIZE,
        fields: Sequence[api_types.FieldName] | None = None,
    ) -> PaginatedCollection[User]:
        """Returns one page of the enterprise users.

        Args:
            filter_term: only return users whose name or login starts with this term
            offset: the index of the first user in the page
            limit: the maximum number of users in the page
            fields: the fields to fetch for every user, empty for the default fields
        """
        return User.get_enterprise_users(self, filter_term, offset, limit, fields)

    def __repr__(self) -> str:
        return (
            "<"
            + self.__class__.__name__
            + "(config="
            + self.config.__str__()
            + ", token_provider="
            + self.token_provider.__str__()
            + ")>"
        )
