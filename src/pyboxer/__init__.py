"""Typed client for the Box users API."""

from pyboxer.__about__ import __version__
from pyboxer.config.config import Config
from pyboxer.config.config_types import Host
from pyboxer.config.context import BoxContext
from pyboxer.config.token_provider import AccessTokenProvider, TokenFileProvider
from pyboxer.resources.collection import PaginatedCollection
from pyboxer.resources.user import User

__all__ = [
    "__version__",
    "Config",
    "Host",
    "BoxContext",
    "AccessTokenProvider",
    "TokenFileProvider",
    "PaginatedCollection",
    "User",
]
