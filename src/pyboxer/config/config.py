"""Classes and logic for the Configuration."""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from pyboxer.config.config_types import DEFAULT_API_VERSION, DEFAULT_DOMAIN, Host
from pyboxer.config.token_provider import TOKEN_PROVIDER_MAPPING, TokenProvider
from pyboxer.errors.config import (
    MissingBoxHostError,
    MissingCredentialsConfigError,
    TokenProviderConfigError,
)
from pyboxer.utils.config import cfg_files, check_init, get_environment_variable_config, merge_dicts

if TYPE_CHECKING:
    from collections.abc import Iterable
    from os import PathLike
    from pathlib import Path

    import requests

# compatibility for python version < 3.11
if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib


class Config:
    """Class for Configuration options."""

    def __init__(
        self,
        requests_ca_bundle: PathLike[str] | str | None = None,
        api_version: str = DEFAULT_API_VERSION,
        rich_traceback: bool = False,
        debug: bool = False,
        requests_session: requests.Session | None = None,
    ) -> None:
        """Initialize the configuration.

        Args:
            requests_ca_bundle: a path to a CA bundle if :py:mod:`requests` needs custom certificates to work
                e.g. in a corporate network
            api_version: the version segment of the API url, `https://api.box.com/<api_version>/users`
            rich_traceback: installs the traceback handler of :py:mod:`rich`
            debug: enables debug logging of every request and response
            requests_session: use this session instead of a :py:class:`ContextHTTPClient`

        """
        self.requests_ca_bundle = os.fspath(requests_ca_bundle) if requests_ca_bundle else None
        self.api_version = str(api_version).strip("/")
        self.rich_traceback = bool(rich_traceback)
        self.debug = bool(debug)
        self.requests_session = requests_session

    def __repr__(self) -> str:
        return "<" + self.__class__.__name__ + "(" + self.__dict__.__str__() + ")>"


def _load_config_files(config_files: Iterable[Path]) -> dict:
    """Loads and merges the existing config files, the last file wins."""
    config: dict = {}
    for cfg_file in config_files:
        if not cfg_file.is_file():
            continue
        with cfg_file.open("rb") as f:
            config = merge_dicts(config, tomllib.load(f))
    return config


def load_config(env: bool = True) -> dict:
    """Returns the merged config files and, if env is set, the `PYBOXER_` environment variables, no profile applied."""
    config = _load_config_files(cfg_files())
    if env:
        config = merge_dicts(config, get_environment_variable_config())
    return config


def _token_provider_name(credentials: dict) -> str | None:
    # the last token provider in a section wins
    return next((k for k in reversed(credentials) if k in TOKEN_PROVIDER_MAPPING), None)


def _missing_token_provider_error() -> TokenProviderConfigError:
    return TokenProviderConfigError(
        "To authenticate with Box you need a TokenProvider. The token provider can be configured either via the"
        f" configuration file ({', '.join(TOKEN_PROVIDER_MAPPING)}) or the token_provider BoxContext parameter."
    )


def _profile_sections(config: dict, profile: str | None) -> tuple[dict, dict]:
    """Returns the `config` and `credentials` sections of the profile, empty dicts without a profile."""
    if profile in ("config", "credentials"):
        msg = f"Profile name can't be {profile}"
        raise AttributeError(msg)
    profile_config = config.get(profile) if profile else None
    if not isinstance(profile_config, dict):
        return {}, {}
    return profile_config.get("config", {}), profile_config.get("credentials", {})


def get_config_dict(profile: str | None = None, env: bool = True) -> dict | None:
    """Loads the config from the config files and environment variables and applies the profile.

    A profile overrides the top level sections:

    .. code-block:: toml

        [config]
        debug = false

        [credentials]
        token = "..."

        [sandbox.config]
        debug = true

        [sandbox.credentials]
        token_file = "~/.box_sandbox_token"

    Profile `sandbox` uses debug logging and the token file,
    the profile is either passed or set via ``profile = "..."``/``PYBOXER_PROFILE``.

    Args:
        profile: The profile to use, if None the `profile` from the config is used, if any
        env: Whether to load the environment variables

    Returns:
        None if there is no config at all, otherwise a dict with an optional `config` section
        and, if credentials are configured, a `credentials` section with the domain, the scheme
        and exactly one token provider.
    """
    config = load_config(env=env)
    if not config:
        return None
    if profile is None:
        profile = config.get("profile")
    profile_config, profile_credentials = _profile_sections(config, profile)
    credentials = config.get("credentials", {})

    config_dict = {}
    if general_config := merge_dicts(config.get("config", {}), profile_config):
        config_dict["config"] = general_config

    if "credentials" not in config and not profile_credentials:
        return config_dict

    domain = profile_credentials.get("domain", credentials.get("domain", DEFAULT_DOMAIN))
    if not domain:
        raise MissingBoxHostError
    if tp_name := _token_provider_name(profile_credentials):
        tp_config = profile_credentials[tp_name]
    elif tp_name := _token_provider_name(credentials):
        tp_config = credentials[tp_name]
    else:
        raise _missing_token_provider_error()

    config_dict["credentials"] = {"domain": domain, tp_name: tp_config}
    if (scheme := profile_credentials.get("scheme", credentials.get("scheme"))) is not None:
        config_dict["credentials"]["scheme"] = scheme
    return config_dict


def parse_credentials_config(config_dict: dict | None) -> TokenProvider:
    """Creates the token provider of the `credentials` section returned by :py:func:`get_config_dict`."""
    if config_dict is None or not (credentials := config_dict.get("credentials")):
        raise MissingCredentialsConfigError
    credentials = dict(credentials)
    domain = credentials.pop("domain", DEFAULT_DOMAIN)
    if not domain:
        raise MissingBoxHostError
    host = Host(domain, credentials.pop("scheme", None))
    if not credentials:
        raise _missing_token_provider_error()

    tp_name, tp_config = credentials.popitem()
    if (tp_class := TOKEN_PROVIDER_MAPPING.get(tp_name)) is None:
        msg = f"The token provider implementation {tp_name} does not exist."
        raise TokenProviderConfigError(msg)
    # token = "abc" is short for token = {token = "abc"}
    if not isinstance(tp_config, dict):
        tp_config = {tp_name: tp_config}
    return tp_class(**check_init(tp_class, "credentials", {"host": host, **tp_config}))


def parse_general_config(config_dict: dict | None = None) -> Config:
    """Creates the :py:class:`Config` of the `config` section returned by :py:func:`get_config_dict`."""
    if config_dict is not None and (general_config := config_dict.get("config")):
        return Config(**check_init(Config, "config", general_config))
    return Config()
