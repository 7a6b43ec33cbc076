from __future__ import annotations

import os
from pathlib import Path
from unittest import mock

import pytest

from pyboxer.config import config
from pyboxer.config.config_types import DEFAULT_API_VERSION, Host
from pyboxer.config.token_provider import AccessTokenProvider, TokenFileProvider
from pyboxer.errors.config import (
    MissingBoxHostError,
    MissingCredentialsConfigError,
    TokenProviderConfigError,
)


def test_get_config_dict(mock_config_location: dict[Path, None]):
    """Tests that the files are read in the correct order and that the merge happens correctly."""
    path_list = list(mock_config_location)
    site_config = path_list[0]
    user_config = path_list[1]
    site_config.write_text(
        """
[config]
rich_traceback = true

[credentials]
token = "will_be_overriden_by_user_config"
""",
    )
    user_config.write_text(
        """
[credentials]
domain = "example.com"
scheme = "mock"
token = "get_config_dict_token"
""",
    )
    with mock.patch.dict(os.environ, {}, clear=True):
        assert config.get_config_dict() == {
            "config": {
                "rich_traceback": True,
            },
            "credentials": {
                "domain": "example.com",
                "scheme": "mock",
                "token": "get_config_dict_token",
            },
        }
        with pytest.raises(AttributeError, match="Profile name can't be credentials"):
            config.get_config_dict("credentials")

        with pytest.raises(AttributeError, match="Profile name can't be config"):
            config.get_config_dict("config")

    with mock.patch.dict(os.environ, PYBOXER_CONFIG__RICH_TRACEBACK="false"):
        assert config.get_config_dict()["config"]["rich_traceback"] is False

    with mock.patch.dict(os.environ, PYBOXER_CREDENTIALS__TOKEN="env_token"):  # noqa: S106
        assert config.get_config_dict()["credentials"]["token"] == "env_token"  # noqa: S105


def test_get_config_dict_defaults(mock_config_location: dict[Path, None]):
    user_config = list(mock_config_location)[1]
    with mock.patch.dict(os.environ, {}, clear=True):
        assert config.get_config_dict() is None

        user_config.write_text('[credentials]\ntoken = "abc"\n')
        assert config.get_config_dict() == {"credentials": {"domain": "api.box.com", "token": "abc"}}

        # a config without credentials is valid, the token provider can be passed to the context
        user_config.write_text("[config]\ndebug = true\n")
        assert config.get_config_dict() == {"config": {"debug": True}}


def test_profiles(mock_config_location: dict[Path, None]):
    user_config = list(mock_config_location)[1]
    user_config.write_text(
        """
[config]
debug = false
api_version = "2.0"

[credentials]
token = "default_token"

[sandbox.config]
debug = true

[sandbox.credentials]
domain = "sandbox.example.com"
token_file = "~/sandbox_token"
""",
    )
    with mock.patch.dict(os.environ, {}, clear=True):
        assert config.get_config_dict("sandbox") == {
            "config": {"debug": True, "api_version": "2.0"},
            "credentials": {"domain": "sandbox.example.com", "token_file": "~/sandbox_token"},
        }
        assert config.get_config_dict()["credentials"] == {"domain": "api.box.com", "token": "default_token"}

    with mock.patch.dict(os.environ, {"PYBOXER_PROFILE": "sandbox"}, clear=True):
        tp = config.parse_credentials_config(config.get_config_dict())
        assert isinstance(tp, TokenFileProvider)
        assert tp.host == Host("sandbox.example.com")
        assert tp.token_file == Path("~/sandbox_token").expanduser()


def test_parse_credentials_config(mock_config_location: dict[Path, None]):
    path_list = list(mock_config_location)
    user_config = path_list[1]

    with mock.patch.dict(os.environ, {}, clear=True):
        user_config.write_text("")
        with pytest.raises(MissingCredentialsConfigError):
            config.parse_credentials_config(config.get_config_dict())

        user_config.write_text("""
                                   [credentials]
                                   domain = ""
                                   token = "abc"
                               """)
        with pytest.raises(MissingBoxHostError):
            config.parse_credentials_config(config.get_config_dict())

        user_config.write_text("""
                                   [credentials]
                                   domain = "example.com"
                               """)
        with pytest.raises(TokenProviderConfigError, match="To authenticate with Box you need a TokenProvider"):
            config.parse_credentials_config(config.get_config_dict())
        with pytest.raises(
            TokenProviderConfigError,
            match="The token provider implementation example does not exist",
        ):
            config.parse_credentials_config(
                {
                    "credentials": {
                        "domain": "example.com",
                        "example": "does not exist",
                    },
                },
            )

        # check_init gets imported in pyboxer.config.config, we need to mock it there
        with mock.patch("pyboxer.config.config.check_init") as check_init_mock:
            # return the dict 'kwargs'
            check_init_mock.side_effect = lambda *args, **kwargs: args[2]  # noqa: ARG005
            user_config.write_text("""
                                       [credentials]
                                       domain = "example.com"
                                       token = "test"
                                   """)
            config.parse_credentials_config(config.get_config_dict())
            check_init_mock.assert_called_with(
                AccessTokenProvider,
                "credentials",
                {"host": Host("example.com"), "token": "test"},
            )

        user_config.write_text("""
                                   [credentials]
                                   token = "test"
                               """)
        tp = config.parse_credentials_config(config.get_config_dict())
        assert isinstance(tp, AccessTokenProvider)
        assert tp.token == "test"  # noqa: S105
        assert tp.host == Host()
        assert tp.host.url == "https://api.box.com"


def test_parse_general_config():
    assert config.parse_general_config(None).api_version == DEFAULT_API_VERSION
    cfg = config.parse_general_config({"config": {"debug": True, "api_version": "/2.0/"}})
    assert cfg.debug is True
    assert cfg.api_version == "2.0"

    with pytest.warns(UserWarning, match="config.unknown is not a valid config option"):
        config.parse_general_config({"config": {"unknown": 1}})
