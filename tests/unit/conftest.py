from __future__ import annotations

from typing import TYPE_CHECKING
from unittest import mock

import pytest
import requests_mock

from pyboxer.config.config import Config
from pyboxer.utils.config import CFG_FILE_NAME
from tests.unit.mocks import BoxMockContext, MockTokenProvider

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


@pytest.fixture()
def box_token(request):
    """Generates a fake token that is the name of the test function + '_token'.

    This is useful to trace back a token to a test function.
    """
    return request.node.name + "_token"


@pytest.fixture()
def test_context_mock(box_token) -> BoxMockContext:
    """This fixture provides a context with default config, a :py:class:`~tests.unit.mocks.MockTokenProvider` and a fresh :py:class:`requests_mock.Adapter`.

    Useful for mocking API responses. see :py:class:`~tests.unit.mocks.BoxMockContext`.
    """  # noqa: E501
    return BoxMockContext(Config(), MockTokenProvider(token=box_token), mock_adapter=requests_mock.Adapter())


@pytest.fixture()
def mock_config_location(tmp_path_factory, request) -> Generator[dict[Path, None], None, None]:
    """Mocks the locations where the config files are read and returns them.

    Can be used in tests like this:
    .. code-block:: python

       from pyboxer.config import config


       def test_xyz(mock_config_location):
           assert mock_config_location == config.cfg_files()  # true

    """

    paths = dict.fromkeys(
        [
            tmp_path_factory.mktemp(f"{request.node.name}_site_cfg").joinpath(CFG_FILE_NAME),
            tmp_path_factory.mktemp(f"{request.node.name}_user_cfg").joinpath(CFG_FILE_NAME),
        ],
    )
    with mock.patch("pyboxer.config.config.cfg_files", return_value=paths):
        yield paths
