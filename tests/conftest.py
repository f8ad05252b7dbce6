import logging
import pathlib
import site

import pytest

HERE = pathlib.Path(pathlib.Path(__file__).resolve()).parent
site.addsitedir(HERE)


@pytest.fixture(autouse=True)
def debug_logging(caplog):
    """Capture dbreader debug logging for every test."""
    caplog.set_level(logging.DEBUG, logger='dbreader')
    yield


pytest_plugins = [
    'fixtures.mocks',
    'fixtures.values',
    'fixtures.sqlite',
]
