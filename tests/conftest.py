from io import StringIO

import pytest

from replaylog import config
from replaylog._backend import get_backend
from replaylog._logger import Logger


@pytest.fixture(autouse=True)
def fresh_backend(monkeypatch):
    """Color allowed regardless of NO_COLOR/TERM, sinks dropped afterwards."""
    monkeypatch.setattr(config.settings, 'no_color', False)
    yield
    get_backend().reset()


@pytest.fixture
def out():
    return StringIO()


@pytest.fixture
def err():
    return StringIO()


@pytest.fixture
def logger(out, err, capsys):
    """Initialized logger; panic lands on the captured stderr."""
    logger = Logger()
    logger.initialize(out, err)
    yield logger
    logger.close()
