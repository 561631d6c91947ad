import pytest

from .helpers import NOW_MS


@pytest.fixture
def clock():
    return lambda: NOW_MS
