import pytest

from caprule import capture
from caprule.host import Facade, Parser


@pytest.fixture
def parser():
    """Fresh parser with `capture` installed."""
    return Parser().use(capture())


@pytest.fixture
def facade():
    """Fresh facade with `capture` installed on it and its parser."""
    return Facade().use(capture())
