import pytest

from pycfg import CfgParser


@pytest.fixture
def messages():
    return []


@pytest.fixture
def cfg(messages):
    """A parser whose messages land in `messages` instead of the log."""
    return CfgParser(message=messages.append)


@pytest.fixture
def parse(cfg):
    def _parse(text: str) -> CfgParser:
        cfg.loads(text)
        return cfg
    return _parse
