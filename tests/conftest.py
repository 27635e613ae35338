import pytest
import structlog
from loguru import logger
from payloads import FakeWikipedia, StaticTranslator


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks bound to streams that only live for one test."""
    yield
    structlog.reset_defaults()
    logger.remove()


@pytest.fixture
def fake_wikipedia() -> FakeWikipedia:
    return FakeWikipedia()


@pytest.fixture
def translator() -> StaticTranslator:
    return StaticTranslator()
