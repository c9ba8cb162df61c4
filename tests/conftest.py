from collections.abc import Iterator
from typing import Any

import pytest
from loguru import logger

from kverrors.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Make every test read Settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def records() -> Iterator[list[Any]]:
    """Collect loguru records, including those from inside kverrors."""
    collected: list[Any] = []
    logger.enable("kverrors")
    sink_id = logger.add(
        lambda message: collected.append(message.record), level="DEBUG", format="{message}"
    )
    yield collected
    logger.remove(sink_id)
    logger.disable("kverrors")
