from __future__ import annotations

import sys

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_loguru():
    """CLI tests reconfigure loguru; point it back at whatever stderr is current."""
    yield
    logger.remove()
    logger.add(lambda message: sys.stderr.write(message), level="DEBUG")


@pytest.fixture
def anyio_backend():
    return "asyncio"
