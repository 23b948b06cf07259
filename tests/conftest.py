from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

import pytest

from tests._fixtures.source_tree import SourceTreeBuilder

FIXED_MOMENT = datetime(2024, 5, 17, 9, 30, 0, tzinfo=UTC)


@pytest.fixture
def source_tree(tmp_path: Path) -> SourceTreeBuilder:
    """Provide a source tree builder rooted at the pytest tmp_path."""
    return SourceTreeBuilder(tmp_path)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_MOMENT


@pytest.fixture(autouse=True)
def _reset_steplib_logger():
    yield
    logger = logging.getLogger("steplib")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
