from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.mod_builder import ModBuilder


@pytest.fixture
def mod_builder(tmp_path: Path) -> ModBuilder:
    """Provide a mod project rooted at the pytest tmp_path."""
    return ModBuilder(tmp_path)


@pytest.fixture
def merlon_logs(caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch) -> pytest.LogCaptureFixture:
    """Capture records from the merlon logger even after the CLI disabled propagation."""
    monkeypatch.setattr(logging.getLogger("merlon"), "propagate", True)
    caplog.set_level(logging.DEBUG, logger="merlon")
    return caplog


@pytest.fixture(autouse=True)
def _reset_merlon_logger():
    """Drop handlers installed by configure_logging so streams do not leak between tests."""
    yield
    logger = logging.getLogger("merlon")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
