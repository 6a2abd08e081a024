from __future__ import annotations

import logging

import pytest

from digestkit.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_urllib3_level():
    urllib3_logger = logging.getLogger("urllib3")
    previous = urllib3_logger.level
    yield urllib3_logger
    urllib3_logger.setLevel(previous)


def test_setup_logging_resolves_levels(monkeypatch) -> None:
    assert setup_logging("debug") == logging.DEBUG
    assert setup_logging("NAO_EXISTE") == logging.INFO

    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    assert setup_logging() == logging.WARNING


def test_setup_logging_keeps_urllib3_quiet(restore_urllib3_level) -> None:
    setup_logging("DEBUG")

    assert restore_urllib3_level.level == logging.WARNING
