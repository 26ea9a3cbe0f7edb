"""Tests for logging configuration."""

import logging

from wellness_sessions.app_logging import PACKAGE_LOGGER, configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("wellness_sessions")
    logger.handlers.clear()

    first = configure_logging()
    first_count = len(logger.handlers)

    second = configure_logging(logging.DEBUG)
    second_count = len(logger.handlers)

    assert PACKAGE_LOGGER == "wellness_sessions"
    assert first is second is logger
    assert first_count == 1
    assert second_count == 1
    assert logger.level == logging.DEBUG

    logger.setLevel(logging.INFO)
