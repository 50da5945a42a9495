"""Tests for logging helpers."""

import logging

from labclient.utils.logging import configure_logging, get_logger


def test_get_logger_returns_named_logger():
    assert get_logger("labclient.mock.store").name == "labclient.mock.store"


def test_configure_logging_is_idempotent():
    root = logging.getLogger("labclient")
    before = len(root.handlers)
    configure_logging("debug")
    configure_logging("debug")
    added = [h for h in root.handlers if getattr(h, "_labclient", False)]
    assert len(added) == 1
    assert len(root.handlers) <= before + 1
    assert root.level == logging.DEBUG
