"""Unit tests for logging configuration."""

from __future__ import annotations

import logging

from skucodec.core.logging import configure_logging


def test_configure_logging_sets_root_level():
    configure_logging(level="debug", json_logs=True)
    assert logging.getLogger().level == logging.DEBUG

    configure_logging(level="WARNING", json_logs=False)
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_replaces_handlers():
    configure_logging(level="INFO")
    configure_logging(level="INFO")
    assert len(logging.getLogger().handlers) == 1
