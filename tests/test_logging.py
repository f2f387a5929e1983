"""Tests for cargo_single.logging."""

from __future__ import annotations

import logging

from cargo_single.logging import configure_logging, get_logger


def test_get_logger_nests_under_package_logger() -> None:
    assert get_logger("sync").name == "cargo_single.sync"
    assert get_logger().name == "cargo_single"


def test_configure_logging_levels_and_single_handler() -> None:
    quiet = configure_logging()
    assert quiet.level == logging.WARNING

    verbose = configure_logging(verbose=True)
    assert verbose is quiet
    assert verbose.level == logging.DEBUG
    assert len(verbose.handlers) == 1
