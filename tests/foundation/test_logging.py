from __future__ import annotations

import logging

import pytest

from moselect.foundation.logging import configure_moselect_logging


@pytest.fixture
def clean_loggers():
    root = logging.getLogger()
    package_logger = logging.getLogger("moselect")
    saved = (list(root.handlers), list(package_logger.handlers), package_logger.level, package_logger.propagate)
    root.handlers.clear()
    package_logger.handlers.clear()
    yield root, package_logger
    root.handlers[:] = saved[0]
    package_logger.handlers[:] = saved[1]
    package_logger.setLevel(saved[2])
    package_logger.propagate = saved[3]


def test_configure_attaches_single_handler(clean_loggers) -> None:
    _, package_logger = clean_loggers
    configure_moselect_logging(level=logging.DEBUG)
    configure_moselect_logging(level=logging.DEBUG)
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.DEBUG
    assert package_logger.propagate is False


def test_configure_respects_existing_root_handlers(clean_loggers) -> None:
    root, package_logger = clean_loggers
    root.addHandler(logging.NullHandler())
    configure_moselect_logging()
    assert package_logger.handlers == []
