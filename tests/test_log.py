"""Unit tests for affine_geom.log."""

import logging

from affine_geom import log
from affine_geom.log import LOG_FORMAT, get_logger, setup_logging


def test_library_logger_has_null_handler():
    import affine_geom  # noqa: F401

    handlers = logging.getLogger("affine_geom").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)


def test_setup_logging_installs_one_handler(monkeypatch):
    monkeypatch.setattr(log, "_LOGGER_CONFIGURED", False)
    logger = logging.getLogger("affine_geom")
    before = list(logger.handlers)
    try:
        setup_logging(logging.DEBUG)
        setup_logging(logging.DEBUG)
        added = [h for h in logger.handlers if h not in before]
        assert len(added) == 1
        assert added[0].formatter._fmt == LOG_FORMAT
        assert logger.level == logging.DEBUG
    finally:
        for h in logger.handlers[:]:
            if h not in before:
                logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)


def test_get_logger_is_named():
    assert get_logger("affine_geom.boundary").name == "affine_geom.boundary"
