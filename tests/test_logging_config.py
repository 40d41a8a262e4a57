"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from optionhandler.logging_config import _CONFIGURED_ATTR, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    """Put the root logger back the way pytest configured it."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)

    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    configured = getattr(root, _CONFIGURED_ATTR, False)
    setattr(root, _CONFIGURED_ATTR, False)

    yield root

    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    setattr(root, _CONFIGURED_ATTR, configured)


def test_installs_rich_handler(restore_root_logger):
    setup_logging(logging.INFO)

    assert restore_root_logger.level == logging.INFO
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0], RichHandler)


def test_second_call_only_changes_level(restore_root_logger):
    setup_logging(logging.INFO)
    handler = restore_root_logger.handlers[0]

    setup_logging(logging.DEBUG)

    assert restore_root_logger.handlers == [handler]
    assert restore_root_logger.level == logging.DEBUG


def test_force_rebuilds_handlers(restore_root_logger):
    setup_logging()
    handler = restore_root_logger.handlers[0]

    setup_logging(force=True)

    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.handlers[0] is not handler


@pytest.mark.parametrize("value, expected", [("DEBUG", logging.DEBUG), ("40", logging.ERROR)])
def test_level_from_environment(monkeypatch, restore_root_logger, value, expected):
    monkeypatch.setenv("LOG_LEVEL", value)

    setup_logging(logging.WARNING)

    assert restore_root_logger.level == expected


def test_log_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "gen.log"

    setup_logging(logging.INFO, log_file=str(log_file))
    get_logger("optionhandler.test").info("written to file")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert "written to file" in log_file.read_text(encoding="utf-8")
    assert any(isinstance(h, logging.FileHandler) for h in restore_root_logger.handlers)


def test_get_logger():
    assert get_logger("optionhandler.cli") is logging.getLogger("optionhandler.cli")
