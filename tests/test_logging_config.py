"""
Tests for the root logger setup.
"""

import logging

import pytest

from makeup_store_api.app.core.logging_config import LOG_FORMAT, setup_logging


@pytest.fixture
def bare_root(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    level = root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.setLevel(level)


def test_setup_logging_creates_log_directory(bare_root, tmp_path):
    logfile = tmp_path / "logs" / "store.log"

    setup_logging("warning", str(logfile))
    logging.getLogger("storefront").warning("Backend not reachable, using local data.")
    for handler in bare_root.handlers:
        handler.flush()

    assert bare_root.level == logging.WARNING
    assert len(bare_root.handlers) == 2
    assert bare_root.handlers[0].formatter._fmt == LOG_FORMAT
    assert "[WARNING] storefront: Backend not reachable" in logfile.read_text(encoding="utf-8")


def test_setup_logging_keeps_first_configuration(bare_root):
    setup_logging("WARNING")
    setup_logging("DEBUG")

    assert bare_root.level == logging.WARNING
    assert len(bare_root.handlers) == 1


def test_unknown_level_means_info(bare_root):
    setup_logging("chatty")

    assert bare_root.level == logging.INFO
