"""
Tests for the syndicator entry point.
"""
import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

import pytest

from syndicator.syndicator import configure_logging, LOG_FILE


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_configure_logging(tmp_path, monkeypatch, restore_root_logger):
    monkeypatch.chdir(tmp_path)

    configure_logging()

    root_logger = restore_root_logger
    assert root_logger.level == logging.INFO
    assert len(root_logger.handlers) == 2
    assert isinstance(root_logger.handlers[0], RotatingFileHandler)
    assert (tmp_path / LOG_FILE).exists()


def test_configure_logging_debug(tmp_path, monkeypatch, restore_root_logger):
    monkeypatch.chdir(tmp_path)

    configure_logging(debug=True)

    assert restore_root_logger.level == logging.DEBUG


def test_main_builds_app_from_config(tmp_path, monkeypatch, restore_root_logger):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.argv", ["syndicator"])
    config = {"mastodon": {"accounts": []}}

    with patch("config.load_config", return_value=config), \
         patch("receiver.create_app") as mock_create_app, \
         patch("gunicorn.app.base.BaseApplication.run") as mock_run:
        from syndicator import main
        main()

    mock_create_app.assert_called_once_with(config=config, mastodon_clients=[])
    mock_run.assert_called_once()
