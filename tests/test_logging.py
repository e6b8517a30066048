"""Tests for structlog configuration."""

import importlib
import json
import logging

import pytest
import structlog

import jjview.logging as jjlog


@pytest.fixture
def clean_logging():
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)


class TestImport:
    def test_import_leaves_structlog_unconfigured(self, clean_logging):
        importlib.reload(jjlog)
        assert not structlog.is_configured()


class TestConfigureLogging:
    def test_json_goes_to_stderr(self, clean_logging, capsys):
        jjlog.configure_logging(force_json=True, level=logging.INFO)
        jjlog.get_logger("jjview.test").info("refresh_done", files=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["event"] == "refresh_done"
        assert record["files"] == 3
        assert record["level"] == "info"

    def test_level_filters(self, clean_logging, capsys):
        jjlog.configure_logging(force_json=True, level=logging.WARNING)
        jjlog.get_logger("jjview.test").debug("hidden")
        assert "hidden" not in capsys.readouterr().err

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("JJVIEW_LOG_LEVEL", "debug")
        assert jjlog._get_log_level() == logging.DEBUG
        monkeypatch.setenv("JJVIEW_LOG_LEVEL", "bogus")
        assert jjlog._get_log_level() == logging.WARNING
