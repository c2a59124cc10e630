# ABOUTME: Tests for environment flag parsing and the logging setup helper.
# ABOUTME: Uses monkeypatch for environment variables and removes installed handlers afterwards.

import logging

import pytest

from weather_lookup.config import _env_flag
from weather_lookup.logging_config import LOG_FORMAT, configure_logging


class TestEnvFlag:
    @pytest.mark.parametrize("raw", ["1", "true", "TRUE", " yes ", "on"])
    def test_truthy_values(self, monkeypatch, raw):
        monkeypatch.setenv("WEATHER_TEST_FLAG", raw)
        assert _env_flag("WEATHER_TEST_FLAG", False) is True

    @pytest.mark.parametrize("raw", ["0", "false", "no", "off", ""])
    def test_falsy_values(self, monkeypatch, raw):
        monkeypatch.setenv("WEATHER_TEST_FLAG", raw)
        assert _env_flag("WEATHER_TEST_FLAG", True) is False

    def test_missing_uses_default(self, monkeypatch):
        monkeypatch.delenv("WEATHER_TEST_FLAG", raising=False)
        assert _env_flag("WEATHER_TEST_FLAG", True) is True


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        httpx_level = logging.getLogger("httpx").level
        yield
        for handler in root.handlers[:]:
            if type(handler) is logging.StreamHandler and handler not in handlers:
                root.removeHandler(handler)
        root.setLevel(level)
        logging.getLogger("httpx").setLevel(httpx_level)

    def test_installs_single_handler(self):
        """configure_logging leaves exactly one formatted handler on the root logger.

        Implementation: Calls configure_logging twice.
        Passing implies: Repeated setup never duplicates log lines.
        """
        configure_logging("DEBUG")
        configure_logging("DEBUG")

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == LOG_FORMAT
        assert root.level == logging.DEBUG

    def test_httpx_logger_is_quieter(self):
        configure_logging("INFO")
        assert logging.getLogger("httpx").level == logging.WARNING
