"""
Tests for observability — logging setup and level resolution.
"""

import logging

import pytest

from collect_inventory.core.observability.logging_config import (
    console_formatter,
    resolve_level,
    setup_from_environment,
    setup_logging,
)


class TestResolveLevel:
    def test_default(self):
        assert resolve_level() == "WARNING"

    def test_debug_beats_everything(self):
        assert resolve_level(debug=True, verbose=True, env_level="ERROR", settings_level="INFO") == "DEBUG"

    def test_verbose(self):
        assert resolve_level(verbose=True, env_level="ERROR") == "INFO"

    def test_env_beats_settings(self):
        assert resolve_level(env_level="ERROR", settings_level="INFO") == "ERROR"

    def test_settings(self):
        assert resolve_level(settings_level="INFO") == "INFO"


class TestSetupLogging:
    def test_console_handler(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_unknown_level_is_warning(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_replaces_previous_handlers(self):
        setup_logging("INFO")
        setup_logging("DEBUG")
        assert len(logging.getLogger().handlers) == 1

    @pytest.mark.parametrize("file_level, expected_root", [
        (None, logging.WARNING),
        ("DEBUG", logging.DEBUG),
    ])
    def test_file_handler(self, tmp_path, file_level, expected_root):
        log_file = tmp_path / "inventory.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level=file_level)
        root = logging.getLogger()
        assert len(root.handlers) == 2
        assert root.level == expected_root

        logging.getLogger("collect_inventory.test").warning("disk probe failed")
        for handler in root.handlers:
            handler.flush()
        assert "disk probe failed" in log_file.read_text(encoding="utf-8")
        for handler in root.handlers:
            handler.close()


class TestSetupFromEnvironment:
    def test_env_level(self):
        level = setup_from_environment(environ={"INVENTORY_LOG_LEVEL": "ERROR"})
        assert level == "ERROR"
        assert logging.getLogger().level == logging.ERROR

    def test_flag_beats_env(self):
        level = setup_from_environment(verbose=True, environ={"INVENTORY_LOG_LEVEL": "ERROR"})
        assert level == "INFO"

    def test_settings_level(self):
        assert setup_from_environment(settings_level="INFO", environ={}) == "INFO"

    def test_log_file_from_env(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_from_environment(environ={
            "INVENTORY_LOG_FILE": str(log_file),
            "INVENTORY_LOG_FILE_LEVEL": "DEBUG",
        })
        logging.getLogger("collect_inventory.test").debug("probing lsblk")
        for handler in logging.getLogger().handlers:
            handler.flush()
            handler.close()
        assert "probing lsblk" in log_file.read_text(encoding="utf-8")


class TestConsoleFormatter:
    def test_warning_is_bare_message(self):
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "lspci missing", None, None)
        assert console_formatter(logging.WARNING).format(record) == "lspci missing"

    def test_debug_has_location(self):
        record = logging.LogRecord("collect_inventory.x", logging.DEBUG, __file__, 42, "m", None, None)
        assert "collect_inventory.x:42" in console_formatter(logging.DEBUG).format(record)
