"""
Unit Tests for Centralized Logging.

Tests the logging configuration, structured fields, and source handling.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Keep root logger handlers from leaking between tests."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


class TestValidSources:
    """Tests for VALID_SOURCES constant."""

    def test_valid_sources_contains_expected_values(self):
        """Should contain all recognized log source values."""
        from cdn77_client.core.logging import VALID_SOURCES

        assert VALID_SOURCES == frozenset({"cli", "api", "internal"})

    def test_valid_sources_is_frozenset(self):
        """Should be a frozenset (immutable)."""
        from cdn77_client.core.logging import VALID_SOURCES

        assert isinstance(VALID_SOURCES, frozenset)


class TestLoggingConfigLoading:
    """Tests for logging configuration loading from YAML."""

    def test_packaged_logging_yaml_defaults(self):
        """Should load the packaged logging.yaml."""
        from cdn77_client.core import logging as logging_module

        config = logging_module._load_logging_config()

        assert config["level"] == "WARNING"
        assert config["handlers"]["console"]["enabled"] is True
        assert config["handlers"]["file"]["enabled"] is False

    def test_load_logging_config_raises_if_file_missing(self):
        """Should raise FileNotFoundError if logging.yaml doesn't exist."""
        from cdn77_client.core import logging as logging_module

        with patch(
            "cdn77_client.core.logging.load_yaml_config",
            side_effect=FileNotFoundError("Configuration file not found: logging.yaml"),
        ):
            with pytest.raises(FileNotFoundError) as exc_info:
                logging_module._load_logging_config()

            assert "logging.yaml" in str(exc_info.value)

    def test_config_is_cached(self):
        """Should cache the configuration after first load."""
        from cdn77_client.core import logging as logging_module

        test_config = {"level": "INFO", "format": "json"}

        with patch("cdn77_client.core.logging.load_yaml_config", return_value=test_config) as mock_load:
            config1 = logging_module._load_logging_config()
            config2 = logging_module._load_logging_config()

            assert config1 is config2
            mock_load.assert_called_once()


class TestSetupLogging:
    """Tests for setup_logging function."""

    @pytest.fixture
    def mock_logging_config(self):
        """Create a mock logging configuration."""
        return {
            "level": "INFO",
            "format": "json",
            "handlers": {
                "console": {"enabled": True},
                "file": {
                    "enabled": True,
                    "path": "logs/cdn77-client.jsonl",
                    "max_bytes": 10485760,
                    "backup_count": 5,
                },
            },
        }

    def test_setup_logging_configures_root_logger(self, mock_logging_config):
        """Should configure the root logger with correct level."""
        from cdn77_client.core.logging import setup_logging

        with patch("cdn77_client.core.logging._load_logging_config", return_value=mock_logging_config):
            setup_logging(level="DEBUG", format_type="json", enable_file_logging=False)

            assert logging.getLogger().level == logging.DEBUG

    def test_console_handler_writes_to_stderr(self, mock_logging_config):
        """Console logs must not mix with command output on stdout."""
        import sys

        from cdn77_client.core.logging import setup_logging

        with patch("cdn77_client.core.logging._load_logging_config", return_value=mock_logging_config):
            setup_logging(level="INFO", format_type="console", enable_file_logging=False)

            stream_handlers = [
                h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler
            ]
            assert len(stream_handlers) == 1
            assert stream_handlers[0].stream is sys.stderr

    def test_setup_logging_without_console(self, mock_logging_config):
        """Should add no handler when console and file are disabled."""
        from cdn77_client.core.logging import setup_logging

        with patch("cdn77_client.core.logging._load_logging_config", return_value=mock_logging_config):
            setup_logging(enable_console=False, enable_file_logging=False)

            assert logging.getLogger().handlers == []

    def test_setup_logging_with_file_logging_enabled(self, tmp_path, mock_logging_config):
        """Should create a single RotatingFileHandler for the JSONL file."""
        from cdn77_client.core.logging import setup_logging

        log_file = tmp_path / "logs" / "cdn77-client.jsonl"

        with patch("cdn77_client.core.logging._load_logging_config", return_value=mock_logging_config), \
             patch("cdn77_client.core.logging._resolve_log_path", return_value=log_file):
            setup_logging(level="INFO", format_type="json", enable_file_logging=True)

            handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
            assert "RotatingFileHandler" in handler_types
            assert log_file.parent.is_dir()

    def test_setup_logging_uses_config_defaults(self, mock_logging_config):
        """Should use values from logging.yaml when not overridden."""
        from cdn77_client.core.logging import setup_logging

        with patch("cdn77_client.core.logging._load_logging_config", return_value=mock_logging_config):
            setup_logging(enable_file_logging=False)

            assert logging.getLogger().level == logging.INFO

    def test_httpx_loggers_stay_quiet_at_debug(self, mock_logging_config):
        """Should keep httpx and httpcore at WARNING or above."""
        from cdn77_client.core.logging import setup_logging

        with patch("cdn77_client.core.logging._load_logging_config", return_value=mock_logging_config):
            setup_logging(level="DEBUG", enable_file_logging=False)

            assert logging.getLogger("httpx").level == logging.WARNING
            assert logging.getLogger("httpcore").level == logging.WARNING

    def test_file_records_are_json_with_callsite_fields(self, tmp_path, mock_logging_config):
        """Should write one JSON object per line with UTC timestamp and callsite."""
        import json

        from cdn77_client.core.logging import get_logger, log_with_source, setup_logging

        log_file = tmp_path / "cdn77-client.jsonl"

        with patch("cdn77_client.core.logging._load_logging_config", return_value=mock_logging_config), \
             patch("cdn77_client.core.logging._resolve_log_path", return_value=log_file):
            setup_logging(level="INFO", enable_console=False, enable_file_logging=True)

        log_with_source(get_logger("tests.file_records"), "api", "info", "API response", status=200)
        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert record["event"] == "API response"
        assert record["level"] == "info"
        assert record["logger"] == "tests.file_records"
        assert record["source"] == "api"
        assert record["status"] == 200
        assert record["timestamp"].endswith("Z")
        assert record["func_name"] == "test_file_records_are_json_with_callsite_fields"
        assert "lineno" in record


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_structlog_logger(self):
        """Should return a structlog logger."""
        from cdn77_client.core.logging import get_logger

        logger = get_logger("test.module")
        assert hasattr(logger, "bind")
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")


class TestLogWithSource:
    """Tests for log_with_source helper function."""

    def test_log_with_source_adds_source_field(self):
        """Should add source field to log call."""
        from cdn77_client.core.logging import log_with_source

        logger = MagicMock()
        log_with_source(logger, "api", "info", "Test message", extra_field="value")

        logger.info.assert_called_once_with(
            "Test message",
            source="api",
            extra_field="value",
        )

    def test_log_with_source_supports_different_levels(self):
        """Should support different log levels."""
        from cdn77_client.core.logging import log_with_source

        logger = MagicMock()

        for level in ["debug", "info", "warning", "error", "critical"]:
            log_with_source(logger, "cli", level, f"Test {level}")
            getattr(logger, level).assert_called_once()

    def test_log_with_source_raises_on_invalid_level(self):
        """Should raise AttributeError for invalid log levels (no fallback)."""
        from cdn77_client.core.logging import get_logger, log_with_source

        logger = get_logger("test")

        with pytest.raises(AttributeError):
            log_with_source(logger, "cli", "nonexistent_level", "Test")

    def test_log_with_source_rejects_unknown_source(self):
        """Should raise ValueError for a source outside VALID_SOURCES."""
        from cdn77_client.core.logging import log_with_source

        logger = MagicMock()

        with pytest.raises(ValueError, match="Unknown log source"):
            log_with_source(logger, "backend", "info", "Test")

        logger.info.assert_not_called()


class TestResolveLogPath:
    """Tests for _resolve_log_path function."""

    def test_relative_path_resolves_against_working_directory(self, tmp_path, monkeypatch):
        """Should resolve relative paths from the current directory."""
        from cdn77_client.core.logging import _resolve_log_path

        monkeypatch.chdir(tmp_path)
        assert _resolve_log_path("logs/cdn77-client.jsonl") == tmp_path / "logs" / "cdn77-client.jsonl"

    def test_absolute_path_is_kept(self, tmp_path):
        """Should keep absolute paths unchanged."""
        from cdn77_client.core.logging import _resolve_log_path

        target = tmp_path / "custom.jsonl"
        assert _resolve_log_path(str(target)) == target
