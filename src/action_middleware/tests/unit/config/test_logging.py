# ABOUTME: Unit tests for loguru logging configuration helpers
# ABOUTME: Tests settings-derived sink configuration, file output and the library-only filter

import pytest
from loguru import logger

from action_middleware.config.logging import (
    LoggerConfig,
    LoggingSettings,
    configure_for_testing,
    get_logger,
    setup_logging,
)
from action_middleware.config.settings import CoreSettings


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(lambda message: None, level="DEBUG")


class TestLoggerConfig:
    """Test suite for deriving sink configuration from settings."""

    @pytest.mark.unit
    def test_defaults_install_console_only(self):
        config = LoggerConfig()

        assert config.console_enabled is True
        assert config.file_path is None
        assert config.serialize is False

    @pytest.mark.unit
    @pytest.mark.config
    def test_from_settings_uses_log_level_and_format(self):
        settings = CoreSettings(LOG_LEVEL="warning", LOG_FORMAT="json")

        config = LoggerConfig.from_settings(settings, overrides=LoggingSettings())

        assert config.level == "WARNING"
        assert config.serialize is True
        assert config.colorize is False

    @pytest.mark.unit
    @pytest.mark.config
    def test_debug_mode_forces_debug_level(self):
        config = LoggerConfig.from_settings(CoreSettings(DEBUG=True), overrides=LoggingSettings())

        assert config.level == "DEBUG"
        assert config.diagnose is True

    @pytest.mark.unit
    @pytest.mark.config
    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ACTION_MIDDLEWARE_LOG_LEVEL", "error")
        monkeypatch.setenv("ACTION_MIDDLEWARE_LOG_FILE", str(tmp_path / "mw.log"))
        monkeypatch.setenv("ACTION_MIDDLEWARE_LOG_LIBRARY_ONLY", "true")

        config = LoggerConfig.from_settings(CoreSettings())

        assert config.level == "ERROR"
        assert config.file_path == tmp_path / "mw.log"
        assert config.library_only is True


class TestLoggingSetup:
    """Test suite for installing sinks."""

    @pytest.mark.unit
    def test_get_logger_binds_name(self, captured_logs):
        bound = get_logger("action_middleware.tests")

        bound.info("hello")

        assert any("INFO | hello" in message for message in captured_logs)

    @pytest.mark.unit
    def test_setup_logging_writes_file(self, tmp_path, restore_logger):
        log_file = tmp_path / "logs" / "action-middleware.log"
        config = LoggerConfig(console_enabled=False, file_path=log_file)

        handler_ids = setup_logging(config)
        get_logger("action_middleware.tests").info("written to file")
        logger.remove()

        assert len(handler_ids) == 1
        assert "written to file" in log_file.read_text()

    @pytest.mark.unit
    def test_library_only_filter_drops_foreign_records(self, tmp_path, restore_logger):
        log_file = tmp_path / "filtered.log"
        setup_logging(LoggerConfig(console_enabled=False, file_path=log_file, library_only=True))

        get_logger("action_middleware.engine").info("kept")
        get_logger("someone.else").info("dropped")
        logger.remove()

        content = log_file.read_text()
        assert "kept" in content
        assert "dropped" not in content

    @pytest.mark.unit
    def test_configure_for_testing(self, restore_logger):
        handler_ids = configure_for_testing()

        get_logger("action_middleware.tests").debug("debug visible")

        assert len(handler_ids) == 1
