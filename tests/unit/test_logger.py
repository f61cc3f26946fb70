"""Tests for logging configuration."""

import sys
from unittest.mock import MagicMock, patch

import pytest
from loguru import logger

from webpilot.monitoring.logger import get_logger, log_action, setup_logging


@pytest.fixture
def records():
    """Collect emitted log messages through a list sink."""
    messages = []
    sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(sink_id)


@pytest.fixture
def fake_settings(tmp_path):
    return MagicMock(log_level="INFO", debug=False, log_to_file=False, logs_dir=tmp_path / "logs")


class TestSetupLogging:
    """Tests for sink selection."""

    def test_console_only(self, fake_settings):
        """Test only the stderr sink is added when file logging is off."""
        with patch("webpilot.monitoring.logger.logger") as fake_logger, patch(
            "webpilot.monitoring.logger.settings", fake_settings
        ):
            setup_logging()

        fake_logger.remove.assert_called_once_with()
        fake_logger.configure.assert_called_once_with(extra={"name": "webpilot"})
        assert fake_logger.add.call_count == 1
        sink_args = fake_logger.add.call_args
        assert sink_args.args[0] is sys.stderr
        assert sink_args.kwargs["level"] == "INFO"

    def test_file_sink(self, fake_settings):
        """Test a rotated file sink is added under logs_dir."""
        fake_settings.log_to_file = True

        with patch("webpilot.monitoring.logger.logger") as fake_logger, patch(
            "webpilot.monitoring.logger.settings", fake_settings
        ):
            setup_logging()

        assert fake_logger.add.call_count == 2
        file_args = fake_logger.add.call_args_list[1]
        assert file_args.args[0] == fake_settings.logs_dir / "webpilot_{time:YYYY-MM-DD}.log"
        assert file_args.kwargs["rotation"] == "00:00"
        assert file_args.kwargs["retention"] == "14 days"
        assert fake_settings.logs_dir.is_dir()


class TestGetLogger:
    """Tests for get_logger."""

    def test_binds_name(self, records):
        """Test the module name is bound into extra."""
        get_logger("webpilot.tests").info("hello")

        assert records[-1].record["extra"]["name"] == "webpilot.tests"
        assert records[-1].record["message"] == "hello"


class TestLogAction:
    """Tests for log_action."""

    def test_success_logs_debug(self, records):
        """Test successful actions are logged at DEBUG with bound context."""
        log_action("click", "css=#go", length=3)

        record = records[-1].record
        assert record["level"].name == "DEBUG"
        assert record["message"] == "Action click | target=css=#go | status=SUCCESS"
        assert record["extra"]["action"] == "click"
        assert record["extra"]["target"] == "css=#go"
        assert record["extra"]["success"] is True
        assert record["extra"]["length"] == 3

    def test_failure_logs_warning(self, records):
        """Test failed actions are logged at WARNING."""
        log_action("screenshot", "/tmp/shot.png", success=False)

        record = records[-1].record
        assert record["level"].name == "WARNING"
        assert record["message"].endswith("status=FAILED")

    def test_duration_formatting(self, records):
        """Test durations are rendered with millisecond precision."""
        log_action("navigate", "https://example.com", duration=0.12345)

        assert records[-1].record["message"].endswith(" | duration=0.123s")

    def test_braces_in_target(self, records):
        """Test targets containing braces are logged verbatim."""
        log_action("run_js", "return {a: 1}")

        assert "target=return {a: 1}" in records[-1].record["message"]
