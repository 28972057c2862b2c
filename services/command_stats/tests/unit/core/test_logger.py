import io
import json
import logging

from src.core.logger import get_logger

from shared.logging.json import configure_logging


class TestLogger:
    """Test logger functionality."""

    def test_get_logger_returns_logger(self):
        logger = get_logger("test_logger")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "test_logger"
        assert logger.propagate is True

    def test_get_logger_same_name_returns_same_instance(self):
        assert get_logger("same_name") is get_logger("same_name")

    def test_configure_logging_writes_json(self):
        stream = io.StringIO()
        root = logging.getLogger()
        previous = root.handlers[:], root.level
        try:
            configure_logging(
                service="command_stats",
                environment="production",
                level="DEBUG",
                redaction_patterns=["password"],
                stream=stream,
            )
            get_logger("json_test").info(
                "window_closed", extra={"window": 1000, "password": "hunter2"}
            )
        finally:
            root.handlers, level = previous
            root.setLevel(level)

        payload = json.loads(stream.getvalue().splitlines()[-1])
        assert payload["message"] == "window_closed"
        assert payload["window"] == 1000
        assert payload["password"] == "[REDACTED]"
        assert payload["service"] == "command_stats"

    def test_configure_logging_plain_in_development(self):
        stream = io.StringIO()
        root = logging.getLogger()
        previous = root.handlers[:], root.level
        try:
            configure_logging(
                service="command_stats",
                environment="development",
                level="INFO",
                redaction_patterns=[],
                stream=stream,
            )
            get_logger("plain_test").info("stream_starting")
        finally:
            root.handlers, level = previous
            root.setLevel(level)

        line = stream.getvalue().splitlines()[-1]
        assert "plain_test - INFO - stream_starting" in line
