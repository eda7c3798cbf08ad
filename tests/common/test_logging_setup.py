"""Tests for logging setup and structured context."""

import json
import logging
import logging.handlers
import sys

from takeout_datefix.common.logging import (
    DetailedFormatter,
    LogContext,
    SimpleFormatter,
    StructuredFormatter,
    setup_logging,
    setup_logging_from_config,
)
from takeout_datefix.common.logging_config import LoggingConfig


def make_record(message="Capture time written: {'path': 'a.jpg'}", level=logging.INFO):
    return logging.LogRecord("takeout_datefix.test", level, __file__, 10, message, None, None, func="fn")


class TestFormatters:
    """Tests for the log formatters."""

    def test_structured_formatter(self):
        data = json.loads(StructuredFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "takeout_datefix.test"
        assert data["message"] == "Capture time written: {'path': 'a.jpg'}"
        assert data["line"] == 10
        assert "timestamp" in data

    def test_structured_formatter_exception(self):
        try:
            raise ValueError("bad timestamp")
        except ValueError:
            record = make_record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        data = json.loads(StructuredFormatter().format(record))

        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "bad timestamp"

    def test_structured_formatter_extra_fields(self):
        record = make_record()
        record.extra_fields = {"media": "IMG_1.jpg"}

        assert json.loads(StructuredFormatter().format(record))["media"] == "IMG_1.jpg"

    def test_simple_formatter(self):
        line = SimpleFormatter().format(make_record())

        assert line.startswith("INFO")
        assert "takeout_datefix.test" in line

    def test_detailed_formatter(self):
        line = DetailedFormatter().format(make_record())

        assert "takeout_datefix.test:fn:10" in line


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_console_only(self):
        setup_logging(level="DEBUG", format="detailed")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, DetailedFormatter)
        assert logging.getLogger("PIL").level == logging.WARNING

    def test_rotating_file(self, tmp_path):
        log_file = tmp_path / "logs" / "datefix.log"

        setup_logging(level="INFO", log_file=log_file, max_file_size_mb=2, backup_count=5)
        logging.getLogger("takeout_datefix.test").info("Run complete")
        for handler in logging.getLogger().handlers:
            handler.flush()

        file_handlers = [
            h for h in logging.getLogger().handlers
            if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 2 * 1024 * 1024
        assert file_handlers[0].backupCount == 5
        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["message"] == "Run complete"

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        setup_logging()

        assert len(logging.getLogger().handlers) == 1

    def test_from_config(self):
        setup_logging_from_config(LoggingConfig(level="warning", format="json"))

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)


class TestLogContext:
    """Tests for LogContext."""

    def test_adds_fields_inside_context(self, caplog):
        logger = logging.getLogger("takeout_datefix.test")

        with caplog.at_level(logging.INFO):
            with LogContext(media="IMG_1.jpg"):
                logger.info("inside")
            logger.info("outside")

        inside, outside = caplog.records
        assert inside.extra_fields == {"media": "IMG_1.jpg"}
        assert not hasattr(outside, "extra_fields")

    def test_nested_contexts(self, caplog):
        logger = logging.getLogger("takeout_datefix.test")

        with caplog.at_level(logging.INFO):
            with LogContext(media="IMG_1.jpg"):
                with LogContext(strategy="direct_name"):
                    logger.info("nested")

        assert caplog.records[0].extra_fields == {"media": "IMG_1.jpg", "strategy": "direct_name"}
