"""Unit tests for the logging setup."""

import json
import logging
import sys
from pathlib import Path

import pytest

from token_normalizer.normalizer_logging import (
    LOGGER_NAME,
    JSONFormatter,
    LogCategory,
    get_category_logger,
    get_logger,
    setup_logging,
)


def console_handlers(logger: logging.Logger) -> list[logging.Handler]:
    # RotatingFileHandler subclasses StreamHandler, so match the exact type
    return [h for h in logger.handlers if type(h) is logging.StreamHandler]


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    setup_logging(quiet=True)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_default_setup(self) -> None:
        logger = setup_logging()
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert not logger.propagate

        handlers = console_handlers(logger)
        assert len(handlers) == 1
        assert handlers[0].level == logging.INFO

    def test_quiet_has_no_console(self) -> None:
        logger = setup_logging(quiet=True)
        assert console_handlers(logger) == []

    def test_verbose_console_level(self) -> None:
        logger = setup_logging(verbose=True)
        assert console_handlers(logger)[0].level == logging.DEBUG

    def test_level_argument(self) -> None:
        logger = setup_logging(level="warning")
        assert console_handlers(logger)[0].level == logging.WARNING

    def test_file_logging(self, tmp_path: Path) -> None:
        log_file = tmp_path / "normalizer.log"
        setup_logging(quiet=True, log_file=log_file)

        get_category_logger(LogCategory.PARSER).debug("Skipped token")

        content = log_file.read_text()
        assert "DEBUG" in content
        assert "token_normalizer.parser" in content
        assert "Skipped token" in content

    def test_json_file_logging(self, tmp_path: Path) -> None:
        log_file = tmp_path / "normalizer.jsonl"
        setup_logging(quiet=True, log_file=log_file, log_format="json")

        get_category_logger(LogCategory.LINT).warning(
            "Rule failed", extra={"rule_id": "broken-reference"}
        )

        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "token_normalizer.lint"
        assert entry["message"] == "Rule failed"
        assert entry["rule_id"] == "broken-reference"


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def make_record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="token_normalizer.parser",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg="Parsed %d tokens",
            args=(3,),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self) -> None:
        entry = json.loads(JSONFormatter().format(self.make_record()))
        assert entry["message"] == "Parsed 3 tokens"
        assert entry["level"] == "INFO"
        assert entry["line"] == 10
        assert "timestamp" in entry
        assert "token_path" not in entry

    def test_extra_fields(self) -> None:
        record = self.make_record(token_path="color.primary", collection="Colors", source="css")
        entry = json.loads(JSONFormatter().format(record))
        assert entry["token_path"] == "color.primary"
        assert entry["collection"] == "Colors"
        assert entry["source"] == "css"

    def test_exception(self) -> None:
        try:
            raise ValueError("bad value")
        except ValueError:
            record = self.make_record()
            record.exc_info = sys.exc_info()
        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad value" in entry["exception"]


class TestLoggers:
    def test_get_logger(self) -> None:
        assert get_logger().name == "token_normalizer"

    @pytest.mark.parametrize("category", list(LogCategory))
    def test_category_loggers_are_children(self, category: LogCategory) -> None:
        logger = get_category_logger(category)
        assert logger.name == f"token_normalizer.{category.value}"
        assert logger.parent is get_logger()
