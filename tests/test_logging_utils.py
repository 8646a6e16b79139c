import logging

import pytest

from tagger_options.utils.logging_utils import (
    ColoredFormatter,
    LoggingError,
    setup_logger,
)


def test_setup_logger_writes_plain_log_file(tmp_path):
    log_file = tmp_path / "logs" / "tagger.log"
    logger = setup_logger("tagger_options_test", log_file=log_file)

    logger.warning("unknown option ignored")
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "WARNING - unknown option ignored" in content
    assert "\x1b[" not in content


def test_setup_logger_is_cached():
    first = setup_logger("tagger_options_cached")
    second = setup_logger("tagger_options_cached", level=logging.DEBUG)

    assert first is second
    assert second.level == logging.DEBUG
    assert len(second.handlers) == 1


def test_invalid_format_string():
    with pytest.raises(LoggingError):
        setup_logger("tagger_options_bad_format", format_string="%(message")


def test_colored_formatter_leaves_record_untouched():
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", (), None)

    formatted = ColoredFormatter("%(levelname)s %(message)s").format(record)

    assert "ERROR" in formatted and formatted.endswith("boom")
    assert record.levelname == "ERROR"


def test_cached_logger_rejects_a_different_log_file(tmp_path):
    first = tmp_path / "first.log"
    logger = setup_logger("tagger_options_files", log_file=first)

    assert setup_logger("tagger_options_files", log_file=first) is logger

    with pytest.raises(LoggingError):
        setup_logger("tagger_options_files", log_file=tmp_path / "second.log")
