import logging

from iplens.logging_config import TokenMaskingFilter, ColoredFormatter, setup_logging


def _record(msg, *args, level=logging.INFO):
    return logging.LogRecord("iplens.test", level, __file__, 1, msg, args, None)


def test_token_masking_filter_masks_bearer_and_query_tokens():
    record = _record("sent %s to %s", "Bearer abc.DEF-123", "https://ipinfo.io/8.8.8.8?token=s3cret")

    assert TokenMaskingFilter().filter(record) is True
    message = record.getMessage()
    assert "abc.DEF-123" not in message
    assert "s3cret" not in message
    assert "Bearer [MASKED]" in message
    assert "token=[MASKED]" in message


def test_token_masking_filter_leaves_plain_messages():
    record = _record("cache hit for %s", "8.8.8.8")
    TokenMaskingFilter().filter(record)
    assert record.getMessage() == "cache hit for 8.8.8.8"


def test_coloured_formatter_does_not_touch_the_record():
    record = _record("hello", level=logging.WARNING)
    formatted = ColoredFormatter("%(levelname)s %(message)s").format(record)
    assert "\033[33m" in formatted
    assert record.levelname == "WARNING"


def test_setup_logging_configures_package_logger():
    setup_logging("debug", use_color=False)

    logger = logging.getLogger("iplens")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert any(isinstance(f, TokenMaskingFilter) for f in logger.handlers[0].filters)
    assert logging.getLogger("httpx").level == logging.WARNING

    setup_logging("WARNING", use_color=False)
    assert len(logger.handlers) == 1


def test_setup_logging_falls_back_on_unknown_level():
    setup_logging("chatty", use_color=False)
    assert logging.getLogger("iplens").level == logging.INFO
