"""
Logging setup for the IPLens command line
"""

import logging
import re
import sys
from typing import Optional


class TokenMaskingFilter(logging.Filter):
    """Mask bearer tokens and token query parameters in log messages"""

    PATTERNS = (
        re.compile(r"(Bearer\s+)[A-Za-z0-9._\-]+", re.IGNORECASE),
        re.compile(r"(token=)[A-Za-z0-9._\-]+", re.IGNORECASE),
    )

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        for pattern in self.PATTERNS:
            message = pattern.sub(r"\1[MASKED]", message)
        record.msg = message
        record.args = None
        return True


class ColoredFormatter(logging.Formatter):
    """Formatter that adds ANSI colours for terminal output"""

    COLOURS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        colour = self.COLOURS.get(record.levelno, "")
        if colour:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{colour}{record.levelname}{self.RESET}"
        return super().format(record)


def _resolve_level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "WARNING", use_color: Optional[bool] = None) -> None:
    """
    Configure the `iplens` logger hierarchy.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_color: Force colour output; defaults to TTY detection on stderr
    """
    level_value = _resolve_level(level)
    colour_output = use_color if use_color is not None else sys.stderr.isatty()
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level_value)
    handler.setFormatter(ColoredFormatter(fmt) if colour_output else logging.Formatter(fmt))
    handler.addFilter(TokenMaskingFilter())

    logger = logging.getLogger("iplens")
    logger.setLevel(level_value)
    logger.handlers.clear()
    logger.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
