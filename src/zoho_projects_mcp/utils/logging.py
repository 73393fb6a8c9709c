"""Logging helpers.

MCP's stdio transport owns *stdout*, so every handler installed here writes
to *stderr*.
"""

from __future__ import annotations

import logging
import sys


def setup_logging(
    level: int = logging.WARNING, logger_name: str = "zoho-projects-mcp"
) -> logging.Logger:
    """Configure the root logger to emit to stderr and return the app logger."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s - %(name)s - %(message)s"))
    root_logger.addHandler(handler)

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    # requests/urllib3 would otherwise log full URLs at DEBUG
    if level > logging.DEBUG:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
    return logger


def mask_sensitive(text: str | None, keep_chars: int = 4) -> str:
    """Mask the middle of a secret, keeping ``keep_chars`` at each end."""
    if not text:
        return ""
    if len(text) <= keep_chars * 2:
        return "*" * len(text)
    return text[:keep_chars] + "*" * (len(text) - keep_chars * 2) + text[-keep_chars:]
