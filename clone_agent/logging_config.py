"""Logging utilities with optional JSON output and secret masking"""

from __future__ import annotations

import logging
import re
import sys

from pythonjsonlogger import jsonlogger

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def mask_sensitive_data(text: str) -> str:
    """Mask sensitive data in logs"""
    # Google OAuth access tokens
    text = re.sub(r"ya29\.[A-Za-z0-9._-]+", "ya29.****", text)

    # OAuth client secrets
    text = re.sub(r"GOCSPX-[A-Za-z0-9_-]+", "GOCSPX-****", text)

    # Generic Bearer tokens
    text = re.sub(r"Bearer [A-Za-z0-9._-]+", "Bearer ****", text)

    return text


class MaskingFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that masks sensitive data"""

    def format(self, record):
        record.msg = mask_sensitive_data(record.getMessage())
        record.args = None
        return super().format(record)


class PlainMaskingFormatter(logging.Formatter):
    """Plain-text formatter that masks sensitive data"""

    def format(self, record):
        record.msg = mask_sensitive_data(record.getMessage())
        record.args = None
        return super().format(record)


def setup_logging(level: int = logging.INFO, json_format: bool = False) -> logging.Logger:
    """
    Set up logging for the clone agent.

    Args:
        level: Logging level
        json_format: Emit one JSON object per record instead of plain text

    Returns:
        Logger for the clone_agent package
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if json_format:
        handler.setFormatter(MaskingFormatter(JSON_FORMAT))
    else:
        handler.setFormatter(PlainMaskingFormatter(PLAIN_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    # Reduce noise from libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger = logging.getLogger("clone_agent")
    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance"""
    return logging.getLogger(name)
