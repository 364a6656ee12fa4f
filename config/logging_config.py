"""Logging configuration helpers for LMS Core."""

from __future__ import annotations

import logging
from logging import Logger
from typing import Optional

from config.settings import LoggingConfig, get_logging_config


def configure_logging(config: Optional[LoggingConfig] = None) -> Logger:
    """Configure root logging from LoggingConfig and return the package logger."""
    config = config or get_logging_config()
    level = getattr(logging, str(config.level).upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.format)

    # boto and openai are chatty at INFO
    for noisy in ("botocore", "boto3", "urllib3", "httpx", "openai"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))

    return logging.getLogger("lms_core")
