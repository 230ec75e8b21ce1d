"""Logging for the SeatWatch proxy and dashboard.

Everything under the ``seatwatch`` logger, plus any third-party loggers the
caller asks to capture (the ASGI server's, when serving), goes to one
rotating file. API keys are scrubbed with ``sanitize_for_log`` before
upstream bodies are logged.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "seatwatch.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "seatwatch"

# httpx and httpcore log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")

# Redmine API key in a header dump, a query string, or a bearer token
_SECRET_PATTERNS = [
    (
        re.compile(r"(X-Redmine-API-Key['\"]?\s*[:=]\s*['\"]?)[A-Za-z0-9]+", re.I),
        r"\1[REDACTED]",
    ),
    (re.compile(r"key=[A-Za-z0-9]+", re.I), "key=[REDACTED]"),
    (re.compile(r"Bearer [A-Za-z0-9._-]+", re.I), "Bearer [REDACTED]"),
]


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
    capture: Iterable[str] = (),
) -> logging.Logger:
    """Send SeatWatch logs to a rotating file and, optionally, the console.

    Safe to call more than once; earlier handlers are closed and replaced.

    Args:
        log_dir: Log directory. Falls back to ``SEATWATCH_LOG_DIR``, then "logs".
        log_file: File name inside ``log_dir``.
        max_bytes: Rotate after this many bytes.
        backup_count: Rotated files to keep.
        level: DEBUG, INFO, WARNING or ERROR. Falls back to
            ``SEATWATCH_LOG_LEVEL``, then INFO.
        console: Also write to stderr.
        capture: Other logger names (e.g. "uvicorn") routed to the same
            handlers instead of propagating to the root logger.

    Returns:
        The ``seatwatch`` logger.
    """
    log_dir = Path(log_dir or os.environ.get("SEATWATCH_LOG_DIR", DEFAULT_LOG_DIR))
    log_dir.mkdir(parents=True, exist_ok=True)

    level = level or os.environ.get("SEATWATCH_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    log_path = log_dir / log_file
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)

    for name in (ROOT_LOGGER, *capture):
        target = logging.getLogger(name)
        _reset_handlers(target)
        target.setLevel(log_level)
        for handler in handlers:
            target.addHandler(handler)
        if name != ROOT_LOGGER:
            target.propagate = False

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.info("Logging to %s (level=%s)", log_path, logging.getLevelName(log_level))
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a SeatWatch component ("review" -> "seatwatch.review")."""
    if not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def truncate_output(output: str, max_length: int = 2000) -> str:
    """Truncate long output (e.g. upstream response bodies) for logging."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"\n... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Redact Redmine API keys and bearer tokens from text about to be logged."""
    for pattern, replacement in _SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text
