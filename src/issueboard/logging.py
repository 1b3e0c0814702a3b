"""Logging for issueboard.

One rotating log file (plus optional console) for the ``issueboard`` logger
tree. Every handler carries a ``RedactingFilter`` so tokens never reach a log
line, whether they look like a GitHub token or are just the value a session
was created with.
"""

from __future__ import annotations

import logging
import re
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "issueboard"
LOG_FILE = "issueboard.log"
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 3

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_TOKEN_PATTERNS = [
    (re.compile(r"\b(?:ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{36}\b"), "[GITHUB_TOKEN]"),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{22,}"), "[GITHUB_TOKEN]"),
    (re.compile(r"Bearer [A-Za-z0-9._-]+"), "Bearer [REDACTED]"),
    (re.compile(r"kb_token=[^;\s]+"), "kb_token=[REDACTED]"),
]

_secrets: set[str] = set()
_secrets_lock = threading.Lock()


def register_secret(value: str) -> None:
    """Redact ``value`` verbatim from every later log line."""
    if len(value) >= 8:
        with _secrets_lock:
            _secrets.add(value)


def sanitize_for_log(text: str) -> str:
    """Strip tokens and registered secrets from ``text``."""
    with _secrets_lock:
        secrets = sorted(_secrets, key=len, reverse=True)
    for secret in secrets:
        text = text.replace(secret, "[REDACTED]")
    for pattern, replacement in _TOKEN_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def truncate_output(output: str, max_length: int = 2000) -> str:
    """Cut long text (remote error bodies) down for a log line."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"\n... [truncated, {len(output) - max_length} more chars]"


class RedactingFilter(logging.Filter):
    """Renders each record's message once, sanitized, before any handler formats it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = sanitize_for_log(record.getMessage())
        record.args = None
        return True


def setup_logging(
    log_dir: str | Path = "logs",
    level: str = "INFO",
    console: bool = True,
) -> logging.Logger:
    """Configure the ``issueboard`` logger.

    Safe to call again: existing handlers are closed and replaced.

    Args:
        log_dir: Directory for ``issueboard.log``; created if missing
        level: Level name (DEBUG, INFO, WARNING, ERROR)
        console: Also log to stderr

    Returns:
        The ``issueboard`` logger.
    """
    log_path = Path(log_dir) / LOG_FILE
    log_path.parent.mkdir(parents=True, exist_ok=True)
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    redact = RedactingFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(redact)
        logger.addHandler(handler)

    logger.debug("Logging to %s at %s", log_path, logging.getLevelName(log_level))
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a component, e.g. ``get_logger("server")`` -> ``issueboard.server``."""
    if name != LOGGER_NAME and not name.startswith(f"{LOGGER_NAME}."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
