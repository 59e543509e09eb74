"""Logging configuration for the HRMS Admin Console."""
import logging
import re
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

from hrms_admin.core import config

CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")

# Credentials forwarded to the HRMS backend: "Token abc123" headers and "csrftoken=abc" assignments
_CREDENTIAL_PATTERNS = (
    re.compile(r"\b(Token|Bearer)(\s+)(?=[A-Za-z0-9._\-]*\d)[A-Za-z0-9._\-]{6,}"),
    re.compile(r"(?i)\b(token|csrftoken|csrfmiddlewaretoken|x-csrftoken)(\s*[=:]\s*)[^\s,;&]+"),
)


class RedactCredentialsFilter(logging.Filter):
    """Mask API tokens and CSRF values in log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = message
        for pattern in _CREDENTIAL_PATTERNS:
            redacted = pattern.sub(r"\1\2***", redacted)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def _rotating_handler(path: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(log_level: Optional[str] = None, log_dir: Optional[Path] = Path("logs")) -> None:
    """
    Setup application-wide logging configuration.

    Console output always uses the short format. When ``log_dir`` is writable,
    ``app.log`` receives everything and ``errors.log`` only errors.

    Args:
        log_level: Optional log level override. If None, uses DEBUG if settings.DEBUG else INFO
        log_dir: Directory for rotating log files. None disables file logging.
    """
    debug = bool(config.settings and config.settings.DEBUG)
    if log_level:
        level = getattr(logging, log_level.upper(), logging.INFO)
    else:
        level = logging.DEBUG if debug else logging.INFO

    redact = RedactCredentialsFilter()
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    console_handler.addFilter(redact)
    root_logger.addHandler(console_handler)

    # Containers usually log to stdout only
    if log_dir is not None:
        try:
            log_dir.mkdir(exist_ok=True)
            for handler in (
                _rotating_handler(log_dir / "app.log", logging.DEBUG),
                _rotating_handler(log_dir / "errors.log", logging.ERROR),
            ):
                handler.addFilter(redact)
                root_logger.addHandler(handler)
        except (PermissionError, OSError):
            root_logger.warning("File logging not available, using console logging only")

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.info(f"Logging initialized at {logging.getLevelName(level)} level")


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; pass ``__name__``."""
    return logging.getLogger(name)
