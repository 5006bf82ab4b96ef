"""
Logging configuration for the Unified Payments SDK.

Provides the secret-redacting filter used by every handler the SDK installs,
plus helpers to configure console/file logging for applications and the CLI.
"""

import logging
import logging.handlers
import os
import re
import sys
from pathlib import Path

SDK_LOGGER_NAME = "unified_payments"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SecretRedactor(logging.Filter):
    """Mask credentials in log messages and their arguments.

    Every pattern captures the non-secret prefix as group 1; everything the
    pattern matches after the prefix is replaced.
    """

    SECRET_PATTERNS = [
        # Stripe
        re.compile(r"(sk_live_)[a-zA-Z0-9]+"),
        re.compile(r"(sk_test_)[a-zA-Z0-9]+"),
        re.compile(r"(rk_live_)[a-zA-Z0-9]+"),
        re.compile(r"(rk_test_)[a-zA-Z0-9]+"),
        re.compile(r"(whsec_)[a-zA-Z0-9]+"),
        # PayPal / OAuth
        re.compile(r"(access_token[\"']?\s*[:=]\s*[\"']?)[^&\s\"',}]+", re.IGNORECASE),
        re.compile(r"(client_secret[\"']?\s*[:=]\s*[\"']?)[^&\s\"',}]+", re.IGNORECASE),
        re.compile(r"(Bearer )[a-zA-Z0-9\-_\.\$]+", re.IGNORECASE),
        re.compile(r"(Basic )[a-zA-Z0-9\+/=]+", re.IGNORECASE),
        # Generic
        re.compile(r"(api_key[\"']?\s*[:=]\s*[\"']?)[^&\s\"',}]+", re.IGNORECASE),
        re.compile(r"(secret[\"']?\s*[:=]\s*[\"']?)[^&\s\"',}]+", re.IGNORECASE),
        re.compile(r"(password[\"']?\s*[:=]\s*[\"']?)[^&\s\"',}]+", re.IGNORECASE),
    ]

    @classmethod
    def redact(cls, text: str) -> str:
        for pattern in cls.SECRET_PATTERNS:
            text = pattern.sub(lambda m: m.group(1) + "***REDACTED***", text)
        return text

    def filter(self, record):
        """Redact sensitive data from log messages and arguments."""
        record.msg = self.redact(str(record.msg))
        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self.redact(str(v)) for k, v in record.args.items()}
            else:
                record.args = tuple(self.redact(str(arg)) for arg in record.args)
        return True


def _has_redactor(handler: logging.Handler) -> bool:
    return any(isinstance(f, SecretRedactor) for f in handler.filters)


def _ensure_secret_redactor_on_handlers(logger: logging.Logger | None = None) -> None:
    """Ensure SecretRedactor filter is applied to all existing handlers."""
    target = logger or logging.getLogger()
    for handler in target.handlers:
        if not _has_redactor(handler):
            handler.addFilter(SecretRedactor())


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_format: str | None = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    clear_handlers: bool = False,
) -> logging.Logger:
    """Set up logging for the SDK logger hierarchy.

    Handlers are attached to the ``unified_payments`` logger (not the root
    logger) and always carry a :class:`SecretRedactor`.
    """
    level = (level or "INFO").upper()
    if level not in VALID_LEVELS:
        logging.getLogger(__name__).warning("Invalid log level %s, defaulting to INFO", level)
        level = "INFO"
    log_level = getattr(logging, level)
    formatter = logging.Formatter(log_format or DEFAULT_LOG_FORMAT)

    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)
    sdk_logger.setLevel(log_level)
    sdk_logger.propagate = False

    if clear_handlers:
        for handler in sdk_logger.handlers[:]:
            sdk_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(SecretRedactor())
    sdk_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(SecretRedactor())
        sdk_logger.addHandler(file_handler)

    sdk_logger.debug("Logging configured - Level: %s, File: %s", level, log_file or "None")
    return sdk_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the specified name."""
    if not name or not isinstance(name, str) or not name.strip():
        raise ValueError("Logger name must be a non-empty string")
    return logging.getLogger(name)


def setup_default_logging() -> None:
    """Configure SDK logging from ``UnifiedPayments_LogLevel`` / ``UnifiedPayments_LogFile``."""
    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)
    if sdk_logger.handlers:
        _ensure_secret_redactor_on_handlers(sdk_logger)
        return
    setup_logging(
        level=os.environ.get("UnifiedPayments_LogLevel", "WARNING"),
        log_file=os.environ.get("UnifiedPayments_LogFile"),
    )
