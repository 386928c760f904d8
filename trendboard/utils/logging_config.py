"""Logging setup for the scraper, API and dashboard.

Log lines go to stdout either as text or as one JSON object per line.
Structured context (language, window, URL, counts) is attached with
``extra=log_context(...)`` and only shows up in the JSON format.
"""

import json
import logging
import sys
from typing import Any

from trendboard.utils.config import get_settings

# LogRecord attribute carrying structured context
CONTEXT_ATTR = "extra_fields"


def log_context(**fields: Any) -> dict[str, dict[str, Any]]:
    """Build the ``extra`` mapping for a log call.

    Usage:
        logger.info("Scraping: %s", url, extra=log_context(language="python"))
    """
    return {CONTEXT_ATTR: fields}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, tagged with the app name and environment."""

    def format(self, record: logging.LogRecord) -> str:
        settings = get_settings()

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "app_name": settings.APP_NAME,
            "environment": settings.ENVIRONMENT,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        context = getattr(record, CONTEXT_ATTR, None)
        if context:
            # Reserved keys above win over context of the same name
            log_data = {**context, **log_data}

        return json.dumps(log_data, default=str)


class StandardFormatter(logging.Formatter):
    """Plain text: ``[time] LEVEL - logger - message``."""

    def __init__(self) -> None:
        super().__init__(
            fmt="[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


_logging_configured = False


def _is_console_handler(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and handler.stream == sys.stdout


def setup_logging(use_json: bool | None = None, force_reconfigure: bool = False) -> None:
    """
    Install the stdout handler on the root logger.

    Level comes from LOG_LEVEL. Calling it again is a no-op unless
    force_reconfigure is set.

    Args:
        use_json: JSON lines if True, text if False, LOG_FORMAT when None
        force_reconfigure: Replace an existing configuration
    """
    global _logging_configured

    if _logging_configured and not force_reconfigure:
        return

    settings = get_settings()
    if use_json is None:
        use_json = settings.LOG_FORMAT == "json"

    root_logger = logging.getLogger()
    # Only drop our own stdout handler; pytest's caplog handler must survive
    for handler in [h for h in root_logger.handlers if _is_console_handler(h)]:
        root_logger.removeHandler(handler)

    log_level = getattr(logging, settings.LOG_LEVEL)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JsonFormatter() if use_json else StandardFormatter())
    root_logger.addHandler(console_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    _logging_configured = True

    logging.getLogger(__name__).debug(
        "Logging configured: level=%s, format=%s",
        settings.LOG_LEVEL,
        "json" if use_json else "text",
    )


def get_logger(name: str) -> logging.Logger:
    """Return a named logger, configuring logging on first use."""
    if not _logging_configured:
        setup_logging()

    return logging.getLogger(name)


def reset_logging() -> None:
    """Drop root handlers and forget the configuration (for tests)."""
    global _logging_configured

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.WARNING)

    _logging_configured = False
