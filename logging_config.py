"""
Centralized logging configuration for the book print costing service.

Quotes are computed on Flask request threads, so every log line carries
the name of the thread that produced it. Costing modules log under the
"book_print_costing" namespace.

Features:
    - Automatic thread name and ID in all log messages
    - Console output (always enabled)
    - Rotating file logs (optional, for production)
    - Separate error log for ERROR/CRITICAL messages
    - Helper functions for getting loggers with consistent naming

Log Format:
    2026-03-02 10:15:30 [INFO    ] [MainThread] book_print_costing.app - Starting application
    2026-03-02 10:15:31 [DEBUG   ] [Thread-3] book_print_costing.services.costing_service - Cost computed

Usage:
    # At application startup
    from logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.INFO, enable_file_logging=True)

    # In modules
    logger = get_logger(__name__)
    logger.info("This message includes thread context automatically")

    # Per-quote logger
    quote_logger = get_quote_logger("a1b2c3d4")
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


ROOT_LOGGER_NAME = "book_print_costing"


# =============================================================================
# THREAD CONTEXT FILTER
# =============================================================================

class ThreadContextFilter(logging.Filter):
    """
    Logging filter that adds thread context to all log records.

    Adds `thread_name` and `thread_id` to each record; both are used by the
    format string to show which request thread produced a message.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        current_thread = threading.current_thread()
        record.thread_name = current_thread.name
        record.thread_id = threading.get_ident()

        # Context only, never drop a record
        return True


# =============================================================================
# LOGGING SETUP
# =============================================================================

def _rotating_handler(
    path: Path,
    level: int,
    formatter: logging.Formatter,
    thread_filter: logging.Filter,
) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=path,
        maxBytes=10 * 1024 * 1024,  # 10 MB per file
        backupCount=5,
        encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(thread_filter)
    return handler


def setup_logging(
    app_name: str = ROOT_LOGGER_NAME,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    Configure application logging with thread context.

    This sets up:
    1. Console handler (always enabled)
    2. Rotating file handler (optional)
    3. Error file handler (optional) - for ERROR/CRITICAL only

    Args:
        app_name: Name of the root logger (default: "book_print_costing")
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs relative to this file)
        enable_file_logging: Whether to write to log files (default: True)

    Returns:
        Configured root logger instance
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False

    # Allows re-configuration (app factory may run several times in tests)
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(thread_name)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    thread_filter = ThreadContextFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(thread_filter)
    logger.addHandler(console_handler)

    if enable_file_logging:
        if log_dir is None:
            log_dir = Path(__file__).parent / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        app_log_file = log_dir / f"{app_name}.log"
        logger.addHandler(
            _rotating_handler(app_log_file, log_level, formatter, thread_filter)
        )

        error_log_file = log_dir / f"{app_name}_error.log"
        logger.addHandler(
            _rotating_handler(error_log_file, logging.ERROR, formatter, thread_filter)
        )

        logger.info(f"File logging enabled: {app_log_file}")

    logger.info(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


# =============================================================================
# LOGGER FACTORY FUNCTIONS
# =============================================================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger with the application namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger under "book_print_costing", e.g.
        "modules.imposition" -> "book_print_costing.modules.imposition"
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


class QuoteLoggerAdapter(logging.LoggerAdapter):
    """Prefixes every message with the short quote ID."""

    def process(self, msg, kwargs):
        msg, kwargs = super().process(msg, kwargs)
        return f"[quote {self.extra['quote_id']}] {msg}", kwargs


def get_quote_logger(quote_id: str) -> logging.LoggerAdapter:
    """
    Get a logger for a single quote request.

    All quotes share the "book_print_costing.quote" logger; the adapter
    carries the first 8 characters of the quote ID in `extra` and in the
    message, so no logger is registered per request.

    Example:
        quote_logger = get_quote_logger("a1b2c3d4-e5f6-7890-...")
        # Logger name: "book_print_costing.quote", message "[quote a1b2c3d4] ..."
    """
    short_id = quote_id[:8]
    return QuoteLoggerAdapter(
        logging.getLogger(f"{ROOT_LOGGER_NAME}.quote"), {"quote_id": short_id}
    )
