"""Centralized logging configuration using loguru.

Provides:
- Configurable log levels from Settings
- CLI flag override (--verbose/--quiet)
- Standard library interception (SQLAlchemy, httpx)
- Repository URL binding, shown on console lines of the tracked repository
- Optional file rotation logging
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

# Type alias for log levels
LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Logger name bound by bind_repository()
TRACKER_LOGGER_NAME = "repo_tracker.tracker"


class InterceptHandler(logging.Handler):
    """Handler to intercept standard library logging and route to loguru.

    This enables control over SQLAlchemy, httpx, and other library logs.
    """

    def emit(self, record: logging.LogRecord) -> None:
        """Route stdlib log record to loguru."""
        from types import FrameType

        # Get corresponding loguru level
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = str(record.levelno)

        # Find caller from where originated the logged message
        frame: FrameType | None = logging.currentframe()
        depth = 2
        while frame is not None:
            if frame.f_code.co_filename != logging.__file__:
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _console_format(record: Any) -> str:
    """Console line format; adds the repository URL when one is bound."""
    extra = record["extra"]
    source = "<cyan>{extra[name]}</cyan>" if "name" in extra else "<cyan>{name}</cyan>"
    if "url" in extra:
        source += " <magenta>{extra[url]}</magenta>"
    return (
        "<dim>{time:HH:mm:ss}</dim> | "
        "<level>{level: <8}</level> | "
        f"{source} - "
        "<level>{message}</level>\n{exception}"
    )


def setup_logging(
    level: LogLevel = "INFO",
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    serialize: bool = False,
) -> Logger:
    """Configure logging for the application.

    Args:
        level: Base log level from config
        verbose: If True, use DEBUG level (overrides level)
        quiet: If True, use WARNING level (overrides level)
        log_file: Optional path for file logging with rotation
        rotation: When to rotate log file (e.g., "10 MB", "1 day")
        retention: How long to keep rotated logs
        serialize: If True, output JSON format (useful for file logs)

    Returns:
        Configured logger instance

    Note:
        verbose takes precedence over quiet if both are True.
    """
    # Determine effective level
    effective_level: LogLevel
    if verbose:
        effective_level = "DEBUG"
    elif quiet:
        effective_level = "WARNING"
    else:
        effective_level = level

    # Clear any existing handlers
    logger.remove()

    # Console handler; intercepted stdlib records fall back to the module name
    logger.add(
        sys.stderr,
        level=effective_level,
        format=_console_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    # Optional file handler with rotation
    if log_file:
        logger.add(
            log_file,
            level="DEBUG",  # Always capture everything to file
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{extra[name]}:{function}:{line} | "
                "{extra} | "
                "{message}"
            ),
            rotation=rotation,
            retention=retention,
            compression="gz",
            serialize=serialize,
            filter=lambda record: "name" in record["extra"],
        )

    # Intercept standard library logging
    _intercept_stdlib_logging(effective_level)

    return logger


def _intercept_stdlib_logging(level: LogLevel) -> None:
    """Route stdlib loggers (SQLAlchemy, httpx via githubkit) into loguru."""
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # SQL statements only at debug level
    sql_level = logging.INFO if level in ("TRACE", "DEBUG") else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)

    # httpx: generally quiet unless DEBUG
    httpx_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    logging.getLogger("httpx").setLevel(httpx_level)
    logging.getLogger("httpcore").setLevel(httpx_level)


def get_logger(name: str) -> Logger:
    """Get a logger with the given name bound as context.

    Usage:
        from repo_tracker.logging import get_logger
        logger = get_logger(__name__)
    """
    return logger.bind(name=name)


def bind_repository(url: str) -> Logger:
    """Logger for one tracked repository.

    Console lines from this logger show the repository URL after the
    logger name; file records carry it in their extra context.
    """
    return logger.bind(name=TRACKER_LOGGER_NAME, url=url)


def reset_logging() -> None:
    """Remove every handler (primarily for testing)."""
    logger.remove()
