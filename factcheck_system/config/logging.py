"""Logging configuration using loguru with automatic dev/prod detection."""

import sys
from loguru import logger

from factcheck_system.config.settings import settings


def configure_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure loguru based on environment settings.

    Behavior:
    - Development (TTY + console format): Colorized, human-readable output
    - Production (non-TTY or json format): JSON-structured logs to stderr
    - Respects LOG_LEVEL from settings unless overridden

    Args:
        level: Optional level override (e.g. from a CLI flag)
        log_format: Optional format override ("json" or "console")
    """
    logger.remove()
    logger.configure(extra={"component": "factcheck"})

    level = (level or settings.log_level).upper()
    use_console_format = (log_format or settings.log_format).lower() == "console"

    if sys.stderr.isatty() and use_console_format:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[component]}</cyan> | <level>{message}</level>",
            level=level,
            colorize=True,
        )
    else:
        # stdout is reserved for CLI results, so JSON logs go to stderr
        logger.add(
            sys.stderr,
            format="{message}",
            level=level,
            serialize=True,
            diagnose=False,
        )


def get_logger(component: str):
    """
    Get a logger instance bound to a specific component name.

    Example:
        >>> log = get_logger("search.serper")
        >>> log.info("Searching")
    """
    return logger.bind(component=component)


configure_logging()

__all__ = ["logger", "get_logger", "configure_logging"]
