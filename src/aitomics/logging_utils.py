"""Loguru configuration helpers."""

import sys

from loguru import logger


def configure_logging(log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure loguru logging with the specified level.

    Args:
        log_level: The logging level to use (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path of a rotating log file

    """
    # Remove default logger
    logger.remove()

    format_string = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stderr,
        level=log_level,
        format=format_string,
    )

    if log_file:
        logger.add(
            log_file,
            level=log_level,
            rotation="100 MB",
            retention="30 days",
            compression="zip",
        )

    logger.info(f"Logging configured at level {log_level}")
