"""Centralized logging configuration using Loguru."""

import sys
from typing import Any

from loguru import logger

from webpilot.core.config import settings


def setup_logging() -> None:
    """Configure Loguru sinks from settings."""
    # Remove default handler
    logger.remove()

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    file_format = (
        "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
        "{level: <8} | "
        "{name}:{function}:{line} | "
        "{message} | "
        "{extra}"
    )

    logger.configure(extra={"name": "webpilot"})

    logger.add(
        sys.stderr,
        format=console_format,
        level=settings.log_level,
        colorize=True,
        backtrace=True,
        diagnose=settings.debug,
    )

    if settings.log_to_file:
        logs_dir = settings.logs_dir
        logs_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            logs_dir / "webpilot_{time:YYYY-MM-DD}.log",
            format=file_format,
            level="DEBUG",
            rotation="00:00",  # Rotate at midnight
            retention="14 days",
            compression="gz",
            backtrace=True,
            diagnose=settings.debug,
        )

    logger.debug(f"Logging initialized | level={settings.log_level}")


def get_logger(name: str) -> Any:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Bound logger instance
    """
    return logger.bind(name=name)


def log_action(
    action: str,
    target: Any = None,
    success: bool = True,
    duration: float | None = None,
    **extra: Any,
) -> None:
    """Log a browser action event.

    Args:
        action: Action performed (click, type, screenshot, ...)
        target: Locator, URL or path the action applied to
        success: Whether the action succeeded
        duration: Action duration in seconds
        **extra: Additional context
    """
    status = "SUCCESS" if success else "FAILED"
    # Message is preformatted, extras go through bind()
    bound = logger.bind(action=action, target=str(target), success=success, **extra)
    log_func = bound.debug if success else bound.warning

    msg = f"Action {action} | target={target} | status={status}"
    if duration is not None:
        msg += f" | duration={duration:.3f}s"

    log_func(msg)
