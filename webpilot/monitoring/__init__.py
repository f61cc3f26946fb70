"""Monitoring module - Loguru logging setup."""

from .logger import get_logger, log_action, setup_logging

__all__ = ["get_logger", "log_action", "setup_logging"]
