"""Core module - Settings and exceptions."""

from .config import BrowserType, Settings, get_settings, settings
from .exceptions import (
    AlertNotPresentError,
    BrowserLaunchError,
    BrowserNotStartedError,
    ElementNotFoundError,
    LocatorError,
    NavigationError,
    ScreenshotError,
    ScriptExecutionError,
    UnsupportedBrowserError,
    WaitTimeoutError,
    WebPilotError,
)

__all__ = [
    "BrowserType",
    "Settings",
    "get_settings",
    "settings",
    "WebPilotError",
    "BrowserNotStartedError",
    "UnsupportedBrowserError",
    "BrowserLaunchError",
    "NavigationError",
    "LocatorError",
    "ElementNotFoundError",
    "WaitTimeoutError",
    "AlertNotPresentError",
    "ScriptExecutionError",
    "ScreenshotError",
]
