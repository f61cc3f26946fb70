"""Automation module - Selenium browser management and helpers."""

from .actions import ElementActions
from .alerts import AlertHandler
from .browser import BrowserFactory, BrowserManager, browser_session
from .locators import ElementFinder, Locator
from .screenshots import ScreenshotManager
from .scripts import ScriptExecutor
from .waits import WaitCondition, Waiter, poll_until

__all__ = [
    "BrowserFactory",
    "BrowserManager",
    "browser_session",
    "Locator",
    "ElementFinder",
    "Waiter",
    "WaitCondition",
    "poll_until",
    "ElementActions",
    "AlertHandler",
    "ScreenshotManager",
    "ScriptExecutor",
]
