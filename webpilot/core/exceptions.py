"""Exceptions raised by webpilot helpers.

Every error carries a message and an optional context dict that is rendered
into the final string, e.g. ``Element not found [locator=css=#login]``.
"""

from typing import Any


class WebPilotError(Exception):
    """Base exception for all webpilot errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format message with context."""
        if not self.context:
            return self.message
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


class BrowserNotStartedError(WebPilotError):
    """Raised when the driver is used before the browser was started."""

    def __init__(self, message: str = "Browser not initialized. Call start() first.") -> None:
        super().__init__(message)


class UnsupportedBrowserError(WebPilotError):
    """Raised for a browser type the factory cannot build."""

    def __init__(self, browser_type: Any) -> None:
        super().__init__("Unsupported browser type", {"browser_type": browser_type})


class BrowserLaunchError(WebPilotError):
    """Raised when the WebDriver session could not be created."""

    def __init__(self, browser_type: Any, reason: str) -> None:
        super().__init__(f"Failed to launch browser: {reason}", {"browser_type": browser_type})


class NavigationError(WebPilotError):
    """Raised when the browser could not load a URL."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Navigation failed: {reason}", {"url": url})


class LocatorError(WebPilotError):
    """Raised when a locator cannot be parsed."""


class ElementNotFoundError(WebPilotError):
    """Raised when no element matches a locator."""

    def __init__(self, locator: Any, message: str = "Element not found") -> None:
        self.locator = locator
        super().__init__(message, {"locator": locator})


class WaitTimeoutError(WebPilotError):
    """Raised when an explicit wait expires."""

    def __init__(self, condition: str, timeout: float, message: str = "") -> None:
        self.condition = condition
        self.timeout = timeout
        super().__init__(
            message or "Timed out waiting for condition",
            {"condition": condition, "timeout": timeout},
        )


class AlertNotPresentError(WebPilotError):
    """Raised when no JavaScript dialog is open."""

    def __init__(self, timeout: float | None = None) -> None:
        context = {"timeout": timeout} if timeout is not None else None
        super().__init__("No alert present", context)


class ScriptExecutionError(WebPilotError):
    """Raised when JavaScript raised inside the page."""

    def __init__(self, script: str, reason: str) -> None:
        self.script = script
        preview = script if len(script) <= 60 else script[:57] + "..."
        super().__init__(f"Script failed: {reason}", {"script": preview})


class ScreenshotError(WebPilotError):
    """Raised when a screenshot could not be written."""
