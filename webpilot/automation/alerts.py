"""JavaScript alert, confirm and prompt dialog handling."""

from selenium.common.exceptions import NoAlertPresentException
from selenium.webdriver.common.alert import Alert
from selenium.webdriver.remote.webdriver import WebDriver

from webpilot.automation.waits import Waiter
from webpilot.core.config import settings
from webpilot.core.exceptions import AlertNotPresentError, WaitTimeoutError
from webpilot.monitoring.logger import get_logger

logger = get_logger(__name__)


class AlertHandler:
    """Handles browser dialogs opened by alert(), confirm() and prompt()."""

    ACTIONS = ("accept", "dismiss")

    def __init__(self, driver: WebDriver, timeout: float | None = None) -> None:
        """Initialize alert handler.

        Args:
            driver: Selenium WebDriver instance
            timeout: Default wait for a dialog to appear
        """
        self.driver = driver
        self.timeout = timeout if timeout is not None else settings.explicit_wait

    def is_present(self) -> bool:
        """Check for an open dialog without waiting."""
        try:
            _ = self.driver.switch_to.alert.text
            return True
        except NoAlertPresentException:
            return False

    def wait(self, timeout: float | None = None) -> Alert:
        """Wait for a dialog to open.

        Args:
            timeout: Wait timeout in seconds

        Returns:
            Selenium Alert object

        Raises:
            AlertNotPresentError: If no dialog appeared in time
        """
        effective = timeout if timeout is not None else self.timeout
        try:
            return Waiter(self.driver, effective).for_alert()
        except WaitTimeoutError as e:
            raise AlertNotPresentError(effective) from e

    def text(self, timeout: float | None = None) -> str:
        return self.wait(timeout).text

    def accept(self, timeout: float | None = None) -> str:
        """Accept the dialog and return its message."""
        alert = self.wait(timeout)
        message = alert.text
        alert.accept()
        logger.debug(f"Accepted alert: {message}")
        return message

    def dismiss(self, timeout: float | None = None) -> str:
        """Dismiss the dialog and return its message."""
        alert = self.wait(timeout)
        message = alert.text
        alert.dismiss()
        logger.debug(f"Dismissed alert: {message}")
        return message

    def respond(self, text: str, accept: bool = True, timeout: float | None = None) -> str:
        """Type into a prompt() dialog then close it.

        Args:
            text: Text to enter
            accept: Accept (True) or dismiss (False) afterwards
            timeout: Wait timeout in seconds

        Returns:
            The prompt message
        """
        alert = self.wait(timeout)
        message = alert.text
        alert.send_keys(text)
        if accept:
            alert.accept()
        else:
            alert.dismiss()
        logger.debug(f"Answered prompt: {message} | accepted={accept}")
        return message

    def handle(self, action: str, timeout: float | None = None) -> str:
        """Accept or dismiss the dialog by action name."""
        if action not in self.ACTIONS:
            raise ValueError(f"Invalid alert action: {action}")
        if action == "accept":
            return self.accept(timeout)
        return self.dismiss(timeout)

    def accept_if_present(self) -> str | None:
        """Accept an already-open dialog, if any."""
        try:
            alert = self.driver.switch_to.alert
            message = alert.text
            alert.accept()
        except NoAlertPresentException:
            return None
        logger.debug(f"Accepted pending alert: {message}")
        return message
