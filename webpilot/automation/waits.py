"""Explicit waits built on WebDriverWait."""

import time
from enum import Enum
from typing import Any, Callable, Iterable, TypeVar

from selenium.common.exceptions import NoSuchElementException, TimeoutException
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from webpilot.automation.locators import Locator, LocatorLike
from webpilot.core.config import settings
from webpilot.core.exceptions import WaitTimeoutError
from webpilot.monitoring.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class WaitCondition(str, Enum):
    """Element wait conditions."""

    PRESENCE = "presence"
    VISIBLE = "visible"
    CLICKABLE = "clickable"
    INVISIBLE = "invisible"
    SELECTED = "selected"
    ALL_PRESENT = "all_present"
    ALL_VISIBLE = "all_visible"


_CONDITIONS: dict[WaitCondition, Callable[[tuple[str, str]], Callable]] = {
    WaitCondition.PRESENCE: EC.presence_of_element_located,
    WaitCondition.VISIBLE: EC.visibility_of_element_located,
    WaitCondition.CLICKABLE: EC.element_to_be_clickable,
    WaitCondition.INVISIBLE: EC.invisibility_of_element_located,
    WaitCondition.SELECTED: EC.element_located_to_be_selected,
    WaitCondition.ALL_PRESENT: EC.presence_of_all_elements_located,
    WaitCondition.ALL_VISIBLE: EC.visibility_of_all_elements_located,
}


def poll_until(
    predicate: Callable[[], T],
    timeout: float,
    interval: float = 0.1,
    description: str = "predicate",
) -> T:
    """Call ``predicate`` until it returns a truthy value.

    Args:
        predicate: Zero-argument callable
        timeout: Maximum time to wait in seconds
        interval: Sleep between calls in seconds
        description: Condition name used in the timeout error

    Returns:
        The first truthy value returned by ``predicate``

    Raises:
        WaitTimeoutError: If the predicate never became truthy
    """
    deadline = time.monotonic() + timeout
    while True:
        result = predicate()
        if result:
            return result
        if time.monotonic() >= deadline:
            raise WaitTimeoutError(description, timeout)
        time.sleep(interval)


class Waiter:
    """Explicit waits with typed timeout errors."""

    def __init__(
        self,
        driver: WebDriver,
        timeout: float | None = None,
        poll_frequency: float | None = None,
        ignored_exceptions: Iterable[type[Exception]] | None = None,
    ) -> None:
        """Initialize waiter.

        Args:
            driver: Selenium WebDriver instance
            timeout: Default timeout in seconds (settings.explicit_wait if None)
            poll_frequency: Poll interval in seconds (settings.poll_frequency if None)
            ignored_exceptions: Exceptions ignored while polling
        """
        self.driver = driver
        self.timeout = timeout if timeout is not None else settings.explicit_wait
        self.poll_frequency = (
            poll_frequency if poll_frequency is not None else settings.poll_frequency
        )
        self.ignored_exceptions = tuple(ignored_exceptions or ())

    def _wait(self, timeout: float | None) -> WebDriverWait:
        return WebDriverWait(
            self.driver,
            timeout if timeout is not None else self.timeout,
            poll_frequency=self.poll_frequency,
            ignored_exceptions=self.ignored_exceptions or None,
        )

    def until(
        self,
        condition: Callable[[WebDriver], T],
        timeout: float | None = None,
        description: str = "",
    ) -> T:
        """Wait until ``condition(driver)`` returns a truthy value.

        Raises:
            WaitTimeoutError: If the timeout expires
        """
        effective = timeout if timeout is not None else self.timeout
        name = description or getattr(condition, "__name__", type(condition).__name__)
        try:
            return self._wait(effective).until(condition)
        except TimeoutException as e:
            logger.debug(f"Wait timed out | condition={name} | timeout={effective}")
            raise WaitTimeoutError(name, effective) from e

    def until_not(
        self,
        condition: Callable[[WebDriver], Any],
        timeout: float | None = None,
        description: str = "",
    ) -> Any:
        """Wait until ``condition(driver)`` returns a falsy value."""
        effective = timeout if timeout is not None else self.timeout
        name = description or getattr(condition, "__name__", type(condition).__name__)
        try:
            return self._wait(effective).until_not(condition)
        except TimeoutException as e:
            raise WaitTimeoutError(f"not {name}", effective) from e

    def for_element(
        self,
        locator: LocatorLike,
        condition: WaitCondition | str = WaitCondition.PRESENCE,
        timeout: float | None = None,
    ) -> Any:
        """Wait for an element to reach a condition.

        Args:
            locator: Element locator
            condition: Wait condition
            timeout: Wait timeout in seconds

        Returns:
            WebElement for single-element conditions, list for ALL_*,
            True for SELECTED. INVISIBLE yields True when the element is
            absent and the hidden element itself when it is still present.
        """
        loc = Locator.coerce(locator)
        condition = WaitCondition(condition)
        ec_func = _CONDITIONS[condition]
        return self.until(
            ec_func(loc.as_tuple()),
            timeout,
            description=f"{condition.value} of {loc}",
        )

    def for_elements(
        self,
        locator: LocatorLike,
        visible: bool = False,
        timeout: float | None = None,
    ) -> list[WebElement]:
        """Wait for at least one matching element."""
        condition = WaitCondition.ALL_VISIBLE if visible else WaitCondition.ALL_PRESENT
        return self.for_element(locator, condition, timeout)

    def for_text(self, locator: LocatorLike, text: str, timeout: float | None = None) -> bool:
        loc = Locator.coerce(locator)
        return self.until(
            EC.text_to_be_present_in_element(loc.as_tuple(), text),
            timeout,
            description=f"text '{text}' in {loc}",
        )

    def for_value(self, locator: LocatorLike, text: str, timeout: float | None = None) -> bool:
        loc = Locator.coerce(locator)
        return self.until(
            EC.text_to_be_present_in_element_value(loc.as_tuple(), text),
            timeout,
            description=f"value '{text}' in {loc}",
        )

    def for_title(self, title: str, exact: bool = False, timeout: float | None = None) -> bool:
        condition = EC.title_is(title) if exact else EC.title_contains(title)
        return self.until(condition, timeout, description=f"title '{title}'")

    def for_url(self, fragment: str, exact: bool = False, timeout: float | None = None) -> bool:
        condition = EC.url_to_be(fragment) if exact else EC.url_contains(fragment)
        return self.until(condition, timeout, description=f"url '{fragment}'")

    def for_staleness(self, element: WebElement, timeout: float | None = None) -> bool:
        """Wait until ``element`` is detached from the DOM."""
        return self.until(EC.staleness_of(element), timeout, description="staleness")

    def for_page_load(self, timeout: float | None = None) -> bool:
        """Wait for document.readyState to be complete."""
        return self.until(
            lambda d: d.execute_script("return document.readyState") == "complete",
            timeout,
            description="page load",
        )

    def for_number_of_windows(self, count: int, timeout: float | None = None) -> bool:
        return self.until(
            EC.number_of_windows_to_be(count), timeout, description=f"{count} windows"
        )

    def for_frame(self, locator: LocatorLike, timeout: float | None = None) -> bool:
        """Wait for a frame and switch into it."""
        loc = Locator.coerce(locator)
        return self.until(
            EC.frame_to_be_available_and_switch_to_it(loc.as_tuple()),
            timeout,
            description=f"frame {loc}",
        )

    def for_alert(self, timeout: float | None = None) -> Any:
        """Wait for a JavaScript dialog and return it."""
        return self.until(EC.alert_is_present(), timeout, description="alert")

    def is_present(self, locator: LocatorLike, timeout: float = 2) -> bool:
        """Check if element appears within ``timeout`` without raising."""
        try:
            self.for_element(locator, WaitCondition.PRESENCE, timeout)
            return True
        except (WaitTimeoutError, NoSuchElementException):
            return False
