"""Element interactions: clicks, typing, selects, frames and windows."""

from typing import Iterable, Union

from selenium.common.exceptions import (
    ElementClickInterceptedException,
    NoSuchElementException,
    NoSuchFrameException,
    NoSuchWindowException,
)
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.select import Select

from webpilot.automation.locators import ElementFinder, LocatorLike
from webpilot.automation.scripts import ScriptExecutor
from webpilot.automation.waits import WaitCondition, Waiter
from webpilot.core.exceptions import ElementNotFoundError, WebPilotError
from webpilot.monitoring.logger import get_logger, log_action

logger = get_logger(__name__)

Target = Union[WebElement, LocatorLike]


class ElementActions:
    """High-level interactions that accept elements or locators."""

    def __init__(self, driver: WebDriver, waiter: Waiter | None = None) -> None:
        """Initialize element actions.

        Args:
            driver: Selenium WebDriver instance
            waiter: Waiter used to resolve locators (default settings if None)
        """
        self.driver = driver
        self.waiter = waiter or Waiter(driver)
        self.finder = ElementFinder(driver)
        self.scripts = ScriptExecutor(driver)

    def resolve(
        self,
        target: Target,
        condition: WaitCondition = WaitCondition.PRESENCE,
    ) -> WebElement:
        """Return ``target`` if it is an element, else wait for it."""
        if isinstance(target, WebElement):
            return target
        return self.waiter.for_element(target, condition)

    def click(self, target: Target) -> None:
        """Click an element, falling back to a JavaScript click if covered."""
        element = self.resolve(target, WaitCondition.CLICKABLE)
        self.scripts.scroll_into_view(element)
        try:
            element.click()
        except ElementClickInterceptedException:
            logger.debug("Click intercepted, using JavaScript click")
            self.scripts.click(element)
        log_action("click", target)

    def double_click(self, target: Target) -> None:
        element = self.resolve(target, WaitCondition.CLICKABLE)
        ActionChains(self.driver).double_click(element).perform()
        log_action("double_click", target)

    def right_click(self, target: Target) -> None:
        element = self.resolve(target, WaitCondition.VISIBLE)
        ActionChains(self.driver).context_click(element).perform()
        log_action("right_click", target)

    def hover(self, target: Target) -> None:
        element = self.resolve(target, WaitCondition.VISIBLE)
        ActionChains(self.driver).move_to_element(element).perform()
        log_action("hover", target)

    def drag_and_drop(self, source: Target, destination: Target) -> None:
        src = self.resolve(source, WaitCondition.VISIBLE)
        dst = self.resolve(destination, WaitCondition.VISIBLE)
        ActionChains(self.driver).drag_and_drop(src, dst).perform()
        log_action("drag_and_drop", f"{source} -> {destination}")

    def type(self, target: Target, text: str, clear: bool = True) -> None:
        """Type text into an input.

        Args:
            target: Input element or locator
            text: Text to send
            clear: Clear existing content first
        """
        element = self.resolve(target, WaitCondition.VISIBLE)
        if clear:
            element.clear()
        element.send_keys(text)
        log_action("type", target, length=len(text))

    def clear(self, target: Target) -> None:
        """Clear an input, including the select-all fallback for stubborn fields."""
        element = self.resolve(target, WaitCondition.VISIBLE)
        element.clear()
        if element.get_attribute("value"):
            element.send_keys(Keys.CONTROL + "a")
            element.send_keys(Keys.DELETE)

    def press(self, target: Target, *keys: str) -> None:
        """Send special keys, e.g. ``press(loc, Keys.ENTER)``."""
        element = self.resolve(target)
        element.send_keys(*keys)

    def text(self, target: Target) -> str:
        return self.resolve(target).text.strip()

    def attribute(self, target: Target, name: str) -> str | None:
        return self.resolve(target).get_attribute(name)

    def is_displayed(self, target: Target) -> bool:
        """Check visibility without waiting; missing elements are not displayed."""
        try:
            element = target if isinstance(target, WebElement) else self.finder.find(target)
        except ElementNotFoundError:
            return False
        return element.is_displayed()

    def is_enabled(self, target: Target) -> bool:
        return self.resolve(target).is_enabled()

    def is_selected(self, target: Target) -> bool:
        return self.resolve(target).is_selected()

    def set_checkbox(self, target: Target, checked: bool = True) -> bool:
        """Tick or untick a checkbox.

        Returns:
            True if the state was changed
        """
        element = self.resolve(target, WaitCondition.CLICKABLE)
        if element.is_selected() == checked:
            return False
        self.click(element)
        return True

    def select(
        self,
        target: Target,
        value: str | None = None,
        text: str | None = None,
        index: int | None = None,
    ) -> None:
        """Select a dropdown option by exactly one of value, text or index.

        Raises:
            ValueError: If zero or several selection keys are given
            ElementNotFoundError: If no option matches
        """
        given = [arg is not None for arg in (value, text, index)]
        if sum(given) != 1:
            raise ValueError("Provide exactly one of value, text or index")

        dropdown = Select(self.resolve(target))
        try:
            if value is not None:
                dropdown.select_by_value(value)
            elif text is not None:
                dropdown.select_by_visible_text(text)
            else:
                dropdown.select_by_index(index)
        except NoSuchElementException as e:
            option = value if value is not None else text if text is not None else index
            raise ElementNotFoundError(f"option {option!r} in {target}") from e
        log_action("select", target)

    def selected_option_text(self, target: Target) -> str:
        return Select(self.resolve(target)).first_selected_option.text.strip()

    # Frames and windows

    def switch_to_frame(self, frame: Union[Target, int]) -> None:
        """Switch into an iframe by element, locator, name/id or index.

        Raises:
            WebPilotError: If the frame does not exist
        """
        if isinstance(frame, (WebElement, int)):
            reference = frame
        elif isinstance(frame, str) and "=" not in frame and not frame.startswith(("/", "(")):
            # Plain strings are frame names or ids, as in switch_to.frame()
            reference = frame
        else:
            reference = self.resolve(frame)

        try:
            self.driver.switch_to.frame(reference)
        except (NoSuchFrameException, NoSuchElementException) as e:
            raise WebPilotError("Frame not found", {"frame": frame}) from e
        logger.debug(f"Switched to frame: {frame}")

    def switch_to_default_content(self) -> None:
        self.driver.switch_to.default_content()

    def switch_to_parent_frame(self) -> None:
        self.driver.switch_to.parent_frame()

    def switch_to_window(self, handle: str | None = None) -> str:
        """Switch to a window or tab.

        WebDriver does not guarantee the order of ``window_handles``, so
        ``handle=None`` (the last reported handle) is only reliable with two
        windows. Use ``switch_to_new_window`` to follow a popup.

        Args:
            handle: Window handle (None for the last reported handle)

        Returns:
            The handle switched to
        """
        if handle is None:
            handle = self.driver.window_handles[-1]
        try:
            self.driver.switch_to.window(handle)
        except NoSuchWindowException as e:
            raise WebPilotError("Window not found", {"handle": handle}) from e
        return handle

    def switch_to_new_window(
        self,
        known_handles: Iterable[str],
        timeout: float | None = None,
    ) -> str:
        """Wait for a window missing from ``known_handles`` and switch to it.

        Args:
            known_handles: Handles captured before the action that opens a window
            timeout: Wait timeout in seconds

        Returns:
            The new window handle

        Raises:
            WaitTimeoutError: If no new window opened
        """
        known = set(known_handles)
        new_handles = self.waiter.until(
            lambda d: [h for h in d.window_handles if h not in known],
            timeout,
            description="new window",
        )
        return self.switch_to_window(new_handles[0])

    def open_new_tab(self, url: str | None = None) -> str:
        """Open a new tab, switch to it and optionally load ``url``."""
        self.driver.switch_to.new_window("tab")
        if url:
            self.driver.get(url)
        return self.driver.current_window_handle

    def close_window(self) -> None:
        """Close the current window and switch to the last reported remaining one."""
        self.driver.close()
        handles = self.driver.window_handles
        if handles:
            self.driver.switch_to.window(handles[-1])

    def table_rows(self, target: Target) -> list[dict[str, str]]:
        """Read an HTML table into row dicts keyed by header text."""
        table = self.resolve(target)
        headers = [h.text.strip() for h in table.find_elements(By.TAG_NAME, "th")]

        rows = []
        for row in table.find_elements(By.TAG_NAME, "tr"):
            cells = row.find_elements(By.TAG_NAME, "td")
            if not cells:
                continue
            if headers:
                rows.append(
                    {headers[i]: c.text.strip() for i, c in enumerate(cells) if i < len(headers)}
                )
            else:
                rows.append({f"col_{i}": c.text.strip() for i, c in enumerate(cells)})
        return rows

