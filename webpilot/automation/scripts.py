"""JavaScript execution helpers."""

import time
from typing import Any

from selenium.common.exceptions import JavascriptException, TimeoutException
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from webpilot.core.exceptions import ScriptExecutionError
from webpilot.monitoring.logger import get_logger

logger = get_logger(__name__)

DEFAULT_HIGHLIGHT = "border: 3px solid red; background: yellow;"


class ScriptExecutor:
    """Run JavaScript in the current page."""

    def __init__(self, driver: WebDriver) -> None:
        self.driver = driver

    def run(self, script: str, *args: Any) -> Any:
        """Execute synchronous JavaScript.

        Elements passed in ``args`` are available as ``arguments[i]``.

        Args:
            script: JavaScript source; use ``return`` to produce a value
            *args: Script arguments

        Returns:
            Script result converted by Selenium

        Raises:
            ScriptExecutionError: If the script threw
        """
        try:
            return self.driver.execute_script(script, *args)
        except JavascriptException as e:
            logger.warning(f"Script error: {e.msg}")
            raise ScriptExecutionError(script, e.msg or "javascript error") from e

    def run_async(self, script: str, *args: Any) -> Any:
        """Execute asynchronous JavaScript.

        The script signals completion by calling the callback passed as its
        last argument: ``arguments[arguments.length - 1](value)``.

        Raises:
            ScriptExecutionError: If the script threw or never called back
        """
        try:
            return self.driver.execute_async_script(script, *args)
        except JavascriptException as e:
            raise ScriptExecutionError(script, e.msg or "javascript error") from e
        except TimeoutException as e:
            raise ScriptExecutionError(script, "callback not invoked before script timeout") from e

    # Scrolling

    def scroll_to(self, x: int = 0, y: int = 0) -> None:
        self.run("window.scrollTo(arguments[0], arguments[1]);", x, y)

    def scroll_by(self, x: int = 0, y: int = 300) -> None:
        self.run("window.scrollBy(arguments[0], arguments[1]);", x, y)

    def scroll_into_view(self, element: WebElement, block: str = "center") -> None:
        self.run("arguments[0].scrollIntoView({block: arguments[1]});", element, block)

    def page_height(self) -> int:
        return int(self.run("return document.body.scrollHeight;") or 0)

    def scroll_to_bottom(self, pause: float = 0.5, max_scrolls: int = 50) -> int:
        """Scroll until the page height stops growing.

        Args:
            pause: Pause after each scroll for lazy content to load
            max_scrolls: Upper bound on scroll steps

        Returns:
            Number of scroll steps performed
        """
        last_height = self.page_height()
        steps = 0
        while steps < max_scrolls:
            self.scroll_to(0, last_height)
            steps += 1
            time.sleep(pause)
            new_height = self.page_height()
            if new_height == last_height:
                break
            last_height = new_height

        logger.debug(f"Scrolled to bottom | steps={steps}")
        return steps

    # Page state

    def ready_state(self) -> str:
        return self.run("return document.readyState;")

    # Elements

    def click(self, element: WebElement) -> None:
        """Click through the DOM, bypassing overlay interception."""
        self.run("arguments[0].click();", element)

    def set_value(self, element: WebElement, value: str) -> None:
        """Set an input value and fire input/change events."""
        self.run(
            "arguments[0].value = arguments[1];"
            "arguments[0].dispatchEvent(new Event('input', {bubbles: true}));"
            "arguments[0].dispatchEvent(new Event('change', {bubbles: true}));",
            element,
            value,
        )

    def set_attribute(self, element: WebElement, name: str, value: str) -> None:
        self.run("arguments[0].setAttribute(arguments[1], arguments[2]);", element, name, value)

    def remove_attribute(self, element: WebElement, name: str) -> None:
        self.run("arguments[0].removeAttribute(arguments[1]);", element, name)

    def highlight(
        self,
        element: WebElement,
        style: str = DEFAULT_HIGHLIGHT,
        duration: float = 0.5,
    ) -> None:
        """Temporarily restyle an element, then restore its original style."""
        original = element.get_attribute("style") or ""
        self.set_attribute(element, "style", style)
        time.sleep(duration)
        self.set_attribute(element, "style", original)

    # Local storage

    def local_storage_get(self, key: str) -> str | None:
        return self.run("return window.localStorage.getItem(arguments[0]);", key)

    def local_storage_set(self, key: str, value: str) -> None:
        self.run("window.localStorage.setItem(arguments[0], arguments[1]);", key, value)

    def local_storage_clear(self) -> None:
        self.run("window.localStorage.clear();")
