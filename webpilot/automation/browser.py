"""Selenium browser factory and management."""

from contextlib import contextmanager
from typing import Any, Generator, Iterable

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.edge.service import Service as EdgeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from selenium.webdriver.remote.webdriver import WebDriver
from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.firefox import GeckoDriverManager
from webdriver_manager.microsoft import EdgeChromiumDriverManager

from webpilot.automation.actions import ElementActions
from webpilot.automation.alerts import AlertHandler
from webpilot.automation.locators import ElementFinder
from webpilot.automation.screenshots import ScreenshotManager
from webpilot.automation.scripts import ScriptExecutor
from webpilot.automation.waits import Waiter
from webpilot.core.config import BrowserType, settings
from webpilot.core.exceptions import (
    BrowserLaunchError,
    BrowserNotStartedError,
    NavigationError,
    UnsupportedBrowserError,
)
from webpilot.monitoring.logger import get_logger

logger = get_logger(__name__)


class BrowserFactory:
    """Factory for creating Selenium WebDriver instances."""

    @staticmethod
    def _get_chrome_options(
        headless: bool,
        window_size: tuple[int, int],
        user_agent: str | None = None,
        extra_arguments: Iterable[str] = (),
    ) -> ChromeOptions:
        """Configure Chrome options.

        Args:
            headless: Run in headless mode
            window_size: (width, height) in pixels
            user_agent: Custom user agent
            extra_arguments: Additional command-line switches

        Returns:
            Configured ChromeOptions
        """
        options = ChromeOptions()

        if headless:
            options.add_argument("--headless=new")

        # Stability in containers and CI
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--disable-gpu")
        options.add_argument("--disable-notifications")

        width, height = window_size
        options.add_argument(f"--window-size={width},{height}")

        if user_agent:
            options.add_argument(f"--user-agent={user_agent}")

        for argument in extra_arguments:
            options.add_argument(argument)

        return options

    @staticmethod
    def _get_firefox_options(
        headless: bool,
        window_size: tuple[int, int],
        user_agent: str | None = None,
        extra_arguments: Iterable[str] = (),
    ) -> FirefoxOptions:
        """Configure Firefox options."""
        options = FirefoxOptions()

        if headless:
            options.add_argument("--headless")

        width, height = window_size
        options.add_argument(f"--width={width}")
        options.add_argument(f"--height={height}")

        if user_agent:
            options.set_preference("general.useragent.override", user_agent)

        options.set_preference("dom.webnotifications.enabled", False)

        for argument in extra_arguments:
            options.add_argument(argument)

        return options

    @staticmethod
    def _get_edge_options(
        headless: bool,
        window_size: tuple[int, int],
        user_agent: str | None = None,
        extra_arguments: Iterable[str] = (),
    ) -> EdgeOptions:
        """Configure Edge options."""
        options = EdgeOptions()

        if headless:
            options.add_argument("--headless=new")

        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--disable-gpu")

        width, height = window_size
        options.add_argument(f"--window-size={width},{height}")

        if user_agent:
            options.add_argument(f"--user-agent={user_agent}")

        for argument in extra_arguments:
            options.add_argument(argument)

        return options

    @staticmethod
    def _driver_path(browser_type: BrowserType) -> str | None:
        """Download (or reuse) the driver binary via webdriver-manager.

        Returns None when disabled, letting Selenium Manager resolve it.
        """
        if not settings.use_driver_manager:
            return None

        managers = {
            BrowserType.CHROME: ChromeDriverManager,
            BrowserType.FIREFOX: GeckoDriverManager,
            BrowserType.EDGE: EdgeChromiumDriverManager,
        }
        path = managers[browser_type]().install()
        logger.debug(f"Driver binary resolved | browser={browser_type.value} | path={path}")
        return path

    @classmethod
    def create(
        cls,
        browser_type: BrowserType | str | None = None,
        headless: bool | None = None,
        user_agent: str | None = None,
        window_size: tuple[int, int] | None = None,
        extra_arguments: Iterable[str] = (),
    ) -> WebDriver:
        """Create a new WebDriver instance.

        Args:
            browser_type: Type of browser to use (settings if None)
            headless: Run in headless mode (settings if None)
            user_agent: Custom user agent (settings if None)
            window_size: (width, height) (settings if None)
            extra_arguments: Additional browser command-line switches

        Returns:
            Configured WebDriver instance

        Raises:
            UnsupportedBrowserError: If the browser type is unknown
            BrowserLaunchError: If the driver session could not be created
        """
        try:
            browser_type = BrowserType(browser_type or settings.browser_type)
        except ValueError as e:
            raise UnsupportedBrowserError(browser_type) from e

        headless = headless if headless is not None else settings.headless
        user_agent = user_agent or settings.user_agent
        window_size = window_size or settings.window_size
        extra_arguments = list(extra_arguments)

        logger.info(f"Creating browser | type={browser_type.value} | headless={headless}")

        driver_path = cls._driver_path(browser_type)

        try:
            if browser_type == BrowserType.CHROME:
                options = cls._get_chrome_options(
                    headless, window_size, user_agent, extra_arguments
                )
                driver = webdriver.Chrome(service=ChromeService(driver_path), options=options)

            elif browser_type == BrowserType.FIREFOX:
                options = cls._get_firefox_options(
                    headless, window_size, user_agent, extra_arguments
                )
                driver = webdriver.Firefox(service=FirefoxService(driver_path), options=options)

            else:
                options = cls._get_edge_options(headless, window_size, user_agent, extra_arguments)
                driver = webdriver.Edge(service=EdgeService(driver_path), options=options)
        except WebDriverException as e:
            logger.error(f"Failed to create browser | type={browser_type.value} | error={e.msg}")
            raise BrowserLaunchError(browser_type.value, e.msg or type(e).__name__) from e

        # Configure timeouts
        driver.set_page_load_timeout(settings.page_load_timeout)
        driver.set_script_timeout(settings.script_timeout)
        driver.implicitly_wait(settings.implicit_wait)

        logger.info(f"Browser created successfully | session_id={driver.session_id}")
        return driver


class BrowserManager:
    """Manager for browser lifecycle, navigation and bound helpers."""

    def __init__(
        self,
        browser_type: BrowserType | str | None = None,
        headless: bool | None = None,
        user_agent: str | None = None,
        window_size: tuple[int, int] | None = None,
        extra_arguments: Iterable[str] = (),
    ) -> None:
        """Initialize browser manager.

        Args:
            browser_type: Type of browser to use
            headless: Run in headless mode
            user_agent: Custom user agent
            window_size: (width, height) in pixels
            extra_arguments: Additional browser command-line switches
        """
        self.browser_type = browser_type or settings.browser_type
        self.headless = headless if headless is not None else settings.headless
        self.user_agent = user_agent
        self.window_size = window_size
        self.extra_arguments = list(extra_arguments)
        self._driver: WebDriver | None = None

    @property
    def driver(self) -> WebDriver:
        """Get the running WebDriver instance.

        Raises:
            BrowserNotStartedError: If browser not initialized
        """
        if self._driver is None:
            raise BrowserNotStartedError()
        return self._driver

    @property
    def is_active(self) -> bool:
        """Check if the browser still answers."""
        if self._driver is None:
            return False
        try:
            _ = self._driver.current_url
            return True
        except WebDriverException:
            return False

    def start(self) -> WebDriver:
        """Start browser session.

        Returns:
            WebDriver instance
        """
        if self._driver is not None:
            logger.warning("Browser already started, returning existing instance")
            return self._driver

        self._driver = BrowserFactory.create(
            browser_type=self.browser_type,
            headless=self.headless,
            user_agent=self.user_agent,
            window_size=self.window_size,
            extra_arguments=self.extra_arguments,
        )
        return self._driver

    def stop(self) -> None:
        """Stop browser session."""
        if self._driver is not None:
            try:
                session_id = self._driver.session_id
                self._driver.quit()
                logger.info(f"Browser closed | session_id={session_id}")
            except WebDriverException as e:
                logger.error(f"Error closing browser: {e}")
            finally:
                self._driver = None

    def restart(self) -> WebDriver:
        """Restart browser session."""
        self.stop()
        return self.start()

    # Navigation

    def navigate(self, url: str) -> None:
        """Load ``url`` in the current window.

        Raises:
            NavigationError: If the browser rejected or failed to load the URL
        """
        logger.debug(f"Navigating to: {url}")
        try:
            self.driver.get(url)
        except WebDriverException as e:
            raise NavigationError(url, e.msg or type(e).__name__) from e

    def back(self) -> None:
        self.driver.back()

    def forward(self) -> None:
        self.driver.forward()

    def refresh(self) -> None:
        self.driver.refresh()

    @property
    def title(self) -> str:
        return self.driver.title

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    @property
    def page_source(self) -> str:
        return self.driver.page_source

    def set_window_size(self, width: int, height: int) -> None:
        self.driver.set_window_size(width, height)

    def maximize(self) -> None:
        self.driver.maximize_window()

    # Cookies

    def get_cookies(self) -> list[dict[str, Any]]:
        return self.driver.get_cookies()

    def add_cookie(self, cookie: dict[str, Any]) -> None:
        """Add a cookie to the current domain.

        Args:
            cookie: Cookie dict with at least ``name`` and ``value``
        """
        if "name" not in cookie or "value" not in cookie:
            raise ValueError("Cookie requires 'name' and 'value'")
        self.driver.add_cookie(cookie)

    def delete_all_cookies(self) -> None:
        self.driver.delete_all_cookies()

    # Bound helpers

    @property
    def finder(self) -> ElementFinder:
        return ElementFinder(self.driver)

    @property
    def waits(self) -> Waiter:
        return Waiter(self.driver)

    @property
    def actions(self) -> ElementActions:
        return ElementActions(self.driver)

    @property
    def alerts(self) -> AlertHandler:
        return AlertHandler(self.driver)

    @property
    def screenshots(self) -> ScreenshotManager:
        return ScreenshotManager(self.driver)

    @property
    def scripts(self) -> ScriptExecutor:
        return ScriptExecutor(self.driver)

    def __enter__(self) -> "BrowserManager":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()


@contextmanager
def browser_session(
    browser_type: BrowserType | str | None = None,
    headless: bool | None = None,
    **kwargs: Any,
) -> Generator[BrowserManager, None, None]:
    """Context manager for browser sessions.

    Args:
        browser_type: Type of browser to use
        headless: Run in headless mode
        **kwargs: Further BrowserManager arguments

    Yields:
        Started BrowserManager instance
    """
    manager = BrowserManager(browser_type, headless, **kwargs)
    try:
        manager.start()
        yield manager
    finally:
        manager.stop()
