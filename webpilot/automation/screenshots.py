"""Page and element screenshots."""

import re
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from webpilot.automation.locators import ElementFinder, LocatorLike
from webpilot.core.config import settings
from webpilot.core.exceptions import ScreenshotError
from webpilot.monitoring.logger import get_logger, log_action

logger = get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(name: str) -> str:
    """Reduce ``name`` to characters that are safe in a file name."""
    cleaned = _UNSAFE_CHARS.sub("_", name).strip("._")
    return cleaned or "screenshot"


class ScreenshotManager:
    """Saves screenshots into a directory with timestamped names."""

    def __init__(self, driver: WebDriver, directory: str | Path | None = None) -> None:
        """Initialize screenshot manager.

        Args:
            driver: Selenium WebDriver instance
            directory: Output directory (settings.screenshot_dir if None)
        """
        self.driver = driver
        self.directory = Path(directory) if directory is not None else settings.screenshot_dir

    def build_path(self, name: str = "page", suffix: str = ".png") -> Path:
        """Create the output directory and return a unique file path.

        Raises:
            ScreenshotError: If the directory cannot be created
        """
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ScreenshotError(
                "Cannot create screenshot directory", {"directory": self.directory}
            ) from e
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        return self.directory / f"{safe_filename(name)}_{stamp}{suffix}"

    def capture(self, name: str = "page") -> Path:
        """Save a screenshot of the current viewport.

        Args:
            name: File name prefix

        Returns:
            Path of the written file

        Raises:
            ScreenshotError: If the driver could not write the file
        """
        path = self.build_path(name)
        try:
            saved = self.driver.save_screenshot(str(path))
        except (WebDriverException, OSError) as e:
            log_action("screenshot", path, success=False)
            raise ScreenshotError("Failed to take screenshot", {"path": path}) from e

        if not saved:
            log_action("screenshot", path, success=False)
            raise ScreenshotError("Driver did not write screenshot", {"path": path})

        log_action("screenshot", path)
        return path

    def capture_element(self, target: WebElement | LocatorLike, name: str = "element") -> Path:
        """Save a screenshot of a single element."""
        if isinstance(target, WebElement):
            element = target
        else:
            element = ElementFinder(self.driver).find(target)
        path = self.build_path(name)
        try:
            saved = element.screenshot(str(path))
        except (WebDriverException, OSError) as e:
            raise ScreenshotError("Failed to take element screenshot", {"path": path}) from e

        if not saved:
            raise ScreenshotError("Driver did not write element screenshot", {"path": path})

        log_action("element_screenshot", path)
        return path

    def as_png(self) -> bytes:
        try:
            return self.driver.get_screenshot_as_png()
        except WebDriverException as e:
            raise ScreenshotError("Failed to take PNG screenshot") from e

    def as_base64(self) -> str:
        try:
            return self.driver.get_screenshot_as_base64()
        except WebDriverException as e:
            raise ScreenshotError("Failed to take base64 screenshot") from e

    @contextmanager
    def capture_on_failure(self, name: str = "failure") -> Generator[None, None, None]:
        """Save a screenshot if the wrapped block raises, then re-raise."""
        try:
            yield
        except Exception:
            try:
                path = self.capture(name)
                logger.error(f"Failure screenshot saved: {path}")
            except ScreenshotError as shot_error:
                logger.error(f"Could not save failure screenshot: {shot_error}")
            raise
