"""Element locators and lookup with fallback support."""

from dataclasses import dataclass
from typing import Any, Union

from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from webpilot.core.exceptions import ElementNotFoundError, LocatorError
from webpilot.monitoring.logger import get_logger

logger = get_logger(__name__)

STRATEGIES: dict[str, str] = {
    "id": By.ID,
    "name": By.NAME,
    "class": By.CLASS_NAME,
    "class_name": By.CLASS_NAME,
    "tag": By.TAG_NAME,
    "tag_name": By.TAG_NAME,
    "link": By.LINK_TEXT,
    "link_text": By.LINK_TEXT,
    "partial_link": By.PARTIAL_LINK_TEXT,
    "partial_link_text": By.PARTIAL_LINK_TEXT,
    "css": By.CSS_SELECTOR,
    "xpath": By.XPATH,
}

# Reverse map used for display, shortest alias wins
_PREFIXES: dict[str, str] = {
    By.ID: "id",
    By.NAME: "name",
    By.CLASS_NAME: "class",
    By.TAG_NAME: "tag",
    By.LINK_TEXT: "link",
    By.PARTIAL_LINK_TEXT: "partial_link",
    By.CSS_SELECTOR: "css",
    By.XPATH: "xpath",
}


@dataclass(frozen=True)
class Locator:
    """A (strategy, value) pair identifying elements on a page."""

    by: str
    value: str
    name: str = ""

    def __post_init__(self) -> None:
        if self.by not in _PREFIXES:
            raise LocatorError("Unknown locator strategy", {"by": self.by})
        if not self.value:
            raise LocatorError("Locator value must not be empty", {"by": self.by})

    def __str__(self) -> str:
        label = f"{_PREFIXES[self.by]}={self.value}"
        return f"{self.name}({label})" if self.name else label

    def as_tuple(self) -> tuple[str, str]:
        """Get the (by, value) tuple Selenium expects."""
        return self.by, self.value

    @classmethod
    def css(cls, selector: str, name: str = "") -> "Locator":
        return cls(By.CSS_SELECTOR, selector, name)

    @classmethod
    def xpath(cls, expression: str, name: str = "") -> "Locator":
        return cls(By.XPATH, expression, name)

    @classmethod
    def id(cls, element_id: str, name: str = "") -> "Locator":
        return cls(By.ID, element_id, name)

    @classmethod
    def by_name(cls, element_name: str, name: str = "") -> "Locator":
        return cls(By.NAME, element_name, name)

    @classmethod
    def class_name(cls, class_name: str, name: str = "") -> "Locator":
        return cls(By.CLASS_NAME, class_name, name)

    @classmethod
    def tag(cls, tag_name: str, name: str = "") -> "Locator":
        return cls(By.TAG_NAME, tag_name, name)

    @classmethod
    def link_text(cls, text: str, name: str = "", partial: bool = False) -> "Locator":
        return cls(By.PARTIAL_LINK_TEXT if partial else By.LINK_TEXT, text, name)

    @classmethod
    def parse(cls, text: str, name: str = "") -> "Locator":
        """Parse a locator string.

        Accepted forms are ``strategy=value`` (``id=login``, ``xpath=//a``),
        a bare XPath starting with ``/`` or ``(``, and anything else is taken
        as a CSS selector.

        Args:
            text: Locator string
            name: Optional human-readable name

        Returns:
            Locator instance

        Raises:
            LocatorError: If the string is empty or the strategy is unknown
        """
        text = text.strip() if text else ""
        if not text:
            raise LocatorError("Locator string must not be empty")

        if text.startswith(("/", "(")):
            return cls(By.XPATH, text, name)

        prefix, sep, rest = text.partition("=")
        if sep and prefix.strip().isidentifier():
            strategy = prefix.strip().lower()
            if strategy not in STRATEGIES:
                raise LocatorError("Unknown locator strategy", {"strategy": strategy})
            return cls(STRATEGIES[strategy], rest.strip(), name)

        return cls(By.CSS_SELECTOR, text, name)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Locator":
        """Create locator from a ``{"type", "selector", "name"}`` dict."""
        strategy = data.get("type", "css").lower()
        if strategy not in STRATEGIES:
            raise LocatorError("Unknown locator strategy", {"strategy": strategy})
        if "selector" not in data:
            raise LocatorError("Locator dict requires 'selector'", {"keys": sorted(data)})
        return cls(STRATEGIES[strategy], data["selector"], data.get("name", ""))

    @classmethod
    def coerce(cls, obj: "LocatorLike") -> "Locator":
        """Convert a Locator, (by, value) tuple or string into a Locator."""
        if isinstance(obj, Locator):
            return obj
        if isinstance(obj, tuple) and len(obj) == 2:
            return cls(obj[0], obj[1])
        if isinstance(obj, str):
            return cls.parse(obj)
        raise LocatorError("Cannot build locator", {"type": type(obj).__name__})


LocatorLike = Union[Locator, tuple[str, str], str]


class ElementFinder:
    """Immediate element lookups (no waiting beyond the implicit wait)."""

    def __init__(self, driver: WebDriver) -> None:
        self.driver = driver

    def find(self, locator: LocatorLike) -> WebElement:
        """Find a single element.

        Raises:
            ElementNotFoundError: If nothing matches
        """
        loc = Locator.coerce(locator)
        try:
            return self.driver.find_element(*loc.as_tuple())
        except NoSuchElementException as e:
            raise ElementNotFoundError(loc) from e

    def find_all(self, locator: LocatorLike) -> list[WebElement]:
        """Find all matching elements (empty list if none)."""
        loc = Locator.coerce(locator)
        return list(self.driver.find_elements(*loc.as_tuple()))

    def find_within(self, parent: WebElement, locator: LocatorLike) -> WebElement:
        """Find a single element inside ``parent``."""
        loc = Locator.coerce(locator)
        try:
            return parent.find_element(*loc.as_tuple())
        except NoSuchElementException as e:
            raise ElementNotFoundError(loc) from e

    def exists(self, locator: LocatorLike) -> bool:
        return self.count(locator) > 0

    def count(self, locator: LocatorLike) -> int:
        return len(self.find_all(locator))

    def find_first(self, *locators: LocatorLike) -> WebElement:
        """Find an element trying each locator in turn.

        Args:
            *locators: Primary locator followed by fallbacks

        Returns:
            The first element found

        Raises:
            ElementNotFoundError: If no locator matched
        """
        if not locators:
            raise LocatorError("At least one locator is required")

        tried = []
        for candidate in locators:
            loc = Locator.coerce(candidate)
            tried.append(str(loc))
            try:
                element = self.driver.find_element(*loc.as_tuple())
            except NoSuchElementException:
                logger.debug(f"Locator failed: {loc}")
                continue
            logger.debug(f"Found element: {loc}")
            return element

        raise ElementNotFoundError(" | ".join(tried), "Element not found with any locator")
