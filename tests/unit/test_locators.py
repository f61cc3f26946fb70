"""Tests for locators and element lookup."""

import pytest
from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.by import By

from webpilot.automation.locators import ElementFinder, Locator
from webpilot.core.exceptions import ElementNotFoundError, LocatorError


class TestLocatorParse:
    """Tests for Locator.parse."""

    @pytest.mark.parametrize(
        "text, by, value",
        [
            ("id=username", By.ID, "username"),
            ("name=q", By.NAME, "q"),
            ("class=btn-primary", By.CLASS_NAME, "btn-primary"),
            ("tag_name=h1", By.TAG_NAME, "h1"),
            ("link=Sign in", By.LINK_TEXT, "Sign in"),
            ("partial_link=Sign", By.PARTIAL_LINK_TEXT, "Sign"),
            ("xpath=//button[@type='submit']", By.XPATH, "//button[@type='submit']"),
            ("CSS = div.card", By.CSS_SELECTOR, "div.card"),
        ],
    )
    def test_prefixed(self, text, by, value):
        """Test strategy=value strings."""
        loc = Locator.parse(text)
        assert loc.as_tuple() == (by, value)

    def test_bare_xpath(self):
        """Test strings starting with / or ( are XPath."""
        assert Locator.parse("//div[@id='x']").by == By.XPATH
        assert Locator.parse("(//li)[2]").by == By.XPATH

    def test_defaults_to_css(self):
        """Test unprefixed strings are CSS, including attribute selectors with '='."""
        assert Locator.parse("#login").as_tuple() == (By.CSS_SELECTOR, "#login")
        assert Locator.parse("input[name='q']").as_tuple() == (By.CSS_SELECTOR, "input[name='q']")

    def test_unknown_strategy(self):
        """Test unknown prefixes are rejected."""
        with pytest.raises(LocatorError, match="Unknown locator strategy"):
            Locator.parse("label=Name")

    def test_empty(self):
        """Test empty strings are rejected."""
        with pytest.raises(LocatorError):
            Locator.parse("   ")
        with pytest.raises(LocatorError):
            Locator.parse("id=")


class TestLocator:
    """Tests for Locator construction."""

    def test_str_includes_name(self):
        """Test display form."""
        assert str(Locator.css("#go")) == "css=#go"
        assert str(Locator.id("go", name="submit")) == "submit(id=go)"

    def test_invalid_by(self):
        """Test unknown By value is rejected."""
        with pytest.raises(LocatorError):
            Locator("bogus", "x")

    def test_coerce(self):
        """Test coercion from tuples, strings and locators."""
        loc = Locator.xpath("//a")
        assert Locator.coerce(loc) is loc
        assert Locator.coerce((By.ID, "main")) == Locator(By.ID, "main")
        assert Locator.coerce("id=main") == Locator(By.ID, "main")
        with pytest.raises(LocatorError):
            Locator.coerce(42)

    def test_from_dict(self):
        """Test creation from a config dict."""
        loc = Locator.from_dict({"type": "xpath", "selector": "//h1", "name": "heading"})
        assert loc == Locator(By.XPATH, "//h1", "heading")
        assert Locator.from_dict({"selector": ".card"}).by == By.CSS_SELECTOR

    def test_from_dict_missing_selector(self):
        """Test dict without selector."""
        with pytest.raises(LocatorError):
            Locator.from_dict({"type": "css"})


class TestElementFinder:
    """Tests for ElementFinder."""

    def test_find(self, driver, element):
        """Test single lookup passes the By tuple through."""
        assert ElementFinder(driver).find("id=user") is element
        driver.find_element.assert_called_once_with(By.ID, "user")

    def test_find_missing(self, driver):
        """Test missing element raises ElementNotFoundError."""
        driver.find_element.side_effect = NoSuchElementException("nope")

        with pytest.raises(ElementNotFoundError) as exc_info:
            ElementFinder(driver).find("#missing")

        assert exc_info.value.locator == Locator.css("#missing")
        assert isinstance(exc_info.value.__cause__, NoSuchElementException)

    def test_find_all_and_count(self, driver, element):
        """Test list lookups."""
        finder = ElementFinder(driver)
        assert finder.find_all(".row") == [element]
        assert finder.count(".row") == 1
        assert finder.exists(".row") is True

        driver.find_elements.return_value = []
        assert finder.exists(".row") is False

    def test_find_within(self, driver, element):
        """Test lookup scoped to a parent element."""
        child = object()
        element.find_element.return_value = child
        assert ElementFinder(driver).find_within(element, "tag=span") is child
        element.find_element.assert_called_once_with(By.TAG_NAME, "span")

    def test_find_first_uses_fallbacks(self, driver, element):
        """Test fallback chain returns the first match."""
        driver.find_element.side_effect = [NoSuchElementException(), element]

        found = ElementFinder(driver).find_first("#primary", "css=.fallback")

        assert found is element
        assert driver.find_element.call_count == 2

    def test_find_first_all_fail(self, driver):
        """Test error lists every attempted locator."""
        driver.find_element.side_effect = NoSuchElementException()

        with pytest.raises(ElementNotFoundError) as exc_info:
            ElementFinder(driver).find_first("#a", "xpath=//b")

        assert "css=#a" in str(exc_info.value)
        assert "xpath=//b" in str(exc_info.value)
