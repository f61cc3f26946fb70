"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Set test environment before settings are loaded
os.environ["WEBPILOT_LOG_LEVEL"] = "DEBUG"
os.environ["WEBPILOT_LOG_TO_FILE"] = "false"
os.environ["WEBPILOT_EXPLICIT_WAIT"] = "1"
os.environ["WEBPILOT_POLL_FREQUENCY"] = "0.01"

from selenium.webdriver.remote.webelement import WebElement  # noqa: E402


def _make_element(
    text: str = "",
    displayed: bool = True,
    enabled: bool = True,
    selected: bool = False,
):
    """Build a WebElement double that passes Selenium's expected conditions."""
    element = MagicMock(spec=WebElement)
    element.text = text
    element.is_displayed.return_value = displayed
    element.is_enabled.return_value = enabled
    element.is_selected.return_value = selected
    element.get_attribute.return_value = None
    element.screenshot.return_value = True
    return element


@pytest.fixture
def element():
    """A visible, enabled element."""
    return _make_element(text="  Hello  ")


@pytest.fixture
def driver(element):
    """A WebDriver double whose lookups return ``element``."""
    mock_driver = MagicMock()
    mock_driver.find_element.return_value = element
    mock_driver.find_elements.return_value = [element]
    mock_driver.save_screenshot.return_value = True
    mock_driver.window_handles = ["main", "popup"]
    mock_driver.session_id = "session-1"
    return mock_driver


@pytest.fixture
def make_element():
    """Factory for additional element doubles."""
    return _make_element
