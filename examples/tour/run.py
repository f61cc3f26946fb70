"""Guided tour of webpilot against a self-contained demo page.

This example demonstrates:
- Driver setup through BrowserManager
- Element location with Locator strings
- Explicit waits for delayed content
- Accepting and answering JavaScript dialogs
- Page and element screenshots
- Running JavaScript in the page

Usage:
    python -m examples.tour.run
"""

import sys
from pathlib import Path
from urllib.parse import quote

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from webpilot.automation.browser import browser_session
from webpilot.automation.locators import Locator
from webpilot.automation.waits import WaitCondition
from webpilot.monitoring.logger import get_logger, setup_logging

logger = get_logger(__name__)

DEMO_PAGE = """
<html>
  <head><title>webpilot tour</title></head>
  <body>
    <h1 id="heading">Tour</h1>
    <input name="q" placeholder="Search">
    <select id="size">
      <option value="s">Small</option>
      <option value="l">Large</option>
    </select>
    <button id="confirm" onclick="document.title = confirm('Continue?') ? 'yes' : 'no'">
      Confirm
    </button>
    <button id="ask" onclick="document.getElementById('name').textContent = prompt('Name?')">
      Ask
    </button>
    <p id="name"></p>
    <div id="late"></div>
    <script>
      setTimeout(function () {
        document.getElementById('late').innerHTML = '<span class="ready">Loaded</span>';
      }, 1000);
    </script>
  </body>
</html>
"""


def run_tour() -> None:
    """Walk through each helper on the demo page."""
    setup_logging()

    with browser_session() as browser:
        browser.navigate("data:text/html;charset=utf-8," + quote(DEMO_PAGE))
        browser.waits.for_page_load()
        logger.info(f"Opened page | title={browser.title}")

        # Locating elements
        heading = browser.finder.find(Locator.id("heading"))
        logger.info(f"Heading text: {heading.text}")
        browser.actions.type("name=q", "selenium waits")
        browser.actions.select("id=size", text="Large")
        logger.info(f"Selected size: {browser.actions.selected_option_text('id=size')}")

        # Waiting for delayed content
        ready = browser.waits.for_element("css=#late .ready", WaitCondition.VISIBLE, timeout=5)
        logger.info(f"Delayed element appeared: {ready.text}")

        # Dialogs
        browser.actions.click("id=confirm")
        logger.info(f"Confirm said: {browser.alerts.accept()}")
        browser.actions.click("id=ask")
        browser.alerts.respond("Ada")
        logger.info(f"Prompt answer rendered: {browser.actions.text('id=name')}")

        # JavaScript
        buttons = browser.scripts.run("return document.querySelectorAll('button').length;")
        logger.info(f"Buttons on page: {buttons}")
        browser.scripts.highlight(heading, duration=0.2)

        # Screenshots
        page_shot = browser.screenshots.capture("tour")
        element_shot = browser.screenshots.capture_element(Locator.id("heading"), "heading")
        logger.info(f"Screenshots saved: {page_shot}, {element_shot}")


if __name__ == "__main__":
    run_tour()
