"""Command-line entry point.

Usage:
    webpilot screenshot https://example.com -o shots --name home
    webpilot title https://example.com --browser firefox --headed
    webpilot run-js https://example.com "return document.links.length"
"""

import argparse
import sys

from selenium.common.exceptions import WebDriverException

from webpilot.automation.browser import browser_session
from webpilot.automation.screenshots import ScreenshotManager
from webpilot.core.config import BrowserType
from webpilot.core.exceptions import WebPilotError
from webpilot.monitoring.logger import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    # Browser options are shared by every subcommand and accepted after it
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--browser",
        choices=[b.value for b in BrowserType],
        default=None,
        help="Browser to launch (default from WEBPILOT_BROWSER_TYPE)",
    )
    common.add_argument("--headed", action="store_true", help="Show the browser window")

    parser = argparse.ArgumentParser(prog="webpilot", description="Selenium browser helpers")
    sub = parser.add_subparsers(dest="command", required=True)

    shot = sub.add_parser("screenshot", parents=[common], help="Save a screenshot of a page")
    shot.add_argument("url")
    shot.add_argument("-o", "--output-dir", default=None, help="Screenshot directory")
    shot.add_argument("--name", default="page", help="File name prefix")

    title = sub.add_parser("title", parents=[common], help="Print the page title")
    title.add_argument("url")

    run_js = sub.add_parser("run-js", parents=[common], help="Run JavaScript and print the result")
    run_js.add_argument("url")
    run_js.add_argument("script")

    return parser


def run(args: argparse.Namespace) -> str:
    """Execute a parsed command and return the text to print."""
    headless = False if args.headed else None
    with browser_session(browser_type=args.browser, headless=headless) as browser:
        browser.navigate(args.url)
        browser.waits.for_page_load()

        if args.command == "screenshot":
            path = ScreenshotManager(browser.driver, args.output_dir).capture(args.name)
            return str(path)

        if args.command == "title":
            return browser.title

        result = browser.scripts.run(args.script)
        return "" if result is None else str(result)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        output = run(args)
    except (WebPilotError, WebDriverException) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
