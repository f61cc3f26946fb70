"""Tests for JavaScript execution helpers."""

import pytest
from selenium.common.exceptions import JavascriptException, TimeoutException

from webpilot.automation.scripts import ScriptExecutor
from webpilot.core.exceptions import ScriptExecutionError


class TestScriptExecutor:
    """Tests for ScriptExecutor."""

    def test_run_passes_arguments(self, driver, element):
        """Test arguments are forwarded to execute_script."""
        driver.execute_script.return_value = 42

        result = ScriptExecutor(driver).run("return arguments[0].offsetTop;", element)

        assert result == 42
        driver.execute_script.assert_called_once_with("return arguments[0].offsetTop;", element)

    def test_run_translates_javascript_errors(self, driver):
        """Test in-page errors become ScriptExecutionError."""
        driver.execute_script.side_effect = JavascriptException("foo is not defined")

        with pytest.raises(ScriptExecutionError, match="foo is not defined") as exc_info:
            ScriptExecutor(driver).run("return foo;")

        assert exc_info.value.script == "return foo;"

    def test_run_async(self, driver):
        """Test asynchronous scripts."""
        driver.execute_async_script.return_value = "done"
        script = "arguments[arguments.length - 1]('done');"
        assert ScriptExecutor(driver).run_async(script) == "done"

    def test_run_async_timeout(self, driver):
        """Test a callback that never fires."""
        driver.execute_async_script.side_effect = TimeoutException()

        with pytest.raises(ScriptExecutionError, match="callback not invoked"):
            ScriptExecutor(driver).run_async("/* never calls back */")

    def test_long_script_preview_is_truncated(self):
        """Test error message keeps long scripts short."""
        error = ScriptExecutionError("x" * 200, "boom")
        assert "x" * 57 + "..." in str(error)
        assert "x" * 58 not in str(error)

    def test_scroll_helpers(self, driver, element):
        """Test scroll calls."""
        scripts = ScriptExecutor(driver)
        scripts.scroll_to(0, 500)
        scripts.scroll_into_view(element)

        calls = driver.execute_script.call_args_list
        assert calls[0].args == ("window.scrollTo(arguments[0], arguments[1]);", 0, 500)
        assert calls[1].args[1:] == (element, "center")

    def test_scroll_to_bottom_stops_when_height_is_stable(self, driver):
        """Test infinite-scroll loop ends once height stops changing."""
        heights = iter([1000, 2000, 2000])

        def execute(script, *args):
            if "scrollHeight" in script:
                return next(heights)
            return None

        driver.execute_script.side_effect = execute

        assert ScriptExecutor(driver).scroll_to_bottom(pause=0) == 2

    def test_scroll_to_bottom_respects_limit(self, driver):
        """Test max_scrolls caps an ever-growing page."""
        height = {"value": 0}

        def execute(script, *args):
            if "scrollHeight" in script:
                height["value"] += 100
                return height["value"]
            return None

        driver.execute_script.side_effect = execute

        assert ScriptExecutor(driver).scroll_to_bottom(pause=0, max_scrolls=3) == 3

    def test_highlight_restores_style(self, driver, element):
        """Test original style is put back."""
        element.get_attribute.return_value = "color: blue;"

        ScriptExecutor(driver).highlight(element, style="outline: 1px solid red;", duration=0)

        calls = driver.execute_script.call_args_list
        assert calls[0].args[1:] == (element, "style", "outline: 1px solid red;")
        assert calls[1].args[1:] == (element, "style", "color: blue;")

    def test_local_storage(self, driver):
        """Test local storage accessors."""
        driver.execute_script.return_value = "token-123"
        scripts = ScriptExecutor(driver)

        assert scripts.local_storage_get("auth") == "token-123"
        scripts.local_storage_set("auth", "x")
        assert driver.execute_script.call_args.args[1:] == ("auth", "x")
        assert "setItem" in driver.execute_script.call_args.args[0]

        scripts.local_storage_clear()
        driver.execute_script.assert_called_with("window.localStorage.clear();")

    def test_ready_state(self, driver):
        """Test document.readyState passthrough."""
        driver.execute_script.return_value = "complete"
        assert ScriptExecutor(driver).ready_state() == "complete"
