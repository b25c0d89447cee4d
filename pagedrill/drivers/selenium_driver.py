"""
================================================================================
Selenium Browser Driver
================================================================================

BrowserDriver implementation backed by a Selenium WebDriver session.

Error policy:
    - JavaScript execution is best-effort: failures are logged and reported
      as None.
    - Every other WebDriverException is re-raised as DriverError with the
      native exception attached.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, List, Optional

from loguru import logger
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.remote.webdriver import WebDriver

from ..exceptions import DriverError, ElementNotFoundError
from ..locator import Locator
from .base import BrowserDriver, NativeElementProvider, native_of


def driver_call(description: str):
    """
    Decorator translating native WebDriver failures into DriverError.

    Args:
        description: What the wrapped call does, used in the error message
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except WebDriverException as e:
                logger.debug(f"WebDriver call failed ({description}): {e.msg or e}")
                raise DriverError(f"Failed to {description}", e) from e

        return wrapper
    return decorator


def _require_native(element: Any) -> Any:
    native = native_of(element)
    if native is None:
        raise ElementNotFoundError(getattr(element, "locator", element))
    return native


class SeleniumBrowserDriver(BrowserDriver):
    """
    Adapter over a selenium.webdriver.Remote (or local subclass) instance.

    Usage:
        >>> driver = SeleniumBrowserDriver(webdriver.Chrome())
        >>> driver.go_to_url("https://example.com")
        >>> driver.find_elements(Locator.create(By.TAG_NAME, "a"))
    """

    def __init__(self, selenium_driver: WebDriver):
        self._driver = selenium_driver
        self._implicit_wait_ms = 0

    @classmethod
    def create(cls, selenium_driver: WebDriver) -> "SeleniumBrowserDriver":
        return cls(selenium_driver)

    @property
    def selenium(self) -> WebDriver:
        """The wrapped Selenium WebDriver."""
        return self._driver

    # =========================================================================
    # Navigation / session
    # =========================================================================

    @driver_call("navigate")
    def go_to_url(self, url: str) -> None:
        logger.debug(f"Navigating to: {url}")
        self._driver.get(url)

    @driver_call("quit browser session")
    def exit(self) -> None:
        self._driver.quit()
        logger.debug("Browser session closed")

    @property
    @driver_call("read page title")
    def title(self) -> str:
        return self._driver.title

    @title.setter
    def title(self, value: str) -> None:
        self.execute_script("document.title = arguments[0];", value)

    @driver_call("refresh page")
    def refresh(self) -> None:
        self._driver.refresh()

    @driver_call("maximize window")
    def maximize(self) -> None:
        self._driver.maximize_window()

    @driver_call("capture screenshot")
    def screenshot(self) -> bytes:
        return self._driver.get_screenshot_as_png()

    # =========================================================================
    # Implicit wait
    # =========================================================================

    @property
    def implicit_wait(self) -> int:
        return self._implicit_wait_ms

    @driver_call("change implicit wait")
    def change_implicit_wait(self, timeout_ms: int) -> None:
        self._driver.implicitly_wait(timeout_ms / 1000)
        self._implicit_wait_ms = timeout_ms

    # =========================================================================
    # Lookup
    # =========================================================================

    @driver_call("find elements")
    def find_elements(self, locator: Locator, within: Optional[Any] = None) -> List[Any]:
        by, value = locator.to_selenium()
        search_context = self._driver if within is None else within
        return list(search_context.find_elements(by, value))

    # =========================================================================
    # Scripting and gestures
    # =========================================================================

    def execute_script(self, js: str, *arguments: Any) -> Any:
        try:
            return self._driver.execute_script(js, *arguments)
        except WebDriverException as e:
            logger.error(f"Error when executing JavaScript: {e.msg or e}")
            return None

    @driver_call("hover over element")
    def hover(self, element: NativeElementProvider) -> None:
        native = _require_native(element)
        ActionChains(self._driver).move_to_element(native).perform()

    @driver_call("drag and drop element")
    def drag_and_drop(
        self,
        source: NativeElementProvider,
        target: NativeElementProvider,
    ) -> None:
        source_native = _require_native(source)
        target_native = _require_native(target)
        ActionChains(self._driver).drag_and_drop(source_native, target_native).perform()

    # =========================================================================
    # Native element operations
    # =========================================================================

    @driver_call("click element")
    def click(self, native_element: Any) -> None:
        native_element.click()

    @driver_call("send keys to element")
    def send_keys(self, native_element: Any, text: str) -> None:
        native_element.send_keys(text)

    @driver_call("clear element")
    def clear(self, native_element: Any) -> None:
        native_element.clear()

    @driver_call("read element text")
    def get_text(self, native_element: Any) -> str:
        return native_element.text

    @driver_call("read element attribute")
    def get_attribute(self, native_element: Any, name: str) -> Optional[str]:
        return native_element.get_attribute(name)

    @driver_call("read element visibility")
    def is_displayed(self, native_element: Any) -> bool:
        return native_element.is_displayed()

    @driver_call("read element state")
    def is_enabled(self, native_element: Any) -> bool:
        return native_element.is_enabled()


__all__ = [
    "SeleniumBrowserDriver",
    "driver_call",
]
