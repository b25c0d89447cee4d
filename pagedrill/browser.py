"""
================================================================================
Browser
================================================================================

Facade over one browser session.

Owns:
    - the BrowserDriver (created once through BrowserDriverFactory)
    - the TimeoutHistory backing implicit wait scopes
    - the page registry used to build page objects

Exposes page opening with retry-until-loaded, element resolution, peeking and
passthroughs to the driver.

Usage:
    with Browser(ConfigLoader().load_settings()) as browser:
        login = browser.open(LoginPage)
        login.txt_username.send_keys("demo_user")

        with browser.implicit_timeout(1000, "optional banner"):
            banner_present = login.banner.exists

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Type, TypeVar, Union

import allure
from loguru import logger

from .configuration import Homepage, Settings
from .drivers.base import BrowserDriver
from .drivers.factory import BrowserDriverFactory
from .element import SearchResult, WebElement
from .exceptions import (
    DriverError,
    IndexOutOfRangeError,
    PageLoadTimeoutError,
    PageNotRegisteredError,
    RetryExhaustedError,
)
from .locator import Locator
from .page import PageRegistry, WebPage, default_registry, page_identity
from .timeouts import ImplicitWaitScope, TimeoutHistory
from .waits import RetryOperation, Wait, WaitConfig


P = TypeVar("P", bound=WebPage)

# Implicit wait used while peeking for optional elements
PEEK_TIMEOUT_MS = 1000


class Browser:
    """
    One automated browser session.

    Args:
        settings: Immutable settings snapshot
        driver_factory: Object with create(browser_name) -> BrowserDriver.
            Defaults to a BrowserDriverFactory for settings.webdriver.
        pages: Page registry. Defaults to the module-level default registry.
    """

    def __init__(
        self,
        settings: Settings,
        driver_factory: Optional[Any] = None,
        pages: Optional[PageRegistry] = None,
    ):
        self.settings = settings
        self.pages = pages if pages is not None else default_registry

        factory = driver_factory or BrowserDriverFactory(settings.webdriver)
        self._driver: BrowserDriver = factory.create(settings.webdriver.browser_driver)

        self._timeout_history = TimeoutHistory()
        max_wait = settings.effective_max_wait

        # Initial implicit wait: configured max wait, or 1 minute if not defined
        with self._timeout_history.lock:
            self._timeout_history.push(max_wait)
            self._driver.change_implicit_wait(max_wait)

        logger.info(
            f"Browser ready: {settings.webdriver.browser_driver} "
            f"(remote={settings.webdriver.is_remote}, max_wait={max_wait}ms)"
        )

    def __enter__(self) -> "Browser":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.exit()

    @property
    def driver(self) -> BrowserDriver:
        return self._driver

    @property
    def timeout_history(self) -> TimeoutHistory:
        return self._timeout_history

    # =========================================================================
    # Pages
    # =========================================================================

    def open(self, page_type: Union[Type[P], str]) -> P:
        """
        Navigate to the page's registered homepage and wait until it is loaded.

        Args:
            page_type: Page class or page identity

        Returns:
            The loaded page object

        Raises:
            PageNotRegisteredError: No homepage for the page identity, or a
                string identity with no page factory
            PageLoadTimeoutError: The page never reported itself loaded
        """
        page_name = page_identity(page_type)
        homepage = self.settings.find_homepage(page_name)
        if homepage is None:
            raise PageNotRegisteredError(page_name)

        url = self.resolve_homepage_url(homepage)

        with allure.step(f"Open {page_name}: {url}"):
            target_page = self.create_page(page_type)

            def navigate_to_url() -> None:
                self.go_to_url(url)

            if self.settings.renavigate_on_retry:
                return self.wait_until_loaded(target_page, navigate=navigate_to_url)

            navigate_to_url()
            return self.wait_until_loaded(target_page)

    def create_page(self, page_type: Union[Type[P], str]) -> P:
        """Build a page object bound to this browser."""
        return self.pages.create(page_type, self)

    def wait_until_loaded(
        self,
        page: P,
        navigate: Optional[Callable[[], None]] = None,
    ) -> P:
        """
        Poll `page.is_loaded`, optionally (re)navigating before every poll.

        Raises:
            PageLoadTimeoutError: Deadline reached
        """
        page_name = type(page).__name__
        retry = self.wait_with_retry(
            description=f"{page_name} to load",
            ignored_exceptions=(DriverError,),
        )
        if navigate is not None:
            retry.doing(navigate)

        try:
            retry.until(lambda: page.is_loaded)
        except RetryExhaustedError as e:
            raise PageLoadTimeoutError(
                f"Page {page_name} did not load within {e.timeout}s",
                description=e.description,
                timeout=e.timeout,
                attempt_count=e.attempt_count,
                elapsed_time=e.elapsed_time,
                last_exception=e.last_exception,
            ) from e

        logger.info(f"Page loaded: {page_name}")
        return page

    def resolve_homepage_url(self, homepage: Homepage) -> str:
        """Absolute URL for a homepage; filesystem entries become file:// URIs."""
        if not homepage.is_file_system_path:
            return homepage.url
        root = self.settings.filesystem_root.resolve()
        return (root / homepage.url.lstrip("/\\")).as_uri()

    # =========================================================================
    # Waits
    # =========================================================================

    def wait_config(self, **overrides: Any) -> WaitConfig:
        """Retry configuration derived from settings (deadline = max wait)."""
        values = {
            "timeout": self.settings.effective_max_wait / 1000,
            "initial_interval": self.settings.retry_interval,
        }
        values.update(overrides)
        return WaitConfig(**values)

    def wait_with_retry(
        self,
        description: str = "condition",
        ignored_exceptions: tuple = (),
        **overrides: Any,
    ) -> RetryOperation:
        """Start a retry operation preconfigured from this browser's settings."""
        return Wait.with_retry(
            self.wait_config(**overrides),
            ignored_exceptions=ignored_exceptions,
            description=description,
        )

    def implicit_timeout(self, timeout_ms: int, message: Optional[str] = None) -> ImplicitWaitScope:
        """Scope overriding the implicit wait; use as a context manager."""
        return ImplicitWaitScope(self._driver, self._timeout_history, timeout_ms, message)

    # =========================================================================
    # Elements
    # =========================================================================

    def find_element(self, locator: Locator) -> WebElement:
        """Lazy handle for the locator; nothing is resolved yet."""
        return WebElement.create(self, None, locator)

    def find_elements(self, locator: Locator) -> List[WebElement]:
        """One indexed handle per element currently matching the locator."""
        natives = self._driver.find_elements(locator)
        return [
            WebElement.create(self, None, locator.with_index(i))
            for i in range(len(natives))
        ]

    def find_native_element(
        self,
        locator: Locator,
        parent: Optional[WebElement] = None,
    ) -> SearchResult:
        """
        Resolve a locator (relative to `parent` when given) to one native element.

        Raises:
            IndexOutOfRangeError: locator.index >= number of matches
        """
        within = None
        if parent is not None:
            within = parent.native_element
            if within is None:
                return SearchResult.empty()

        elements = self._driver.find_elements(locator, within)
        total = len(elements)

        if locator.index is not None:
            if locator.index >= total:
                raise IndexOutOfRangeError(locator, locator.index, total)
            return SearchResult.create(elements[locator.index], total)

        return SearchResult.create(elements[0] if elements else None, total)

    def peek_element(self, element: WebElement) -> Optional[WebElement]:
        """
        Best-effort existence check under a short implicit wait.

        Returns:
            A fresh handle for the element when present, None otherwise
        """
        with self.implicit_timeout(PEEK_TIMEOUT_MS, f"peek {element.locator}"):
            web_element = WebElement.create(self, element.parent, element.locator)
            try:
                search_result = web_element.native_element_search_result
            except IndexOutOfRangeError:
                return None
            return web_element if search_result.found else None

    # =========================================================================
    # Driver passthroughs
    # =========================================================================

    def go_to_url(self, url: str) -> None:
        self._driver.go_to_url(url)

    @property
    def page_title(self) -> str:
        return self._driver.title

    def execute_javascript(self, js: str, *arguments: Any) -> Any:
        return self._driver.execute_script(js, *arguments)

    def hover_over(self, element: WebElement) -> None:
        self._driver.hover(element)

    def drag_and_drop_element(self, start_from: WebElement, stop_to: WebElement) -> None:
        self._driver.drag_and_drop(start_from, stop_to)

    def refresh_page(self) -> None:
        self._driver.refresh()

    def maximize_page(self) -> None:
        self._driver.maximize()

    def screenshot(self) -> bytes:
        return self._driver.screenshot()

    def exit(self) -> None:
        self._driver.exit()


__all__ = [
    "Browser",
    "PEEK_TIMEOUT_MS",
]
