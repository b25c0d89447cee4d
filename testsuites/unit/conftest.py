"""
================================================================================
Unit Test Fixtures
================================================================================

In-memory BrowserDriver used by the unit tests.

The fake keeps a tiny "DOM": a mapping from (by, value) selector pairs to
lists of FakeNativeElement, where each element can carry its own children
mapping for relative lookups. Navigation sets the page title from
`page_titles`, optionally only after a number of visits (`loads_after`).

================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

from pagedrill.browser import Browser
from pagedrill.configuration import Homepage, Settings, WebDriverSettings
from pagedrill.drivers.base import BrowserDriver, native_of
from pagedrill.exceptions import DriverError, ElementNotFoundError
from pagedrill.locator import Locator
from pagedrill.page import PageRegistry

Selector = Tuple[str, str]


class FakeNativeElement:
    """Stand-in for a selenium WebElement."""

    def __init__(
        self,
        name: str,
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
        displayed: bool = True,
        enabled: bool = True,
        children: Optional[Dict[Selector, List["FakeNativeElement"]]] = None,
    ):
        self.name = name
        self.text = text
        self.attributes = attributes or {}
        self.displayed = displayed
        self.enabled = enabled
        self.children = children or {}
        self.clicks = 0
        self.typed: List[str] = []
        self.on_click = None

    def __repr__(self) -> str:
        return f"<FakeNativeElement {self.name}>"


class FakeDriver(BrowserDriver):
    """BrowserDriver backed by dictionaries."""

    def __init__(self) -> None:
        self.dom: Dict[Selector, List[FakeNativeElement]] = {}
        self.page_titles: Dict[str, str] = {}
        self.loads_after: Dict[str, int] = {}
        self.visits: List[str] = []
        self.current_url: Optional[str] = None
        self._title = ""
        self._implicit_wait = 0
        self.implicit_wait_changes: List[int] = []
        self.find_calls: List[Tuple[Locator, int]] = []
        self.scripts: List[Tuple[str, tuple]] = []
        self.script_result: Any = None
        self.hovered: List[Any] = []
        self.dragged: List[Tuple[Any, Any]] = []
        self.refreshed = 0
        self.maximized = False
        self.exited = False
        self.fail_navigation = False
        self.fail_implicit_wait = False

    # Navigation / session

    def go_to_url(self, url: str) -> None:
        if self.fail_navigation:
            raise DriverError(f"Failed to navigate to {url}")
        self.visits.append(url)
        self.current_url = url
        if self.visits.count(url) >= self.loads_after.get(url, 1):
            self._title = self.page_titles.get(url, "")
        else:
            self._title = ""

    def exit(self) -> None:
        self.exited = True

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = value

    def refresh(self) -> None:
        self.refreshed += 1

    def maximize(self) -> None:
        self.maximized = True

    def screenshot(self) -> bytes:
        return b"\x89PNG fake"

    # Implicit wait

    @property
    def implicit_wait(self) -> int:
        return self._implicit_wait

    def change_implicit_wait(self, timeout_ms: int) -> None:
        if self.fail_implicit_wait:
            raise DriverError("implicit wait rejected")
        self._implicit_wait = timeout_ms
        self.implicit_wait_changes.append(timeout_ms)

    # Lookup

    def find_elements(self, locator: Locator, within: Optional[Any] = None) -> List[Any]:
        self.find_calls.append((locator, self._implicit_wait))
        source = self.dom if within is None else within.children
        return list(source.get(locator.to_selenium(), []))

    # Scripting and gestures

    def execute_script(self, js: str, *arguments: Any) -> Any:
        self.scripts.append((js, arguments))
        return self.script_result

    def hover(self, element: Any) -> None:
        native = native_of(element)
        if native is None:
            raise ElementNotFoundError(getattr(element, "locator", element))
        self.hovered.append(native)

    def drag_and_drop(self, source: Any, target: Any) -> None:
        self.dragged.append((native_of(source), native_of(target)))

    # Native element operations

    def click(self, native_element: Any) -> None:
        native_element.clicks += 1
        if native_element.on_click is not None:
            native_element.on_click()

    def send_keys(self, native_element: Any, text: str) -> None:
        native_element.typed.append(text)

    def clear(self, native_element: Any) -> None:
        native_element.typed.clear()

    def get_text(self, native_element: Any) -> str:
        return native_element.text

    def get_attribute(self, native_element: Any, name: str) -> Optional[str]:
        return native_element.attributes.get(name)

    def is_displayed(self, native_element: Any) -> bool:
        return native_element.displayed

    def is_enabled(self, native_element: Any) -> bool:
        return native_element.enabled

    # Helpers for tests

    def add(self, locator: Locator, *elements: FakeNativeElement) -> List[FakeNativeElement]:
        self.dom.setdefault(locator.to_selenium(), []).extend(elements)
        return list(elements)


class FakeDriverFactory:
    """Driver factory handing out a prepared FakeDriver."""

    def __init__(self, driver: FakeDriver):
        self.driver = driver
        self.requested: List[str] = []

    def create(self, browser_name: Optional[str] = None) -> FakeDriver:
        self.requested.append(browser_name)
        return self.driver


@pytest.fixture
def fake_driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def make_element():
    """Factory fixture for FakeNativeElement."""
    return FakeNativeElement


@pytest.fixture
def page_registry() -> PageRegistry:
    return PageRegistry()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def settings(site_root: Path) -> Settings:
    return Settings(
        webdriver=WebDriverSettings(browser_driver="chrome"),
        max_wait=5000,
        homepages=(
            Homepage("HomePage", "/login.html", is_file_system_path=True),
            Homepage("RemoteHomePage", "https://example.com/home"),
        ),
        filesystem_root=site_root,
        retry_interval=0.01,
    )


@pytest.fixture
def make_browser(fake_driver: FakeDriver, page_registry: PageRegistry):
    """Build a Browser over the fake driver for given settings."""

    def _make(settings: Settings) -> Browser:
        return Browser(settings, FakeDriverFactory(fake_driver), pages=page_registry)

    return _make


@pytest.fixture
def browser(make_browser, settings: Settings) -> Browser:
    return make_browser(settings)
