"""
================================================================================
Element Handles
================================================================================

Lazy, re-resolvable references to page elements.

A WebElement binds (browser, parent, locator). Nothing is looked up at
construction; every access resolves the native element again through the
browser, so handles stay valid across page re-renders.

Queries (exists, count, is_displayed) report absence as a falsy value.
Interactions (click, send_keys, ...) on an absent element raise
ElementNotFoundError.

Usage:
    >>> username = WebElement.create(browser, None, Locator.create(By.ID, "userName"))
    >>> username.send_keys("demo_user")
    >>> login = WebElement.create_navigation(browser, None, locator, DashboardPage)
    >>> dashboard = login.click()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Optional, Type, TypeVar

import allure
from loguru import logger

from .exceptions import ElementNotFoundError, IndexOutOfRangeError
from .locator import Locator

if TYPE_CHECKING:
    from .browser import Browser
    from .page import WebPage


P = TypeVar("P", bound="WebPage")


@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of one resolution attempt.

    Attributes:
        native_element: The resolved native handle, or None when absent
        total_matches: Number of elements the locator matched
    """
    native_element: Optional[Any]
    total_matches: int

    @property
    def found(self) -> bool:
        return self.native_element is not None

    @classmethod
    def create(cls, native_element: Optional[Any], total_matches: int) -> "SearchResult":
        return cls(native_element, total_matches)

    @classmethod
    def empty(cls) -> "SearchResult":
        return cls(None, 0)


class WebElement:
    """Lazy element handle bound to a browser, an optional parent and a locator."""

    def __init__(
        self,
        browser: "Browser",
        parent: Optional["WebElement"],
        locator: Locator,
    ):
        self.browser = browser
        self.parent = parent
        self.locator = locator

    @classmethod
    def create(
        cls,
        browser: "Browser",
        parent: Optional["WebElement"],
        locator: Locator,
    ) -> "WebElement":
        return cls(browser, parent, locator)

    @classmethod
    def create_navigation(
        cls,
        browser: "Browser",
        parent: Optional["WebElement"],
        locator: Locator,
        target_page: Type[P],
    ) -> "NavigationElement[P]":
        return NavigationElement(browser, parent, locator, target_page)

    # =========================================================================
    # Resolution
    # =========================================================================

    @property
    def native_element_search_result(self) -> SearchResult:
        """Resolve now; never cached."""
        return self.browser.find_native_element(self.locator, self.parent)

    @property
    def native_element(self) -> Optional[Any]:
        return self.native_element_search_result.native_element

    def _require_native(self) -> Any:
        native = self.native_element
        if native is None:
            raise ElementNotFoundError(self.locator)
        return native

    def _query_result(self) -> SearchResult:
        # An index past the last match reads as absent for queries
        try:
            return self.native_element_search_result
        except IndexOutOfRangeError:
            return SearchResult.empty()

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def exists(self) -> bool:
        return self._query_result().found

    @property
    def count(self) -> int:
        """Number of elements currently matching the locator (index ignored)."""
        return self.browser.find_native_element(
            self.locator.with_index(None), self.parent
        ).total_matches

    @property
    def is_displayed(self) -> bool:
        native = self._query_result().native_element
        if native is None:
            return False
        return self.browser.driver.is_displayed(native)

    @property
    def is_enabled(self) -> bool:
        native = self._query_result().native_element
        if native is None:
            return False
        return self.browser.driver.is_enabled(native)

    @property
    def text(self) -> str:
        return self.browser.driver.get_text(self._require_native())

    def get_attribute(self, name: str) -> Optional[str]:
        return self.browser.driver.get_attribute(self._require_native(), name)

    # =========================================================================
    # Interactions
    # =========================================================================

    def click(self) -> Any:
        logger.debug(f"Clicking element: {self.locator}")
        self.browser.driver.click(self._require_native())

    def send_keys(self, text: str, clear_first: bool = False) -> "WebElement":
        native = self._require_native()
        if clear_first:
            self.browser.driver.clear(native)
        self.browser.driver.send_keys(native, text)
        return self

    def clear(self) -> "WebElement":
        self.browser.driver.clear(self._require_native())
        return self

    def hover(self) -> None:
        self.browser.hover_over(self)

    def drag_and_drop_to(self, target: "WebElement") -> None:
        self.browser.drag_and_drop_element(self, target)

    def __repr__(self) -> str:
        parent = f", parent={self.parent.locator}" if self.parent is not None else ""
        return f"{type(self).__name__}({self.locator}{parent})"


class NavigationElement(WebElement, Generic[P]):
    """
    Element whose click leads to another page.

    click() waits (polling only, no re-click) until the target page reports
    itself loaded and returns it.
    """

    def __init__(
        self,
        browser: "Browser",
        parent: Optional[WebElement],
        locator: Locator,
        target_page: Type[P],
    ):
        super().__init__(browser, parent, locator)
        self.target_page = target_page

    def click(self) -> P:
        page_name = getattr(self.target_page, "__name__", str(self.target_page))
        with allure.step(f"Navigate via {self.locator} to {page_name}"):
            super().click()
            target = self.browser.create_page(self.target_page)
            return self.browser.wait_until_loaded(target)


__all__ = [
    "NavigationElement",
    "SearchResult",
    "WebElement",
]
