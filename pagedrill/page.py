"""
================================================================================
Base Page Object
================================================================================

Foundation classes for Page Object Model implementation.

Provides:
    - WebPage: a page bound to a Browser, declaring its elements in __init__
    - WebControl: a composite element whose children are located relative to it
    - PageRegistry: explicit page factories keyed by page identity

Usage:
    @register_page
    class LoginPage(WebPage):
        PAGE_TITLE = "Login"

        def __init__(self, browser):
            super().__init__(browser)
            self.txt_username = self.element(By.ID, "userName")
            self.menu = self.control(MenuControl, By.CSS_SELECTOR, "nav.menu")
            self.btn_login = self.navigation(By.ID, "login", DashboardPage)

Element handles are lazy: nothing touches the browser until a handle is used.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Optional, Type, TypeVar, Union

from loguru import logger

from .element import NavigationElement, WebElement
from .exceptions import PageNotRegisteredError
from .locator import By, Locator

if TYPE_CHECKING:
    from .browser import Browser


P = TypeVar("P", bound="WebPage")
C = TypeVar("C", bound="WebControl")

PageFactory = Callable[["Browser"], "WebPage"]


def page_identity(page_type: Union[str, type]) -> str:
    """
    Identity used to look up homepages and factories.

    A page class may set PAGE_NAME; otherwise its class name is used.
    Strings are taken as identities as-is.
    """
    if isinstance(page_type, str):
        return page_type
    return getattr(page_type, "PAGE_NAME", None) or page_type.__name__


class _ElementContainer:
    """Declarative helpers shared by pages and controls."""

    browser: "Browser"

    def _child_parent(self) -> Optional[WebElement]:
        return None

    def element(
        self,
        strategy: Union[By, str],
        value: str,
        index: Optional[int] = None,
    ) -> WebElement:
        """Declare a child element."""
        return WebElement.create(
            self.browser, self._child_parent(), Locator.create(strategy, value, index)
        )

    def navigation(
        self,
        strategy: Union[By, str],
        value: str,
        target_page: Type[P],
        index: Optional[int] = None,
    ) -> NavigationElement[P]:
        """Declare a child element whose click opens `target_page`."""
        return WebElement.create_navigation(
            self.browser,
            self._child_parent(),
            Locator.create(strategy, value, index),
            target_page,
        )

    def control(
        self,
        control_type: Type[C],
        strategy: Union[By, str],
        value: str,
        index: Optional[int] = None,
    ) -> C:
        """Declare a nested control."""
        return control_type(
            self.browser, self._child_parent(), Locator.create(strategy, value, index)
        )


class WebPage(_ElementContainer):
    """
    Base class for all page objects.

    Subclasses declare their elements in __init__ and may override
    `is_loaded`; by default a page is loaded when PAGE_TITLE is empty or
    equals the browser's current title.
    """

    # Override in subclasses
    PAGE_TITLE: str = ""
    PAGE_NAME: Optional[str] = None

    def __init__(self, browser: "Browser"):
        self.browser = browser

    @property
    def title(self) -> str:
        return self.browser.page_title

    @property
    def is_loaded(self) -> bool:
        if not self.PAGE_TITLE:
            return True
        return self.title == self.PAGE_TITLE

    def refresh(self: P) -> P:
        self.browser.refresh_page()
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class WebControl(WebElement, _ElementContainer):
    """A composite element; its children are located inside it."""

    def __init__(
        self,
        browser: "Browser",
        parent: Optional[WebElement],
        locator: Locator,
    ):
        super().__init__(browser, parent, locator)

    def _child_parent(self) -> Optional[WebElement]:
        return self


class PageRegistry:
    """
    Explicit page factories keyed by page identity.

    Replaces reflective construction: each entry is a callable taking a
    Browser and returning the page. Pages without an entry are built by
    calling their class with the browser. A factory registered for one
    class is not used for a different class sharing its identity.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, PageFactory] = {}
        self._owners: Dict[str, Optional[type]] = {}

    def register(self, page_type: Union[str, type], factory: Optional[PageFactory] = None) -> None:
        """
        Register a factory for a page identity.

        Args:
            page_type: Page class or identity string
            factory: Callable(browser) -> page. Defaults to the class itself.
        """
        if factory is None:
            if isinstance(page_type, str):
                raise ValueError(f"A factory is required to register '{page_type}'")
            factory = page_type
        name = page_identity(page_type)
        self._factories[name] = factory
        self._owners[name] = None if isinstance(page_type, str) else page_type
        logger.debug(f"Registered page factory: {name}")

    def unregister(self, page_type: Union[str, type]) -> None:
        name = page_identity(page_type)
        self._factories.pop(name, None)
        self._owners.pop(name, None)

    def get(self, page_type: Union[str, type]) -> Optional[PageFactory]:
        return self._factories.get(page_identity(page_type))

    def __contains__(self, page_type: Union[str, type]) -> bool:
        return page_identity(page_type) in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def create(self, page_type: Union[str, type], browser: "Browser") -> "WebPage":
        """
        Build a page bound to `browser`.

        Raises:
            PageNotRegisteredError: String identity with no registered factory
        """
        name = page_identity(page_type)
        factory = self._factories.get(name)
        if factory is None:
            if isinstance(page_type, str):
                raise PageNotRegisteredError(
                    name, f"No page factory registered for '{name}'"
                )
            factory = page_type
        elif not isinstance(page_type, str):
            owner = self._owners.get(name)
            if owner is not None and owner is not page_type:
                factory = page_type
        return factory(browser)


default_registry = PageRegistry()


def register_page(page_type: Type[P]) -> Type[P]:
    """Class decorator registering a page in the default registry."""
    default_registry.register(page_type)
    return page_type


__all__ = [
    "PageRegistry",
    "WebControl",
    "WebPage",
    "default_registry",
    "page_identity",
    "register_page",
]
