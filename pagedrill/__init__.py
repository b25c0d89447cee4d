"""
================================================================================
Pagedrill
================================================================================

Page-object UI automation framework over Selenium WebDriver.

Modules:
    - browser: Browser facade (driver lifecycle, page opening, element lookup)
    - page: WebPage / WebControl base classes and the page registry
    - element: lazy WebElement / NavigationElement handles
    - locator: Locator value object and By strategies
    - timeouts: scoped implicit wait overrides
    - waits: retry-until-condition engine
    - drivers: BrowserDriver contract, Selenium adapter and factory
    - configuration: YAML settings with environment overrides
    - common: loguru setup

Example:
    from pagedrill import Browser, ConfigLoader

    with Browser(ConfigLoader().load_settings()) as browser:
        page = browser.open(LoginPage)

================================================================================
"""

from .browser import Browser
from .configuration import ConfigLoader, Homepage, Settings, WebDriverSettings
from .element import NavigationElement, SearchResult, WebElement
from .exceptions import (
    ConfigurationError,
    DriverError,
    ElementNotFoundError,
    IndexOutOfRangeError,
    InvalidLocatorError,
    PagedrillError,
    PageLoadTimeoutError,
    PageNotRegisteredError,
    RetryExhaustedError,
    UnsupportedEngineError,
)
from .locator import By, Locator
from .page import PageRegistry, WebControl, WebPage, default_registry, register_page
from .timeouts import ImplicitWaitScope, TimeoutHistory
from .waits import RetryOperation, RetryState, Wait, WaitConfig

__version__ = "1.0.0"

__all__ = [
    "Browser",
    "By",
    "ConfigLoader",
    "ConfigurationError",
    "DriverError",
    "ElementNotFoundError",
    "Homepage",
    "ImplicitWaitScope",
    "IndexOutOfRangeError",
    "InvalidLocatorError",
    "Locator",
    "NavigationElement",
    "PageLoadTimeoutError",
    "PageNotRegisteredError",
    "PageRegistry",
    "PagedrillError",
    "RetryExhaustedError",
    "RetryOperation",
    "RetryState",
    "SearchResult",
    "Settings",
    "TimeoutHistory",
    "UnsupportedEngineError",
    "Wait",
    "WaitConfig",
    "WebControl",
    "WebDriverSettings",
    "WebElement",
    "WebPage",
    "default_registry",
    "register_page",
]
