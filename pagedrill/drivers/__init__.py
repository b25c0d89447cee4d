"""
Browser drivers: the BrowserDriver contract, its Selenium implementation and
the factory selecting an engine from configuration.
"""

from .base import BrowserDriver, NativeElementProvider, native_of
from .factory import BrowserDriverFactory
from .selenium_driver import SeleniumBrowserDriver

__all__ = [
    "BrowserDriver",
    "BrowserDriverFactory",
    "NativeElementProvider",
    "SeleniumBrowserDriver",
    "native_of",
]
