"""
================================================================================
Browser Driver Factory
================================================================================

Builds a BrowserDriver for a configured engine name.

Modes:
    - local:  instantiate the engine's Selenium driver with local options
              and, when configured, an explicit driver executable
    - remote: connect to a Selenium Grid / standalone endpoint, using the
              engine's options object as capability descriptor

Supported engines: chrome, firefox, edge, safari, ie

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional

from loguru import logger
from selenium import webdriver
from selenium.common.exceptions import WebDriverException

from ..configuration import WebDriverSettings
from ..exceptions import DriverError, UnsupportedEngineError
from .base import BrowserDriver
from .selenium_driver import SeleniumBrowserDriver


# Default executable names looked up when browser_drivers_path is a directory
DRIVER_EXECUTABLES: Dict[str, str] = {
    "chrome": "chromedriver",
    "firefox": "geckodriver",
    "edge": "msedgedriver",
    "ie": "IEDriverServer.exe",
}


class BrowserDriverFactory:
    """
    Creates BrowserDriver instances from WebDriverSettings.

    Usage:
        >>> factory = BrowserDriverFactory(settings.webdriver)
        >>> driver = factory.create()            # configured engine
        >>> driver = factory.create("firefox")   # explicit engine
    """

    def __init__(self, settings: WebDriverSettings):
        self.settings = settings
        self._local_factories: Dict[str, Callable[[], Any]] = {
            "chrome": self._local_chrome,
            "firefox": self._local_firefox,
            "edge": self._local_edge,
            "safari": self._local_safari,
            "ie": self._local_ie,
        }
        self._remote_options: Dict[str, Callable[[], Any]] = {
            "chrome": self._chrome_options,
            "firefox": self._firefox_options,
            "edge": self._edge_options,
            "safari": webdriver.SafariOptions,
            "ie": webdriver.IeOptions,
        }

    def create(self, browser_name: Optional[str] = None) -> BrowserDriver:
        """
        Create a driver for the given (or configured) engine.

        Raises:
            UnsupportedEngineError: When the engine name is unknown
            DriverError: When Selenium fails to start the session
        """
        name = (browser_name or self.settings.browser_driver or "").strip().lower()

        if self.settings.is_remote:
            if name not in self._remote_options:
                raise UnsupportedEngineError(name, remote=True)
            logger.info(
                f"Starting remote {name} session at {self.settings.selenium_server_uri}"
            )
            return self.create_remote(self._remote_options[name]())

        if name not in self._local_factories:
            raise UnsupportedEngineError(name)

        logger.info(f"Starting local {name} session (headless={self.settings.headless})")
        try:
            native = self._local_factories[name]()
        except WebDriverException as e:
            raise DriverError(f"Failed to start local {name} driver", e) from e
        return SeleniumBrowserDriver.create(native)

    def create_remote(self, options: Any) -> BrowserDriver:
        """Connect to the configured remote endpoint with the given capabilities."""
        try:
            native = webdriver.Remote(
                command_executor=self.settings.selenium_server_uri,
                options=options,
            )
        except WebDriverException as e:
            raise DriverError(
                f"Failed to connect to {self.settings.selenium_server_uri}", e
            ) from e
        return SeleniumBrowserDriver.create(native)

    # =========================================================================
    # Options
    # =========================================================================

    def _chrome_options(self) -> webdriver.ChromeOptions:
        options = webdriver.ChromeOptions()
        width, height = self.settings.window_size
        options.add_argument(f"--window-size={width},{height}")
        if self.settings.headless:
            options.add_argument("--headless=new")
        return options

    def _firefox_options(self) -> webdriver.FirefoxOptions:
        options = webdriver.FirefoxOptions()
        if self.settings.headless:
            options.add_argument("-headless")
        return options

    def _edge_options(self) -> webdriver.EdgeOptions:
        options = webdriver.EdgeOptions()
        if self.settings.headless:
            options.add_argument("--headless=new")
        return options

    def _executable_path(self, engine: str) -> Optional[str]:
        """
        Resolve the driver executable for an engine.

        Returns None when nothing is configured so Selenium Manager can
        locate the driver itself.
        """
        configured = self.settings.browser_drivers_path
        if not configured:
            return None
        path = Path(configured)
        if path.is_dir() and engine in DRIVER_EXECUTABLES:
            path = path / DRIVER_EXECUTABLES[engine]
        return str(path)

    # =========================================================================
    # Local engines
    # =========================================================================

    def _local_chrome(self) -> Any:
        service = webdriver.ChromeService(executable_path=self._executable_path("chrome"))
        return webdriver.Chrome(options=self._chrome_options(), service=service)

    def _local_firefox(self) -> Any:
        service = webdriver.FirefoxService(executable_path=self._executable_path("firefox"))
        return webdriver.Firefox(options=self._firefox_options(), service=service)

    def _local_edge(self) -> Any:
        service = webdriver.EdgeService(executable_path=self._executable_path("edge"))
        return webdriver.Edge(options=self._edge_options(), service=service)

    def _local_safari(self) -> Any:
        return webdriver.Safari()

    def _local_ie(self) -> Any:
        service = webdriver.IeService(executable_path=self._executable_path("ie"))
        return webdriver.Ie(service=service)


__all__ = [
    "BrowserDriverFactory",
    "DRIVER_EXECUTABLES",
]
