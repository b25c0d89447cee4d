"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - YAML configuration loading (config/config.yaml by default)
    - Environment variable override (WEBDRIVER_BROWSER_DRIVER overrides
      webdriver.browser_driver)
    - Dot notation path access
    - Typed, immutable Settings snapshot consumed by Browser

Example config.yaml:

    max_wait: 5000
    webdriver:
      browser_driver: chrome
      browser_drivers_path: ""
      is_remote: false
      selenium_server_uri: "http://localhost:4444/wd/hub"
    homepages:
      - page_object_type: LoginPage
        url: /sites/login.html
        is_file_system_path: true

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

import yaml
from loguru import logger

from .exceptions import ConfigurationError


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "config.yaml"

# Environment variable naming an alternative configuration file
CONFIG_PATH_ENV = "PAGEDRILL_CONFIG"

# Implicit wait applied when max_wait is not configured (or 0)
DEFAULT_MAX_WAIT_MS = 60000


@dataclass(frozen=True)
class WebDriverSettings:
    """
    Browser driver configuration.

    Attributes:
        browser_driver: Engine name - 'chrome', 'firefox', 'edge', 'safari', 'ie'
        browser_drivers_path: Driver executable, or directory holding it.
            Empty lets Selenium Manager resolve the driver.
        is_remote: Connect to a remote Selenium endpoint instead of a local driver
        selenium_server_uri: Remote endpoint URI
        headless: Launch local browsers headless where the engine supports it
        window_size: Fixed window size used for Chrome
    """
    browser_driver: str = "chrome"
    browser_drivers_path: str = ""
    is_remote: bool = False
    selenium_server_uri: str = "http://localhost:4444/wd/hub"
    headless: bool = False
    window_size: Tuple[int, int] = (1920, 1080)


@dataclass(frozen=True)
class Homepage:
    """
    Home page registered for a page object identity.

    Attributes:
        page_object_type: Page identity (page class name or PAGE_NAME)
        url: Absolute URL, or a path relative to the filesystem root
        is_file_system_path: Resolve url against the filesystem root as file://
    """
    page_object_type: str
    url: str
    is_file_system_path: bool = False


@dataclass(frozen=True)
class Settings:
    """
    Immutable settings snapshot, loaded once per Browser.

    Attributes:
        webdriver: Driver configuration
        max_wait: Default implicit wait and page load deadline in ms (0 = 60000)
        homepages: Registered home pages
        filesystem_root: Anchor for filesystem-relative home pages
        renavigate_on_retry: Re-invoke navigation on every page load poll
        retry_interval: Initial polling interval in seconds for page load waits
    """
    webdriver: WebDriverSettings = field(default_factory=WebDriverSettings)
    max_wait: int = 0
    homepages: Tuple[Homepage, ...] = ()
    filesystem_root: Path = field(default_factory=Path.cwd)
    renavigate_on_retry: bool = True
    retry_interval: float = 0.5

    @property
    def effective_max_wait(self) -> int:
        """Configured max wait in ms, or the 60 s default when unset."""
        return self.max_wait if self.max_wait else DEFAULT_MAX_WAIT_MS

    def find_homepage(self, page_name: str) -> Optional[Homepage]:
        """Return the homepage registered for a page identity, if any."""
        for homepage in self.homepages:
            if homepage.page_object_type == page_name:
                return homepage
        return None

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        base_path: Optional[Path] = None,
    ) -> "Settings":
        """
        Build settings from a plain mapping (as loaded from YAML).

        Args:
            data: Configuration mapping
            base_path: Default filesystem root when none is configured

        Raises:
            ConfigurationError: When a value has the wrong shape
        """
        data = data or {}
        try:
            webdriver = _build_webdriver(data.get("webdriver") or {})
            homepages = tuple(_build_homepages(data.get("homepages") or []))
            max_wait = int(data.get("max_wait") or 0)
            retry_interval = float(data.get("retry_interval", 0.5))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e

        if max_wait < 0:
            raise ConfigurationError(f"max_wait must be >= 0, got {max_wait}")
        if retry_interval <= 0:
            raise ConfigurationError(f"retry_interval must be > 0, got {retry_interval}")

        root = data.get("filesystem_root")
        if root:
            filesystem_root = Path(root)
            if not filesystem_root.is_absolute() and base_path is not None:
                filesystem_root = base_path / filesystem_root
        else:
            filesystem_root = base_path or Path.cwd()

        return cls(
            webdriver=webdriver,
            max_wait=max_wait,
            homepages=homepages,
            filesystem_root=filesystem_root,
            renavigate_on_retry=_to_bool(data.get("renavigate_on_retry", True)),
            retry_interval=retry_interval,
        )


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def _build_webdriver(section: Dict[str, Any]) -> WebDriverSettings:
    defaults = WebDriverSettings()
    window_size = section.get("window_size", defaults.window_size)
    if isinstance(window_size, str):
        window_size = window_size.lower().replace("x", ",").split(",")
    width, height = (int(v) for v in window_size)

    return WebDriverSettings(
        browser_driver=str(section.get("browser_driver") or defaults.browser_driver),
        browser_drivers_path=str(section.get("browser_drivers_path") or ""),
        is_remote=_to_bool(section.get("is_remote", defaults.is_remote)),
        selenium_server_uri=str(
            section.get("selenium_server_uri") or defaults.selenium_server_uri
        ),
        headless=_to_bool(section.get("headless", defaults.headless)),
        window_size=(width, height),
    )


def _build_homepages(entries: Iterable[Dict[str, Any]]) -> Iterable[Homepage]:
    for entry in entries:
        if "page_object_type" not in entry or "url" not in entry:
            raise ValueError(
                f"homepage entries need 'page_object_type' and 'url': {entry}"
            )
        yield Homepage(
            page_object_type=str(entry["page_object_type"]),
            url=str(entry["url"]),
            is_file_system_path=_to_bool(entry.get("is_file_system_path", False)),
        )


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (WEBDRIVER_BROWSER_DRIVER)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("webdriver.browser_driver", "chrome")
        'firefox'  # From YAML or env var

        >>> settings = config.load_settings()
        >>> browser = Browser(settings)
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    # Scalar keys that environment variables may override in load_settings()
    OVERRIDABLE_KEYS: Dict[str, Any] = {
        "max_wait": 0,
        "filesystem_root": "",
        "renavigate_on_retry": True,
        "retry_interval": 0.5,
        "webdriver.browser_driver": "chrome",
        "webdriver.browser_drivers_path": "",
        "webdriver.is_remote": False,
        "webdriver.selenium_server_uri": "",
        "webdriver.headless": False,
    }

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """
        Singleton pattern - return existing instance if available.

        Configuration is loaded only once per process.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Falls back to $PAGEDRILL_CONFIG, then DEFAULT_CONFIG_PATH.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(
            config_path or os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
        )
        self._load_config()
        self._initialized = True

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "webdriver.browser_driver")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        # Check environment variable first
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        # Navigate YAML config by dot notation
        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section.

        Args:
            section: Section name (e.g., "webdriver", "logging")

        Returns:
            Section dictionary or empty dict if not found
        """
        return self._config.get(section, {})

    def load_settings(self) -> Settings:
        """
        Build the immutable Settings snapshot.

        Scalar keys honour environment overrides; homepages come from YAML only.
        Relative filesystem roots are anchored at the config file's directory.
        """
        data: Dict[str, Any] = {"webdriver": dict(self.get_section("webdriver") or {})}
        for key, default in self.OVERRIDABLE_KEYS.items():
            value = self.get(key, None)
            if value is None:
                continue
            value = self._convert_type(value, default) if isinstance(value, str) else value
            if key.startswith("webdriver."):
                data["webdriver"][key.split(".", 1)[1]] = value
            else:
                data[key] = value
        data["homepages"] = self._config.get("homepages") or []

        return Settings.from_dict(data, base_path=self._config_path.parent)

    def reload(self) -> None:
        """
        Reload configuration from file.

        Useful when configuration file has been updated during runtime.
        """
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton instance.

        Useful for testing when configuration needs to be reloaded
        with different settings.
        """
        cls._instance = None
        cls._config = {}


__all__ = [
    "CONFIG_PATH_ENV",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_MAX_WAIT_MS",
    "ConfigLoader",
    "ConfigurationError",
    "Homepage",
    "Settings",
    "WebDriverSettings",
]
