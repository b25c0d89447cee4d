"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- Browser built from config/config.yaml (--browser overrides the engine)
- Browser session lifecycle management
- Page Object fixtures opened through Browser.open()
- Screenshot capture on failure

================================================================================
"""

from dataclasses import replace
from typing import Generator

import allure
import pytest
from loguru import logger

from pagedrill import Browser, ConfigLoader, Settings
from testsuites.ui_testing.pages import DashboardPage, LoginPage


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def ui_settings(request) -> Settings:
    """
    Session-scoped settings snapshot.

    `--browser` overrides the configured engine.
    """
    settings = ConfigLoader().load_settings()
    engine = request.config.getoption("--browser")
    if engine:
        settings = replace(settings, webdriver=replace(settings.webdriver, browser_driver=engine))
    return settings


@pytest.fixture(scope="function")
def browser(ui_settings: Settings) -> Generator[Browser, None, None]:
    """
    Function-scoped browser fixture.

    Each test gets its own session, providing isolation.
    """
    with Browser(ui_settings) as browser:
        yield browser


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(browser: Browser) -> LoginPage:
    """Provides a loaded LoginPage."""
    return browser.open(LoginPage)


@pytest.fixture
def dashboard_page(login_page: LoginPage, test_data) -> DashboardPage:
    """Provides a DashboardPage reached through a real login."""
    user = test_data["valid_user"]
    return login_page.login(user["username"], user["password"])


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Hook to capture screenshots on test failure.

    Automatically takes a screenshot when a UI test fails and attaches
    it to the Allure report.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        browser = getattr(item, "funcargs", {}).get("browser")
        if isinstance(browser, Browser):
            try:
                allure.attach(
                    browser.screenshot(),
                    name="failure_screenshot",
                    attachment_type=allure.attachment_type.PNG,
                )
            except Exception as e:
                # Log but don't fail if screenshot capture fails
                logger.warning(f"Failed to capture screenshot on failure: {e}")


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def test_data():
    """
    Provides common test data for UI tests.
    """
    return {
        "valid_user": {
            "username": "test_user",
            "password": "test_password",
        },
        "empty_user": {
            "username": "",
            "password": "",
        },
    }
