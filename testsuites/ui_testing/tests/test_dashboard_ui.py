"""
================================================================================
Dashboard UI Tests
================================================================================

Covers the dashboard reached through login:
  - Nested menu control (relative element lookup, indexed elements)
  - Hover and drag-and-drop gestures
  - Navigation back to the login page by page identity

================================================================================
"""

import allure
import pytest

from pagedrill import Browser, By, IndexOutOfRangeError, Locator
from testsuites.ui_testing.pages import DashboardPage, LoginPage


@allure.epic("UI Testing")
@allure.feature("Dashboard")
class TestDashboard:
    """Dashboard UI test suite."""

    @allure.story("Navigation")
    @allure.title("Menu items are resolved inside the menu control")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.navigation
    def test_menu_items(self, dashboard_page: DashboardPage):
        with allure.step("Count menu items"):
            assert dashboard_page.menu.items.count == 3

        with allure.step("Read labels"):
            assert dashboard_page.menu.item_labels == ["Overview", "Reports", "Log out"]

    @allure.story("Navigation")
    @allure.title("Indexed lookups beyond the last match fail loudly")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    def test_index_out_of_range(self, browser: Browser, dashboard_page: DashboardPage):
        locator = Locator.create(By.CSS_SELECTOR, "li.menu-item", index=3)

        with pytest.raises(IndexOutOfRangeError):
            browser.find_element(locator).text

        handles = browser.find_elements(locator.with_index(None))
        assert [h.locator.index for h in handles] == [0, 1, 2]

    @allure.story("Gestures")
    @allure.title("Hover reveals the help tooltip")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    def test_hover_tooltip(self, dashboard_page: DashboardPage):
        assert not dashboard_page.lbl_tooltip.is_displayed
        assert dashboard_page.show_help() == "Need assistance? Contact support."

    @allure.story("Gestures")
    @allure.title("Box can be dragged into the drop zone")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    def test_drag_and_drop(self, dashboard_page: DashboardPage):
        assert dashboard_page.drag_box_to_dropzone() == "Dropped!"

    @allure.story("Navigation")
    @allure.title("Logout returns to the login page")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.navigation
    @pytest.mark.e2e
    def test_logout(self, dashboard_page: DashboardPage):
        login = dashboard_page.logout()

        assert isinstance(login, LoginPage)
        assert login.is_loaded

    @allure.story("Browser")
    @allure.title("Script execution and title override")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P3
    def test_javascript_passthrough(self, browser: Browser, dashboard_page: DashboardPage):
        assert browser.execute_javascript("return 6 * 7;") == 42

        browser.driver.title = "Renamed"
        assert browser.page_title == "Renamed"
        assert not dashboard_page.is_loaded
