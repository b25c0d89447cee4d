"""
================================================================================
Dashboard Page Object
================================================================================

Page object for the demo dashboard (sites/dashboard.html).

Covers:
  - Navigation menu (as a nested control)
  - Welcome banner
  - Hover tooltip and drag-and-drop widgets

================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from pagedrill import By, WebControl, WebPage, register_page


class MenuControl(WebControl):
    """Top navigation menu; children are located inside `nav#menu`."""

    def __init__(self, browser, parent, locator):
        super().__init__(browser, parent, locator)
        self.items = self.element(By.CSS_SELECTOR, "li.menu-item")
        # LoginPage by identity, built through the page registry
        self.lnk_logout = self.navigation(By.ID, "logout", "LoginPage")

    @property
    def item_labels(self) -> List[str]:
        return [
            self.element(By.CSS_SELECTOR, "li.menu-item", index=i).text
            for i in range(self.items.count)
        ]


@register_page
class DashboardPage(WebPage):
    """Dashboard page object."""

    PAGE_TITLE = "Dashboard"

    def __init__(self, browser):
        super().__init__(browser)
        self.menu = self.control(MenuControl, By.ID, "menu")
        self.lbl_welcome = self.element(By.ID, "welcome")
        self.lbl_help = self.element(By.ID, "help")
        self.lbl_tooltip = self.element(By.ID, "tooltip")
        self.box_draggable = self.element(By.ID, "draggable")
        self.box_dropzone = self.element(By.ID, "dropzone")

    @property
    def welcome_text(self) -> str:
        return self.lbl_welcome.text

    @allure.step("Show help tooltip")
    def show_help(self) -> str:
        self.lbl_help.hover()
        return self.lbl_tooltip.text

    @allure.step("Drag box into drop zone")
    def drag_box_to_dropzone(self) -> str:
        self.box_draggable.drag_and_drop_to(self.box_dropzone)
        return self.box_dropzone.text

    @allure.step("Logout")
    def logout(self):
        return self.menu.lnk_logout.click()
