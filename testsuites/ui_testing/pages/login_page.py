"""
================================================================================
Login Page Object
================================================================================

Page object for the demo login form (sites/login.html).

NOTE:
  Credentials default to the UI_USERNAME / UI_PASSWORD environment variables
  (demo-safe placeholders set by the root conftest).

================================================================================
"""

from __future__ import annotations

import os
from typing import Optional

import allure
from loguru import logger

from pagedrill import By, WebPage, register_page

from .dashboard_page import DashboardPage


@register_page
class LoginPage(WebPage):
    """Login page object."""

    PAGE_TITLE = "Login"

    def __init__(self, browser):
        super().__init__(browser)
        self.txt_username = self.element(By.ID, "userName")
        self.txt_password = self.element(By.ID, "password")
        self.btn_login = self.navigation(By.ID, "login", DashboardPage)
        self.btn_submit = self.element(By.ID, "login")
        self.lbl_error = self.element(By.ID, "error")

    @allure.step("Fill credentials (username={username})")
    def fill_credentials(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> "LoginPage":
        if username is None:
            username = os.getenv("UI_USERNAME", "demo_user")
        if password is None:
            password = os.getenv("UI_PASSWORD", "demo_password")

        self.txt_username.send_keys(username, clear_first=True)
        self.txt_password.send_keys(password, clear_first=True)
        return self

    @allure.step("Login (username={username})")
    def login(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> DashboardPage:
        """
        Perform login and wait for the dashboard.

        Returns:
            The loaded DashboardPage
        """
        self.fill_credentials(username, password)
        dashboard = self.btn_login.click()
        logger.info("Login completed")
        return dashboard

    @allure.step("Submit empty form")
    def submit_empty(self) -> "LoginPage":
        self.txt_username.clear()
        self.txt_password.clear()
        self.btn_submit.click()
        return self

    @property
    def error_message(self) -> Optional[str]:
        """Visible validation message, if any."""
        error = self.browser.peek_element(self.lbl_error)
        if error is None or not error.is_displayed:
            return None
        return error.text
