"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the demo site under `sites/`.

Each page class encapsulates:
    - Element declarations (lazy handles)
    - Page-specific actions
    - Load detection through PAGE_TITLE

Pages are registered in pagedrill's default registry on import.

================================================================================
"""

from .dashboard_page import DashboardPage, MenuControl
from .login_page import LoginPage

__all__ = [
    "DashboardPage",
    "LoginPage",
    "MenuControl",
]
