"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and gates the browser-backed UI suite.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "unit: Framework tests against an in-memory driver"
    )
    config.addinivalue_line(
        "markers", "ui: UI tests driving a real browser"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to authentication"
    )
    config.addinivalue_line(
        "markers", "navigation: Tests related to page navigation"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Adds suite markers by directory and skips UI tests unless --run-ui is given.
    """
    run_ui = config.getoption("--run-ui")
    skip_ui = pytest.mark.skip(reason="UI tests need a real browser; use --run-ui")

    for item in items:
        # Auto-add 'unit' marker to tests in unit directory
        if "unit" in item.nodeid.split("/"):
            item.add_marker(pytest.mark.unit)

        # Auto-add 'ui' marker to tests in ui_testing directory
        if "ui_testing" in str(item.fspath):
            item.add_marker(pytest.mark.ui)
            if not run_ui:
                item.add_marker(skip_ui)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Pagedrill UI Automation Framework",
        "=" * 60,
        "",
    ]
