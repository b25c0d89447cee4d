"""
Repository-level pytest configuration (showcase-safe).

Why this exists:
  - Provide safe defaults for demo environments (no secrets embedded)
  - Register command line options shared by every suite
  - Route framework logging through one loguru setup

Important:
  Values below are placeholders. Real projects should load secrets from a
  secure secret manager in CI/CD.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from pagedrill.common import init_logger


def pytest_addoption(parser):
    group = parser.getgroup("pagedrill")
    group.addoption(
        "--browser",
        action="store",
        default=None,
        help="Browser engine for UI tests (overrides webdriver.browser_driver)",
    )
    group.addoption(
        "--run-ui",
        action="store_true",
        default=False,
        help="Run UI tests against a real browser",
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """
    Set demo-safe environment defaults if not already provided by the user/CI.

    This prevents accidental leakage and keeps local runs predictable.
    """
    defaults = {
        "UI_USERNAME": "demo_user",
        "UI_PASSWORD": "demo_password",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    init_logger()
    yield
