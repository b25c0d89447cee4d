"""
================================================================================
Implicit Wait Scopes
================================================================================

Scoped overrides of the driver's implicit wait.

Each Browser owns one TimeoutHistory. Entering an ImplicitWaitScope saves the
driver's current implicit wait on that history and applies the scope's value;
leaving the scope (normally or through an exception) pops the saved value and
restores it. Scopes therefore nest in LIFO order:

    with browser.implicit_timeout(5000):          # 60000 -> 5000
        with browser.implicit_timeout(1000):      # 5000 -> 1000
            ...
        # back to 5000
    # back to 60000

An active scope holds the history lock from entry to exit, so scopes on one
Browser never interleave across threads. Nesting within one thread works
because the lock is reentrant.

================================================================================
"""

from __future__ import annotations

import threading
from typing import List, Optional

from loguru import logger

from .drivers.base import BrowserDriver


class TimeoutHistory:
    """Lock-guarded stack of implicit wait durations (ms)."""

    def __init__(self) -> None:
        self._stack: List[int] = []
        self.lock = threading.RLock()

    def push(self, timeout_ms: int) -> None:
        with self.lock:
            self._stack.append(timeout_ms)

    def pop(self) -> int:
        with self.lock:
            if not self._stack:
                raise IndexError("pop from empty timeout history")
            return self._stack.pop()

    def peek(self) -> Optional[int]:
        with self.lock:
            return self._stack[-1] if self._stack else None

    @property
    def depth(self) -> int:
        with self.lock:
            return len(self._stack)

    def __len__(self) -> int:
        return self.depth

    def __repr__(self) -> str:
        with self.lock:
            return f"TimeoutHistory({self._stack!r})"


class ImplicitWaitScope:
    """
    Context manager temporarily changing the driver's implicit wait.

    Args:
        driver: Driver whose implicit wait is overridden
        history: The owning browser's TimeoutHistory
        timeout_ms: Implicit wait applied inside the scope
        message: Optional label used in log output
    """

    def __init__(
        self,
        driver: BrowserDriver,
        history: TimeoutHistory,
        timeout_ms: int,
        message: Optional[str] = None,
    ):
        if timeout_ms < 0:
            raise ValueError(f"timeout_ms must be >= 0, got {timeout_ms}")
        self._driver = driver
        self._history = history
        self.timeout_ms = timeout_ms
        self.message = message
        self._entered = False

    def __enter__(self) -> "ImplicitWaitScope":
        if self._entered:
            raise RuntimeError("ImplicitWaitScope is already active")

        # Held until __exit__
        self._history.lock.acquire()
        try:
            previous = self._driver.implicit_wait
            self._history.push(previous)
            try:
                self._driver.change_implicit_wait(self.timeout_ms)
            except BaseException:
                self._history.pop()
                raise
        except BaseException:
            self._history.lock.release()
            raise
        self._entered = True

        logger.debug(
            f"Implicit wait {previous}ms -> {self.timeout_ms}ms"
            + (f" ({self.message})" if self.message else "")
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if not self._entered:
            return

        try:
            restored = self._history.pop()
            self._entered = False
            self._driver.change_implicit_wait(restored)
        finally:
            self._history.lock.release()

        logger.debug(
            f"Implicit wait restored to {restored}ms"
            + (f" ({self.message})" if self.message else "")
        )


__all__ = [
    "ImplicitWaitScope",
    "TimeoutHistory",
]
