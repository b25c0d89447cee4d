"""
================================================================================
Exceptions
================================================================================

Error kinds raised by the page-object framework.

Expected absence of an element is never an error (see SearchResult); the
classes below are reserved for conditions that abort the calling test step.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional


class PagedrillError(Exception):
    """Base exception for the framework."""
    pass


class ConfigurationError(PagedrillError):
    """Raised when configuration loading or access fails."""
    pass


class InvalidLocatorError(PagedrillError, ValueError):
    """Raised when a locator is constructed with a malformed strategy, value or index."""
    pass


class UnsupportedEngineError(PagedrillError):
    """Raised when the driver factory cannot resolve an engine name."""

    def __init__(self, engine_name: str, remote: bool = False):
        self.engine_name = engine_name
        self.remote = remote
        mode = "remote" if remote else "local"
        super().__init__(f"Value not supported: `{engine_name}` ({mode} mode)")


class DriverError(PagedrillError):
    """
    Raised when a native WebDriver call fails.

    The native exception is kept both as ``__cause__`` (``raise ... from``)
    and on ``original_exception`` for reporting.
    """

    def __init__(self, message: str, original_exception: Optional[BaseException] = None):
        super().__init__(message)
        self.original_exception = original_exception

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.original_exception is not None:
            return f"{base_msg} [{type(self.original_exception).__name__}: {self.original_exception}]"
        return base_msg


class IndexOutOfRangeError(PagedrillError, IndexError):
    """Raised when a locator ordinal exceeds the number of matched elements."""

    def __init__(self, locator: Any, index: int, total_matches: int):
        self.locator = locator
        self.index = index
        self.total_matches = total_matches
        super().__init__(
            f"Not enough elements for {locator}: you want element number {index} "
            f"but only {total_matches} were found."
        )


class ElementNotFoundError(PagedrillError):
    """Raised when an interaction targets an element that is not on the page."""

    def __init__(self, locator: Any, message: Optional[str] = None):
        self.locator = locator
        super().__init__(message or f"Element not found: {locator}")


class RetryExhaustedError(PagedrillError):
    """
    Raised when a retry predicate is never satisfied before the deadline.

    Attributes:
        description: Human-readable description of what was being waited for
        timeout: The deadline in seconds
        attempt_count: Number of polls made
        elapsed_time: Actual elapsed time in seconds
        last_exception: Last ignored exception raised by the action or predicate
    """

    def __init__(
        self,
        message: str,
        description: Optional[str] = None,
        timeout: Optional[float] = None,
        attempt_count: Optional[int] = None,
        elapsed_time: Optional[float] = None,
        last_exception: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.description = description
        self.timeout = timeout
        self.attempt_count = attempt_count
        self.elapsed_time = elapsed_time
        self.last_exception = last_exception

    def __str__(self) -> str:
        base_msg = super().__str__()

        details = []
        if self.attempt_count is not None:
            details.append(f"Attempts: {self.attempt_count}")
        if self.elapsed_time is not None:
            details.append(f"Elapsed: {self.elapsed_time:.2f}s")
        if self.last_exception is not None:
            details.append(f"Last error: {type(self.last_exception).__name__}")

        if details:
            return f"{base_msg} [{', '.join(details)}]"
        return base_msg


class PageLoadTimeoutError(RetryExhaustedError):
    """Raised by Browser.open() when the page never reports itself loaded."""
    pass


class PageNotRegisteredError(PagedrillError):
    """Raised when a page identity has no homepage entry or no page factory."""

    def __init__(self, page_name: str, message: Optional[str] = None):
        self.page_name = page_name
        super().__init__(
            message
            or f"Page ({page_name}) cannot be found in homepages section of settings file."
        )


__all__ = [
    "PagedrillError",
    "ConfigurationError",
    "InvalidLocatorError",
    "UnsupportedEngineError",
    "DriverError",
    "IndexOutOfRangeError",
    "ElementNotFoundError",
    "RetryExhaustedError",
    "PageLoadTimeoutError",
    "PageNotRegisteredError",
]
