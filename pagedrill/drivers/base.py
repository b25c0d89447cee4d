"""
Browser driver contract.

A BrowserDriver is the only place that talks to the native automation engine.
Native element handles are opaque to the rest of the framework; callers pass
back either the handle itself or an object exposing it as `native_element`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Protocol, runtime_checkable

from ..locator import Locator


@runtime_checkable
class NativeElementProvider(Protocol):
    """Anything that can hand out the native element it stands for."""

    @property
    def native_element(self) -> Optional[Any]:
        ...


class BrowserDriver(ABC):
    """Uniform capability surface over a native browser-automation engine."""

    # Navigation / session

    @abstractmethod
    def go_to_url(self, url: str) -> None:
        pass

    @abstractmethod
    def exit(self) -> None:
        """Quit the native session."""
        pass

    @property
    @abstractmethod
    def title(self) -> str:
        pass

    @title.setter
    @abstractmethod
    def title(self, value: str) -> None:
        pass

    @abstractmethod
    def refresh(self) -> None:
        pass

    @abstractmethod
    def maximize(self) -> None:
        pass

    @abstractmethod
    def screenshot(self) -> bytes:
        """Capture the current viewport as PNG bytes."""
        pass

    # Implicit wait

    @property
    @abstractmethod
    def implicit_wait(self) -> int:
        """Currently configured implicit wait in milliseconds."""
        pass

    @abstractmethod
    def change_implicit_wait(self, timeout_ms: int) -> None:
        pass

    # Lookup

    @abstractmethod
    def find_elements(self, locator: Locator, within: Optional[Any] = None) -> List[Any]:
        """
        Find all native elements matching the locator.

        Args:
            locator: What to search for (its index is ignored here)
            within: Native element to search under; the whole page when None

        Returns:
            Ordered list of native handles (possibly empty)
        """
        pass

    def find_element(self, locator: Locator, within: Optional[Any] = None) -> Optional[Any]:
        """First native element matching the locator, or None."""
        elements = self.find_elements(locator, within)
        if not elements:
            return None
        return elements[0]

    # Scripting and gestures

    @abstractmethod
    def execute_script(self, js: str, *arguments: Any) -> Any:
        """Run JavaScript; failures yield None instead of raising."""
        pass

    @abstractmethod
    def hover(self, element: NativeElementProvider) -> None:
        pass

    @abstractmethod
    def drag_and_drop(
        self,
        source: NativeElementProvider,
        target: NativeElementProvider,
    ) -> None:
        pass

    # Native element operations

    @abstractmethod
    def click(self, native_element: Any) -> None:
        pass

    @abstractmethod
    def send_keys(self, native_element: Any, text: str) -> None:
        pass

    @abstractmethod
    def clear(self, native_element: Any) -> None:
        pass

    @abstractmethod
    def get_text(self, native_element: Any) -> str:
        pass

    @abstractmethod
    def get_attribute(self, native_element: Any, name: str) -> Optional[str]:
        pass

    @abstractmethod
    def is_displayed(self, native_element: Any) -> bool:
        pass

    @abstractmethod
    def is_enabled(self, native_element: Any) -> bool:
        pass


def native_of(element: Any) -> Any:
    """Extract the native handle from a provider, or pass a raw handle through."""
    # Checked on the type so the property is evaluated (resolved) only once
    if hasattr(type(element), "native_element"):
        return element.native_element
    return element


__all__ = [
    "BrowserDriver",
    "NativeElementProvider",
    "native_of",
]
