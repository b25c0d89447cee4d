"""
================================================================================
Element Locator
================================================================================

Immutable description of how to find an element on a page.

A locator is a strategy (By) plus a selector string plus an optional
zero-based ordinal used to pick one element among several matches.

Usage:
    >>> Locator.create(By.ID, "userName")
    >>> Locator.create("css selector", "ul.menu > li", index=2)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union

from .exceptions import InvalidLocatorError


class By(str, Enum):
    """Locator strategies. Values are the strings Selenium's By uses."""

    ID = "id"
    NAME = "name"
    CSS_SELECTOR = "css selector"
    XPATH = "xpath"
    CLASS_NAME = "class name"
    TAG_NAME = "tag name"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"

    @classmethod
    def parse(cls, value: Union["By", str]) -> "By":
        """
        Resolve a strategy from a By member, its value or its member name.

        Raises:
            InvalidLocatorError: When the strategy is unknown
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip()
            try:
                return cls(normalized.lower())
            except ValueError:
                pass
            member = cls.__members__.get(normalized.upper().replace(" ", "_"))
            if member is not None:
                return member
        raise InvalidLocatorError(f"Unknown locator strategy: {value!r}")


@dataclass(frozen=True)
class Locator:
    """
    Locator value object.

    Attributes:
        strategy: How to search (By member)
        value: Selector string for the strategy
        index: Optional zero-based ordinal among multiple matches
    """
    strategy: By
    value: str
    index: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "strategy", By.parse(self.strategy))

        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidLocatorError(
                f"Locator value must be a non-empty string, got {self.value!r}"
            )

        if self.index is not None:
            # bool is an int subclass
            if isinstance(self.index, bool) or not isinstance(self.index, int):
                raise InvalidLocatorError(
                    f"Locator index must be an integer, got {self.index!r}"
                )
            if self.index < 0:
                raise InvalidLocatorError(
                    f"Locator index must be non-negative, got {self.index}"
                )

    @classmethod
    def create(
        cls,
        strategy: Union[By, str],
        value: str,
        index: Optional[int] = None,
    ) -> "Locator":
        return cls(strategy, value, index)

    def with_index(self, index: Optional[int]) -> "Locator":
        """Return a copy of this locator selecting a different ordinal."""
        return replace(self, index=index)

    def to_selenium(self) -> Tuple[str, str]:
        """Map to the (by, value) pair accepted by Selenium's find_elements()."""
        return self.strategy.value, self.value

    def __str__(self) -> str:
        suffix = f"[{self.index}]" if self.index is not None else ""
        return f"{self.strategy.name}={self.value!r}{suffix}"


__all__ = [
    "By",
    "Locator",
]
