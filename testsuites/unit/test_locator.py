from dataclasses import FrozenInstanceError

import pytest

from pagedrill.exceptions import InvalidLocatorError
from pagedrill.locator import By, Locator


@pytest.mark.parametrize(
    "strategy, expected",
    [
        (By.ID, By.ID),
        ("id", By.ID),
        ("css selector", By.CSS_SELECTOR),
        ("CSS_SELECTOR", By.CSS_SELECTOR),
        ("XPath", By.XPATH),
        ("link text", By.LINK_TEXT),
    ],
)
def test_strategy_accepts_members_values_and_names(strategy, expected):
    locator = Locator.create(strategy, "x")
    assert locator.strategy is expected


def test_to_selenium_returns_by_value_pair():
    locator = Locator.create(By.CSS_SELECTOR, "ul.menu > li", index=2)
    assert locator.to_selenium() == ("css selector", "ul.menu > li")


@pytest.mark.parametrize("strategy", ["jquery", "", 42, None])
def test_unknown_strategy_is_rejected(strategy):
    with pytest.raises(InvalidLocatorError):
        Locator.create(strategy, "x")


@pytest.mark.parametrize("value", ["", "   ", None])
def test_empty_value_is_rejected(value):
    with pytest.raises(InvalidLocatorError):
        Locator.create(By.ID, value)


@pytest.mark.parametrize("index", [-1, 1.5, "0", True])
def test_invalid_index_is_rejected(index):
    with pytest.raises(InvalidLocatorError):
        Locator.create(By.ID, "x", index=index)


def test_invalid_locator_error_is_a_value_error():
    with pytest.raises(ValueError):
        Locator.create("nope", "x")


def test_locator_is_immutable_and_hashable():
    locator = Locator.create(By.ID, "userName")
    with pytest.raises(FrozenInstanceError):
        locator.value = "other"
    assert {locator, Locator.create("id", "userName")} == {locator}


def test_with_index_returns_copy():
    locator = Locator.create(By.NAME, "item")
    indexed = locator.with_index(3)

    assert indexed.index == 3
    assert locator.index is None
    assert indexed.with_index(None) == locator


def test_str_includes_strategy_value_and_index():
    assert str(Locator.create(By.ID, "a", 1)) == "ID='a'[1]"
