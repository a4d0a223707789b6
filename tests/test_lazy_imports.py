"""Tests for viewkit.__init__: every public name resolves lazily."""

import pytest

import viewkit


@pytest.mark.parametrize("name", viewkit.__all__)
def test_all_names_resolve(name: str) -> None:
    obj = getattr(viewkit, name)
    assert obj is not None, f"viewkit.{name} resolved to None"


def test_all_is_sorted_and_unique() -> None:
    assert list(viewkit.__all__) == sorted(set(viewkit.__all__))


def test_unknown_name_raises_attribute_error() -> None:
    with pytest.raises(AttributeError, match="no attribute"):
        viewkit.__getattr__("ThisDoesNotExist")
