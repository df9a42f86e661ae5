"""Tests for the Option type and the shared config."""

import copy

import pytest

import flatzip as fz


def test_some_and_none() -> None:
    """Test the two Option variants."""
    some: fz.Option[int] = fz.Some(2)
    assert some.is_some()
    assert not some.is_none()
    assert fz.NONE.is_none()
    assert fz.NONE == fz.NoneOption()
    assert repr(fz.NONE) == "NONE"


def test_unwrap_errors() -> None:
    """Test unwrap and expect on NONE."""
    with pytest.raises(fz.OptionUnwrapError, match="called `unwrap` on a `None`"):
        fz.NONE.unwrap()
    with pytest.raises(fz.OptionUnwrapError, match="empty group"):
        fz.NONE.expect("empty group")
    assert fz.Some(1).expect("unused") == 1


def test_combinators() -> None:
    """Test map, or_, or_else and the unwrap defaults."""
    assert fz.Some(3).map(str) == fz.Some("3")
    assert fz.NONE.map(str) == fz.NONE
    assert fz.NONE.or_(fz.Some(1)) == fz.Some(1)
    assert fz.Some(2).or_else(lambda: fz.Some(1)) == fz.Some(2)
    assert fz.NONE.unwrap_or(0) == 0
    assert fz.NONE.unwrap_or_else(lambda: 5) == 5


def test_pattern_matching() -> None:
    """Test matching on pulled pairs."""
    it = fz.flat_zip({"k": [1]})
    match it.next():
        case fz.Some((key, value)):
            assert (key, value) == ("k", 1)
        case _:
            pytest.fail("expected a pair")
    match it.next():
        case fz.Some(_):
            pytest.fail("expected exhaustion")
        case _:
            pass


def test_config_clone_default() -> None:
    """Test that the configured clone applies to adapters created afterwards."""
    config = fz.get_config()
    previous = config.clone
    try:
        config.clone = copy.copy
        key = ["k"]
        it = fz.flat_zip([(key, [1])])
        (pair_key, _), = it
        assert pair_key == key
        assert pair_key is not key
    finally:
        config.clone = previous


def test_config_repr_width() -> None:
    """Test that long keys are cut in reprs."""
    config = fz.Config(repr_width=10)
    assert config.key_repr("short") == "'short'"
    assert config.key_repr(list(range(20))).endswith("...")
