"""Tests for Cursor, Fuse, Rev and the capability helpers."""

from collections import deque

import pytest

import flatzip as fz
from flatzip import _capabilities as caps


class _Flaky:
    """Reports exhaustion every other pull."""

    def __init__(self) -> None:
        self.calls = 0

    def __iter__(self) -> "_Flaky":
        return self

    def __next__(self) -> int:
        self.calls += 1
        if self.calls % 2:
            raise StopIteration
        return self.calls


class TestCursor:
    """Tests for the double-ended Cursor."""

    def test_ends_meet(self) -> None:
        """Test that front and back pulls never cross."""
        cursor = fz.Cursor([1, 2, 3])
        assert cursor.next() == fz.Some(1)
        assert cursor.next_back() == fz.Some(3)
        assert cursor.next_back() == fz.Some(2)
        assert cursor.next() == fz.NONE
        assert cursor.next_back() == fz.NONE
        with pytest.raises(StopIteration):
            next(cursor)

    def test_collections(self) -> None:
        """Test the collection kinds wrapped by into_iter."""
        assert isinstance(fz.into_iter((1, 2)), fz.Cursor)
        assert isinstance(fz.into_iter(range(3)), fz.Cursor)
        assert isinstance(fz.into_iter("ab"), fz.Cursor)
        assert isinstance(fz.into_iter(deque([1])), fz.Cursor)
        assert isinstance(fz.into_iter({1: 2}.values()), fz.Cursor)
        assert not isinstance(fz.into_iter({1, 2}), fz.Cursor)
        assert fz.into_iter(deque([1, 2, 3])).next_back() == fz.Some(3)

    def test_not_iterable(self) -> None:
        """Test that non-iterables are rejected."""
        with pytest.raises(TypeError):
            fz.into_iter(42)  # type: ignore[arg-type]

    def test_skips(self) -> None:
        """Test nth and nth_back."""
        cursor = fz.Cursor(range(10))
        assert cursor.nth(2) == fz.Some(2)
        assert cursor.nth_back(2) == fz.Some(7)
        assert cursor.length() == 4
        assert cursor.nth(4) == fz.NONE
        assert cursor.length() == 0

    def test_bulk(self) -> None:
        """Test folds, count and last."""
        assert fz.Cursor("abc").fold("", str.__add__) == "abc"
        assert fz.Cursor("abc").rfold("", str.__add__) == "cba"
        assert fz.Cursor("abc").count() == 3
        cursor = fz.Cursor("abc")
        assert cursor.last() == fz.Some("c")
        assert cursor.next() == fz.NONE

    def test_ranges(self) -> None:
        """Test range lengths, including ranges longer than `sys.maxsize`."""
        assert fz.Cursor(range(10, 0, -3)).into(list) == [10, 7, 4, 1]
        assert fz.Cursor(range(0, 10, 3)).length() == 4
        assert fz.Cursor(range(5, 0)).length() == 0
        huge = fz.Cursor(range(2**64))
        assert huge.length() == 2**64
        assert huge.next() == fz.Some(0)
        assert huge.next_back() == fz.Some(2**64 - 1)
        assert huge.count() == 2**64 - 2
        assert huge.next() == fz.NONE

    def test_huge_range_group(self) -> None:
        """Test a group over a range longer than `sys.maxsize`, from both ends."""
        it = fz.flat_zip([(0, range(2**64))])
        assert it.next() == fz.Some((0, 0))
        assert it.next_back() == fz.Some((0, 2**64 - 1))
        assert it.nth(1) == fz.Some((0, 2))
        assert it.size_hint() == (2**64 - 4, fz.Some(2**64 - 4))

    def test_length_hint(self) -> None:
        """Test the length hint used by list()."""
        cursor = fz.Cursor([1, 2, 3])
        next(cursor)
        assert cursor.__length_hint__() == 2
        assert cursor.size_hint() == (2, fz.Some(2))
        assert cursor.is_fused()


class TestFuse:
    """Tests for Fuse and fuse()."""

    def test_stays_exhausted(self) -> None:
        """Test that a fused iterator never resumes."""
        flaky = _Flaky()
        fused = fz.Fuse(flaky)
        assert list(fused) == []
        assert list(fused) == []
        assert fused.next() == fz.NONE
        assert flaky.calls == 1

    def test_unfused_would_resume(self) -> None:
        """Test the behavior Fuse protects against."""
        flaky = _Flaky()
        assert list(flaky) == []
        assert list(flaky) == [2]

    def test_fuse_skips_fused_iterators(self) -> None:
        """Test that already fused iterators are returned unchanged."""
        cursor = fz.Cursor([1])
        gen = (x for x in range(1))
        assert fz.fuse(cursor) is cursor
        assert fz.fuse(gen) is gen
        assert isinstance(fz.fuse(_Flaky()), fz.Fuse)

    def test_backward_exhaustion(self) -> None:
        """Test that exhaustion from the back also fuses."""
        fused = fz.Fuse(fz.Cursor([1, 2]))
        assert fused.next_back() == fz.Some(2)
        assert fused.next() == fz.Some(1)
        assert fused.next_back() == fz.NONE
        assert fused.size_hint() == (0, fz.Some(0))
        assert fused.length() == 0

    def test_bulk_drops_inner(self) -> None:
        """Test that bulk operations leave the fuse exhausted."""
        fused = fz.Fuse(fz.Cursor([1, 2, 3]))
        assert fused.fold(0, lambda acc, x: acc + x) == 6
        assert fused.fold(0, lambda acc, x: acc + x) == 0
        assert fused.last() == fz.NONE
        assert fused.count() == 0


class TestRev:
    """Tests for Rev."""

    def test_swapped_ends(self) -> None:
        """Test that forward and backward operations are swapped."""
        rev = fz.Cursor([1, 2, 3, 4, 5]).rev()
        assert rev.nth(1) == fz.Some(4)
        assert rev.nth_back(0) == fz.Some(1)
        assert rev.fold([], lambda acc, x: [*acc, x]) == [3, 2]

    def test_rfold_and_find(self) -> None:
        """Test rfold, find and rfind."""
        assert fz.Cursor([1, 2, 3]).rev().rfold([], lambda acc, x: [*acc, x]) == [1, 2, 3]
        rev = fz.Cursor([1, 2, 3, 4]).rev()
        assert rev.find(lambda x: x % 2 == 1) == fz.Some(3)
        assert rev.rfind(lambda x: x % 2 == 0) == fz.Some(2)
        assert rev.length() == 0

    def test_last_consumes(self) -> None:
        """Test that last leaves nothing behind."""
        rev = fz.Cursor("abc").rev()
        assert rev.last() == fz.Some("a")
        assert rev.next() == fz.NONE


class TestHelpers:
    """Tests for the capability dispatch helpers on plain iterators."""

    def test_forward_fallbacks(self) -> None:
        """Test nth, last, count and find on iterators without those methods."""
        assert caps.nth(iter("abc"), 1) == fz.Some("b")
        assert caps.nth(iter("abc"), 3) == fz.NONE
        assert caps.last(iter("abc")) == fz.Some("c")
        assert caps.last(iter("")) == fz.NONE
        assert caps.count(x for x in range(5)) == 5
        assert caps.find(iter([1, 2, 3]), lambda x: x > 1) == fz.Some(2)

    def test_last_with_none_elements(self) -> None:
        """Test that a `None` element is a value, not an absence."""
        assert caps.last(iter([1, None])) == fz.Some(None)
        assert caps.step(iter([None])) == fz.Some(None)

    def test_backward_requires_next_back(self) -> None:
        """Test the error raised by backward pulls on forward-only iterators."""
        with pytest.raises(fz.NotDoubleEndedError, match="list_iterator"):
            caps.step_back(iter([1]))
        with pytest.raises(TypeError):
            caps.rfold(iter([1]), 0, lambda acc, _: acc)

    def test_exact_length(self) -> None:
        """Test which builtin iterators report an exact length."""
        assert caps.length(iter([1, 2])) == 2
        assert caps.length(iter({"a": 1}.items())) == 1
        assert caps.length(reversed([1, 2, 3])) == 3
        with pytest.raises(fz.NotExactSizeError):
            caps.length(map(str, [1]))

    def test_is_double_ended(self) -> None:
        """Test runtime detection of backward pulls."""
        assert fz.is_double_ended(fz.Cursor([]))
        assert fz.is_double_ended(fz.flat_zip([]))
        assert not fz.is_double_ended(iter([]))
