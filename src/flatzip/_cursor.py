from __future__ import annotations

import functools
import itertools
import sys
from collections import deque
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Protocol, Self

from ._core import Pipeable
from ._results import NONE, Option, Some

if TYPE_CHECKING:
    from ._rev import Rev


class SizedReversible[T](Protocol):
    """A collection supporting `len()`, `iter()` and `reversed()`."""

    def __len__(self) -> int: ...
    def __iter__(self) -> Iterator[T]: ...
    def __reversed__(self) -> Iterator[T]: ...


def _size(data: SizedReversible[object]) -> int:
    """`len(data)`, without the `sys.maxsize` limit for `range`."""
    match data:
        case range(start=start, stop=stop, step=step):
            return max(0, -((start - stop) // step))
        case _:
            return len(data)


class Cursor[T](Pipeable):
    """A double-ended iterator over a sized, reversible collection.

    The front is read with `iter(data)`, the back with `reversed(data)`, and a shared counter of remaining elements keeps the two ends from crossing.

    Nothing is copied: the collection must not change size while the cursor is alive.

    Args:
        data (SizedReversible[T]): A `list`, `tuple`, `range`, `str`, `dict`, dict view, `deque`...

    Example:
    ```python
    >>> import flatzip as fz
    >>> cursor = fz.Cursor(["a", "b", "c", "d"])
    >>> next(cursor)
    'a'
    >>> cursor.next_back()
    Some(value='d')
    >>> cursor.length()
    2
    >>> list(cursor)
    ['b', 'c']
    >>> cursor.next_back()
    NONE

    ```
    """

    __slots__ = ("_back", "_front", "_remaining")

    def __init__(self, data: SizedReversible[T]) -> None:
        self._front = iter(data)
        self._back = reversed(data)
        self._remaining = _size(data)

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> T:
        if not self._remaining:
            raise StopIteration
        self._remaining -= 1
        return next(self._front)

    def __length_hint__(self) -> int:
        return min(self._remaining, sys.maxsize)

    def __repr__(self) -> str:
        return f"Cursor(remaining={self._remaining})"

    def _take_front(self, n: int) -> Iterator[T]:
        self._remaining -= n
        return itertools.islice(self._front, n)

    def _take_back(self, n: int) -> Iterator[T]:
        self._remaining -= n
        return itertools.islice(self._back, n)

    def next(self) -> Option[T]:
        """Return the next element from the front."""
        if not self._remaining:
            return NONE
        self._remaining -= 1
        return Some(next(self._front))

    def next_back(self) -> Option[T]:
        """Return the next element from the back."""
        if not self._remaining:
            return NONE
        self._remaining -= 1
        return Some(next(self._back))

    def nth(self, n: int) -> Option[T]:
        """Skip **n** elements from the front and return the next one. Exhausts the cursor when **n** is out of range."""
        if n >= self._remaining:
            self._remaining = 0
            return NONE
        deque(self._take_front(n), maxlen=0)
        return self.next()

    def nth_back(self, n: int) -> Option[T]:
        """Skip **n** elements from the back and return the next one. Exhausts the cursor when **n** is out of range."""
        if n >= self._remaining:
            self._remaining = 0
            return NONE
        deque(self._take_back(n), maxlen=0)
        return self.next_back()

    def fold[B](self, init: B, func: Callable[[B, T], B]) -> B:
        """Fold the remaining elements, front to back."""
        return functools.reduce(func, self._take_front(self._remaining), init)

    def rfold[B](self, init: B, func: Callable[[B, T], B]) -> B:
        """Fold the remaining elements, back to front."""
        return functools.reduce(func, self._take_back(self._remaining), init)

    def last(self) -> Option[T]:
        """Consume the cursor and return its final element."""
        item = self.next_back()
        self._remaining = 0
        return item

    def count(self) -> int:
        """Consume the cursor and return the number of remaining elements."""
        n = self._remaining
        self._remaining = 0
        return n

    def length(self) -> int:
        """Exact remaining length."""
        return self._remaining

    def size_hint(self) -> tuple[int, Option[int]]:
        """Exact bounds on the remaining length."""
        return self._remaining, Some(self._remaining)

    def is_fused(self) -> bool:
        """Always `True`."""
        return True

    def rev(self) -> Rev[T]:
        """Iterate from the back."""
        from ._rev import Rev

        return Rev(self)

