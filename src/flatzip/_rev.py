from __future__ import annotations

from collections.abc import Callable
from typing import Self

from . import _capabilities as caps
from ._core import Pipeable
from ._results import Option, Some


class Rev[T](Pipeable):
    """A double-ended iterator read from its back.

    Forward operations of `Rev` are the backward operations of the inner iterator, and the other way around.

    Args:
        inner (caps.DoubleEndedIterator[T]): The iterator to reverse.

    Example:
    ```python
    >>> import flatzip as fz
    >>> rev = fz.Cursor("abc").rev()
    >>> next(rev), rev.next_back()
    ('c', Some(value='a'))
    >>> rev.rev().next()
    Some(value='b')

    ```
    """

    __slots__ = ("_inner",)

    def __init__(self, inner: caps.DoubleEndedIterator[T]) -> None:
        self._inner = inner

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> T:
        match caps.step_back(self._inner):  # type: ignore[arg-type]
            case Some(item):
                return item
            case _:
                raise StopIteration

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def __repr__(self) -> str:
        return f"Rev({self._inner!r})"

    def next(self) -> Option[T]:
        """Return the next element from the back of the inner iterator."""
        return caps.step_back(self._inner)  # type: ignore[arg-type]

    def next_back(self) -> Option[T]:
        """Return the next element from the front of the inner iterator."""
        return caps.step(self._inner)  # type: ignore[arg-type]

    def nth(self, n: int) -> Option[T]:
        """Skip **n** elements from the back of the inner iterator and return the next one."""
        return caps.nth_back(self._inner, n)  # type: ignore[arg-type]

    def nth_back(self, n: int) -> Option[T]:
        """Skip **n** elements from the front of the inner iterator and return the next one."""
        return caps.nth(self._inner, n)  # type: ignore[arg-type]

    def fold[B](self, init: B, func: Callable[[B, T], B]) -> B:
        """Fold the inner iterator back to front."""
        return caps.rfold(self._inner, init, func)  # type: ignore[arg-type]

    def rfold[B](self, init: B, func: Callable[[B, T], B]) -> B:
        """Fold the inner iterator front to back."""
        return caps.fold(self._inner, init, func)  # type: ignore[arg-type]

    def find(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Search the inner iterator from the back."""
        return caps.rfind(self._inner, predicate)  # type: ignore[arg-type]

    def rfind(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Search the inner iterator from the front."""
        return caps.find(self._inner, predicate)  # type: ignore[arg-type]

    def last(self) -> Option[T]:
        """Consume the iterator and return the first element of the inner iterator."""
        item = caps.step(self._inner)  # type: ignore[arg-type]
        caps.count(self._inner)  # type: ignore[arg-type]
        return item

    def count(self) -> int:
        """Consume the iterator and return the number of remaining elements."""
        return caps.count(self._inner)  # type: ignore[arg-type]

    def size_hint(self) -> tuple[int, Option[int]]:
        """Bounds on the remaining length."""
        return caps.size_hint(self._inner)  # type: ignore[arg-type]

    def length(self) -> int:
        """Exact remaining length."""
        return caps.length(self._inner)  # type: ignore[arg-type]

    def is_fused(self) -> bool:
        """Whether the inner iterator stays exhausted once exhausted."""
        return caps.is_fused(self._inner)  # type: ignore[arg-type]

    def rev(self) -> caps.DoubleEndedIterator[T]:
        """Return the inner iterator."""
        return self._inner
