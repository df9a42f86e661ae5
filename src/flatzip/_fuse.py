from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Self

from . import _capabilities as caps
from ._core import Pipeable
from ._results import NONE, Option, Some


class Fuse[T](Pipeable):
    """An iterator that stays exhausted once it has reported exhaustion, from either end.

    Python does not require an iterator to keep raising `StopIteration`; `Fuse` enforces it by dropping the inner iterator the first time it runs dry.

    Prefer `fuse()`, which skips the wrapper for iterators that are already fused.

    Args:
        inner (Iterator[T]): The iterator to guard.
    """

    __slots__ = ("_inner",)

    _inner: Iterator[T] | None

    def __init__(self, inner: Iterator[T]) -> None:
        self._inner = inner

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> T:
        if self._inner is None:
            raise StopIteration
        try:
            return next(self._inner)
        except StopIteration:
            self._inner = None
            raise

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def __repr__(self) -> str:
        return f"Fuse({self._inner!r})"

    def _guard(self, item: Option[T]) -> Option[T]:
        if item.is_none():
            self._inner = None
        return item

    def next(self) -> Option[T]:
        """Pull from the front, dropping the inner iterator on exhaustion."""
        if self._inner is None:
            return NONE
        return self._guard(caps.step(self._inner))

    def next_back(self) -> Option[T]:
        """Pull from the back, dropping the inner iterator on exhaustion."""
        if self._inner is None:
            return NONE
        return self._guard(caps.step_back(self._inner))

    def nth(self, n: int) -> Option[T]:
        """Skip **n** elements from the front and return the next one."""
        if self._inner is None:
            return NONE
        return self._guard(caps.nth(self._inner, n))

    def nth_back(self, n: int) -> Option[T]:
        """Skip **n** elements from the back and return the next one."""
        if self._inner is None:
            return NONE
        return self._guard(caps.nth_back(self._inner, n))

    def _take(self) -> Iterator[T] | None:
        inner, self._inner = self._inner, None
        return inner

    def fold[B](self, init: B, func: Callable[[B, T], B]) -> B:
        """Fold the remaining elements, front to back."""
        inner = self._take()
        return init if inner is None else caps.fold(inner, init, func)

    def rfold[B](self, init: B, func: Callable[[B, T], B]) -> B:
        """Fold the remaining elements, back to front."""
        inner = self._take()
        return init if inner is None else caps.rfold(inner, init, func)

    def last(self) -> Option[T]:
        """Consume the iterator and return its final element."""
        inner = self._take()
        return NONE if inner is None else caps.last(inner)

    def count(self) -> int:
        """Consume the iterator and return the number of remaining elements."""
        inner = self._take()
        return 0 if inner is None else caps.count(inner)

    def size_hint(self) -> tuple[int, Option[int]]:
        """Bounds on the remaining length, `(0, Some(0))` once exhausted."""
        if self._inner is None:
            return 0, Some(0)
        return caps.size_hint(self._inner)

    def length(self) -> int:
        """Exact remaining length."""
        return 0 if self._inner is None else caps.length(self._inner)

    def is_fused(self) -> bool:
        """Always `True`."""
        return True


def fuse[T](it: Iterator[T]) -> Iterator[T] | Fuse[T]:
    """Return **it** unchanged if it is already fused, else wrap it in a `Fuse`.

    Example:
    ```python
    >>> import flatzip as fz
    >>> class Flaky:
    ...     def __init__(self) -> None:
    ...         self.calls = 0
    ...     def __iter__(self) -> "Flaky":
    ...         return self
    ...     def __next__(self) -> int:
    ...         self.calls += 1
    ...         if self.calls == 1:
    ...             raise StopIteration
    ...         return self.calls
    >>> fused = fz.fuse(Flaky())
    >>> fused.next(), fused.next()
    (NONE, NONE)
    >>> gen = (x for x in range(3))
    >>> fz.fuse(gen) is gen
    True

    ```
    """
    return it if caps.is_fused(it) else Fuse(it)

