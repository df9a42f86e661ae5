"""Optional iterator capabilities and the helpers dispatching on them.

A plain Python iterator only promises forward pulls through `__next__`.

`flatzip` adapters additionally understand, when the wrapped object provides them:

- `next_back()`: backward pull returning an `Option` (double-ended iteration).
- `fold(init, func)` / `rfold(init, func)`: the object's own bulk fold.
- `nth(n)` / `nth_back(n)` / `last()` / `count()`: the object's own skipping and terminal operations.
- `length()` / `size_hint()`: exact or bounded remaining length.
- `is_fused()`: whether the object keeps returning nothing once exhausted.

Every helper below falls back to forward-only behavior when the capability is missing, except backward pulls, which raise `NotDoubleEndedError`.
"""

from __future__ import annotations

import functools
import itertools
import operator
import types
from collections.abc import Callable, Iterable, Iterator, Reversible, Sized
from typing import TYPE_CHECKING, Any, Final, Protocol, runtime_checkable

import more_itertools as mit

from ._results import NONE, Option, Some

if TYPE_CHECKING:
    from ._cursor import Cursor


class NotDoubleEndedError(TypeError):
    """Raised by a backward operation on an iterator without `next_back`."""


class NotExactSizeError(TypeError):
    """Raised by `length()` on an iterator that cannot report an exact length."""


@runtime_checkable
class DoubleEndedIterator[T](Protocol):
    """An iterator that can also be pulled from the back.

    Both ends draw from the same remaining elements: once they meet, both report exhaustion.
    """

    def __next__(self) -> T: ...

    def next_back(self) -> Option[T]:
        """Return the next element from the back, or `NONE` once both ends have met."""


def _builtin_iterator_types() -> tuple[type, ...]:
    return tuple(
        {
            type(iter([])),
            type(reversed([])),
            type(iter(())),
            type(iter(range(0))),
            type(iter(range(1 << 64))),
            type(iter("")),
            type(iter("é")),
            type(iter(b"")),
            type(iter({})),
            type(iter({}.values())),
            type(iter({}.items())),
            type(reversed({})),
            type(reversed({}.values())),
            type(reversed({}.items())),
        }
    )


_EXACT_SIZE: Final = _builtin_iterator_types()
"""Builtin iterators whose `__length_hint__` is exact."""
_FUSED: Final = (*_EXACT_SIZE, types.GeneratorType)
"""Builtin iterators that stay exhausted once exhausted."""
_MISSING: Final = object()


def into_iter[T](source: Iterable[T]) -> Iterator[T] | Cursor[T]:
    """Convert a group source into its canonical element iterator.

    - An iterator is used as is.
    - A sized, reversible collection (`list`, `tuple`, `range`, `str`, `dict`, dict views, `deque`...) gets a double-ended `Cursor`.
    - Any other iterable goes through `iter()`.

    Args:
        source (Iterable[T]): The collection or iterator to convert.

    Returns:
        Iterator[T] | Cursor[T]: An iterator over **source**.

    Example:
    ```python
    >>> import flatzip as fz
    >>> fz.into_iter([1, 2, 3]).next_back()
    Some(value=3)
    >>> gen = (x for x in "ab")
    >>> fz.into_iter(gen) is gen
    True

    ```
    """
    from ._cursor import Cursor

    if isinstance(source, Iterator):
        return source
    if isinstance(source, Reversible) and isinstance(source, Sized):
        return Cursor(source)
    return iter(source)


def is_double_ended(it: object) -> bool:
    """Return `True` if **it** supports backward pulls."""
    return isinstance(it, DoubleEndedIterator)


def step[T](it: Iterator[T]) -> Option[T]:
    """Pull one element from the front of **it** as an `Option`."""
    for item in it:
        return Some(item)
    return NONE


def back_puller[T](it: Iterator[T]) -> Callable[[], Option[T]]:
    """Return the `next_back` method of **it**, or raise `NotDoubleEndedError`."""
    try:
        return it.next_back  # type: ignore[attr-defined]
    except AttributeError:
        msg = f"{type(it).__name__!r} object does not support backward iteration"
        raise NotDoubleEndedError(msg) from None


def step_back[T](it: Iterator[T]) -> Option[T]:
    """Pull one element from the back of **it** as an `Option`.

    Raises:
        NotDoubleEndedError: If **it** has no `next_back` method.
    """
    return back_puller(it)()


def drain_back[T](it: Iterator[T]) -> Iterator[T]:
    """Lazily yield the elements of **it** from the back."""
    pull = back_puller(it)
    while True:
        match pull():
            case Some(item):
                yield item
            case _:
                return


def fold[T, B](it: Iterator[T], init: B, func: Callable[[B, T], B]) -> B:
    """Fold **it** front to back, with its own `fold` when it has one."""
    method = getattr(it, "fold", None)
    if method is not None:
        return method(init, func)
    return functools.reduce(func, it, init)


def rfold[T, B](it: Iterator[T], init: B, func: Callable[[B, T], B]) -> B:
    """Fold **it** back to front, with its own `rfold` when it has one."""
    method = getattr(it, "rfold", None)
    if method is not None:
        return method(init, func)
    return functools.reduce(func, drain_back(it), init)


def nth[T](it: Iterator[T], n: int) -> Option[T]:
    """Skip **n** elements of **it** and return the next one."""
    method = getattr(it, "nth", None)
    if method is not None:
        return method(n)
    return step(itertools.islice(it, n, None))


def nth_back[T](it: Iterator[T], n: int) -> Option[T]:
    """Skip **n** elements from the back of **it** and return the next one."""
    method = getattr(it, "nth_back", None)
    if method is not None:
        return method(n)
    return step(itertools.islice(drain_back(it), n, None))


def last[T](it: Iterator[T]) -> Option[T]:
    """Consume **it** and return its final element."""
    method = getattr(it, "last", None)
    if method is not None:
        return method()
    value = mit.last(it, _MISSING)
    return NONE if value is _MISSING else Some(value)


def count(it: Iterator[Any]) -> int:
    """Consume **it** and return the number of remaining elements."""
    method = getattr(it, "count", None)
    if method is not None:
        return method()
    return mit.ilen(it)


def size_hint(it: Iterator[Any]) -> tuple[int, Option[int]]:
    """Return the `(lower, upper)` bounds on the remaining length of **it**.

    The upper bound is `NONE` when unknown.
    """
    method = getattr(it, "size_hint", None)
    if method is not None:
        return method()
    lower = operator.length_hint(it)
    if isinstance(it, _EXACT_SIZE):
        return lower, Some(lower)
    return lower, NONE


def length(it: Iterator[Any]) -> int:
    """Return the exact remaining length of **it**.

    Raises:
        NotExactSizeError: If **it** cannot report an exact length.
    """
    method = getattr(it, "length", None)
    if method is not None:
        return method()
    if isinstance(it, _EXACT_SIZE):
        return operator.length_hint(it)
    msg = f"{type(it).__name__!r} object does not report an exact length"
    raise NotExactSizeError(msg)


def is_fused(it: Iterator[Any]) -> bool:
    """Return `True` if **it** stays exhausted once exhausted."""
    method = getattr(it, "is_fused", None)
    if method is not None:
        return method()
    return isinstance(it, _FUSED)


def find[T](it: Iterator[T], predicate: Callable[[T], bool]) -> Option[T]:
    """Return the first remaining element of **it** satisfying **predicate**."""
    method = getattr(it, "find", None)
    if method is not None:
        return method(predicate)
    return step(filter(predicate, it))


def rfind[T](it: Iterator[T], predicate: Callable[[T], bool]) -> Option[T]:
    """Return the last remaining element of **it** satisfying **predicate**, searching from the back."""
    method = getattr(it, "rfind", None)
    if method is not None:
        return method(predicate)
    return step(filter(predicate, drain_back(it)))
