from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Self

from . import _capabilities as caps
from ._core import Pipeable, get_config
from ._results import NONE, Option, Some

if TYPE_CHECKING:
    from ._rev import Rev


class Group[K, V](Pipeable):
    """One key together with the iterator of its elements.

    Yields `(key, element)` pairs, duplicating the key with **clone** once per pair handed out.

    Capabilities (backward pulls, exact length, fusing, bulk folds) are those of the element iterator.

    Args:
        key (K): The key shared by every element.
        values (Iterable[V]): The elements, converted with `into_iter`.
        clone (Callable[[K], K] | None): Key duplication. Defaults to `get_config().clone`.

    Example:
    ```python
    >>> import flatzip as fz
    >>> group = fz.Group("vowels", "aeiou")
    >>> next(group)
    ('vowels', 'a')
    >>> group.next_back()
    Some(value=('vowels', 'u'))
    >>> group.length()
    3
    >>> group.fold("", lambda acc, pair: acc + pair[1])
    'eio'

    ```
    """

    __slots__ = ("_clone", "_key", "_values")

    def __init__(
        self,
        key: K,
        values: Iterable[V],
        clone: Callable[[K], K] | None = None,
    ) -> None:
        self._key = key
        self._values = caps.into_iter(values)
        self._clone = get_config().clone if clone is None else clone

    @classmethod
    def from_pair(
        cls, pair: tuple[K, Iterable[V]], clone: Callable[[K], K] | None = None
    ) -> Self:
        """Build a group from a `(key, source)` pair."""
        key, values = pair
        return cls(key, values, clone)

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> tuple[K, V]:
        value = next(self._values)
        return self._clone(self._key), value

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def __repr__(self) -> str:
        return f"Group(key={get_config().key_repr(self._key)})"

    def _pair(self, value: V) -> tuple[K, V]:
        return self._clone(self._key), value

    def next(self) -> Option[tuple[K, V]]:
        """Return the next pair from the front, cloning the key."""
        return caps.step(self._values).map(self._pair)

    def next_back(self) -> Option[tuple[K, V]]:
        """Return the next pair from the back, cloning the key."""
        return caps.step_back(self._values).map(self._pair)

    def nth(self, n: int) -> Option[tuple[K, V]]:
        """Skip **n** pairs and return the next one. Only the returned pair clones the key."""
        return caps.nth(self._values, n).map(self._pair)

    def nth_back(self, n: int) -> Option[tuple[K, V]]:
        """Skip **n** pairs from the back and return the next one. Only the returned pair clones the key."""
        return caps.nth_back(self._values, n).map(self._pair)

    def fold[B](self, init: B, func: Callable[[B, tuple[K, V]], B]) -> B:
        """Fold the remaining pairs, front to back, with the element iterator's own fold."""
        key, clone = self._key, self._clone

        def _step(acc: B, value: V) -> B:
            return func(acc, (clone(key), value))

        return caps.fold(self._values, init, _step)

    def rfold[B](self, init: B, func: Callable[[B, tuple[K, V]], B]) -> B:
        """Fold the remaining pairs, back to front, with the element iterator's own fold."""
        key, clone = self._key, self._clone

        def _step(acc: B, value: V) -> B:
            return func(acc, (clone(key), value))

        return caps.rfold(self._values, init, _step)

    def last(self) -> Option[tuple[K, V]]:
        """Consume the group and return its final pair, handing out the stored key itself.

        Example:
        ```python
        >>> import flatzip as fz
        >>> key = ["k"]
        >>> group = fz.Group(key, [1, 2, 3], clone=list.copy)
        >>> last_key, value = group.last().unwrap()
        >>> last_key is key, value
        (True, 3)

        ```
        """
        key = self._key
        return caps.last(self._values).map(lambda value: (key, value))

    def count(self) -> int:
        """Consume the group and return the number of remaining elements, without cloning."""
        return caps.count(self._values)

    def find(self, predicate: Callable[[tuple[K, V]], bool]) -> Option[tuple[K, V]]:
        """Return the first remaining pair satisfying **predicate**.

        The key is cloned once for the whole search, and the group resumes right after the match.

        Example:
        ```python
        >>> import flatzip as fz
        >>> clones = []
        >>> def clone(key: str) -> str:
        ...     clones.append(key)
        ...     return key
        >>> group = fz.Group("n", range(10), clone=clone)
        >>> group.find(lambda pair: pair[1] > 6)
        Some(value=('n', 7))
        >>> len(clones)
        1
        >>> next(group)
        ('n', 8)

        ```
        """
        return self._search(caps.step, predicate)

    def rfind(self, predicate: Callable[[tuple[K, V]], bool]) -> Option[tuple[K, V]]:
        """Return the last remaining pair satisfying **predicate**, searching from the back."""
        return self._search(caps.step_back, predicate)

    def _search(
        self,
        pull: Callable[[Iterable[V]], Option[V]],
        predicate: Callable[[tuple[K, V]], bool],
    ) -> Option[tuple[K, V]]:
        match pull(self._values):
            case Some(value):
                key = self._clone(self._key)
            case _:
                return NONE
        while True:
            pair = (key, value)
            if predicate(pair):
                return Some(pair)
            match pull(self._values):
                case Some(value):
                    continue
                case _:
                    return NONE

    def size_hint(self) -> tuple[int, Option[int]]:
        """Bounds on the remaining length, from the element iterator."""
        return caps.size_hint(self._values)

    def length(self) -> int:
        """Exact remaining length, from the element iterator."""
        return caps.length(self._values)

    def is_fused(self) -> bool:
        """Whether the element iterator stays exhausted once exhausted."""
        return caps.is_fused(self._values)

    def rev(self) -> Rev[tuple[K, V]]:
        """Iterate from the back."""
        from ._rev import Rev

        return Rev(self)
