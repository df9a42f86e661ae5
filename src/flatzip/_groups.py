from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Self

from . import _capabilities as caps
from ._core import Pipeable, get_config
from ._group import Group
from ._results import Option

type IntoPairs[K, V] = Mapping[K, Iterable[V]] | Iterable[tuple[K, Iterable[V]]]
"""Anything `flat_zip` accepts: a mapping, or an iterable of `(key, group source)` pairs."""


class Groups[K, V](Pipeable):
    """Lazily turns each `(key, source)` pair of the outer iterable into a `Group`.

    Nothing is converted ahead of a pull: each pull, from either end, converts exactly one pair.

    A `Mapping` is read through its `.items()` view.

    Args:
        pairs (IntoPairs[K, V]): The outer iterable.
        clone (Callable[[K], K] | None): Key duplication handed to every `Group`. Defaults to `get_config().clone`.

    Example:
    ```python
    >>> import flatzip as fz
    >>> groups = fz.Groups({3: ["three", "3"], 5: [], 8: ["eight"]})
    >>> groups.length()
    3
    >>> group = groups.next_back().unwrap()
    >>> group
    Group(key=8)
    >>> list(group)
    [(8, 'eight')]
    >>> groups.fold(0, lambda acc, group: acc + group.count())
    2

    ```
    """

    __slots__ = ("_clone", "_iter")

    def __init__(
        self, pairs: IntoPairs[K, V], clone: Callable[[K], K] | None = None
    ) -> None:
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        self._iter = caps.into_iter(pairs)
        self._clone = get_config().clone if clone is None else clone

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> Group[K, V]:
        return self._group(next(self._iter))

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def _group(self, pair: tuple[K, Iterable[V]]) -> Group[K, V]:
        return Group.from_pair(pair, self._clone)

    def next(self) -> Option[Group[K, V]]:
        """Convert the next pair from the front into a `Group`."""
        return caps.step(self._iter).map(self._group)

    def next_back(self) -> Option[Group[K, V]]:
        """Convert the next pair from the back into a `Group`."""
        return caps.step_back(self._iter).map(self._group)

    def nth(self, n: int) -> Option[Group[K, V]]:
        """Skip **n** pairs from the front and convert the next one."""
        return caps.nth(self._iter, n).map(self._group)

    def nth_back(self, n: int) -> Option[Group[K, V]]:
        """Skip **n** pairs from the back and convert the next one."""
        return caps.nth_back(self._iter, n).map(self._group)

    def fold[B](self, init: B, func: Callable[[B, Group[K, V]], B]) -> B:
        """Fold the remaining groups, front to back."""
        def _step(acc: B, pair: tuple[K, Iterable[V]]) -> B:
            return func(acc, self._group(pair))

        return caps.fold(self._iter, init, _step)

    def rfold[B](self, init: B, func: Callable[[B, Group[K, V]], B]) -> B:
        """Fold the remaining groups, back to front."""
        def _step(acc: B, pair: tuple[K, Iterable[V]]) -> B:
            return func(acc, self._group(pair))

        return caps.rfold(self._iter, init, _step)

    def last(self) -> Option[Group[K, V]]:
        """Consume the outer iterator and convert its final pair."""
        return caps.last(self._iter).map(self._group)

    def count(self) -> int:
        """Consume the outer iterator and return the number of remaining pairs."""
        return caps.count(self._iter)

    def size_hint(self) -> tuple[int, Option[int]]:
        """Bounds on the number of remaining groups."""
        return caps.size_hint(self._iter)

    def length(self) -> int:
        """Exact number of remaining groups."""
        return caps.length(self._iter)

    def is_fused(self) -> bool:
        """Whether the outer iterator stays exhausted once exhausted."""
        return caps.is_fused(self._iter)
