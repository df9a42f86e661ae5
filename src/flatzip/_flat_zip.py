from __future__ import annotations

import itertools
from collections.abc import Callable
from typing import TYPE_CHECKING, Self

from . import _capabilities as caps
from ._core import Pipeable
from ._fuse import fuse
from ._groups import Groups, IntoPairs
from ._results import NONE, Option, Some

if TYPE_CHECKING:
    from ._group import Group
    from ._rev import Rev


class FlatZip[K, V](Pipeable):
    """Flattens `(key, group)` pairs into `(key, element)` pairs.

    Every element of a group is paired with a clone of the group's key, and groups without elements contribute nothing.

    The adapter is lazy and holds at most two partially consumed groups, one per end:

    - `front`: the group currently drained by forward pulls.
    - `back`: the group currently drained by backward pulls.

    The groups in between stay in the fused outer iterator until one end needs them.

    When the outer iterator is exhausted, each end finishes the other end's buffered group, so any interleaving of forward and backward pulls yields every pair exactly once.

    Backward pulls need the outer iterable and every group source to be double-ended (sized reversible collections are, through `Cursor`).

    The outer iterable and its groups must agree between their forward and backward pulls; an iterator whose ends disagree gives unspecified results.

    Args:
        pairs (IntoPairs[K, V]): A mapping, or an iterable of `(key, group source)` pairs.
        clone (Callable[[K], K] | None): Key duplication. Defaults to `get_config().clone`.

    Example:
    ```python
    >>> import flatzip as fz
    >>> jagged = [["zero", "", "0"], [], ["II", "two"]]
    >>> it = fz.FlatZip(enumerate(jagged))
    >>> list(it)
    [(0, 'zero'), (0, ''), (0, '0'), (2, 'II'), (2, 'two')]
    >>> it.next()
    NONE
    >>> both_ends = fz.FlatZip({3: ["three", "3"], 5: [], 8: ["eight"]})
    >>> next(both_ends), both_ends.next_back().unwrap(), list(both_ends)
    ((3, 'three'), (8, 'eight'), [(3, '3')])

    ```
    """

    __slots__ = ("_back", "_front", "_groups")

    _front: Group[K, V] | None
    _back: Group[K, V] | None

    def __init__(
        self, pairs: IntoPairs[K, V], clone: Callable[[K], K] | None = None
    ) -> None:
        self._groups = fuse(Groups(pairs, clone))
        self._front = None
        self._back = None

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> tuple[K, V]:
        while True:
            if self._front is not None:
                try:
                    return next(self._front)
                except StopIteration:
                    self._front = None

            match self._groups.next():
                case Some(group):
                    self._front = group
                    continue
                case _:
                    pass

            if self._back is not None:
                try:
                    return next(self._back)
                except StopIteration:
                    self._back = None

            raise StopIteration

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def __repr__(self) -> str:
        return f"FlatZip(front={self._slot_repr(self._front)}, back={self._slot_repr(self._back)})"

    @staticmethod
    def _slot_repr(slot: Group[K, V] | None) -> str:
        return "NONE" if slot is None else repr(slot)

    def next(self) -> Option[tuple[K, V]]:
        """Return the next pair from the front, or `NONE` once every group is drained.

        Example:
        ```python
        >>> import flatzip as fz
        >>> it = fz.flat_zip([("a", []), ("b", [1])])
        >>> it.next()
        Some(value=('b', 1))
        >>> it.next()
        NONE

        ```
        """
        return caps.step(self)

    def next_back(self) -> Option[tuple[K, V]]:
        """Return the next pair from the back, or `NONE` once every group is drained.

        Raises:
            NotDoubleEndedError: If the outer iterator or the group being pulled cannot be pulled from the back.

        Example:
        ```python
        >>> import flatzip as fz
        >>> it = fz.flat_zip([("a", [1, 2]), ("b", [])])
        >>> it.next_back(), it.next_back(), it.next_back()
        (Some(value=('a', 2)), Some(value=('a', 1)), NONE)

        ```
        """
        while True:
            if self._back is not None:
                if (item := self._back.next_back()).is_some():
                    return item
                self._back = None

            match self._groups.next_back():
                case Some(group):
                    self._back = group
                    continue
                case _:
                    pass

            if self._front is not None:
                if (item := self._front.next_back()).is_some():
                    return item
                self._front = None

            return NONE

    def nth(self, n: int) -> Option[tuple[K, V]]:
        """Skip **n** pairs from the front and return the next one."""
        return caps.step(itertools.islice(self, n, None))

    def nth_back(self, n: int) -> Option[tuple[K, V]]:
        """Skip **n** pairs from the back and return the next one."""
        for _ in range(n):
            if self.next_back().is_none():
                return NONE
        return self.next_back()

    def find(self, predicate: Callable[[tuple[K, V]], bool]) -> Option[tuple[K, V]]:
        """Return the first remaining pair satisfying **predicate**.

        Each group is searched with `Group.find`, so the key is cloned at most once per group visited.

        Example:
        ```python
        >>> import flatzip as fz
        >>> it = fz.flat_zip({"odd": [1, 3, 5], "even": [2, 4]})
        >>> it.find(lambda pair: pair[1] > 3)
        Some(value=('odd', 5))
        >>> it.find(lambda pair: pair[1] > 3)
        Some(value=('even', 4))
        >>> it.next()
        NONE

        ```
        """
        while True:
            if self._front is not None:
                if (found := self._front.find(predicate)).is_some():
                    return found
                self._front = None

            match self._groups.next():
                case Some(group):
                    self._front = group
                    continue
                case _:
                    pass

            if self._back is not None:
                if (found := self._back.find(predicate)).is_some():
                    return found
                self._back = None

            return NONE

    def rfind(self, predicate: Callable[[tuple[K, V]], bool]) -> Option[tuple[K, V]]:
        """Return the last remaining pair satisfying **predicate**, searching from the back."""
        while True:
            if self._back is not None:
                if (found := self._back.rfind(predicate)).is_some():
                    return found
                self._back = None

            match self._groups.next_back():
                case Some(group):
                    self._back = group
                    continue
                case _:
                    pass

            if self._front is not None:
                if (found := self._front.rfind(predicate)).is_some():
                    return found
                self._front = None

            return NONE

    def _release(self) -> tuple[Group[K, V] | None, Group[K, V] | None]:
        front, back = self._front, self._back
        self._front = self._back = None
        return front, back

    def _fold_groups[B](self, init: B, func: Callable[[B, Group[K, V]], B]) -> B:
        front, back = self._release()
        acc = init
        if front is not None:
            acc = func(acc, front)
        acc = self._groups.fold(acc, func)
        if back is not None:
            acc = func(acc, back)
        return acc

    def _rfold_groups[B](self, init: B, func: Callable[[B, Group[K, V]], B]) -> B:
        front, back = self._release()
        acc = init
        if back is not None:
            acc = func(acc, back)
        acc = self._groups.rfold(acc, func)
        if front is not None:
            acc = func(acc, front)
        return acc

    def fold[B](self, init: B, func: Callable[[B, tuple[K, V]], B]) -> B:
        """Consume every remaining pair, front to back, into an accumulator.

        Each group is folded with its own element iterator's bulk fold; no pair is buffered.

        Example:
        ```python
        >>> import flatzip as fz
        >>> it = fz.flat_zip({"x": [1, 2], "y": [3]})
        >>> it.fold([], lambda acc, pair: [*acc, f"{pair[0]}{pair[1]}"])
        ['x1', 'x2', 'y3']

        ```
        """
        return self._fold_groups(init, lambda acc, group: group.fold(acc, func))

    def rfold[B](self, init: B, func: Callable[[B, tuple[K, V]], B]) -> B:
        """Consume every remaining pair, back to front, into an accumulator.

        Example:
        ```python
        >>> import flatzip as fz
        >>> it = fz.flat_zip({"x": [1, 2], "y": [3]})
        >>> it.rfold([], lambda acc, pair: [*acc, f"{pair[0]}{pair[1]}"])
        ['y3', 'x2', 'x1']

        ```
        """
        return self._rfold_groups(init, lambda acc, group: group.rfold(acc, func))

    def count(self) -> int:
        """Consume the adapter and return the number of remaining pairs, without building any of them."""
        return self._fold_groups(0, lambda n, group: n + group.count())

    def last(self) -> Option[tuple[K, V]]:
        """Consume the adapter and return the final pair, if any.

        Only the last non-empty group's last element matters; no key is cloned.

        Example:
        ```python
        >>> import flatzip as fz
        >>> fz.flat_zip({3: ["three", "3"], 5: [], 8: ["eight"], 13: []}).last()
        Some(value=(8, 'eight'))

        ```
        """
        return self._fold_groups(NONE, lambda acc, group: group.last().or_(acc))

    def size_hint(self) -> tuple[int, Option[int]]:
        """Bounds on the number of remaining pairs.

        The lower bound counts the buffered groups; the upper bound is only known once the outer iterator is known to be empty.
        """
        front_lo, front_hi = self._slot_hint(self._front)
        back_lo, back_hi = self._slot_hint(self._back)
        lower = front_lo + back_lo
        match caps.size_hint(self._groups), front_hi, back_hi:
            case (0, Some(0)), Some(a), Some(b):
                return lower, Some(a + b)
            case _:
                return lower, NONE

    @staticmethod
    def _slot_hint(slot: Group[K, V] | None) -> tuple[int, Option[int]]:
        return (0, Some(0)) if slot is None else slot.size_hint()

    def is_fused(self) -> bool:
        """Always `True`: the outer iterator is fused and drained slots are released."""
        return True

    def rev(self) -> Rev[tuple[K, V]]:
        """Iterate from the back.

        Example:
        ```python
        >>> import flatzip as fz
        >>> fz.flat_zip([(1, "ab"), (2, "c")]).rev().into(list)
        [(2, 'c'), (1, 'b'), (1, 'a')]

        ```
        """
        from ._rev import Rev

        return Rev(self)


def flat_zip[K, V](
    pairs: IntoPairs[K, V], clone: Callable[[K], K] | None = None
) -> FlatZip[K, V]:
    """Flatten a mapping, or an iterable of `(key, group source)` pairs, into `(key, element)` pairs.

    Args:
        pairs (IntoPairs[K, V]): The outer iterable.
        clone (Callable[[K], K] | None): Key duplication. Defaults to `get_config().clone`.

    Returns:
        FlatZip[K, V]: The lazy adapter.

    Example:
    ```python
    >>> import flatzip as fz
    >>> from collections import defaultdict
    >>> index = defaultdict(list)
    >>> for word in ["apple", "avocado", "banana"]:
    ...     index[word[0]].append(word)
    >>> fz.flat_zip(index).into(list)
    [('a', 'apple'), ('a', 'avocado'), ('b', 'banana')]
    >>> fz.flat_zip(index).count()
    3

    ```
    """
    return FlatZip(pairs, clone)
