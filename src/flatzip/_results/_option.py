from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never, TypeIs


class OptionUnwrapError(RuntimeError):
    """Raised by `unwrap` and `expect` on `NONE`."""


class Option[T](ABC):
    """An optional value: either `Some(value)` or `NONE`.

    Every single-step pull of a `flatzip` adapter (`next`, `next_back`, `nth`, `last`, `find`...) returns an `Option`.

    Exhaustion is a value, never an exception.

    `Some` and `NONE` support pattern matching:

    ```python
    >>> import flatzip as fz
    >>> def describe(opt: fz.Option[tuple[int, str]]) -> str:
    ...     match opt:
    ...         case fz.Some((key, value)):
    ...             return f"{key}: {value}"
    ...         case _:
    ...             return "exhausted"
    >>> it = fz.flat_zip([(1, ["one"])])
    >>> describe(it.next())
    '1: one'
    >>> describe(it.next())
    'exhausted'

    ```
    """

    __slots__ = ()

    @abstractmethod
    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        """
        Returns `True` if the option is a `Some` value.

        Example:
            ```python
            >>> from flatzip import Some, NONE
            >>> Some((0, "zero")).is_some()
            True
            >>> NONE.is_some()
            False

            ```
        """
        ...

    @abstractmethod
    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        """Returns `True` if the option is `NONE`."""
        ...

    @abstractmethod
    def unwrap(self) -> T:
        """
        Returns the contained `Some` value.

        Raises:
            OptionUnwrapError: If the option is `NONE`.

        Example:
            ```python
            >>> from flatzip import Some, NONE
            >>> Some((3, "three")).unwrap()
            (3, 'three')
            >>> NONE.unwrap()
            Traceback (most recent call last):
                ...
            flatzip._results._option.OptionUnwrapError: called `unwrap` on a `None`

            ```
        """
        ...

    def expect(self, msg: str) -> T:
        """
        Returns the contained `Some` value, or raises `OptionUnwrapError` with **msg**.

        Example:
            ```python
            >>> from flatzip import NONE
            >>> NONE.expect("group should not be empty")
            Traceback (most recent call last):
                ...
            flatzip._results._option.OptionUnwrapError: group should not be empty (called `expect` on a `None`)

            ```
        """
        if self.is_some():
            return self.unwrap()
        msg = f"{msg} (called `expect` on a `None`)"
        raise OptionUnwrapError(msg)

    def unwrap_or(self, default: T) -> T:
        """
        Returns the contained `Some` value or **default**.

        Example:
            ```python
            >>> import flatzip as fz
            >>> fz.flat_zip([(5, [])]).last().unwrap_or((0, "none"))
            (0, 'none')

            ```
        """
        return self.unwrap() if self.is_some() else default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """Returns the contained `Some` value or computes one from **f**."""
        return self.unwrap() if self.is_some() else f()

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """
        Maps an `Option[T]` to `Option[U]` by applying **f** to a contained value, leaving `NONE` untouched.

        Example:
            ```python
            >>> from flatzip import Some, NONE
            >>> Some("eight").map(len)
            Some(value=5)
            >>> NONE.map(len)
            NONE

            ```
        """
        if self.is_some():
            return Some(f(self.unwrap()))
        return NONE

    def or_(self, optb: Option[T]) -> Option[T]:
        """
        Returns the option if it contains a value, otherwise **optb**.

        Example:
            ```python
            >>> from flatzip import Some, NONE
            >>> Some(2).or_(Some(1))
            Some(value=2)
            >>> NONE.or_(Some(1))
            Some(value=1)

            ```
        """
        return self if self.is_some() else optb

    def or_else(self, f: Callable[[], Option[T]]) -> Option[T]:
        """Returns the option if it contains a value, otherwise calls **f** and returns its result."""
        return self if self.is_some() else f()


@dataclass(slots=True)
class Some[T](Option[T]):
    """Option variant representing the presence of a value."""

    value: T

    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        """Always `True`."""
        return True

    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        """Always `False`."""
        return False

    def unwrap(self) -> T:
        """Returns the contained value."""
        return self.value


@dataclass(slots=True)
class NoneOption(Option[Any]):
    """Option variant representing the absence of a value."""

    def __repr__(self) -> str:
        return "NONE"

    def is_some(self) -> TypeIs[Some[Any]]:  # type: ignore[misc]
        """Always `False`."""
        return False

    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        """Always `True`."""
        return True

    def unwrap(self) -> Never:
        """Always raises `OptionUnwrapError`."""
        raise OptionUnwrapError("called `unwrap` on a `None`")


NONE: Option[Any] = NoneOption()
"""Singleton instance representing the absence of a value."""
