from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import cytoolz as cz

from ._format import key_repr


@dataclass(slots=True)
class Config:
    """Process-wide defaults for `flatzip` adapters.

    Attributes:
        clone: Key duplication used by adapters created without an explicit `clone`.
        repr_depth: Nesting depth shown for keys in `repr()`.
        repr_width: Width at which a key's `repr()` is cut.
    """

    clone: Callable[[Any], Any] = cz.functoolz.identity
    repr_depth: int = 2
    repr_width: int = 60

    def key_repr(self, key: object) -> str:
        """Format **key** for `repr()` with the configured depth and width."""
        return key_repr(key, self.repr_depth, self.repr_width)


_CONFIG = Config()


def get_config() -> Config:
    """Return the shared `Config` instance.

    Changes apply to adapters created afterwards.

    Example:
    ```python
    >>> import copy
    >>> import flatzip as fz
    >>> config = fz.get_config()
    >>> config.clone = copy.copy
    >>> key = ["shared"]
    >>> (k1, _), (k2, _) = fz.flat_zip([(key, "xy")])
    >>> k1 == key and k1 is not key and k1 is not k2
    True
    >>> config.clone = fz.Config().clone

    ```
    """
    return _CONFIG
