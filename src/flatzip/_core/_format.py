from pprint import pformat
from typing import Any


def key_repr(
    key: Any,  # noqa: ANN401
    depth: int = 2,
    width: int = 60,
    *,
    compact: bool = True,
) -> str:
    """Return the `pformat` of **key**, cut to its first line when it does not fit in **width**."""
    text = pformat(key, depth=depth, width=width, compact=compact)
    return text if "\n" not in text else text.splitlines()[0] + "..."
