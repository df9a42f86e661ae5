from ._capabilities import (
    DoubleEndedIterator,
    NotDoubleEndedError,
    NotExactSizeError,
    into_iter,
    is_double_ended,
)
from ._core import Config, Pipeable, get_config
from ._cursor import Cursor
from ._flat_zip import FlatZip, flat_zip
from ._fuse import Fuse, fuse
from ._group import Group
from ._groups import Groups, IntoPairs
from ._results import NONE, NoneOption, Option, OptionUnwrapError, Some
from ._rev import Rev

__all__ = [
    "NONE",
    "Config",
    "Cursor",
    "DoubleEndedIterator",
    "FlatZip",
    "Fuse",
    "Group",
    "Groups",
    "IntoPairs",
    "NoneOption",
    "NotDoubleEndedError",
    "NotExactSizeError",
    "Option",
    "OptionUnwrapError",
    "Pipeable",
    "Rev",
    "Some",
    "flat_zip",
    "fuse",
    "get_config",
    "into_iter",
    "is_double_ended",
]
