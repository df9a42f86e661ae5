from ._config import Config, get_config
from ._main import Pipeable

__all__ = [
    "Config",
    "Pipeable",
    "get_config",
]
