"""Safe access to libmagic content-type detection."""

import logging
from importlib import metadata as _metadata

from .cookie import Cookie
from .errors import (
    CookieClosedError,
    CookieOpenError,
    DatabaseError,
    LibraryNotFoundError,
    MagicError,
    QueryError,
    UnsupportedOperationError,
)
from .flags import CookieFlags, combine, parse_flags
from .log import configure_logging
from .native import LibMagic, load_library
from .results import QueryResult

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "Cookie",
    "CookieFlags",
    "combine",
    "parse_flags",
    "configure_logging",
    "LibMagic",
    "load_library",
    "QueryResult",
    "MagicError",
    "LibraryNotFoundError",
    "CookieOpenError",
    "CookieClosedError",
    "DatabaseError",
    "QueryError",
    "UnsupportedOperationError",
]


def __getattr__(name: str):
    if name == "__version__":
        return _metadata.version("magic-cookie")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(list(globals().keys()) + ["__version__"])
