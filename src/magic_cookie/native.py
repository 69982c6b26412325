"""ctypes binding for the libmagic shared library.

Every entry point that hands back text is declared with a ``c_char_p`` return
type. ctypes copies the nul-terminated buffer into a ``bytes`` object before
the call returns, so nothing here holds on to memory that libmagic may reuse
on the next call against the same cookie.

See libmagic(3) for the semantics of the individual functions.
"""

from __future__ import annotations

import ctypes
import ctypes.util
import logging
import sys
from functools import lru_cache
from typing import Any, Sequence

from .errors import LibraryNotFoundError, UnsupportedOperationError

LOGGER = logging.getLogger(__name__)

magic_t = ctypes.c_void_p

_LIBRARY_NAMES = ("magic", "magic1")
_FALLBACK_SONAMES = {
    "darwin": ("libmagic.1.dylib", "libmagic.dylib"),
    "win32": ("libmagic-1.dll", "magic1.dll"),
}
_DEFAULT_SONAMES = ("libmagic.so.1", "libmagic.so")

_SIGNATURES: dict[str, tuple[Sequence[Any], Any]] = {
    "magic_open": ([ctypes.c_int], magic_t),
    "magic_close": ([magic_t], None),
    "magic_error": ([magic_t], ctypes.c_char_p),
    "magic_errno": ([magic_t], ctypes.c_int),
    "magic_file": ([magic_t, ctypes.c_char_p], ctypes.c_char_p),
    "magic_buffer": ([magic_t, ctypes.c_char_p, ctypes.c_size_t], ctypes.c_char_p),
    "magic_descriptor": ([magic_t, ctypes.c_int], ctypes.c_char_p),
    "magic_setflags": ([magic_t, ctypes.c_int], ctypes.c_int),
    "magic_load": ([magic_t, ctypes.c_char_p], ctypes.c_int),
    "magic_compile": ([magic_t, ctypes.c_char_p], ctypes.c_int),
    "magic_check": ([magic_t, ctypes.c_char_p], ctypes.c_int),
    "magic_list": ([magic_t, ctypes.c_char_p], ctypes.c_int),
}
_OPTIONAL = frozenset({"magic_list"})


class LibMagic:
    """Typed entry points of one loaded libmagic shared object."""

    def __init__(self, dll: ctypes.CDLL) -> None:
        self._dll = dll
        self._functions: dict[str, Any] = {}
        for name, (argtypes, restype) in _SIGNATURES.items():
            try:
                function = getattr(dll, name)
            except AttributeError:
                if name in _OPTIONAL:
                    LOGGER.debug("%s not exported by %s", name, self.name)
                    continue
                raise LibraryNotFoundError(f"{self.name} does not export {name}") from None
            function.argtypes = argtypes
            function.restype = restype
            self._functions[name] = function

    @property
    def name(self) -> str:
        """Return the name the shared object was loaded from."""
        return str(self._dll._name)

    def supports(self, name: str) -> bool:
        """Return True when the library exports the entry point ``name``."""
        return name in self._functions

    def _call(self, name: str, *args: Any) -> Any:
        """Invoke the declared entry point ``name``, if the library exports it."""
        function = self._functions.get(name)
        if function is None:
            raise UnsupportedOperationError(f"{name} is not supported by {self.name}")
        return function(*args)

    def open(self, flags: int) -> int | None:
        """Return a new cookie pointer, or None when allocation fails."""
        return self._call("magic_open", flags)

    def close(self, cookie: int) -> None:
        """Release a cookie pointer returned by :meth:`open`."""
        self._call("magic_close", cookie)

    def error(self, cookie: int) -> bytes | None:
        """Return the pending diagnostic for ``cookie``, if any."""
        return self._call("magic_error", cookie)

    def errno(self, cookie: int) -> int:
        """Return the errno recorded with the last failure on ``cookie``."""
        return self._call("magic_errno", cookie)

    def file(self, cookie: int, filename: bytes) -> bytes | None:
        """Describe the file named by ``filename``."""
        return self._call("magic_file", cookie, filename)

    def buffer(self, cookie: int, data: bytes) -> bytes | None:
        """Describe the bytes in ``data``."""
        return self._call("magic_buffer", cookie, data, len(data))

    def descriptor(self, cookie: int, fd: int) -> bytes | None:
        """Describe the contents of the open descriptor ``fd``."""
        return self._call("magic_descriptor", cookie, fd)

    def setflags(self, cookie: int, flags: int) -> int:
        """Replace the flags of ``cookie``; returns 0 on success."""
        return self._call("magic_setflags", cookie, flags)

    def load(self, cookie: int, filename: bytes | None) -> int:
        """Load database(s) into ``cookie``; returns 0 on success."""
        return self._call("magic_load", cookie, filename)

    def compile(self, cookie: int, filename: bytes | None) -> int:
        """Compile source magic file(s); returns 0 on success."""
        return self._call("magic_compile", cookie, filename)

    def check(self, cookie: int, filename: bytes | None) -> int:
        """Validate source magic file(s); returns 0 on success."""
        return self._call("magic_check", cookie, filename)

    def list(self, cookie: int, filename: bytes | None) -> int:
        """Print the entries of database(s); returns 0 on success."""
        return self._call("magic_list", cookie, filename)


def _candidates(path: str | None) -> list[str]:
    """Return shared-object names to try, most specific first."""
    if path:
        return [path]
    found = [ctypes.util.find_library(name) for name in _LIBRARY_NAMES]
    fallbacks = _FALLBACK_SONAMES.get(sys.platform, _DEFAULT_SONAMES)
    return [name for name in found if name] + list(fallbacks)


@lru_cache(maxsize=None)
def load_library(path: str | None = None) -> LibMagic:
    """Load libmagic, returning one cached binding per requested path.

    Args:
        path: Explicit shared-object path. When omitted the library is searched
            with ``ctypes.util.find_library`` and common platform sonames.

    Returns:
        LibMagic: Binding with argument and return types declared.

    Raises:
        LibraryNotFoundError: If no candidate could be loaded.
    """
    tried: list[str] = []
    for candidate in _candidates(path):
        try:
            dll = ctypes.CDLL(candidate)
        except OSError as exc:
            LOGGER.debug("Could not load %s: %s", candidate, exc)
            tried.append(candidate)
            continue
        LOGGER.debug("Loaded libmagic from %s", candidate)
        return LibMagic(dll)
    raise LibraryNotFoundError(f"Unable to load libmagic (tried: {', '.join(tried)})")


__all__ = ["LibMagic", "load_library", "magic_t"]
