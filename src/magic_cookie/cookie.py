"""Cookie handles owning a single libmagic instance.

A :class:`Cookie` is the only owner of the native pointer returned by
``magic_open``. It is released exactly once: by :meth:`Cookie.close`, by
leaving a ``with`` block, or when the object is garbage collected, whichever
happens first. Cookies are not thread-safe; serialize access to a shared
cookie or open one per thread.
"""

from __future__ import annotations

import logging
import os
import weakref
from functools import wraps
from typing import TYPE_CHECKING, Any, Callable, Sequence, TypeVar, Union

from .errors import CookieClosedError, CookieOpenError, DatabaseError
from .flags import CookieFlags
from .native import LibMagic, load_library
from .results import QueryResult

if TYPE_CHECKING:
    from .config.models import MagicConfig

LOGGER = logging.getLogger(__name__)

PathArg = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]
DatabaseArg = Union[PathArg, Sequence[PathArg], None]

_F = TypeVar("_F", bound=Callable[..., Any])


def _requires_open(func: _F) -> _F:
    @wraps(func)
    def wrapper(self: "Cookie", *args: Any, **kwargs: Any) -> Any:
        if self._handle is None:
            raise CookieClosedError("cookie has already been closed")
        return func(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


def _encode_path(path: PathArg) -> bytes:
    encoded = os.fsencode(path)
    # c_char_p stops at the first NUL, which would silently name another file.
    if b"\x00" in encoded:
        raise ValueError(f"embedded null byte in path: {path!r}")
    return encoded


def _encode_database(paths: DatabaseArg) -> bytes | None:
    if paths is None:
        return None
    if isinstance(paths, (str, bytes, os.PathLike)):
        return _encode_path(paths)
    return b":".join(_encode_path(path) for path in paths)


def _decode(raw: bytes | None) -> str | None:
    if raw is None:
        return None
    return raw.decode("utf-8", errors="replace")


class Cookie:
    """Identify content with libmagic through one exclusively owned instance.

    The engine is always opened with :attr:`CookieFlags.ERROR` added to the
    requested flags, so missing or unreadable inputs are reported as failures
    instead of as descriptions.

    Query methods return the description or None; when they return None the
    diagnostic is available from :meth:`error` until the next call on this
    cookie. The ``identify_*`` variants capture it immediately.
    """

    def __init__(
        self,
        flags: CookieFlags = CookieFlags.NONE,
        *,
        library: LibMagic | None = None,
    ) -> None:
        """Open a libmagic instance.

        Args:
            flags: Detection options; ``ERROR`` is added unconditionally.
            library: Binding to use; defaults to :func:`load_library`.

        Raises:
            LibraryNotFoundError: If libmagic cannot be loaded.
            CookieOpenError: If libmagic cannot allocate an instance.
        """
        self._lib = library or load_library()
        opened_with = CookieFlags(flags) | CookieFlags.ERROR
        handle = self._lib.open(int(opened_with))
        if not handle:
            raise CookieOpenError(f"magic_open failed for flags {opened_with!r}")
        self._handle: int | None = handle
        self._flags = opened_with
        self._finalizer = weakref.finalize(self, _release, self._lib, handle)
        LOGGER.debug("Opened magic cookie %#x with %r", handle, opened_with)

    @classmethod
    def open(cls, flags: CookieFlags = CookieFlags.NONE, *, library: LibMagic | None = None) -> "Cookie":
        """Open a cookie; equivalent to calling the class."""
        return cls(flags, library=library)

    @classmethod
    def from_config(cls, config: "MagicConfig", *, library: LibMagic | None = None) -> "Cookie":
        """Open a cookie and load its database as described by ``config``.

        Args:
            config: Resolved configuration.
            library: Binding override; defaults to the configured library path.

        Returns:
            Cookie: Open cookie with the configured database loaded.

        Raises:
            DatabaseError: If the configured database cannot be loaded.
        """
        library = library or load_library(config.library.path)
        cookie = cls(config.detection.to_flags(), library=library)
        if not cookie.load(config.database.paths or None):
            message = cookie.error() or "magic_load failed"
            cookie.close()
            raise DatabaseError(message)
        return cookie

    def __enter__(self) -> "Cookie":
        return self

    def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<Cookie {state} flags={self._flags!r}>"

    def __copy__(self) -> "Cookie":
        raise TypeError("Cookie objects own a native handle and cannot be copied")

    def __deepcopy__(self, memo: Any) -> "Cookie":
        raise TypeError("Cookie objects own a native handle and cannot be copied")

    def __reduce__(self) -> Any:
        raise TypeError("Cookie objects own a native handle and cannot be pickled")

    @property
    def closed(self) -> bool:
        """Return True once the native handle has been released."""
        return self._handle is None

    @property
    def flags(self) -> CookieFlags:
        """Return the flags most recently handed to libmagic."""
        return self._flags

    @property
    def library(self) -> LibMagic:
        """Return the libmagic binding this cookie was opened with."""
        return self._lib

    def close(self) -> None:
        """Release the native handle. Further calls are no-ops."""
        if self._handle is None:
            return
        self._handle = None
        self._finalizer()

    @_requires_open
    def set_flags(self, flags: CookieFlags) -> None:
        """Replace the flags used by subsequent queries.

        ``ERROR`` is not re-applied here; pass it explicitly to keep strict
        errors after changing flags. When libmagic rejects the flags (for
        instance ``PRESERVE_ATIME`` without utime support) the engine keeps its
        previous flags and so does :attr:`flags`.
        """
        flags = CookieFlags(flags)
        if self._lib.setflags(self._handle, int(flags)) != 0:
            LOGGER.debug("magic_setflags rejected %r; keeping %r", flags, self._flags)
            return
        self._flags = flags

    # Queries ---------------------------------------------------------

    @_requires_open
    def file(self, path: PathArg) -> str | None:
        """Return a description of the file at ``path``, or None on failure."""
        return _decode(self._lib.file(self._handle, _encode_path(path)))

    @_requires_open
    def buffer(self, data: bytes | bytearray | memoryview) -> str | None:
        """Return a description of ``data``, or None on failure."""
        return _decode(self._lib.buffer(self._handle, bytes(data)))

    @_requires_open
    def descriptor(self, fd: int | Any) -> str | None:
        """Return a description of an open descriptor, or None on failure.

        ``fd`` may be an integer or any object with ``fileno()``. The
        descriptor is left open.
        """
        if not isinstance(fd, int):
            fd = fd.fileno()
        return _decode(self._lib.descriptor(self._handle, fd))

    def identify_file(self, path: PathArg) -> QueryResult:
        """Run :meth:`file` and capture any diagnostic into a result."""
        return self._capture(self.file(path))

    def identify_buffer(self, data: bytes | bytearray | memoryview) -> QueryResult:
        """Run :meth:`buffer` and capture any diagnostic into a result."""
        return self._capture(self.buffer(data))

    def identify_descriptor(self, fd: int | Any) -> QueryResult:
        """Run :meth:`descriptor` and capture any diagnostic into a result."""
        return self._capture(self.descriptor(fd))

    def _capture(self, description: str | None) -> QueryResult:
        if description is not None:
            return QueryResult(description=description)
        return QueryResult(error=self.error(), errno=self.errno())

    # Database management ---------------------------------------------

    @_requires_open
    def load(self, paths: DatabaseArg = None) -> bool:
        """Load the magic database(s) at ``paths`` (libmagic's default when None)."""
        ok = self._lib.load(self._handle, _encode_database(paths)) == 0
        LOGGER.debug("magic_load(%r) -> %s", paths, ok)
        return ok

    @_requires_open
    def compile(self, paths: DatabaseArg) -> bool:
        """Compile source magic file(s); the output is written next to the input."""
        ok = self._lib.compile(self._handle, _encode_database(paths)) == 0
        LOGGER.debug("magic_compile(%r) -> %s", paths, ok)
        return ok

    @_requires_open
    def check(self, paths: DatabaseArg) -> bool:
        """Validate source magic file(s) without producing output."""
        ok = self._lib.check(self._handle, _encode_database(paths)) == 0
        LOGGER.debug("magic_check(%r) -> %s", paths, ok)
        return ok

    @_requires_open
    def list(self, paths: DatabaseArg) -> bool:
        """Ask libmagic to print the entries of the given database(s)."""
        ok = self._lib.list(self._handle, _encode_database(paths)) == 0
        LOGGER.debug("magic_list(%r) -> %s", paths, ok)
        return ok

    # Error channel ---------------------------------------------------

    @_requires_open
    def error(self) -> str | None:
        """Return the diagnostic for the last failed call, if any."""
        return _decode(self._lib.error(self._handle))

    @_requires_open
    def errno(self) -> int:
        """Return the errno recorded by libmagic for the last failed call."""
        return int(self._lib.errno(self._handle))


def _release(library: LibMagic, handle: int) -> None:
    library.close(handle)
    LOGGER.debug("Closed magic cookie %#x", handle)


__all__ = ["Cookie"]
