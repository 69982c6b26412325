"""Exceptions raised by magic-cookie."""


class MagicError(Exception):
    """Base exception for libmagic access."""


class LibraryNotFoundError(MagicError):
    """Raised when the libmagic shared library cannot be located or loaded."""


class CookieOpenError(MagicError):
    """Raised when libmagic refuses to allocate a new cookie."""


class CookieClosedError(MagicError):
    """Raised when an operation is issued on a cookie that was already closed."""


class DatabaseError(MagicError):
    """Raised when a magic database cannot be loaded for a configured cookie."""


class UnsupportedOperationError(MagicError):
    """Raised when the loaded libmagic does not export a requested entry point."""


class QueryError(MagicError):
    """Raised for a failed query when the caller asks for an exception.

    Attributes:
        errno: Error number recorded by libmagic, ``0`` when none was set.
    """

    def __init__(self, message: str, errno: int = 0) -> None:
        super().__init__(message)
        self.errno = errno
