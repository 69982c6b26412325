"""Shared fixtures for magic-cookie tests."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from magic_cookie import Cookie, CookieFlags, LibMagic, LibraryNotFoundError, load_library

HANDLE = 0x5EED


class FakeLibMagic:
    """In-memory stand-in for :class:`LibMagic` that records every call."""

    name = "fake-libmagic"

    def __init__(self, *, handle: int | None = HANDLE, database_status: int = 0) -> None:
        self.handle = handle
        self.database_status = database_status
        self.setflags_status = 0
        self.descriptions: dict[object, bytes | None] = {}
        self.opened: list[int] = []
        self.closed: list[int] = []
        self.flag_calls: list[int] = []
        self.database_calls: list[tuple[str, bytes | None]] = []
        self.pending_error: bytes | None = None
        self.pending_errno = 0

    def open(self, flags: int) -> int | None:
        self.opened.append(flags)
        return self.handle

    def close(self, cookie: int) -> None:
        self.closed.append(cookie)

    def error(self, cookie: int) -> bytes | None:
        return self.pending_error

    def errno(self, cookie: int) -> int:
        return self.pending_errno

    def _lookup(self, key: object, missing: bytes) -> bytes | None:
        self.pending_error = None
        self.pending_errno = 0
        if key in self.descriptions:
            return self.descriptions[key]
        self.pending_error = missing
        self.pending_errno = 2
        return None

    def file(self, cookie: int, filename: bytes) -> bytes | None:
        return self._lookup(filename, b"cannot stat `" + filename + b"' (No such file or directory)")

    def buffer(self, cookie: int, data: bytes) -> bytes | None:
        return self._lookup(data, b"no match for buffer")

    def descriptor(self, cookie: int, fd: int) -> bytes | None:
        return self._lookup(fd, b"cannot read fd")

    def setflags(self, cookie: int, flags: int) -> int:
        self.flag_calls.append(flags)
        return self.setflags_status

    def _database(self, operation: str, filename: bytes | None) -> int:
        self.database_calls.append((operation, filename))
        if self.database_status != 0:
            self.pending_error = b"could not find any valid magic files!"
        return self.database_status

    def load(self, cookie: int, filename: bytes | None) -> int:
        return self._database("load", filename)

    def compile(self, cookie: int, filename: bytes | None) -> int:
        return self._database("compile", filename)

    def check(self, cookie: int, filename: bytes | None) -> int:
        return self._database("check", filename)

    def list(self, cookie: int, filename: bytes | None) -> int:
        return self._database("list", filename)


@pytest.fixture
def fake_lib() -> FakeLibMagic:
    return FakeLibMagic()


@pytest.fixture(scope="session")
def libmagic() -> LibMagic:
    """Return the system libmagic binding, skipping when it is not installed."""
    try:
        return load_library()
    except LibraryNotFoundError as exc:
        pytest.skip(f"libmagic unavailable: {exc}")


@pytest.fixture
def loaded_cookie(libmagic: LibMagic) -> Iterator[Cookie]:
    """Yield a cookie with the default magic database loaded."""
    with Cookie(CookieFlags.NONE, library=libmagic) as cookie:
        if not cookie.load():
            pytest.skip(f"default magic database unavailable: {cookie.error()}")
        yield cookie


@pytest.fixture
def png_path(tmp_path: Path) -> Path:
    """Write a 128x128 RGBA PNG and return its path."""
    from PIL import Image

    path = tmp_path / "logo-128x128.png"
    Image.new("RGBA", (128, 128), color=(0, 0, 0, 255)).save(path)
    return path
