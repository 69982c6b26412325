"""Bitmask flags controlling libmagic behavior."""

from __future__ import annotations

from enum import IntFlag
from functools import reduce
from operator import or_
from typing import Iterable


class CookieFlags(IntFlag):
    """Options passed to libmagic when opening a cookie or changing its flags.

    Members combine with ``|``. ``MIME`` and ``NO_CHECK_BUILTIN`` are aliases
    built from other members.
    """

    NONE = 0x000000
    DEBUG = 0x000001
    SYMLINK = 0x000002
    COMPRESS = 0x000004
    DEVICES = 0x000008
    MIME_TYPE = 0x000010
    CONTINUE = 0x000020
    CHECK = 0x000040
    PRESERVE_ATIME = 0x000080
    RAW = 0x000100
    ERROR = 0x000200
    MIME_ENCODING = 0x000400
    MIME = MIME_TYPE | MIME_ENCODING
    APPLE = 0x000800

    NO_CHECK_COMPRESS = 0x001000
    NO_CHECK_TAR = 0x002000
    NO_CHECK_SOFT = 0x004000
    NO_CHECK_APPTYPE = 0x008000
    NO_CHECK_ELF = 0x010000
    NO_CHECK_TEXT = 0x020000
    NO_CHECK_CDF = 0x040000
    NO_CHECK_TOKENS = 0x100000
    NO_CHECK_ENCODING = 0x200000

    # Built-in tests only; NO_CHECK_SOFT still consults the magic file.
    NO_CHECK_BUILTIN = (
        NO_CHECK_COMPRESS
        | NO_CHECK_TAR
        | NO_CHECK_APPTYPE
        | NO_CHECK_ELF
        | NO_CHECK_TEXT
        | NO_CHECK_CDF
        | NO_CHECK_TOKENS
        | NO_CHECK_ENCODING
    )


def combine(*flags: CookieFlags | int) -> CookieFlags:
    """Return the union of ``flags`` (``NONE`` when called without arguments)."""
    return CookieFlags(reduce(or_, flags, CookieFlags.NONE))


def parse_flags(names: Iterable[str]) -> CookieFlags:
    """Resolve flag names such as ``"mime_type"`` into a single flag value.

    Args:
        names: Member names of :class:`CookieFlags`, matched case-insensitively.

    Returns:
        CookieFlags: Union of the named members.

    Raises:
        ValueError: If a name does not match any member.
    """
    members = CookieFlags.__members__
    result = CookieFlags.NONE
    for name in names:
        key = name.strip().upper().replace("-", "_")
        if key not in members:
            raise ValueError(f"Unknown magic flag: {name!r}")
        result |= members[key]
    return result


__all__ = ["CookieFlags", "combine", "parse_flags"]
