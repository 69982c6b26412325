"""Configuration models describing how cookies are opened."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from magic_cookie.flags import CookieFlags, parse_flags


class MagicBaseModel(BaseModel):
    """Shared configuration for magic-cookie Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class LibrarySettings(MagicBaseModel):
    """Location of the libmagic shared object.

    Attributes:
        path: Explicit shared-object path; None searches the system.
    """

    path: Optional[str] = None


class DatabaseSettings(MagicBaseModel):
    """Magic databases loaded into configured cookies.

    Attributes:
        paths: Database files to load; empty means the libmagic default.
    """

    paths: List[str] = Field(default_factory=list)


class DetectionSettings(MagicBaseModel):
    """Detection behavior applied when a cookie is opened.

    Attributes:
        flags: Names of :class:`~magic_cookie.flags.CookieFlags` members.
    """

    flags: List[str] = Field(default_factory=list)

    @field_validator("flags")
    @classmethod
    def known_flags(cls, value: List[str]) -> List[str]:
        parse_flags(value)
        return value

    def to_flags(self) -> CookieFlags:
        """Return the configured flag names as a single flag value."""
        return parse_flags(self.flags)


class LoggingSettings(MagicBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level for the ``magic_cookie`` logger.
    """

    level: str = "WARNING"


class MagicConfig(MagicBaseModel):
    """Top-level configuration for magic-cookie.

    Attributes:
        library: Shared library settings.
        database: Magic database settings.
        detection: Flag settings.
        logging: Logging configuration.
    """

    library: LibrarySettings = Field(default_factory=LibrarySettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


__all__ = [
    "MagicBaseModel",
    "LibrarySettings",
    "DatabaseSettings",
    "DetectionSettings",
    "LoggingSettings",
    "MagicConfig",
]
