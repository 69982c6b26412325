"""Custom exceptions for configuration management."""

from magic_cookie.errors import MagicError


class ConfigError(MagicError):
    """Raised when configuration data cannot be processed."""
