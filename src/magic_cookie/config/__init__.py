"""Configuration management for magic-cookie."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import (
    DatabaseSettings,
    DetectionSettings,
    LibrarySettings,
    LoggingSettings,
    MagicConfig,
)
from .resolver import ENV_PREFIX, flatten_for_env, parse_env, resolve_with_precedence

DEFAULT_CONFIG_PATH = Path("~/.magic_cookie/config.yaml")


class ConfigManager:
    """Load configuration data from YAML, applying precedence rules."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        overrides: Mapping[str, Any] | None = None,
        include_env: bool = False,
        env_overrides: Mapping[str, str] | None = None,
    ) -> MagicConfig:
        """Load configuration from disk, then environment, then ``overrides``.

        Environment variables are only consulted when ``include_env`` is set.
        A missing configuration file yields the defaults.
        """
        env_data: Mapping[str, str] | None = None
        if include_env:
            env_data = env_overrides if env_overrides is not None else self._env

        return resolve_with_precedence(
            defaults=MagicConfig(),
            file_overrides=self._read_file(),
            env_overrides=parse_env(env_data) if env_data else None,
            overrides=overrides,
        )

    def read_text(self) -> str:
        """Return the current configuration file contents."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")

    def _read_file(self) -> dict[str, Any]:
        text = self.read_text()
        if not text:
            return {}

        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")
        return raw


__all__ = [
    "ConfigManager",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "MagicConfig",
    "LibrarySettings",
    "DatabaseSettings",
    "DetectionSettings",
    "LoggingSettings",
    "resolve_with_precedence",
    "flatten_for_env",
    "parse_env",
]
