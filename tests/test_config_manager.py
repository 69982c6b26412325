"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from magic_cookie import CookieFlags
from magic_cookie.config import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    ConfigManager,
    MagicConfig,
    flatten_for_env,
    parse_env,
    resolve_with_precedence,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_default_path_and_missing_file_yield_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    manager = ConfigManager()

    assert manager.config_path == DEFAULT_CONFIG_PATH.expanduser()
    assert manager.read_text() == ""
    assert manager.load() == MagicConfig()


def test_load_reads_yaml_file(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "config.yaml",
        "detection:\n  flags: [mime_type, symlink]\ndatabase:\n  paths: [/opt/magic.mgc]\n",
    )

    config = ConfigManager(path).load()

    assert config.detection.to_flags() == CookieFlags.MIME_TYPE | CookieFlags.SYMLINK
    assert config.database.paths == ["/opt/magic.mgc"]


def test_precedence_overrides_beat_env_beat_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.yaml", "logging:\n  level: INFO\nlibrary:\n  path: /file/libmagic.so\n")
    env = {
        "MAGIC_COOKIE__LOGGING__LEVEL": "DEBUG",
        "MAGIC_COOKIE__DETECTION__FLAGS": "[compress]",
        "UNRELATED": "ignored",
    }
    manager = ConfigManager(path, env=env)

    config = manager.load(include_env=True, overrides={"logging.level": "ERROR"})

    assert config.logging.level == "ERROR"
    assert config.detection.flags == ["compress"]
    assert config.library.path == "/file/libmagic.so"


def test_environment_ignored_unless_requested(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path / "absent.yaml", env={"MAGIC_COOKIE__LOGGING__LEVEL": "DEBUG"})

    assert manager.load().logging.level == "WARNING"
    assert manager.load(include_env=True).logging.level == "DEBUG"


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.yaml", "- not-a-mapping")

    with pytest.raises(ConfigError):
        ConfigManager(path).load()


def test_unknown_flag_name_raises_config_error() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(
            defaults=MagicConfig(),
            overrides={"detection": {"flags": ["not-a-flag"]}},
        )


def test_unknown_section_raises_config_error() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(defaults=MagicConfig(), file_overrides={"cache": {"size": 1}})


def test_flatten_for_env_round_trips_through_parse_env() -> None:
    config = MagicConfig.model_validate({"detection": {"flags": ["mime"]}})

    flat = flatten_for_env(config)

    assert flat["MAGIC_COOKIE__LOGGING__LEVEL"] == "WARNING"
    assert flat["MAGIC_COOKIE__LIBRARY__PATH"] == "null"
    restored = resolve_with_precedence(defaults=MagicConfig(), env_overrides=parse_env(flat))
    assert restored == config
