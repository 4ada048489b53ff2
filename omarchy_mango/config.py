"""Configuration loading for omarchy-mango."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Optional

import yaml


class ConfigError(Exception):
    """Raised when the configuration file cannot be parsed."""


_DEFAULT_CONFIG_ENV = "OMARCHY_MANGO_CONFIG"


@dataclass(frozen=True)
class AppConfig:
    """In-memory representation of omarchy-mango configuration."""

    path: Path
    source_dir: Optional[Path] = None
    output_dir: Optional[Path] = None
    follow_symlinks: bool = True
    resolve_symlinks: bool = True
    strip_prefixes: tuple[str, ...] = ()
    strip_suffixes: tuple[str, ...] = ()

    @property
    def exists(self) -> bool:
        """Return ``True`` if the configuration file exists on disk."""

        return self.path.exists()


def default_config_path() -> Path:
    """Return the default config path, honoring ``OMARCHY_MANGO_CONFIG``."""

    env_value = os.environ.get(_DEFAULT_CONFIG_ENV)
    if env_value:
        return Path(env_value).expanduser()
    return Path.home() / ".config" / "omarchy-mango" / "config.yaml"


def default_source_dir() -> Path:
    """Return the directory Omarchy keeps its themes in."""

    return Path.home() / ".config" / "omarchy" / "themes"


def default_output_dir() -> Path:
    """Return the directory MangoWC themes are written to by default."""

    return Path.home() / ".config" / "mango" / "themes"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from ``path`` or the default location."""

    config_path = (path or default_config_path()).expanduser()

    if not config_path.exists():
        return AppConfig(path=config_path)

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw: Any = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        message = f"Failed to parse YAML config {config_path}: {exc}"
        raise ConfigError(message) from exc
    except OSError as exc:  # pragma: no cover - propagate filesystem errors
        message = f"Failed to read config {config_path}: {exc}"
        raise ConfigError(message) from exc

    if not isinstance(raw, dict):
        expected = type(raw).__name__
        message = (
            f"Expected a mapping at the top level of {config_path}, "
            f"got {expected}."
        )
        raise ConfigError(message)

    return AppConfig(
        path=config_path,
        source_dir=_coerce_path(raw.get("source_dir")),
        output_dir=_coerce_path(raw.get("output_dir")),
        follow_symlinks=_coerce_bool(raw, "follow_symlinks", config_path),
        resolve_symlinks=_coerce_bool(raw, "resolve_symlinks", config_path),
        strip_prefixes=_coerce_strings(raw, "strip_prefixes", config_path),
        strip_suffixes=_coerce_strings(raw, "strip_suffixes", config_path),
    )


def _coerce_path(value: Any) -> Optional[Path]:
    if value is None:
        return None
    if isinstance(value, str):
        return Path(value).expanduser()
    typename = type(value).__name__
    raise ConfigError(
        f"Expected a string path in configuration, got {typename}."
    )


def _coerce_bool(raw: dict[str, Any], key: str, config_path: Path) -> bool:
    value = raw.get(key, True)
    if not isinstance(value, bool):
        message = f"Config key '{key}' must be true or false"
        raise ConfigError(f"{message} (file: {config_path}).")
    return value


def _coerce_strings(
    raw: dict[str, Any],
    key: str,
    config_path: Path,
) -> tuple[str, ...]:
    value = raw.get(key)
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(value)
    message = f"Config key '{key}' must be a string or a list of strings"
    raise ConfigError(f"{message} (file: {config_path}).")
