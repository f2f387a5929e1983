"""Configuration loading for cargo-single (.cargo-single.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".cargo-single.yml"
DEFAULT_VERSION = "0.1.0"
DEFAULT_EDITION = "2021"
ENV_CACHE_DIR = "CARGO_SINGLE_CACHE_DIR"
ENV_CARGO = "CARGO"


@dataclass
class SingleConfig:
    """Settings threaded through identity resolution, sync and dispatch."""

    root: Path
    cache_dir: Optional[Path] = None
    default_version: str = DEFAULT_VERSION
    edition: str = DEFAULT_EDITION
    cargo: str = "cargo"
    quiet: bool = True
    strict_self: bool = False


def load_config(
    config_path: Path, *, environ: Mapping[str, str] | None = None
) -> SingleConfig:
    """Load configuration from disk, then apply environment overrides.

    ``config_path`` may point at the file itself or at the directory that
    holds it (usually the directory of the source file being built).
    """
    env = os.environ if environ is None else environ
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    data: Dict[str, Any] = {}
    if config_file.is_file():
        data = _read_config(config_file)

    cache_dir_str = _as_str(data.get("cache_dir"))
    cache_dir = _expand_dir(root, cache_dir_str) if cache_dir_str else None

    config = SingleConfig(
        root=root,
        cache_dir=cache_dir,
        default_version=_as_str(data.get("default_version")) or DEFAULT_VERSION,
        edition=_as_str(data.get("edition")) or DEFAULT_EDITION,
        cargo=_as_str(data.get("cargo")) or "cargo",
        quiet=_as_bool(data.get("quiet"), default=True),
        strict_self=_as_bool(data.get("strict_self"), default=False),
    )

    env_cache_dir = env.get(ENV_CACHE_DIR)
    if env_cache_dir:
        config.cache_dir = _expand_dir(Path.cwd(), env_cache_dir)
    # cargo exports CARGO when it runs an external subcommand; an explicit
    # setting in the file still wins.
    env_cargo = env.get(ENV_CARGO)
    if env_cargo and "cargo" not in data:
        config.cargo = env_cargo

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _expand_dir(base: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base / path
    return path


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any, *, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return default


__all__ = ["SingleConfig", "load_config"]
