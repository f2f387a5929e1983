"""Tests for cargo_single.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from cargo_single.config import SingleConfig, load_config
from cargo_single.errors import ConfigError


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={})

    assert isinstance(config, SingleConfig)
    assert config.root == tmp_path.resolve()
    assert config.cache_dir is None
    assert config.default_version == "0.1.0"
    assert config.edition == "2021"
    assert config.cargo == "cargo"
    assert config.quiet is True
    assert config.strict_self is False


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".cargo-single.yml"
    config_file.write_text(
        """
cache_dir: "generated"
default_version: "0.0.1"
edition: 2018
cargo: "/usr/local/bin/cargo"
quiet: false
strict_self: yes
""",
        encoding="utf-8",
    )

    config = load_config(config_file, environ={})

    assert config.cache_dir == tmp_path.resolve() / "generated"
    assert config.default_version == "0.0.1"
    assert config.edition == "2018"
    assert config.cargo == "/usr/local/bin/cargo"
    assert config.quiet is False
    assert config.strict_self is True


def test_load_config_from_source_file_path(tmp_path: Path) -> None:
    (tmp_path / ".cargo-single.yml").write_text("edition: '2024'\n", encoding="utf-8")

    config = load_config(tmp_path / "random.rs", environ={})

    assert config.edition == "2024"


def test_environment_overrides(tmp_path: Path) -> None:
    config = load_config(
        tmp_path,
        environ={
            "CARGO_SINGLE_CACHE_DIR": str(tmp_path / "cache"),
            "CARGO": "/home/me/.cargo/bin/cargo",
        },
    )

    assert config.cache_dir == tmp_path / "cache"
    assert config.cargo == "/home/me/.cargo/bin/cargo"


def test_configured_cargo_wins_over_environment(tmp_path: Path) -> None:
    (tmp_path / ".cargo-single.yml").write_text("cargo: cross\n", encoding="utf-8")

    config = load_config(tmp_path, environ={"CARGO": "/usr/bin/cargo"})

    assert config.cargo == "cross"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".cargo-single.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path, environ={}).edition == "2021"


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    (tmp_path / ".cargo-single.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path, environ={})


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    (tmp_path / ".cargo-single.yml").write_text("edition: [2018\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path, environ={})


def test_undecodable_config_raises(tmp_path: Path) -> None:
    config_file = tmp_path / ".cargo-single.yml"
    config_file.write_bytes(b"cargo: \xff\xfe\n")

    with pytest.raises(ConfigError, match=".cargo-single.yml"):
        load_config(tmp_path, environ={})


def test_unreadable_config_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path / ".cargo-single.yml"
    config_file.write_text("quiet: false\n", encoding="utf-8")

    def deny(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "read_text", deny)

    with pytest.raises(ConfigError, match="Failed to read"):
        load_config(tmp_path, environ={})
