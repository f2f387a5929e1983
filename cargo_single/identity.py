"""Derive the generated package's name and version."""

from __future__ import annotations

import re
from typing import Optional

from .config import SingleConfig
from .errors import InvalidNameError
from .models import ProjectIdentity, SelfDeclaration, SourceFile

_PACKAGE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")

# Names `cargo new` refuses for a binary package.
RESERVED_NAMES = frozenset(
    {
        # Rust keywords
        "abstract", "as", "async", "await", "become", "box", "break", "const",
        "continue", "crate", "do", "dyn", "else", "enum", "extern", "false",
        "final", "fn", "for", "if", "impl", "in", "let", "loop", "macro",
        "match", "mod", "move", "mut", "override", "priv", "pub", "ref",
        "return", "self", "static", "struct", "super", "trait", "true", "try",
        "type", "typeof", "unsafe", "unsized", "use", "virtual", "where",
        "while", "yield",
        # artifact names cargo uses itself
        "deps", "examples", "build", "incremental",
        # crates shipped with the toolchain
        "alloc", "core", "proc_macro", "std", "test",
    }
)


def validate_package_name(source: SourceFile) -> str:
    """Return the source stem if it is usable as a Cargo package name."""
    name = source.stem
    if not name:
        raise InvalidNameError(source.path, "empty file stem")
    if name[0].isdigit():
        raise InvalidNameError(source.path, f"{name!r} starts with a digit")
    if not _PACKAGE_NAME.match(name):
        raise InvalidNameError(
            source.path,
            f"{name!r} may only contain ASCII letters, digits, '-' and '_'",
        )
    if name.lower() in RESERVED_NAMES:
        raise InvalidNameError(source.path, f"{name!r} is a reserved name")
    return name


def resolve_identity(
    source: SourceFile,
    self_declaration: Optional[SelfDeclaration],
    config: SingleConfig,
) -> ProjectIdentity:
    """Build the package identity from the file stem and optional self line."""
    name = validate_package_name(source)
    if self_declaration is not None:
        version = self_declaration.version
    else:
        version = config.default_version
    return ProjectIdentity(name=name, version=version)


__all__ = ["RESERVED_NAMES", "resolve_identity", "validate_package_name"]
