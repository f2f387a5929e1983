"""Cargo.toml document model with a replaceable dependency section."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .models import DependencyFragment, ProjectIdentity

DEPENDENCIES_HEADER = "[dependencies]"

# Any spelling of the bare table header TOML accepts, with an optional comment.
_HEADER_LINE = re.compile(
    r"""^\[[ \t]*(["']?)dependencies\1[ \t]*\][ \t]*(?:#[^\r\n]*)?\r?$""",
    re.MULTILINE,
)


@dataclass(frozen=True)
class ManifestDocument:
    """A Cargo manifest split into a preserved preamble and an owned tail.

    Everything before the ``[dependencies]`` header is ordinary TOML and is
    only touched through tomlkit, so user edits survive byte-for-byte. The
    header and everything after it belongs to cargo-single and is replaced
    wholesale from the dependency fragment; this lets a header open further
    tables such as ``[dev-dependencies]``.
    """

    preamble: str
    dependencies: Optional[str]

    @classmethod
    def parse(cls, text: str) -> "ManifestDocument":
        match = _HEADER_LINE.search(text)
        if match is None:
            return cls(preamble=text, dependencies=None)
        body_start = match.end()
        if text.startswith("\n", body_start):
            body_start += 1
        return cls(preamble=text[: match.start()], dependencies=text[body_start:])

    @classmethod
    def create(
        cls,
        identity: ProjectIdentity,
        fragment: DependencyFragment,
        *,
        edition: str,
    ) -> "ManifestDocument":
        document = tomlkit.document()
        package = tomlkit.table()
        package.add("name", identity.name)
        package.add("version", identity.version)
        package.add("edition", edition)
        document.add("package", package)
        preamble = tomlkit.dumps(document) + "\n"
        return cls(preamble=preamble, dependencies=fragment.render())

    def identity(self) -> Optional[ProjectIdentity]:
        """Return the ``[package]`` name and version, if both are plain strings.

        Raises ``TOMLKitError`` when the preamble is not valid TOML.
        """
        package = tomlkit.parse(self.preamble).get("package")
        if not isinstance(package, Mapping):
            return None
        name = package.get("name")
        version = package.get("version")
        if not isinstance(name, str) or not isinstance(version, str):
            return None
        return ProjectIdentity(name=str(name), version=str(version))

    def with_identity(self, identity: ProjectIdentity) -> "ManifestDocument":
        if self.identity() == identity:
            return self
        document = tomlkit.parse(self.preamble)
        package = document.get("package")
        if package is None:
            package = tomlkit.table()
            document.add("package", package)
        if package.get("name") != identity.name:
            package["name"] = identity.name
        if package.get("version") != identity.version:
            package["version"] = identity.version
        return ManifestDocument(
            preamble=tomlkit.dumps(document), dependencies=self.dependencies
        )

    def with_dependencies(self, fragment: DependencyFragment) -> "ManifestDocument":
        return ManifestDocument(preamble=self.preamble, dependencies=fragment.render())

    def matches(self, fragment: DependencyFragment) -> bool:
        """Exact textual comparison of the owned section with ``fragment``."""
        return self.dependencies == fragment.render()

    def render(self) -> str:
        if self.dependencies is None:
            return self.preamble
        preamble = self.preamble
        if preamble and not preamble.endswith("\n"):
            preamble += "\n"
        return f"{preamble}{DEPENDENCIES_HEADER}\n{self.dependencies}"


__all__ = ["DEPENDENCIES_HEADER", "ManifestDocument", "TOMLKitError"]
