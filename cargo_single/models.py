"""Core data models shared across cargo-single components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import ParseError

SOURCE_EXTENSION = ".rs"
COMMANDS = ("build", "check", "fmt", "refresh", "run")
ORIGIN_FILENAME = ".cargo-single-source"


@dataclass(frozen=True)
class SourceFile:
    """A single Rust source file that carries its own dependency header."""

    path: Path

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def extension(self) -> str:
        return self.path.suffix


@dataclass(frozen=True)
class DependencyFragment:
    """Raw `[dependencies]` lines collected from the leading comment block."""

    lines: Tuple[str, ...] = ()

    def render(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class SelfDeclaration:
    """Version pinned by a `// self = "<version>"` line."""

    version: str


@dataclass(frozen=True)
class ParsedHeader:
    """Result of scanning a source file's leading comment block."""

    fragment: DependencyFragment
    self_declaration: Optional[SelfDeclaration] = None
    issues: Tuple[ParseError, ...] = ()


@dataclass(frozen=True)
class ProjectIdentity:
    """Package name and version written to the generated manifest."""

    name: str
    version: str


@dataclass(frozen=True)
class GeneratedProject:
    """The Cargo project directory synthesized for one source file."""

    root: Path

    @property
    def manifest_path(self) -> Path:
        return self.root / "Cargo.toml"

    @property
    def source_path(self) -> Path:
        return self.root / "src" / "main.rs"

    @property
    def gitignore_path(self) -> Path:
        return self.root / ".gitignore"

    @property
    def origin_path(self) -> Path:
        """Records the absolute path of the source file the project mirrors."""
        return self.root / ORIGIN_FILENAME


@dataclass
class Staleness:
    """Reasons an existing generated project must be regenerated."""

    reasons: List[str] = field(default_factory=list)

    @property
    def stale(self) -> bool:
        return bool(self.reasons)


@dataclass
class SyncOutcome:
    """Files written while synchronizing a generated project."""

    project: GeneratedProject
    created: bool = False
    written: List[Path] = field(default_factory=list)


@dataclass
class Invocation:
    """A parsed cargo-single command line."""

    command: str
    target: Path
    toolchain: Optional[str] = None
    release: bool = False
    build_target: Optional[str] = None
    quiet: Optional[bool] = None
    args: List[str] = field(default_factory=list)
