"""Resolve the command-line target to a source file and project directory."""

from __future__ import annotations

from pathlib import Path

from .config import SingleConfig
from .errors import TargetError
from .models import (
    SOURCE_EXTENSION,
    GeneratedProject,
    ProjectIdentity,
    SourceFile,
)


def resolve_source(target: Path) -> SourceFile:
    """Accept either ``prog.rs`` or the ``prog`` project directory beside it.

    A project kept in a cache directory has no sibling source file; it is
    found through the source path recorded when the project was generated.

    A target without the extension that does not exist yet is also accepted
    when ``<target>.rs`` exists, so ``cargo single run prog`` works before
    the project has been generated.
    """
    target = target.expanduser()
    if target.is_dir():
        directory = target.resolve()
        source_path = directory.with_name(directory.name + SOURCE_EXTENSION)
        if not source_path.exists():
            source_path = _recorded_origin(GeneratedProject(directory)) or source_path
        if not source_path.exists():
            raise TargetError(source_path, "source file not found")
        if not source_path.is_file():
            raise TargetError(source_path, "not a regular file")
        return SourceFile(source_path)

    if target.exists():
        if target.suffix != SOURCE_EXTENSION:
            raise TargetError(target, f"expected a {SOURCE_EXTENSION} source file")
        if not target.is_file():
            raise TargetError(target, "not a regular file")
        return SourceFile(target)

    if target.suffix != SOURCE_EXTENSION:
        source_path = target.with_name(target.name + SOURCE_EXTENSION)
        if source_path.is_file():
            return SourceFile(source_path)
    raise TargetError(target, "no such file or directory")


def _recorded_origin(project: GeneratedProject) -> Path | None:
    try:
        recorded = project.origin_path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return None
    return Path(recorded) if recorded else None


def project_for(
    source: SourceFile, identity: ProjectIdentity, config: SingleConfig
) -> GeneratedProject:
    """Return the generated project location for ``identity``.

    Projects live next to the source file unless a cache directory is
    configured, in which case they are keyed by package name under it.
    """
    if config.cache_dir is not None:
        return GeneratedProject(config.cache_dir / identity.name)
    return GeneratedProject(source.path.parent / identity.name)


__all__ = ["project_for", "resolve_source"]
