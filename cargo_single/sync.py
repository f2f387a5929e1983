"""Create or update the Cargo project generated for a source file."""

from __future__ import annotations

import os
from pathlib import Path

from .config import SingleConfig
from .errors import SyncError
from .logging import get_logger
from .manifest import ManifestDocument, TOMLKitError
from .models import (
    DependencyFragment,
    GeneratedProject,
    ProjectIdentity,
    Staleness,
    SyncOutcome,
)

GITIGNORE = "/target\n"


class ProjectSynchronizer:
    """Writes the manifest and source copy of a generated project."""

    def __init__(self, config: SingleConfig) -> None:
        self.config = config
        self.logger = get_logger("sync")

    def synchronize(
        self,
        project: GeneratedProject,
        identity: ProjectIdentity,
        fragment: DependencyFragment,
        source_bytes: bytes,
        staleness: Staleness,
        *,
        origin: Path | None = None,
    ) -> SyncOutcome:
        """Bring ``project`` up to date; a current project is left untouched.

        ``origin`` is the source file path recorded in the project so the
        project directory can be used as a target later on.
        """
        outcome = SyncOutcome(project=project)
        if not staleness.stale:
            self.logger.debug("%s is up to date", project.root)
            return outcome

        if project.root.exists() and not project.root.is_dir():
            raise SyncError(project.root, "exists and is not a directory")

        if not project.root.exists():
            self.logger.info("Creating project %s", project.root)
            outcome.created = True
        self._make_dirs(project.source_path.parent)

        manifest_text = self._render_manifest(project, identity, fragment)
        self._write_if_changed(
            project.manifest_path, manifest_text.encode("utf-8"), outcome
        )
        self._write_if_changed(project.source_path, source_bytes, outcome)
        if origin is not None:
            self._write_if_changed(
                project.origin_path, f"{origin}\n".encode("utf-8"), outcome
            )
        if outcome.created:
            self._write_if_changed(
                project.gitignore_path, GITIGNORE.encode("utf-8"), outcome
            )

        self.logger.debug(
            "Synchronized %s (%d file(s) written)", project.root, len(outcome.written)
        )
        return outcome

    # ------------------------------------------------------------------
    # Internal helpers

    def _render_manifest(
        self,
        project: GeneratedProject,
        identity: ProjectIdentity,
        fragment: DependencyFragment,
    ) -> str:
        path = project.manifest_path
        try:
            existing = path.read_bytes().decode("utf-8")
        except FileNotFoundError:
            document = ManifestDocument.create(
                identity, fragment, edition=self.config.edition
            )
            return document.render()
        except (OSError, UnicodeDecodeError) as exc:
            raise SyncError(path, exc) from exc

        try:
            document = (
                ManifestDocument.parse(existing)
                .with_identity(identity)
                .with_dependencies(fragment)
            )
        except TOMLKitError as exc:
            raise SyncError(path, f"cannot update manifest: {exc}") from exc
        return document.render()

    def _make_dirs(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SyncError(path, exc) from exc

    def _write_if_changed(self, path: Path, data: bytes, outcome: SyncOutcome) -> None:
        try:
            if path.is_file() and path.read_bytes() == data:
                return
            # Readers only ever see the old or the new content.
            tmp_path = path.with_name(f".{path.name}.tmp")
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        except OSError as exc:
            raise SyncError(path, exc) from exc
        self.logger.debug("Wrote %s", path)
        outcome.written.append(path)


__all__ = ["ProjectSynchronizer"]
