"""Decide whether a generated project still matches its source file."""

from __future__ import annotations

from .logging import get_logger
from .manifest import ManifestDocument, TOMLKitError
from .models import (
    DependencyFragment,
    GeneratedProject,
    ProjectIdentity,
    Staleness,
)

PROJECT_MISSING = "project-missing"
MANIFEST_MISSING = "manifest-missing"
DEPENDENCIES_CHANGED = "dependencies-changed"
IDENTITY_CHANGED = "identity-changed"
SOURCE_CHANGED = "source-changed"

logger = get_logger("staleness")


def detect_staleness(
    project: GeneratedProject,
    identity: ProjectIdentity,
    fragment: DependencyFragment,
    source_bytes: bytes,
) -> Staleness:
    """Compare the on-disk project against freshly parsed values.

    Comparisons are textual: reordering or re-spacing dependency comments
    counts as a change. Read errors count as a change too, leaving the
    synchronizer to surface the underlying failure.
    """
    if not project.root.is_dir():
        return Staleness([PROJECT_MISSING])

    reasons = []
    try:
        manifest_text = project.manifest_path.read_bytes().decode("utf-8")
    except FileNotFoundError:
        reasons.append(MANIFEST_MISSING)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Unable to read %s: %s", project.manifest_path, exc)
        reasons.append(DEPENDENCIES_CHANGED)
    else:
        manifest = ManifestDocument.parse(manifest_text)
        if not manifest.matches(fragment):
            reasons.append(DEPENDENCIES_CHANGED)
        try:
            recorded = manifest.identity()
        except TOMLKitError as exc:
            logger.debug("Unable to parse %s: %s", project.manifest_path, exc)
            recorded = None
        if recorded != identity:
            reasons.append(IDENTITY_CHANGED)

    if not _same_bytes(project, source_bytes):
        reasons.append(SOURCE_CHANGED)

    staleness = Staleness(reasons)
    if staleness.stale:
        logger.debug("%s is stale: %s", project.root, ", ".join(reasons))
    return staleness


def _same_bytes(project: GeneratedProject, source_bytes: bytes) -> bool:
    try:
        stored = project.source_path.read_bytes()
    except OSError:
        return False
    return stored == source_bytes


__all__ = [
    "DEPENDENCIES_CHANGED",
    "IDENTITY_CHANGED",
    "MANIFEST_MISSING",
    "PROJECT_MISSING",
    "SOURCE_CHANGED",
    "detect_staleness",
]
