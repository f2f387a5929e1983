"""Pipeline orchestration for the cargo-single commands."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from .config import SingleConfig, load_config
from .dispatch import CommandDispatcher
from .errors import SyncError
from .header import parse_header
from .identity import resolve_identity
from .logging import get_logger
from .models import Invocation, SourceFile, SyncOutcome
from .staleness import detect_staleness
from .sync import ProjectSynchronizer
from .targets import project_for, resolve_source


class Orchestrator:
    """Runs parse, identity, staleness, sync and dispatch for one invocation."""

    def __init__(
        self,
        config: SingleConfig | None = None,
        *,
        config_loader: Callable[[Path], SingleConfig] = load_config,
        dispatcher_factory: Callable[[SingleConfig], CommandDispatcher] = CommandDispatcher,
    ) -> None:
        self._config = config
        self._config_loader = config_loader
        self._dispatcher_factory = dispatcher_factory
        self.logger = get_logger("orchestrator")

    def run(self, invocation: Invocation) -> int:
        """Execute ``invocation`` and return the process exit code."""
        source = resolve_source(invocation.target)
        config = self._resolve_config(source)
        outcome = self.prepare(source, config)
        if invocation.command == "refresh":
            if outcome.written:
                self.logger.info("Refreshed %s", outcome.project.root)
            return 0
        dispatcher = self._dispatcher_factory(config)
        return dispatcher.dispatch(invocation, outcome.project)

    def prepare(self, source: SourceFile, config: SingleConfig) -> SyncOutcome:
        """Parse ``source`` and make sure its generated project is current."""
        self.logger.debug("Reading %s", source.path)
        try:
            source_bytes = source.path.read_bytes()
        except OSError as exc:
            raise SyncError(source.path, exc) from exc
        text = source_bytes.decode("utf-8", errors="replace")

        header = parse_header(text, strict=config.strict_self)
        identity = resolve_identity(source, header.self_declaration, config)
        project = project_for(source, identity, config)
        self.logger.debug(
            "Resolved %s %s with %d dependency line(s) at %s",
            identity.name,
            identity.version,
            len(header.fragment),
            project.root,
        )

        staleness = detect_staleness(project, identity, header.fragment, source_bytes)
        synchronizer = ProjectSynchronizer(config)
        return synchronizer.synchronize(
            project,
            identity,
            header.fragment,
            source_bytes,
            staleness,
            origin=source.path.resolve(),
        )

    def _resolve_config(self, source: SourceFile) -> SingleConfig:
        if self._config is not None:
            return self._config
        return self._config_loader(source.path.parent)


__all__ = ["Orchestrator"]
