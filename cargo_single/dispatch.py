"""Translate a cargo-single invocation into a cargo command line."""

from __future__ import annotations

import signal
import subprocess
import threading
from typing import Callable, List, Sequence

from .config import SingleConfig
from .errors import DispatchError
from .logging import get_logger
from .models import GeneratedProject, Invocation

# Commands whose trailing arguments have somewhere to go after `--`:
# the built program for `run`, rustfmt for `fmt`.
FORWARDING_COMMANDS = frozenset({"run", "fmt"})


class CommandDispatcher:
    """Runs cargo against a generated project and reports its exit code."""

    def __init__(
        self,
        config: SingleConfig,
        runner: Callable[[Sequence[str]], int] | None = None,
    ) -> None:
        self.config = config
        self._runner = runner or self._default_runner
        self.logger = get_logger("dispatch")

    def build_args(self, invocation: Invocation, project: GeneratedProject) -> List[str]:
        """Assemble the full cargo argument vector, executable first."""
        args = [self.config.cargo]
        if invocation.toolchain:
            args.append(invocation.toolchain)
        args.append(invocation.command)
        # rustfmt has no profiles or targets.
        if invocation.command != "fmt":
            if invocation.release:
                args.append("--release")
            if invocation.build_target:
                args.extend(["--target", invocation.build_target])
        quiet = self.config.quiet if invocation.quiet is None else invocation.quiet
        if quiet:
            args.append("--quiet")
        args.extend(["--manifest-path", str(project.manifest_path)])
        if invocation.args:
            if invocation.command in FORWARDING_COMMANDS:
                args.append("--")
                args.extend(invocation.args)
            else:
                self.logger.warning(
                    "Ignoring trailing arguments for `%s`: %s",
                    invocation.command,
                    " ".join(invocation.args),
                )
        return args

    def dispatch(self, invocation: Invocation, project: GeneratedProject) -> int:
        """Run cargo with inherited stdio and return its exit status."""
        args = self.build_args(invocation, project)
        self.logger.debug("Running %s", " ".join(args))
        try:
            return self._runner(args)
        except OSError as exc:
            raise DispatchError(f"{args[0]} {invocation.command}", exc) from exc

    @staticmethod
    def _default_runner(args: Sequence[str]) -> int:
        # Ctrl-C reaches cargo through the terminal's process group; the
        # wrapper waits for cargo to decide how to exit.
        process = subprocess.Popen(list(args))
        if threading.current_thread() is not threading.main_thread():
            returncode = process.wait()
        else:
            previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
            try:
                returncode = process.wait()
            finally:
                signal.signal(signal.SIGINT, previous)
        # A child killed by a signal reports a negative code.
        if returncode < 0:
            return 1
        return returncode


__all__ = ["CommandDispatcher", "FORWARDING_COMMANDS"]
