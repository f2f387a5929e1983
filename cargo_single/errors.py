"""Exception hierarchy for cargo-single."""

from __future__ import annotations

from pathlib import Path


class CargoSingleError(RuntimeError):
    """Base class for failures reported to the user before or around cargo."""


class ConfigError(CargoSingleError):
    """Raised when the configuration file cannot be parsed."""


class ParseError(CargoSingleError):
    """A leading comment line looks like a self declaration but is malformed."""

    def __init__(self, line_number: int, line: str) -> None:
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"line {line_number}: malformed self declaration {line!r} "
            '(expected `// self = "<version>"`)'
        )


class InvalidNameError(CargoSingleError):
    """The source file stem is not a legal Cargo package name."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: invalid package name: {reason}")


class TargetError(CargoSingleError):
    """The command-line target does not resolve to a usable source file."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class SyncError(CargoSingleError):
    """Creating or updating the generated project failed."""

    def __init__(self, path: Path, cause: object) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")


class DispatchError(CargoSingleError):
    """The build tool could not be started."""

    def __init__(self, executable: str, cause: OSError) -> None:
        self.executable = executable
        self.cause = cause
        super().__init__(f'error executing "{executable}": {cause}')


__all__ = [
    "CargoSingleError",
    "ConfigError",
    "DispatchError",
    "InvalidNameError",
    "ParseError",
    "SyncError",
    "TargetError",
]
