"""CLI entrypoint for cargo-single commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .errors import CargoSingleError
from .logging import configure_logging
from .models import COMMANDS, Invocation
from .orchestrator import Orchestrator

_EPILOG = """\
"build", "check", "fmt" and "run" are regular Cargo subcommands.
"refresh" re-reads the source file and updates the generated Cargo.toml.

Options must come before the source file; everything after it is passed to
the program (for "run") or to rustfmt (for "fmt").
"""


class _FlagOnce(argparse.Action):
    """``store_true`` that rejects a repeated flag."""

    def __init__(self, option_strings, dest, default=False, required=False, help=None):
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=0,
            const=True,
            default=default,
            required=required,
            help=help,
        )

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest, self.default) != self.default:
            parser.error(f"{option_string} already seen")
        setattr(namespace, self.dest, self.const)


class _StoreOnce(argparse.Action):
    """``store`` that rejects a repeated option."""

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest, self.default) != self.default:
            parser.error(f"{option_string} already seen")
        setattr(namespace, self.dest, values)


def _add_verbose_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log what cargo-single does before handing over to cargo.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cargo-single",
        usage=(
            "cargo-single [single] <command> [-v] [+<toolchain>] [--release] "
            "[--target <target>] [--no-quiet] {<source-file>|<source-dir>} "
            "[<arguments> ...]"
        ),
        description="Build and run single-file Rust programs with Cargo.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", choices=COMMANDS, help="Command to run.")
    _add_verbose_option(parser)
    parser.add_argument(
        "--release",
        action=_FlagOnce,
        help="Build/check in release mode.",
    )
    parser.add_argument(
        "--target",
        dest="build_target",
        metavar="TARGET",
        action=_StoreOnce,
        default=None,
        help="Use the specified target for building.",
    )
    parser.add_argument(
        "--no-quiet",
        dest="quiet",
        action="store_false",
        default=None,
        help="Don't pass --quiet to Cargo.",
    )
    parser.add_argument(
        "source",
        help="The .rs source file, or the generated project directory beside it.",
    )
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Arguments forwarded to the program (run) or rustfmt (fmt).",
    )
    return parser


def _extract_toolchain(
    parser: argparse.ArgumentParser, tokens: Sequence[str]
) -> Tuple[Optional[str], List[str]]:
    """Pull ``+<toolchain>`` out of the option tokens preceding the source.

    argparse has no notion of ``+`` prefixed free-form values, so the
    toolchain is taken out before parsing. Only tokens before the source
    argument are considered; later ones belong to the program.
    """
    toolchain: Optional[str] = None
    remaining: List[str] = []
    positionals = 0
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if token.startswith("+") and len(token) > 1:
            if toolchain is not None:
                parser.error("toolchain already set")
            toolchain = token
            continue
        remaining.append(token)
        if token == "--target" and index < len(tokens):
            remaining.append(tokens[index])
            index += 1
        elif not token.startswith("-"):
            positionals += 1
            if positionals == 2:
                remaining.extend(tokens[index:])
                break
    return toolchain, remaining


def parse_invocation(
    argv: Sequence[str], parser: argparse.ArgumentParser | None = None
) -> Tuple[Invocation, bool]:
    """Parse ``argv`` into an :class:`Invocation` and the verbose flag."""
    parser = parser or _build_parser()
    tokens = list(argv)
    # `cargo single ...` runs `cargo-single single ...`.
    if tokens and tokens[0] == "single":
        tokens = tokens[1:]
    toolchain, tokens = _extract_toolchain(parser, tokens)
    args = parser.parse_args(tokens)
    trailing = list(args.args)
    if trailing and trailing[0] == "--":
        trailing = trailing[1:]
    invocation = Invocation(
        command=args.command,
        target=Path(args.source),
        toolchain=toolchain,
        release=bool(args.release),
        build_target=args.build_target,
        quiet=args.quiet,
        args=trailing,
    )
    return invocation, bool(args.verbose)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for cargo-single commands."""
    parser = _build_parser()
    invocation, verbose = parse_invocation(
        sys.argv[1:] if argv is None else argv, parser
    )

    configure_logging(verbose=verbose)

    orchestrator = Orchestrator()
    try:
        exit_code = orchestrator.run(invocation)
    except CargoSingleError as exc:
        parser.exit(1, f"cargo-single: fatal: {exc}\n")
    return exit_code


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
