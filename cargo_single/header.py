"""Scanner for the dependency header at the top of a single-file program.

The header is the run of lines at the very start of the file that begin with
exactly ``// ``. Each such line, with the prefix removed, is copied verbatim
into the generated manifest's ``[dependencies]`` section, except for a
``// self = "<version>"`` line which sets the package version instead::

    // self = "1.2.0"
    // rand = "0.7"
    // regex = { version = "1", default-features = false }

    use rand::Rng;

The header ends at the first blank line or the first line without the
prefix. Nothing after that point is inspected.
"""

from __future__ import annotations

import enum
import re
from typing import Iterable, List, Optional

from .errors import ParseError
from .logging import get_logger
from .models import DependencyFragment, ParsedHeader, SelfDeclaration

COMMENT_PREFIX = "// "

_SELF_LINE = re.compile(r'^// self = "([^"]+)"$')
_SELF_KEY = re.compile(r"^self\s*(=|$)")

logger = get_logger("header")


class ScanState(enum.Enum):
    IN_BLOCK = "in-block"
    ENDED = "ended"


class HeaderScanner:
    """Line-driven state machine that collects the dependency header."""

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        self.state = ScanState.IN_BLOCK
        self._lines: List[str] = []
        self._self_declaration: Optional[SelfDeclaration] = None
        self._issues: List[ParseError] = []
        self._line_number = 0

    def feed(self, line: str) -> ScanState:
        """Consume one physical line (without its terminator)."""
        if self.state is ScanState.ENDED:
            return self.state
        self._line_number += 1
        if line.endswith("\r"):
            line = line[:-1]
        if not line or not line.startswith(COMMENT_PREFIX):
            self.state = ScanState.ENDED
            return self.state

        match = _SELF_LINE.match(line)
        if match:
            self._self_declaration = SelfDeclaration(version=match.group(1))
            return self.state

        body = line[len(COMMENT_PREFIX):]
        if _SELF_KEY.match(body):
            issue = ParseError(self._line_number, line)
            if self.strict:
                raise issue
            logger.warning("%s; passing it through as a dependency line", issue)
            self._issues.append(issue)
        self._lines.append(body)
        return self.state

    def result(self) -> ParsedHeader:
        return ParsedHeader(
            fragment=DependencyFragment(tuple(self._lines)),
            self_declaration=self._self_declaration,
            issues=tuple(self._issues),
        )


def scan_lines(lines: Iterable[str], *, strict: bool = False) -> ParsedHeader:
    """Scan an iterable of lines, stopping as soon as the header ends."""
    scanner = HeaderScanner(strict=strict)
    for line in lines:
        if scanner.feed(line) is ScanState.ENDED:
            break
    return scanner.result()


def parse_header(text: str, *, strict: bool = False) -> ParsedHeader:
    """Parse the dependency header out of a source file's full text."""
    return scan_lines(text.split("\n"), strict=strict)


__all__ = ["HeaderScanner", "ScanState", "parse_header", "scan_lines"]
