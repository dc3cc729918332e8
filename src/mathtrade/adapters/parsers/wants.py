"""
Wants Parser - Parse wants list lines into statements.

Expected format (one line per own offer or named group):

    # comment
    #! instruction for the trade solver
    (username) 12 : 34 56 %group
    (username) %group : 7; 8; 9

Parsing never raises on malformed input; every line comes back as a tagged
``ParsedLine``.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from ...core.domain.entities import WantsStatement
from ...core.domain.enums import LineKind
from ...core.domain.value_objects import GroupName, Reference


@dataclass(frozen=True)
class ParsedLine:
    """Result of parsing one line."""

    kind: LineKind
    line_number: int
    text: str
    statement: Optional[WantsStatement] = None
    error: Optional[str] = None

    @property
    def is_statement(self) -> bool:
        return self.kind is LineKind.STATEMENT


class WantsLineParser:
    """
    Parser for the wants list line grammar.

    Tolerates any whitespace around tokens and mixes of whitespace and ``;``
    as separators, including leading, trailing and repeated separators.
    Group names run up to the next whitespace, so a ``;`` right after a
    group name is part of that name.
    Anything else is a syntax error and the line is not interpreted at all.
    """

    COMMENT_PREFIX = "#"
    INSTRUCTION_PREFIX = "#!"

    STATEMENT_PATTERN = re.compile(
        r"\((?P<user>[^)]+)\)"  # (username)
        r"\s*(?P<subject>%[^\s:#]+|[0-9]+)"  # offer index or %group
        r"\s*:"
        r"(?P<wanted>.*)",  # wanted list, checked token by token
        re.DOTALL,
    )
    TOKEN_PATTERN = re.compile(r"%[^\s:#]+|[0-9]+")
    SEPARATOR_PATTERN = re.compile(r"[\s;]*")
    ENTRY_PATTERN = re.compile(r"[^\s;]*")

    def __init__(self):
        self.logger = logging.getLogger("WantsLineParser")

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def parse_line(self, line: str, line_number: int = 1) -> ParsedLine:
        """
        Parse a single line.

        Args:
            line: Raw line text (line terminator optional)
            line_number: 1-indexed position in the file

        Returns:
            ParsedLine tagged as blank, comment, instruction, statement or
            syntax error
        """
        text = line.strip()

        if not text:
            return ParsedLine(LineKind.BLANK, line_number, line)

        if text.startswith(self.INSTRUCTION_PREFIX):
            return ParsedLine(LineKind.INSTRUCTION, line_number, line)

        if text.startswith(self.COMMENT_PREFIX):
            return ParsedLine(LineKind.COMMENT, line_number, line)

        match = self.STATEMENT_PATTERN.fullmatch(text)
        if not match:
            return self._syntax_error(line, line_number, "expected '(user) offer : wanted ...'")

        wanted: list[Reference] = []
        rest = match.group("wanted")
        position = self.SEPARATOR_PATTERN.match(rest).end()
        while position < len(rest):
            token = self.TOKEN_PATTERN.match(rest, position)
            end = token.end() if token else position
            following = self.SEPARATOR_PATTERN.match(rest, end).end()
            # Entries must be followed by a separator or the end of the line
            if token is None or (following == end and end < len(rest)):
                entry = self.ENTRY_PATTERN.match(rest, position).group()
                return self._syntax_error(line, line_number, f"invalid wanted entry {entry!r}")
            wanted.append(self._to_reference(token.group()))
            position = following

        statement = WantsStatement(
            declared_user=match.group("user"),
            subject=self._to_reference(match.group("subject")),
            wanted=tuple(wanted),
        )
        return ParsedLine(LineKind.STATEMENT, line_number, line, statement=statement)

    def parse_lines(self, lines: Iterable[str]) -> Iterator[ParsedLine]:
        """Parse lines, numbering them from 1 like text editors do."""
        for line_number, line in enumerate(lines, start=1):
            yield self.parse_line(line.rstrip("\r\n"), line_number)

    def parse_statement(self, text: str) -> Optional[WantsStatement]:
        """Parse text expected to be a statement; None if it is not one."""
        return self.parse_line(text).statement

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _to_reference(self, token: str) -> Reference:
        if token.startswith(GroupName.SIGIL):
            return GroupName(token)
        return int(token)

    def _syntax_error(self, line: str, line_number: int, reason: str) -> ParsedLine:
        self.logger.debug(f"Syntax error at line {line_number}: {reason}")
        return ParsedLine(LineKind.SYNTAX_ERROR, line_number, line, error=reason)
