"""Tests for the wants list line parser."""

import pytest
from textwrap import dedent

from mathtrade.adapters.parsers import WantsLineParser
from mathtrade.core.domain import GroupName, LineKind, WantsStatement


class TestWantsLineParser:
    """Tests for WantsLineParser."""

    @pytest.fixture
    def parser(self):
        return WantsLineParser()

    @pytest.mark.parametrize("line,kind", [
        ("", LineKind.BLANK),
        ("   \t", LineKind.BLANK),
        ("# my list", LineKind.COMMENT),
        ("   # indented comment", LineKind.COMMENT),
        ("#! ALLOW-DUMMIES", LineKind.INSTRUCTION),
        ("(alice) 1 : 2", LineKind.STATEMENT),
        ("alice 1 : 2", LineKind.SYNTAX_ERROR),
        ("(alice) : 2", LineKind.SYNTAX_ERROR),
        ("(alice) 1 2", LineKind.SYNTAX_ERROR),
        ("(alice) x : 2", LineKind.SYNTAX_ERROR),
        ("(alice) 1 : 2 x", LineKind.SYNTAX_ERROR),
        ("(alice) 1 : 2, 3", LineKind.SYNTAX_ERROR),
        ("(alice) 1 : %", LineKind.SYNTAX_ERROR),
        ("(alice) % : 1", LineKind.SYNTAX_ERROR),
        ("() 1 : 2", LineKind.SYNTAX_ERROR),
    ])
    def test_line_kinds(self, parser, line, kind):
        assert parser.parse_line(line).kind is kind

    def test_statement(self, parser):
        parsed = parser.parse_line("(alice) 12 : 34 56 %GO", line_number=3)

        assert parsed.line_number == 3
        assert parsed.statement == WantsStatement("alice", 12, (34, 56, GroupName("%GO")))

    def test_group_subject(self, parser):
        statement = parser.parse_statement("(alice) %GO : 2 6")

        assert statement.subject == GroupName("%GO")
        assert statement.wanted == (2, 6)

    def test_empty_wanted_list(self, parser):
        statement = parser.parse_statement("(alice) 4 :")

        assert statement == WantsStatement("alice", 4, ())

    @pytest.mark.parametrize("line", [
        "(alice) 1 : 2;3; 4",
        "(alice)1:2 3 4",
        "  (alice)   1  :  ;2 ;; 3\t4;  ",
        "(alice) 1 :2;3;4;",
    ])
    def test_separator_tolerance(self, parser, line):
        assert parser.parse_statement(line) == WantsStatement("alice", 1, (2, 3, 4))

    def test_repeated_entries_are_kept(self, parser):
        statement = parser.parse_statement("(alice) 1 : 2 2 %A %A")

        assert statement.wanted == (2, 2, GroupName("%A"), GroupName("%A"))

    def test_semicolon_after_group_name_is_part_of_it(self, parser):
        assert parser.parse_statement("(alice) %a;b :").subject == GroupName("%a;b")
        assert parser.parse_statement("(alice) 1 : %A;B 3").wanted == (GroupName("%A;B"), 3)
        assert parser.parse_statement("(alice) 1 : 3;%A; 4").wanted == (3, GroupName("%A;"), 4)

    @pytest.mark.parametrize("line", [
        "(alice) 1 : 2%A",
        "(alice) 1 : %a:b",
        "(alice) 1 : 2 3%B",
    ])
    def test_entries_must_be_separated(self, parser, line):
        assert parser.parse_line(line).kind is LineKind.SYNTAX_ERROR

    def test_syntax_error_carries_reason(self, parser):
        parsed = parser.parse_line("(alice) 1 : 2 oops")

        assert parsed.statement is None
        assert "oops" in parsed.error

    def test_parse_lines_numbers_from_one(self, parser):
        text = dedent("""\
            # header
            (alice) 1 : 2

            (alice) 2 : 3
        """)

        parsed = list(parser.parse_lines(text.splitlines(keepends=True)))

        assert [p.line_number for p in parsed] == [1, 2, 3, 4]
        assert [p.kind for p in parsed] == [
            LineKind.COMMENT,
            LineKind.STATEMENT,
            LineKind.BLANK,
            LineKind.STATEMENT,
        ]

    def test_parse_lines_strips_crlf(self, parser):
        parsed = list(parser.parse_lines(["(alice) 1 : 2\r\n"]))

        assert parsed[0].text == "(alice) 1 : 2"

    @pytest.mark.parametrize("statement", [
        WantsStatement("alice", 1, ()),
        WantsStatement("alice", 1, (2, GroupName("%X"), 3)),
        WantsStatement("bob smith", GroupName("%GO"), (2, 6)),
        WantsStatement("user_1", GroupName("%A.B-C"), (GroupName("%D"),)),
    ])
    def test_canonical_line_round_trip(self, parser, statement):
        assert parser.parse_statement(statement.to_line()) == statement
