"""
Unit tests for the ELP parser.
"""

import pytest

from aspupdate.symbolic import (
    AnswerSet,
    Literal,
    ParseError,
    parse_answer_set,
    parse_answer_sets,
    parse_literal,
    parse_program,
    parse_rule,
)

BIRDS = """
% birds fly by default
bird(tweety).
flies(tweety) :- bird(tweety), not -flies(tweety).
-flies(tweety) :- penguin(tweety). penguin(tweety).
:- flies(tweety), penguin(tweety).
"""


class TestParseProgram:
    """Test parsing whole programs."""

    def test_parses_rules_in_order(self) -> None:
        """Rules, facts and constraints are parsed and labelled by position."""
        program = parse_program(BIRDS, "birds")

        assert program.name == "birds"
        assert [rule.label for rule in program] == [0, 1, 2, 3, 4]
        assert program.rules[0].is_fact
        assert program.rules[1].neg_body == (Literal.of("flies", "tweety", negated=True),)
        assert program.rules[4].is_constraint

    def test_round_trip(self) -> None:
        """Parsing the rendering reproduces the rule content."""
        program = parse_program(BIRDS, "birds")
        reparsed = parse_program(program.to_asp(), "birds")

        assert list(reparsed.rules) == list(program.rules)

    def test_duplicate_rules_are_skipped(self) -> None:
        """Structural duplicates appear once."""
        program = parse_program("a :- b, c. a :- c, b.", "dup")
        assert len(program) == 1

    def test_several_rules_per_line(self) -> None:
        """Rules sharing a line are split at dots."""
        program = parse_program("a. b. c :- a, b.")
        assert len(program) == 3

    @pytest.mark.parametrize("text", ["", "   ", "% only a comment\n", None])
    def test_empty_input(self, text) -> None:
        """Empty input is an error."""
        with pytest.raises(ParseError):
            parse_program(text)

    @pytest.mark.parametrize(
        "text",
        [
            "a :- b :- c.",
            "a, b :- c.",
            "a | b.",
            "not a :- b.",
            "p(a,.",
            "p(a)) :- q.",
            "p(X) :- q(X).",
            "a :- .",
            "a. b",
            "p().",
            "not.",
            "p :- not.",
            "p(007).",
            "p(not).",
        ],
    )
    def test_malformed_input(self, text: str) -> None:
        """Malformed rules raise ParseError."""
        with pytest.raises(ParseError):
            parse_program(text)


class TestParseRule:
    """Test parsing single rules and literals."""

    def test_negations(self) -> None:
        """Classical and default negation are distinguished."""
        rule = parse_rule("-a(x) :- b, not -c, not d")

        assert rule.head == Literal.of("a", "x", negated=True)
        assert rule.body == (Literal.of("b"),)
        assert rule.neg_body == (Literal.of("c", negated=True), Literal.of("d"))

    def test_numeric_terms(self) -> None:
        """Numbers are valid ground terms."""
        assert parse_literal("age(tom, 42)").terms == ("tom", "42")
        assert parse_literal("p(0)").terms == ("0",)

    def test_label(self) -> None:
        """Labels can be passed through."""
        assert parse_rule("a", label=5).label == 5


class TestParseAnswerSets:
    """Test parsing solver output."""

    def test_comma_separated(self) -> None:
        """Comma-joined literals form one answer set."""
        answer_set = parse_answer_set("bird(tweety), -flies(tweety), p(a,b)")

        assert len(answer_set) == 3
        assert Literal.of("flies", "tweety", negated=True) in answer_set

    def test_whitespace_separated(self) -> None:
        """Clingo's space-separated output is accepted too."""
        assert len(parse_answer_set("a b(c) -d")) == 3

    def test_blank_is_empty_answer_set(self) -> None:
        """A blank string denotes the empty answer set."""
        assert parse_answer_sets([""]) == [AnswerSet()]

    def test_unparseable_entries_are_skipped(self) -> None:
        """Entries with malformed literals are dropped."""
        answer_sets = parse_answer_sets(["a, b", "p(X)", "c"])
        assert [answer_set.to_list() for answer_set in answer_sets] == [["a", "b"], ["c"]]
