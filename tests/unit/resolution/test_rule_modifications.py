"""
Unit tests for the shared rule-modification primitive.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from aspupdate.resolution import bodies_exclusive, rule_modifications
from aspupdate.symbolic import Literal, Rule, parse_rule


class TestRuleModifications:
    """Test power-set based rule modifications."""

    def test_tweety(self) -> None:
        """The only candidate default-negates penguin(tweety)."""
        rejected = parse_rule("flies(tweety) :- bird(tweety)")
        reference = parse_rule("-flies(tweety) :- bird(tweety), penguin(tweety)")

        modifications = rule_modifications(rejected, reference)

        assert [rule.to_asp() for rule in modifications] == [
            "flies(tweety) :- bird(tweety), not penguin(tweety)."
        ]
        assert modifications[0].rule_id == rejected.rule_id

    def test_negative_body_literals_become_positive(self) -> None:
        """Literals from the reference's negative body are added positively."""
        rejected = parse_rule("a :- b")
        reference = parse_rule("-a :- b, not c")

        assert [rule.to_asp() for rule in rule_modifications(rejected, reference)] == [
            "a :- b, c."
        ]

    def test_no_candidates_when_body_is_covered(self) -> None:
        """Nothing can be added if the reference body is already covered."""
        rejected = parse_rule("a :- b, c")
        reference = parse_rule("-a :- b")
        assert rule_modifications(rejected, reference) == []

    def test_ordering_largest_first_then_enumeration_order(self) -> None:
        """Candidates are sorted by size, ties in enumeration order."""
        rejected = parse_rule("a")
        reference = parse_rule("-a :- x, y")

        rendered = [rule.to_asp() for rule in rule_modifications(rejected, reference)]

        assert rendered == ["a :- not x, not y.", "a :- not x.", "a :- not y."]

    def test_literals_already_mentioned_are_excluded(self) -> None:
        """Literals the rejected rule already mentions are not candidates."""
        rejected = parse_rule("a :- not x")
        reference = parse_rule("-a :- x, y")

        rendered = [rule.to_asp() for rule in rule_modifications(rejected, reference)]

        assert rendered == ["a :- not x, not y."]

    @settings(max_examples=30, deadline=None)
    @given(st.integers(min_value=0, max_value=7))
    def test_power_set_completeness(self, n: int) -> None:
        """A difference of size n yields 2^n - 1 distinct candidates."""
        rejected = Rule(head=Literal.of("a"))
        reference = Rule(
            head=Literal.of("a", negated=True),
            body=tuple(Literal.of(f"p{i}") for i in range(n)),
        )

        modifications = rule_modifications(rejected, reference)

        assert len(modifications) == 2**n - 1
        assert len(set(modifications)) == len(modifications)
        sizes = [rule.literal_count for rule in modifications]
        assert sizes == sorted(sizes, reverse=True)


class TestBodiesExclusive:
    """Test the exclusivity check between rule bodies."""

    def test_complementary_positive_bodies(self) -> None:
        """Complementary positive literals exclude each other."""
        assert bodies_exclusive(parse_rule("h :- p"), parse_rule("g :- -p"))

    def test_default_negation(self) -> None:
        """A default-negated positive literal excludes in both directions."""
        assert bodies_exclusive(parse_rule("h :- p"), parse_rule("g :- not p"))
        assert bodies_exclusive(parse_rule("h :- not p"), parse_rule("g :- p"))

    def test_compatible_bodies(self) -> None:
        """Bodies that can hold together are not exclusive."""
        assert not bodies_exclusive(parse_rule("h :- p, not q"), parse_rule("g :- p, r"))
