"""
Unit tests for conflicts and solutions.
"""

import pytest

from aspupdate.contradiction import Conflict, OperationType, Solution
from aspupdate.symbolic import parse_rule


class TestSolution:
    """Test chosen versions and variants."""

    @pytest.fixture
    def rule(self):
        """Rule being modified."""
        return parse_rule("a :- b")

    def test_empty_solution(self) -> None:
        """A new solution has no operations."""
        solution = Solution()
        assert solution.is_empty()
        assert str(solution) == "(no operations)"

    def test_one_chosen_version_per_identifier(self, rule) -> None:
        """Choosing twice for one identifier is rejected."""
        solution = Solution()
        solution.add_chosen_rule(rule.extended(neg_body=[parse_rule("c").head]), OperationType.MODIFY)

        with pytest.raises(ValueError):
            solution.add_chosen_rule(rule, OperationType.DELETE)
        assert solution.operation_of(rule.rule_id) is OperationType.MODIFY

    def test_variants_need_a_chosen_version(self, rule) -> None:
        """Variants can only be added for chosen identifiers."""
        with pytest.raises(ValueError):
            Solution().add_variant(rule)

    def test_choose_variant_swaps(self, rule) -> None:
        """Choosing a variant demotes the previous choice."""
        c = parse_rule("c").head
        d = parse_rule("d").head
        big = rule.extended(neg_body=[c, d])
        small = rule.extended(neg_body=[c])

        solution = Solution()
        solution.add_chosen_rule(big, OperationType.MODIFY)
        solution.add_variant(small)
        solution.choose_variant(small)

        assert solution.modifications == [small]
        assert solution.variants[rule.rule_id] == [big]

    def test_choose_unknown_variant(self, rule) -> None:
        """Only recorded variants can be chosen."""
        solution = Solution()
        solution.add_chosen_rule(rule, OperationType.DELETE)
        with pytest.raises(ValueError):
            solution.choose_variant(rule.extended(body=[parse_rule("z").head]))

    def test_to_dict(self, rule) -> None:
        """Dictionary form lists operations by kind."""
        solution = Solution(strategy="direct", root_rule=rule.rule_id)
        solution.add_chosen_rule(rule, OperationType.DELETE)
        data = solution.to_dict()

        assert data["operations"]["delete"] == ["a :- b."]
        assert data["operations"]["add"] == []
        assert data["strategy"] == "direct"


class TestConflict:
    """Test conflict accessors."""

    def test_accessors(self) -> None:
        """Older comes first, newer second."""
        older = parse_rule("a :- b")
        newer = parse_rule("-a :- c")
        conflict = Conflict(rules=(older, newer))

        assert conflict.rule_pair == (older.rule_id, newer.rule_id)
        assert conflict.other_rule(older) is newer
        assert conflict.other_rule(newer) is older
        assert str(conflict) == "a :- b.  <->  -a :- c."
