"""
Unit tests for answer-set and rule distances.
"""

from aspupdate.contradiction import OperationType, Solution
from aspupdate.measures import SolutionScore, answer_set_distance, rule_distance
from aspupdate.symbolic import AnswerSet, Literal, parse_answer_set, parse_program, parse_rule


class TestAnswerSetDistance:
    """Test the minimum-cost pairing of answer sets."""

    def test_identical_collections(self) -> None:
        """Equal collections have distance zero regardless of order."""
        first = [parse_answer_set("a, b"), parse_answer_set("c")]
        second = [parse_answer_set("c"), parse_answer_set("b, a")]
        assert answer_set_distance(first, second) == 0

    def test_empty_collections(self) -> None:
        """Two empty collections have distance zero."""
        assert answer_set_distance([], []) == 0

    def test_unmatched_answer_set_costs_its_size(self) -> None:
        """Padding with empty answer sets charges unmatched sets fully."""
        before = [parse_answer_set("a, b, c")]
        assert answer_set_distance(before, []) == 3
        assert answer_set_distance([], before) == 3

    def test_optimal_pairing(self) -> None:
        """The cheapest assignment is chosen, not the positional one."""
        before = [parse_answer_set("a, b"), parse_answer_set("x, y")]
        after = [parse_answer_set("x, y, z"), parse_answer_set("a")]
        assert answer_set_distance(before, after) == 2

    def test_uneven_lengths(self) -> None:
        """Extra answer sets on one side are paired with empty sets."""
        before = [parse_answer_set("a")]
        after = [parse_answer_set("a"), parse_answer_set("b, c")]
        assert answer_set_distance(before, after) == 2


class TestRuleDistance:
    """Test the rule-edit distance."""

    def test_add_and_delete_count_literals(self) -> None:
        """Added and deleted rules count all their literals."""
        program = parse_program("a :- b, not c.", "p")
        solution = Solution()
        solution.add_chosen_rule(parse_rule("x :- y"), OperationType.ADD)
        solution.add_chosen_rule(program.rules[0], OperationType.DELETE)

        assert rule_distance(solution, [program]) == 5

    def test_modify_counts_differences(self) -> None:
        """Modifications count the symmetric differences per rule part."""
        program = parse_program("a :- b.", "p")
        original = program.rules[0]
        modified = original.extended(neg_body=[Literal.of("c"), Literal.of("d")])
        solution = Solution()
        solution.add_chosen_rule(modified, OperationType.MODIFY)

        assert rule_distance(solution, [program]) == 2

    def test_unknown_modified_rule(self) -> None:
        """A modified rule missing from the sequence yields None."""
        solution = Solution()
        solution.add_chosen_rule(parse_rule("a :- b"), OperationType.MODIFY)
        assert rule_distance(solution, [parse_program("c.", "p")]) is None


class TestSolutionScore:
    """Test score serialisation."""

    def test_to_dict(self) -> None:
        """Scores serialise both distances."""
        assert SolutionScore(1, None).to_dict() == {
            "answer_set_distance": 1,
            "rule_distance": None,
        }
        assert AnswerSet() == parse_answer_set("")
