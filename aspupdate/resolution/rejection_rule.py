"""
Rejection rules: disable a conflict rule by deriving one of its
default-negated literals whenever the other conflict rule is active.
"""

from typing import List, Sequence

from aspupdate.contradiction import Conflict, OperationType, Solution
from aspupdate.symbolic import Literal, Program, Rule, merge_programs, next_free_label

from .base import ResolutionStrategy, bodies_exclusive, unique_literals


class RejectionRuleStrategy(ResolutionStrategy):
    """
    For every ``not L`` in the body of a conflict rule that the other rule
    does not already carry, proposes adding ``L :- <body of other rule>``.

    Literals whose new rule could clash with an existing rule deriving the
    complement of ``L`` are filtered out.
    """

    name = "rejection_rule"

    def compute_solutions(
        self, sequence: Sequence[Program], conflict: Conflict
    ) -> List[Solution]:
        merged = merge_programs(sequence)
        solutions = []
        for rejected, reference in (
            (conflict.older, conflict.newer),
            (conflict.newer, conflict.older),
        ):
            guaranteed = set(reference.neg_body)
            for literal in unique_literals(rejected.neg_body):
                if literal in guaranteed or self.has_conflict_potential(
                    merged, reference, literal
                ):
                    continue
                rejection_rule = Rule(
                    head=literal,
                    body=reference.body,
                    neg_body=reference.neg_body,
                    label=next_free_label(merged.rules, len(merged)),
                )
                solution = Solution(root_rule=rejected.rule_id, target_literal=literal)
                solution.add_chosen_rule(rejection_rule, OperationType.ADD)
                solutions.append(solution)
        return solutions

    def has_conflict_potential(
        self, merged: Program, reference: Rule, literal: Literal
    ) -> bool:
        """
        True if some rule derives the complement of ``literal`` and its body
        can hold together with the body of ``reference``.
        """
        for rule in merged:
            if rule.is_constraint or not rule.head.is_complementary(literal):
                continue
            if not bodies_exclusive(reference, rule):
                return True
        return False
