"""
Indirect modification: disable a conflict rule by modifying the rules
deriving one of its body literals.
"""

from typing import List, Optional, Sequence

from aspupdate.contradiction import Conflict, OperationType, Solution
from aspupdate.symbolic import Literal, Program, Rule, merge_programs

from .base import (
    ResolutionStrategy,
    bodies_exclusive,
    log,
    rule_modifications,
    unique_literals,
)


class IndirectModificationStrategy(ResolutionStrategy):
    """
    For every positive body literal of a conflict rule that the other
    conflict rule does not share, modifies all rules deriving that literal
    so they are disabled whenever the other conflict rule is active.

    Rules whose bodies already exclude one of the conflict rules are left
    alone. If any remaining dependency rule cannot be modified, no solution
    is produced for that literal.
    """

    name = "indirect"

    def compute_solutions(
        self, sequence: Sequence[Program], conflict: Conflict
    ) -> List[Solution]:
        merged = merge_programs(sequence)
        solutions = []
        for rejected, reference in (
            (conflict.older, conflict.newer),
            (conflict.newer, conflict.older),
        ):
            shared = set(reference.body)
            for literal in unique_literals(rejected.body):
                if literal in shared:
                    continue
                solution = self._solution_for_literal(merged, conflict, reference, literal)
                if solution is not None:
                    solution.root_rule = rejected.rule_id
                    solution.target_literal = literal
                    solutions.append(solution)
        return solutions

    def dependency_rules(
        self, merged: Program, conflict: Conflict, literal: Literal
    ) -> List[Rule]:
        """Rules deriving ``literal`` that are not exclusive with either conflict rule."""
        return [
            rule
            for rule in merged
            if not rule.is_constraint
            and rule.head == literal
            and not any(bodies_exclusive(c, rule) for c in conflict.rules)
        ]

    def _solution_for_literal(
        self, merged: Program, conflict: Conflict, reference: Rule, literal: Literal
    ) -> Optional[Solution]:
        dependencies = self.dependency_rules(merged, conflict, literal)
        if not dependencies:
            return None

        solution = Solution()
        for dependency in dependencies:
            modifications = rule_modifications(dependency, reference)
            if not modifications:
                log.debug(f"Rule {dependency.rule_id} cannot be disabled, dropping {literal}")
                return None
            solution.add_chosen_rule(modifications[0], OperationType.MODIFY)
            for variant in modifications[1:]:
                solution.add_variant(variant)
        return solution
