"""
Direct modification: disable one conflict rule by extending its body.
"""

from typing import List, Optional, Sequence

from aspupdate.contradiction import Conflict, OperationType, Solution
from aspupdate.symbolic import Program, Rule

from .base import ResolutionStrategy, rule_modifications


class DirectModificationStrategy(ResolutionStrategy):
    """
    Modifies each conflict rule so that it cannot fire together with the other.

    One solution is produced per direction (older rule modified, newer rule
    modified). The modification using every candidate literal is chosen;
    the smaller ones are variants.
    """

    name = "direct"

    def compute_solutions(
        self, sequence: Sequence[Program], conflict: Conflict
    ) -> List[Solution]:
        solutions = []
        for rejected, reference in (
            (conflict.older, conflict.newer),
            (conflict.newer, conflict.older),
        ):
            solution = self._solution_for(rejected, reference)
            if solution is not None:
                solutions.append(solution)
        return solutions

    def _solution_for(self, rejected: Rule, reference: Rule) -> Optional[Solution]:
        # No candidates when the reference body is already covered by the rejected rule
        modifications = rule_modifications(rejected, reference)
        if not modifications:
            return None

        solution = Solution(root_rule=rejected.rule_id)
        solution.add_chosen_rule(modifications[0], OperationType.MODIFY)
        for variant in modifications[1:]:
            solution.add_variant(variant)
        return solution
