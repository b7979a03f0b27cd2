"""
Shared machinery of the resolution strategies.

Every strategy maps an update sequence and a conflict to candidate
solutions, which it appends to the conflict. Strategies never modify the
sequence itself.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from aspupdate.contradiction import Conflict, Solution
from aspupdate.logging import get_component_logger
from aspupdate.symbolic import Literal, Program, Rule, has_complementary_pair

log = get_component_logger("resolution")


def unique_literals(literals: Sequence[Literal]) -> List[Literal]:
    """Drop repeated literals, keeping the first occurrence."""
    seen = set()
    result = []
    for literal in literals:
        if literal not in seen:
            seen.add(literal)
            result.append(literal)
    return result


def rule_modifications(rejected: Rule, reference: Rule) -> List[Rule]:
    """
    Compute every modification of ``rejected`` that disables it whenever
    ``reference`` is active.

    C holds the body literals of ``reference`` (positive and negative) that
    ``rejected`` does not mention yet. For every non-empty subset of C a copy
    of ``rejected`` is built in which literals from the positive body of
    ``reference`` are default-negated and literals from its negative body
    are added positively. Subsets are enumerated as bitmasks over C, so a
    difference of size n yields 2^n - 1 candidates. The result is sorted by
    descending literal count; ties keep enumeration order.

    Example:
        >>> rejected = parse_rule("flies(tweety) :- bird(tweety)")
        >>> reference = parse_rule("-flies(tweety) :- bird(tweety), penguin(tweety)")
        >>> [str(r) for r in rule_modifications(rejected, reference)]
        ['flies(tweety) :- bird(tweety), not penguin(tweety).']
    """
    mentioned = set(rejected.complete_body())
    candidates = [
        literal
        for literal in unique_literals(reference.complete_body())
        if literal not in mentioned
    ]
    positive = set(reference.body)

    modifications: List[Rule] = []
    for mask in range(1, 1 << len(candidates)):
        chosen = [literal for i, literal in enumerate(candidates) if mask & (1 << i)]
        modifications.append(
            rejected.extended(
                body=[literal for literal in chosen if literal not in positive],
                neg_body=[literal for literal in chosen if literal in positive],
            )
        )

    modifications.sort(key=lambda rule: rule.literal_count, reverse=True)
    log.debug(
        f"Rule {rejected.rule_id}: {len(modifications)} modification(s) "
        f"from {len(candidates)} candidate literal(s)"
    )
    return modifications


def bodies_exclusive(first: Rule, second: Rule) -> bool:
    """
    True if the bodies of both rules can never hold at the same time.

    This is the case when the positive bodies contain complementary
    literals, or one rule default-negates a positive body literal of the
    other.
    """
    if has_complementary_pair(first.body, second.body):
        return True
    if set(first.body) & set(second.neg_body):
        return True
    return bool(set(first.neg_body) & set(second.body))


class ResolutionStrategy(ABC):
    """
    Base class of conflict resolution strategies.

    Non-interactive strategies are run automatically for every detected
    conflict; interactive ones need user input and are only offered.
    """

    name: str = "strategy"
    interactive: bool = False

    def apply(self, sequence: Sequence[Program], conflict: Conflict) -> List[Solution]:
        """Compute solutions for ``conflict`` and append them to it."""
        solutions = self.compute_solutions(sequence, conflict)
        for solution in solutions:
            solution.strategy = self.name
            conflict.add_solution(solution)
        log.info(f"{self.name}: {len(solutions)} solution(s) for conflict {conflict.rule_pair}")
        return solutions

    @abstractmethod
    def compute_solutions(
        self, sequence: Sequence[Program], conflict: Conflict
    ) -> List[Solution]:
        """Return candidate solutions for ``conflict``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
