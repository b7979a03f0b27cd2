"""
Distance between a solution's rule edits and the current sequence.
"""

from typing import Optional, Sequence

from aspupdate.contradiction import Solution
from aspupdate.symbolic import Program, Rule


def _set_distance(first, second) -> int:
    return len(set(first) ^ set(second))


def modification_distance(original: Rule, modified: Rule) -> int:
    """Symmetric differences of head, positive body and negative body."""
    original_head = [original.head] if original.head is not None else []
    modified_head = [modified.head] if modified.head is not None else []
    return (
        _set_distance(original_head, modified_head)
        + _set_distance(original.body, modified.body)
        + _set_distance(original.neg_body, modified.neg_body)
    )


def rule_distance(solution: Solution, sequence: Sequence[Program]) -> Optional[int]:
    """
    Number of literals a solution changes.

    Added and deleted rules count all their literals; a modified rule counts
    its difference to the version currently in ``sequence``. Returns None
    if a modified rule is not part of the sequence.
    """
    distance = sum(rule.literal_count for rule in solution.additions)
    distance += sum(rule.literal_count for rule in solution.deletions)

    for modified in solution.modifications:
        original = _find_rule(sequence, modified.rule_id)
        if original is None:
            return None
        distance += modification_distance(original, modified)
    return distance


def _find_rule(sequence: Sequence[Program], rule_id: int) -> Optional[Rule]:
    for program in sequence:
        rule = program.get_rule(rule_id)
        if rule is not None:
            return rule
    return None
