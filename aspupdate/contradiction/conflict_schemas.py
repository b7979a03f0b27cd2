"""
Conflicts between rules and candidate solutions resolving them.

A Conflict pairs an older and a newer rule whose heads are complementary
and whose bodies can hold together. A Solution lists add/modify/delete
rule operations; for every touched rule identifier exactly one version is
chosen and any alternatives are kept as variants.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from aspupdate.symbolic import AnswerSet, Literal, Rule


class OperationType(str, Enum):
    """Kind of edit a solution applies to a rule."""

    ADD = "add"
    MODIFY = "modify"
    DELETE = "delete"


@dataclass
class Solution:
    """
    Candidate edit resolving a conflict.

    Attributes:
        operations: Chosen rule version per operation kind
        variants: Alternative versions keyed by rule identifier
        strategy: Name of the strategy that produced the solution
        root_rule: Identifier of the conflict rule the solution disables
        target_literal: Literal the solution focuses on, if any
        measures: Scores attached after ranking
    """

    operations: Dict[OperationType, List[Rule]] = field(
        default_factory=lambda: {kind: [] for kind in OperationType}
    )
    variants: Dict[int, List[Rule]] = field(default_factory=dict)
    strategy: str = ""
    root_rule: Optional[int] = None
    target_literal: Optional[Literal] = None
    measures: Dict[str, Optional[int]] = field(default_factory=dict)

    @property
    def additions(self) -> List[Rule]:
        return self.operations[OperationType.ADD]

    @property
    def modifications(self) -> List[Rule]:
        return self.operations[OperationType.MODIFY]

    @property
    def deletions(self) -> List[Rule]:
        return self.operations[OperationType.DELETE]

    def is_empty(self) -> bool:
        return not any(self.operations.values())

    def touched_ids(self) -> List[int]:
        return [rule.rule_id for rules in self.operations.values() for rule in rules]

    def operation_of(self, rule_id: int) -> Optional[OperationType]:
        for kind, rules in self.operations.items():
            if any(rule.rule_id == rule_id for rule in rules):
                return kind
        return None

    def add_chosen_rule(self, rule: Rule, operation: OperationType) -> None:
        """
        Record ``rule`` as the chosen version for its identifier.

        Raises:
            ValueError: If the identifier already has a chosen version
        """
        if self.operation_of(rule.rule_id) is not None:
            raise ValueError(f"Rule {rule.rule_id} already has a chosen version")
        self.operations[operation].append(rule)

    def add_variant(self, rule: Rule) -> None:
        """
        Record an alternative version for an already chosen identifier.

        Raises:
            ValueError: If no version was chosen for the identifier
        """
        if self.operation_of(rule.rule_id) is None:
            raise ValueError(f"Rule {rule.rule_id} has no chosen version")
        self.variants.setdefault(rule.rule_id, []).append(rule)

    def get_chosen(self, rule_id: int) -> Optional[Rule]:
        for rules in self.operations.values():
            for rule in rules:
                if rule.rule_id == rule_id:
                    return rule
        return None

    def choose_variant(self, variant: Rule) -> None:
        """
        Swap ``variant`` in as the chosen version; the previous choice
        becomes a variant in its place.

        Raises:
            ValueError: If ``variant`` is not a recorded variant
        """
        alternatives = self.variants.get(variant.rule_id, [])
        if variant not in alternatives:
            raise ValueError(f"'{variant}' is not a variant of rule {variant.rule_id}")
        for chosen_rules in self.operations.values():
            for position, rule in enumerate(chosen_rules):
                if rule.rule_id == variant.rule_id:
                    alternatives[alternatives.index(variant)] = rule
                    chosen_rules[position] = variant
                    return

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "strategy": self.strategy,
            "root_rule": self.root_rule,
            "target_literal": str(self.target_literal) if self.target_literal else None,
            "operations": {
                kind.value: [rule.to_asp() for rule in rules]
                for kind, rules in self.operations.items()
            },
            "variants": {
                str(rule_id): [rule.to_asp() for rule in rules]
                for rule_id, rules in self.variants.items()
            },
            "measures": dict(self.measures),
        }

    def __str__(self) -> str:
        parts = []
        for kind, rules in self.operations.items():
            for rule in rules:
                parts.append(f"{kind.value} {rule.to_asp()}")
        return "; ".join(parts) if parts else "(no operations)"


@dataclass
class Conflict:
    """
    Two rules with complementary heads that can be active together.

    ``rules`` holds the older rule first and the newer rule second.
    """

    rules: Tuple[Rule, Rule]
    answer_sets: List[AnswerSet] = field(default_factory=list)
    solutions: List[Solution] = field(default_factory=list)

    @property
    def older(self) -> Rule:
        return self.rules[0]

    @property
    def newer(self) -> Rule:
        return self.rules[1]

    @property
    def rule_pair(self) -> Tuple[int, int]:
        return (self.older.rule_id, self.newer.rule_id)

    def other_rule(self, rule: Rule) -> Rule:
        return self.newer if rule.rule_id == self.older.rule_id else self.older

    def add_solution(self, solution: Solution) -> None:
        self.solutions.append(solution)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "rules": [rule.to_dict() for rule in self.rules],
            "answer_sets": [answer_set.to_list() for answer_set in self.answer_sets],
            "solutions": [solution.to_dict() for solution in self.solutions],
        }

    def __str__(self) -> str:
        return f"{self.older.to_asp()}  <->  {self.newer.to_asp()}"
