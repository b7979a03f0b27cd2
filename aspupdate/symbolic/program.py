"""
Extended logic programs.

A Program is an immutable, named, ordered sequence of rules together with
a literal-usage index. Every change produces a new Program or raises; a
failed operation never leaves a half-updated program behind.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from .errors import DuplicateRuleError, InvalidRuleError, ProgramError, UnknownRuleError
from .literal import Literal
from .rule import Rule


def build_literal_index(rules: Iterable[Rule]) -> Dict[Literal, Tuple[int, ...]]:
    """Map every literal to the identifiers of the rules mentioning it, in rule order."""
    index: Dict[Literal, List[int]] = {}
    for rule in rules:
        for literal in rule.literals():
            ids = index.setdefault(literal, [])
            if rule.rule_id not in ids:
                ids.append(rule.rule_id)
    return {literal: tuple(ids) for literal, ids in index.items()}


def next_free_label(rules: Iterable[Rule], start: int) -> int:
    """Scan upwards from ``start`` for a label no rule in ``rules`` uses."""
    taken = {rule.label for rule in rules}
    label = start
    while label in taken:
        label += 1
    return label


@dataclass(frozen=True)
class Program:
    """
    Named ordered rule sequence with a derived literal index.

    Example:
        >>> program = Program("kb").with_rule(rule)
        >>> program.get_rule(rule.rule_id) is not None
        True
    """

    name: str = "program"
    rules: Tuple[Rule, ...] = ()
    literal_index: Mapping[Literal, Tuple[int, ...]] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "literal_index", build_literal_index(self.rules))

    @classmethod
    def from_rules(cls, name: str, rules: Iterable[Rule]) -> "Program":
        """
        Build a program from rules, skipping empty and duplicate rules.

        Skipped rules are logged at debug level.
        """
        program = cls(name)
        for rule in rules:
            try:
                program = program.with_rule(rule)
            except ProgramError as e:
                logger.debug(f"Skipping rule while building '{name}': {e}")
        return program

    # Queries

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    @property
    def is_empty(self) -> bool:
        return not self.rules

    @property
    def rule_ids(self) -> Tuple[int, ...]:
        return tuple(rule.rule_id for rule in self.rules)

    def contains_rule_id(self, rule_id: int) -> bool:
        return any(rule.rule_id == rule_id for rule in self.rules)

    def get_rule(self, rule_id: int) -> Optional[Rule]:
        for rule in self.rules:
            if rule.rule_id == rule_id:
                return rule
        return None

    def get_rule_by_label(self, label: int) -> Optional[Rule]:
        for rule in self.rules:
            if rule.label == label:
                return rule
        return None

    def find_equal(self, rule: Rule) -> Optional[Rule]:
        """Return the structurally equal rule of this program, if any."""
        for existing in self.rules:
            if existing == rule:
                return existing
        return None

    def literals(self) -> Tuple[Literal, ...]:
        """Every literal used by the program, in order of first appearance."""
        return tuple(self.literal_index)

    def rules_with_head(self, literal: Literal) -> List[Rule]:
        return [rule for rule in self.rules if rule.head == literal]

    def next_free_label(self, start: int) -> int:
        return next_free_label(self.rules, start)

    # Value-returning updates

    def with_rule(self, rule: Rule) -> "Program":
        """
        Return a program with ``rule`` appended.

        A rule whose identifier is already used here is added under a fresh
        identifier.

        Raises:
            InvalidRuleError: If the rule has neither head nor body
            DuplicateRuleError: If a structurally equal rule is present
        """
        if rule.is_empty:
            raise InvalidRuleError("Cannot add a rule without head and body")
        duplicate = self.find_equal(rule)
        if duplicate is not None:
            raise DuplicateRuleError(
                f"Rule '{rule}' already exists in program '{self.name}'",
                rule_id=duplicate.rule_id,
            )
        if self.contains_rule_id(rule.rule_id):
            rule = rule.renumbered()
        return Program(self.name, self.rules + (rule,))

    def with_rules(self, rules: Iterable[Rule]) -> "Program":
        """Append several rules; all-or-nothing."""
        program = self
        for rule in rules:
            program = program.with_rule(rule)
        return program

    def with_modified_rule(self, rule: Rule) -> "Program":
        """
        Return a program where the rule with ``rule.rule_id`` is replaced in place.

        Raises:
            InvalidRuleError: If the new version is empty
            UnknownRuleError: If no rule has that identifier
            DuplicateRuleError: If another rule already equals the new version
        """
        if rule.is_empty:
            raise InvalidRuleError("Cannot modify a rule into an empty rule")
        position = self._position(rule.rule_id)
        for existing in self.rules:
            if existing.rule_id != rule.rule_id and existing == rule:
                raise DuplicateRuleError(
                    f"Modified rule '{rule}' duplicates an existing rule",
                    rule_id=existing.rule_id,
                )
        rules = list(self.rules)
        rules[position] = rule
        return Program(self.name, rules)

    def without_rule(self, rule_id: int) -> "Program":
        """
        Return a program without the rule carrying ``rule_id``.

        Raises:
            UnknownRuleError: If no rule has that identifier
        """
        position = self._position(rule_id)
        return Program(self.name, self.rules[:position] + self.rules[position + 1 :])

    def relabelled(self, start: int, reserved: Iterable[Rule] = ()) -> "Program":
        """
        Re-label every rule with the next label not used by ``reserved`` rules,
        scanning upwards from ``start``.
        """
        taken = list(reserved)
        relabelled: List[Rule] = []
        label = start
        for rule in self.rules:
            label = next_free_label(taken, label)
            new_rule = rule.with_label(label)
            taken.append(new_rule)
            relabelled.append(new_rule)
        return Program(self.name, relabelled)

    def renamed(self, name: str) -> "Program":
        return Program(name, self.rules)

    def _position(self, rule_id: int) -> int:
        for position, rule in enumerate(self.rules):
            if rule.rule_id == rule_id:
                return position
        raise UnknownRuleError(rule_id, self.name)

    # Rendering

    def to_asp(self) -> str:
        """Render the program as clingo text, one rule per line."""
        return "\n".join(rule.to_asp() for rule in self.rules)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "rules": [rule.to_dict() for rule in self.rules],
        }

    def __str__(self) -> str:
        lines = [f"% {self.name}"]
        lines.extend(f"r{rule.label}: {rule.to_asp()}" for rule in self.rules)
        return "\n".join(lines)


def merge_programs(programs: Sequence[Program], name: Optional[str] = None) -> Program:
    """
    Fold every program after the first into a copy of the first.

    Rules keep their identifiers; structural duplicates are skipped with a
    log message.

    Raises:
        ValueError: If ``programs`` is empty
    """
    if not programs:
        raise ValueError("Cannot merge an empty program sequence")
    merged = programs[0] if name is None else programs[0].renamed(name)
    for program in programs[1:]:
        for rule in program:
            try:
                merged = merged.with_rule(rule)
            except DuplicateRuleError:
                logger.info(
                    f"Rule '{rule.to_asp()}' of '{program.name}' already present, skipped"
                )
    return merged
